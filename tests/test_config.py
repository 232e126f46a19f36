from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from rover_nav.config import NavConfig, load_nav_config, load_scenarios, load_yaml
from rover_nav.errors import ConfigError, InvalidGridSize
from rover_nav.types import Heading


CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


def test_defaults_when_sections_missing() -> None:
    cfg = NavConfig.from_dict({})
    assert cfg.grid_size == 5
    assert cfg.obstacles == []
    assert cfg.start == (0, 0)
    assert cfg.heading is Heading.NORTH
    assert cfg.commands == ""
    assert not cfg.telemetry.enabled


def test_load_nav_config(tmp_path) -> None:
    path = tmp_path / "nav.yaml"
    path.write_text(
        "grid:\n"
        "  size: 7\n"
        "  obstacles: [[1, 2], [3, 3]]\n"
        "rover:\n"
        "  start: [2, 2]\n"
        "  heading: east\n"
        "commands: MMRL\n"
        "logging:\n"
        "  telemetry_enabled: true\n"
        "  telemetry_path: out/t.jsonl\n",
        encoding="utf-8",
    )
    cfg = load_nav_config(str(path))
    assert cfg.grid_size == 7
    assert cfg.obstacles == [(1, 2), (3, 3)]
    assert cfg.start == (2, 2)
    assert cfg.heading is Heading.EAST
    assert cfg.commands == "MMRL"
    assert cfg.telemetry.enabled
    assert cfg.telemetry.path == "out/t.jsonl"


def test_build_creates_grid_and_rover() -> None:
    cfg = NavConfig.from_dict({"grid": {"size": 4, "obstacles": [[1, 1]]}, "rover": {"start": [3, 0], "heading": "W"}})
    grid, rover = cfg.build()
    assert grid.size == 4
    assert grid.has_obstacle((1, 1))
    assert rover.position == (3, 0)
    assert rover.heading is Heading.WEST
    assert rover.grid is grid


def test_build_rejects_bad_grid_size() -> None:
    cfg = NavConfig.from_dict({"grid": {"size": 0}})
    with pytest.raises(InvalidGridSize):
        cfg.build()


def test_map_file_supplies_grid(tmp_path) -> None:
    map_path = tmp_path / "map.json"
    map_path.write_text(json.dumps({"size": 6, "obstacles": [[2, 2]]}), encoding="utf-8")
    cfg = NavConfig.from_dict({"grid": {"map_file": str(map_path)}})
    assert cfg.grid_size == 6
    assert cfg.obstacles == [(2, 2)]

    cfg = NavConfig.from_dict({"grid": {"map_file": str(map_path), "size": 9}})
    assert cfg.grid_size == 9
    assert cfg.obstacles == [(2, 2)]


@pytest.mark.parametrize(
    "data",
    [
        {"grid": {"size": "five"}},
        {"grid": {"size": True}},
        {"grid": {"obstacles": [[1, 2, 3]]}},
        {"rover": {"start": 4}},
        {"rover": {"heading": "up"}},
        {"commands": 42},
        {"grid": [1, 2]},
        {"rover": "x"},
        {"logging": [1, 2]},
        {"grid": {"obstacles": 5}},
        {"grid": {"obstacles": [[1.7, 2]]}},
        {"rover": {"start": "12"}},
        {"rover": {"start": [0.5, 1]}},
    ],
)
def test_malformed_config(data) -> None:
    with pytest.raises(ConfigError):
        NavConfig.from_dict(data)


def test_load_yaml_empty_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml(str(path)) == {}


def test_load_yaml_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml(str(path))


def test_load_scenarios(tmp_path) -> None:
    path = tmp_path / "scenarios.yaml"
    path.write_text(
        "scenarios:\n"
        "  - name: first\n"
        "    grid: {size: 5}\n"
        "    commands: MM\n"
        "    expected: {status: Success}\n"
        "  - grid: {size: 1}\n"
        "    commands: M\n",
        encoding="utf-8",
    )
    scenarios = load_scenarios(str(path))
    assert [s.name for s in scenarios] == ["first", "scenario_1"]
    assert scenarios[0].nav.commands == "MM"
    assert scenarios[0].expected == {"status": "Success"}
    assert scenarios[1].expected is None
    assert scenarios[1].nav.grid_size == 1


def test_load_scenarios_requires_list(tmp_path) -> None:
    path = tmp_path / "scenarios.yaml"
    path.write_text("scenarios: nope\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_scenarios(str(path))


def test_bundled_configs_load() -> None:
    cfg = load_nav_config(str(CONFIG_DIR / "nav.yaml"))
    assert cfg.grid_size == 5
    assert cfg.commands == "MMMRML"
    assert len(load_scenarios(str(CONFIG_DIR / "scenarios.yaml"))) >= 3


def test_numpy_grid_size_is_accepted() -> None:
    cfg = NavConfig.from_dict({"grid": {"size": np.int64(4)}})
    grid, _ = cfg.build()
    assert grid.size == 4


def test_load_yaml_rejects_invalid_yaml(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("grid: {size: 5\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_nav_config(str(path))


def test_load_yaml_missing_file(tmp_path) -> None:
    with pytest.raises(ConfigError, match="Cannot read config"):
        load_nav_config(str(tmp_path / "missing.yaml"))


def test_missing_map_file(tmp_path) -> None:
    with pytest.raises(ConfigError, match="Cannot read map file"):
        NavConfig.from_dict({"grid": {"map_file": str(tmp_path / "nope.json")}})


def test_scenario_expected_must_be_mapping(tmp_path) -> None:
    path = tmp_path / "scenarios.yaml"
    path.write_text("scenarios:\n  - commands: M\n    expected: Success\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_scenarios(str(path))
