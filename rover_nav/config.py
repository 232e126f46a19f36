from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigError
from .grid import Grid
from .rover import Rover
from .types import Coordinate, Heading, as_coordinate, is_integer


DEFAULT_GRID_SIZE = 5
DEFAULT_TELEMETRY_PATH = "runs/telemetry.jsonl"


def load_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping, got {section!r}")
    return section


@dataclass
class TelemetryConfig:
    """Where (and whether) to write JSONL telemetry."""

    enabled: bool = False
    path: str = DEFAULT_TELEMETRY_PATH

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TelemetryConfig":
        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"'logging' section must be a mapping, got {data!r}")
        data = data or {}
        return cls(
            enabled=bool(data.get("telemetry_enabled", False)),
            path=str(data.get("telemetry_path", DEFAULT_TELEMETRY_PATH)),
        )


@dataclass
class NavConfig:
    """One navigation run: grid, start pose and command string.

    Loaded from a mapping with ``grid``, ``rover``, ``commands`` and
    ``logging`` sections; every section is optional. ``grid.map_file``
    points at a JSON map whose size and obstacles are used unless the
    ``grid`` section overrides them.
    """

    grid_size: int = DEFAULT_GRID_SIZE
    obstacles: List[Coordinate] = field(default_factory=list)
    start: Coordinate = (0, 0)
    heading: Heading = Heading.NORTH
    commands: str = ""
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NavConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Navigation config must be a mapping, got {data!r}")
        grid_cfg = _section(data, "grid")
        rover_cfg = _section(data, "rover")

        if "map_file" in grid_cfg:
            loaded = Grid.from_map_file(grid_cfg["map_file"]).to_dict()
            grid_cfg = {**loaded, **{k: v for k, v in grid_cfg.items() if k != "map_file"}}

        size = grid_cfg.get("size", DEFAULT_GRID_SIZE)
        if not is_integer(size):
            raise ConfigError(f"grid.size must be an integer, got {size!r}")
        raw_obstacles = grid_cfg.get("obstacles") or []
        if not isinstance(raw_obstacles, (list, tuple)):
            raise ConfigError(f"grid.obstacles must be a list, got {raw_obstacles!r}")
        obstacles = [as_coordinate(o, "grid.obstacles entry") for o in raw_obstacles]
        start = as_coordinate(rover_cfg.get("start", (0, 0)), "rover.start")
        heading = Heading.parse(rover_cfg.get("heading", Heading.NORTH))
        commands = data.get("commands") or ""
        if not isinstance(commands, str):
            raise ConfigError(f"commands must be a string, got {commands!r}")

        return cls(
            grid_size=size,
            obstacles=obstacles,
            start=start,
            heading=heading,
            commands=commands,
            telemetry=TelemetryConfig.from_dict(_section(data, "logging")),
        )

    def build(self) -> Tuple[Grid, Rover]:
        """Construct the grid and a rover at the configured start pose."""
        grid = Grid(self.grid_size, self.obstacles)
        return grid, Rover(grid, position=self.start, heading=self.heading)


@dataclass
class ScenarioConfig:
    """Named navigation run with an optional expected result."""

    name: str
    nav: NavConfig
    expected: Optional[Dict[str, Any]] = None


def load_nav_config(path: str) -> NavConfig:
    return NavConfig.from_dict(load_yaml(path))


def load_scenarios(path: str) -> List[ScenarioConfig]:
    """Load the ``scenarios`` list from a YAML file."""
    data = load_yaml(path)
    entries = data.get("scenarios")
    if not isinstance(entries, list):
        raise ConfigError(f"{path} must contain a 'scenarios' list")
    scenarios: List[ScenarioConfig] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"Scenario #{i} must be a mapping")
        expected = entry.get("expected")
        if expected is not None and not isinstance(expected, dict):
            raise ConfigError(f"Scenario #{i} 'expected' must be a mapping")
        scenarios.append(
            ScenarioConfig(
                name=str(entry.get("name", f"scenario_{i}")),
                nav=NavConfig.from_dict(entry),
                expected=expected,
            )
        )
    return scenarios
