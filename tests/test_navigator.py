from __future__ import annotations

from typing import Any, Dict, List

import pytest

from rover_nav.errors import UnknownCommandError
from rover_nav.grid import Grid
from rover_nav.navigator import Navigator
from rover_nav.parser import parse_commands
from rover_nav.rover import Rover
from rover_nav.telemetry import TelemetryLogger, read_records
from rover_nav.types import Command, Heading, Status


L, R, M = Command.TURN_LEFT, Command.TURN_RIGHT, Command.MOVE


def _run(size: int, obstacles, commands: str, **rover_kwargs):
    rover = Rover(Grid(size, obstacles), **rover_kwargs)
    return Navigator().execute(rover, parse_commands(commands))


def test_full_successful_run() -> None:
    outcome = _run(5, [(1, 2), (3, 3)], "MMMRML")
    assert outcome.position == (1, 3)
    assert outcome.heading is Heading.NORTH
    assert outcome.status is Status.SUCCESS


def test_halts_at_first_obstacle() -> None:
    outcome = _run(5, [(1, 2), (3, 3)], "MMRM")
    assert outcome.position == (0, 2)
    assert outcome.heading is Heading.EAST
    assert outcome.status is Status.OBSTACLE_ENCOUNTERED


def test_halts_at_boundary() -> None:
    outcome = _run(5, [], "MMMMMMMM")
    assert outcome.position == (0, 4)
    assert outcome.heading is Heading.NORTH
    assert outcome.status is Status.OUT_OF_BOUNDS


def test_empty_sequence_keeps_start_pose() -> None:
    rover = Rover(Grid(5, [(1, 2)]), position=(3, 1), heading=Heading.WEST)
    outcome = Navigator().execute(rover, [])
    assert outcome.position == (3, 1)
    assert outcome.heading is Heading.WEST
    assert outcome.status is Status.SUCCESS


def test_commands_after_failure_are_ignored() -> None:
    rover = Rover(Grid(5, [(0, 1)]))
    outcome = Navigator().execute(rover, [M, R, M, M])
    assert outcome.status is Status.OBSTACLE_ENCOUNTERED
    # The turn after the failed move never ran.
    assert outcome.heading is Heading.NORTH
    assert rover.heading is Heading.NORTH


def test_turns_only_on_single_cell_grid() -> None:
    rover = Rover(Grid(1))
    outcome = Navigator().execute(rover, [L, L, R, L, R, R, R, L])
    assert outcome.position == (0, 0)
    assert outcome.status is Status.SUCCESS


@pytest.mark.parametrize("turns", [[], [R], [R, R], [L]])
def test_single_cell_grid_move_is_out_of_bounds(turns: List[Command]) -> None:
    outcome = Navigator().execute(Rover(Grid(1)), turns + [M])
    assert outcome.position == (0, 0)
    assert outcome.status is Status.OUT_OF_BOUNDS


def test_accepts_generator_of_commands() -> None:
    rover = Rover(Grid(5))
    outcome = Navigator().execute(rover, (c for c in [M, R, M]))
    assert outcome.position == (1, 1)
    assert outcome.heading is Heading.EAST


def test_unknown_command_is_fatal() -> None:
    rover = Rover(Grid(5))
    with pytest.raises(UnknownCommandError):
        Navigator().execute(rover, [M, "M"])  # type: ignore[list-item]
    # The first move ran before the bad value was reached.
    assert rover.position == (0, 1)


def test_on_step_receives_every_executed_command() -> None:
    records: List[Dict[str, Any]] = []
    rover = Rover(Grid(5, [(1, 1)]))
    Navigator(on_step=records.append).execute(rover, [M, R, M, M])
    assert [r["step"] for r in records] == [1, 2, 3]
    assert [r["command"] for r in records] == ["M", "R", "M"]
    assert records[-1] == {
        "event": "step",
        "step": 3,
        "command": "M",
        "x": 0,
        "y": 1,
        "heading": "E",
        "status": "Obstacle encountered",
    }


def test_telemetry_logs_steps_and_outcome(tmp_path) -> None:
    path = tmp_path / "nav" / "telemetry.jsonl"
    with TelemetryLogger(str(path)) as telemetry:
        Navigator(telemetry=telemetry).execute(Rover(Grid(3)), [M, M, M])
    records = read_records(str(path))
    assert [r["event"] for r in records] == ["step", "step", "step", "outcome"]
    assert records[-1] == {
        "event": "outcome",
        "final_position": [0, 2],
        "final_direction": "N",
        "status": "Out of bounds",
    }
