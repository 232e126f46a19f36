from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from .errors import NavigationError, RoverNavError, UnknownCommandError
from .grid import Grid
from .parser import parse_commands
from .rover import Rover
from .telemetry import TelemetryLogger
from .types import Command, Heading, NavigationOutcome, Status


StepCallback = Callable[[Dict[str, Any]], None]


class Navigator:
    """Drive a rover through a command sequence, halting on the first failed move.

    Turns never stop a run. A move that returns anything but ``SUCCESS``
    ends the run immediately and its status becomes the run status; the
    remaining commands are not executed.

    Parameters
    ----------
    telemetry : TelemetryLogger, optional
        Receives one record per executed command and a final outcome record.
    on_step : callable, optional
        Called with the same per-command record, e.g. to drive a renderer.
    """

    def __init__(
        self,
        telemetry: Optional[TelemetryLogger] = None,
        on_step: Optional[StepCallback] = None,
    ) -> None:
        self.telemetry = telemetry
        self.on_step = on_step

    def execute(self, rover: Rover, commands: Iterable[Command]) -> NavigationOutcome:
        status = Status.SUCCESS
        for step, command in enumerate(commands, start=1):
            result = self._apply(rover, command)
            self._emit_step(step, command, rover, result)
            if result is not Status.SUCCESS:
                status = result
                break

        outcome = NavigationOutcome(
            position=rover.position,
            heading=rover.heading,
            status=status,
        )
        if self.telemetry is not None:
            self.telemetry.log_step({"event": "outcome", **outcome.to_dict()})
        return outcome

    @staticmethod
    def _apply(rover: Rover, command: Command) -> Status:
        if command is Command.TURN_LEFT:
            rover.turn_left()
            return Status.SUCCESS
        if command is Command.TURN_RIGHT:
            rover.turn_right()
            return Status.SUCCESS
        if command is Command.MOVE:
            return rover.move()
        raise UnknownCommandError(f"Unknown command: {command!r}")

    def _emit_step(self, step: int, command: Command, rover: Rover, result: Status) -> None:
        if self.telemetry is None and self.on_step is None:
            return
        record = {
            "event": "step",
            "step": step,
            "command": command.value,
            **rover.to_dict(),
            "status": result.value,
        }
        if self.telemetry is not None:
            self.telemetry.log_step(record)
        if self.on_step is not None:
            self.on_step(record)


def navigate_rover(
    grid_size: int,
    obstacles: Iterable[Sequence[int]],
    commands: str,
    start: Sequence[int] = (0, 0),
    heading: Heading = Heading.NORTH,
    telemetry: Optional[TelemetryLogger] = None,
) -> NavigationOutcome:
    """Build a grid and rover, parse ``commands`` and run them.

    Setup and parsing failures are re-raised as NavigationError.
    """
    try:
        grid = Grid(grid_size, obstacles)
        rover = Rover(grid, position=start, heading=heading)
        parsed = parse_commands(commands)
    except RoverNavError as exc:
        raise NavigationError(f"Navigation failed: {exc}") from exc
    return Navigator(telemetry=telemetry).execute(rover, parsed)
