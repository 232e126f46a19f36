from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple
import numbers

from .errors import ConfigError


Coordinate = Tuple[int, int]


def is_integer(value: Any) -> bool:
    """True for ints and numpy integers, False for bools."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def as_coordinate(value: Any, what: str = "coordinate") -> Coordinate:
    """Convert an (x, y) pair of integers to a Coordinate.

    Floats, strings and anything that is not a two-item pair are rejected.
    """
    if isinstance(value, (str, bytes)):
        raise ConfigError(f"{what} must be an [x, y] pair of integers, got {value!r}")
    try:
        x, y = value
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{what} must be an [x, y] pair of integers, got {value!r}") from exc
    if not (is_integer(x) and is_integer(y)):
        raise ConfigError(f"{what} must be an [x, y] pair of integers, got {value!r}")
    return (int(x), int(y))


class Heading(Enum):
    """Cardinal direction the rover faces, ordered clockwise N -> E -> S -> W."""

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def unit(self) -> Coordinate:
        """Unit step (dx, dy) for a move in this direction."""
        return _UNIT_VECTORS[self]

    def left(self) -> "Heading":
        """Heading after a 90 degree counter-clockwise turn."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 4]

    def right(self) -> "Heading":
        """Heading after a 90 degree clockwise turn."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]

    @classmethod
    def parse(cls, value: "Heading | str") -> "Heading":
        """Accept a Heading, a one-letter symbol or a full name (any case)."""
        if isinstance(value, Heading):
            return value
        text = str(value).strip().upper()
        for heading in cls:
            if text in (heading.value, heading.name):
                return heading
        raise ConfigError(f"Unknown heading: {value!r}")


_CLOCKWISE = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)

_UNIT_VECTORS = {
    Heading.NORTH: (0, 1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, -1),
    Heading.WEST: (-1, 0),
}


class Command(Enum):
    """Discrete motion command understood by the navigator."""

    TURN_LEFT = "L"
    TURN_RIGHT = "R"
    MOVE = "M"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Command":
        """Map a single command character (any case) to a Command."""
        return cls(symbol.upper())


class Status(Enum):
    """Result of a single move and of a whole navigation run."""

    SUCCESS = "Success"
    OBSTACLE_ENCOUNTERED = "Obstacle encountered"
    OUT_OF_BOUNDS = "Out of bounds"


@dataclass(frozen=True)
class NavigationOutcome:
    """Final rover pose and terminal status of one navigation run.

    Attributes
    ----------
    position : tuple[int, int]
        Cell the rover occupies when the run stopped.
    heading : Heading
        Direction the rover faces when the run stopped.
    status : Status
        ``SUCCESS`` if every command ran, otherwise the status of the
        rejected move that halted the run.
    """

    position: Coordinate
    heading: Heading
    status: Status

    @property
    def succeeded(self) -> bool:
        return self.status is Status.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the plain result shape used by the CLI and telemetry."""
        return {
            "final_position": [self.position[0], self.position[1]],
            "final_direction": self.heading.value,
            "status": self.status.value,
        }
