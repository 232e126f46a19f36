from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from .grid import Grid
from .types import Coordinate, Heading, Status, as_coordinate


@dataclass(frozen=True)
class RoverState:
    """Snapshot of the rover pose.

    Attributes
    ----------
    x : int
        Column of the occupied cell.
    y : int
        Row of the occupied cell, growing northward.
    heading : Heading
        Direction the rover faces.
    """

    x: int
    y: int
    heading: Heading

    @property
    def position(self) -> Coordinate:
        return (self.x, self.y)


class Rover:
    """Grid rover that turns in place and moves one cell at a time.

    The rover never enters an obstacle or leaves the grid: a rejected move
    returns a failure status and leaves position and heading untouched. The
    start pose is taken as given and is not checked against the grid.
    """

    def __init__(
        self,
        grid: Grid,
        position: Sequence[int] = (0, 0),
        heading: Heading = Heading.NORTH,
    ) -> None:
        self._grid = grid
        self._position: Coordinate = as_coordinate(position, "rover position")
        self._heading = Heading.parse(heading)

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def position(self) -> Coordinate:
        return self._position

    @property
    def heading(self) -> Heading:
        return self._heading

    def get_state(self) -> RoverState:
        """Return a snapshot of the current pose."""
        x, y = self._position
        return RoverState(x=x, y=y, heading=self._heading)

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------
    def turn_left(self) -> None:
        self._heading = self._heading.left()

    def turn_right(self) -> None:
        self._heading = self._heading.right()

    def next_position(self) -> Coordinate:
        """Cell one step ahead of the rover, whether or not it is reachable."""
        dx, dy = self._heading.unit
        x, y = self._position
        return (x + dx, y + dy)

    def move(self) -> Status:
        """Advance one cell along the current heading.

        The obstacle check runs before the bounds check, so an obstacle
        listed outside the grid reports ``OBSTACLE_ENCOUNTERED``.
        """
        candidate = self.next_position()
        if self._grid.has_obstacle(candidate):
            return Status.OBSTACLE_ENCOUNTERED
        if not self._grid.in_bounds(candidate):
            return Status.OUT_OF_BOUNDS
        self._position = candidate
        return Status.SUCCESS

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for logging/telemetry."""
        x, y = self._position
        return {"x": x, "y": y, "heading": self._heading.value}

    def __repr__(self) -> str:
        x, y = self._position
        return f"Rover(x={x}, y={y}, heading={self._heading.value})"
