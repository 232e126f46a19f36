from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .grid import Grid
from .rover import RoverState
from .types import Coordinate, Heading


EMPTY = "."
OBSTACLE = "#"
VISITED = "*"

ROVER_GLYPHS = {
    Heading.NORTH: "^",
    Heading.EAST: ">",
    Heading.SOUTH: "v",
    Heading.WEST: "<",
}


def render_ascii(
    grid: Grid,
    state: Optional[RoverState] = None,
    path: Optional[Iterable[Coordinate]] = None,
) -> str:
    """Render the grid as text, north row first.

    Cells outside the grid (obstacles or rover) are not drawn.
    """
    size = grid.size
    # Row index 0 is y = 0; flipped before joining.
    cells = np.full((size, size), EMPTY, dtype="<U1")

    for x, y in grid.obstacles:
        if grid.in_bounds((x, y)):
            cells[y, x] = OBSTACLE
    for x, y in path or []:
        if grid.in_bounds((x, y)) and cells[y, x] == EMPTY:
            cells[y, x] = VISITED
    if state is not None and grid.in_bounds(state.position):
        cells[state.y, state.x] = ROVER_GLYPHS[state.heading]

    return "\n".join("".join(row) for row in np.flipud(cells))
