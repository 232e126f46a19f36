from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence
import json

from .errors import ConfigError, InvalidGridSize
from .types import Coordinate, as_coordinate, is_integer


class Grid:
    """Square grid of integer cells with a fixed set of obstacle cells.

    Valid coordinates span ``[0, size)`` on both axes. Obstacles are stored
    as given; cells outside the bounds are accepted and simply unreachable.
    The grid never changes after construction, so one instance can be shared
    by several rovers.

    Parameters
    ----------
    size : int
        Edge length in cells, at least 1.
    obstacles : iterable of (x, y)
        Impassable cells. Duplicates collapse.
    """

    def __init__(self, size: int, obstacles: Optional[Iterable[Sequence[int]]] = None) -> None:
        if not is_integer(size):
            raise InvalidGridSize(f"Grid size must be an integer, got {size!r}")
        if size < 1:
            raise InvalidGridSize("Grid size must be at least 1")
        self._size = int(size)
        self._obstacles: FrozenSet[Coordinate] = frozenset(
            as_coordinate(o, "obstacle") for o in (obstacles or [])
        )

    @property
    def size(self) -> int:
        return self._size

    @property
    def obstacles(self) -> FrozenSet[Coordinate]:
        return self._obstacles

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, coord: Coordinate) -> bool:
        """Return True if ``coord`` lies inside ``[0, size) x [0, size)``."""
        x, y = coord
        return 0 <= x < self._size and 0 <= y < self._size

    def has_obstacle(self, coord: Coordinate) -> bool:
        """Return True if ``coord`` is an obstacle cell (bounds not checked)."""
        return (coord[0], coord[1]) in self._obstacles

    # ------------------------------------------------------------------
    # Map loading / serialization
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any]) -> "Grid":
        """Create grid from ``{"size": n, "obstacles": [[x, y], ...]}``."""
        if "size" not in data:
            raise ConfigError("Map is missing 'size'")
        raw_obstacles = data.get("obstacles") or []
        if not isinstance(raw_obstacles, (list, tuple)):
            raise ConfigError(f"Map obstacles must be a list, got {raw_obstacles!r}")
        obstacles = [as_coordinate(o, "obstacle") for o in raw_obstacles]
        return cls(size=data["size"], obstacles=obstacles)

    @classmethod
    def from_map_file(cls, path: str) -> "Grid":
        """Create grid from a JSON map file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read map file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid map file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Map file {path} must contain a JSON object")
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize grid description to a Python dict."""
        obstacles: List[List[int]] = [[x, y] for x, y in sorted(self._obstacles)]
        return {"size": self._size, "obstacles": obstacles}

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, obstacles={len(self._obstacles)})"
