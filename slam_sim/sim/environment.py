"""Wall source: static base walls, user-added walls and per-tick dynamic walls."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..constants import BOUNDARY_INSET, MIN_CUSTOM_WALL_LENGTH
from ..types import Point, Wall


def boundary_walls(width: float, height: float, inset: float = BOUNDARY_INSET) -> List[Wall]:
    """Closed rectangular enclosure ``inset`` units inside the world edges."""
    a = Point(inset, inset)
    b = Point(width - inset, inset)
    c = Point(width - inset, height - inset)
    d = Point(inset, height - inset)
    return [Wall(a, b), Wall(b, c), Wall(c, d), Wall(d, a)]


class WallMap:
    """Concatenates base, custom and dynamic walls with no semantic distinction.

    The wall set may change between ticks but ``get_walls`` returns a fresh
    list so a scan in progress never sees it mutate.
    """

    def __init__(self, width: float, height: float, base_walls: Optional[Iterable[Wall]] = None) -> None:
        self.width = float(width)
        self.height = float(height)
        self.base_walls: List[Wall] = list(base_walls) if base_walls is not None else []
        self.custom_walls: List[Wall] = []
        self.dynamic_walls: List[Wall] = []

    @classmethod
    def enclosed(cls, width: float, height: float, inset: float = BOUNDARY_INSET) -> "WallMap":
        return cls(width, height, boundary_walls(width, height, inset))

    def get_walls(self) -> List[Wall]:
        return [*self.base_walls, *self.custom_walls, *self.dynamic_walls]

    def set_base_walls(self, walls: Iterable[Wall]) -> None:
        self.base_walls = list(walls)
        self.custom_walls = []

    def set_dynamic_walls(self, walls: Sequence[Wall]) -> None:
        self.dynamic_walls = list(walls)

    def add_custom_wall(self, start: Point, end: Point) -> bool:
        """Add a user wall; walls shorter than the minimum length are rejected."""
        wall = Wall(start, end)
        if wall.length <= MIN_CUSTOM_WALL_LENGTH:
            return False
        self.custom_walls.append(wall)
        return True

    def clear_custom_walls(self) -> None:
        self.custom_walls = []
