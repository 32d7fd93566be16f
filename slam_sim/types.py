"""Value types shared by the sensor, mapper, planner and kinematics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
import math


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Pose:
    """World pose; theta in radians with 0 pointing along +x."""

    x: float
    y: float
    theta: float

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class Wall:
    """Directed wall segment in world coordinates."""

    start: Point
    end: Point

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)


@dataclass(frozen=True)
class RangeHit:
    """One ray return. ``hit=False`` is a max-range miss (known free, not occupied)."""

    point: Point
    distance: float
    angle: float
    hit: bool


class BeliefCell(IntEnum):
    UNKNOWN = 0
    FREE = 1
    OCCUPIED = -1


class DriveMode(Enum):
    MANUAL = "manual"
    AUTONOMOUS = "autonomous"
    IDLE = "idle"
