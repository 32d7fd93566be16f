"""Planar geometry helpers used by raycasting and collision checks."""

from __future__ import annotations

from math import hypot, pi
from typing import Optional

from ..types import Point


def distance(p1: Point, p2: Point) -> float:
    return hypot(p1.x - p2.x, p1.y - p2.y)


def wrap_to_pi(theta: float) -> float:
    """Normalize angle to [-pi, pi)."""
    wrapped = (theta + pi) % (2.0 * pi) - pi
    if wrapped >= pi:
        wrapped -= 2.0 * pi
    return wrapped


def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Optional[Point]:
    """Intersection of segments p1-p2 and p3-p4, or None.

    Parallel (and collinear) segments never intersect. Endpoints count as
    part of the segment.
    """
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if denom == 0.0:
        return None

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denom
    u = -((p1.x - p2.x) * (p1.y - p3.y) - (p1.y - p2.y) * (p1.x - p3.x)) / denom

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return Point(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))
    return None


def circle_intersects_segment(cx: float, cy: float, radius: float, a: Point, b: Point) -> bool:
    """True if the disc at (cx, cy) strictly overlaps segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    len_sq = dx * dx + dy * dy
    t = 0.0
    if len_sq != 0.0:
        t = ((cx - a.x) * dx + (cy - a.y) * dy) / len_sq
        t = max(0.0, min(1.0, t))

    dist_x = cx - (a.x + t * dx)
    dist_y = cy - (a.y + t * dy)
    return (dist_x * dist_x + dist_y * dist_y) < radius * radius


__all__ = [
    "distance",
    "wrap_to_pi",
    "segment_intersection",
    "circle_intersects_segment",
]
