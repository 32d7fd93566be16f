"""Rotating range sensor raycast against wall segments.

Design decisions:
- Ray k points at theta + k * 2*pi/N; ray 0 is the robot heading.
- Each ray is a segment of length max_range tested against every wall; the
  closest intersection wins, the first wall tested wins exact ties.
- Misses report exactly max_range at the ray end point and are never noised.
- Noise is radial and uniform: distance += U(-1, 1) * noise_percent/100 * max_range,
  then the hit point is recomputed along the same ray angle.
"""

from __future__ import annotations

from math import cos, sin, pi
from typing import List, Optional, Sequence

import numpy as np

from ..constants import (
    SENSOR_MAX_RANGE,
    SENSOR_MAX_RAYS,
    SENSOR_NOISE_PERCENT,
    SENSOR_NUM_RAYS,
)
from ..types import Point, Pose, RangeHit, Wall
from .geometry import distance, segment_intersection


class RangeSensor:
    """360 degree range sensor over a list of wall segments.

    Args:
        rays: number of rays in one sweep.
        max_range: maximum sensing range in world units.
        noise_percent: uniform noise amplitude as a percentage of max_range.
        rng: optional numpy Generator; if None, created internally.
    """

    def __init__(
        self,
        *,
        rays: int = SENSOR_NUM_RAYS,
        max_range: float = SENSOR_MAX_RANGE,
        noise_percent: float = SENSOR_NOISE_PERCENT,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        assert max_range > 0.0
        self.max_range = float(max_range)
        self.set_parameters(rays, noise_percent)
        self._rng = rng or np.random.default_rng()

    def set_seed(self, seed: int) -> None:
        self._rng = np.random.default_rng(seed)

    def set_parameters(self, rays: int, noise_percent: float) -> None:
        """Live tuning; takes effect on the next scan."""
        self.rays = int(min(max(int(rays), 1), SENSOR_MAX_RAYS))
        self.noise_percent = float(min(max(float(noise_percent), 0.0), 100.0))

    def scan(self, pose: Pose, walls: Sequence[Wall]) -> List[RangeHit]:
        """Cast one sweep of rays from ``pose`` and return one RangeHit per ray."""
        hits: List[RangeHit] = []
        angle_step = (2.0 * pi) / self.rays
        origin = Point(pose.x, pose.y)

        for k in range(self.rays):
            angle = pose.theta + k * angle_step
            ray_end = Point(
                pose.x + cos(angle) * self.max_range,
                pose.y + sin(angle) * self.max_range,
            )

            closest: Optional[Point] = None
            min_dist = self.max_range
            for wall in walls:
                p = segment_intersection(origin, ray_end, wall.start, wall.end)
                if p is None:
                    continue
                d = distance(origin, p)
                if d < min_dist:
                    min_dist = d
                    closest = p

            if closest is None:
                hits.append(RangeHit(ray_end, self.max_range, angle, False))
                continue

            if self.noise_percent > 0.0:
                magnitude = (self.noise_percent / 100.0) * self.max_range
                min_dist += float(self._rng.uniform(-1.0, 1.0)) * magnitude
                closest = Point(pose.x + cos(angle) * min_dist, pose.y + sin(angle) * min_dist)
            hits.append(RangeHit(closest, min_dist, angle, True))

        return hits
