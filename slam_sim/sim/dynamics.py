"""Robot kinematics with collision response and odometry drift.

Per-tick Euler integration in world units per tick:
- heading += turn_speed
- proposed position = position + forward_speed * (cos, sin)(heading)
- a proposal whose bounding circle overlaps any wall is discarded, so walls
  block translation but never rotation.

A second "believed" pose replays the same commands with independent uniform
noise on turn and forward displacement. With zero drift it is pinned to the
true pose every tick.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from math import atan2, cos, hypot, sin
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from ..constants import (
    ARRIVAL_RADIUS,
    CRUISE_FRACTION,
    DRIFT_SCALE,
    HEADING_JITTER_FACTOR,
    MAX_DRIFT,
    ROBOT_MAX_SPEED,
    ROBOT_MAX_SPEED_MULTIPLIER,
    ROBOT_MAX_TURN,
    ROBOT_RADIUS,
    SPEED_NOISE_FACTOR,
    STEERING_GAIN,
    TRAIL_EVERY_TICKS,
    TRAIL_MAX_LENGTH,
    TURN_IN_PLACE_RAD,
    TURN_NOISE_FACTOR,
)
from ..types import DriveMode, Point, Pose, Wall
from .geometry import circle_intersects_segment, wrap_to_pi


@dataclass
class KinematicState:
    """Mutable pose record; x, y in world units, theta in radians."""

    x: float
    y: float
    theta: float

    def as_pose(self) -> Pose:
        return Pose(self.x, self.y, self.theta)


class RobotKinematics:
    """Differential-drive robot owning a true and a believed pose.

    Interface:
    - apply_input(forward, turn) -> None
    - set_path(path) / clear_path() / stop()
    - update(walls) -> bool (True when translation was blocked)
    - pose / believed_pose -> Pose
    """

    def __init__(
        self,
        x: float,
        y: float,
        theta: float = 0.0,
        *,
        radius: float = ROBOT_RADIUS,
        max_speed: float = ROBOT_MAX_SPEED,
        max_turn: float = ROBOT_MAX_TURN,
        arrival_radius: float = ARRIVAL_RADIUS,
        drift: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        assert radius > 0.0, "radius must be > 0"
        assert max_turn > 0.0, "max_turn must be > 0"
        self.radius = float(radius)
        self.max_speed = float(max_speed)
        self.max_turn = float(max_turn)
        self.arrival_radius = float(arrival_radius)
        self.drift = 0.0
        self.set_drift(drift)
        self._rng = rng or np.random.default_rng()

        self.forward_speed = 0.0
        self.turn_speed = 0.0
        self.path: Optional[List[Point]] = None
        self.path_index = 0
        self._manual = False

        self.true_trail: Deque[Point] = deque(maxlen=TRAIL_MAX_LENGTH)
        self.believed_trail: Deque[Point] = deque(maxlen=TRAIL_MAX_LENGTH)
        self._trail_counter = 0

        self._true = KinematicState(x, y, wrap_to_pi(theta))
        self._believed = KinematicState(x, y, wrap_to_pi(theta))

    def set_seed(self, seed: int) -> None:
        self._rng = np.random.default_rng(seed)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def pose(self) -> Pose:
        return self._true.as_pose()

    @property
    def believed_pose(self) -> Pose:
        return self._believed.as_pose()

    @property
    def mode(self) -> DriveMode:
        if self._manual:
            return DriveMode.MANUAL
        if self.path:
            return DriveMode.AUTONOMOUS
        return DriveMode.IDLE

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    def reset(self, x: float, y: float, theta: float = 0.0) -> None:
        """Teleport both poses and drop motion state."""
        self._true = KinematicState(x, y, wrap_to_pi(theta))
        self._believed = KinematicState(x, y, wrap_to_pi(theta))
        self.stop()
        self.reset_trails()

    def reset_trails(self) -> None:
        self.true_trail.clear()
        self.believed_trail.clear()
        self._trail_counter = 0

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_drift(self, amount: float) -> None:
        self.drift = float(min(max(float(amount), 0.0), MAX_DRIFT))

    def set_speed_multiplier(self, multiplier: float) -> None:
        self.max_speed = float(min(max(float(multiplier), 0.0), ROBOT_MAX_SPEED_MULTIPLIER))

    def set_path(self, path: Sequence[Point]) -> None:
        self.path = list(path) if path else None
        self.path_index = 0

    def clear_path(self) -> None:
        self.path = None
        self.path_index = 0

    def stop(self) -> None:
        self.clear_path()
        self.forward_speed = 0.0
        self.turn_speed = 0.0
        self._manual = False

    def apply_input(self, forward: float = 0.0, turn: float = 0.0) -> None:
        """Manual drive input; sign of ``forward``/``turn`` selects direction.

        Any nonzero input preempts autonomous driving by dropping the path.
        """
        self._manual = forward != 0.0 or turn != 0.0
        if self._manual:
            self.clear_path()

        if self._manual or not self.path:
            self.forward_speed = float(np.sign(forward)) * self.max_speed
            self.turn_speed = float(np.sign(turn)) * self.max_turn

    def steer_towards_path(self) -> None:
        """Set speeds to follow the active path; clears it on arrival."""
        if not self.path or self.path_index >= len(self.path):
            self.path = None
            return

        x, y, theta = self._true.x, self._true.y, self._true.theta
        target = self.path[self.path_index]
        if hypot(target.x - x, target.y - y) < self.arrival_radius:
            self.path_index += 1
            if self.path_index >= len(self.path):
                self.path = None
                self.forward_speed = 0.0
                self.turn_speed = 0.0
                return
            target = self.path[self.path_index]

        angle_diff = wrap_to_pi(atan2(target.y - y, target.x - x) - theta)
        self.turn_speed = max(-self.max_turn, min(self.max_turn, angle_diff * STEERING_GAIN))
        if abs(angle_diff) > TURN_IN_PLACE_RAD:
            self.forward_speed = 0.0
        else:
            self.forward_speed = self.max_speed * CRUISE_FRACTION

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------
    def collides(self, x: float, y: float, walls: Sequence[Wall]) -> bool:
        return any(circle_intersects_segment(x, y, self.radius, w.start, w.end) for w in walls)

    def update(self, walls: Sequence[Wall] = ()) -> bool:
        """Advance one tick. Returns True when a wall blocked translation."""
        if self.path:
            self.steer_towards_path()

        s = self._true
        s.theta = wrap_to_pi(s.theta + self.turn_speed)
        next_x = s.x + cos(s.theta) * self.forward_speed
        next_y = s.y + sin(s.theta) * self.forward_speed

        hit_wall = self.collides(next_x, next_y, walls)
        if not hit_wall:
            s.x, s.y = next_x, next_y

        self._update_believed_pose(hit_wall)
        self._record_trail()
        return hit_wall

    def _update_believed_pose(self, hit_wall: bool) -> None:
        b = self._believed
        if self.drift == 0.0:
            b.x, b.y, b.theta = self._true.x, self._true.y, self._true.theta
            return

        scale = self.drift * DRIFT_SCALE
        u_turn, u_speed, u_angle = self._rng.random(3)
        turn_noise = (u_turn - 0.5) * scale * TURN_NOISE_FACTOR
        speed_noise = (u_speed - 0.5) * scale * self.forward_speed * SPEED_NOISE_FACTOR
        heading_jitter = (u_angle - 0.5) * scale * HEADING_JITTER_FACTOR

        b.theta = wrap_to_pi(b.theta + self.turn_speed + float(turn_noise))
        if not hit_wall:
            travel = self.forward_speed + float(speed_noise)
            b.x += cos(b.theta + heading_jitter) * travel
            b.y += sin(b.theta + heading_jitter) * travel

    def _record_trail(self) -> None:
        self._trail_counter += 1
        if self._trail_counter % TRAIL_EVERY_TICKS == 0:
            self.true_trail.append(Point(self._true.x, self._true.y))
            self.believed_trail.append(Point(self._believed.x, self._believed.y))

    def trails(self) -> Tuple[List[Point], List[Point]]:
        return list(self.true_trail), list(self.believed_trail)
