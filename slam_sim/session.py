"""Single-threaded sense -> map -> plan -> act loop.

One ``step`` is one tick: input, kinematics and collision, range scan, belief
update, then (at most once per cooldown window, and only while exploring with
no active path) frontier selection and planning.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from math import hypot
from typing import List, Optional, Tuple

import numpy as np

from .config import SimConfig
from .constants import STATS_MIN_STEP
from .mapping.belief_grid import BeliefGrid
from .planning.astar import AStarPlanner
from .planning.frontier import FrontierDetector
from .sim.dynamics import RobotKinematics
from .sim.environment import WallMap
from .sim.lidar import RangeSensor
from .types import DriveMode, Point, RangeHit

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    hit_wall: bool
    hits: List[RangeHit]
    mode: DriveMode


@dataclass
class SessionStats:
    ticks: int = 0
    distance: float = 0.0
    collisions: int = 0
    was_hitting_wall: bool = False

    def record(self, step: float, hit_wall: bool) -> None:
        self.ticks += 1
        if step > STATS_MIN_STEP:
            self.distance += step
        # count contacts, not frames spent in contact
        if hit_wall and not self.was_hitting_wall:
            self.collisions += 1
        self.was_hitting_wall = hit_wall


class SlamSession:
    """Owns one robot, its sensor, belief grid, planner and frontier detector.

    External collaborators supply walls through ``walls`` and read robot poses,
    the grid, the active path and the frontier target; none of them mutate
    core state except through the command methods below.
    """

    def __init__(self, cfg: SimConfig | None = None, walls: WallMap | None = None) -> None:
        self.cfg = cfg or SimConfig()
        world = self.cfg.world
        rng = np.random.default_rng(self.cfg.seed)

        if walls is None:
            if world.boundary_inset is not None:
                walls = WallMap.enclosed(world.width, world.height, world.boundary_inset)
            else:
                walls = WallMap(world.width, world.height)
            walls.base_walls.extend(world.wall_segments())
        self.walls = walls

        rc = self.cfg.robot
        self._start = (
            world.width / 2.0 if rc.start_x is None else rc.start_x,
            world.height / 2.0 if rc.start_y is None else rc.start_y,
            rc.start_theta,
        )
        self.robot = RobotKinematics(
            *self._start,
            radius=rc.radius,
            max_speed=rc.max_speed,
            max_turn=rc.max_turn,
            arrival_radius=rc.arrival_radius,
            drift=rc.drift,
            rng=rng,
        )
        sc = self.cfg.sensor
        self.sensor = RangeSensor(rays=sc.rays, max_range=sc.max_range, noise_percent=sc.noise_percent, rng=rng)
        self.grid = BeliefGrid(world.width, world.height, self.cfg.grid.cell_size)
        self.planner = AStarPlanner(
            self.grid,
            penalty_radius=self.cfg.planner.penalty_radius,
            penalty_weight=self.cfg.planner.penalty_weight,
        )
        self.frontier = FrontierDetector(
            self.grid,
            min_cluster_size=self.cfg.frontier.min_cluster_size,
            distance_weight=self.cfg.frontier.distance_weight,
        )

        self.exploring = bool(self.cfg.exploration.enabled)
        self.cooldown_ticks = int(self.cfg.exploration.cooldown_ticks)
        self.frontier_target: Optional[Point] = None
        self._ticks_since_plan = self.cooldown_ticks
        self.stats = SessionStats()
        self.last_hits: List[RangeHit] = []

    # ------------------------------------------------------------------
    # Read-only views for consumers
    # ------------------------------------------------------------------
    @property
    def path(self) -> Optional[List[Point]]:
        return list(self.robot.path) if self.robot.path else None

    def explored_fraction(self) -> float:
        return self.grid.explored_fraction()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def step(self, forward: float = 0.0, turn: float = 0.0) -> TickResult:
        """Run one tick with optional manual input."""
        if forward != 0.0 or turn != 0.0:
            self._cancel_autonomy()
        self.robot.apply_input(forward, turn)

        before = self.robot.pose
        hit_wall = self.robot.update(self.walls.get_walls())
        pose = self.robot.pose
        self.stats.record(hypot(pose.x - before.x, pose.y - before.y), hit_wall)

        hits = self.sensor.scan(pose, self.walls.get_walls())
        self.grid.update(pose, hits, self.robot.radius)
        self.last_hits = hits

        self._ticks_since_plan += 1
        if self.exploring and not self.robot.has_path and self._ticks_since_plan >= self.cooldown_ticks:
            self._explore_step()

        return TickResult(hit_wall, hits, self.robot.mode)

    def run(self, ticks: int) -> SessionStats:
        for _ in range(int(ticks)):
            self.step()
            if not self.exploring and not self.robot.has_path:
                break
        return self.stats

    def _explore_step(self) -> None:
        self._ticks_since_plan = 0
        pose = self.robot.pose
        target = self.frontier.find_best_frontier(pose.x, pose.y)
        if target is None:
            logger.info("Exploration complete: %.1f%% of the map known", 100.0 * self.explored_fraction())
            self._finish_exploring()
            return

        path = self.planner.find_path(pose.x, pose.y, target.x, target.y)
        if not path:
            logger.debug("Frontier (%.1f, %.1f) unreachable; trying frontier cells", target.x, target.y)
            target, path = self._reachable_frontier(pose.x, pose.y)
        if not path:
            logger.info("No reachable frontier: exploration stopped at %.1f%%", 100.0 * self.explored_fraction())
            self._finish_exploring()
            return

        self.frontier_target = target
        self.robot.set_path(path)
        logger.debug("Heading to frontier (%.1f, %.1f) via %d waypoints", target.x, target.y, len(path))

    def _reachable_frontier(self, x: float, y: float) -> Tuple[Optional[Point], List[Point]]:
        """First cluster, best score first, whose nearest-to-centroid cell can be reached."""
        for cluster in self.frontier.ranked_clusters(x, y):
            goal = self.frontier.approach_point(cluster)
            path = self.planner.find_path(x, y, goal.x, goal.y)
            if path:
                return goal, path
        return None, []

    def _finish_exploring(self) -> None:
        self.exploring = False
        self.frontier_target = None
        self.robot.stop()

    def _cancel_autonomy(self) -> None:
        if self.exploring:
            logger.info("Manual input: exploration cancelled")
        self.exploring = False
        self.frontier_target = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def navigate_to(self, x: float, y: float) -> bool:
        """Plan to a world point; on failure the current path is kept."""
        pose = self.robot.pose
        path = self.planner.find_path(pose.x, pose.y, x, y)
        if not path:
            logger.debug("No path to (%.1f, %.1f)", x, y)
            return False
        self.robot.set_path(path)
        return True

    def clear_path(self) -> None:
        self.robot.stop()

    def stop(self) -> None:
        self._cancel_autonomy()
        self.robot.stop()

    def set_exploring(self, enabled: bool) -> None:
        if enabled and not self.exploring:
            self._ticks_since_plan = self.cooldown_ticks
            self.exploring = True
        elif not enabled:
            self.stop()

    def toggle_exploring(self) -> bool:
        self.set_exploring(not self.exploring)
        return self.exploring

    def reset_map(self) -> None:
        """Forget all belief and planner state."""
        self.grid.clear()
        self.frontier_target = None
        self.robot.stop()
        logger.info("Belief map reset")

    def reset(self) -> None:
        """Map reset plus robot back at its start pose."""
        self.reset_map()
        self.exploring = False
        self.robot.reset(*self._start)
        self.stats = SessionStats()

    def add_wall(self, start: Point, end: Point) -> bool:
        """Add a custom wall; an accepted wall invalidates the belief map."""
        if not self.walls.add_custom_wall(start, end):
            return False
        self.reset_map()
        return True

    def clear_custom_walls(self) -> None:
        self.walls.clear_custom_walls()
        self.reset_map()

    # Tuning setters (clamped by the owning component)
    def set_ray_count(self, rays: int) -> None:
        self.sensor.set_parameters(rays, self.sensor.noise_percent)

    def set_noise_percent(self, noise_percent: float) -> None:
        self.sensor.set_parameters(self.sensor.rays, noise_percent)

    def set_speed_multiplier(self, multiplier: float) -> None:
        self.robot.set_speed_multiplier(multiplier)

    def set_drift(self, amount: float) -> None:
        self.robot.set_drift(amount)
