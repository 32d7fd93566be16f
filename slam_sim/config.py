from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ARRIVAL_RADIUS,
    BOUNDARY_INSET,
    EXPLORE_COOLDOWN_TICKS,
    FRONTIER_DISTANCE_WEIGHT,
    FRONTIER_MIN_CLUSTER,
    GRID_CELL_SIZE,
    PROXIMITY_PENALTY,
    PROXIMITY_RADIUS_CELLS,
    ROBOT_MAX_SPEED,
    ROBOT_MAX_TURN,
    ROBOT_RADIUS,
    SENSOR_MAX_RANGE,
    SENSOR_NOISE_PERCENT,
    SENSOR_NUM_RAYS,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)
from .types import Point, Wall


@dataclass
class WorldConfig:
    width: float = WORLD_WIDTH
    height: float = WORLD_HEIGHT
    boundary_inset: Optional[float] = BOUNDARY_INSET
    walls: List[Tuple[float, float, float, float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        assert self.width > 0.0, "width must be > 0"
        assert self.height > 0.0, "height must be > 0"
        if self.boundary_inset is not None:
            assert 0.0 <= self.boundary_inset < min(self.width, self.height) / 2.0, "boundary_inset too large"
        for w in self.walls:
            assert len(w) == 4, "walls are [x1, y1, x2, y2]"

    def wall_segments(self) -> List[Wall]:
        return [Wall(Point(x1, y1), Point(x2, y2)) for x1, y1, x2, y2 in self.walls]


@dataclass
class SensorConfig:
    rays: int = SENSOR_NUM_RAYS
    max_range: float = SENSOR_MAX_RANGE
    noise_percent: float = SENSOR_NOISE_PERCENT

    def __post_init__(self) -> None:
        assert self.rays > 0, "rays must be > 0"
        assert self.max_range > 0.0, "max_range must be > 0"
        assert 0.0 <= self.noise_percent <= 100.0, "noise_percent in [0,100]"


@dataclass
class GridConfig:
    cell_size: float = GRID_CELL_SIZE

    def __post_init__(self) -> None:
        assert self.cell_size > 0.0, "cell_size must be > 0"


@dataclass
class RobotConfig:
    start_x: Optional[float] = None  # None -> world centre
    start_y: Optional[float] = None
    start_theta: float = 0.0
    radius: float = ROBOT_RADIUS
    max_speed: float = ROBOT_MAX_SPEED
    max_turn: float = ROBOT_MAX_TURN
    arrival_radius: float = ARRIVAL_RADIUS
    drift: float = 0.0

    def __post_init__(self) -> None:
        assert self.radius > 0.0, "radius must be > 0"
        assert self.max_speed >= 0.0, "max_speed must be >= 0"
        assert self.max_turn > 0.0, "max_turn must be > 0"
        assert self.arrival_radius > 0.0, "arrival_radius must be > 0"
        assert self.drift >= 0.0, "drift must be >= 0"


@dataclass
class PlannerConfig:
    penalty_radius: int = PROXIMITY_RADIUS_CELLS
    penalty_weight: float = PROXIMITY_PENALTY

    def __post_init__(self) -> None:
        assert self.penalty_radius >= 0, "penalty_radius must be >= 0"
        assert self.penalty_weight >= 0.0, "penalty_weight must be >= 0"


@dataclass
class FrontierConfig:
    min_cluster_size: int = FRONTIER_MIN_CLUSTER
    distance_weight: float = FRONTIER_DISTANCE_WEIGHT

    def __post_init__(self) -> None:
        assert self.min_cluster_size >= 1, "min_cluster_size must be >= 1"
        assert self.distance_weight >= 0.0, "distance_weight must be >= 0"


@dataclass
class ExplorationConfig:
    cooldown_ticks: int = EXPLORE_COOLDOWN_TICKS
    enabled: bool = False

    def __post_init__(self) -> None:
        assert self.cooldown_ticks >= 1, "cooldown_ticks must be >= 1"


@dataclass
class SimConfig:
    world: WorldConfig = field(default_factory=WorldConfig)
    sensor: SensorConfig = field(default_factory=SensorConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    robot: RobotConfig = field(default_factory=RobotConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    frontier: FrontierConfig = field(default_factory=FrontierConfig)
    exploration: ExplorationConfig = field(default_factory=ExplorationConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "SimConfig":
        d = cfg or {}
        world = dict(d.get("world", {}))
        if "walls" in world:
            world["walls"] = [tuple(w) for w in world["walls"]]
        return cls(
            world=WorldConfig(**world),
            sensor=SensorConfig(**d.get("sensor", {})),
            grid=GridConfig(**d.get("grid", {})),
            robot=RobotConfig(**d.get("robot", {})),
            planner=PlannerConfig(**d.get("planner", {})),
            frontier=FrontierConfig(**d.get("frontier", {})),
            exploration=ExplorationConfig(**d.get("exploration", {})),
            seed=d.get("seed"),
        )
