"""2-D range-sensor SLAM sandbox: sensing, belief mapping, planning and exploration."""

from .mapping.belief_grid import BeliefGrid
from .planning.astar import AStarPlanner
from .planning.frontier import FrontierDetector
from .session import SlamSession
from .sim.dynamics import RobotKinematics
from .sim.environment import WallMap
from .sim.lidar import RangeSensor
from .types import BeliefCell, DriveMode, Point, Pose, RangeHit, Wall

__all__ = [
    "AStarPlanner",
    "BeliefCell",
    "BeliefGrid",
    "DriveMode",
    "FrontierDetector",
    "Point",
    "Pose",
    "RangeHit",
    "RangeSensor",
    "RobotKinematics",
    "SlamSession",
    "Wall",
    "WallMap",
]
