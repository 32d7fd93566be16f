"""Planning over the belief grid: A* routing and frontier selection."""

from .astar import AStarPlanner, path_cost
from .frontier import FrontierCluster, FrontierDetector

__all__ = ["AStarPlanner", "FrontierCluster", "FrontierDetector", "path_cost"]
