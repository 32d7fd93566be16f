"""Frontier-based exploration target selection.

Identifies FREE cells bordering UNKNOWN space, groups them into clusters and
picks the cluster that best trades size against distance from the robot.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import List, Optional

import numpy as np
from scipy.ndimage import label

from ..constants import FRONTIER_DISTANCE_WEIGHT, FRONTIER_MIN_CLUSTER
from ..mapping.belief_grid import BeliefGrid
from ..types import BeliefCell, Point

logger = logging.getLogger(__name__)

# 4-adjacency
_CROSS = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)


@dataclass
class FrontierCluster:
    """A 4-connected group of frontier cells; cells is an (N, 2) array of (col, row)."""

    cells: np.ndarray
    size: int
    centroid_col: float
    centroid_row: float


class FrontierDetector:
    """Frontier detection over a BeliefGrid. Stateless between calls.

    Args:
        grid: belief grid to read.
        min_cluster_size: clusters with fewer cells are treated as noise.
        distance_weight: per-cell distance discount in the cluster score.
    """

    def __init__(
        self,
        grid: BeliefGrid,
        min_cluster_size: int = FRONTIER_MIN_CLUSTER,
        distance_weight: float = FRONTIER_DISTANCE_WEIGHT,
    ) -> None:
        assert min_cluster_size >= 1, "min_cluster_size must be >= 1"
        assert distance_weight >= 0.0, "distance_weight must be >= 0"
        self.grid = grid
        self.min_cluster_size = int(min_cluster_size)
        self.distance_weight = float(distance_weight)

    def find_frontier_cells(self) -> np.ndarray:
        """Boolean (rows, cols) mask of interior FREE cells 4-adjacent to UNKNOWN.

        The outermost ring of cells is never a frontier.
        """
        g = self.grid.as_array()
        mask = np.zeros(g.shape, dtype=bool)
        if g.shape[0] < 3 or g.shape[1] < 3:
            return mask

        unknown = g == int(BeliefCell.UNKNOWN)
        inner_free = g[1:-1, 1:-1] == int(BeliefCell.FREE)
        touches_unknown = (
            unknown[1:-1, :-2] | unknown[1:-1, 2:] | unknown[:-2, 1:-1] | unknown[2:, 1:-1]
        )
        mask[1:-1, 1:-1] = inner_free & touches_unknown
        return mask

    def find_clusters(self) -> List[FrontierCluster]:
        """Frontier clusters in raster order of their first cell, noise removed."""
        labels, num = label(self.find_frontier_cells(), structure=_CROSS)
        clusters: List[FrontierCluster] = []
        for cluster_id in range(1, num + 1):
            rows, cols = np.nonzero(labels == cluster_id)
            if rows.size < self.min_cluster_size:
                continue
            clusters.append(
                FrontierCluster(
                    cells=np.stack([cols, rows], axis=1),
                    size=int(rows.size),
                    centroid_col=float(cols.mean()),
                    centroid_row=float(rows.mean()),
                )
            )
        return clusters

    def score(self, cluster: FrontierCluster, robot_col: int, robot_row: int) -> float:
        dist = math.hypot(cluster.centroid_col - robot_col, cluster.centroid_row - robot_row)
        return cluster.size / (1.0 + dist * self.distance_weight)

    def ranked_clusters(self, robot_x: float, robot_y: float) -> List[FrontierCluster]:
        """Clusters by descending score; ties keep raster order."""
        robot_col, robot_row = self.grid.world_to_cell(robot_x, robot_y)
        clusters = self.find_clusters()
        return sorted(clusters, key=lambda c: -self.score(c, robot_col, robot_row))

    def find_best_frontier(self, robot_x: float, robot_y: float) -> Optional[Point]:
        """World target for the best frontier cluster, or None when fully explored."""
        ranked = self.ranked_clusters(robot_x, robot_y)
        if not ranked:
            logger.debug("No frontier clusters left")
            return None
        best = ranked[0]
        return Point(*self.grid.cell_center(best.centroid_col, best.centroid_row))

    def approach_point(self, cluster: FrontierCluster) -> Point:
        """Centre of the cluster cell closest to its centroid; always a FREE cell."""
        d2 = (cluster.cells[:, 0] - cluster.centroid_col) ** 2 + (cluster.cells[:, 1] - cluster.centroid_row) ** 2
        col, row = cluster.cells[int(np.argmin(d2))]
        return Point(*self.grid.cell_center(int(col), int(row)))
