"""A* path planner over the belief grid.

- 8-connected moves through non-OCCUPIED cells; a diagonal is refused when
  either orthogonal corner cell is OCCUPIED.
- Step cost is 1 or sqrt(2) plus the entered cell's proximity penalty
  (OCCUPIED cells within a Chebyshev radius, times a fixed weight).
- Heuristic is Euclidean distance in cells.
- The open set is a binary heap of (f, seq, index); equal f pops in insertion
  order. Closed set, g-scores and parents are flat lists keyed by cell index.
"""

from __future__ import annotations

import heapq
import logging
from math import hypot, inf, sqrt
from typing import List, Sequence, Tuple

import numpy as np
from scipy.ndimage import correlate

from ..constants import PROXIMITY_PENALTY, PROXIMITY_RADIUS_CELLS
from ..mapping.belief_grid import BeliefGrid
from ..types import BeliefCell, Point

logger = logging.getLogger(__name__)

SQRT2 = sqrt(2.0)

# (dcol, drow, cost)
MOTIONS: Tuple[Tuple[int, int, float], ...] = (
    (0, -1, 1.0),
    (0, 1, 1.0),
    (-1, 0, 1.0),
    (1, 0, 1.0),
    (-1, -1, SQRT2),
    (1, -1, SQRT2),
    (-1, 1, SQRT2),
    (1, 1, SQRT2),
)


def _square_kernel(radius_cells: int) -> np.ndarray:
    r = int(radius_cells)
    return np.ones((2 * r + 1, 2 * r + 1), dtype=np.int32)


def proximity_penalty(
    occupied: np.ndarray,
    radius_cells: int = PROXIMITY_RADIUS_CELLS,
    weight: float = PROXIMITY_PENALTY,
) -> np.ndarray:
    """Per-cell wall-proximity penalty.

    Args:
        occupied: 2D bool array (rows, cols), True where OCCUPIED.
        radius_cells: Chebyshev radius of the counting window.
        weight: penalty per OCCUPIED cell inside the window.

    Returns:
        2D float array of the same shape.
    """
    assert occupied.ndim == 2 and occupied.dtype == bool
    counts = correlate(occupied.astype(np.int32), _square_kernel(radius_cells), mode="constant", cval=0)
    return counts.astype(np.float64) * float(weight)


def path_cost(path: Sequence[Point], cell_size: float) -> float:
    """Unpenalized step cost of a waypoint sequence, in cell units."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += hypot(b.x - a.x, b.y - a.y) / cell_size
    return total


class AStarPlanner:
    """Cost-aware A* on a BeliefGrid. Reads the grid, never writes it."""

    def __init__(
        self,
        grid: BeliefGrid,
        *,
        penalty_radius: int = PROXIMITY_RADIUS_CELLS,
        penalty_weight: float = PROXIMITY_PENALTY,
    ) -> None:
        assert penalty_radius >= 0, "penalty_radius must be >= 0"
        assert penalty_weight >= 0.0, "penalty_weight must be >= 0"
        self.grid = grid
        self.penalty_radius = int(penalty_radius)
        self.penalty_weight = float(penalty_weight)

    def find_path(self, start_x: float, start_y: float, goal_x: float, goal_y: float) -> List[Point]:
        """Plan from world start to world goal; returns cell-centre waypoints.

        The first waypoint is the start cell, the last the goal cell. An empty
        list means the goal is out of bounds, OCCUPIED or unreachable.
        """
        grid = self.grid
        cols, rows = grid.cols, grid.rows
        start_col, start_row = grid.world_to_cell(start_x, start_y)
        goal_col, goal_row = grid.world_to_cell(goal_x, goal_y)

        if not grid.in_bounds(goal_col, goal_row):
            logger.debug("Goal (%.1f, %.1f) outside grid", goal_x, goal_y)
            return []
        if not grid.in_bounds(start_col, start_row):
            logger.debug("Start (%.1f, %.1f) outside grid", start_x, start_y)
            return []

        cells = grid.cells
        occupied_mask = cells == int(BeliefCell.OCCUPIED)
        goal_idx = grid.index(goal_col, goal_row)
        if occupied_mask[goal_idx]:
            logger.debug("Goal cell (%d, %d) is occupied", goal_col, goal_row)
            return []

        # the search loop reads plain lists only
        penalty = proximity_penalty(
            occupied_mask.reshape(rows, cols), self.penalty_radius, self.penalty_weight
        ).ravel().tolist()
        occupied = occupied_mask.tolist()

        n = cols * rows
        g_score = [inf] * n
        closed = bytearray(n)
        came_from = [-1] * n

        start_idx = grid.index(start_col, start_row)
        g_score[start_idx] = 0.0
        seq = 0
        open_heap: List[Tuple[float, int, int]] = [
            (hypot(start_col - goal_col, start_row - goal_row), seq, start_idx)
        ]
        heappop, heappush = heapq.heappop, heapq.heappush

        while open_heap:
            _, _, idx = heappop(open_heap)
            if closed[idx]:
                continue
            if idx == goal_idx:
                return self._reconstruct_path(came_from, idx)
            closed[idx] = 1

            col, row = idx % cols, idx // cols
            g_curr = g_score[idx]
            for dc, dr, step in MOTIONS:
                nc, nr = col + dc, row + dr
                if not (0 <= nc < cols and 0 <= nr < rows):
                    continue
                n_idx = nc + nr * cols
                if occupied[n_idx] or closed[n_idx]:
                    continue
                if dc != 0 and dr != 0:
                    if occupied[nc + row * cols] or occupied[col + nr * cols]:
                        continue

                tentative = g_curr + step + penalty[n_idx]
                if tentative < g_score[n_idx]:
                    g_score[n_idx] = tentative
                    came_from[n_idx] = idx
                    seq += 1
                    heappush(open_heap, (tentative + hypot(nc - goal_col, nr - goal_row), seq, n_idx))

        logger.debug("No path from (%d, %d) to (%d, %d)", start_col, start_row, goal_col, goal_row)
        return []

    def _reconstruct_path(self, came_from: List[int], idx: int) -> List[Point]:
        cols = self.grid.cols
        path: List[Point] = []
        while idx != -1:
            path.append(Point(*self.grid.cell_center(idx % cols, idx // cols)))
            idx = came_from[idx]
        path.reverse()
        return path
