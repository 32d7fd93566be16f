"""Tri-state belief grid built from range returns.

Grid convention: cell (col, row) covers [col*s, (col+1)*s) x [row*s, (row+1)*s)
and lives at flat index ``col + row * cols`` of one contiguous int8 buffer.
Cell values are ``BeliefCell`` members (UNKNOWN=0, FREE=1, OCCUPIED=-1).

Belief is monotonic: FREE may overwrite UNKNOWN, OCCUPIED overwrites
anything, and only ``clear()`` brings a cell back to UNKNOWN.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Tuple

import numpy as np

from ..constants import GRID_CELL_SIZE, ROBOT_RADIUS
from ..types import BeliefCell, Pose, RangeHit

logger = logging.getLogger(__name__)


class BeliefGrid:
    """Fixed-resolution occupancy belief over a width x height world.

    The grid is the single writer of belief: ``update`` and ``clear`` are the
    only mutators, and every accessor hands out read-only views.
    """

    def __init__(self, width: float, height: float, cell_size: float = GRID_CELL_SIZE) -> None:
        assert width > 0.0 and height > 0.0, "world size must be positive"
        assert cell_size > 0.0, "cell_size must be > 0"
        self.width = float(width)
        self.height = float(height)
        self.cell_size = float(cell_size)
        self.cols = int(math.ceil(self.width / self.cell_size))
        self.rows = int(math.ceil(self.height / self.cell_size))
        self._cells = np.zeros(self.cols * self.rows, dtype=np.int8)

    # ------------------------------------------------------------------
    # Read-only access
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self.cols * self.rows

    @property
    def cells(self) -> np.ndarray:
        """Flat read-only view of the cell buffer."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def as_array(self) -> np.ndarray:
        """Read-only (rows, cols) view of the cell buffer."""
        view = self._cells.reshape(self.rows, self.cols)
        view.flags.writeable = False
        return view

    def world_to_cell(self, x: float, y: float) -> Tuple[int, int]:
        return int(math.floor(x / self.cell_size)), int(math.floor(y / self.cell_size))

    def cell_center(self, col: float, row: float) -> Tuple[float, float]:
        half = self.cell_size / 2.0
        return col * self.cell_size + half, row * self.cell_size + half

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def index(self, col: int, row: int) -> int:
        return col + row * self.cols

    def cell_at(self, col: int, row: int) -> BeliefCell:
        if not self.in_bounds(col, row):
            return BeliefCell.UNKNOWN
        return BeliefCell(int(self._cells[col + row * self.cols]))

    def cell_at_world(self, x: float, y: float) -> BeliefCell:
        return self.cell_at(*self.world_to_cell(x, y))

    def count(self, state: BeliefCell) -> int:
        return int(np.count_nonzero(self._cells == int(state)))

    def explored_fraction(self) -> float:
        """Share of cells that are no longer UNKNOWN."""
        return float(np.count_nonzero(self._cells)) / float(self.size)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def clear(self) -> None:
        self._cells.fill(BeliefCell.UNKNOWN)
        logger.debug("Belief grid cleared (%dx%d)", self.cols, self.rows)

    def update(self, pose: Pose, hits: Iterable[RangeHit], robot_radius: float = ROBOT_RADIUS) -> None:
        """Fold one sweep of range returns taken at ``pose`` into the grid.

        Each ray marks the cells it crosses FREE in half-cell steps. Rays that
        hit stop marking one step short of the end point, and their end point
        is marked OCCUPIED unless it lies within the robot body.
        """
        step_len = self.cell_size / 2.0
        for hit in hits:
            dx = hit.point.x - pose.x
            dy = hit.point.y - pose.y
            steps = max(abs(dx), abs(dy)) / step_len
            if steps == 0.0:
                continue

            x_inc = dx / steps
            y_inc = dy / steps
            x, y = pose.x, pose.y
            for i in range(int(math.ceil(steps))):
                if hit.hit and i > steps - 2:
                    break
                self._mark(x, y, BeliefCell.FREE)
                x += x_inc
                y += y_inc

            if hit.hit and hit.distance > robot_radius:
                self._mark(hit.point.x, hit.point.y, BeliefCell.OCCUPIED)

    def _mark(self, x: float, y: float, state: BeliefCell) -> None:
        col, row = self.world_to_cell(x, y)
        if not self.in_bounds(col, row):
            return
        idx = col + row * self.cols
        if self._cells[idx] != BeliefCell.OCCUPIED or state == BeliefCell.OCCUPIED:
            self._cells[idx] = state
