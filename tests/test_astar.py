import math
import time

import numpy as np

from slam_sim.mapping.belief_grid import BeliefGrid
from slam_sim.planning.astar import AStarPlanner, path_cost, proximity_penalty
from slam_sim.types import BeliefCell, Point


def _paint(grid: BeliefGrid, state: BeliefCell, cells) -> None:
    for col, row in cells:
        grid._cells[grid.index(col, row)] = state


def test_empty_grid_path_is_octile_optimal() -> None:
    grid = BeliefGrid(200.0, 100.0, 10.0)
    planner = AStarPlanner(grid)
    path = planner.find_path(5.0, 5.0, 95.0, 45.0)
    assert path[0] == Point(5.0, 5.0)
    assert path[-1] == Point(95.0, 45.0)
    # (0,0) -> (9,4): 4 diagonals + 5 straight
    expected = 4 * math.sqrt(2.0) + 5
    assert abs(path_cost(path, grid.cell_size) - expected) < 1e-9


def test_start_equals_goal() -> None:
    grid = BeliefGrid(100.0, 100.0, 10.0)
    path = AStarPlanner(grid).find_path(12.0, 18.0, 17.0, 11.0)
    assert path == [Point(15.0, 15.0)]


def test_occupied_or_out_of_bounds_endpoints_rejected() -> None:
    grid = BeliefGrid(100.0, 100.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(5, 5)])
    planner = AStarPlanner(grid)
    assert planner.find_path(5.0, 5.0, 55.0, 55.0) == []
    assert planner.find_path(55.0, 55.0, 55.0, 55.0) == []
    assert planner.find_path(5.0, 5.0, 150.0, 50.0) == []
    assert planner.find_path(5.0, 5.0, -1.0, 50.0) == []
    assert planner.find_path(-5.0, 5.0, 55.0, 45.0) == []


def test_unreachable_goal_returns_empty() -> None:
    grid = BeliefGrid(100.0, 100.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(5, r) for r in range(10)])
    assert AStarPlanner(grid).find_path(15.0, 15.0, 85.0, 15.0) == []


def test_no_corner_cutting() -> None:
    grid = BeliefGrid(200.0, 100.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(1, 0)])
    path = AStarPlanner(grid).find_path(5.0, 5.0, 15.0, 15.0)
    assert path == [Point(5.0, 5.0), Point(5.0, 15.0), Point(15.0, 15.0)]


def test_proximity_penalty_window() -> None:
    occ = np.zeros((11, 11), dtype=bool)
    occ[5, 5] = True
    pen = proximity_penalty(occ, radius_cells=2, weight=5.0)
    assert pen[5, 5] == 5.0
    assert pen[3, 7] == 5.0
    assert pen[5, 8] == 0.0
    assert pen.sum() == 25 * 5.0


def test_path_keeps_clearance_from_walls() -> None:
    grid = BeliefGrid(300.0, 100.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(c, 0) for c in range(30)])
    path = AStarPlanner(grid).find_path(25.0, 15.0, 275.0, 15.0)
    assert path
    rows = [int(p.y // 10) for p in path]
    assert max(rows) >= 3
    assert rows[len(rows) // 2] >= 3


def test_planner_is_deterministic_and_read_only() -> None:
    grid = BeliefGrid(300.0, 200.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(15, r) for r in range(2, 20)])
    _paint(grid, BeliefCell.FREE, [(c, 1) for c in range(30)])
    before = grid.cells.copy()
    planner = AStarPlanner(grid)
    a = planner.find_path(25.0, 105.0, 275.0, 105.0)
    b = planner.find_path(25.0, 105.0, 275.0, 105.0)
    assert a and a == b
    assert np.array_equal(before, grid.cells)
    assert all(grid.cell_at_world(p.x, p.y) != BeliefCell.OCCUPIED for p in a)


def test_default_map_search_is_fast() -> None:
    # 100x80 cells, wall at col 50 with a gap in the bottom rows
    grid = BeliefGrid(1000.0, 800.0, 10.0)
    _paint(grid, BeliefCell.OCCUPIED, [(50, r) for r in range(60)])
    planner = AStarPlanner(grid)

    best = float("inf")
    for _ in range(5):
        t0 = time.perf_counter()
        path = planner.find_path(15.0, 405.0, 985.0, 405.0)
        best = min(best, time.perf_counter() - t0)
    assert path[0] == Point(15.0, 405.0)
    assert path[-1] == Point(985.0, 405.0)
    assert all(p.y > 600.0 for p in path if p.x == 505.0)
    assert best < 0.05
