import pytest

from slam_sim.mapping.belief_grid import BeliefGrid
from slam_sim.sim.lidar import RangeSensor
from slam_sim.types import BeliefCell, Point, Pose, RangeHit, Wall


def test_grid_dimensions() -> None:
    grid = BeliefGrid(1000.0, 800.0, 10.0)
    assert (grid.cols, grid.rows) == (100, 80)
    assert grid.cells.shape == (8000,)
    assert grid.as_array().shape == (80, 100)
    assert grid.count(BeliefCell.UNKNOWN) == 8000


def test_single_scan_marks_free_then_occupied() -> None:
    grid = BeliefGrid(1000.0, 800.0, 10.0)
    sensor = RangeSensor(rays=90, max_range=600.0, noise_percent=0.0)
    pose = Pose(100.0, 300.0, 0.0)
    hits = sensor.scan(pose, [Wall(Point(300.0, 100.0), Point(300.0, 500.0))])
    grid.update(pose, hits, robot_radius=20.0)

    for x in range(100, 300, 10):
        assert grid.cell_at_world(float(x), 300.0) == BeliefCell.FREE
    assert grid.cell_at(30, 30) == BeliefCell.OCCUPIED
    assert grid.cell_at_world(300.0, 300.0) == BeliefCell.OCCUPIED


def test_occupied_is_sticky() -> None:
    grid = BeliefGrid(1000.0, 800.0, 10.0)
    pose = Pose(100.0, 305.0, 0.0)
    grid.update(pose, [RangeHit(Point(300.0, 305.0), 200.0, 0.0, True)])
    assert grid.cell_at(30, 30) == BeliefCell.OCCUPIED

    # a later max-range ray straight through the wall cell
    grid.update(pose, [RangeHit(Point(700.0, 305.0), 600.0, 0.0, False)])
    assert grid.cell_at(30, 30) == BeliefCell.OCCUPIED
    assert grid.cell_at(40, 30) == BeliefCell.FREE

    grid.clear()
    assert grid.cell_at(30, 30) == BeliefCell.UNKNOWN
    assert grid.explored_fraction() == 0.0


def test_miss_marks_through_endpoint_region() -> None:
    grid = BeliefGrid(200.0, 100.0, 10.0)
    grid.update(Pose(15.0, 55.0, 0.0), [RangeHit(Point(115.0, 55.0), 100.0, 0.0, False)])
    assert grid.count(BeliefCell.OCCUPIED) == 0
    assert grid.cell_at(10, 5) == BeliefCell.FREE


def test_hit_inside_robot_body_not_occupied() -> None:
    grid = BeliefGrid(200.0, 100.0, 10.0)
    grid.update(Pose(50.0, 50.0, 0.0), [RangeHit(Point(65.0, 50.0), 15.0, 0.0, True)], robot_radius=20.0)
    assert grid.count(BeliefCell.OCCUPIED) == 0


def test_out_of_bounds_ignored() -> None:
    grid = BeliefGrid(200.0, 100.0, 10.0)
    grid.update(Pose(5.0, 5.0, 0.0), [RangeHit(Point(-95.0, -95.0), 141.4, 3.9, True)])
    assert grid.count(BeliefCell.OCCUPIED) == 0
    assert grid.cell_at(-1, 0) == BeliefCell.UNKNOWN
    assert grid.cell_at(0, 0) == BeliefCell.FREE


def test_views_are_read_only() -> None:
    grid = BeliefGrid(100.0, 100.0, 10.0)
    with pytest.raises(ValueError):
        grid.cells[0] = 1
    with pytest.raises(ValueError):
        grid.as_array()[0, 0] = 1
