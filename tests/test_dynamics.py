import math

import numpy as np

from slam_sim.sim.dynamics import RobotKinematics
from slam_sim.types import DriveMode, Point, Wall


def test_straight_motion() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0, max_speed=5.0)
    for _ in range(10):
        robot.apply_input(forward=1)
        robot.update([])
    pose = robot.pose
    assert abs(pose.x - 50.0) < 1e-9
    assert abs(pose.y) < 1e-9
    assert robot.mode == DriveMode.MANUAL


def test_turn_angle_wrap() -> None:
    robot = RobotKinematics(0.0, 0.0, 3.12, max_turn=0.05)
    robot.apply_input(turn=1)
    robot.update([])
    assert -math.pi <= robot.pose.theta < math.pi
    assert robot.pose.theta < 0.0


def test_zero_drift_keeps_poses_identical() -> None:
    robot = RobotKinematics(100.0, 100.0, 0.0, drift=0.0, rng=np.random.default_rng(1))
    for t in range(200):
        robot.apply_input(forward=1, turn=1 if t % 40 < 20 else -1)
        robot.update([])
        assert robot.believed_pose == robot.pose


def test_drift_diverges_from_truth() -> None:
    robot = RobotKinematics(100.0, 100.0, 0.0, drift=50.0, rng=np.random.default_rng(1))
    for _ in range(200):
        robot.apply_input(forward=1, turn=1)
        robot.update([])
    true_pose, believed = robot.pose, robot.believed_pose
    assert math.hypot(true_pose.x - believed.x, true_pose.y - believed.y) > 1e-6


def test_collision_freezes_translation_not_rotation() -> None:
    robot = RobotKinematics(100.0, 100.0, 0.0, max_speed=5.0, max_turn=0.05, drift=10.0)
    wall = Wall(Point(105.0, 80.0), Point(105.0, 120.0))
    robot.apply_input(forward=1, turn=1)
    believed_before = robot.believed_pose
    hit = robot.update([wall])
    assert hit
    assert (robot.pose.x, robot.pose.y) == (100.0, 100.0)
    assert abs(robot.pose.theta - 0.05) < 1e-12
    # believed translation freezes too; only its heading moves
    assert (robot.believed_pose.x, robot.believed_pose.y) == (believed_before.x, believed_before.y)
    assert robot.believed_pose.theta != believed_before.theta


def test_turns_in_place_before_driving() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0, max_turn=0.05)
    robot.set_path([Point(0.0, 100.0)])
    robot.update([])
    assert robot.forward_speed == 0.0
    assert robot.turn_speed == 0.05
    assert robot.pose.x == 0.0 and robot.pose.y == 0.0
    assert robot.mode == DriveMode.AUTONOMOUS


def test_final_waypoint_clears_path() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0)
    robot.set_path([Point(5.0, 0.0)])
    robot.update([])
    assert robot.path is None
    assert robot.forward_speed == 0.0 and robot.turn_speed == 0.0
    assert robot.mode == DriveMode.IDLE


def test_follows_path_to_goal() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0, max_speed=5.0)
    robot.set_path([Point(100.0, 0.0), Point(200.0, 0.0)])
    for _ in range(80):
        robot.update([])
        if robot.path is None:
            break
    assert robot.path is None
    assert abs(robot.pose.x - 200.0) < 20.0


def test_manual_input_preempts_path() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0, max_speed=5.0)
    robot.set_path([Point(100.0, 0.0)])
    robot.apply_input(forward=-1)
    assert robot.path is None
    assert robot.forward_speed == -5.0
    assert robot.mode == DriveMode.MANUAL


def test_idle_input_keeps_path() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0)
    robot.set_path([Point(100.0, 0.0)])
    robot.apply_input()
    assert robot.path is not None


def test_trail_recorded_every_third_tick() -> None:
    robot = RobotKinematics(0.0, 0.0, 0.0)
    for _ in range(9):
        robot.update([])
    true_trail, believed_trail = robot.trails()
    assert len(true_trail) == 3 and len(believed_trail) == 3
    robot.reset_trails()
    assert robot.trails() == ([], [])
