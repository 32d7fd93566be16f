from __future__ import annotations

# World (pixel-equivalent units)
WORLD_WIDTH: float = 1000.0
WORLD_HEIGHT: float = 800.0
GRID_CELL_SIZE: float = 10.0
BOUNDARY_INSET: float = 50.0
MIN_CUSTOM_WALL_LENGTH: float = 10.0

# Range sensor
SENSOR_NUM_RAYS: int = 90
SENSOR_MAX_RAYS: int = 720
SENSOR_MAX_RANGE: float = 600.0
SENSOR_NOISE_PERCENT: float = 2.0

# Robot
ROBOT_RADIUS: float = 20.0
ROBOT_MAX_SPEED: float = 5.0
ROBOT_MAX_TURN: float = 0.05
ROBOT_MAX_SPEED_MULTIPLIER: float = 20.0
ARRIVAL_RADIUS: float = 15.0
STEERING_GAIN: float = 0.1
TURN_IN_PLACE_RAD: float = 0.5
CRUISE_FRACTION: float = 0.8

# Odometry drift
DRIFT_SCALE: float = 0.002
TURN_NOISE_FACTOR: float = 2.0
SPEED_NOISE_FACTOR: float = 3.0
HEADING_JITTER_FACTOR: float = 0.5
MAX_DRIFT: float = 100.0

# Trails
TRAIL_EVERY_TICKS: int = 3
TRAIL_MAX_LENGTH: int = 800

# Planner
PROXIMITY_RADIUS_CELLS: int = 2
PROXIMITY_PENALTY: float = 5.0

# Frontier exploration
FRONTIER_MIN_CLUSTER: int = 3
FRONTIER_DISTANCE_WEIGHT: float = 0.1
EXPLORE_COOLDOWN_TICKS: int = 30

# Stats
STATS_MIN_STEP: float = 0.1
