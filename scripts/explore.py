from __future__ import annotations

import argparse
import logging
import time

from slam_sim.config import SimConfig
from slam_sim.session import SlamSession
from slam_sim.utils import load_sim_config


def run_explore(cfg: SimConfig, ticks: int = 5000) -> None:
    logger = logging.getLogger("explore")
    session = SlamSession(cfg)
    session.set_exploring(True)

    t0 = time.perf_counter()
    stats = session.run(ticks)
    elapsed = time.perf_counter() - t0

    pose = session.robot.pose
    believed = session.robot.believed_pose
    logger.info("Finished after %d ticks in %.2fs", stats.ticks, elapsed)
    print(f"explored:   {100.0 * session.explored_fraction():.1f}%")
    print(f"distance:   {stats.distance:.0f}")
    print(f"collisions: {stats.collisions}")
    print(f"pose:       ({pose.x:.1f}, {pose.y:.1f}, {pose.theta:.2f})")
    print(f"believed:   ({believed.x:.1f}, {believed.y:.1f}, {believed.theta:.2f})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Headless autonomous exploration run")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--ticks", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--drift", type=float, default=None)
    parser.add_argument("--noise", type=float, default=None, help="sensor noise percent")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("overrides", nargs="*", help="dotlist overrides, e.g. sensor.rays=180")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    overrides = list(args.overrides)
    if args.seed is not None:
        overrides.append(f"seed={args.seed}")
    if args.drift is not None:
        overrides.append(f"robot.drift={args.drift}")
    if args.noise is not None:
        overrides.append(f"sensor.noise_percent={args.noise}")

    run_explore(load_sim_config(args.config, overrides), ticks=args.ticks)
