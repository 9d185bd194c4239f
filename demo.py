#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Sample a straight-line quintic trajectory and print ``t,position,velocity,acceleration``."""

import argparse
import logging

from hermite_motion import QuinticWaypoint, Trajectory, vec3


def straight_line() -> Trajectory:
    """Two waypoints one unit apart along y, at rest at both ends."""
    return Trajectory([
        QuinticWaypoint(
            position=vec3(0.0, 0.0, 0.0),
            velocity=vec3(0.0, 0.0, 0.0),
            acceleration=vec3(0.0, 0.0, 0.0),
        ),
        QuinticWaypoint(
            position=vec3(0.0, 1.0, 0.0),
            velocity=vec3(0.0, 0.0, 0.0),
            acceleration=vec3(0.0, 0.0, 0.0),
        ),
    ])


def format_rows(traj: Trajectory, steps: int):
    """Yield one CSV line per sample, ``steps + 1`` samples over the whole trajectory."""
    for i in range(steps + 1):
        t = traj.duration * i / steps
        state = traj.state_at(t)
        yield f"{t},{state.position},{state.velocity},{state.acceleration}"


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--steps", type=int, default=1000, help="Number of sampling intervals (default: 1000)")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = ap.parse_args(argv)

    if args.steps < 1:
        ap.error("--steps must be positive")

    logging.basicConfig(
        level=args.log_level.upper(),
        format="[%(name)s] %(levelname)s: %(message)s",
    )

    for row in format_rows(straight_line(), args.steps):
        print(row)


if __name__ == "__main__":
    main()
