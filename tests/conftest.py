import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hermite_motion import QuinticWaypoint, Trajectory, vec3


@pytest.fixture
def straight_line():
    """Origin to (0,1,0), at rest at both ends."""
    return Trajectory([
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
    ])


@pytest.fixture
def opposite_starts():
    """Leaves the origin moving north at 1 u/s and stops at (0,1,0)."""
    return Trajectory([
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
    ])


@pytest.fixture
def curve():
    return Trajectory([
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(1.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(1.0, 1.0, 0.0), vec3(1.0, 0.0, 0.0), vec3(0.0, -1.0, 0.0)),
    ])


@pytest.fixture
def stop_and_go():
    """Moving north, stop at (0,1,0), then move north again through (0,2,0)."""
    return Trajectory([
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(0.0, 2.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0)),
    ])
