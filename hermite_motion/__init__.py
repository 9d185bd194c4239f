"""
Hermite trajectory evaluation supporting both NumPy and PyTorch backends.

API Styles
----------
1. Basis functions (pure, element-wise over floats or arrays):
   - h3, h3p                     cubic value / 1st derivative
   - h5, h5p, h5pp               quintic value / 1st / 2nd derivative
   - h7, h7p, h7pp, h7ppp        septic value / 1st / 2nd / 3rd derivative
   - basis(family, t, n, order)  generic dispatch

2. Trajectory class (object-oriented evaluation):
   - Trajectory(waypoints).position_at(t), velocity_at, acceleration_at, jerk_at
   - Trajectory(waypoints).sample(query_times, order) for batched queries

3. Module-level helpers over any sequence of waypoints:
   - position_at(waypoints, t), velocity_at, acceleration_at, jerk_at

Usage Examples
--------------
Quintic (acceleration-continuous) trajectory:
    traj = Trajectory([
        QuinticWaypoint(vec3(0, 0, 0), vec3(0, 1, 0), vec3(0, 0, 0)),
        QuinticWaypoint(vec3(0, 1, 0), vec3(0, 0, 0), vec3(0, 0, 0)),
    ])
    traj.velocity_at(0.5)        # Vector([0.0, 1.4375, 0.0])
    position_at([], 0.5)         # None

Batched sampling:
    positions = traj.sample(np.linspace(0.0, 1.0, 101))  # (101, 3)

Conventions
-----------
- Waypoint i sits at parameter t=i; t ranges over [0, len(waypoints) - 1]
- Basis index order: start states by increasing derivative order, then end
  states by decreasing derivative order (quintic: p0, v0, a0, a1, v1, p1)
- Empty trajectories yield None; out-of-range parameters raise ParameterDomainError
"""

# Types, constants, and errors
from ._core import (
    ArrayLike,
    Backend,
    BasisFamily,
    Boundary,
    EPS,
    EmptyTrajectoryError,
    InvalidBasisIndexError,
    ParameterDomainError,
    UnsupportedDerivativeError,
)

# Vector algebra
from .vector import Vector, vec2, vec3, vecn

# Hermite basis families
from .hermite import (
    basis,
    basis_weights,
    boundary_condition,
    boundary_conditions,
    h3,
    h3p,
    h5,
    h5p,
    h5pp,
    h7,
    h7p,
    h7pp,
    h7ppp,
)

# Waypoints
from .waypoint import (
    CubicWaypoint,
    QuinticWaypoint,
    SepticWaypoint,
    Waypoint,
    make_waypoint,
    waypoint_type,
)

# Trajectory evaluation
from .trajectory import (
    Segment,
    Trajectory,
    acceleration_at,
    get_segment,
    jerk_at,
    position_at,
    velocity_at,
)

__all__ = [
    # Types
    "ArrayLike",
    "Backend",
    "BasisFamily",
    "Boundary",
    # Constants
    "EPS",
    # Errors
    "EmptyTrajectoryError",
    "InvalidBasisIndexError",
    "ParameterDomainError",
    "UnsupportedDerivativeError",
    # Vector
    "Vector",
    "vec2",
    "vec3",
    "vecn",
    # Basis - generic
    "basis",
    "basis_weights",
    "boundary_condition",
    "boundary_conditions",
    # Basis - cubic
    "h3",
    "h3p",
    # Basis - quintic
    "h5",
    "h5p",
    "h5pp",
    # Basis - septic
    "h7",
    "h7p",
    "h7pp",
    "h7ppp",
    # Waypoints
    "Waypoint",
    "CubicWaypoint",
    "QuinticWaypoint",
    "SepticWaypoint",
    "make_waypoint",
    "waypoint_type",
    # Trajectory
    "Segment",
    "Trajectory",
    "get_segment",
    "position_at",
    "velocity_at",
    "acceleration_at",
    "jerk_at",
]

__version__ = "0.1.0"
