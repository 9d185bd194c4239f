"""
Trajectory evaluation over unit-spaced waypoints.

Unified API:
    Trajectory(waypoints).position_at(t)        # Scalar query -> Vector | None
    Trajectory(waypoints).sample(query, order)  # Batched query -> (M, D) array

The query parameter t is "waypoint index plus fractional offset": t=1.25 lies a
quarter of the way from waypoint 1 to waypoint 2. The basis family follows
from the waypoint kind:
    - CubicWaypoint   -> position, velocity
    - QuinticWaypoint -> position, velocity, acceleration
    - SepticWaypoint  -> position, velocity, acceleration, jerk

Module-level helpers accept any sequence of waypoints:
    position_at, velocity_at, acceleration_at, jerk_at, get_segment

A plain sequence is validated on every call, which costs O(N). For repeated
queries build the Trajectory once and pass it (or call its methods) instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from ._core import (
    ArrayLike,
    Backend,
    BasisFamily,
    Boundary,
    EmptyTrajectoryError,
    ParameterDomainError,
    all_finite,
    ceil,
    floor,
    stack,
    to_backend,
    to_index,
)
from .hermite import basis_weights, boundary_conditions
from .vector import Vector
from .waypoint import Waypoint, make_waypoint

logger = logging.getLogger(__name__)


# =============================================================================
# Segment
# =============================================================================


@dataclass(frozen=True, slots=True)
class Segment:
    """Waypoint pair bounding a query, with the local parameter t in [0, 1)."""

    t: float
    preceding: Waypoint
    succeeding: Waypoint

    def boundary(self, side: Boundary) -> Waypoint:
        return self.preceding if side == Boundary.START else self.succeeding

    def blend(self, order: int = 0) -> Vector:
        """Weighted sum of the boundary states for the given derivative order."""
        family = self.preceding.family
        weights = basis_weights(family, self.t, order)
        result = None
        for weight, (state_order, side) in zip(weights, boundary_conditions(family)):
            term = self.boundary(side).state(state_order) * weight
            result = term if result is None else result + term
        return result


# =============================================================================
# Trajectory
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class Trajectory:
    """
    Hermite trajectory through an ordered sequence of waypoints.

    Waypoint i sits at parameter t=i. Consecutive waypoints are blended with
    the basis family of the waypoint kind, so a trajectory built from
    QuinticWaypoint has continuous position, velocity, and acceleration.

    Example:
        >>> traj = Trajectory([
        ...     QuinticWaypoint(vec3(0, 0, 0), vec3(0, 0, 0), vec3(0, 0, 0)),
        ...     QuinticWaypoint(vec3(0, 1, 0), vec3(0, 0, 0), vec3(0, 0, 0)),
        ... ])
        >>> str(traj.position_at(0.5))
        '(0,0.5,0)'
        >>> traj.sample(np.linspace(0.0, 1.0, 5), order=1).shape
        (5, 3)
    """

    waypoints: Tuple[Waypoint, ...]
    family: Optional[BasisFamily] = field(init=False)

    def __post_init__(self) -> None:
        waypoints = tuple(self.waypoints)
        object.__setattr__(self, "waypoints", waypoints)

        if not waypoints:
            object.__setattr__(self, "family", None)
            logger.debug("Created empty trajectory")
            return

        first = waypoints[0]
        for i, waypoint in enumerate(waypoints):
            if not isinstance(waypoint, Waypoint):
                raise TypeError(f"waypoints[{i}] is {type(waypoint).__name__}, expected a Waypoint")
            if type(waypoint) is not type(first):
                raise ValueError(
                    f"Mixed waypoint kinds: waypoints[0] is {type(first).__name__}, "
                    f"waypoints[{i}] is {type(waypoint).__name__}"
                )
            if waypoint.dim != first.dim:
                raise ValueError(f"Dimension mismatch: waypoints[{i}] has {waypoint.dim}, expected {first.dim}")
            if waypoint.backend != first.backend:
                raise ValueError(f"Backend mismatch: {first.backend} vs {waypoint.backend}")

        object.__setattr__(self, "family", first.family)
        logger.debug(
            "Created %s trajectory: %d waypoints, dim=%d, backend=%s",
            first.family.value,
            len(waypoints),
            first.dim,
            first.backend,
        )

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_arrays(
        cls,
        positions: ArrayLike,
        velocities: ArrayLike,
        accelerations: Optional[ArrayLike] = None,
        jerks: Optional[ArrayLike] = None,
    ) -> "Trajectory":
        """
        Create from stacked states, one row per waypoint.

        Args:
            positions: (N, D)
            velocities: (N, D)
            accelerations: (N, D), selects the quintic family
            jerks: (N, D), selects the septic family (requires accelerations)

        Returns:
            Trajectory of N waypoints
        """
        if jerks is not None and accelerations is None:
            raise ValueError("jerks require accelerations")

        columns = [positions, velocities]
        if accelerations is not None:
            columns.append(accelerations)
        if jerks is not None:
            columns.append(jerks)

        n = len(positions)
        for column in columns[1:]:
            if len(column) != n:
                raise ValueError(f"All state arrays need {n} rows, got {len(column)}")

        return cls([make_waypoint(*(column[i] for column in columns)) for i in range(n)])

    # -------------------------------------------------------------------------
    # Scalar Queries
    # -------------------------------------------------------------------------

    def get_segment(self, t: float) -> Optional[Segment]:
        """
        Select the waypoint pair bounding t.

        Returns None for an empty trajectory. At an exact integer t both sides
        of the segment are the same waypoint and the local parameter is 0.

        Raises:
            ParameterDomainError: If t is negative, non-finite, or past the
                last waypoint
        """
        n = len(self.waypoints)
        if n == 0:
            return None

        t = _check_parameter(t, n)
        prec_idx = math.floor(t)
        succ_idx = math.ceil(t)
        return Segment(t - prec_idx, self.waypoints[prec_idx], self.waypoints[succ_idx])

    def evaluate(self, t: float, order: int = 0) -> Optional[Vector]:
        """Derivative of the given order at t (0=position, 1=velocity, ...)."""
        segment = self.get_segment(t)
        if segment is None:
            logger.debug("No value at t=%s: trajectory is empty", t)
            return None
        return segment.blend(order)

    def position_at(self, t: float) -> Optional[Vector]:
        return self.evaluate(t, 0)

    def velocity_at(self, t: float) -> Optional[Vector]:
        return self.evaluate(t, 1)

    def acceleration_at(self, t: float) -> Optional[Vector]:
        """Acceleration at t (quintic and septic waypoints only)."""
        return self.evaluate(t, 2)

    def jerk_at(self, t: float) -> Optional[Vector]:
        """Jerk at t (septic waypoints only)."""
        return self.evaluate(t, 3)

    def state_at(self, t: float) -> Optional[Waypoint]:
        """
        Every state the waypoint kind carries, from a single segment lookup.

        Returns a waypoint of the trajectory's kind, e.g. a QuinticWaypoint
        holding the interpolated position, velocity, and acceleration.
        """
        segment = self.get_segment(t)
        if segment is None:
            logger.debug("No value at t=%s: trajectory is empty", t)
            return None
        kind = type(segment.preceding)
        return kind(*(segment.blend(order) for order in range(len(kind.state_fields))))

    # -------------------------------------------------------------------------
    # Batched Queries
    # -------------------------------------------------------------------------

    def sample(self, query: Union[Sequence[float], ArrayLike], order: int = 0) -> ArrayLike:
        """
        Vectorized evaluation at many parameters.

        Args:
            query: Parameters (M,), each in [0, len(self) - 1]
            order: Derivative order (0=position, 1=velocity, ...)

        Returns:
            (M, D) array on the waypoints' backend

        Raises:
            EmptyTrajectoryError: If the trajectory has no waypoints
            ParameterDomainError: If any parameter is out of range
            ValueError: If query has more than one dimension
        """
        n = len(self.waypoints)
        if n == 0:
            raise EmptyTrajectoryError("Cannot sample an empty trajectory")

        reference = self.waypoints[0].position
        if self.backend == "torch":
            query = to_backend(query, "torch", dtype=reference.dtype, device=reference.device)
        else:
            dtype = reference.dtype if np.issubdtype(reference.dtype, np.floating) else np.float64
            query = to_backend(query, "numpy", dtype=dtype)
        if query.ndim > 1:
            raise ValueError(f"Query parameters must have shape (M,), got {tuple(query.shape)}")
        query = query.reshape(-1)

        if query.shape[0] > 0:
            if not all_finite(query) or float(query.min()) < 0 or float(ceil(query).max()) > n - 1:
                raise ParameterDomainError(
                    f"Query parameters must lie in [0, {n - 1}], "
                    f"got range [{float(query.min())}, {float(query.max())}]"
                )

        base = floor(query)
        prec_idx = to_index(base)
        succ_idx = to_index(ceil(query))
        u = (query - base)[:, None]

        states = [
            stack([waypoint.state(k).components for waypoint in self.waypoints])
            for k in range(len(type(self.waypoints[0]).state_fields))
        ]

        weights = basis_weights(self.family, u, order)
        result = None
        for weight, (state_order, side) in zip(weights, boundary_conditions(self.family)):
            idx = prec_idx if side == Boundary.START else succ_idx
            term = weight * states[state_order][idx]
            result = term if result is None else result + term
        return result

    def linspace(self, num: int) -> ArrayLike:
        """num evenly spaced parameters covering the whole trajectory."""
        end = max(len(self.waypoints) - 1, 0)
        if self.backend == "torch":
            reference = self.waypoints[0].position
            return torch.linspace(0.0, float(end), num, dtype=reference.dtype, device=reference.device)
        return np.linspace(0.0, float(end), num)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> Optional[int]:
        return self.waypoints[0].dim if self.waypoints else None

    @property
    def backend(self) -> Optional[Backend]:
        return self.waypoints[0].backend if self.waypoints else None

    @property
    def duration(self) -> float:
        """Length of the valid parameter range."""
        return float(max(len(self.waypoints) - 1, 0))

    def __len__(self) -> int:
        return len(self.waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    def __getitem__(self, idx: int) -> Waypoint:
        return self.waypoints[idx]

    def __repr__(self) -> str:
        family = self.family.value if self.family else None
        return f"Trajectory(n={len(self.waypoints)}, family={family}, dim={self.dim}, backend={self.backend})"


# =============================================================================
# Module-level API
# =============================================================================


def _as_trajectory(waypoints: Union[Trajectory, Iterable[Waypoint]]) -> Trajectory:
    """Reuse a Trajectory as is; wrap (and validate) anything else."""
    return waypoints if isinstance(waypoints, Trajectory) else Trajectory(waypoints)


def get_segment(waypoints: Union[Trajectory, Iterable[Waypoint]], t: float) -> Optional[Segment]:
    return _as_trajectory(waypoints).get_segment(t)


def position_at(waypoints: Union[Trajectory, Iterable[Waypoint]], t: float) -> Optional[Vector]:
    """
    Position at t, or None if there are no waypoints.

    A plain sequence is re-validated on each call; pass a Trajectory built
    once when querying the same waypoints repeatedly.
    """
    return _as_trajectory(waypoints).position_at(t)


def velocity_at(waypoints: Union[Trajectory, Iterable[Waypoint]], t: float) -> Optional[Vector]:
    """Velocity at t, or None if there are no waypoints."""
    return _as_trajectory(waypoints).velocity_at(t)


def acceleration_at(waypoints: Union[Trajectory, Iterable[Waypoint]], t: float) -> Optional[Vector]:
    """Acceleration at t, or None if there are no waypoints."""
    return _as_trajectory(waypoints).acceleration_at(t)


def jerk_at(waypoints: Union[Trajectory, Iterable[Waypoint]], t: float) -> Optional[Vector]:
    """Jerk at t, or None if there are no waypoints."""
    return _as_trajectory(waypoints).jerk_at(t)


# =============================================================================
# Internal: Parameter Validation
# =============================================================================


def _check_parameter(t, n: int) -> float:
    """Coerce t to float and check it lies in [0, n - 1]."""
    if isinstance(t, (np.ndarray, torch.Tensor)) and t.ndim != 0:
        raise ParameterDomainError(f"Scalar query expected, got shape {tuple(t.shape)}; use sample()")
    t = float(t)
    if not math.isfinite(t):
        raise ParameterDomainError(f"Query parameter must be finite, got {t}")
    if t < 0.0:
        raise ParameterDomainError(f"Query parameter must be non-negative, got {t}")
    if math.ceil(t) > n - 1:
        raise ParameterDomainError(f"Query parameter {t} is past the last waypoint (index {n - 1})")
    return t
