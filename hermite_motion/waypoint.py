"""
Waypoint kinds.

A waypoint bundles a position with the derivative states that its basis
family needs as boundary conditions:

    - CubicWaypoint:   position, velocity                        -> cubic
    - QuinticWaypoint: position, velocity, acceleration          -> quintic
    - SepticWaypoint:  position, velocity, acceleration, jerk    -> septic

All kinds share the Waypoint interface (``family``, ``states``, ``state(order)``),
which is all the trajectory evaluator relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple, Type

from ._core import BasisFamily, Backend, DERIVATIVE_NAMES, UnsupportedDerivativeError
from .vector import Vector


class Waypoint:
    """Base class for waypoint kinds; subclasses are frozen dataclasses."""

    __slots__ = ()

    family: ClassVar[BasisFamily]
    state_fields: ClassVar[Tuple[str, ...]]

    def _coerce_states(self) -> None:
        """Wrap raw arrays in Vector and check that all states agree."""
        for name in self.state_fields:
            object.__setattr__(self, name, Vector.coerce(getattr(self, name)))

        reference = self.position
        for name in self.state_fields[1:]:
            state = getattr(self, name)
            if state.backend != reference.backend:
                raise ValueError(
                    f"{type(self).__name__}.{name} backend {state.backend} "
                    f"does not match position backend {reference.backend}"
                )
            if state.dim != reference.dim:
                raise ValueError(
                    f"{type(self).__name__}.{name} has dimension {state.dim}, "
                    f"expected {reference.dim}"
                )

    @property
    def states(self) -> Tuple[Vector, ...]:
        """Boundary states in increasing derivative order."""
        return tuple(getattr(self, name) for name in self.state_fields)

    def state(self, order: int) -> Vector:
        """State of the given derivative order (0=position, 1=velocity, ...)."""
        if not 0 <= order < len(self.state_fields):
            raise UnsupportedDerivativeError(
                f"{type(self).__name__} carries no {_order_name(order)} state"
            )
        return getattr(self, self.state_fields[order])

    @property
    def dim(self) -> int:
        return self.position.dim

    @property
    def backend(self) -> Backend:
        return self.position.backend


@dataclass(frozen=True, slots=True)
class CubicWaypoint(Waypoint):
    """2-state waypoint blended with the cubic basis."""

    position: Vector
    velocity: Vector

    family: ClassVar[BasisFamily] = BasisFamily.CUBIC
    state_fields: ClassVar[Tuple[str, ...]] = ("position", "velocity")

    def __post_init__(self) -> None:
        self._coerce_states()


@dataclass(frozen=True, slots=True)
class QuinticWaypoint(Waypoint):
    """3-state waypoint blended with the quintic basis."""

    position: Vector
    velocity: Vector
    acceleration: Vector

    family: ClassVar[BasisFamily] = BasisFamily.QUINTIC
    state_fields: ClassVar[Tuple[str, ...]] = ("position", "velocity", "acceleration")

    def __post_init__(self) -> None:
        self._coerce_states()


@dataclass(frozen=True, slots=True)
class SepticWaypoint(Waypoint):
    """4-state waypoint blended with the septic basis."""

    position: Vector
    velocity: Vector
    acceleration: Vector
    jerk: Vector

    family: ClassVar[BasisFamily] = BasisFamily.SEPTIC
    state_fields: ClassVar[Tuple[str, ...]] = ("position", "velocity", "acceleration", "jerk")

    def __post_init__(self) -> None:
        self._coerce_states()


WAYPOINT_TYPES: Dict[BasisFamily, Type[Waypoint]] = {
    BasisFamily.CUBIC: CubicWaypoint,
    BasisFamily.QUINTIC: QuinticWaypoint,
    BasisFamily.SEPTIC: SepticWaypoint,
}


def waypoint_type(family) -> Type[Waypoint]:
    """Waypoint class for a basis family."""
    return WAYPOINT_TYPES[BasisFamily(family)]


def make_waypoint(*states) -> Waypoint:
    """
    Build a waypoint, choosing its kind from the number of states given.

    Example:
        >>> make_waypoint(p, v)          # CubicWaypoint
        >>> make_waypoint(p, v, a)       # QuinticWaypoint
        >>> make_waypoint(p, v, a, j)    # SepticWaypoint
    """
    for cls in WAYPOINT_TYPES.values():
        if len(cls.state_fields) == len(states):
            return cls(*states)
    raise ValueError(f"Expected 2, 3, or 4 states (position first), got {len(states)}")


def _order_name(order: int) -> str:
    if 0 <= order < len(DERIVATIVE_NAMES):
        return DERIVATIVE_NAMES[order]
    return f"order-{order} derivative"
