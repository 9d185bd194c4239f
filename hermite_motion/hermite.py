"""
Hermite basis families.

Each family is a set of polynomial weight functions h_n(t), t in [0, 1], that
blend the boundary states of a segment (position, velocity, ...) into a
smooth interpolant matching those states exactly at t=0 and t=1.

Families and the boundary state tied to each basis index:
    - cubic   (4):  p0, v0, v1, p1
    - quintic (6):  p0, v0, a0, a1, v1, p1
    - septic  (8):  p0, v0, a0, j0, j1, a1, v1, p1

Direct functions (one per family/derivative order):
    h3, h3p                  # cubic value, 1st derivative
    h5, h5p, h5pp            # quintic value, 1st, 2nd derivative
    h7, h7p, h7pp, h7ppp     # septic value, 1st, 2nd, 3rd derivative

Generic dispatch:
    basis(family, t, n, order=0)
    basis_weights(family, t, order=0)
    boundary_condition(family, n)

Every function accepts a float, a NumPy array, or a PyTorch tensor for t and
evaluates element-wise.
"""

from __future__ import annotations

import numbers
from typing import Dict, Tuple, Union

from ._core import (
    BasisFamily,
    Boundary,
    InvalidBasisIndexError,
    ParamLike,
    UnsupportedDerivativeError,
    horner,
    horner_batch,
)

# A polynomial is stored as integer numerator coefficients in ascending powers
# of t plus a common divisor. Integer numerators keep h_n(0) and h_n(1) exact.
_Poly = Tuple[Tuple[int, ...], int]


# =============================================================================
# Cubic (C1-continuous)
# =============================================================================

_CUBIC: Tuple[_Poly, ...] = (
    ((1, 0, -3, 2), 1),   # 2t^3 - 3t^2 + 1
    ((0, 1, -2, 1), 1),   # t^3 - 2t^2 + t
    ((0, 0, -1, 1), 1),   # t^3 - t^2
    ((0, 0, 3, -2), 1),   # -2t^3 + 3t^2
)

_CUBIC_D1: Tuple[_Poly, ...] = (
    ((0, -6, 6), 1),
    ((1, -4, 3), 1),
    ((0, -2, 3), 1),
    ((0, 6, -6), 1),
)


# =============================================================================
# Quintic (C2-continuous)
# =============================================================================

_QUINTIC: Tuple[_Poly, ...] = (
    ((1, 0, 0, -10, 15, -6), 1),
    ((0, 1, 0, -6, 8, -3), 1),
    ((0, 0, 1, -3, 3, -1), 2),
    ((0, 0, 0, 1, -2, 1), 2),
    ((0, 0, 0, -4, 7, -3), 1),
    ((0, 0, 0, 10, -15, 6), 1),
)

_QUINTIC_D1: Tuple[_Poly, ...] = (
    ((0, 0, -30, 60, -30), 1),
    ((1, 0, -18, 32, -15), 1),
    ((0, 2, -9, 12, -5), 2),
    ((0, 0, 3, -8, 5), 2),
    ((0, 0, -12, 28, -15), 1),
    ((0, 0, 30, -60, 30), 1),
)

_QUINTIC_D2: Tuple[_Poly, ...] = (
    ((0, -60, 180, -120), 1),
    ((0, -36, 96, -60), 1),
    ((1, -9, 18, -10), 1),
    ((0, 3, -12, 10), 1),
    ((0, -24, 84, -60), 1),
    ((0, 60, -180, 120), 1),
)


# =============================================================================
# Septic (C3-continuous, jerk at the boundaries)
# =============================================================================

_SEPTIC: Tuple[_Poly, ...] = (
    ((1, 0, 0, 0, -35, 84, -70, 20), 1),
    ((0, 1, 0, 0, -20, 45, -36, 10), 1),
    ((0, 0, 1, 0, -10, 20, -15, 4), 2),
    ((0, 0, 0, 1, -4, 6, -4, 1), 6),
    ((0, 0, 0, 0, -1, 3, -3, 1), 6),
    ((0, 0, 0, 0, 5, -14, 13, -4), 2),
    ((0, 0, 0, 0, -15, 39, -34, 10), 1),
    ((0, 0, 0, 0, 35, -84, 70, -20), 1),
)

_SEPTIC_D1: Tuple[_Poly, ...] = (
    ((0, 0, 0, -140, 420, -420, 140), 1),
    ((1, 0, 0, -80, 225, -216, 70), 1),
    ((0, 1, 0, -20, 50, -45, 14), 1),
    ((0, 0, 3, -16, 30, -24, 7), 6),
    ((0, 0, 0, -4, 15, -18, 7), 6),
    ((0, 0, 0, 10, -35, 39, -14), 1),
    ((0, 0, 0, -60, 195, -204, 70), 1),
    ((0, 0, 0, 140, -420, 420, -140), 1),
)

_SEPTIC_D2: Tuple[_Poly, ...] = (
    ((0, 0, -420, 1680, -2100, 840), 1),
    ((0, 0, -240, 900, -1080, 420), 1),
    ((1, 0, -60, 200, -225, 84), 1),
    ((0, 1, -8, 20, -20, 7), 1),
    ((0, 0, -2, 10, -15, 7), 1),
    ((0, 0, 30, -140, 195, -84), 1),
    ((0, 0, -180, 780, -1020, 420), 1),
    ((0, 0, 420, -1680, 2100, -840), 1),
)

_SEPTIC_D3: Tuple[_Poly, ...] = (
    ((0, -840, 5040, -8400, 4200), 1),
    ((0, -480, 2700, -4320, 2100), 1),
    ((0, -120, 600, -900, 420), 1),
    ((1, -16, 60, -80, 35), 1),
    ((0, -4, 30, -60, 35), 1),
    ((0, 60, -420, 780, -420), 1),
    ((0, -360, 2340, -4080, 2100), 1),
    ((0, 840, -5040, 8400, -4200), 1),
)


# family -> tables indexed by derivative order
_TABLES: Dict[BasisFamily, Tuple[Tuple[_Poly, ...], ...]] = {
    BasisFamily.CUBIC: (_CUBIC, _CUBIC_D1),
    BasisFamily.QUINTIC: (_QUINTIC, _QUINTIC_D1, _QUINTIC_D2),
    BasisFamily.SEPTIC: (_SEPTIC, _SEPTIC_D1, _SEPTIC_D2, _SEPTIC_D3),
}


# =============================================================================
# Generic Dispatch
# =============================================================================


def _table(family: Union[BasisFamily, str], order: int) -> Tuple[_Poly, ...]:
    family = BasisFamily(family)
    tables = _TABLES[family]
    if not 0 <= order < len(tables):
        raise UnsupportedDerivativeError(
            f"{family.value} basis has no order-{order} weights "
            f"(supported orders: 0..{len(tables) - 1})"
        )
    return tables[order]


def _check_index(family: BasisFamily, n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or not 0 <= n < family.degree_count:
        raise InvalidBasisIndexError(
            f"Invalid {family.value} basis index {n!r}: expected 0..{family.degree_count - 1}"
        )


def basis(
    family: Union[BasisFamily, str],
    t: ParamLike,
    n: int,
    order: int = 0,
) -> ParamLike:
    """
    Evaluate a single Hermite basis function (or one of its derivatives).

    Args:
        family: "cubic", "quintic", or "septic"
        t: Normalized segment parameter(s) in [0, 1]
        n: Basis index in 0..degree_count-1
        order: Derivative order (0=value, 1=velocity weight, ...)

    Returns:
        Weight(s) with the same type/shape as t

    Raises:
        InvalidBasisIndexError: If n is outside the family's index range
        UnsupportedDerivativeError: If the family has no weights for order
    """
    family = BasisFamily(family)
    table = _table(family, order)
    _check_index(family, n)
    coeffs, divisor = table[n]
    return horner(coeffs, t) / divisor


def basis_weights(
    family: Union[BasisFamily, str],
    t: ParamLike,
    order: int = 0,
) -> Tuple[ParamLike, ...]:
    """All ``degree_count`` weights of a family at t, in basis index order."""
    return horner_batch(_table(family, order), t)


def boundary_condition(family: Union[BasisFamily, str], n: int) -> Tuple[int, Boundary]:
    """
    Boundary state tied to basis index n.

    The first half of the indices refer to the segment start in increasing
    derivative order, the second half to the segment end in decreasing order.

    Example:
        >>> boundary_condition("quintic", 2)
        (2, <Boundary.START: 'start'>)
        >>> boundary_condition("quintic", 4)
        (1, <Boundary.END: 'end'>)
    """
    family = BasisFamily(family)
    _check_index(family, n)
    half = family.degree_count // 2
    if n < half:
        return n, Boundary.START
    return family.degree_count - 1 - n, Boundary.END


def boundary_conditions(family: Union[BasisFamily, str]) -> Tuple[Tuple[int, Boundary], ...]:
    family = BasisFamily(family)
    return tuple(boundary_condition(family, n) for n in range(family.degree_count))


# =============================================================================
# Direct Functions
# =============================================================================


def h3(t: ParamLike, n: int) -> ParamLike:
    """Cubic Hermite basis: weights for p0, v0, v1, p1."""
    return basis(BasisFamily.CUBIC, t, n, 0)


def h3p(t: ParamLike, n: int) -> ParamLike:
    """First derivative of :func:`h3`."""
    return basis(BasisFamily.CUBIC, t, n, 1)


def h5(t: ParamLike, n: int) -> ParamLike:
    """Quintic Hermite basis: weights for p0, v0, a0, a1, v1, p1."""
    return basis(BasisFamily.QUINTIC, t, n, 0)


def h5p(t: ParamLike, n: int) -> ParamLike:
    """First derivative of :func:`h5`."""
    return basis(BasisFamily.QUINTIC, t, n, 1)


def h5pp(t: ParamLike, n: int) -> ParamLike:
    """Second derivative of :func:`h5`."""
    return basis(BasisFamily.QUINTIC, t, n, 2)


def h7(t: ParamLike, n: int) -> ParamLike:
    """Septic Hermite basis: weights for p0, v0, a0, j0, j1, a1, v1, p1."""
    return basis(BasisFamily.SEPTIC, t, n, 0)


def h7p(t: ParamLike, n: int) -> ParamLike:
    return basis(BasisFamily.SEPTIC, t, n, 1)


def h7pp(t: ParamLike, n: int) -> ParamLike:
    return basis(BasisFamily.SEPTIC, t, n, 2)


def h7ppp(t: ParamLike, n: int) -> ParamLike:
    return basis(BasisFamily.SEPTIC, t, n, 3)
