"""
Core utilities: types, constants, enums, errors, and backend-agnostic operations.

This module provides the foundational building blocks used throughout hermite_motion.
All internal modules depend on this module.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Sequence, Tuple, Union

import numpy as np
import torch


# =============================================================================
# Type Definitions
# =============================================================================

ArrayLike = Union[np.ndarray, torch.Tensor]
Backend = Literal["numpy", "torch"]
ParamLike = Union[float, ArrayLike]


# =============================================================================
# Numerical Constants
# =============================================================================

EPS = 1e-8  # Default tolerance for approximate vector comparison
DEFAULT_DTYPE = np.float64

# Flag to enable/disable the TorchScript Horner kernel (useful for debugging)
_USE_JIT = True


# =============================================================================
# Enums
# =============================================================================


class Boundary(str, Enum):
    """Which end of a segment a boundary condition belongs to."""

    START = "start"
    END = "end"


class BasisFamily(str, Enum):
    """Hermite basis families, named after the polynomial degree."""

    CUBIC = "cubic"
    QUINTIC = "quintic"
    SEPTIC = "septic"

    @property
    def degree_count(self) -> int:
        """Number of basis functions (twice the number of constrained orders)."""
        if self == BasisFamily.CUBIC:
            return 4
        elif self == BasisFamily.QUINTIC:
            return 6
        elif self == BasisFamily.SEPTIC:
            return 8
        raise ValueError(f"Unknown basis family: {self}")

    @property
    def max_order(self) -> int:
        """Highest derivative order with a closed-form weight function."""
        return self.degree_count // 2 - 1

    @property
    def degree(self) -> int:
        return self.degree_count - 1


# Names of the state carried at each derivative order
DERIVATIVE_NAMES = ("position", "velocity", "acceleration", "jerk")


# =============================================================================
# Errors
# =============================================================================


class InvalidBasisIndexError(IndexError):
    """Raised when a basis index falls outside ``0..degree_count-1``."""

    pass


class UnsupportedDerivativeError(ValueError):
    """Raised when a basis family has no weights for the requested derivative order."""

    pass


class ParameterDomainError(ValueError):
    """Raised when a query parameter lies outside ``[0, len(waypoints) - 1]``."""

    pass


class EmptyTrajectoryError(ValueError):
    """Raised by batched queries on a trajectory with no waypoints."""

    pass


# =============================================================================
# Backend Detection
# =============================================================================


def get_backend(x: ArrayLike) -> Backend:
    """Determine backend from input type."""
    return "torch" if isinstance(x, torch.Tensor) else "numpy"


def to_backend(
    x,
    backend: Backend,
    dtype=None,
    device=None,
) -> ArrayLike:
    """Convert array to specified backend."""
    if backend == "torch":
        if isinstance(x, torch.Tensor):
            return x.to(dtype=dtype, device=device) if dtype or device else x
        return torch.as_tensor(x, dtype=dtype, device=device)
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()
    return np.asarray(x, dtype=dtype)


# =============================================================================
# Backend-Agnostic Operations
# =============================================================================


def stack(arrays: List[ArrayLike], dim: int = 0) -> ArrayLike:
    """Stack arrays along new dimension."""
    if isinstance(arrays[0], torch.Tensor):
        return torch.stack(arrays, dim=dim)
    return np.stack(arrays, axis=dim)


def floor(x: ArrayLike) -> ArrayLike:
    """Element-wise floor."""
    if isinstance(x, torch.Tensor):
        return torch.floor(x)
    return np.floor(x)


def ceil(x: ArrayLike) -> ArrayLike:
    """Element-wise ceiling."""
    if isinstance(x, torch.Tensor):
        return torch.ceil(x)
    return np.ceil(x)


def to_index(x: ArrayLike) -> ArrayLike:
    """Cast integral-valued floats to an index array."""
    if isinstance(x, torch.Tensor):
        return x.to(torch.long)
    return x.astype(np.intp)


def all_finite(x: ArrayLike) -> bool:
    if isinstance(x, torch.Tensor):
        return bool(torch.isfinite(x).all())
    return bool(np.isfinite(x).all())


# =============================================================================
# Polynomial Evaluation
# =============================================================================

try:
    @torch.jit.script
    def _horner_kernel(coeffs: List[float], t: torch.Tensor) -> torch.Tensor:
        """JIT-compiled Horner evaluation (ascending coefficients)."""
        result = torch.full_like(t, coeffs[len(coeffs) - 1])
        for i in range(len(coeffs) - 2, -1, -1):
            result = result * t + coeffs[i]
        return result

    _JIT_AVAILABLE = True
except (RuntimeError, AttributeError):  # JIT compilation or missing torch.jit
    _JIT_AVAILABLE = False


def horner(coeffs: Sequence[float], t: ParamLike) -> ParamLike:
    """
    Evaluate ``sum(coeffs[i] * t**i)`` with Horner's rule.

    Args:
        coeffs: Polynomial coefficients in ascending powers of t (at least one)
        t: Scalar, NumPy array, or PyTorch tensor

    Returns:
        Polynomial value(s) with the same type/shape as t
    """
    if isinstance(t, torch.Tensor) and t.is_floating_point() and _JIT_AVAILABLE and _USE_JIT:
        return _horner_kernel([float(c) for c in coeffs], t)

    result = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        result = result * t + c
    if len(coeffs) == 1 and not isinstance(t, (int, float)):
        result = result + 0 * t
    return result


def horner_batch(table: Sequence[Tuple[Sequence[float], float]], t: ParamLike) -> Tuple[ParamLike, ...]:
    """Evaluate every ``(numerator_coeffs, divisor)`` polynomial of a table at t."""
    return tuple(horner(coeffs, t) / divisor for coeffs, divisor in table)
