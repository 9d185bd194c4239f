"""
Fixed-dimension vector type.

Provides a small value type for waypoint states, supporting both NumPy and
PyTorch backends. The dimension is fixed at construction.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Iterator, List, Union

import numpy as np
import torch

from ._core import ArrayLike, Backend, DEFAULT_DTYPE, EPS, get_backend, to_backend

Weight = Union[float, int, np.number, ArrayLike]


def _is_weight(value) -> bool:
    if isinstance(value, (numbers.Number, np.number)):
        return True
    if isinstance(value, (np.ndarray, torch.Tensor)):
        return value.ndim == 0
    return False


def _format_scalar(value) -> str:
    """Shortest round-trip text for one component, without a trailing ``.0``."""
    if isinstance(value, (np.floating, float)):
        return np.format_float_positional(value, unique=True, trim="-")
    return str(value)


@dataclass(slots=True, eq=False, frozen=True)
class Vector:
    """
    Fixed-dimension numeric vector.

    Wraps a 1-D array of D components. Arithmetic keeps the backend of the
    operands; mixing backends or dimensions raises ValueError.

    Example:
        >>> a = Vector.of(1.0, 2.0, 3.0)
        >>> b = vec3(5.0, 4.0, 3.0)
        >>> a + b
        Vector([6.0, 6.0, 6.0])
        >>> a.dot(b)
        22.0
        >>> str(vec3(0.0, 1.25, 4.0))
        '(0,1.25,4)'
    """

    components: ArrayLike  # (D,)
    backend: Backend = field(init=False)

    # NumPy scalars on the left defer to __rmul__ instead of iterating the vector
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        """Validate shape and detect backend."""
        components = self.components
        if not isinstance(components, (np.ndarray, torch.Tensor)):
            components = np.asarray(components, dtype=DEFAULT_DTYPE)
            object.__setattr__(self, "components", components)
        if components.ndim != 1 or components.shape[0] == 0:
            raise ValueError(
                f"Vector components must have shape (D,) with D >= 1, got {tuple(components.shape)}"
            )
        object.__setattr__(self, "backend", get_backend(components))

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        *components,
        backend: Backend = "numpy",
        dtype=None,
        device=None,
    ) -> "Vector":
        """Create from individual components."""
        if backend == "torch":
            dtype = dtype or torch.float64
        else:
            dtype = dtype or DEFAULT_DTYPE
        return cls(to_backend(list(components), backend, dtype=dtype, device=device))

    @classmethod
    def zeros(
        cls,
        dim: int,
        backend: Backend = "numpy",
        dtype=None,
        device=None,
    ) -> "Vector":
        """Create the zero vector of the given dimension."""
        if backend == "torch":
            return cls(torch.zeros(dim, dtype=dtype or torch.float64, device=device))
        return cls(np.zeros(dim, dtype=dtype or DEFAULT_DTYPE))

    @classmethod
    def coerce(cls, value) -> "Vector":
        """Return value unchanged if it is a Vector, otherwise wrap it."""
        return value if isinstance(value, Vector) else cls(value)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: "Vector") -> None:
        if self.backend != other.backend:
            raise ValueError(f"Backend mismatch: {self.backend} vs {other.backend}")
        if self.dim != other.dim:
            raise ValueError(f"Dimension mismatch: {self.dim} vs {other.dim}")

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return Vector(self.components + other.components)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return Vector(self.components - other.components)

    def __neg__(self) -> "Vector":
        return Vector(-self.components)

    def _weight(self, scalar: Weight):
        """Bring a weight onto this vector's backend."""
        if isinstance(scalar, torch.Tensor) and self.backend == "numpy":
            return scalar.item()
        if isinstance(scalar, (np.ndarray, np.number)) and self.backend == "torch":
            return scalar.item()
        return scalar

    def __mul__(self, scalar: Weight) -> "Vector":
        if not _is_weight(scalar):
            return NotImplemented
        return Vector(self.components * self._weight(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: Weight) -> "Vector":
        if not _is_weight(scalar):
            return NotImplemented
        return Vector(self.components / self._weight(scalar))

    def dot(self, other: "Vector"):
        """Dot product, returned as a Python scalar."""
        self._check_compatible(other)
        return (self.components * other.components).sum().item()

    def norm(self) -> float:
        """Euclidean length."""
        return float(self.dot(self)) ** 0.5

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        if self.backend != other.backend or self.dim != other.dim:
            return False
        if self.backend == "torch":
            dtype = torch.promote_types(self.components.dtype, other.components.dtype)
            return bool(torch.equal(self.components.to(dtype), other.components.to(dtype)))
        return bool(np.array_equal(self.components, other.components))

    def __hash__(self) -> int:
        # Consistent with __eq__: equal components give equal Python floats
        return hash((self.backend, tuple(self.tolist())))

    def allclose(self, other: "Vector", rtol: float = 1e-9, atol: float = EPS) -> bool:
        """Approximate component-wise equality."""
        self._check_compatible(other)
        if self.backend == "torch":
            return bool(
                torch.allclose(self.components, other.components.to(self.components.dtype), rtol=rtol, atol=atol)
            )
        return bool(np.allclose(self.components, other.components, rtol=rtol, atol=atol))

    # -------------------------------------------------------------------------
    # Properties & Conversion
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return int(self.components.shape[0])

    @property
    def dtype(self):
        return self.components.dtype

    @property
    def device(self):
        """Get device (PyTorch only, None for NumPy)."""
        if self.backend == "torch":
            return self.components.device
        return None

    def to_numpy(self) -> np.ndarray:
        return to_backend(self.components, "numpy")

    def tolist(self) -> List:
        return self.components.tolist()

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator:
        return iter(self.tolist())

    def __getitem__(self, idx: Union[int, slice]):
        """Component at idx, or a Vector for a slice."""
        if isinstance(idx, slice):
            return Vector(self.components[idx])
        return self.components[idx].item()

    def __str__(self) -> str:
        values = self.to_numpy()
        return "(" + ",".join(_format_scalar(v) for v in values) + ")"

    def __repr__(self) -> str:
        if self.backend == "torch":
            return f"Vector({self.tolist()}, backend='torch')"
        return f"Vector({self.tolist()})"


def vec2(x, y, **kwargs) -> Vector:
    """2-D vector."""
    return Vector.of(x, y, **kwargs)


def vec3(x, y, z, **kwargs) -> Vector:
    """3-D vector."""
    return Vector.of(x, y, z, **kwargs)


def vecn(*components, **kwargs) -> Vector:
    """N-D vector."""
    return Vector.of(*components, **kwargs)
