"""Vector algebra for host-side scene setup and Taichi kernels.

This module provides two views of the same 3D vector algebra:

- ``Vector3``: a small Python value class used when building scenes and
  cameras from Python (no Taichi runtime required).
- ``ti.func`` helpers (``length``, ``dot``, ``into_unit``, ...) operating on
  ``tm.vec3`` inside kernels.

Normalizing a zero-length vector never raises. The result has NaN components,
which callers detect with ``Vector3.is_finite()`` or ``is_finite_vec()`` and
treat as "no valid direction".

Example:
    >>> v = Vector3(3.0, 4.0, 0.0)
    >>> v.length()
    5.0
    >>> v.into_unit()
    Vector3(x=0.6, y=0.8, z=0.0)
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


def _safe_div(value: float, divisor: float) -> float:
    """Divide without raising, following IEEE semantics for a zero divisor."""
    if divisor == 0.0:
        if value == 0.0 or math.isnan(value):
            return math.nan
        return math.copysign(math.inf, value)
    return value / divisor


@dataclass
class Vector3:
    """A 3-component real vector.

    All arithmetic returns new vectors except ``normalize()``, which rescales
    the receiver in place.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        """Build a vector from any 3-element iterable.

        Raises:
            ValueError: If the iterable does not hold exactly three values.
        """
        items = [float(v) for v in values]
        if len(items) != 3:
            raise ValueError(f"Expected 3 components, got {len(items)}")
        return cls(items[0], items[1], items[2])

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def length(self) -> float:
        """Euclidean norm, ``sqrt(dot(self, self))``."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> None:
        """Rescale this vector to unit length in place.

        A zero vector becomes all-NaN instead of raising.
        """
        length = self.length()
        self.x = _safe_div(self.x, length)
        self.y = _safe_div(self.y, length)
        self.z = _safe_div(self.z, length)

    def into_unit(self) -> "Vector3":
        """Return a unit-length copy of this vector (NaN for a zero vector)."""
        length = self.length()
        return Vector3(
            _safe_div(self.x, length),
            _safe_div(self.y, length),
            _safe_div(self.z, length),
        )

    def add(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def mul(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def is_finite(self) -> bool:
        """Check that no component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.sub(other)

    def __mul__(self, scalar: float) -> "Vector3":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return self.mul(scalar)

    def __rmul__(self, scalar: float) -> "Vector3":
        return self.__mul__(scalar)


# =============================================================================
# Kernel-side Vector Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector as ``sqrt(dot(v, v))``."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def into_unit(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Unlike ``tm.normalize`` callers may rely on, there is no epsilon guard:
    a zero-length input produces NaN components so the degeneracy stays
    visible to downstream comparisons.

    Args:
        v: The input vector.

    Returns:
        ``v / length(v)``.
    """
    return v / length(v)


@ti.func
def is_finite_vec(v: vec3) -> ti.i32:
    """Return 1 if every component of v is finite, 0 otherwise."""
    finite = 1
    for c in ti.static(range(3)):
        if tm.isnan(v[c]) or tm.isinf(v[c]):
            finite = 0
    return finite
