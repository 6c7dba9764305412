"""Homogeneous point/vector tuples and vector utilities.

A Tuple carries four components (x, y, z, w). Points have ``w = 1`` and
vectors have ``w = 0``; the arithmetic below does not enforce the distinction,
so adding two points is allowed and is the caller's problem.

Example:
    >>> from src.prism.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> p + v * 2.0
    Tuple(x=1.0, y=2.0, z=5.0, w=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from src.prism.core.constants import approx_equal

POINT_W = 1.0
VECTOR_W = 0.0


@dataclass(frozen=True, eq=False)
class Tuple:
    """A four component homogeneous coordinate.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
        w: 1.0 for points, 0.0 for vectors.
    """

    x: float
    y: float
    z: float
    w: float

    def is_point(self) -> bool:
        return self.w == POINT_W

    def is_vector(self) -> bool:
        return self.w == VECTOR_W

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
            and approx_equal(self.w, other.w)
        )

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    # =========================================================================
    # Vector Utility Functions
    # =========================================================================

    def magnitude(self) -> float:
        """Compute the Euclidean norm over all four components."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Tuple:
        """Scale to unit length.

        Raises:
            ZeroDivisionError: If the tuple has zero magnitude. Callers must
                not normalize a zero vector.
        """
        magnitude = self.magnitude()
        return Tuple(self.x / magnitude, self.y / magnitude, self.z / magnitude, self.w / magnitude)

    def dot(self, other: Tuple) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Compute the 3D cross product; ``w`` is ignored and the result is a vector."""
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this (incoming) vector about a unit normal."""
        return self - normal * (2.0 * self.dot(normal))


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (``w = 1``)."""
    return Tuple(float(x), float(y), float(z), POINT_W)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (``w = 0``)."""
    return Tuple(float(x), float(y), float(z), VECTOR_W)


ORIGIN = point(0.0, 0.0, 0.0)
