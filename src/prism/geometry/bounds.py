"""Axis-aligned bounding boxes.

Bounds are expressed in a shape's object space. They are used by groups to
reject rays cheaply before recursing into their children, and the slab test
implemented here is shared with the cube primitive (a cube is just the box
[-1, 1]^3).

A box may extend to infinity along some axes (planes, open cylinders). An
empty box has ``minimum = +inf`` and ``maximum = -inf`` on every axis.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from src.prism.core.constants import EPSILON
from src.prism.core.matrix import Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple, point


def check_axis(origin: float, direction: float, minimum: float, maximum: float) -> tuple[float, float]:
    """Compute the entry/exit ``t`` of a ray against one pair of slab planes.

    A direction component within EPSILON of zero means the ray is parallel to
    the slab: it is then inside the slab forever, or never.

    Args:
        origin: Ray origin component along the axis.
        direction: Ray direction component along the axis.
        minimum: Lower slab plane.
        maximum: Upper slab plane.

    Returns:
        ``(tmin, tmax)`` with ``tmin <= tmax`` unless the ray misses the slab
        entirely, in which case ``(inf, -inf)``.
    """
    if abs(direction) < EPSILON:
        if minimum <= origin <= maximum:
            return -math.inf, math.inf
        return math.inf, -math.inf

    tmin = (minimum - origin) / direction
    tmax = (maximum - origin) / direction

    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned box.

    Attributes:
        minimum: Corner with the lowest coordinates.
        maximum: Corner with the highest coordinates.
    """

    minimum: Tuple
    maximum: Tuple

    @classmethod
    def empty(cls) -> Bounds:
        return cls(point(math.inf, math.inf, math.inf), point(-math.inf, -math.inf, -math.inf))

    @classmethod
    def infinite(cls) -> Bounds:
        return cls(point(-math.inf, -math.inf, -math.inf), point(math.inf, math.inf, math.inf))

    @classmethod
    def from_points(cls, points: Iterable[Tuple]) -> Bounds:
        bounds = cls.empty()
        for current in points:
            bounds = bounds.add_point(current)
        return bounds

    def is_empty(self) -> bool:
        return (
            self.minimum.x > self.maximum.x
            or self.minimum.y > self.maximum.y
            or self.minimum.z > self.maximum.z
        )

    def is_finite(self) -> bool:
        return all(
            math.isfinite(value)
            for value in (
                self.minimum.x,
                self.minimum.y,
                self.minimum.z,
                self.maximum.x,
                self.maximum.y,
                self.maximum.z,
            )
        )

    def add_point(self, other: Tuple) -> Bounds:
        return Bounds(
            point(
                min(self.minimum.x, other.x),
                min(self.minimum.y, other.y),
                min(self.minimum.z, other.z),
            ),
            point(
                max(self.maximum.x, other.x),
                max(self.maximum.y, other.y),
                max(self.maximum.z, other.z),
            ),
        )

    def merge(self, other: Bounds) -> Bounds:
        if other.is_empty():
            return self
        return self.add_point(other.minimum).add_point(other.maximum)

    def contains_point(self, other: Tuple) -> bool:
        return (
            self.minimum.x <= other.x <= self.maximum.x
            and self.minimum.y <= other.y <= self.maximum.y
            and self.minimum.z <= other.z <= self.maximum.z
        )

    def contains_bounds(self, other: Bounds) -> bool:
        return self.contains_point(other.minimum) and self.contains_point(other.maximum)

    def corners(self) -> list[Tuple]:
        low, high = self.minimum, self.maximum
        return [
            point(x, y, z)
            for x in (low.x, high.x)
            for y in (low.y, high.y)
            for z in (low.z, high.z)
        ]

    def transform(self, matrix: Matrix) -> Bounds:
        """Compute the axis-aligned box enclosing this box after ``matrix``.

        The eight corners are transformed individually, because a rotated box
        is no longer axis aligned. Unbounded boxes stay unbounded: their
        corners hold infinities, which do not survive a matrix product.
        """
        if self.is_empty():
            return self
        if not self.is_finite():
            return Bounds.infinite()
        return Bounds.from_points(matrix * corner for corner in self.corners())

    def intersects(self, ray: Ray) -> bool:
        """Test whether a ray (in this box's space) may cross the box."""
        if self.is_empty():
            return False

        xtmin, xtmax = check_axis(ray.origin.x, ray.direction.x, self.minimum.x, self.maximum.x)
        ytmin, ytmax = check_axis(ray.origin.y, ray.direction.y, self.minimum.y, self.maximum.y)
        ztmin, ztmax = check_axis(ray.origin.z, ray.direction.z, self.minimum.z, self.maximum.z)

        return max(xtmin, ytmin, ztmin) <= min(xtmax, ytmax, ztmax)
