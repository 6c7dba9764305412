"""Cylinder primitive.

A cylinder of radius 1 around the object space y axis, truncated to
``minimum < y < maximum`` (both infinite by default) and optionally closed by
caps at the two ends.

Example:
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.geometry.cylinder import Cylinder
    >>> cylinder = Cylinder(minimum=1.0, maximum=2.0, closed=True)
    >>> len(cylinder.local_intersections(Ray.new((0, 3, 0), (0, -1, 0))))
    2
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.prism.core.constants import EPSILON
from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple, point, vector
from src.prism.geometry.bounds import Bounds
from src.prism.geometry.shape import Shape
from src.prism.materials.material import Material
from src.prism.scene.intersection import Intersection

if TYPE_CHECKING:
    from src.prism.geometry.arena import ShapeArena


class Cylinder(Shape):
    """Unit radius cylinder along y.

    Attributes:
        minimum: Lower y bound (exclusive).
        maximum: Upper y bound (exclusive).
        closed: Whether the ends are capped.
    """

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        material: Material | None = None,
        *,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
        casts_shadow: bool = True,
        arena: ShapeArena | None = None,
    ) -> None:
        if minimum > maximum:
            raise ValueError(f"Cylinder minimum ({minimum}) exceeds maximum ({maximum})")
        self._minimum = minimum
        self._maximum = maximum
        self.closed = closed
        super().__init__(transform, material, casts_shadow=casts_shadow, arena=arena)

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, value: float) -> None:
        if value > self._maximum:
            raise ValueError(f"Cylinder minimum ({value}) exceeds maximum ({self._maximum})")
        self._minimum = value
        self._geometry_changed()

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, value: float) -> None:
        if value < self._minimum:
            raise ValueError(f"Cylinder minimum ({self._minimum}) exceeds maximum ({value})")
        self._maximum = value
        self._geometry_changed()

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        intersections = self._side_intersections(ray)
        intersections.extend(self._cap_intersections(ray))
        return intersections

    def _side_intersections(self, ray: Ray) -> list[Intersection]:
        origin, direction = ray.origin, ray.direction
        a = direction.x * direction.x + direction.z * direction.z

        # Parallel to the y axis: only the caps can be hit
        if abs(a) < EPSILON:
            return []

        b = 2.0 * origin.x * direction.x + 2.0 * origin.z * direction.z
        c = origin.x * origin.x + origin.z * origin.z - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        intersections = []
        for t in (t0, t1):
            y = origin.y + t * direction.y
            if self.minimum < y < self.maximum:
                intersections.append(Intersection(t, self))
        return intersections

    def _cap_intersections(self, ray: Ray) -> list[Intersection]:
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []

        intersections = []
        for cap_y in (self.minimum, self.maximum):
            t = (cap_y - ray.origin.y) / ray.direction.y
            if _within_cap(ray, t):
                intersections.append(Intersection(t, self))
        return intersections

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        distance = local_point.x * local_point.x + local_point.z * local_point.z

        if distance < 1.0 and local_point.y >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if distance < 1.0 and local_point.y <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)
        return vector(local_point.x, 0.0, local_point.z)

    def local_bounds(self) -> Bounds:
        return Bounds(point(-1.0, self.minimum, -1.0), point(1.0, self.maximum, 1.0))


def _within_cap(ray: Ray, t: float) -> bool:
    """Check that the ray at ``t`` lies within the unit radius of a cap."""
    x = ray.origin.x + t * ray.direction.x
    z = ray.origin.z + t * ray.direction.z
    return x * x + z * z <= 1.0
