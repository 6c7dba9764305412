"""Infinite plane primitive (the object space xz-plane)."""

from __future__ import annotations

import math

from src.prism.core.constants import EPSILON
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple, point, vector
from src.prism.geometry.bounds import Bounds
from src.prism.geometry.shape import Shape
from src.prism.scene.intersection import Intersection

PLANE_NORMAL = vector(0.0, 1.0, 0.0)


class Plane(Shape):
    """The xz-plane through the origin, normal pointing along +y."""

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        # Parallel (or coplanar) rays never cross the plane
        if abs(ray.direction.y) < EPSILON:
            return []

        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        return PLANE_NORMAL

    def local_bounds(self) -> Bounds:
        return Bounds(point(-math.inf, 0.0, -math.inf), point(math.inf, 0.0, math.inf))
