"""Axis-aligned cube primitive.

The cube spans [-1, 1] on every axis in object space. Intersection uses the
slab method: each pair of opposing faces bounds an interval of ``t``; the ray
is inside the cube where all three intervals overlap.
"""

from __future__ import annotations

from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple, point, vector
from src.prism.geometry.bounds import Bounds, check_axis
from src.prism.geometry.shape import Shape
from src.prism.scene.intersection import Intersection


class Cube(Shape):
    """Unit cube centered at the object space origin."""

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect with the six faces.

        Rays starting inside the cube yield a negative entry and a positive
        exit.
        """
        xtmin, xtmax = check_axis(ray.origin.x, ray.direction.x, -1.0, 1.0)
        ytmin, ytmax = check_axis(ray.origin.y, ray.direction.y, -1.0, 1.0)
        ztmin, ztmax = check_axis(ray.origin.z, ray.direction.z, -1.0, 1.0)

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)

        if tmin > tmax:
            return []

        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        # The face hit is the one whose axis has the largest absolute component
        abs_x, abs_y, abs_z = abs(local_point.x), abs(local_point.y), abs(local_point.z)
        max_component = max(abs_x, abs_y, abs_z)

        if max_component == abs_x:
            return vector(local_point.x, 0.0, 0.0)
        if max_component == abs_y:
            return vector(0.0, local_point.y, 0.0)
        return vector(0.0, 0.0, local_point.z)

    def local_bounds(self) -> Bounds:
        return Bounds(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))
