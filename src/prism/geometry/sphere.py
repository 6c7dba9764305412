"""Unit sphere primitive with robust ray-sphere intersection.

The sphere is centered at the object space origin with radius 1; position
and size come from the shape transform.

The robust quadratic formula from Ray Tracing Gems avoids catastrophic
cancellation when b^2 is nearly equal to 4ac.

Example:
    >>> from src.prism.core.matrix import Matrix
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.geometry.sphere import Sphere
    >>> sphere = Sphere(Matrix.scaling(2.0, 2.0, 2.0))
    >>> [x.t for x in sphere.intersections(Ray.new((0, 0, -5), (0, 0, 1)))]
    [3.0, 7.0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import ORIGIN, Tuple, point, vector
from src.prism.geometry.bounds import Bounds
from src.prism.geometry.shape import Shape
from src.prism.materials.material import GLASS_INDEX, Material
from src.prism.scene.intersection import Intersection

if TYPE_CHECKING:
    from src.prism.geometry.arena import ShapeArena


def solve_quadratic_robust(a: float, h: float, c: float) -> tuple[float, float] | None:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        a: Quadratic coefficient.
        h: Half of the linear coefficient.
        c: Constant term.

    Returns:
        Tuple of (t0, t1) where t0 <= t1, or None if there are no real roots.
    """
    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)

    # Robust quadratic formula: use sign of h to avoid catastrophic cancellation
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-12:
        # Fall back to standard formula for edge cases
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0

    return t0, t1


class Sphere(Shape):
    """Unit sphere at the object space origin."""

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect by substituting the ray into x^2 + y^2 + z^2 = 1.

        Expanding |origin + t * direction|^2 = 1 gives:
            a*t^2 + 2*h*t + c = 0

        where:
            a = dot(direction, direction)
            h = dot(direction, oc)  (half of traditional b)
            c = dot(oc, oc) - 1
            oc = origin - center
        """
        sphere_to_ray = ray.origin - ORIGIN

        a = ray.direction.dot(ray.direction)
        h = ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        roots = solve_quadratic_robust(a, h, c)
        if roots is None:
            return []

        t0, t1 = roots
        return [Intersection(t0, self), Intersection(t1, self)]

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        return vector(local_point.x, local_point.y, local_point.z)

    def local_bounds(self) -> Bounds:
        return Bounds(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))


def glass_sphere(transform: Matrix = IDENTITY, *, arena: ShapeArena | None = None) -> Sphere:
    """Create a fully transparent sphere with a refractive index of ``GLASS_INDEX``."""
    material = Material(transparency=1.0, refractive_index=GLASS_INDEX)
    return Sphere(transform, material, arena=arena)
