"""Flat and smooth triangle primitives.

Intersection uses the Möller–Trumbore algorithm: the ray is expressed in the
triangle's barycentric frame built from two edge vectors, which yields ``t``
together with the barycentric coordinates ``(u, v)`` of the hit. The hit is
inside the triangle when ``u >= 0``, ``v >= 0`` and ``u + v <= 1``.

Smooth triangles carry one normal per vertex and interpolate them with the
``(u, v)`` stored on the intersection, which is why normals receive the
originating intersection.

Example:
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.core.tuples import point
    >>> from src.prism.geometry.triangle import Triangle
    >>> triangle = Triangle(point(0, 1, 0), point(-1, 0, 0), point(1, 0, 0))
    >>> [x.t for x in triangle.local_intersections(Ray.new((0, 0.5, -2), (0, 0, 1)))]
    [2.0]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.prism.core.constants import EPSILON
from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple, vector
from src.prism.geometry.bounds import Bounds
from src.prism.geometry.shape import Shape
from src.prism.materials.material import Material
from src.prism.scene.intersection import Intersection

if TYPE_CHECKING:
    from src.prism.geometry.arena import ShapeArena


class Triangle(Shape):
    """A flat triangle.

    Attributes:
        p1: First vertex.
        p2: Second vertex.
        p3: Third vertex.
        e1: Edge from p1 to p2.
        e2: Edge from p1 to p3.
        flat_normal: Face normal; a zero vector for degenerate triangles.
    """

    def __init__(
        self,
        p1: Tuple,
        p2: Tuple,
        p3: Tuple,
        transform: Matrix = IDENTITY,
        material: Material | None = None,
        *,
        casts_shadow: bool = True,
        arena: ShapeArena | None = None,
    ) -> None:
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1

        face_normal = self.e2.cross(self.e1)
        if face_normal.magnitude() < EPSILON:
            # Collinear vertices: no surface, never intersected
            self.flat_normal = vector(0.0, 0.0, 0.0)
        else:
            self.flat_normal = face_normal.normalize()

        super().__init__(transform, material, casts_shadow=casts_shadow, arena=arena)

    def _barycentric_hit(self, ray: Ray) -> tuple[float, float, float] | None:
        """Return ``(t, u, v)`` for a hit, or None for a miss."""
        dir_cross_e2 = ray.direction.cross(self.e2)
        determinant = self.e1.dot(dir_cross_e2)

        # Ray parallel to the triangle plane, or degenerate triangle
        if abs(determinant) < EPSILON:
            return None

        f = 1.0 / determinant
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return None

        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * ray.direction.dot(origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * self.e2.dot(origin_cross_e1)
        return t, u, v

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        result = self._barycentric_hit(ray)
        if result is None:
            return []
        t, _, _ = result
        return [Intersection(t, self)]

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        return self.flat_normal

    def local_bounds(self) -> Bounds:
        return Bounds.from_points((self.p1, self.p2, self.p3))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, p1={self.p1}, p2={self.p2}, p3={self.p3})"


class SmoothTriangle(Triangle):
    """A triangle with per-vertex normals (Phong-style normal interpolation).

    Attributes:
        n1: Normal at p1.
        n2: Normal at p2.
        n3: Normal at p3.
    """

    def __init__(
        self,
        p1: Tuple,
        p2: Tuple,
        p3: Tuple,
        n1: Tuple,
        n2: Tuple,
        n3: Tuple,
        transform: Matrix = IDENTITY,
        material: Material | None = None,
        *,
        casts_shadow: bool = True,
        arena: ShapeArena | None = None,
    ) -> None:
        self.n1 = n1
        self.n2 = n2
        self.n3 = n3
        super().__init__(
            p1, p2, p3, transform, material, casts_shadow=casts_shadow, arena=arena
        )

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        result = self._barycentric_hit(ray)
        if result is None:
            return []
        t, u, v = result
        return [Intersection(t, self, u, v)]

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        if intersection is None or intersection.u is None or intersection.v is None:
            return self.flat_normal

        u, v = intersection.u, intersection.v
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)
