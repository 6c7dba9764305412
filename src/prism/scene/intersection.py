"""Intersection records, hit selection and shading state.

Producers (shapes) return intersections in whatever order is convenient;
consumers sort by ``t`` before selecting a hit. Negative ``t`` values are kept
because the refractive index bookkeeping needs every crossing along the ray,
including those behind the origin.

Example:
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.geometry.sphere import Sphere
    >>> from src.prism.scene.intersection import hit
    >>> sphere = Sphere()
    >>> ray = Ray.new((0.0, 0.0, -5.0), (0.0, 0.0, 1.0))
    >>> xs = sphere.intersections(ray)
    >>> nearest = hit(xs)
    >>> nearest.t
    4.0
    >>> state = nearest.prepare(ray, xs)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.prism.core.constants import SURFACE_OFFSET
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple

if TYPE_CHECKING:
    from src.prism.geometry.shape import Shape


@dataclass(frozen=True, eq=False)
class Intersection:
    """A single ray/shape crossing.

    Attributes:
        t: Ray parameter of the crossing.
        object: The primitive that was hit.
        u: First barycentric coordinate (smooth triangles only).
        v: Second barycentric coordinate (smooth triangles only).
    """

    t: float
    object: Shape
    u: float | None = None
    v: float | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.object == other.object

    __hash__ = None  # type: ignore[assignment]

    def prepare(
        self,
        ray: Ray,
        intersections: Sequence[Intersection] | None = None,
    ) -> IntersectionState:
        """Precompute the shading state for this intersection.

        Args:
            ray: The ray that produced the intersection.
            intersections: All intersections along the ray, sorted by ``t``.
                They are used to find the refractive indices on both sides
                of the surface; when omitted, only this intersection is
                considered.

        Returns:
            The shading state at the hit.
        """
        if intersections is None:
            intersections = [self]

        shape = self.object
        world_point = ray.position(self.t)
        eyev = -ray.direction
        normalv = shape.normal(world_point, self)

        inside = normalv.dot(eyev) < 0.0
        if inside:
            normalv = -normalv

        offset = normalv * SURFACE_OFFSET
        n1, n2 = _refractive_indices(self, intersections)

        return IntersectionState(
            t=self.t,
            object=shape,
            point=world_point,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
            over_point=world_point + offset,
            under_point=world_point - offset,
            reflectv=ray.direction.reflect(normalv),
            n1=n1,
            n2=n2,
        )


def _refractive_indices(
    target: Intersection,
    intersections: Sequence[Intersection],
) -> tuple[float, float]:
    """Walk the crossings to find the indices on each side of ``target``.

    A list of the objects the ray is currently inside is maintained; the
    index entering the target is that of the innermost container before the
    crossing, the index leaving is that of the innermost one after it.
    """
    containers: list[Shape] = []
    n1 = n2 = 1.0

    for intersection in intersections:
        is_target = intersection is target

        if is_target:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        if intersection.object in containers:
            containers.remove(intersection.object)
        else:
            containers.append(intersection.object)

        if is_target:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break

    return n1, n2


@dataclass(frozen=True)
class IntersectionState:
    """Shading state derived from a hit.

    Attributes:
        t: Ray parameter of the hit.
        object: The shape that was hit.
        point: Hit point in world space.
        eyev: Unit vector toward the eye.
        normalv: Unit normal, flipped to face the eye.
        inside: Whether the ray originated inside the shape.
        over_point: Point nudged above the surface (shadow/reflection origin).
        under_point: Point nudged below the surface (refraction origin).
        reflectv: Reflected ray direction.
        n1: Refractive index of the medium being left.
        n2: Refractive index of the medium being entered.
    """

    t: float
    object: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    reflectv: Tuple
    n1: float
    n2: float

    def schlick(self) -> float:
        """Approximate the Fresnel reflectance with Schlick's formula.

        Returns:
            The fraction of light reflected, in [0, 1]; 1.0 on total internal
            reflection.
        """
        cos = self.eyev.dot(self.normalv)

        if self.n1 > self.n2:
            n_ratio = self.n1 / self.n2
            sin2_t = n_ratio * n_ratio * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            cos = math.sqrt(1.0 - sin2_t)

        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def sort_intersections(intersections: Iterable[Intersection]) -> list[Intersection]:
    return sorted(intersections, key=lambda intersection: intersection.t)


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Select the visible hit: the intersection with the lowest positive ``t``.

    Args:
        intersections: Intersections in any order.

    Returns:
        The hit, or None if every intersection is at or behind the origin.
    """
    nearest = None
    for intersection in intersections:
        if intersection.t > 0.0 and (nearest is None or intersection.t < nearest.t):
            nearest = intersection
    return nearest
