"""World: a light plus the top-level shapes, and the shading pipeline.

Shading a ray proceeds as follows:

1. Intersect the ray with every top-level shape and sort by ``t``.
2. Select the hit (lowest positive ``t``); no hit means black.
3. Prepare the shading state (points, vectors, refractive indices).
4. Combine Phong lighting (with a shadow ray toward the light) with the
   reflected and refracted contributions, which recurse through
   ``color_at`` with one less unit of the bounce budget.

When a surface is both reflective and transparent, the reflected and
refracted colors are weighted by the Schlick reflectance.

The world and its shapes are read-only while rendering, so a single world
can be shaded from many threads at once.

Example:
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.scene.world import default_world
    >>> world = default_world()
    >>> [x.t for x in world.intersections(Ray.new((0, 0, -5), (0, 0, 1)))]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from src.prism.core.color import BLACK, Color
from src.prism.core.matrix import Matrix
from src.prism.core.ray import Ray, refract
from src.prism.core.tuples import Tuple, point
from src.prism.geometry.arena import ShapeArena
from src.prism.geometry.shape import Shape
from src.prism.geometry.sphere import Sphere
from src.prism.materials.light import PointLight
from src.prism.materials.material import Material
from src.prism.scene.intersection import Intersection, IntersectionState, hit, sort_intersections

logger = logging.getLogger(__name__)

# Bounce budget used for primary rays
MAX_REFLECTIONS = 5


class World:
    """A scene: one optional point light and a flat list of top-level shapes.

    Shapes added to the world are registered with the world's arena, which
    gives every node of their trees an identifier.

    Attributes:
        light: The light source, or None for an unlit world.
        arena: Identifier allocator shared by every shape of this world.
    """

    def __init__(
        self,
        light: PointLight | None = None,
        objects: Iterable[Shape] = (),
        arena: ShapeArena | None = None,
    ) -> None:
        self.light = light
        self.arena = arena if arena is not None else ShapeArena()
        self._objects: list[Shape] = []

        for shape in objects:
            self.add(shape)

    @property
    def objects(self) -> tuple[Shape, ...]:
        return tuple(self._objects)

    def add(self, shape: Shape) -> Shape:
        """Register a shape (and its subtree) and add it as a top-level object.

        Raises:
            ValueError: If the shape is a child of a group; add the group.
        """
        if shape.parent is not None:
            raise ValueError(f"{shape!r} belongs to a group; add the group instead")

        self.arena.register(shape)
        self._objects.append(shape)
        logger.debug("Added %r to world (%d shapes registered)", shape, len(self.arena))
        return shape

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, shape: object) -> bool:
        return isinstance(shape, Shape) and any(
            obj == shape or obj.includes(shape) for obj in self._objects
        )

    # =========================================================================
    # Ray Queries
    # =========================================================================

    def intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect a world space ray with every shape, sorted by ``t``."""
        found: list[Intersection] = []
        for shape in self._objects:
            found.extend(shape.intersections(ray))
        return sort_intersections(found)

    def is_shadowed(self, world_point: Tuple) -> bool:
        """Check whether the light is occluded from a world space point.

        Only shadow-casting shapes are considered, and only crossings
        strictly between the point and the light. A point at the light itself
        is never shadowed.
        """
        if self.light is None:
            return True

        to_light = self.light.position - world_point
        distance = to_light.magnitude()
        if distance == 0.0:
            return False

        ray = Ray(world_point, to_light.normalize())

        for shape in self._objects:
            if not shape.casts_shadow:
                continue
            for intersection in shape.intersections(ray):
                if intersection.object.casts_shadow and 0.0 < intersection.t < distance:
                    return True
        return False

    # =========================================================================
    # Shading
    # =========================================================================

    def color_at(self, ray: Ray, remaining: int = MAX_REFLECTIONS) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: Ray in world space.
            remaining: Number of reflection/refraction bounces still allowed.

        Returns:
            The shaded color of the nearest hit, or black if nothing is hit.
        """
        intersections = self.intersections(ray)
        nearest = hit(intersections)
        if nearest is None:
            return BLACK

        state = nearest.prepare(ray, intersections)
        return self.shade_hit(state, remaining)

    def shade_hit(self, state: IntersectionState, remaining: int = MAX_REFLECTIONS) -> Color:
        """Shade a prepared hit: surface lighting plus reflection and refraction."""
        if self.light is None:
            surface = BLACK
        else:
            shadowed = self.is_shadowed(state.over_point)
            surface = state.object.lighting(
                self.light, state.over_point, state.eyev, state.normalv, shadowed
            )

        reflected = self.reflected_color(state, remaining)
        refracted = self.refracted_color(state, remaining)

        material = state.object.material
        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = state.schlick()
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)

        return surface + reflected + refracted

    def reflected_color(self, state: IntersectionState, remaining: int) -> Color:
        """Color contributed by a mirror bounce; black at budget 0 or matte surfaces."""
        reflective = state.object.material.reflective
        if remaining <= 0 or reflective == 0.0:
            return BLACK

        reflect_ray = Ray(state.over_point, state.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, state: IntersectionState, remaining: int) -> Color:
        """Color transmitted through the surface.

        Black at budget 0, for opaque surfaces, and on total internal
        reflection (checked before recursing).
        """
        transparency = state.object.material.transparency
        if remaining <= 0 or transparency == 0.0:
            return BLACK

        direction = refract(state.eyev, state.normalv, state.n1 / state.n2)
        if direction is None:
            return BLACK

        refract_ray = Ray(state.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparency

    def __repr__(self) -> str:
        return f"World(light={self.light!r}, objects={len(self._objects)})"


def default_world() -> World:
    """Build the two-sphere reference scene.

    An outer unit sphere with a light green material and an inner sphere of
    radius 0.5 with the default material, lit from ``(-10, 10, -10)``.
    """
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(Matrix.scaling(0.5, 0.5, 0.5))
    return World(light, [outer, inner])
