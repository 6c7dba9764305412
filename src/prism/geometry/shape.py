"""Shape base class.

Every primitive implements three operations in its own object space:

    local_intersections(ray) -> list[Intersection]
    local_normal(point, intersection) -> Tuple
    local_bounds() -> Bounds

Everything else (world/object space conversion, normals in world space,
transformed bounds, lighting, identity) is implemented once here and shared
by all variants.

Shapes nest through groups. A child keeps a weak reference to its group,
used only to walk outward when converting between spaces; the group owns
its children.

Example:
    >>> from src.prism.core.matrix import Matrix
    >>> from src.prism.core.tuples import point, vector
    >>> from src.prism.geometry.sphere import Sphere
    >>> sphere = Sphere(Matrix.translation(0.0, 1.0, 0.0))
    >>> sphere.normal(point(0.0, 2.0, 0.0)) == vector(0.0, 1.0, 0.0)
    True
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

from src.prism.core.color import Color
from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple
from src.prism.geometry.bounds import Bounds
from src.prism.materials.light import PointLight
from src.prism.materials.material import Material
from src.prism.scene.intersection import Intersection

if TYPE_CHECKING:
    from src.prism.geometry.arena import ShapeArena
    from src.prism.geometry.group import Group


class Shape(ABC):
    """Base class for all renderable shapes.

    Attributes:
        id: Identifier assigned by a ShapeArena, or None if unregistered.
        transform: Object-to-parent space transform. Must be invertible.
        material: Surface material.
        casts_shadow: Whether the shape occludes light in shadow tests.
    """

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        material: Material | None = None,
        *,
        casts_shadow: bool = True,
        arena: ShapeArena | None = None,
    ) -> None:
        self.id: int | None = None
        self._parent: weakref.ReferenceType[Group] | None = None
        self._transform = transform
        self.material = material if material is not None else Material()
        self.casts_shadow = casts_shadow

        if arena is not None:
            arena.register(self)

    # =========================================================================
    # Primitive Operations
    # =========================================================================

    @abstractmethod
    def local_intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray given in object space.

        The result need not be sorted and may contain negative ``t`` values.
        """

    @abstractmethod
    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        """Compute the object space normal at an object space point.

        The intersection is only consulted by shapes whose normal depends on
        where they were hit (smooth triangles).
        """

    @abstractmethod
    def local_bounds(self) -> Bounds:
        """Return the untransformed, object space bounding box."""

    # =========================================================================
    # Tree Navigation
    # =========================================================================

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, transform: Matrix) -> None:
        self._transform = transform
        self._geometry_changed()

    def _geometry_changed(self) -> None:
        # Cached bounds of every enclosing group are now stale
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    @property
    def parent(self) -> Group | None:
        if self._parent is None:
            return None
        return self._parent()

    def _attach_to(self, group: Group) -> None:
        # Only Group.add_child calls this.
        self._parent = weakref.ref(group)

    def iter_tree(self) -> Iterator[Shape]:
        """Yield this shape and all of its descendants, depth first."""
        yield self

    def includes(self, other: Shape) -> bool:
        return self == other

    # =========================================================================
    # Space Conversion
    # =========================================================================

    def world_to_object(self, world_point: Tuple) -> Tuple:
        """Convert a world space point into this shape's object space."""
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self.transform.inverse() * world_point

    def normal_to_world(self, normal: Tuple) -> Tuple:
        """Convert an object space normal into world space."""
        converted = self.transform.inverse().transpose() * normal
        converted = Tuple(converted.x, converted.y, converted.z, 0.0).normalize()

        parent = self.parent
        if parent is not None:
            return parent.normal_to_world(converted)
        return converted

    def normal(self, world_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal(local_point, intersection)
        return self.normal_to_world(local_normal)

    def intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray given in the parent's space (world space for roots)."""
        return self.local_intersections(ray.inverse_transform(self.transform))

    def bounds(self) -> Bounds:
        """Return the local bounds transformed into the parent's space."""
        return self.local_bounds().transform(self.transform)

    def lighting(
        self,
        light: PointLight,
        world_point: Tuple,
        eyev: Tuple,
        normalv: Tuple,
        in_shadow: bool,
    ) -> Color:
        """Shade a world space point of this shape.

        Patterns are looked up in object space, so the point is converted
        before the material is consulted.
        """
        object_point = self.world_to_object(world_point)
        return self.material.lighting(light, object_point, world_point, eyev, normalv, in_shadow)

    # =========================================================================
    # Identity
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
