"""Composite shape.

A group has no surface of its own: it transforms incoming rays into its
space and forwards them to its children. Before recursing, the ray is tested
against the union of the children's bounds, which lets large subtrees (OBJ
meshes) be skipped with a single box test.

Example:
    >>> from src.prism.core.matrix import Matrix
    >>> from src.prism.geometry.group import Group
    >>> from src.prism.geometry.sphere import Sphere
    >>> group = Group(Matrix.scaling(2.0, 2.0, 2.0))
    >>> sphere = group.add_child(Sphere(Matrix.translation(5.0, 0.0, 0.0)))
    >>> sphere.parent is group
    True
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import Tuple
from src.prism.geometry.bounds import Bounds
from src.prism.geometry.shape import Shape
from src.prism.materials.material import Material
from src.prism.scene.intersection import Intersection

if TYPE_CHECKING:
    from src.prism.geometry.arena import ShapeArena


class Group(Shape):
    """An ordered collection of child shapes sharing a transform.

    Attributes:
        name: Optional label (OBJ group name).
    """

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        children: Iterable[Shape] = (),
        material: Material | None = None,
        *,
        name: str | None = None,
        casts_shadow: bool = True,
        arena: ShapeArena | None = None,
    ) -> None:
        self.name = name
        self._children: list[Shape] = []
        self._bounds_cache: Bounds | None = None
        self._bounds_lock = threading.Lock()
        super().__init__(transform, material, casts_shadow=casts_shadow, arena=None)

        for child in children:
            self.add_child(child)

        if arena is not None:
            arena.register(self)

    @property
    def children(self) -> tuple[Shape, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def add_child(self, child: Shape) -> Shape:
        """Append a child and become its parent.

        Raises:
            ValueError: If the child already belongs to a group, or if adding
                it would make the group contain itself.
        """
        if child.parent is not None:
            raise ValueError(f"{child!r} already belongs to {child.parent!r}")
        if any(node is self for node in child.iter_tree()):
            raise ValueError("A group cannot contain itself")

        child._attach_to(self)
        self._children.append(child)
        self._invalidate_bounds()
        return child

    def _invalidate_bounds(self) -> None:
        self._bounds_cache = None
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    def iter_tree(self) -> Iterator[Shape]:
        yield self
        for child in self._children:
            yield from child.iter_tree()

    def includes(self, other: Shape) -> bool:
        """Return True if ``other`` is any descendant of this group."""
        return any(child == other or child.includes(other) for child in self._children)

    def local_bounds(self) -> Bounds:
        """Union of the children's bounds, computed once and cached."""
        cached = self._bounds_cache
        if cached is not None:
            return cached

        with self._bounds_lock:
            if self._bounds_cache is None:
                bounds = Bounds.empty()
                for child in self._children:
                    bounds = bounds.merge(child.bounds())
                self._bounds_cache = bounds
            return self._bounds_cache

    def local_intersections(self, ray: Ray) -> list[Intersection]:
        """Collect the children's intersections, unsorted.

        The ray is first tested against the group bounds; a miss skips the
        whole subtree.
        """
        if not self._children or not self.local_bounds().intersects(ray):
            return []

        intersections: list[Intersection] = []
        for child in self._children:
            intersections.extend(child.intersections(ray))
        return intersections

    def local_normal(self, local_point: Tuple, intersection: Intersection | None = None) -> Tuple:
        raise NotImplementedError(
            "Groups have no surface; normals are computed on the primitive that was hit"
        )

    def __repr__(self) -> str:
        label = f", name={self.name!r}" if self.name else ""
        return f"Group(id={self.id}{label}, children={len(self._children)})"
