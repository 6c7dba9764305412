"""Shape identifier allocation.

Shapes are compared by identifier, not structurally. Identifiers are handed
out by a ``ShapeArena``, which is passed explicitly to whoever builds the
scene (the world owns one; the OBJ importer accepts one). Shapes that were
never registered compare by object identity.

Example:
    >>> from src.prism.geometry.arena import ShapeArena
    >>> from src.prism.geometry.sphere import Sphere
    >>> arena = ShapeArena()
    >>> sphere = arena.register(Sphere())
    >>> sphere.id
    1
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from src.prism.geometry.shape import Shape

ShapeT = TypeVar("ShapeT", bound="Shape")


class ShapeArena:
    """Sequential identifier allocator and registry for a shape tree.

    Registration is thread-safe, although scenes are normally built on a
    single thread before rendering starts.
    """

    def __init__(self, first_id: int = 1) -> None:
        self._counter = itertools.count(first_id)
        self._lock = threading.Lock()
        self._shapes: dict[int, Shape] = {}

    def register(self, shape: ShapeT) -> ShapeT:
        """Assign identifiers to ``shape`` and every descendant still lacking one.

        Args:
            shape: Root of the (sub)tree to register.

        Returns:
            The same shape, for chaining.

        Raises:
            ValueError: If a node already carries an identifier that belongs
                to another shape of this arena.
        """
        with self._lock:
            for node in shape.iter_tree():
                if node.id is None:
                    node.id = self._next_free_id()
                elif self._shapes.get(node.id, node) is not node:
                    raise ValueError(f"Shape id {node.id} is already used in this arena")
                self._shapes[node.id] = node
        return shape

    def _next_free_id(self) -> int:
        shape_id = next(self._counter)
        while shape_id in self._shapes:
            shape_id = next(self._counter)
        return shape_id

    def get(self, shape_id: int) -> Shape:
        return self._shapes[shape_id]

    def __contains__(self, shape: object) -> bool:
        shape_id = getattr(shape, "id", None)
        return shape_id is not None and self._shapes.get(shape_id) is shape

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(list(self._shapes.values()))
