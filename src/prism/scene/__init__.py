"""Scene module for intersections, world shading and scene import.

Components:
    intersection: Intersection records, hit selection and shading state
    world: Light plus top-level shapes; shading with shadows, reflection
        and refraction
    obj_file: Wavefront OBJ importer producing triangle groups

Only the intersection engine is re-exported here. Shapes import it while
the world and the OBJ importer import shapes, so importing them from this
package would create a circular import. Use the submodules directly:

    from src.prism.scene.world import World, default_world
    from src.prism.scene.obj_file import load_obj
"""

from .intersection import Intersection, IntersectionState, hit, sort_intersections

__all__ = [
    "Intersection",
    "IntersectionState",
    "hit",
    "sort_intersections",
]
