"""Geometry module for shapes and bounding volumes.

Components:
    bounds: Axis-aligned bounding boxes and the slab test
    arena: Shape identifier allocation
    shape: Abstract shape with the shared space-conversion logic
    sphere: Unit sphere and the glass sphere helper
    plane: The xz-plane
    cube: Axis-aligned unit cube
    cylinder: Truncatable, optionally capped cylinder
    triangle: Flat and smooth triangles
    group: Composite shape with bounding-box rejection

Every primitive is defined in its own object space; the shape transform
places it in the parent's space.
"""

from .arena import ShapeArena
from .bounds import Bounds, check_axis
from .cube import Cube
from .cylinder import Cylinder
from .group import Group
from .plane import Plane
from .shape import Shape
from .sphere import Sphere, glass_sphere, solve_quadratic_robust
from .triangle import SmoothTriangle, Triangle

__all__ = [
    "Bounds",
    "check_axis",
    "ShapeArena",
    "Shape",
    "Sphere",
    "glass_sphere",
    "solve_quadratic_robust",
    "Plane",
    "Cube",
    "Cylinder",
    "Triangle",
    "SmoothTriangle",
    "Group",
]
