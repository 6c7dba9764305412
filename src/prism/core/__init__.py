"""Core algebra module.

This module contains the fundamental building blocks for ray tracing:

Components:
    constants: Float tolerances (equality epsilon, surface offset)
    tuples: Homogeneous points/vectors and vector utilities
    matrix: Square matrices, cofactor inverse, affine transform builders
    ray: Ray data structure, ray transforms and refraction
    color: Linear RGB colors

Everything here is pure Python (plus NumPy storage for matrices) and has no
dependency on the rest of the package.
"""

from .color import BLACK, WHITE, Color
from .constants import EPSILON, SURFACE_OFFSET, approx_equal
from .matrix import IDENTITY, Axis, Matrix, NonInvertibleMatrixError
from .ray import Ray, refract
from .tuples import ORIGIN, Tuple, point, vector

__all__ = [
    "EPSILON",
    "SURFACE_OFFSET",
    "approx_equal",
    "Tuple",
    "point",
    "vector",
    "ORIGIN",
    "Matrix",
    "Axis",
    "IDENTITY",
    "NonInvertibleMatrixError",
    "Ray",
    "refract",
    "Color",
    "BLACK",
    "WHITE",
]
