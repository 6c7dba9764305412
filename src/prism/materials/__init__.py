"""Materials module for surface appearance.

This module implements the shading inputs consumed by the world:

Components:
    material: Phong material with reflection/refraction coefficients
    patterns: Solid patterns (stripes, gradient, rings, checkers), nestable
    light: Point light source

Patterns are keyed on object-space coordinates, so transforming a shape also
transforms its pattern.
"""

from .light import PointLight
from .material import (
    GLASS_INDEX,
    VACUUM_INDEX,
    Material,
)
from .patterns import (
    CheckersPattern,
    GradientPattern,
    Pattern,
    RingPattern,
    StripePattern,
    denoised_floor,
)

__all__ = [
    "Material",
    "PointLight",
    "Pattern",
    "StripePattern",
    "GradientPattern",
    "RingPattern",
    "CheckersPattern",
    "denoised_floor",
    "VACUUM_INDEX",
    "GLASS_INDEX",
]
