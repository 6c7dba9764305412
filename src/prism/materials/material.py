"""Phong surface material.

The Phong reflection model combines three terms:

    ambient:  effective_color * ambient
    diffuse:  effective_color * diffuse * dot(light, normal)
    specular: light_intensity * specular * dot(reflect, eye) ** shininess

where ``effective_color`` is the surface color (or pattern color) tinted by
the light intensity. Diffuse and specular vanish when the point is in shadow
or the light is behind the surface.

The reflection/refraction coefficients live here too, but they are consumed
by the world shading pipeline rather than by ``lighting``.

Example:
    >>> from src.prism.core.color import Color
    >>> from src.prism.materials.material import Material
    >>> glass = Material(transparency=1.0, refractive_index=1.5)
    >>> mirror = Material(color=Color(0.1, 0.1, 0.1), reflective=0.9)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from src.prism.core.color import BLACK, WHITE, Color
from src.prism.core.tuples import Tuple
from src.prism.materials.light import PointLight
from src.prism.materials.patterns import Pattern

# Refractive indices
VACUUM_INDEX = 1.0
GLASS_INDEX = 1.5


@dataclass
class Material:
    """Surface appearance attributes.

    Attributes:
        color: Flat surface color, used when no pattern is set.
        ambient: Ambient reflection coefficient, typically in [0, 1].
        diffuse: Diffuse reflection coefficient, typically in [0, 1].
        specular: Specular reflection coefficient, typically in [0, 1].
        shininess: Specular exponent; larger values give tighter highlights.
        reflective: Fraction of light mirrored by the surface (0 = matte).
        transparency: Fraction of light transmitted through the surface.
        refractive_index: Index of refraction of the material.
        pattern: Optional pattern overriding ``color``.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM_INDEX
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        if self.shininess < 0.0:
            raise ValueError(f"Shininess must be non-negative, got {self.shininess}")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Refractive index must be positive, got {self.refractive_index}"
            )

    def color_at(self, object_point: Tuple) -> Color:
        if self.pattern is not None:
            return self.pattern.color_at(object_point)
        return self.color

    def lighting(
        self,
        light: PointLight,
        object_point: Tuple,
        world_point: Tuple,
        eyev: Tuple,
        normalv: Tuple,
        in_shadow: bool,
    ) -> Color:
        """Shade a surface point with the Phong reflection model.

        Args:
            light: The light illuminating the point.
            object_point: The point in object space (for pattern lookup).
            world_point: The same point in world space (for light direction).
            eyev: Unit vector from the point toward the eye.
            normalv: Unit surface normal at the point.
            in_shadow: Whether the light is occluded.

        Returns:
            The reflected color.
        """
        effective_color = self.color_at(object_point) * light.intensity
        ambient = effective_color * self.ambient

        if in_shadow:
            return ambient

        to_light = light.position - world_point

        # Point at the light itself: no direction to light it from
        if to_light.magnitude() == 0.0:
            return ambient

        lightv = to_light.normalize()
        light_dot_normal = lightv.dot(normalv)

        # Light on the other side of the surface
        if light_dot_normal < 0.0:
            return ambient

        diffuse = effective_color * (self.diffuse * light_dot_normal)

        reflectv = (-lightv).reflect(normalv)
        reflect_dot_eye = reflectv.dot(eyev)

        if reflect_dot_eye <= 0.0:
            specular = BLACK
        else:
            factor = math.pow(reflect_dot_eye, self.shininess)
            specular = light.intensity * (self.specular * factor)

        return ambient + diffuse + specular
