"""Ray data structure and ray-space transforms.

Example:
    >>> from src.prism.core.matrix import Matrix
    >>> from src.prism.core.ray import Ray
    >>> from src.prism.core.tuples import point, vector
    >>> ray = Ray(point(0.0, 0.0, 0.0), vector(0.0, 0.0, -1.0))
    >>> ray.position(5.0) == point(0.0, 0.0, -5.0)  # 5 units along the ray
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.prism.core.matrix import Matrix
from src.prism.core.tuples import Tuple, point, vector


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is deliberately not
            normalized by transforms, so that ``t`` values measured in object
            space stay valid in world space.
    """

    origin: Tuple
    direction: Tuple

    @classmethod
    def new(
        cls,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
    ) -> Ray:
        """Create a ray from plain coordinate triples."""
        return cls(point(*origin), vector(*direction))

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        return Ray(matrix * self.origin, matrix * self.direction)

    def inverse_transform(self, matrix: Matrix) -> Ray:
        """Move the ray into the space that ``matrix`` maps out of."""
        return self.transform(matrix.inverse())


def refract(eyev: Tuple, normalv: Tuple, n_ratio: float) -> Tuple | None:
    """Refract a ray through a surface using Snell's law.

    Args:
        eyev: Unit vector pointing back toward the eye.
        normalv: Unit surface normal on the eye side of the surface.
        n_ratio: Ratio of refractive indices (n1 / n2).

    Returns:
        The refracted direction, or None on total internal reflection.
    """
    cos_i = eyev.dot(normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return None

    cos_t = math.sqrt(1.0 - sin2_t)
    return normalv * (n_ratio * cos_i - cos_t) - eyev * n_ratio
