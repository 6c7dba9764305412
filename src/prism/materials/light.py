"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from src.prism.core.color import Color
from src.prism.core.tuples import Tuple, point


@dataclass(frozen=True)
class PointLight:
    """A light with no size, radiating equally in every direction.

    Attributes:
        position: Location of the light in world space.
        intensity: Color and brightness of the emitted light.
    """

    position: Tuple
    intensity: Color

    @classmethod
    def new(
        cls,
        position: tuple[float, float, float],
        intensity: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> PointLight:
        """Create a light from plain coordinate and color triples."""
        return cls(point(*position), Color(*intensity))
