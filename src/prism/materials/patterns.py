"""Solid (procedural) color patterns.

Patterns are evaluated in object space: the shape converts the world point
into its own space, and the pattern then applies its own transform on top.
Either color of a pattern may itself be a pattern, which is evaluated at the
same pattern-space point (nesting).

Example:
    >>> from src.prism.core.color import BLACK, WHITE
    >>> from src.prism.core.tuples import point
    >>> from src.prism.materials.patterns import StripePattern
    >>> stripes = StripePattern(WHITE, BLACK)
    >>> stripes.color_at(point(1.5, 0, 0)) == BLACK
    True
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Union

from src.prism.core.color import BLACK, WHITE, Color
from src.prism.core.constants import EPSILON
from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.tuples import Tuple

# A pattern slot holds either a flat color or another pattern
ColorSource = Union[Color, "Pattern"]


def denoised_floor(value: float) -> int:
    """Floor ``value``, snapping values within EPSILON of an integer onto it.

    Points computed on a surface at an integer coordinate often land a hair
    below it (e.g. 0.9999999); without snapping they would pick the wrong
    band.
    """
    nearest = round(value)
    if abs(value - nearest) < EPSILON:
        return int(nearest)
    return math.floor(value)


class Pattern(ABC):
    """Base class for two-color patterns.

    Attributes:
        color_a: First color (or nested pattern).
        color_b: Second color (or nested pattern).
        transform: Object-to-pattern space transform.
    """

    def __init__(
        self,
        color_a: ColorSource = WHITE,
        color_b: ColorSource = BLACK,
        transform: Matrix = IDENTITY,
    ) -> None:
        self.color_a = color_a
        self.color_b = color_b
        self.transform = transform

    def color_at(self, object_point: Tuple) -> Color:
        """Evaluate the pattern at a point given in the owning shape's object space."""
        pattern_point = self.transform.inverse() * object_point
        return self.pattern_color(pattern_point)

    @abstractmethod
    def pattern_color(self, pattern_point: Tuple) -> Color:
        """Evaluate the pattern at a point already in pattern space."""

    @staticmethod
    def resolve(source: ColorSource, pattern_point: Tuple) -> Color:
        if isinstance(source, Pattern):
            return source.color_at(pattern_point)
        return source

    def __repr__(self) -> str:
        return f"{type(self).__name__}(color_a={self.color_a!r}, color_b={self.color_b!r})"


class StripePattern(Pattern):
    """Alternating bands along x."""

    def pattern_color(self, pattern_point: Tuple) -> Color:
        if denoised_floor(pattern_point.x) % 2 == 0:
            return self.resolve(self.color_a, pattern_point)
        return self.resolve(self.color_b, pattern_point)


class GradientPattern(Pattern):
    """Linear blend from color_a to color_b over each unit of x."""

    def pattern_color(self, pattern_point: Tuple) -> Color:
        start = self.resolve(self.color_a, pattern_point)
        end = self.resolve(self.color_b, pattern_point)
        fraction = pattern_point.x - math.floor(pattern_point.x)
        return start + (end - start) * fraction


class RingPattern(Pattern):
    """Concentric rings in the xz plane."""

    def pattern_color(self, pattern_point: Tuple) -> Color:
        distance = math.sqrt(pattern_point.x**2 + pattern_point.z**2)
        if denoised_floor(distance) % 2 == 0:
            return self.resolve(self.color_a, pattern_point)
        return self.resolve(self.color_b, pattern_point)


class CheckersPattern(Pattern):
    """3D checkerboard of unit cubes."""

    def pattern_color(self, pattern_point: Tuple) -> Color:
        total = (
            denoised_floor(pattern_point.x)
            + denoised_floor(pattern_point.y)
            + denoised_floor(pattern_point.z)
        )
        if total % 2 == 0:
            return self.resolve(self.color_a, pattern_point)
        return self.resolve(self.color_b, pattern_point)
