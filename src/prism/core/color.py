"""RGB colors.

Colors are linear and unclamped; clamping happens only when an image is
exported (see ``src.prism.preview``).
"""

from __future__ import annotations

from dataclasses import dataclass

from src.prism.core.constants import approx_equal


@dataclass(frozen=True, eq=False)
class Color:
    """A three component, real valued color.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product.
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, other: float) -> Color:
        return self * other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
