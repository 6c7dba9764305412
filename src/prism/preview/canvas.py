"""Canvas: the in-memory image sink the camera renders into.

The camera never writes files or touches a display; it hands the finished
pixel rows to an image type implementing ``ImageSink``. ``Canvas`` is the
default implementation, storing linear, unclamped colors in a NumPy array of
shape ``(height, width, 3)``.

Example:
    >>> from src.prism.core.color import Color
    >>> from src.prism.preview.canvas import Canvas
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, Color(1.0, 0.0, 0.0))
    >>> canvas.pixel_at(2, 3)
    Color(red=1.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.prism.core.color import BLACK, Color


class ImageSink(Protocol):
    """Anything that can be built from rendered pixel rows."""

    @classmethod
    def from_pixels(cls, pixels: Sequence[Sequence[Color]], width: int, height: int) -> ImageSink:
        """Build an image from ``height`` rows of ``width`` colors each."""
        ...


class Canvas:
    """A grid of linear RGB colors, addressed as ``(x, y)`` from the top left.

    Attributes:
        width: Number of columns.
        height: Number of rows.
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._pixels = np.empty((height, width, 3), dtype=np.float64)
        self._pixels[:, :] = fill.as_tuple()

    @classmethod
    def from_pixels(cls, pixels: Sequence[Sequence[Color]], width: int, height: int) -> Canvas:
        """Build a canvas from row-major pixel rows.

        Raises:
            ValueError: If the rows do not match the declared size.
        """
        if len(pixels) != height or any(len(row) != width for row in pixels):
            raise ValueError(f"Pixel rows do not match the declared size {width}x{height}")

        canvas = cls(width, height)
        canvas._pixels[:, :, :] = [[color.as_tuple() for color in row] for row in pixels]
        return canvas

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Build a canvas from an ``(H, W, 3)`` array of linear colors."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {image.shape}")

        height, width = image.shape[:2]
        canvas = cls(width, height)
        canvas._pixels[:, :, :] = image
        return canvas

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = color.as_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        red, green, blue = self._pixels[y, x]
        return Color(float(red), float(green), float(blue))

    def to_numpy(self, dtype: npt.DTypeLike = np.float32) -> npt.NDArray[np.floating]:
        """Return a copy of the pixels as an ``(H, W, 3)`` array."""
        return self._pixels.astype(dtype)

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"
