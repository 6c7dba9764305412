"""Image export: plain PPM text and PNG.

PPM (P3) output is the reference encoding: a header with the size and the
maximum value, then one line of ``R G B`` triples per canvas row. Channel
values are scaled to [0, 255], rounded half up and clamped, and lines are
wrapped so that none exceeds 70 characters. The document ends with a
newline.

PNG output goes through the display pipeline (tone mapping and gamma) and is
written with Pillow.

Example:
    >>> from src.prism.core.color import Color
    >>> from src.prism.preview.canvas import Canvas
    >>> from src.prism.preview.export import canvas_to_ppm
    >>> canvas = Canvas(2, 1)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0.5, -0.5))
    >>> print(canvas_to_ppm(canvas), end="")
    P3
    2 1
    255
    255 128 0 0 0 0
"""

from __future__ import annotations

import textwrap
from os import PathLike
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.prism.preview.canvas import Canvas
from src.prism.preview.display import ToneMapMethod, process_image_for_display

PPM_MAX_VALUE = 255
PPM_LINE_WIDTH = 70


def _quantize(image: npt.NDArray[np.floating], max_value: int) -> npt.NDArray[np.int64]:
    # Round half up, then clamp
    scaled = np.floor(image.astype(np.float64) * max_value + 0.5)
    return np.clip(scaled, 0, max_value).astype(np.int64)


def canvas_to_ppm(canvas: Canvas) -> str:
    """Encode a canvas as a plain (P3) PPM document.

    Args:
        canvas: The image to encode. Colors are clamped, not tone mapped.

    Returns:
        The PPM text, ending with a newline.
    """
    values = _quantize(canvas.to_numpy(np.float64), PPM_MAX_VALUE)

    lines = ["P3", f"{canvas.width} {canvas.height}", str(PPM_MAX_VALUE)]
    for row in values:
        row_text = " ".join(str(value) for value in row.ravel())
        lines.extend(textwrap.wrap(row_text, width=PPM_LINE_WIDTH))

    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | PathLike[str]) -> None:
    """Write a canvas to a plain PPM file."""
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit for display or export.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure value for exposure tone mapping.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    return _quantize(processed, 255).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | PathLike[str],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> None:
    """Save a canvas as an 8-bit PNG file.

    Args:
        canvas: The rendered image.
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (2.2 for sRGB, 1.0 to keep values).
        exposure: Exposure value for exposure tone mapping.
    """
    image_uint8 = image_to_uint8(
        canvas.to_numpy(),
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    PILImage.fromarray(image_uint8).save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
