"""Preview module for image output and visualization.

Components:
    canvas: ImageSink protocol and the NumPy-backed Canvas
    display: Tone mapping, gamma correction and Matplotlib preview
    export: PPM text and PNG export

Example:
    >>> from src.prism.preview import save_png, save_ppm
    >>> canvas = camera.render(world)
    >>> save_ppm(canvas, "output.ppm")
    >>> save_png(canvas, "output.png", gamma=1.0)
"""

from src.prism.preview.canvas import Canvas, ImageSink
from src.prism.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from src.prism.preview.export import (
    canvas_to_ppm,
    compute_rmse,
    image_to_uint8,
    save_png,
    save_ppm,
)

__all__ = [
    # Image sink
    "ImageSink",
    "Canvas",
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "canvas_to_ppm",
    "save_ppm",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
