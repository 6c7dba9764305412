"""Render configuration and logging setup.

``RenderSettings`` gathers the knobs of a render job (image size, field of
view, worker count, output and display pipeline) in one dataclass, so
example programs can build it from command-line arguments and hand it
around as a unit.

Example:
    >>> import math
    >>> from src.prism.config import RenderSettings
    >>> settings = RenderSettings(width=200, height=100, field_of_view=math.pi / 3)
    >>> settings.aspect_ratio
    2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from src.prism.preview.display import ToneMapMethod

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

TONE_MAP_METHODS: tuple[ToneMapMethod, ...] = ("none", "reinhard", "exposure")


@dataclass
class RenderSettings:
    """Parameters of a render job.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Horizontal or vertical field of view (whichever image
            dimension is larger) in radians.
        workers: Worker threads for the render loop (None for the executor
            default).
        output: Output file path; ``.ppm`` writes plain PPM, anything else
            goes through Pillow.
        tone_map: Tone mapping method for PNG output and preview.
        gamma: Gamma correction for PNG output and preview.
        exposure: Exposure value for exposure tone mapping.
    """

    width: int = 400
    height: int = 200
    field_of_view: float = math.pi / 3.0
    workers: int | None = None
    output: Path = Path("render.png")
    tone_map: ToneMapMethod = "none"
    gamma: float = 1.0
    exposure: float = 1.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.field_of_view}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"Worker count must be positive, got {self.workers}")
        if self.tone_map not in TONE_MAP_METHODS:
            raise ValueError(f"Unknown tone mapping method: {self.tone_map}")
        if self.gamma <= 0.0:
            raise ValueError(f"Gamma must be positive, got {self.gamma}")
        self.output = Path(self.output)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def setup_logging(level: str = "INFO", name: str = "src.prism") -> logging.Logger:
    """Attach a console handler to the package logger.

    Library modules only create module loggers; programs call this once to
    see their output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        name: Logger to configure.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
