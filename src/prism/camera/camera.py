"""Camera model and the threaded render loop.

The camera looks down ``-z`` from the origin of its own space. The canvas
sits one unit in front of it, at ``z = -1``, and its extent follows from the
field of view, which spans the larger image dimension. Pixels are square,
so the image is never distorted whatever the aspect ratio:

    pixel_size = 2 * tan(fov / 2) / max(hsize, vsize)
    half_width = hsize * pixel_size / 2
    half_height = vsize * pixel_size / 2

The camera transform is a view transform (world to camera space); rays are
moved back into world space with its inverse.

Rendering distributes image rows over a thread pool. Each worker shades its
pixels without holding any lock and only takes the buffer lock for the
single write of each finished pixel.

Example:
    >>> import math
    >>> from src.prism.camera.camera import Camera
    >>> from src.prism.scene.world import default_world
    >>> camera = Camera(11, 11, math.pi / 2)
    >>> canvas = camera.render(default_world(), workers=2)
    >>> canvas.width, canvas.height
    (11, 11)
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from src.prism.core.color import BLACK, Color
from src.prism.core.matrix import IDENTITY, Matrix
from src.prism.core.ray import Ray
from src.prism.core.tuples import ORIGIN, point
from src.prism.preview.canvas import Canvas, ImageSink
from src.prism.scene.world import MAX_REFLECTIONS, World

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

SinkT = TypeVar("SinkT", bound=ImageSink)


class Camera:
    """A pinhole camera producing one ray per pixel.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Angle covered by the larger image dimension, in radians.
        transform: World to camera space transform (see Matrix.view_transform).
        pixel_size: Size of one pixel on the canvas plane at ``z = -1``.
        half_width: Half of the canvas width in camera space.
        half_height: Half of the canvas height in camera space.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix = IDENTITY,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform

        view_units = 2.0 * math.tan(field_of_view / 2.0)
        self.pixel_size = view_units / max(hsize, vsize)
        self.half_width = hsize * self.pixel_size / 2.0
        self.half_height = vsize * self.pixel_size / 2.0

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Build the world space ray through the center of a pixel.

        Args:
            px: Column, from the left edge.
            py: Row, from the top edge.
        """
        return self._ray_for_pixel(px, py, self.transform.inverse())

    def _ray_for_pixel(self, px: int, py: int, inverse: Matrix) -> Ray:
        # Offsets from the canvas edge to the pixel center
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = inverse * point(world_x, world_y, -1.0)
        origin = inverse * ORIGIN
        direction = (pixel - origin).normalize()

        return Ray(origin, direction)

    def render(
        self,
        world: World,
        *,
        image_type: type[SinkT] = Canvas,  # type: ignore[assignment]
        workers: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> SinkT:
        """Render the world into a new image.

        Args:
            world: The scene. It is only read, by all workers at once.
            image_type: Image sink class built from the finished pixel rows.
            workers: Number of worker threads (None for the executor default).
            callback: Optional callback invoked with ``(rows_done, total_rows)``
                after each finished row, from the thread that finished it.

        Returns:
            The image built by ``image_type.from_pixels``.
        """
        pixels: list[list[Color]] = [[BLACK] * self.hsize for _ in range(self.vsize)]
        pixels_lock = threading.Lock()
        progress_lock = threading.Lock()
        rows_done = 0

        # The inverse is needed for every pixel; compute it once per render
        inverse = self.transform.inverse()

        def render_row(y: int) -> None:
            nonlocal rows_done

            for x in range(self.hsize):
                ray = self._ray_for_pixel(x, y, inverse)
                color = world.color_at(ray, MAX_REFLECTIONS)

                with pixels_lock:
                    pixels[y][x] = color

            if callback is not None:
                with progress_lock:
                    rows_done += 1
                    done = rows_done
                callback(done, self.vsize)

        logger.info(
            "Rendering %dx%d with %s workers", self.hsize, self.vsize, workers or "default"
        )
        start_time = time.perf_counter()

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render") as executor:
            # Consuming the results re-raises the first worker exception
            for _ in executor.map(render_row, range(self.vsize)):
                pass

        logger.info("Rendered %d rows in %.2fs", self.vsize, time.perf_counter() - start_time)
        return image_type.from_pixels(pixels, self.hsize, self.vsize)  # type: ignore[return-value]

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view})"
        )
