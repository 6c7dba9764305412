"""Camera module for ray generation and rendering.

Components:
    camera: Pinhole camera, per-pixel ray generation and the threaded
        render loop

Example:
    >>> import math
    >>> from src.prism.camera import Camera
    >>> from src.prism.core import Matrix, point, vector
    >>> camera = Camera(
    ...     200,
    ...     100,
    ...     math.pi / 3,
    ...     Matrix.view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0)),
    ... )
    >>> canvas = camera.render(world)
"""

from src.prism.camera.camera import Camera, ProgressCallback

__all__ = [
    "Camera",
    "ProgressCallback",
]
