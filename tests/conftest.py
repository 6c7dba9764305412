"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: the reference
two-sphere world, a shape arena, and a non-interactive Matplotlib backend so
preview tests never open a window.
"""

import math

import pytest


@pytest.fixture(scope="session", autouse=True)
def use_headless_matplotlib():
    """Select the Agg backend once for the session."""
    import matplotlib

    matplotlib.use("Agg")
    yield


@pytest.fixture
def arena():
    """A fresh identifier allocator."""
    from src.prism.geometry.arena import ShapeArena

    return ShapeArena()


@pytest.fixture
def world():
    """The reference world: two concentric spheres lit from (-10, 10, -10)."""
    from src.prism.scene.world import default_world

    return default_world()


@pytest.fixture
def sqrt2_2():
    return math.sqrt(2.0) / 2.0


@pytest.fixture
def recording_shape_class():
    """A minimal shape that remembers the last ray it was asked to intersect.

    Its local normal is the local point itself and its local bounds are the
    unit box, which makes the shared Shape behavior easy to observe.
    """
    from src.prism.core.tuples import point, vector
    from src.prism.geometry.bounds import Bounds
    from src.prism.geometry.shape import Shape

    class RecordingShape(Shape):
        saved_ray = None

        def local_intersections(self, ray):
            self.saved_ray = ray
            return []

        def local_normal(self, local_point, intersection=None):
            return vector(local_point.x, local_point.y, local_point.z)

        def local_bounds(self):
            return Bounds(point(-1, -1, -1), point(1, 1, 1))

    return RecordingShape
