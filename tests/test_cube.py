"""Unit tests for the cube primitive."""

import pytest


class TestCubeIntersection:
    """Tests for the slab intersection."""

    @pytest.mark.parametrize(
        "origin,direction,t1,t2",
        [
            ((5, 0.5, 0), (-1, 0, 0), 4, 6),
            ((-5, 0.5, 0), (1, 0, 0), 4, 6),
            ((0.5, 5, 0), (0, -1, 0), 4, 6),
            ((0.5, -5, 0), (0, 1, 0), 4, 6),
            ((0.5, 0, 5), (0, 0, -1), 4, 6),
            ((0.5, 0, -5), (0, 0, 1), 4, 6),
            ((0, 0.5, 0), (0, 0, 1), -1, 1),
        ],
    )
    def test_ray_hits_cube(self, origin, direction, t1, t2):
        """Each face, plus a ray starting inside."""
        from src.prism.core.ray import Ray
        from src.prism.geometry.cube import Cube

        xs = Cube().local_intersections(Ray.new(origin, direction))
        assert [x.t for x in xs] == [t1, t2]

    @pytest.mark.parametrize(
        "origin,direction",
        [
            ((-2, 0, 0), (0.2673, 0.5345, 0.8018)),
            ((0, -2, 0), (0.8018, 0.2673, 0.5345)),
            ((0, 0, -2), (0.5345, 0.8018, 0.2673)),
            ((2, 0, 2), (0, 0, -1)),
            ((0, 2, 2), (0, -1, 0)),
            ((2, 2, 0), (-1, 0, 0)),
        ],
    )
    def test_ray_misses_cube(self, origin, direction):
        """Rays passing beside the cube."""
        from src.prism.core.ray import Ray
        from src.prism.geometry.cube import Cube

        assert Cube().local_intersections(Ray.new(origin, direction)) == []


class TestCubeNormal:
    """Tests for face normals."""

    @pytest.mark.parametrize(
        "surface_point,expected",
        [
            ((1, 0.5, -0.8), (1, 0, 0)),
            ((-1, -0.2, 0.9), (-1, 0, 0)),
            ((-0.4, 1, -0.1), (0, 1, 0)),
            ((0.3, -1, -0.7), (0, -1, 0)),
            ((-0.6, 0.3, 1), (0, 0, 1)),
            ((0.4, 0.4, -1), (0, 0, -1)),
            ((1, 1, 1), (1, 0, 0)),
            ((-1, -1, -1), (-1, 0, 0)),
        ],
    )
    def test_normal(self, surface_point, expected):
        """The face with the largest component wins; corners pick x."""
        from src.prism.core.tuples import point, vector
        from src.prism.geometry.cube import Cube

        assert Cube().local_normal(point(*surface_point)) == vector(*expected)
