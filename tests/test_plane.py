"""Unit tests for the plane primitive."""


class TestPlane:
    """Tests for plane intersection, normal and bounds."""

    def test_normal_is_constant(self):
        """Every point has the +y normal."""
        from src.prism.core.tuples import point, vector
        from src.prism.geometry.plane import Plane

        plane = Plane()
        for p in (point(0, 0, 0), point(10, 0, -10), point(-5, 0, 150)):
            assert plane.local_normal(p) == vector(0, 1, 0)

    def test_parallel_and_coplanar_rays_miss(self):
        """Rays with no y motion never cross the plane."""
        from src.prism.core.ray import Ray
        from src.prism.geometry.plane import Plane

        plane = Plane()
        assert plane.local_intersections(Ray.new((0, 10, 0), (0, 0, 1))) == []
        assert plane.local_intersections(Ray.new((0, 0, 0), (0, 0, 1))) == []

    def test_ray_from_above_and_below(self):
        """One crossing at t = -origin.y / direction.y."""
        from src.prism.core.ray import Ray
        from src.prism.geometry.plane import Plane

        plane = Plane()
        above = plane.local_intersections(Ray.new((0, 1, 0), (0, -1, 0)))
        below = plane.local_intersections(Ray.new((0, -1, 0), (0, 1, 0)))

        assert [x.t for x in above] == [1.0]
        assert [x.t for x in below] == [1.0]
        assert above[0].object is plane

    def test_bounds_are_unbounded(self):
        """Planes extend to infinity in x and z; transformed, in every direction."""
        import math

        from src.prism.core.matrix import Matrix
        from src.prism.geometry.plane import Plane

        local = Plane().local_bounds()
        assert local.minimum.x == -math.inf
        assert local.maximum.z == math.inf
        assert local.minimum.y == local.maximum.y == 0.0

        moved = Plane(Matrix.translation(0, 1, 0)).bounds()
        assert not moved.is_finite()
        assert moved.minimum.y == -math.inf
