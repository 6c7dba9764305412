"""Unit tests for the world and its shading pipeline.

Tests cover:
- The reference world and ray queries
- Shading hits from outside and inside, with and without shadows
- Reflection, refraction and the Schlick blend
- Termination of the bounce recursion
- Shape registration
"""

import math

import pytest


@pytest.fixture
def position_pattern():
    """A pattern whose color is the pattern space point itself."""
    from src.prism.core.color import Color
    from src.prism.materials.patterns import Pattern

    class PositionPattern(Pattern):
        def pattern_color(self, pattern_point):
            return Color(pattern_point.x, pattern_point.y, pattern_point.z)

    return PositionPattern()


def assert_color(actual, expected, tolerance=1e-3):
    assert actual.as_tuple() == pytest.approx(expected, abs=tolerance)


class TestWorldContents:
    """Tests for building worlds."""

    def test_empty_world(self):
        """No light, no shapes."""
        from src.prism.scene.world import World

        world = World()
        assert world.light is None
        assert len(world) == 0

    def test_default_world(self, world):
        """Two concentric spheres and a white light."""
        from src.prism.core.color import Color
        from src.prism.core.matrix import Matrix
        from src.prism.core.tuples import point

        outer, inner = world.objects
        assert world.light.position == point(-10, 10, -10)
        assert world.light.intensity == Color(1, 1, 1)
        assert outer.material.color == Color(0.8, 1.0, 0.6)
        assert outer.material.diffuse == 0.7
        assert outer.material.specular == 0.2
        assert inner.transform == Matrix.scaling(0.5, 0.5, 0.5)

    def test_added_shapes_are_registered(self):
        """Every node of an added tree gets an identifier."""
        from src.prism.geometry.group import Group
        from src.prism.geometry.sphere import Sphere
        from src.prism.scene.world import World

        leaf = Sphere()
        group = Group(children=[leaf])
        world = World()
        world.add(group)

        assert group.id is not None and leaf.id is not None
        assert group in world
        assert leaf in world
        assert Sphere() not in world

    def test_cannot_add_a_child(self):
        """Only roots are top-level objects."""
        from src.prism.geometry.group import Group
        from src.prism.geometry.sphere import Sphere
        from src.prism.scene.world import World

        group = Group(children=[Sphere()])
        with pytest.raises(ValueError):
            World().add(group.children[0])


class TestWorldQueries:
    """Tests for intersections and shadows."""

    def test_intersections_are_sorted(self, world):
        """All crossings of every shape, by increasing t."""
        from src.prism.core.ray import Ray

        xs = world.intersections(Ray.new((0, 0, -5), (0, 0, 1)))
        assert [x.t for x in xs] == pytest.approx([4.0, 4.5, 5.5, 6.0])

    @pytest.mark.parametrize(
        "coordinates,shadowed",
        [
            ((0, 10, 0), False),
            ((10, -10, 10), True),
            ((-20, 20, -20), False),
            ((-2, 2, -2), False),
        ],
    )
    def test_is_shadowed(self, world, coordinates, shadowed):
        """Only occluders between the point and the light count."""
        from src.prism.core.tuples import point

        assert world.is_shadowed(point(*coordinates)) is shadowed

    def test_shapes_can_opt_out_of_shadows(self, world):
        """Non-shadow-casting shapes are ignored by shadow rays."""
        from src.prism.core.tuples import point

        for shape in world.objects:
            shape.casts_shadow = False
        assert world.is_shadowed(point(10, -10, 10)) is False

    def test_point_at_light_is_not_shadowed(self, world):
        """A point on the light itself sees the light."""
        assert world.is_shadowed(world.light.position) is False

    def test_unlit_world_is_dark(self):
        """Without a light every point is in shadow and surfaces are black."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point
        from src.prism.geometry.sphere import Sphere
        from src.prism.scene.world import World

        world = World(objects=[Sphere()])
        assert world.is_shadowed(point(0, 0, -5))
        assert world.color_at(Ray.new((0, 0, -5), (0, 0, 1))) == BLACK


class TestShading:
    """Tests for shade_hit and color_at."""

    def test_shade_from_outside(self, world):
        """Direct lighting of the outer sphere."""
        from src.prism.core.ray import Ray
        from src.prism.scene.intersection import Intersection

        ray = Ray.new((0, 0, -5), (0, 0, 1))
        state = Intersection(4, world.objects[0]).prepare(ray)
        assert_color(world.shade_hit(state), (0.38066, 0.47583, 0.2855), 1e-4)

    def test_shade_from_inside(self, world):
        """Light inside the inner sphere."""
        from src.prism.core.ray import Ray
        from src.prism.materials.light import PointLight
        from src.prism.scene.intersection import Intersection

        world.light = PointLight.new((0, 0.25, 0))
        ray = Ray.new((0, 0, 0), (0, 0, 1))
        state = Intersection(0.5, world.objects[1]).prepare(ray)
        assert_color(world.shade_hit(state), (0.90498, 0.90498, 0.90498), 1e-4)

    def test_shade_in_shadow(self):
        """A shadowed point only gets ambient light."""
        from src.prism.core.matrix import Matrix
        from src.prism.core.ray import Ray
        from src.prism.geometry.sphere import Sphere
        from src.prism.materials.light import PointLight
        from src.prism.scene.intersection import Intersection
        from src.prism.scene.world import World

        back = Sphere(Matrix.translation(0, 0, 10))
        world = World(PointLight.new((0, 0, -10)), [Sphere(), back])
        ray = Ray.new((0, 0, 5), (0, 0, 1))
        state = Intersection(4, back).prepare(ray)
        assert_color(world.shade_hit(state), (0.1, 0.1, 0.1), 1e-5)

    def test_color_when_ray_misses(self, world):
        """Background is black."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray

        assert world.color_at(Ray.new((0, 0, -5), (0, 1, 0))) == BLACK

    def test_color_when_ray_hits(self, world):
        """Same as shading the outer sphere directly."""
        from src.prism.core.ray import Ray

        color = world.color_at(Ray.new((0, 0, -5), (0, 0, 1)))
        assert_color(color, (0.38066, 0.47583, 0.2855), 1e-4)

    def test_color_with_intersection_behind_ray(self, world):
        """The ray starts between the spheres and sees the inner one."""
        from src.prism.core.ray import Ray

        outer, inner = world.objects
        outer.material.ambient = 1.0
        inner.material.ambient = 1.0

        color = world.color_at(Ray.new((0, 0, 0.75), (0, 0, -1)))
        assert color == inner.material.color


class TestReflection:
    """Tests for reflected light."""

    def _reflective_plane(self, world, reflective=0.5):
        from src.prism.core.matrix import Matrix
        from src.prism.geometry.plane import Plane
        from src.prism.materials.material import Material

        return world.add(Plane(Matrix.translation(0, -1, 0), Material(reflective=reflective)))

    def test_matte_surface(self, world):
        """Non-reflective surfaces reflect nothing."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray
        from src.prism.scene.intersection import Intersection

        inner = world.objects[1]
        inner.material.ambient = 1.0
        state = Intersection(1, inner).prepare(Ray.new((0, 0, 0), (0, 0, 1)))
        assert world.reflected_color(state, 5) == BLACK

    def test_reflective_surface(self, world, sqrt2_2):
        """Half of the mirrored color."""
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.scene.intersection import Intersection

        plane = self._reflective_plane(world)
        ray = Ray(point(0, 0, -3), vector(0, -sqrt2_2, sqrt2_2))
        state = Intersection(math.sqrt(2), plane).prepare(ray)
        assert_color(world.reflected_color(state, 5), (0.19032, 0.2379, 0.14274))

    def test_shade_hit_adds_reflection(self, world, sqrt2_2):
        """Surface color plus reflection."""
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.scene.intersection import Intersection

        plane = self._reflective_plane(world)
        ray = Ray(point(0, 0, -3), vector(0, -sqrt2_2, sqrt2_2))
        state = Intersection(math.sqrt(2), plane).prepare(ray)
        assert_color(world.shade_hit(state, 5), (0.87677, 0.92436, 0.82918))

    def test_exhausted_budget(self, world, sqrt2_2, monkeypatch):
        """No further rays are cast at budget 0."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.scene.intersection import Intersection

        plane = self._reflective_plane(world)
        ray = Ray(point(0, 0, -3), vector(0, -sqrt2_2, sqrt2_2))
        state = Intersection(math.sqrt(2), plane).prepare(ray)

        def fail(*args, **kwargs):
            raise AssertionError("color_at must not be called")

        monkeypatch.setattr(world, "color_at", fail)
        assert world.reflected_color(state, 0) == BLACK

    def test_parallel_mirrors_terminate(self):
        """Infinite mutual reflection is cut off by the budget."""
        from src.prism.core.color import Color
        from src.prism.core.matrix import Axis, Matrix
        from src.prism.core.ray import Ray
        from src.prism.geometry.plane import Plane
        from src.prism.materials.light import PointLight
        from src.prism.materials.material import Material
        from src.prism.scene.world import World

        lower = Plane(Matrix.translation(0, -1, 0), Material(reflective=1.0))
        upper = Plane(
            Matrix.rotation(Axis.X, math.pi).translate(0, 1, 0), Material(reflective=1.0)
        )
        world = World(PointLight.new((0, 0, 0)), [lower, upper])

        color = world.color_at(Ray.new((0, 0, 0), (0, 1, 0)))
        assert isinstance(color, Color)


class TestRefraction:
    """Tests for transmitted light."""

    def test_opaque_surface(self, world):
        """Opaque surfaces transmit nothing."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray

        ray = Ray.new((0, 0, -5), (0, 0, 1))
        xs = world.intersections(ray)
        state = xs[0].prepare(ray, xs)
        assert world.refracted_color(state, 5) == BLACK

    def test_exhausted_budget(self, world, monkeypatch):
        """No further rays are cast at budget 0."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray

        outer = world.objects[0]
        outer.material.transparency = 1.0
        outer.material.refractive_index = 1.5

        ray = Ray.new((0, 0, -5), (0, 0, 1))
        xs = world.intersections(ray)
        state = xs[0].prepare(ray, xs)

        def fail(*args, **kwargs):
            raise AssertionError("color_at must not be called")

        monkeypatch.setattr(world, "color_at", fail)
        assert world.refracted_color(state, 0) == BLACK

    def test_total_internal_reflection(self, world, sqrt2_2, monkeypatch):
        """Nothing is transmitted past the critical angle."""
        from src.prism.core.color import BLACK
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.scene.intersection import Intersection

        outer = world.objects[0]
        outer.material.transparency = 1.0
        outer.material.refractive_index = 1.5

        ray = Ray(point(0, 0, sqrt2_2), vector(0, 1, 0))
        xs = [Intersection(-sqrt2_2, outer), Intersection(sqrt2_2, outer)]
        state = xs[1].prepare(ray, xs)

        def fail(*args, **kwargs):
            raise AssertionError("color_at must not be called")

        monkeypatch.setattr(world, "color_at", fail)
        assert world.refracted_color(state, 5) == BLACK

    def test_refracted_ray(self, world, position_pattern):
        """The refracted ray sees the pattern on the far side."""
        from src.prism.core.ray import Ray
        from src.prism.scene.intersection import Intersection

        outer, inner = world.objects
        outer.material.ambient = 1.0
        outer.material.pattern = position_pattern
        inner.material.transparency = 1.0
        inner.material.refractive_index = 1.5

        ray = Ray.new((0, 0, 0.1), (0, 1, 0))
        xs = [
            Intersection(-0.9899, outer),
            Intersection(-0.4899, inner),
            Intersection(0.4899, inner),
            Intersection(0.9899, outer),
        ]
        state = xs[2].prepare(ray, xs)
        assert_color(world.refracted_color(state, 5), (0, 0.99888, 0.04725))

    def test_transparent_floor(self, world, sqrt2_2):
        """A ball seen through a glass floor."""
        from src.prism.core.color import Color
        from src.prism.core.matrix import Matrix
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.geometry.plane import Plane
        from src.prism.geometry.sphere import Sphere
        from src.prism.materials.material import Material
        from src.prism.scene.intersection import Intersection

        floor = world.add(
            Plane(Matrix.translation(0, -1, 0), Material(transparency=0.5, refractive_index=1.5))
        )
        world.add(
            Sphere(Matrix.translation(0, -3.5, -0.5), Material(color=Color(1, 0, 0), ambient=0.5))
        )

        ray = Ray(point(0, 0, -3), vector(0, -sqrt2_2, sqrt2_2))
        xs = [Intersection(math.sqrt(2), floor)]
        state = xs[0].prepare(ray, xs)
        assert_color(world.shade_hit(state, 5), (0.93642, 0.68642, 0.68642))

    def test_schlick_blend(self, world, sqrt2_2):
        """Reflective glass weights reflection by the Fresnel term."""
        from src.prism.core.color import Color
        from src.prism.core.matrix import Matrix
        from src.prism.core.ray import Ray
        from src.prism.core.tuples import point, vector
        from src.prism.geometry.plane import Plane
        from src.prism.geometry.sphere import Sphere
        from src.prism.materials.material import Material
        from src.prism.scene.intersection import Intersection

        floor = world.add(
            Plane(
                Matrix.translation(0, -1, 0),
                Material(reflective=0.5, transparency=0.5, refractive_index=1.5),
            )
        )
        world.add(
            Sphere(Matrix.translation(0, -3.5, -0.5), Material(color=Color(1, 0, 0), ambient=0.5))
        )

        ray = Ray(point(0, 0, -3), vector(0, -sqrt2_2, sqrt2_2))
        xs = [Intersection(math.sqrt(2), floor)]
        state = xs[0].prepare(ray, xs)
        assert_color(world.shade_hit(state, 5), (0.93391, 0.69643, 0.69243))
