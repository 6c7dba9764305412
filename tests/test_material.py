"""Unit tests for Phong materials and point lights.

Tests cover:
- Default material values and validation
- Phong lighting for the classic eye/light configurations
- Shadowed surfaces and lights behind the surface
- Pattern lookup during lighting
"""

import math

import pytest


@pytest.fixture
def surface():
    """A default material shaded at the origin."""
    from src.prism.core.tuples import point
    from src.prism.materials.material import Material

    return Material(), point(0, 0, 0)


class TestMaterial:
    """Tests for material construction."""

    def test_defaults(self):
        """The default material is white and moderately shiny."""
        from src.prism.core.color import WHITE
        from src.prism.materials.material import Material

        m = Material()
        assert m.color == WHITE
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == 1.0
        assert m.pattern is None

    def test_invalid_refractive_index(self):
        """Refractive indices must be positive."""
        from src.prism.materials.material import Material

        with pytest.raises(ValueError, match="Refractive index"):
            Material(refractive_index=0.0)

    def test_point_light_new(self):
        """Lights can be built from plain triples."""
        from src.prism.core.color import WHITE
        from src.prism.core.tuples import point
        from src.prism.materials.light import PointLight

        light = PointLight.new((0, 0, -10))
        assert light.position == point(0, 0, -10)
        assert light.intensity == WHITE

    def test_default_color_is_per_instance(self):
        """Every material gets its own default color."""
        import dataclasses

        from src.prism.core.color import WHITE
        from src.prism.materials.material import Material

        color_field = next(f for f in dataclasses.fields(Material) if f.name == "color")
        assert color_field.default is dataclasses.MISSING
        assert color_field.default_factory() == WHITE

        first, second = Material(), Material()
        first.color = first.color * 0.5
        assert second.color == WHITE

    def test_index_constants(self):
        """Vacuum is the default medium and glass bends light more."""
        from src.prism.materials import GLASS_INDEX, VACUUM_INDEX, Material

        assert VACUUM_INDEX == 1.0
        assert GLASS_INDEX == 1.5
        assert Material().refractive_index == VACUUM_INDEX


class TestLighting:
    """Tests for the Phong reflection model."""

    def test_eye_between_light_and_surface(self, surface):
        """Full ambient, diffuse and specular."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, 0, -1), vector(0, 0, -1), False
        )
        assert result == Color(1.9, 1.9, 1.9)

    def test_eye_offset_45_degrees(self, surface):
        """Specular falls to zero off the reflection direction."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        half = math.sqrt(2) / 2
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, half, -half), vector(0, 0, -1), False
        )
        assert result == Color(1.0, 1.0, 1.0)

    def test_light_offset_45_degrees(self, surface):
        """Diffuse shrinks with the light angle."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, 0, -1), vector(0, 0, -1), False
        )
        assert result == Color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self, surface):
        """Full specular highlight."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        half = math.sqrt(2) / 2
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, -half, -half), vector(0, 0, -1), False
        )
        assert math.isclose(result.red, 1.6364, abs_tol=1e-4)
        assert math.isclose(result.blue, 1.6364, abs_tol=1e-4)

    def test_light_behind_surface(self, surface):
        """Only ambient remains."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        light = PointLight(point(0, 0, 10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, 0, -1), vector(0, 0, -1), False
        )
        assert result == Color(0.1, 0.1, 0.1)

    def test_surface_in_shadow(self, surface):
        """Shadowed points get ambient only."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight

        material, position = surface
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, 0, -1), vector(0, 0, -1), True
        )
        assert result == Color(0.1, 0.1, 0.1)

    def test_point_at_light_position(self, surface):
        """A point sitting on the light has no light direction and gets ambient only."""
        from src.prism.core.color import Color
        from src.prism.core.tuples import vector
        from src.prism.materials.light import PointLight

        material, position = surface
        light = PointLight(position, Color(1, 1, 1))
        result = material.lighting(
            light, position, position, vector(0, 0, -1), vector(0, 0, -1), False
        )
        assert result == Color(0.1, 0.1, 0.1)

    def test_pattern_overrides_color(self):
        """The pattern color is looked up at the object point."""
        from src.prism.core.color import BLACK, WHITE, Color
        from src.prism.core.tuples import point, vector
        from src.prism.materials.light import PointLight
        from src.prism.materials.material import Material
        from src.prism.materials.patterns import StripePattern

        material = Material(
            pattern=StripePattern(WHITE, BLACK), ambient=1, diffuse=0, specular=0
        )
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        eyev = vector(0, 0, -1)
        normalv = vector(0, 0, -1)

        c1 = material.lighting(light, point(0.9, 0, 0), point(0.9, 0, 0), eyev, normalv, False)
        c2 = material.lighting(light, point(1.1, 0, 0), point(1.1, 0, 0), eyev, normalv, False)
        assert c1 == WHITE
        assert c2 == BLACK
