"""Prism: an offline Whitted-style ray tracer in pure Python.

The renderer casts one ray per pixel through a transformed viewport and
computes the color seen along it, with Phong lighting, hard shadows and
recursive reflection/refraction.

Subpackages:
    core: Tuples, matrices, rays, colors and float tolerances
    geometry: Shape base class, primitives, groups, bounds and id allocation
    materials: Phong materials, point lights and solid patterns
    scene: Intersection engine, world shading and OBJ import
    camera: Camera model and the threaded render loop
    preview: Canvas image sink, PPM/PNG export and display utilities
"""

__version__ = "0.1.0"
