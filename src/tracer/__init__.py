"""Ray-surface intersection core of a minimal Taichi ray tracer.

This package computes where rays first strike analytic surfaces and renders
flat-shaded images of scenes built from them:
- Planes and spheres behind a uniform closest-intersection interface
- Axis-aligned bounding box pre-test for spheres
- Per-pixel rendering loop and sRGB PNG export

Subpackages:
    core: Rays, vector utilities, intervals and the rendering loop
    geometry: Bounding boxes, surface primitives and intersection algorithms
    scene: Surface storage, nearest-hit queries and scene configuration
    camera: Pinhole camera with ray generation
    preview: Image export utilities

Taichi must be initialised with ``default_fp=ti.f64`` before use.
"""

__version__ = "0.1.0"
