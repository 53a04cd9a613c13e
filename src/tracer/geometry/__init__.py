"""Geometry module for surface primitives and their intersection tests.

Components:
    aabb: Axis-aligned bounding box with the slab-method ray test
    plane: Infinite plane primitive
    sphere: Sphere primitive and the shared HitRecord
    surface: Tagged Surface variant with uniform closest_intersection

All intersection routines are Taichi functions (@ti.func) returning a
HitRecord whose hit flag is 0 when the ray misses:
    rec = closest_intersection(surface, ray)
"""

from .aabb import BoundingBox, bounding_box_intersects, make_bounding_box
from .plane import Plane, hit_plane, make_plane
from .sphere import (
    HitRecord,
    Sphere,
    hit_sphere,
    make_miss_record,
    make_sphere,
    sphere_bounding_box,
)
from .surface import (
    Surface,
    SurfaceKind,
    closest_intersection,
    surface_from_plane,
    surface_from_sphere,
)

__all__ = [
    "BoundingBox",
    "make_bounding_box",
    "bounding_box_intersects",
    "Plane",
    "make_plane",
    "hit_plane",
    "Sphere",
    "HitRecord",
    "make_sphere",
    "make_miss_record",
    "sphere_bounding_box",
    "hit_sphere",
    "Surface",
    "SurfaceKind",
    "closest_intersection",
    "surface_from_plane",
    "surface_from_sphere",
]
