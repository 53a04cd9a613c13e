"""Uniform intersection interface over all surface kinds.

A Surface is a tagged variant: its kind selects the primitive, and the
vector and scalar slots carry that primitive's parameters.

    kind     vector    scalar
    PLANE    normal    distance from origin
    SPHERE   center    radius

closest_intersection() dispatches on the kind, so callers holding a mix of
planes and spheres can query them uniformly and compare the returned
distances. New primitive kinds add a tag and a branch here.
"""

from enum import IntEnum

import taichi as ti

from src.tracer.core.ray import Ray, vec3

from .plane import Plane, hit_plane
from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record


class SurfaceKind(IntEnum):
    """Enumeration of supported surface kinds."""

    PLANE = 0
    SPHERE = 1


# Plain ints for use inside Taichi functions
SURFACE_PLANE = int(SurfaceKind.PLANE)
SURFACE_SPHERE = int(SurfaceKind.SPHERE)


@ti.dataclass
class Surface:
    """A surface of any supported kind.

    Attributes:
        kind: The SurfaceKind value.
        vector: Plane normal or sphere center.
        scalar: Plane distance from origin or sphere radius.
    """

    kind: ti.i32
    vector: vec3
    scalar: ti.f64


@ti.func
def surface_from_plane(plane: Plane) -> Surface:
    """Wrap a plane as a Surface."""
    return Surface(kind=SURFACE_PLANE, vector=plane.normal, scalar=plane.distance)


@ti.func
def surface_from_sphere(sphere: Sphere) -> Surface:
    """Wrap a sphere as a Surface."""
    return Surface(kind=SURFACE_SPHERE, vector=sphere.center, scalar=sphere.radius)


@ti.func
def closest_intersection(surface: Surface, ray: Ray) -> HitRecord:
    """Find the closest forward intersection between a ray and a surface.

    Args:
        surface: The surface to test.
        ray: The ray to test.

    Returns:
        A HitRecord with a strictly positive distance and a unit normal, or
        a miss record. Unknown kinds never intersect.
    """
    result = make_miss_record()
    if surface.kind == SURFACE_PLANE:
        result = hit_plane(Plane(normal=surface.vector, distance=surface.scalar), ray)
    elif surface.kind == SURFACE_SPHERE:
        result = hit_sphere(Sphere(center=surface.vector, radius=surface.scalar), ray)
    return result
