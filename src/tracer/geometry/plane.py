"""Infinite plane primitive with ray-plane intersection.

A plane is the set of points p with dot(p, normal) == distance, where the
normal is unit length and distance is the signed offset of the plane from
the origin along that normal.

The intersection reports the plane's stored normal unchanged, whichever
side the ray arrives from. Orienting the normal toward the viewer is left
to shading.
"""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import Ray, vec3

from .sphere import HitRecord


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        normal: Unit normal vector of the plane (vec3).
        distance: Signed distance from the origin along the normal.
    """

    normal: vec3
    distance: ti.f64


@ti.func
def make_plane(normal: vec3, distance: ti.f64) -> Plane:
    """Create a plane, normalizing the supplied normal.

    Args:
        normal: Any nonzero vector perpendicular to the plane.
        distance: Signed distance of the plane from the origin along the
            normalized normal.
    """
    return Plane(normal=tm.normalize(normal), distance=distance)


@ti.func
def hit_plane(plane: Plane, ray: Ray) -> HitRecord:
    """Find the intersection between a ray and a plane.

    A ray parallel to the plane never intersects it, including a ray lying
    in the plane. Otherwise the intersection is at

        t = (distance - dot(origin, normal)) / dot(direction, normal)

    and is reported only when t > 0.

    Args:
        plane: The plane to test.
        ray: The ray to test.

    Returns:
        A HitRecord with the plane's stored normal, or a miss record.
    """
    did_hit = 0
    hit_t = ti.f64(0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    direction_dot_normal = tm.dot(ray.direction, plane.normal)
    if direction_dot_normal != 0.0:
        t = (plane.distance - tm.dot(ray.origin, plane.normal)) / direction_dot_normal
        if t > 0.0:
            did_hit = 1
            hit_t = t
            hit_normal = plane.normal

    return HitRecord(hit=did_hit, t=hit_t, normal=hit_normal)
