"""Sphere primitive with bounding-box accelerated ray-sphere intersection.

This module provides the Sphere dataclass, the HitRecord shared by every
surface kind, and the sphere intersection function.

Intersection runs in two phases:
1. The sphere's axis-aligned bounding box (center +/- radius) rejects rays
   that cannot reach the sphere.
2. The ray-sphere quadratic is solved for the smallest strictly positive
   root. A ray starting inside the sphere only has a positive far root; a
   tangent ray has a zero discriminant and two equal roots.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, 5), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import Ray, vec3

from .aabb import BoundingBox, bounding_box_intersects, make_bounding_box


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Must be strictly positive.
    """

    center: vec3
    radius: ti.f64


@ti.dataclass
class HitRecord:
    """Closest forward intersection between a ray and a surface.

    Attributes:
        hit: 1 if the ray intersects the surface ahead of its origin, 0 if
            there is no intersection.
        t: Distance along the ray to the intersection, in units of the ray
            direction's length. Strictly positive. Only valid if hit == 1.
        normal: Unit surface normal at the intersection. Only valid if
            hit == 1.
    """

    hit: ti.i32
    t: ti.f64
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(hit=0, t=0.0, normal=vec3(0.0, 0.0, 0.0))


@ti.func
def make_sphere(center: vec3, radius: ti.f64) -> Sphere:
    """Create a sphere from center and radius.

    A non-positive radius is a precondition violation. It is caught by the
    assertion when Taichi runs with debug=True and produces meaningless
    geometry otherwise.
    """
    assert radius > 0.0, "sphere radius must be positive"
    return Sphere(center=center, radius=radius)


@ti.func
def sphere_bounding_box(sphere: Sphere) -> BoundingBox:
    """Compute the minimal axis-aligned bounding box of a sphere."""
    radius_vec = vec3(sphere.radius, sphere.radius, sphere.radius)
    return make_bounding_box(sphere.center - radius_vec, sphere.center + radius_vec)


@ti.func
def hit_sphere(sphere: Sphere, ray: Ray) -> HitRecord:
    """Find the closest forward intersection between a ray and a sphere.

    With oc = center - origin and proj = dot(oc, direction), a point at
    distance t along the ray lies on the sphere when

        a*t^2 - 2*proj*t + (|oc|^2 - radius^2) = 0,   a = |direction|^2

    so t = (proj -/+ sqrt(discriminant)) / a with
    discriminant = proj^2 - a * (|oc|^2 - radius^2). Distances are in
    ray-parameter units, multiples of the direction's length, as for
    hit_plane. For a unit direction a == 1 and t is the Euclidean distance.

    Args:
        sphere: The sphere to test.
        ray: The ray to test. The direction must be nonzero.

    Returns:
        A HitRecord for the smallest strictly positive root, with the
        outward unit normal at the hit point, or a miss record.
    """
    did_hit = 0
    hit_t = ti.f64(0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if bounding_box_intersects(sphere_bounding_box(sphere), ray):
        origin_to_center = sphere.center - ray.origin
        proj = tm.dot(origin_to_center, ray.direction)
        a = tm.dot(ray.direction, ray.direction)
        c = tm.dot(origin_to_center, origin_to_center) - sphere.radius * sphere.radius
        discriminant = proj * proj - a * c

        if discriminant >= 0.0:
            sqrt_d = ti.sqrt(discriminant)

            # Near root first, then the far root for origins inside the sphere
            t = (proj - sqrt_d) / a
            if t <= 0.0:
                t = (proj + sqrt_d) / a

            if t > 0.0:
                did_hit = 1
                hit_t = t
                hit_normal = tm.normalize(ray.direction * t - origin_to_center)

    return HitRecord(hit=did_hit, t=hit_t, normal=hit_normal)
