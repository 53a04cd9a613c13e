"""Axis-aligned bounding box with a slab-method ray test.

A bounding box is a cheap rejection test run before the exact intersection
math of a primitive. The box is stored as its componentwise minimum and
maximum corners; make_bounding_box() derives these per axis so callers may
pass any two opposite corners.

The slab test intersects the ray's parametric range against the pair of
axis-perpendicular planes bounding the box on each axis, in the order x, y,
z. The running interval starts unbounded and any empty intersection is an
immediate miss. An axis along which the ray does not move adds no
parametric constraint, but if the ray origin lies outside the box on that
axis the ray can never enter the box, so it misses.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.geometry.aabb import make_bounding_box, bounding_box_intersects
    >>> # Use bounding_box_intersects within a Taichi kernel
"""

import taichi as ti

from src.tracer.core.interval import (
    interval_endpoints,
    interval_intersection,
    interval_is_empty,
    make_interval,
    unbounded_interval,
)
from src.tracer.core.ray import Ray, vec3


@ti.dataclass
class BoundingBox:
    """An axis-aligned box given by two opposite corners.

    Attributes:
        minimum: The corner with the lowest coordinate on every axis.
        maximum: The corner with the highest coordinate on every axis.
    """

    minimum: vec3
    maximum: vec3


@ti.func
def make_bounding_box(corner_a: vec3, corner_b: vec3) -> BoundingBox:
    """Create a bounding box from any two opposite corners.

    The minimum and maximum corners are derived per axis, so the corners may
    be passed in either order.
    """
    return BoundingBox(minimum=ti.min(corner_a, corner_b), maximum=ti.max(corner_a, corner_b))


@ti.func
def bounding_box_intersects(box: BoundingBox, ray: Ray) -> ti.i32:
    """Test whether a ray intersects a bounding box.

    Args:
        box: The box to test.
        ray: The ray to test. The direction need not be normalized.

    Returns:
        1 if some part of the ray at or ahead of its origin passes through
        the box (including rays that start inside it), 0 otherwise.
    """
    t_interval = unbounded_interval()
    missed = 0

    for axis in ti.static(range(3)):
        if missed == 0:
            origin = ray.origin[axis]
            direction = ray.direction[axis]
            if direction != 0.0:
                t0 = (box.minimum[axis] - origin) / direction
                t1 = (box.maximum[axis] - origin) / direction
                t_interval = interval_intersection(t_interval, make_interval(t0, t1))
                if interval_is_empty(t_interval):
                    missed = 1
            elif origin < box.minimum[axis] or origin > box.maximum[axis]:
                # Parallel to this slab and outside it
                missed = 1

    result = 0
    if missed == 0:
        endpoints = interval_endpoints(t_interval)
        if endpoints[0] >= 0.0 or endpoints[1] >= 0.0:
            result = 1
    return result
