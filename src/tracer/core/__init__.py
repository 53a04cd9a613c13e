"""Core building blocks consumed by the intersection code.

Components:
    ray: Ray data structure and vector utilities
    interval: Closed 1-D intervals used by the slab test
    integrator: Per-pixel rendering loop with flat shading
"""

from .interval import (
    Interval,
    interval_endpoints,
    interval_intersection,
    interval_is_empty,
    make_interval,
    unbounded_interval,
)
from .ray import (
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: integrator is NOT imported here to avoid circular imports.
# Import directly from src.tracer.core.integrator when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "Interval",
    "make_interval",
    "unbounded_interval",
    "interval_intersection",
    "interval_is_empty",
    "interval_endpoints",
]
