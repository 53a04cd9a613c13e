"""Scene-level surface storage and nearest-hit queries.

This module stores planes and spheres in Taichi fields and finds, for a
ray, the nearest forward intersection over every stored surface. Each
surface also carries a flat RGB color used by the renderer.

Host-side add functions validate geometry before it reaches the fields:
a plane needs a nonzero normal and a sphere a strictly positive radius.
Geometry code inside kernels trusts what is stored.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.scene.intersection import (
    ...     add_plane, add_sphere, clear_scene, query_scene
    ... )
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, 5.0), 0.5, color=(1.0, 0.0, 0.0))
    >>> add_plane((0.0, 1.0, 0.0), -1.0)
    >>> query_scene((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    (4.5, (0.0, 0.0, -1.0), 0)
"""

from collections.abc import Sequence

import numpy as np
import taichi as ti

from src.tracer.core.ray import Ray, make_ray, vec3
from src.tracer.geometry.surface import Surface, SurfaceKind, closest_intersection

Vec3Like = Sequence[float]


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if any surface was hit, 0 on a miss.
        t: Distance to the nearest intersection. Only valid if hit == 1.
        normal: Unit normal of the hit surface. Only valid if hit == 1.
        surface_id: Index of the hit surface, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f64
    normal: vec3
    surface_id: ti.i32


# Maximum number of surfaces supported in the scene
MAX_SURFACES = 1024

# Surface storage: Structure of Arrays layout
surface_kinds = ti.field(dtype=ti.i32, shape=MAX_SURFACES)
surface_vectors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SURFACES)
surface_scalars = ti.field(dtype=ti.f64, shape=MAX_SURFACES)
surface_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SURFACES)
num_surfaces = ti.field(dtype=ti.i32, shape=())

# Host query buffers
_query_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
_query_direction = ti.Vector.field(3, dtype=ti.f64, shape=())
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=ti.f64, shape=())
_query_normal = ti.Vector.field(3, dtype=ti.f64, shape=())
_query_surface_id = ti.field(dtype=ti.i32, shape=())


def _as_vec3(value: Vec3Like, name: str) -> np.ndarray:
    """Convert a 3-sequence to a float64 array, validating its shape."""
    array = np.asarray(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got shape {array.shape}")
    if not np.all(np.isfinite(array)):
        raise ValueError(f"{name} must be finite, got {tuple(array.tolist())}")
    return array


def clear_scene() -> None:
    """Remove all surfaces from the scene.

    Resets the surface count to zero. The field data is overwritten when new
    surfaces are added.
    """
    num_surfaces[None] = 0


def _store_surface(kind: SurfaceKind, vector: np.ndarray, scalar: float, color: Vec3Like) -> int:
    idx = num_surfaces[None]
    if idx >= MAX_SURFACES:
        raise RuntimeError(f"Maximum number of surfaces ({MAX_SURFACES}) exceeded")
    color_array = _as_vec3(color, "color")
    surface_kinds[idx] = int(kind)
    surface_vectors[idx] = vector.tolist()
    surface_scalars[idx] = float(scalar)
    surface_colors[idx] = color_array.tolist()
    num_surfaces[None] = idx + 1
    return idx


def add_plane(
    normal: Vec3Like,
    distance: float,
    color: Vec3Like = (1.0, 1.0, 1.0),
) -> int:
    """Add a plane to the scene.

    Args:
        normal: Any nonzero vector perpendicular to the plane. It is stored
            normalized.
        distance: Signed distance of the plane from the origin along the
            normalized normal.
        color: Flat RGB color of the plane in linear space.

    Returns:
        The index of the added surface.

    Raises:
        ValueError: If the normal is zero-length or not finite, or the
            distance is not finite.
        RuntimeError: If the maximum number of surfaces is exceeded.
    """
    normal_array = _as_vec3(normal, "normal")
    norm = float(np.linalg.norm(normal_array))
    if norm == 0.0:
        raise ValueError("Plane normal must be nonzero")
    if not np.isfinite(distance):
        raise ValueError(f"Plane distance must be finite, got {distance}")
    return _store_surface(SurfaceKind.PLANE, normal_array / norm, distance, color)


def add_sphere(
    center: Vec3Like,
    radius: float,
    color: Vec3Like = (1.0, 1.0, 1.0),
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere. Must be finite and strictly
            positive.
        color: Flat RGB color of the sphere in linear space.

    Returns:
        The index of the added surface.

    Raises:
        ValueError: If the radius is not finite and strictly positive.
        RuntimeError: If the maximum number of surfaces is exceeded.
    """
    if not (np.isfinite(radius) and radius > 0.0):
        raise ValueError(f"Sphere radius must be finite and positive, got {radius}")
    return _store_surface(SurfaceKind.SPHERE, _as_vec3(center, "center"), radius, color)


def get_surface_count() -> int:
    """Get the number of surfaces in the scene."""
    return int(num_surfaces[None])


def _check_index(index: int) -> None:
    if not 0 <= index < num_surfaces[None]:
        raise IndexError(f"Surface index {index} out of range (scene has {get_surface_count()})")


def get_surface(index: int) -> tuple[SurfaceKind, tuple[float, float, float], float]:
    """Get the stored parameters of a surface.

    Args:
        index: The surface index.

    Returns:
        Tuple of (kind, vector, scalar); see Surface for their meaning.

    Raises:
        IndexError: If the index is out of range.
    """
    _check_index(index)
    vector = surface_vectors[index]
    return (
        SurfaceKind(int(surface_kinds[index])),
        (float(vector[0]), float(vector[1]), float(vector[2])),
        float(surface_scalars[index]),
    )


@ti.func
def load_surface(index: ti.i32) -> Surface:
    """Read the surface at index from the scene fields."""
    return Surface(
        kind=surface_kinds[index],
        vector=surface_vectors[index],
        scalar=surface_scalars[index],
    )


@ti.func
def _make_miss_record() -> SceneHitRecord:
    return SceneHitRecord(hit=0, t=0.0, normal=vec3(0.0, 0.0, 0.0), surface_id=-1)


@ti.func
def intersect_scene(ray: Ray) -> SceneHitRecord:
    """Find the nearest forward intersection over all surfaces.

    Args:
        ray: The ray to test.

    Returns:
        A SceneHitRecord for the surface with the smallest positive
        distance, or a miss record.
    """
    result = _make_miss_record()

    n = num_surfaces[None]
    for i in range(n):
        rec = closest_intersection(load_surface(i), ray)
        if rec.hit == 1 and (result.hit == 0 or rec.t < result.t):
            result = SceneHitRecord(hit=1, t=rec.t, normal=rec.normal, surface_id=i)

    return result


# =============================================================================
# Host-side queries
# =============================================================================


@ti.kernel
def _query_surface_kernel(index: ti.i32):
    ray = make_ray(_query_origin[None], _query_direction[None])
    rec = closest_intersection(load_surface(index), ray)
    _query_hit[None] = rec.hit
    _query_t[None] = rec.t
    _query_normal[None] = rec.normal
    _query_surface_id[None] = index


@ti.kernel
def _query_scene_kernel():
    # Outer single-iteration loop keeps the loop over surfaces serial
    for _ in range(1):
        ray = make_ray(_query_origin[None], _query_direction[None])
        rec = intersect_scene(ray)
        _query_hit[None] = rec.hit
        _query_t[None] = rec.t
        _query_normal[None] = rec.normal
        _query_surface_id[None] = rec.surface_id


def _set_query_ray(origin: Vec3Like, direction: Vec3Like) -> None:
    direction_array = _as_vec3(direction, "direction")
    if not np.any(direction_array):
        raise ValueError("Ray direction must be nonzero")
    _query_origin[None] = _as_vec3(origin, "origin").tolist()
    _query_direction[None] = direction_array.tolist()


def _read_query_normal() -> tuple[float, float, float]:
    normal = _query_normal[None]
    return (float(normal[0]), float(normal[1]), float(normal[2]))


def query_surface(
    index: int,
    origin: Vec3Like,
    direction: Vec3Like,
) -> tuple[float, tuple[float, float, float]] | None:
    """Find the closest forward intersection between a ray and one surface.

    Args:
        index: The surface index.
        origin: Ray origin.
        direction: Ray direction. Must be nonzero.

    Returns:
        (distance, normal) for the intersection, or None if the ray does not
        hit the surface ahead of its origin.

    Raises:
        IndexError: If the index is out of range.
        ValueError: If the ray is malformed.
    """
    _check_index(index)
    _set_query_ray(origin, direction)
    _query_surface_kernel(index)
    if _query_hit[None] == 0:
        return None
    return float(_query_t[None]), _read_query_normal()


def query_scene(
    origin: Vec3Like,
    direction: Vec3Like,
) -> tuple[float, tuple[float, float, float], int] | None:
    """Find the nearest forward intersection between a ray and the scene.

    Args:
        origin: Ray origin.
        direction: Ray direction. Must be nonzero.

    Returns:
        (distance, normal, surface_index) for the nearest intersection, or
        None if the ray hits nothing.

    Raises:
        ValueError: If the ray is malformed.
    """
    _set_query_ray(origin, direction)
    _query_scene_kernel()
    if _query_hit[None] == 0:
        return None
    return float(_query_t[None]), _read_query_normal(), int(_query_surface_id[None])
