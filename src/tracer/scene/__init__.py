"""Scene module for surface storage and scene-level queries.

Components:
    intersection: Surface storage in Taichi fields and nearest-hit search
    manager: Scene builder with configuration export and import
"""

from .intersection import (
    MAX_SURFACES,
    SceneHitRecord,
    add_plane,
    add_sphere,
    clear_scene,
    get_surface,
    get_surface_count,
    intersect_scene,
    load_surface,
    query_scene,
    query_surface,
)
from .manager import SceneConfig, SceneManager, SurfaceInfo

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_plane",
    "add_sphere",
    "clear_scene",
    "get_surface",
    "get_surface_count",
    "load_surface",
    "intersect_scene",
    "query_surface",
    "query_scene",
    "MAX_SURFACES",
    # Manager module
    "SceneManager",
    "SceneConfig",
    "SurfaceInfo",
]
