"""Camera module for primary ray generation.

Components:
    pinhole: Eye looking along +z through a flat screen with square pixels
"""

from .pinhole import (
    PinholeCamera,
    check_camera_matches,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "check_camera_matches",
    "get_ray",
    "get_camera_info",
]
