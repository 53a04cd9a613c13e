"""Preview module for image output.

Components:
    export: sRGB encoding and PNG read/write
"""

from .export import compute_rmse, linear_to_srgb, read_png, save_png, to_srgba_uint8

__all__ = [
    "linear_to_srgb",
    "to_srgba_uint8",
    "save_png",
    "read_png",
    "compute_rmse",
]
