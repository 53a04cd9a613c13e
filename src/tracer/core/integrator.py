"""Per-pixel rendering loop with flat shading.

For every pixel the camera generates a primary ray, the scene is searched
for the nearest forward intersection, and the pixel takes the hit surface's
flat color. Pixels whose ray hits nothing get the background color.

The render target holds linear RGBA values in [0, 1] and is preallocated to
MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT; setup_render_target() selects the
active region.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.camera.pinhole import PinholeCamera, setup_camera
    >>> from src.tracer.core.integrator import (
    ...     get_image_numpy, render_image, setup_render_target
    ... )
    >>> from src.tracer.scene.intersection import add_sphere
    >>> add_sphere((0.0, 0.0, 5.0), 0.5, color=(1.0, 0.0, 0.0))
    >>> setup_camera(PinholeCamera(), 640, 480)
    >>> setup_render_target(640, 480)
    >>> render_image()
    >>> image = get_image_numpy()  # (480, 640, 4)
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.tracer.camera.pinhole import check_camera_matches, get_ray
from src.tracer.scene.intersection import intersect_scene, surface_colors

vec4 = ti.types.vector(4, ti.f32)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA buffer indexed [column, row] with row 0 at the top
_color_buffer = ti.Vector.field(4, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_background = ti.Vector.field(4, dtype=ti.f32, shape=())

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions, clears the buffer and resets the
    background to opaque black.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum
            supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    set_background((0.0, 0.0, 0.0, 1.0))

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target to zero."""
    _color_buffer.fill(0.0)


def set_background(rgba: Sequence[float]) -> None:
    """Set the linear RGBA color of pixels whose ray hits nothing.

    Raises:
        ValueError: If rgba does not have exactly four components.
    """
    if len(rgba) != 4:
        raise ValueError(f"Background must be RGBA, got {len(rgba)} components")
    _background[None] = [float(c) for c in rgba]


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_ready_to_render() -> None:
    _check_render_target_initialized()
    check_camera_matches(*get_image_dimensions())


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade_pixel(pixel_i: ti.i32, pixel_j: ti.i32) -> vec4:
    """Compute the color of a pixel from its primary ray.

    Args:
        pixel_i: Column index (0 = left).
        pixel_j: Row index (0 = top).

    Returns:
        Linear RGBA color: the hit surface's color with full alpha, or the
        background color.
    """
    color = _background[None]
    rec = intersect_scene(get_ray(pixel_i, pixel_j))
    if rec.hit == 1:
        rgb = surface_colors[rec.surface_id]
        color = vec4(rgb[0], rgb[1], rgb[2], 1.0)
    return color


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32):
    for i, j in ti.ndrange(width, height):
        _color_buffer[i, j] = shade_pixel(i, j)


_pixel_result = ti.Vector.field(4, dtype=ti.f32, shape=())


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32):
    # Outer single-iteration loop keeps the loop over surfaces serial
    for _ in range(1):
        _pixel_result[None] = shade_pixel(pixel_i, pixel_j)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the active render target.

    Raises:
        RuntimeError: If render target has not been set up, or the camera
            was not set up for the same image size.
    """
    _check_ready_to_render()
    width, height = get_image_dimensions()
    _render_kernel(width, height)


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[float, float, float, float]:
    """Render a single pixel without touching the render target.

    Args:
        pixel_i: Column index (0 = left).
        pixel_j: Row index (0 = top).

    Returns:
        Tuple of (R, G, B, A) linear color values.

    Raises:
        RuntimeError: If render target has not been set up, or the camera
            was not set up for the same image size.
    """
    _check_ready_to_render()
    _render_single_pixel(pixel_i, pixel_j)
    color = _pixel_result[None]
    return (float(color[0]), float(color[1]), float(color[2]), float(color[3]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Returns:
        Linear RGBA array of shape (height, width, 4), top row first,
        clamped to [0, 1].

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()

    # Active region, transposed from (width, height, 4) to (height, width, 4)
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))

    return np.clip(image, 0.0, 1.0)
