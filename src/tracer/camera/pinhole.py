"""Pinhole camera with a flat screen for primary ray generation.

The eye sits at the camera position and looks along +z through a flat
screen placed distance_to_screen in front of it. The screen is screen_width
wide and pixels are square, so the screen height follows from the image
aspect ratio.

Pixel (i, j), with i counting columns from the left and j counting rows from
the top, maps to the screen point

    x = (i - 0.5 * (width - 1)) * pixel_size
    y = (0.5 * (height - 1) - j) * pixel_size
    z = distance_to_screen

relative to the eye, and the primary ray points from the eye through it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>> setup_camera(PinholeCamera(), width=640, height=480)
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(320, 240)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole camera looking along +z.

    Attributes:
        eye: Camera position in world space (x, y, z), in meters.
        screen_width: Width of the screen in meters.
        distance_to_screen: Distance from the eye to the screen center, in
            meters.
    """

    eye: tuple[float, float, float] = (0.0, 0.0, 0.0)
    screen_width: float = 0.64
    distance_to_screen: float = 0.5


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_eye = ti.Vector.field(3, dtype=ti.f64, shape=())
_distance_to_screen = ti.field(dtype=ti.f64, shape=())
_pixel_size = ti.field(dtype=ti.f64, shape=())
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())
_camera_initialized = ti.field(dtype=ti.i32, shape=())


def setup_camera(camera: PinholeCamera, width: int, height: int) -> None:
    """Initialize camera state for an image of the given size.

    Args:
        camera: Camera configuration.
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If the image size or screen geometry is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if camera.screen_width <= 0.0 or camera.distance_to_screen <= 0.0:
        raise ValueError("Screen width and distance to screen must be positive")

    _camera_eye[None] = list(camera.eye)
    _distance_to_screen[None] = camera.distance_to_screen
    _pixel_size[None] = camera.screen_width / width
    _image_width[None] = width
    _image_height[None] = height
    _camera_initialized[None] = 1


def check_camera_matches(width: int, height: int) -> None:
    """Check that the camera was set up for an image of the given size.

    Raises:
        RuntimeError: If setup_camera() has not been called, or was called
            for a different image size.
    """
    if _camera_initialized[None] == 0:
        raise RuntimeError("Camera not set up. Call setup_camera() first.")
    camera_size = (int(_image_width[None]), int(_image_height[None]))
    if camera_size != (width, height):
        raise RuntimeError(
            f"Camera was set up for {camera_size[0]}x{camera_size[1]} but the image is "
            f"{width}x{height}"
        )


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32) -> Ray:
    """Generate the primary ray through the center of a pixel.

    Args:
        pixel_i: Column index (0 = left).
        pixel_j: Row index (0 = top).

    Returns:
        A Ray from the eye with a unit direction through the pixel.
    """
    pixel_size = _pixel_size[None]
    x = (ti.cast(pixel_i, ti.f64) - 0.5 * ti.cast(_image_width[None] - 1, ti.f64)) * pixel_size
    y = (0.5 * ti.cast(_image_height[None] - 1, ti.f64) - ti.cast(pixel_j, ti.f64)) * pixel_size
    direction = tm.normalize(vec3(x, y, _distance_to_screen[None]))
    return make_ray(_camera_eye[None], direction)


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with eye, distance_to_screen, pixel_size, width, height.
    """
    eye = _camera_eye[None]
    return {
        "eye": (float(eye[0]), float(eye[1]), float(eye[2])),
        "distance_to_screen": float(_distance_to_screen[None]),
        "pixel_size": float(_pixel_size[None]),
        "width": int(_image_width[None]),
        "height": int(_image_height[None]),
    }
