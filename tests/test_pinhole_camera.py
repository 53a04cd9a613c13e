"""Unit tests for the pinhole camera."""

import math

import pytest
import taichi as ti


def _primary_ray(pixel_i, pixel_j):
    """Generate a primary ray in a kernel and return (origin, direction)."""
    from src.tracer.camera.pinhole import get_ray

    origin = ti.Vector.field(3, dtype=ti.f64, shape=())
    direction = ti.Vector.field(3, dtype=ti.f64, shape=())

    @ti.kernel
    def ray_kernel(i: ti.i32, j: ti.i32):
        ray = get_ray(i, j)
        origin[None] = ray.origin
        direction[None] = ray.direction

    ray_kernel(pixel_i, pixel_j)
    o = origin[None]
    d = direction[None]
    return (o[0], o[1], o[2]), (d[0], d[1], d[2])


class TestSetupCamera:
    """Tests for camera configuration."""

    def test_defaults(self):
        """Test the default camera sits at the origin with a 0.64 m screen."""
        from src.tracer.camera.pinhole import PinholeCamera

        camera = PinholeCamera()
        assert camera.eye == (0.0, 0.0, 0.0)
        assert camera.screen_width == 0.64
        assert camera.distance_to_screen == 0.5

    def test_camera_info(self):
        """Test the stored state reflects the configuration."""
        from src.tracer.camera.pinhole import PinholeCamera, get_camera_info, setup_camera

        setup_camera(PinholeCamera(eye=(1.0, 2.0, 3.0)), 640, 480)
        info = get_camera_info()
        assert info["eye"] == (1.0, 2.0, 3.0)
        assert info["distance_to_screen"] == 0.5
        assert info["pixel_size"] == pytest.approx(0.001)
        assert (info["width"], info["height"]) == (640, 480)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10)])
    def test_invalid_size_rejected(self, width, height):
        """Test non-positive image sizes are rejected."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        with pytest.raises(ValueError):
            setup_camera(PinholeCamera(), width, height)

    def test_check_camera_matches(self):
        """Test the camera size check accepts only the configured size."""
        from src.tracer.camera import pinhole

        pinhole._camera_initialized[None] = 0
        with pytest.raises(RuntimeError):
            pinhole.check_camera_matches(640, 480)

        pinhole.setup_camera(pinhole.PinholeCamera(), 640, 480)
        pinhole.check_camera_matches(640, 480)
        with pytest.raises(RuntimeError):
            pinhole.check_camera_matches(480, 640)

    def test_invalid_screen_rejected(self):
        """Test non-positive screen geometry is rejected."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        with pytest.raises(ValueError):
            setup_camera(PinholeCamera(screen_width=0.0), 10, 10)
        with pytest.raises(ValueError):
            setup_camera(PinholeCamera(distance_to_screen=-0.5), 10, 10)


class TestGetRay:
    """Tests for primary ray generation."""

    def test_center_pixel_looks_forward(self):
        """Test the center pixel of an odd-sized image looks along +z."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(), 5, 3)
        origin, direction = _primary_ray(2, 1)
        assert origin == pytest.approx((0.0, 0.0, 0.0))
        assert direction == pytest.approx((0.0, 0.0, 1.0))

    def test_ray_starts_at_eye(self):
        """Test primary rays originate at the camera position."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(eye=(1.0, -2.0, 0.5)), 8, 8)
        origin, _ = _primary_ray(3, 6)
        assert origin == pytest.approx((1.0, -2.0, 0.5))

    def test_top_left_pixel(self):
        """Test pixel (0, 0) is the top-left corner of the screen."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(), 640, 480)
        _, direction = _primary_ray(0, 0)

        pixel_size = 0.64 / 640
        x = -0.5 * 639 * pixel_size
        y = 0.5 * 479 * pixel_size
        norm = math.sqrt(x * x + y * y + 0.25)
        assert direction == pytest.approx((x / norm, y / norm, 0.5 / norm))
        assert direction[0] < 0.0
        assert direction[1] > 0.0

    def test_bottom_right_pixel(self):
        """Test the last pixel points right and down."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(), 640, 480)
        _, direction = _primary_ray(639, 479)
        assert direction[0] > 0.0
        assert direction[1] < 0.0
        assert direction[2] > 0.0

    @pytest.mark.parametrize("pixel", [(0, 0), (17, 3), (99, 49)])
    def test_direction_is_unit(self, pixel):
        """Test primary ray directions are normalized."""
        from src.tracer.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(), 100, 50)
        _, direction = _primary_ray(*pixel)
        assert math.sqrt(sum(c * c for c in direction)) == pytest.approx(1.0)
