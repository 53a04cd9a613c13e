"""Unit tests for plane intersection.

Tests cover:
- Ray hitting the plane head-on and obliquely
- Rays parallel to the plane, including rays lying in it
- Planes behind the ray and rays starting on the plane
- Normal normalization and back-facing hits
"""

import math

import pytest
import taichi as ti


def _hit_plane(normal, distance, origin, direction):
    """Intersect one ray with one plane built by make_plane."""
    from src.tracer.core.ray import Ray
    from src.tracer.geometry.plane import hit_plane, make_plane

    inputs = ti.Vector.field(3, dtype=ti.f64, shape=3)
    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f64, shape=())
    normal_out = ti.Vector.field(3, dtype=ti.f64, shape=())
    for i, value in enumerate((normal, origin, direction)):
        inputs[i] = value

    @ti.kernel
    def test_kernel(distance: ti.f64):
        plane = make_plane(inputs[0], distance)
        rec = hit_plane(plane, Ray(origin=inputs[1], direction=inputs[2]))
        hit[None] = rec.hit
        t_val[None] = rec.t
        normal_out[None] = rec.normal

    test_kernel(distance)
    n = normal_out[None]
    return hit[None], t_val[None], (n[0], n[1], n[2])


class TestMakePlane:
    """Tests for plane construction."""

    def test_normal_is_normalized(self):
        """Test the stored normal has unit length."""
        from src.tracer.geometry.plane import make_plane, vec3

        normal = ti.Vector.field(3, dtype=ti.f64, shape=())
        distance = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            plane = make_plane(vec3(0.0, 3.0, 4.0), 2.0)
            normal[None] = plane.normal
            distance[None] = plane.distance

        test_kernel()
        n = normal[None]
        assert abs(n[0]) < 1e-12
        assert abs(n[1] - 0.6) < 1e-12
        assert abs(n[2] - 0.8) < 1e-12
        assert distance[None] == 2.0


class TestPlaneIntersection:
    """Tests for hit_plane."""

    def test_ray_straight_down_onto_ground(self):
        """Test a ray from y=5 pointing down hits the plane y=0 at distance 5."""
        hit, t, normal = _hit_plane((0.0, 1.0, 0.0), 0.0, (0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 1
        assert abs(t - 5.0) < 1e-12
        assert normal == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_unnormalized_normal_uses_normalized_distance(self):
        """Test the distance is measured along the normalized normal."""
        hit, t, normal = _hit_plane((0.0, 2.0, 0.0), 3.0, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 1
        assert abs(t - 3.0) < 1e-12
        assert normal == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_oblique_ray(self):
        """Test an oblique ray reaches the plane at the slanted distance."""
        d = 1.0 / math.sqrt(2.0)
        hit, t, _ = _hit_plane((0.0, 0.0, 1.0), 10.0, (0.0, 0.0, 0.0), (d, 0.0, d))
        assert hit == 1
        assert abs(t - 10.0 * math.sqrt(2.0)) < 1e-9

    @pytest.mark.parametrize(
        "origin,direction",
        [
            ((0.0, 5.0, 0.0), (1.0, 0.0, 0.0)),
            ((0.0, 5.0, 0.0), (0.0, 0.0, -1.0)),
            ((0.0, 5.0, 0.0), (0.6, 0.0, 0.8)),
        ],
    )
    def test_parallel_ray_misses(self, origin, direction):
        """Test rays parallel to the plane never intersect it."""
        hit, _, _ = _hit_plane((0.0, 1.0, 0.0), 0.0, origin, direction)
        assert hit == 0

    def test_ray_lying_in_plane_misses(self):
        """Test a ray contained in the plane is treated as a miss."""
        hit, _, _ = _hit_plane((0.0, 1.0, 0.0), 0.0, (1.0, 0.0, 2.0), (1.0, 0.0, 0.0))
        assert hit == 0

    def test_plane_behind_ray_misses(self):
        """Test a ray pointing away from the plane misses."""
        hit, _, _ = _hit_plane((0.0, 1.0, 0.0), 0.0, (0.0, 5.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0

    def test_origin_on_plane_misses(self):
        """Test a ray starting on the plane has no forward intersection."""
        hit, _, _ = _hit_plane((0.0, 1.0, 0.0), 0.0, (3.0, 0.0, -2.0), (0.0, -1.0, 0.0))
        assert hit == 0

    def test_back_facing_hit_keeps_stored_normal(self):
        """Test the normal is not flipped toward a ray arriving from behind."""
        hit, t, normal = _hit_plane((0.0, 1.0, 0.0), 0.0, (0.0, -2.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 1
        assert abs(t - 2.0) < 1e-12
        assert normal == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_offset_plane_with_negative_distance(self):
        """Test a plane below the origin, e.g. a floor at y=-1."""
        hit, t, _ = _hit_plane((0.0, 1.0, 0.0), -1.0, (0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 1
        assert abs(t - 1.0) < 1e-12


class TestPlanePrecision:
    """Tests for double-precision distances."""

    def test_distance_keeps_double_precision(self):
        """Test the distance is not narrowed to single precision."""
        distance = 1.0 + 2.0**-40
        hit, t, _ = _hit_plane((0.0, 0.0, 1.0), distance, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert hit == 1
        assert t == distance
