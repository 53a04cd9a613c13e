"""Closed 1-D intervals over the real line.

Intervals are used by the bounding box slab test to accumulate the range of
ray parameters that lie inside every slab. Construction through
make_interval() is order-agnostic: the two bounds may be passed in either
order and are stored as (min, max). An interval whose lower bound exceeds
its upper bound is empty; that state only arises from
interval_intersection() of two disjoint intervals.
"""

import taichi as ti
import taichi.math as tm

vec2 = ti.types.vector(2, ti.f64)


@ti.dataclass
class Interval:
    """A closed interval [lo, hi].

    Attributes:
        lo: Lower endpoint.
        hi: Upper endpoint. The interval is empty when lo > hi.
    """

    lo: ti.f64
    hi: ti.f64


@ti.func
def make_interval(a: ti.f64, b: ti.f64) -> Interval:
    """Create the closed interval spanned by a and b, in either order."""
    return Interval(lo=ti.min(a, b), hi=ti.max(a, b))


@ti.func
def unbounded_interval() -> Interval:
    """Create the interval (-inf, +inf)."""
    return Interval(lo=-tm.inf, hi=tm.inf)


@ti.func
def interval_intersection(a: Interval, b: Interval) -> Interval:
    """Intersect two intervals.

    The result is the overlap of a and b. It is empty (see
    interval_is_empty) when the intervals do not overlap. Closed intervals
    that touch at a single point overlap in that point.
    """
    return Interval(lo=ti.max(a.lo, b.lo), hi=ti.min(a.hi, b.hi))


@ti.func
def interval_is_empty(interval: Interval) -> ti.i32:
    """Return 1 if the interval contains no points, 0 otherwise."""
    return ti.cast(interval.lo > interval.hi, ti.i32)


@ti.func
def interval_endpoints(interval: Interval) -> vec2:
    """Return the raw endpoints as a vector (lo, hi)."""
    return vec2(interval.lo, interval.hi)
