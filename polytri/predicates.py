"""Geometric predicates used by the sweep: orientation and scan-area tests."""

from __future__ import annotations

import math
from enum import IntEnum
from fractions import Fraction

from polytri.shapes import Point

PI_3DIV4 = 3 * math.pi / 4
PI_DIV2 = math.pi / 2
EPSILON = 1e-12

# Error bound for the floating-point filter of the orientation test.
_MACHINE_EPSILON = 2.0**-53
_CCW_ERR_BOUND = (3.0 + 16.0 * _MACHINE_EPSILON) * _MACHINE_EPSILON


class Orientation(IntEnum):
    """Turn direction of three points."""

    CW = -1
    COLLINEAR = 0
    CCW = 1


def _sign(value: float) -> Orientation:
    if value > 0:
        return Orientation.CCW
    if value < 0:
        return Orientation.CW
    return Orientation.COLLINEAR


def _exact_determinant(pa: Point, pb: Point, pc: Point) -> Fraction:
    ax, ay = Fraction(pa.x), Fraction(pa.y)
    bx, by = Fraction(pb.x), Fraction(pb.y)
    cx, cy = Fraction(pc.x), Fraction(pc.y)
    return (ax - cx) * (by - cy) - (ay - cy) * (bx - cx)


def orient2d(pa: Point, pb: Point, pc: Point) -> Orientation:
    """Exact orientation of ``pa``, ``pb``, ``pc``.

    CCW when the signed area is positive, CW when negative and
    COLLINEAR when it is exactly zero.
    """
    detleft = (pa.x - pc.x) * (pb.y - pc.y)
    detright = (pa.y - pc.y) * (pb.x - pc.x)
    det = detleft - detright
    bound = _CCW_ERR_BOUND * (abs(detleft) + abs(detright))
    if det > bound or -det > bound:
        return _sign(det)
    return _sign(_exact_determinant(pa, pb, pc))


def orient2d_inexact(pa: Point, pb: Point, pc: Point) -> Orientation:
    """Floating-point orientation that treats near-zero areas as collinear."""
    detleft = (pa.x - pc.x) * (pb.y - pc.y)
    detright = (pa.y - pc.y) * (pb.x - pc.x)
    val = detleft - detright
    if -EPSILON < val < EPSILON:
        return Orientation.COLLINEAR
    if val > 0:
        return Orientation.CCW
    return Orientation.CW


def in_scan_area(pa: Point, pb: Point, pc: Point, pd: Point) -> bool:
    """Exact test of whether ``pd`` lies in the scan area of ``pa`` between ``pb`` and ``pc``."""
    if orient2d(pb, pa, pd) != Orientation.CW:
        return False
    return orient2d(pc, pa, pd) == Orientation.CCW


def in_scan_area_inexact(pa: Point, pb: Point, pc: Point, pd: Point) -> bool:
    """Floating-point version of :func:`in_scan_area` with an epsilon margin."""
    oadb = (pa.x - pb.x) * (pd.y - pb.y) - (pd.x - pb.x) * (pa.y - pb.y)
    if oadb >= -EPSILON:
        return False
    oadc = (pa.x - pc.x) * (pd.y - pc.y) - (pd.x - pc.x) * (pa.y - pc.y)
    return oadc > EPSILON