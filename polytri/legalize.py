"""Delaunay legalization: the in-circle test and edge flips between triangle pairs."""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from polytri.predicates import Orientation, orient2d
from polytri.shapes import Point, Triangle

if TYPE_CHECKING:
    from polytri.sweep_context import SweepContext

_MACHINE_EPSILON = 2.0**-53
_ICC_ERR_BOUND = (10.0 + 96.0 * _MACHINE_EPSILON) * _MACHINE_EPSILON


def _exact_incircle_sign(pa: Point, pb: Point, pc: Point, pd: Point) -> int:
    dx, dy = Fraction(pd.x), Fraction(pd.y)
    adx, ady = Fraction(pa.x) - dx, Fraction(pa.y) - dy
    bdx, bdy = Fraction(pb.x) - dx, Fraction(pb.y) - dy
    cdx, cdy = Fraction(pc.x) - dx, Fraction(pc.y) - dy
    oabd = adx * bdy - bdx * ady
    ocad = cdx * ady - adx * cdy
    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy
    det = alift * (bdx * cdy - cdx * bdy) + blift * ocad + clift * oabd
    return (det > 0) - (det < 0)


def incircle(pa: Point, pb: Point, pc: Point, pd: Point) -> bool:
    """True if ``pd`` lies strictly inside the circumcircle of ``pa``, ``pb``, ``pc``.

    ``pd`` must also lie on the far side of both ``pa``-``pb`` and
    ``pc``-``pa`` as seen from ``pd``; otherwise the result is False.
    Borderline cases are decided with exact arithmetic.
    """
    if orient2d(pa, pb, pd) != Orientation.CCW:
        return False
    if orient2d(pc, pa, pd) != Orientation.CCW:
        return False

    adx, ady = pa.x - pd.x, pa.y - pd.y
    bdx, bdy = pb.x - pd.x, pb.y - pd.y
    cdx, cdy = pc.x - pd.x, pc.y - pd.y

    adxbdy, bdxady = adx * bdy, bdx * ady
    cdxady, adxcdy = cdx * ady, adx * cdy
    bdxcdy, cdxbdy = bdx * cdy, cdx * bdy

    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy

    det = (
        alift * (bdxcdy - cdxbdy)
        + blift * (cdxady - adxcdy)
        + clift * (adxbdy - bdxady)
    )
    permanent = (
        (abs(bdxcdy) + abs(cdxbdy)) * alift
        + (abs(cdxady) + abs(adxcdy)) * blift
        + (abs(adxbdy) + abs(bdxady)) * clift
    )
    bound = _ICC_ERR_BOUND * permanent
    if det > bound:
        return True
    if -det > bound:
        return False
    return _exact_incircle_sign(pa, pb, pc, pd) > 0


def rotate_triangle_pair(t: Triangle, p: Point, ot: Triangle, op: Point) -> None:
    """Flip the edge shared by ``t`` and ``ot`` so that it joins ``p`` and ``op``.

    Neighbour links, constrained flags and Delaunay flags of the four
    outer edges follow the edges to their new triangles.
    """
    n1 = t.neighbor_ccw(p)
    n2 = t.neighbor_cw(p)
    n3 = ot.neighbor_ccw(op)
    n4 = ot.neighbor_cw(op)

    ce1 = t.get_constrained_edge_ccw(p)
    ce2 = t.get_constrained_edge_cw(p)
    ce3 = ot.get_constrained_edge_ccw(op)
    ce4 = ot.get_constrained_edge_cw(op)

    de1 = t.get_delaunay_edge_ccw(p)
    de2 = t.get_delaunay_edge_cw(p)
    de3 = ot.get_delaunay_edge_ccw(op)
    de4 = ot.get_delaunay_edge_cw(op)

    t.legalize(p, op)
    ot.legalize(op, p)

    ot.set_delaunay_edge_ccw(p, de1)
    t.set_delaunay_edge_cw(p, de2)
    t.set_delaunay_edge_ccw(op, de3)
    ot.set_delaunay_edge_cw(op, de4)

    ot.set_constrained_edge_ccw(p, ce1)
    t.set_constrained_edge_cw(p, ce2)
    t.set_constrained_edge_ccw(op, ce3)
    ot.set_constrained_edge_cw(op, ce4)

    t.clear_neighbors()
    ot.clear_neighbors()
    if n1 is not None:
        ot.mark_neighbor_triangle(n1)
    if n2 is not None:
        t.mark_neighbor_triangle(n2)
    if n3 is not None:
        t.mark_neighbor_triangle(n3)
    if n4 is not None:
        ot.mark_neighbor_triangle(n4)
    t.mark_neighbor_triangle(ot)


def legalize(tcx: SweepContext, t: Triangle) -> bool:
    """Restore the Delaunay condition around ``t`` by flipping edges.

    Returns True if a flip was made; the flipped triangles have then
    already been mapped to the advancing front.
    """
    for i in range(3):
        if t.delaunay_edge[i]:
            continue
        ot = t.neighbors[i]
        if ot is None:
            continue

        p = t.points[i]
        op = ot.opposite_point(t, p)
        oi = ot.index(op)

        # Constrained edges, and Delaunay edges during recursion, stay put.
        if ot.constrained_edge[oi] or ot.delaunay_edge[oi]:
            t.constrained_edge[i] = ot.constrained_edge[oi]
            continue

        if incircle(p, t.point_ccw(p), t.point_cw(p), op):
            t.delaunay_edge[i] = True
            ot.delaunay_edge[oi] = True

            rotate_triangle_pair(t, p, ot, op)

            if not legalize(tcx, t):
                tcx.map_triangle_to_nodes(t)
            if not legalize(tcx, ot):
                tcx.map_triangle_to_nodes(ot)

            # Delaunay flags only hold until the next point is added.
            t.delaunay_edge[i] = False
            ot.delaunay_edge[oi] = False
            return True
    return False