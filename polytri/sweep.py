"""Sweep-line constrained Delaunay triangulation over a sweep context."""

from __future__ import annotations

import math
from typing import Optional

from polytri.advancing_front import Node
from polytri.legalize import legalize, rotate_triangle_pair
from polytri.predicates import EPSILON, PI_3DIV4, PI_DIV2, Orientation, in_scan_area, orient2d
from polytri.shapes import (
    CollinearPointsError,
    DegenerateTriangleError,
    Edge,
    NullTriangleError,
    Point,
    Poly2TriError,
    Triangle,
)
from polytri.sweep_context import SweepContext


class Sweep:
    """Triangulates the points and edges held by a :class:`SweepContext`."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []

    def triangulate(self, tcx: SweepContext) -> None:
        """Triangulate the polygon, holes and Steiner points held by ``tcx``.

        The interior triangles end up in ``tcx.triangles`` and every
        triangle built during the sweep in ``tcx.map``.
        """
        tcx.init_triangulation()
        tcx.create_advancing_front()
        self._sweep_points(tcx)
        self._finalization_polygon(tcx)

    # Sweep driver

    def _sweep_points(self, tcx: SweepContext) -> None:
        for point in tcx.points[1:]:
            node = self._point_event(tcx, point)
            for edge in list(point.edge_list):
                self._edge_event(tcx, edge, node)

    def _finalization_polygon(self, tcx: SweepContext) -> None:
        start = tcx.front.head.next
        t = start.triangle
        p = start.point
        while t is not None and not t.get_constrained_edge_cw(p):
            t = t.neighbor_ccw(p)
        if t is not None:
            tcx.mesh_clean(t)

    def _point_event(self, tcx: SweepContext, point: Point) -> Node:
        node = tcx.locate_node(point)
        if node is None or node.point is None or node.next is None or node.next.point is None:
            raise Poly2TriError("PointEvent - null node")

        new_node = self._new_front_triangle(tcx, point, node)

        # Points never have a smaller x than the node they were located at,
        # so only the +epsilon side needs checking.
        if point.x <= node.point.x + EPSILON:
            self._fill(tcx, node)

        self._fill_advancing_front(tcx, new_node)
        return new_node

    # Edge events

    def _edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        tcx.edge_event.constrained_edge = edge
        tcx.edge_event.right = edge.p.x > edge.q.x

        if node.triangle is None:
            raise NullTriangleError()
        if self._is_edge_side_of_triangle(node.triangle, edge.p, edge.q):
            return

        self._fill_edge_event(tcx, edge, node)
        if node.triangle is None:
            raise NullTriangleError()
        self._edge_event_points(tcx, edge.p, edge.q, node.triangle, edge.q)

    def _edge_event_points(
        self, tcx: SweepContext, ep: Point, eq: Point, triangle: Triangle, point: Point
    ) -> None:
        while True:
            previous = triangle
            if self._is_edge_side_of_triangle(triangle, ep, eq):
                return

            p1 = triangle.point_ccw(point)
            if p1 is None:
                raise DegenerateTriangleError(*triangle.points)
            o1 = orient2d(eq, p1, ep)
            if o1 == Orientation.COLLINEAR:
                if not triangle.contains_edge(eq, p1):
                    raise CollinearPointsError(eq, p1, ep)
                triangle.mark_constrained_edge(eq, p1)
                # The constraint is shortened to the collinear point.
                tcx.edge_event.constrained_edge.q = p1
                triangle = triangle.neighbor_across(point)
                if triangle is None:
                    raise NullTriangleError.near(previous)
                eq = p1
                point = p1
                continue

            p2 = triangle.point_cw(point)
            if p2 is None:
                raise DegenerateTriangleError(*triangle.points)
            o2 = orient2d(eq, p2, ep)
            if o2 == Orientation.COLLINEAR:
                if not triangle.contains_edge(eq, p2):
                    raise CollinearPointsError(eq, p2, ep)
                triangle.mark_constrained_edge(eq, p2)
                tcx.edge_event.constrained_edge.q = p2
                triangle = triangle.neighbor_across(point)
                if triangle is None:
                    raise NullTriangleError.near(previous)
                eq = p2
                point = p2
                continue

            if o1 == o2:
                # Rotate towards a triangle that crosses the edge.
                if o1 == Orientation.CW:
                    triangle = triangle.neighbor_ccw(point)
                else:
                    triangle = triangle.neighbor_cw(point)
                if triangle is None:
                    raise NullTriangleError.near(previous)
                continue

            # This triangle crosses the constraint.
            self._flip_edge_event(tcx, ep, eq, triangle, point)
            return

    @staticmethod
    def _is_edge_side_of_triangle(triangle: Triangle, ep: Point, eq: Point) -> bool:
        index = triangle.edge_index(ep, eq)
        if index == -1:
            return False
        triangle.mark_constrained_edge_index(index)
        neighbor = triangle.neighbors[index]
        if neighbor is not None:
            neighbor.mark_constrained_edge(ep, eq)
        return True

    # Front construction and filling

    def _new_front_triangle(self, tcx: SweepContext, point: Point, node: Node) -> Node:
        triangle = Triangle(point, node.point, node.next.point)
        triangle.mark_neighbor_triangle(node.triangle)
        tcx.add_to_map(triangle)

        new_node = Node(point)
        self.nodes.append(new_node)

        new_node.next = node.next
        new_node.prev = node
        node.next.prev = new_node
        node.next = new_node

        if not legalize(tcx, triangle):
            tcx.map_triangle_to_nodes(triangle)
        return new_node

    @staticmethod
    def _fill(tcx: SweepContext, node: Node) -> None:
        triangle = Triangle(node.prev.point, node.point, node.next.point)
        triangle.mark_neighbor_triangle(node.prev.triangle)
        triangle.mark_neighbor_triangle(node.triangle)
        tcx.add_to_map(triangle)

        node.prev.next = node.next
        node.next.prev = node.prev

        # A legalized triangle has already been mapped.
        if not legalize(tcx, triangle):
            tcx.map_triangle_to_nodes(triangle)

    def _fill_advancing_front(self, tcx: SweepContext, n: Node) -> None:
        node: Optional[Node] = n.next
        while node is not None and node.next is not None:
            if self._large_hole_dont_fill(node):
                break
            self._fill(tcx, node)
            node = node.next

        node = n.prev
        while node is not None and node.prev is not None:
            if self._large_hole_dont_fill(node):
                break
            self._fill(tcx, node)
            node = node.prev

        if n.next is not None and n.next.next is not None:
            if self._basin_angle(n) < PI_3DIV4:
                self._fill_basin(tcx, n)

    def _large_hole_dont_fill(self, node: Node) -> bool:
        """True if the hole at ``node`` opens wider than 90 degrees or turns inward."""
        next_node = node.next
        prev_node = node.prev
        if not self._angle_exceeds_90_degrees(node.point, next_node.point, prev_node.point):
            return False
        if self._angle_is_negative(node.point, next_node.point, prev_node.point):
            return True

        next2 = next_node.next
        if next2 is not None and not self._angle_exceeds_plus_90_or_negative(
            node.point, next2.point, prev_node.point
        ):
            return False

        prev2 = prev_node.prev
        if prev2 is not None and not self._angle_exceeds_plus_90_or_negative(
            node.point, next_node.point, prev2.point
        ):
            return False

        return True

    @staticmethod
    def _angle(origin: Point, pa: Point, pb: Point) -> float:
        ax, ay = pa.x - origin.x, pa.y - origin.y
        bx, by = pb.x - origin.x, pb.y - origin.y
        return math.atan2(ax * by - ay * bx, ax * bx + ay * by)

    def _angle_is_negative(self, origin: Point, pa: Point, pb: Point) -> bool:
        return self._angle(origin, pa, pb) < 0

    def _angle_exceeds_90_degrees(self, origin: Point, pa: Point, pb: Point) -> bool:
        angle = self._angle(origin, pa, pb)
        return angle > PI_DIV2 or angle < -PI_DIV2

    def _angle_exceeds_plus_90_or_negative(self, origin: Point, pa: Point, pb: Point) -> bool:
        angle = self._angle(origin, pa, pb)
        return angle > PI_DIV2 or angle < 0

    @staticmethod
    def _basin_angle(node: Node) -> float:
        ax = node.point.x - node.next.next.point.x
        ay = node.point.y - node.next.next.point.y
        return math.atan2(ay, ax)

    def _hole_angle(self, node: Node) -> float:
        return self._angle(node.point, node.next.point, node.prev.point)

    # Basins

    def _fill_basin(self, tcx: SweepContext, node: Node) -> None:
        basin = tcx.basin
        if orient2d(node.point, node.next.point, node.next.next.point) == Orientation.CCW:
            basin.left_node = node.next.next
        else:
            basin.left_node = node.next

        bottom = basin.left_node
        while bottom.next is not None and bottom.point.y >= bottom.next.point.y:
            bottom = bottom.next
        basin.bottom_node = bottom
        if bottom is basin.left_node:
            return

        right = bottom
        while right.next is not None and right.point.y < right.next.point.y:
            right = right.next
        basin.right_node = right
        if right is bottom:
            return

        basin.width = right.point.x - basin.left_node.point.x
        basin.left_highest = basin.left_node.point.y > right.point.y

        self._fill_basin_req(tcx, bottom)

    def _fill_basin_req(self, tcx: SweepContext, node: Node) -> None:
        basin = tcx.basin
        while not self._is_shallow(tcx, node):
            self._fill(tcx, node)

            if node.prev is basin.left_node and node.next is basin.right_node:
                return
            if node.prev is basin.left_node:
                if orient2d(node.point, node.next.point, node.next.next.point) == Orientation.CW:
                    return
                node = node.next
            elif node.next is basin.right_node:
                if orient2d(node.point, node.prev.point, node.prev.prev.point) == Orientation.CCW:
                    return
                node = node.prev
            elif node.prev.point.y < node.next.point.y:
                node = node.prev
            else:
                node = node.next

    @staticmethod
    def _is_shallow(tcx: SweepContext, node: Node) -> bool:
        basin = tcx.basin
        if basin.left_highest:
            height = basin.left_node.point.y - node.point.y
        else:
            height = basin.right_node.point.y - node.point.y
        return basin.width > height

    # Filling below a constrained edge

    def _fill_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        if tcx.edge_event.right:
            self._fill_right_above_edge_event(tcx, edge, node)
        else:
            self._fill_left_above_edge_event(tcx, edge, node)

    def _fill_right_above_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while node.next.point.x < edge.p.x:
            if orient2d(edge.q, node.next.point, edge.p) == Orientation.CCW:
                self._fill_right_below_edge_event(tcx, edge, node)
            else:
                node = node.next

    def _fill_right_below_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while node.point.x < edge.p.x:
            if orient2d(node.point, node.next.point, node.next.next.point) == Orientation.CCW:
                self._fill_right_concave_edge_event(tcx, edge, node)
                return
            self._fill_right_convex_edge_event(tcx, edge, node)

    def _fill_right_concave_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while True:
            self._fill(tcx, node.next)
            if node.next.point is edge.p:
                return
            if orient2d(edge.q, node.next.point, edge.p) != Orientation.CCW:
                return
            if orient2d(node.point, node.next.point, node.next.next.point) != Orientation.CCW:
                return

    def _fill_right_convex_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while True:
            if (
                orient2d(node.next.point, node.next.next.point, node.next.next.next.point)
                == Orientation.CCW
            ):
                self._fill_right_concave_edge_event(tcx, edge, node.next)
                return
            if orient2d(edge.q, node.next.next.point, edge.p) != Orientation.CCW:
                return
            node = node.next

    def _fill_left_above_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while node.prev.point.x > edge.p.x:
            if orient2d(edge.q, node.prev.point, edge.p) == Orientation.CW:
                self._fill_left_below_edge_event(tcx, edge, node)
            else:
                node = node.prev

    def _fill_left_below_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while node.point.x > edge.p.x:
            if orient2d(node.point, node.prev.point, node.prev.prev.point) == Orientation.CW:
                self._fill_left_concave_edge_event(tcx, edge, node)
                return
            self._fill_left_convex_edge_event(tcx, edge, node)

    def _fill_left_convex_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while True:
            if (
                orient2d(node.prev.point, node.prev.prev.point, node.prev.prev.prev.point)
                == Orientation.CW
            ):
                self._fill_left_concave_edge_event(tcx, edge, node.prev)
                return
            if orient2d(edge.q, node.prev.prev.point, edge.p) != Orientation.CW:
                return
            node = node.prev

    def _fill_left_concave_edge_event(self, tcx: SweepContext, edge: Edge, node: Node) -> None:
        while True:
            self._fill(tcx, node.prev)
            if node.prev.point is edge.p:
                return
            if orient2d(edge.q, node.prev.point, edge.p) != Orientation.CW:
                return
            if orient2d(node.point, node.prev.point, node.prev.prev.point) != Orientation.CW:
                return

    # Flipping across a constrained edge

    def _flip_edge_event(
        self, tcx: SweepContext, ep: Point, eq: Point, t: Triangle, p: Point
    ) -> None:
        while True:
            ot = t.neighbor_across(p)
            if ot is None:
                raise Poly2TriError("FlipEdgeEvent - null neighbor across")
            op = ot.opposite_point(t, p)
            if op is None:
                raise Poly2TriError("FlipEdgeEvent - null opposing point")

            if in_scan_area(p, t.point_ccw(p), t.point_cw(p), op):
                rotate_triangle_pair(t, p, ot, op)
                tcx.map_triangle_to_nodes(t)
                tcx.map_triangle_to_nodes(ot)

                if p == eq and op == ep:
                    constraint = tcx.edge_event.constrained_edge
                    if eq == constraint.q and ep == constraint.p:
                        t.mark_constrained_edge(ep, eq)
                        ot.mark_constrained_edge(ep, eq)
                        legalize(tcx, t)
                        legalize(tcx, ot)
                    return

                o = orient2d(eq, op, ep)
                t = self._next_flip_triangle(tcx, o, t, ot, p, op)
                continue

            new_p = self._next_flip_point(ep, eq, ot, op)
            self._flip_scan_edge_event(tcx, ep, eq, t, ot, new_p)
            self._edge_event_points(tcx, ep, eq, t, p)
            return

    @staticmethod
    def _next_flip_triangle(
        tcx: SweepContext,
        o: Orientation,
        t: Triangle,
        ot: Triangle,
        p: Point,
        op: Point,
    ) -> Triangle:
        if o == Orientation.CCW:
            # ot no longer crosses the edge after the flip.
            ot.delaunay_edge[ot.edge_index(p, op)] = True
            legalize(tcx, ot)
            ot.clear_delaunay_edges()
            return t

        # t no longer crosses the edge after the flip.
        t.delaunay_edge[t.edge_index(p, op)] = True
        legalize(tcx, t)
        t.clear_delaunay_edges()
        return ot

    @staticmethod
    def _next_flip_point(ep: Point, eq: Point, ot: Triangle, op: Point) -> Point:
        o = orient2d(eq, op, ep)
        if o == Orientation.CW:
            return ot.point_ccw(op)
        if o == Orientation.CCW:
            return ot.point_cw(op)
        raise CollinearPointsError(eq, op, ep)

    def _flip_scan_edge_event(
        self,
        tcx: SweepContext,
        ep: Point,
        eq: Point,
        flip_triangle: Triangle,
        t: Triangle,
        p: Point,
    ) -> None:
        while True:
            ot = t.neighbor_across(p)
            if ot is None:
                raise Poly2TriError("FlipScanEdgeEvent - null neighbor across")
            op = ot.opposite_point(t, p)
            if op is None:
                raise Poly2TriError("FlipScanEdgeEvent - null opposing point")

            p1 = flip_triangle.point_ccw(eq)
            p2 = flip_triangle.point_cw(eq)
            if p1 is None or p2 is None:
                raise Poly2TriError("FlipScanEdgeEvent - null on either of points")

            if in_scan_area(eq, p1, p2, op):
                # Flip with the new edge op-eq.
                self._flip_edge_event(tcx, eq, op, ot, op)
                return

            p = self._next_flip_point(ep, eq, ot, op)
            t = ot