"""State shared by the sweep: points, edges, the front and the triangle map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from polytri.advancing_front import AdvancingFront, Node
from polytri.shapes import Edge, Point, Triangle, sort_key

# The seed triangle extends this fraction of the point set's width to each side.
K_ALPHA = 0.3


@dataclass
class Basin:
    """A basin in the advancing front being filled."""

    left_node: Optional[Node] = None
    bottom_node: Optional[Node] = None
    right_node: Optional[Node] = None
    width: float = 0.0
    left_highest: bool = False

    def clear(self) -> None:
        """Reset to the empty basin."""
        self.left_node = None
        self.bottom_node = None
        self.right_node = None
        self.width = 0.0
        self.left_highest = False


@dataclass
class EdgeEvent:
    """The constrained edge currently being inserted."""

    constrained_edge: Optional[Edge] = None
    right: bool = False


class SweepContext:
    """Input points, edges and the evolving mesh of one triangulation."""

    def __init__(self, polyline: Iterable[Point]) -> None:
        self.points: list[Point] = list(polyline)
        self.edge_list: list[Edge] = []
        self.triangles: list[Triangle] = []
        self.map: list[Triangle] = []
        self.front: Optional[AdvancingFront] = None
        self.head: Optional[Point] = None
        self.tail: Optional[Point] = None
        self.af_head: Optional[Node] = None
        self.af_middle: Optional[Node] = None
        self.af_tail: Optional[Node] = None
        self.basin = Basin()
        self.edge_event = EdgeEvent()
        self.init_edges(self.points)

    @property
    def point_count(self) -> int:
        return len(self.points)

    def add_hole(self, polyline: Iterable[Point]) -> None:
        """Add a closed polyline bounding a hole."""
        polyline = list(polyline)
        self.init_edges(polyline)
        self.points.extend(polyline)

    def add_point(self, point: Point) -> None:
        """Add a Steiner point."""
        self.points.append(point)

    def init_triangulation(self) -> None:
        """Compute the seed triangle's extra points and sort the input."""
        if not self.points:
            raise ValueError("no points to triangulate")
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        xmin, xmax = min(xs), max(xs)
        ymin, ymax = min(ys), max(ys)
        dx = K_ALPHA * (xmax - xmin)
        dy = K_ALPHA * (ymax - ymin)
        self.head = Point(xmin - dx, ymin - dy)
        self.tail = Point(xmax + dx, ymin - dy)
        self.points.sort(key=sort_key)

    def init_edges(self, polyline: list[Point]) -> None:
        """Create the closed chain of edges along ``polyline``."""
        count = len(polyline)
        for i, point in enumerate(polyline):
            self.edge_list.append(Edge(point, polyline[(i + 1) % count]))

    def create_advancing_front(self) -> None:
        """Build the seed triangle and the initial three-node front."""
        triangle = Triangle(self.points[0], self.head, self.tail)
        self.map.append(triangle)

        self.af_head = Node(triangle.points[1], triangle)
        self.af_middle = Node(triangle.points[0], triangle)
        self.af_tail = Node(triangle.points[2])
        self.front = AdvancingFront(self.af_head, self.af_tail)

        self.af_head.next = self.af_middle
        self.af_middle.next = self.af_tail
        self.af_middle.prev = self.af_head
        self.af_tail.prev = self.af_middle

    def locate_node(self, point: Point) -> Optional[Node]:
        """The front node under ``point``."""
        return self.front.locate_node(point.x)

    def add_to_map(self, triangle: Triangle) -> None:
        self.map.append(triangle)

    def remove_from_map(self, triangle: Triangle) -> None:
        """Remove every occurrence of ``triangle`` from the map."""
        self.map = [t for t in self.map if t is not triangle]

    def map_triangle_to_nodes(self, t: Triangle) -> None:
        """Attach ``t`` to the front nodes along its sides without a neighbour."""
        for i in range(3):
            if t.neighbors[i] is None:
                node = self.front.locate_point(t.point_cw(t.points[i]))
                if node is not None:
                    node.triangle = t

    def mesh_clean(self, triangle: Triangle) -> None:
        """Collect the interior triangles reachable without crossing constraints."""
        stack: list[Optional[Triangle]] = [triangle]
        while stack:
            t = stack.pop()
            if t is None or t.interior:
                continue
            t.interior = True
            self.triangles.append(t)
            for i in range(3):
                if not t.constrained_edge[i]:
                    stack.append(t.neighbors[i])