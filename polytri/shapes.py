"""Core geometric shapes: points, constrained edges and mesh triangles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union


@dataclass
class Point:
    """A 2-D point.

    Points compare equal by coordinates. Triangles and the sweep compare
    them by identity, since each input vertex is a distinct object.
    """

    x: float = 0.0
    y: float = 0.0
    # Edges for which this point is the upper end point.
    edge_list: list = field(default_factory=list, compare=False, repr=False)

    def set_zero(self) -> None:
        """Set both coordinates to zero."""
        self.x = 0.0
        self.y = 0.0

    def set(self, x: float, y: float) -> None:
        """Set both coordinates."""
        self.x = x
        self.y = y

    def length(self) -> float:
        """Euclidean norm of the point seen as a vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> float:
        """Scale to unit length in place and return the previous length."""
        length = self.length()
        self.x /= length
        self.y /= length
        return length

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        if isinstance(scalar, Point):
            return NotImplemented
        return Point(scalar * self.x, scalar * self.y)

    __rmul__ = __mul__

    def __iadd__(self, other: Point) -> Point:
        self.x += other.x
        self.y += other.y
        return self

    def __isub__(self, other: Point) -> Point:
        self.x -= other.x
        self.y -= other.y
        return self

    def __imul__(self, scalar: float) -> Point:
        self.x *= scalar
        self.y *= scalar
        return self

    def __str__(self) -> str:
        return f"{self.x:g},{self.y:g}"


class Edge:
    """A polygon edge, oriented so that ``q`` is the upper end point.

    Creating an edge registers it in ``q.edge_list``.
    """

    __slots__ = ("p", "q")

    def __init__(self, p1: Point, p2: Point) -> None:
        self.p = p1
        self.q = p2
        if p1.y > p2.y or (p1.y == p2.y and p1.x > p2.x):
            self.p = p2
            self.q = p1
        self.q.edge_list.append(self)

    def __repr__(self) -> str:
        return f"Edge(p={self.p!r}, q={self.q!r})"


class Triangle:
    """A mesh triangle with neighbour links and per-edge flags.

    Edge ``i`` is the edge opposite to point ``i``.
    """

    def __init__(self, a: Point, b: Point, c: Point) -> None:
        self.points: list[Optional[Point]] = [a, b, c]
        self.neighbors: list[Optional[Triangle]] = [None, None, None]
        self.constrained_edge: list[bool] = [False, False, False]
        self.delaunay_edge: list[bool] = [False, False, False]
        self.interior: bool = False

    def __repr__(self) -> str:
        return f"Triangle({self.points[0]!r}, {self.points[1]!r}, {self.points[2]!r})"

    def __str__(self) -> str:
        return " ".join(str(p) for p in self.points)

    def _slot(self, point: Optional[Point]) -> int:
        """Slot of ``point`` by identity, 2 when it is not one of the first two."""
        if point is self.points[0]:
            return 0
        if point is self.points[1]:
            return 1
        return 2

    # Points

    def point_cw(self, point: Optional[Point]) -> Optional[Point]:
        """The point clockwise to ``point``, or None if it is not a vertex."""
        p0, p1, p2 = self.points
        if point is p0:
            return p2
        if point is p1:
            return p0
        if point is p2:
            return p1
        return None

    def point_ccw(self, point: Optional[Point]) -> Optional[Point]:
        """The point counter-clockwise to ``point``, or None if it is not a vertex."""
        p0, p1, p2 = self.points
        if point is p0:
            return p1
        if point is p1:
            return p2
        if point is p2:
            return p0
        return None

    def opposite_point(self, t: Triangle, p: Point) -> Optional[Point]:
        """The vertex of this triangle opposite the edge shared with ``t``."""
        return self.point_cw(t.point_cw(p))

    def index(self, p: Optional[Point]) -> int:
        """Slot of ``p`` among the vertices, or -1 if it is not a vertex."""
        for i, q in enumerate(self.points):
            if p is q:
                return i
        return -1

    def edge_index(self, p1: Optional[Point], p2: Optional[Point]) -> int:
        """Index of the edge joining ``p1`` and ``p2``, or -1 if there is none."""
        i = self.index(p1)
        j = self.index(p2)
        if i == -1 or j == -1 or i == j:
            return -1
        return 3 - i - j

    def contains(self, p: Optional[Point]) -> bool:
        """True if ``p`` is one of the vertices."""
        return any(p is q for q in self.points)

    def contains_edge(self, p: Optional[Point], q: Optional[Point]) -> bool:
        """True if both ``p`` and ``q`` are vertices."""
        return self.contains(p) and self.contains(q)

    # Neighbours

    def mark_neighbor(self, p1: Point, p2: Point, t: Optional[Triangle]) -> None:
        """Record ``t`` as the neighbour across the edge ``p1``-``p2``."""
        index = self.edge_index(p1, p2)
        if index != -1:
            self.neighbors[index] = t

    def mark_neighbor_triangle(self, t: Triangle) -> None:
        """Link this triangle and ``t`` both ways if they share an edge."""
        p0, p1, p2 = self.points
        if t.contains_edge(p1, p2):
            self.neighbors[0] = t
            t.mark_neighbor(p1, p2, self)
        elif t.contains_edge(p0, p2):
            self.neighbors[1] = t
            t.mark_neighbor(p0, p2, self)
        elif t.contains_edge(p0, p1):
            self.neighbors[2] = t
            t.mark_neighbor(p0, p1, self)

    def neighbor_across(self, point: Point) -> Optional[Triangle]:
        """The neighbour across the edge opposite ``point``."""
        return self.neighbors[self._slot(point)]

    def neighbor_cw(self, point: Point) -> Optional[Triangle]:
        """The neighbour clockwise to ``point``."""
        return self.neighbors[(self._slot(point) + 1) % 3]

    def neighbor_ccw(self, point: Point) -> Optional[Triangle]:
        """The neighbour counter-clockwise to ``point``."""
        return self.neighbors[(self._slot(point) + 2) % 3]

    # Edge flags

    def mark_constrained_edge_index(self, index: int) -> None:
        """Mark edge ``index`` as constrained."""
        self.constrained_edge[index] = True

    def mark_constrained_edge(self, p: Point, q: Point) -> None:
        """Mark the edge joining ``p`` and ``q`` as constrained, if present."""
        index = self.edge_index(p, q)
        if index != -1:
            self.constrained_edge[index] = True

    def get_constrained_edge_ccw(self, p: Point) -> bool:
        return self.constrained_edge[(self._slot(p) + 2) % 3]

    def get_constrained_edge_cw(self, p: Point) -> bool:
        return self.constrained_edge[(self._slot(p) + 1) % 3]

    def set_constrained_edge_ccw(self, p: Point, ce: bool) -> None:
        self.constrained_edge[(self._slot(p) + 2) % 3] = ce

    def set_constrained_edge_cw(self, p: Point, ce: bool) -> None:
        self.constrained_edge[(self._slot(p) + 1) % 3] = ce

    def get_delaunay_edge_ccw(self, p: Point) -> bool:
        return self.delaunay_edge[(self._slot(p) + 2) % 3]

    def get_delaunay_edge_cw(self, p: Point) -> bool:
        return self.delaunay_edge[(self._slot(p) + 1) % 3]

    def set_delaunay_edge_ccw(self, p: Point, e: bool) -> None:
        self.delaunay_edge[(self._slot(p) + 2) % 3] = e

    def set_delaunay_edge_cw(self, p: Point, e: bool) -> None:
        self.delaunay_edge[(self._slot(p) + 1) % 3] = e

    # Mutation

    def legalize(self, opoint: Point, npoint: Point) -> None:
        """Rotate the vertices clockwise around ``opoint``, bringing in ``npoint``."""
        p0, p1, p2 = self.points
        if opoint is p0:
            self.points = [p2, p0, npoint]
        elif opoint is p1:
            self.points = [npoint, p0, p1]
        elif opoint is p2:
            self.points = [p2, npoint, p1]

    def clear(self) -> None:
        """Drop all links to neighbouring triangles and to the vertices."""
        for neighbor in self.neighbors:
            if neighbor is not None:
                neighbor.clear_neighbor(self)
        self.clear_neighbors()
        self.points = [None, None, None]

    def clear_neighbor(self, triangle: Triangle) -> None:
        """Forget ``triangle`` as a neighbour."""
        if self.neighbors[0] is triangle:
            self.neighbors[0] = None
        elif self.neighbors[1] is triangle:
            self.neighbors[1] = None
        else:
            self.neighbors[2] = None

    def clear_neighbors(self) -> None:
        self.neighbors = [None, None, None]

    def clear_delaunay_edges(self) -> None:
        self.delaunay_edge = [False, False, False]

    # Geometry

    def is_counter_clockwise(self) -> bool:
        """True if the vertices are in counter-clockwise order."""
        a, b, c = self.points
        return (b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y) > 0

    def circumcircle_contains(self, point: Point) -> bool:
        """True if ``point`` lies strictly inside the circumcircle."""
        assert self.is_counter_clockwise()
        a, b, c = self.points
        dx, dy = a.x - point.x, a.y - point.y
        ex, ey = b.x - point.x, b.y - point.y
        fx, fy = c.x - point.x, c.y - point.y
        ap = dx * dx + dy * dy
        bp = ex * ex + ey * ey
        cp = fx * fx + fy * fy
        det = dx * (fy * bp - cp * ey) - dy * (fx * bp - cp * ex) + ap * (fx * ey - fy * ex)
        return det < 0


def sort_key(point: Point) -> tuple[float, float]:
    """Sweep order: by y, then by x."""
    return (point.y, point.x)


def dot(a: Point, b: Point) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y


def cross(a: Union[Point, float], b: Union[Point, float]) -> Union[float, Point]:
    """2-D cross product.

    Two points give a scalar; a point and a scalar give a point.
    """
    if isinstance(a, Point) and isinstance(b, Point):
        return a.x * b.y - a.y * b.x
    if isinstance(a, Point):
        return Point(b * a.y, -b * a.x)
    if isinstance(b, Point):
        return Point(-a * b.y, a * b.x)
    raise TypeError("cross needs at least one Point")


def is_delaunay(triangles: Iterable[Triangle]) -> bool:
    """True if no triangle's circumcircle holds a vertex of another triangle."""
    triangles = list(triangles)
    for triangle in triangles:
        for other in triangles:
            if triangle is other:
                continue
            if any(triangle.circumcircle_contains(p) for p in other.points):
                return False
    return True


_INFINITE = float("inf")


def _copy(point: Optional[Point]) -> Point:
    if point is None:
        return Point(_INFINITE, _INFINITE)
    return Point(point.x, point.y)


class Poly2TriError(RuntimeError):
    """Base error raised by the triangulation."""

    def __init__(self, message: str = "poly2tri error") -> None:
        super().__init__(message)


class CollinearPointsError(Poly2TriError):
    """Raised when collinear points make the input unsupported."""

    def __init__(
        self,
        a: Point,
        b: Point,
        c: Point,
        message: str = "poly2tri: collinear points not supported",
    ) -> None:
        super().__init__(message)
        self.a = _copy(a)
        self.b = _copy(b)
        self.c = _copy(c)


class DegenerateTriangleError(CollinearPointsError):
    """Raised when a triangle turns out to be degenerate."""

    def __init__(
        self, a: Point, b: Point, c: Point, message: str = "poly2tri: degenerate triangle"
    ) -> None:
        super().__init__(a, b, c, message)


class NullTriangleError(Poly2TriError):
    """Raised when the mesh walk reaches a missing triangle.

    ``a``, ``b`` and ``c`` are the points of the triangle the walk came
    from, when known; missing points are infinite.
    """

    def __init__(
        self,
        a: Optional[Point] = None,
        b: Optional[Point] = None,
        c: Optional[Point] = None,
        message: str = "poly2tri: null triangle",
    ) -> None:
        super().__init__(message)
        self.a = _copy(a) if a is not None else None
        self.b = _copy(b) if b is not None else None
        self.c = _copy(c) if c is not None else None

    @classmethod
    def near(cls, triangle: Triangle, message: str = "poly2tri: null triangle") -> NullTriangleError:
        """Build the error from the triangle next to the missing one."""
        error = cls(message=message)
        error.a, error.b, error.c = (_copy(p) for p in triangle.points)
        return error