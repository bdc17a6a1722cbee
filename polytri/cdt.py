"""Constrained Delaunay triangulation of a polygon with holes and Steiner points."""

from __future__ import annotations

from typing import Iterable

from polytri.shapes import Point, Triangle
from polytri.sweep import Sweep
from polytri.sweep_context import SweepContext


class CDT:
    """Constrained Delaunay triangulation of a simple polygon.

    The polygon is given as a closed polyline of distinct points. Holes
    and Steiner points are added before :meth:`triangulate` is called.
    """

    def __init__(self, polyline: Iterable[Point]) -> None:
        self._context = SweepContext(polyline)
        self._sweep = Sweep()

    def add_hole(self, polyline: Iterable[Point]) -> None:
        """Add a closed polyline bounding a hole."""
        self._context.add_hole(polyline)

    def add_point(self, point: Point) -> None:
        """Add a Steiner point inside the polygon."""
        self._context.add_point(point)

    def triangulate(self) -> None:
        """Run the triangulation over everything added so far."""
        self._sweep.triangulate(self._context)

    @property
    def triangles(self) -> list[Triangle]:
        """The triangles inside the polygon and outside its holes."""
        return list(self._context.triangles)

    @property
    def map(self) -> list[Triangle]:
        """Every triangle built during the sweep, including exterior ones."""
        return list(self._context.map)

    @property
    def points(self) -> list[Point]:
        """All input points, in sweep order once triangulated."""
        return self._context.points