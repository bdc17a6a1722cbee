# polytri

`polytri` computes the constrained Delaunay triangulation of a simple polygon.
The polygon may have holes and extra interior (Steiner) points. It uses a
sweep-line algorithm, is written in pure Python and has no dependencies.
Orientation and in-circle tests fall back to exact rational arithmetic when
floating point cannot decide them.

## Installation

```
pip install polytri
```

## Library usage

```python
from polytri.cdt import CDT
from polytri.shapes import Point, is_delaunay

outline = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
hole = [Point(1, 1), Point(1, 2), Point(2, 2), Point(2, 1)]

cdt = CDT(outline)
cdt.add_hole(hole)
cdt.add_point(Point(3, 3))
cdt.triangulate()

for triangle in cdt.triangles:
    print(triangle.points)

print(is_delaunay(cdt.triangles))
```

`CDT` offers:

- `add_hole(polyline)` and `add_point(point)` to add holes and Steiner points;
- `triangulate()` to run the sweep;
- `triangles`, the triangles inside the polygon and outside its holes;
- `map`, every triangle built during the sweep, exterior ones included;
- `points`, all input points (sorted by y, then x, after triangulation).

Input rules:

- The outline and every hole must be simple polygons, and no point may repeat.
- Points are matched by identity, so pass each `Point` object only once.
- Call `triangulate()` only after the outline, the holes and the Steiner points have all been added.

If the geometry cannot be triangulated, `triangulate()` raises a subclass of
`polytri.shapes.Poly2TriError` (itself a `RuntimeError`): `CollinearPointsError`,
`DegenerateTriangleError` or `NullTriangleError`. Triangulating with no points
at all raises `ValueError`.

Other helpers:

- `polytri.predicates`: `orient2d` and `in_scan_area` (exact), `orient2d_inexact`
  and `in_scan_area_inexact` (epsilon-based), and the `Orientation` enum.
- `polytri.shapes`: `Point` with vector arithmetic, `length` and `normalize`;
  `dot`, `cross`, `sort_key` and `is_delaunay`.

## Command line

The `polytri` command triangulates a point file or a random point set and
prints statistics about the result.

Load a data file; the bounding box's center and a zoom factor are printed too:

```
polytri shape.dat
```

Load a data file, giving a center and zoom (these are accepted but not used):

```
polytri shape.dat 350 500 3
```

Generate a square of radius 1 with 100 random Steiner points inside (the last
argument, the zoom, is not used):

```
polytri random 100 1 500
```

A data file lists one `x y` pair per line; these points form the outline.
A line holding only `HOLE` starts a new hole, and a line holding only
`STEINER` starts the list of Steiner points. The first empty line ends the
file. Any other single-word line is an error.

The command prints the number of constrained edges, holes and Steiner points,
the number of triangles, whether the result is Delaunay, and the elapsed time.
It exits with 0 on success, 1 when the arguments are wrong (after printing the
usage) and 2 when the file cannot be read or parsed.

## What it does not do

The command does not draw anything: there is no window or viewer for the
triangulation. It only prints the statistics listed above.