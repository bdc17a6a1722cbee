"""Command-line driver: triangulate a polygon file or a random point set."""

from __future__ import annotations

import functools
import math
import random
import re
import sys
import time
from typing import Callable, Optional, Sequence

from polytri.cdt import CDT
from polytri.shapes import Point, is_delaunay

DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 600
AUTOZOOM_BORDER = 0.05

_PEAK_SAMPLES = 10000
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

USAGE = """\
-== USAGE ==-
Load Data File: p2t <filename> <center_x> <center_y> <zoom>
  Example: p2t testbed/data/dude.dat 350 500 3
Load Data File with Auto-Zoom: p2t <filename>
  Example: p2t testbed/data/nazca_monkey.dat
Generate Random Polygon: p2t random <num_points> <box_radius> <zoom>
  Example: p2t random 100 1 500"""

Geometry = tuple[list[Point], list[list[Point]], list[Point]]


def _leading_float(text: str) -> float:
    """The number at the start of ``text``, or 0.0 if there is none."""
    match = _NUMBER.match(text.strip())
    return float(match.group()) if match else 0.0


def parse_file(filename: str) -> Geometry:
    """Read a polygon file into ``(polyline, holes, steiner)``.

    Each line holds ``x y``; a line ``HOLE`` starts a new hole and a line
    ``STEINER`` switches to Steiner points. Parsing stops at the first
    blank line.
    """
    polyline: list[Point] = []
    holes: list[list[Point]] = []
    steiner: list[Point] = []
    target = polyline
    with open(filename, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if not line:
                break
            tokens = line.split()
            if not tokens:
                break
            if len(tokens) == 1:
                token = tokens[0]
                if token == "HOLE":
                    holes.append([])
                    target = holes[-1]
                elif token == "STEINER":
                    target = steiner
                else:
                    raise ValueError(f"Invalid token [{token}]")
                continue
            target.append(Point(_leading_float(tokens[0]), _leading_float(tokens[1])))
    return polyline, holes, steiner


def bounding_box(polyline: Sequence[Point]) -> tuple[Point, Point]:
    """The lower-left and upper-right corners around ``polyline``."""
    if not polyline:
        raise ValueError("bounding box of no points")
    xs = [p.x for p in polyline]
    ys = [p.y for p in polyline]
    return Point(min(xs), min(ys)), Point(max(xs), max(ys))


def density(x: float) -> float:
    """Sampling density of the random point generator; NaN at zero."""
    if x == 0:
        return math.nan
    return 2.5 + math.sin(10 * x) / x


@functools.lru_cache(maxsize=32)
def _peak(fun: Callable[[float], float], xmin: float, xmax: float) -> float:
    peak = fun(xmin)
    for i in range(1, _PEAK_SAMPLES):
        y = fun(xmin + (xmax - xmin) * i / _PEAK_SAMPLES)
        if y > peak:
            peak = y
    return peak


def rejection_sample(
    fun: Callable[[float], float],
    xmin: float = 0.0,
    xmax: float = 1.0,
    rng: Optional[random.Random] = None,
) -> float:
    """Draw a value in ``[xmin, xmax]`` distributed in proportion to ``fun``."""
    rng = rng if rng is not None else random.Random()
    ymin, ymax = 0.0, _peak(fun, xmin, xmax)
    while True:
        x = xmin + (xmax - xmin) * rng.random()
        y = ymin + (ymax - ymin) * rng.random()
        if y < fun(x):
            return x


def generate_random_point_distribution(
    num_points: int,
    min_value: float,
    max_value: float,
    rng: Optional[random.Random] = None,
) -> Geometry:
    """A square boundary with ``num_points`` random Steiner points inside."""
    rng = rng if rng is not None else random.Random()
    polyline = [
        Point(min_value, min_value),
        Point(min_value, max_value),
        Point(max_value, max_value),
        Point(max_value, min_value),
    ]
    low = min_value + 1e-4
    high = max_value - 1e-4
    steiner = [
        Point(rejection_sample(density, low, high, rng), rejection_sample(density, low, high, rng))
        for _ in range(max(num_points, 0))
    ]
    return polyline, [], steiner


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.inf
    return numerator / denominator


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Triangulate the given input and print statistics about the result."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (1, 4):
        print(USAGE)
        return 1

    autozoom = len(args) == 1
    if not autozoom and args[0] == "random":
        num_points = int(_leading_float(args[1]))
        radius = _leading_float(args[2])
        polyline, holes, steiner = generate_random_point_distribution(num_points, -radius, radius)
    else:
        try:
            polyline, holes, steiner = parse_file(args[0])
        except (OSError, ValueError) as error:
            print(f"Error parsing file: {error}", file=sys.stderr)
            return 2

    if autozoom:
        lower, upper = bounding_box(polyline)
        center = (lower + upper) * 0.5
        sides = upper - lower
        zoom = (
            2.0
            * (1.0 - AUTOZOOM_BORDER)
            * min(_ratio(DEFAULT_WINDOW_WIDTH, sides.x), _ratio(DEFAULT_WINDOW_HEIGHT, sides.y))
        )
        print(f"center_x = {center.x:g}")
        print(f"center_y = {center.y:g}")
        print(f"zoom = {zoom:g}")

    if any(not hole for hole in holes):
        print("Error parsing file: empty hole", file=sys.stderr)
        return 2

    start = time.perf_counter()
    cdt = CDT(polyline)
    for hole in holes:
        cdt.add_hole(hole)
    for point in steiner:
        cdt.add_point(point)
    cdt.triangulate()
    elapsed = time.perf_counter() - start

    triangles = cdt.triangles
    points_in_holes = sum(len(hole) for hole in holes)
    print(f"Number of primary constrained edges = {len(polyline)}")
    print(f"Number of holes = {len(holes)}")
    print(f"Number of constrained edges in holes = {points_in_holes}")
    print(f"Number of Steiner points = {len(steiner)}")
    print(f"Total number of points = {len(polyline) + points_in_holes + len(steiner)}")
    print(f"Number of triangles = {len(triangles)}")
    print(f"Is Delaunay = {'true' if is_delaunay(triangles) else 'false'}")
    print(f"Elapsed time (ms) = {elapsed * 1000.0:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())