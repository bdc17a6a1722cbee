import math

import pytest

from polytri.shapes import (
    CollinearPointsError,
    DegenerateTriangleError,
    Edge,
    NullTriangleError,
    Point,
    Poly2TriError,
    Triangle,
    cross,
    dot,
    is_delaunay,
    sort_key,
)


@pytest.fixture
def abc():
    a = Point(0, 0)
    b = Point(1, 0)
    c = Point(0.5, 0.5)
    return a, b, c, Triangle(a, b, c)


def test_triangle_contains_and_circumcircle(abc):
    a, b, c, triangle = abc
    assert triangle.contains(a)
    assert triangle.contains(b)
    assert triangle.contains(c)
    assert triangle.circumcircle_contains(Point(0.5, 0.1))
    assert not triangle.circumcircle_contains(Point(1, 0.4))


def test_contains_uses_identity(abc):
    _, _, _, triangle = abc
    assert not triangle.contains(Point(0, 0))


def test_point_arithmetic():
    a = Point(1, 2)
    b = Point(3, 5)
    assert a + b == Point(4, 7)
    assert b - a == Point(2, 3)
    assert -a == Point(-1, -2)
    assert 2 * a == Point(2, 4)
    assert a * 3 == Point(3, 6)


def test_point_in_place_ops():
    a = Point(1, 1)
    a += Point(2, 3)
    assert (a.x, a.y) == (3, 4)
    a -= Point(1, 1)
    assert (a.x, a.y) == (2, 3)
    a *= 0.5
    assert (a.x, a.y) == (1.0, 1.5)


def test_point_length_and_normalize():
    p = Point(3, 4)
    assert p.length() == 5
    assert p.normalize() == 5
    assert p.x == pytest.approx(0.6)
    assert p.y == pytest.approx(0.8)
    assert p.length() == pytest.approx(1.0)


def test_point_set_and_zero():
    p = Point(7, 8)
    p.set(1.5, -2)
    assert p == Point(1.5, -2)
    p.set_zero()
    assert p == Point(0, 0)


def test_point_str():
    assert str(Point(1.5, -2)) == "1.5,-2"


def test_edge_orders_by_y_then_x():
    low = Point(5, 0)
    high = Point(0, 1)
    edge = Edge(high, low)
    assert edge.p is low
    assert edge.q is high
    assert high.edge_list == [edge]
    assert low.edge_list == []

    left = Point(0, 3)
    right = Point(2, 3)
    flat = Edge(right, left)
    assert flat.p is left
    assert flat.q is right


def test_point_cw_ccw(abc):
    a, b, c, t = abc
    assert t.point_cw(a) is c
    assert t.point_cw(b) is a
    assert t.point_cw(c) is b
    assert t.point_ccw(a) is b
    assert t.point_ccw(b) is c
    assert t.point_ccw(c) is a
    assert t.point_cw(Point(9, 9)) is None


def test_index_and_edge_index(abc):
    a, b, c, t = abc
    assert [t.index(a), t.index(b), t.index(c)] == [0, 1, 2]
    assert t.index(Point(0, 0)) == -1
    assert t.edge_index(a, b) == 2
    assert t.edge_index(b, a) == 2
    assert t.edge_index(a, c) == 1
    assert t.edge_index(c, b) == 0
    assert t.edge_index(a, Point(3, 3)) == -1


def test_mark_neighbor_triangle_links_both_ways():
    a, b, c, d = Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)
    t1 = Triangle(a, b, c)
    t2 = Triangle(b, d, c)
    t1.mark_neighbor_triangle(t2)
    assert t1.neighbors[0] is t2
    assert t2.neighbors[1] is t1
    assert t1.neighbor_across(a) is t2
    assert t2.neighbor_across(d) is t1


def test_clear_removes_links():
    a, b, c, d = Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)
    t1 = Triangle(a, b, c)
    t2 = Triangle(b, d, c)
    t1.mark_neighbor_triangle(t2)
    t1.clear()
    assert t2.neighbors == [None, None, None]
    assert t1.neighbors == [None, None, None]
    assert t1.points == [None, None, None]


def test_neighbor_cw_ccw(abc):
    a, b, c, t = abc
    n0, n1, n2 = Triangle(a, b, c), Triangle(a, b, c), Triangle(a, b, c)
    t.neighbors = [n0, n1, n2]
    assert t.neighbor_cw(a) is n1
    assert t.neighbor_cw(b) is n2
    assert t.neighbor_cw(c) is n0
    assert t.neighbor_ccw(a) is n2
    assert t.neighbor_ccw(b) is n0
    assert t.neighbor_ccw(c) is n1


def test_constrained_edge_flags(abc):
    a, b, c, t = abc
    t.set_constrained_edge_ccw(a, True)
    assert t.constrained_edge == [False, False, True]
    assert t.get_constrained_edge_ccw(a)
    t.set_constrained_edge_cw(a, True)
    assert t.constrained_edge == [False, True, True]
    assert t.get_constrained_edge_cw(c) is False
    t.mark_constrained_edge(c, b)
    assert t.constrained_edge == [True, True, True]


def test_mark_constrained_edge_index(abc):
    _, _, _, t = abc
    t.mark_constrained_edge_index(1)
    assert t.constrained_edge == [False, True, False]


def test_delaunay_edge_flags(abc):
    a, b, c, t = abc
    t.set_delaunay_edge_cw(b, True)
    assert t.delaunay_edge == [False, False, True]
    assert t.get_delaunay_edge_cw(b)
    t.set_delaunay_edge_ccw(c, True)
    assert t.delaunay_edge == [False, True, True]
    assert t.get_delaunay_edge_ccw(c)
    t.clear_delaunay_edges()
    assert t.delaunay_edge == [False, False, False]


@pytest.mark.parametrize(
    "pivot, expected",
    [(0, ["c", "a", "d"]), (1, ["d", "a", "b"]), (2, ["c", "d", "b"])],
)
def test_legalize_rotations(pivot, expected):
    pts = {"a": Point(0, 0), "b": Point(1, 0), "c": Point(0, 1), "d": Point(1, 1)}
    t = Triangle(pts["a"], pts["b"], pts["c"])
    t.legalize(t.points[pivot], pts["d"])
    assert all(p is pts[name] for p, name in zip(t.points, expected))


def test_legalize_unknown_point_is_noop(abc):
    a, b, c, t = abc
    t.legalize(Point(0, 0), Point(5, 5))
    assert t.points[0] is a and t.points[1] is b and t.points[2] is c


def test_opposite_point():
    a, b, c, d = Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)
    t1 = Triangle(a, b, c)
    t2 = Triangle(b, d, c)
    assert t2.opposite_point(t1, a) is d
    assert t1.opposite_point(t2, d) is a


def test_is_counter_clockwise(abc):
    a, b, c, t = abc
    assert t.is_counter_clockwise()
    assert not Triangle(a, c, b).is_counter_clockwise()


def test_is_delaunay_square():
    a, b, c, d = Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)
    assert is_delaunay([Triangle(a, b, c), Triangle(a, c, d)])


def test_is_delaunay_detects_bad_pair():
    a, b, c, d = Point(0, 0), Point(2, -3), Point(4, 0), Point(2, 0.1)
    assert not is_delaunay([Triangle(a, b, c), Triangle(a, c, d)])


def test_sort_key_orders_by_y_then_x():
    pts = [Point(2, 1), Point(0, 1), Point(5, 0)]
    ordered = sorted(pts, key=sort_key)
    assert [(p.x, p.y) for p in ordered] == [(5, 0), (0, 1), (2, 1)]


def test_dot_and_cross():
    a = Point(1, 2)
    b = Point(3, 4)
    assert dot(a, b) == 11
    assert cross(a, b) == -2
    assert cross(a, 2) == Point(4, -2)
    assert cross(2, a) == Point(-4, 2)
    with pytest.raises(TypeError):
        cross(1, 2)


def test_collinear_error_copies_points():
    a, b, c = Point(0, 0), Point(1, 1), Point(2, 2)
    error = CollinearPointsError(a, b, c)
    assert isinstance(error, Poly2TriError)
    assert error.b == b and error.b is not b
    assert "collinear" in str(error)


def test_degenerate_error_is_collinear_error():
    with pytest.raises(CollinearPointsError) as info:
        raise DegenerateTriangleError(Point(0, 0), Point(1, 0), Point(2, 0))
    assert info.value.c == Point(2, 0)


def test_null_triangle_error_near(abc):
    a, b, c, t = abc
    error = NullTriangleError.near(t)
    assert (error.a, error.b, error.c) == (a, b, c)
    t.clear()
    cleared = NullTriangleError.near(t)
    assert math.isinf(cleared.a.x) and math.isinf(cleared.c.y)


def test_null_triangle_error_without_points():
    error = NullTriangleError()
    assert error.a is None
    assert str(error) == "poly2tri: null triangle"