import random

import pytest

from polytri.cli import (
    bounding_box,
    density,
    generate_random_point_distribution,
    main,
    parse_file,
    rejection_sample,
)
from polytri.shapes import Point


def _write(tmp_path, text):
    path = tmp_path / "shape.dat"
    path.write_text(text)
    return str(path)


def test_parse_file_sections(tmp_path):
    path = _write(
        tmp_path,
        "0 0\n10 0\n10 10\n0 10\nHOLE\n4 4\n6 4\n5 6\nSTEINER\n2 2\n8 8\n",
    )
    polyline, holes, steiner = parse_file(path)
    assert polyline == [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
    assert holes == [[Point(4, 4), Point(6, 4), Point(5, 6)]]
    assert steiner == [Point(2, 2), Point(8, 8)]


def test_parse_file_stops_at_blank_line(tmp_path):
    path = _write(tmp_path, "0 0\n1 0\n\n5 5\n")
    polyline, holes, steiner = parse_file(path)
    assert len(polyline) == 2
    assert holes == [] and steiner == []


def test_parse_file_unparsable_number_is_zero(tmp_path):
    path = _write(tmp_path, "abc 2.5\n")
    polyline, _, _ = parse_file(path)
    assert polyline == [Point(0.0, 2.5)]


def test_parse_file_invalid_token(tmp_path):
    path = _write(tmp_path, "0 0\nFOO\n")
    with pytest.raises(ValueError, match=r"Invalid token \[FOO\]"):
        parse_file(path)


def test_parse_file_missing(tmp_path):
    with pytest.raises(OSError):
        parse_file(str(tmp_path / "missing.dat"))


def test_bounding_box_encloses_points():
    points = [Point(-1, 3), Point(2, -4), Point(0.5, 0.5)]
    lower, upper = bounding_box(points)
    assert lower == Point(-1, -4)
    assert upper == Point(2, 3)


def test_bounding_box_empty():
    with pytest.raises(ValueError):
        bounding_box([])


def test_density_matches_formula_at_zero_of_sine():
    assert density(0.1 * 3.141592653589793) == pytest.approx(2.5)
    assert density(0.0) != density(0.0)  # NaN at the singular point


def test_rejection_sample_in_range():
    rng = random.Random(1)
    values = [rejection_sample(density, -0.5, 0.5, rng) for _ in range(50)]
    assert all(-0.5 <= v <= 0.5 for v in values)


def test_rejection_sample_is_reproducible():
    first = [rejection_sample(density, 0.1, 1.0, random.Random(7)) for _ in range(3)]
    second = [rejection_sample(density, 0.1, 1.0, random.Random(7)) for _ in range(3)]
    assert first == second


def test_generate_random_point_distribution():
    polyline, holes, steiner = generate_random_point_distribution(20, -1.0, 1.0, random.Random(3))
    assert polyline == [Point(-1, -1), Point(-1, 1), Point(1, 1), Point(1, -1)]
    assert holes == []
    assert len(steiner) == 20
    assert all(-1 + 1e-4 <= p.x <= 1 - 1e-4 and -1 + 1e-4 <= p.y <= 1 - 1e-4 for p in steiner)


def test_main_usage(capsys):
    assert main([]) == 1
    assert "-== USAGE ==-" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.dat")]) == 2
    assert "Error parsing file" in capsys.readouterr().err


def test_main_autozoom(tmp_path, capsys):
    path = _write(tmp_path, "0 0\n1 0\n1 1\n0 1\n")
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert "center_x = 0.5" in out
    assert "center_y = 0.5" in out
    assert "Number of triangles = 2" in out
    assert "Is Delaunay = true" in out


def test_main_with_explicit_view_skips_autozoom(tmp_path, capsys):
    path = _write(tmp_path, "0 0\n10 0\n10 10\n0 10\nHOLE\n4 4\n6 4\n5 6\n")
    assert main([path, "5", "5", "3"]) == 0
    out = capsys.readouterr().out
    assert "center_x" not in out
    assert "Number of holes = 1" in out
    assert "Total number of points = 7" in out


def test_main_random(capsys):
    assert main(["random", "10", "1", "500"]) == 0
    out = capsys.readouterr().out
    assert "Number of Steiner points = 10" in out
    assert "Number of primary constrained edges = 4" in out