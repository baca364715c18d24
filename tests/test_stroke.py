"""Tests for whole-stroke stabilization."""

import pytest

from inkstable import stabilization_to_params, stabilize_stroke

from .helpers import jittery_line, make_point, y_variance


@pytest.mark.parametrize("strength,expected_size", [
    (0, 1),
    (-0.3, 1),
    (0.5, 13),
    (1.0, 21),
    (2.0, 21),
])
def test_stabilization_to_params(strength, expected_size):
    """Strength should map to an odd kernel size."""
    size, sigma = stabilization_to_params(strength)
    assert size == expected_size
    assert size % 2 == 1
    if size > 1:
        assert sigma == pytest.approx(size / 3)
    else:
        assert sigma == 0


def test_short_strokes():
    """Empty and single-point strokes should pass through."""
    assert stabilize_stroke([], 5, 1.0) == []
    single = [make_point(3, 4)]
    assert stabilize_stroke(single, 5, 1.0) == single


def test_size_one_copies_points():
    """Size 1 should return a copy."""
    points = [make_point(0, 0), make_point(10, 3)]
    result = stabilize_stroke(points, 1, 0.0)
    assert result == points
    assert result is not points


def test_constant_stroke_is_unchanged():
    """Constant stroke should stay constant."""
    points = [make_point(4, 4)] * 6
    for p in stabilize_stroke(points, 5, 1.0):
        assert p.x == pytest.approx(4.0)
        assert p.y == pytest.approx(4.0)


def test_straight_line_stays_straight():
    """Straight lines should stay straight."""
    points = [make_point(x, 0.5 * x) for x in range(0, 30, 3)]
    result = stabilize_stroke(points, 7, 2.0)

    assert len(result) == len(points)
    for p in result:
        assert p.y == pytest.approx(0.5 * p.x)


def test_pressure_is_preserved():
    """Pressure should be kept."""
    points = [make_point(i, 0, pressure=i / 10) for i in range(6)]
    result = stabilize_stroke(points, 3, 1.0)
    assert [p.pressure for p in result] == [p.pressure for p in points]


def test_smoothing_reduces_jitter():
    """Smoothing should reduce jitter."""
    points = jittery_line(count=80)
    size, sigma = stabilization_to_params(0.5)
    assert y_variance(stabilize_stroke(points, size, sigma)) < y_variance(points)


def test_zero_sigma_is_rejected():
    """Zero sigma with a real kernel should be rejected."""
    points = [make_point(0, 0), make_point(10, 3)]
    with pytest.raises(ValueError):
        stabilize_stroke(points, 5, 0.0)
