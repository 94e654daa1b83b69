import pytest

from inkstamp.core.geometry import arrow_geometry, arrow_head_length


def test_horizontal_arrow_geometry():
    geometry = arrow_geometry(0, 0, 100, 0, stroke_width=2)

    assert geometry.head_length == 12
    assert geometry.head_width == pytest.approx(7.2)
    assert geometry.tip == (100, 0)
    assert geometry.line_start == (0, 0)
    assert geometry.line_end == pytest.approx((88, 0))
    assert geometry.base_left == pytest.approx((88, 7.2))
    assert geometry.base_right == pytest.approx((88, -7.2))


def test_head_grows_with_stroke_width():
    assert arrow_head_length(4, 200) == 20
    assert arrow_head_length(1, 200) == 12


def test_head_never_exceeds_most_of_a_short_arrow():
    geometry = arrow_geometry(0, 0, 10, 0, stroke_width=2)

    assert geometry.head_length == pytest.approx(9)
    assert geometry.line_end == pytest.approx((1, 0))


def test_vertical_arrow_geometry():
    geometry = arrow_geometry(0, 0, 0, 100, stroke_width=2)

    assert geometry.tip == (0, 100)
    assert geometry.line_end == pytest.approx((0, 88))
    assert geometry.base_left == pytest.approx((-7.2, 88))
    assert geometry.base_right == pytest.approx((7.2, 88))
    assert geometry.head == (geometry.tip, geometry.base_left, geometry.base_right)


def test_zero_length_arrow_collapses_to_a_point():
    geometry = arrow_geometry(5, 5, 5, 5, stroke_width=2)

    assert geometry.head_length == 0
    assert geometry.line_end == pytest.approx((5, 5))
