import math

import pytest

from inkstamp.core.geometry import ViewTransform, clamp_scale, to_document, to_view


def test_to_document_removes_origin_and_scale():
    assert to_document(250, 130, (50, 30), 2.0) == (100, 50)


def test_to_document_clamps_to_page():
    assert to_document(-20, 5000, (0, 0), 1.0, page_size=(595, 842)) == (0, 842)


def test_to_document_treats_non_finite_input_as_zero():
    assert to_document(math.nan, math.inf, (0, 0), 2.0) == (0, 0)


@pytest.mark.parametrize("scale", [0, -1, math.nan, math.inf])
def test_invalid_scales_are_rejected(scale):
    with pytest.raises(ValueError):
        to_document(1, 1, (0, 0), scale)
    with pytest.raises(ValueError):
        clamp_scale(scale)


def test_to_view_inverts_to_document():
    doc = to_document(333, 121, (10, 20), 1.6)
    view = to_view(doc[0], doc[1], 1.6, (10, 20))

    assert view == pytest.approx((333, 121))


def test_clamp_scale_range():
    assert clamp_scale(10) == 3.0
    assert clamp_scale(0.1) == 0.5
    assert clamp_scale(1.4) == 1.4


def test_view_transform_clamps_scale():
    assert ViewTransform(scale=7).scale == 3.0
    assert ViewTransform().with_scale(0.2).scale == 0.5


def test_view_transform_maps_with_page_size():
    transform = ViewTransform(scale=2.0, page_size=(100, 100))

    assert transform.to_document(60, 80) == (30, 40)
    assert transform.to_document(400, 400) == (100, 100)
    assert transform.to_view(30, 40) == (60, 80)
    assert transform.view_length(6) == 3
