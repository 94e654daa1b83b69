import pytest

from inkstamp.core.annotations import (
    ArrowOverlay,
    CircleOverlay,
    DrawingOverlay,
    HighlightOverlay,
    ImageOverlay,
    LineOverlay,
    Overlay,
    RectOverlay,
    SignatureOverlay,
    TextOverlay,
    WhiteoutOverlay,
)

VARIANTS = [
    TextOverlay(x=10, y=20),
    RectOverlay(x=10, y=20, width=30, height=40),
    CircleOverlay(x=10, y=20, radius=15),
    LineOverlay(x1=10, y1=20, x2=50, y2=60),
    ArrowOverlay(x1=10, y1=20, x2=50, y2=60),
    HighlightOverlay(x=10, y=20, width=30, height=40),
    WhiteoutOverlay(x=10, y=20, width=30, height=40),
    DrawingOverlay(points=[(10, 20), (50, 60)]),
    SignatureOverlay(x=10, y=20),
    ImageOverlay(x=10, y=20, width=30, height=40),
]


@pytest.mark.parametrize("overlay", VARIANTS, ids=lambda o: o.kind.value)
def test_every_variant_implements_the_geometry_contract(overlay):
    x0, y0, x1, y1 = overlay.bounds()
    assert x0 <= x1 and y0 <= y1

    ax, ay = overlay.anchor()
    moved = type(overlay)(**{**vars(overlay), **overlay.translate_fields(5, 7)})
    assert moved.anchor() == (ax + 5, ay + 7)


def test_base_overlay_geometry_is_abstract():
    overlay = Overlay()

    with pytest.raises(NotImplementedError, match="bounds"):
        overlay.bounds()
    with pytest.raises(NotImplementedError, match="anchor"):
        overlay.anchor()
    with pytest.raises(NotImplementedError, match="translate_fields"):
        overlay.translate_fields(1, 1)
