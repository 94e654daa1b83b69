"""
Conversion between view space (zoomed pixels) and document space.

View space is what the canvas shows: pixels, top-left origin, multiplied by
the zoom scale. Document space is the unscaled page in PDF points with the
same top-left origin. Geometry is always stored in document space and only
multiplied by the scale when painted.
"""
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from inkstamp.config import Config

Point = Tuple[float, float]
Size = Tuple[float, float]


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _check_scale(scale: float) -> None:
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"Scale must be a positive number, got {scale!r}")


def clamp_scale(scale: float) -> float:
    """
    Clamp a zoom scale to the supported range.

    Raises:
        ValueError: for zero, negative or non-finite scales
    """
    _check_scale(scale)
    return min(Config.MAX_SCALE, max(Config.MIN_SCALE, scale))


def to_document(pointer_x: float, pointer_y: float, view_origin: Point,
                scale: float, page_size: Optional[Size] = None) -> Point:
    """
    Convert a pointer position to document coordinates.

    Args:
        pointer_x, pointer_y: Pointer position in view pixels
        view_origin: View position of the page's top-left corner
        scale: Current zoom scale
        page_size: Optional (width, height) to clamp the result into

    Returns:
        Tuple of (x, y) in document units
    """
    _check_scale(scale)
    x = (_finite(pointer_x) - view_origin[0]) / scale
    y = (_finite(pointer_y) - view_origin[1]) / scale

    if page_size is not None:
        x = min(max(x, 0.0), page_size[0])
        y = min(max(y, 0.0), page_size[1])
    return (x, y)


def to_view(doc_x: float, doc_y: float, scale: float,
            view_origin: Point = (0.0, 0.0)) -> Point:
    """Convert document coordinates to view pixels."""
    _check_scale(scale)
    return (doc_x * scale + view_origin[0], doc_y * scale + view_origin[1])


@dataclass(frozen=True)
class ViewTransform:
    """Zoom and placement of one page on the canvas."""

    scale: float = Config.DEFAULT_SCALE
    origin: Point = (0.0, 0.0)
    page_size: Optional[Size] = None

    def __post_init__(self):
        object.__setattr__(self, "scale", clamp_scale(self.scale))

    def with_scale(self, scale: float) -> "ViewTransform":
        return replace(self, scale=scale)

    def with_page_size(self, page_size: Optional[Size]) -> "ViewTransform":
        return replace(self, page_size=page_size)

    def to_document(self, x: float, y: float) -> Point:
        return to_document(x, y, self.origin, self.scale, self.page_size)

    def to_view(self, x: float, y: float) -> Point:
        return to_view(x, y, self.scale, self.origin)

    def view_length(self, length: float) -> float:
        """Document length of a distance given in view pixels."""
        return length / self.scale
