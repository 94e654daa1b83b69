"""
Drawing instructions handed to the PDF writer.

Coordinates use the PDF convention: origin at the bottom-left of the page,
y growing upwards. Colors are normalized (0-1) RGB tuples.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

RGB = Tuple[float, float, float]
Point = Tuple[float, float]

WHITE: RGB = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class TextPrimitive:
    x: float
    y: float  # baseline
    text: str
    font: str  # PDF base-14 font name
    size: float
    color: RGB
    align: str = "left"
    opacity: float = 1.0


@dataclass(frozen=True)
class RectPrimitive:
    x: float
    y: float  # bottom edge
    width: float
    height: float
    stroke: Optional[RGB] = None
    stroke_width: float = 0.0
    fill: Optional[RGB] = None
    opacity: float = 1.0


@dataclass(frozen=True)
class EllipsePrimitive:
    cx: float
    cy: float
    rx: float
    ry: float
    stroke: Optional[RGB] = None
    stroke_width: float = 0.0
    fill: Optional[RGB] = None
    opacity: float = 1.0


@dataclass(frozen=True)
class LinePrimitive:
    start: Point
    end: Point
    color: RGB
    width: float
    opacity: float = 1.0


@dataclass(frozen=True)
class PolygonPrimitive:
    """Closed, filled polygon."""

    points: Tuple[Point, ...]
    fill: RGB
    opacity: float = 1.0


@dataclass(frozen=True)
class ImagePrimitive:
    x: float
    y: float  # bottom edge
    width: float
    height: float
    data: bytes = field(repr=False)
    format: str  # png | jpeg | other


Primitive = Union[TextPrimitive, RectPrimitive, EllipsePrimitive, LinePrimitive,
                  PolygonPrimitive, ImagePrimitive]
