"""
Arrow head geometry shared by the canvas preview and the PDF export.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from inkstamp.config import Config

Point = Tuple[float, float]


@dataclass(frozen=True)
class ArrowGeometry:
    """Shaft and head of an arrow, in the coordinate space of its input."""

    line_start: Point
    line_end: Point  # base of the head, where the shaft stops
    tip: Point
    base_left: Point
    base_right: Point
    head_length: float
    head_width: float  # half-width of the head base

    @property
    def head(self) -> Tuple[Point, Point, Point]:
        return (self.tip, self.base_left, self.base_right)


def arrow_head_length(stroke_width: float, total_length: float) -> float:
    """Head length grows with the stroke but never exceeds 90% of the arrow."""
    preferred = max(Config.ARROW_MIN_HEAD, stroke_width * Config.ARROW_HEAD_FACTOR)
    return min(preferred, total_length * Config.ARROW_MAX_HEAD_RATIO)


def arrow_geometry(x1: float, y1: float, x2: float, y2: float,
                   stroke_width: float) -> ArrowGeometry:
    """
    Compute the shortened shaft and the triangular head of an arrow.

    The tip sits exactly on (x2, y2). Works in any y-down or y-up space, the
    caller flips the resulting points if needed.
    """
    angle = math.atan2(y2 - y1, x2 - x1)
    total_length = math.hypot(x2 - x1, y2 - y1)
    head_length = arrow_head_length(stroke_width, total_length)
    head_width = head_length * Config.ARROW_WIDTH_RATIO

    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    base_x = x2 - head_length * cos_a
    base_y = y2 - head_length * sin_a

    return ArrowGeometry(
        line_start=(x1, y1),
        line_end=(base_x, base_y),
        tip=(x2, y2),
        base_left=(base_x - head_width * sin_a, base_y + head_width * cos_a),
        base_right=(base_x + head_width * sin_a, base_y - head_width * cos_a),
        head_length=head_length,
        head_width=head_width,
    )
