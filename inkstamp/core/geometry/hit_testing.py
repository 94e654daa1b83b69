"""
Hit testing of overlays and resize handles in document space.
"""
import math
from typing import Optional, Sequence

from inkstamp.core.annotations.models import (
    CircleOverlay,
    DrawingOverlay,
    LineOverlay,
    Overlay,
)


def point_near_line(px: float, py: float, x1: float, y1: float,
                    x2: float, y2: float, tolerance: float) -> bool:
    """
    Check if a point is near a line segment.

    Args:
        px, py: Point coordinates
        x1, y1, x2, y2: Line segment endpoints
        tolerance: Maximum distance to consider "near"

    Returns:
        True if point is within tolerance of the line segment
    """
    line_length_sq = (x2 - x1) ** 2 + (y2 - y1) ** 2

    if line_length_sq == 0:
        return math.hypot(px - x1, py - y1) <= tolerance

    # Projection parameter clamped to the segment
    t = max(0.0, min(1.0, ((px - x1) * (x2 - x1) + (py - y1) * (y2 - y1)) / line_length_sq))
    nearest_x = x1 + t * (x2 - x1)
    nearest_y = y1 + t * (y2 - y1)
    return math.hypot(px - nearest_x, py - nearest_y) <= tolerance


def point_in_overlay(overlay: Overlay, x: float, y: float, tolerance: float) -> bool:
    """
    Check if a document-space point falls on an overlay.

    Args:
        overlay: Overlay to test
        x, y: Point in document units
        tolerance: Extra slack in document units for thin shapes
    """
    if isinstance(overlay, LineOverlay):
        slack = max(tolerance, overlay.stroke_width / 2 + tolerance / 2)
        return point_near_line(x, y, overlay.x1, overlay.y1,
                               overlay.x2, overlay.y2, slack)

    if isinstance(overlay, DrawingOverlay):
        slack = max(tolerance, overlay.width / 2 + tolerance / 2)
        points = overlay.points
        return any(
            point_near_line(x, y, *points[i], *points[i + 1], slack)
            for i in range(len(points) - 1)
        )

    if isinstance(overlay, CircleOverlay):
        return math.hypot(x - overlay.x, y - overlay.y) <= overlay.radius + tolerance / 2

    x0, y0, x1, y1 = overlay.bounds()
    return x0 <= x <= x1 and y0 <= y <= y1


def overlay_at(overlays: Sequence[Overlay], x: float, y: float,
               tolerance: float) -> Optional[Overlay]:
    """Topmost overlay under a point, or None."""
    # Check in reverse order (topmost first)
    for overlay in reversed(overlays):
        if point_in_overlay(overlay, x, y, tolerance):
            return overlay
    return None


def handle_at(overlay: Overlay, x: float, y: float, radius: float) -> Optional[str]:
    """Name of the resize handle of ``overlay`` under a point, or None."""
    for name, (hx, hy) in overlay.handle_positions().items():
        if abs(x - hx) <= radius and abs(y - hy) <= radius:
            return name
    return None
