"""
Coordinate mapping, hit testing and shared shape geometry.
"""
from .arrow import ArrowGeometry, arrow_geometry, arrow_head_length
from .coordinates import ViewTransform, clamp_scale, to_document, to_view
from .hit_testing import handle_at, overlay_at, point_in_overlay, point_near_line

__all__ = [
    "ArrowGeometry",
    "arrow_geometry",
    "arrow_head_length",
    "ViewTransform",
    "clamp_scale",
    "to_document",
    "to_view",
    "handle_at",
    "overlay_at",
    "point_in_overlay",
    "point_near_line",
]
