"""
Handle-specific resize rules.

Every result is computed from the overlay as it was when the gesture
started, never from the previous frame.
"""
from typing import Any, Dict

from inkstamp.config import Config
from inkstamp.core.annotations.models import BoxOverlay, CircleOverlay, LineOverlay, Overlay


def _resize_box(origin: BoxOverlay, handle: str, dx: float, dy: float) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}

    if handle in ("e", "ne", "se"):
        fields["width"] = max(Config.MIN_BOX_SIZE, origin.width + dx)
    elif handle in ("w", "nw", "sw"):
        width = max(Config.MIN_BOX_SIZE, origin.width - dx)
        # The east edge stays put
        fields["x"] = origin.x + origin.width - width
        fields["width"] = width

    if handle in ("s", "sw", "se"):
        fields["height"] = max(Config.MIN_BOX_SIZE, origin.height + dy)
    elif handle in ("n", "nw", "ne"):
        height = max(Config.MIN_BOX_SIZE, origin.height - dy)
        fields["y"] = origin.y + origin.height - height
        fields["height"] = height

    return fields


def resize_fields(origin: Overlay, handle: str, dx: float, dy: float) -> Dict[str, Any]:
    """
    Field values produced by dragging ``handle`` by (dx, dy).

    Args:
        origin: Overlay state at the start of the gesture
        handle: Handle name, one of ``origin.handles``
        dx, dy: Pointer movement since the gesture started, in document units

    Returns:
        Dictionary of fields to merge into the overlay
    """
    if handle not in origin.handles:
        raise ValueError(f"{origin.kind.value} has no '{handle}' handle")

    if isinstance(origin, BoxOverlay):
        return _resize_box(origin, handle, dx, dy)

    if isinstance(origin, CircleOverlay):
        return {"radius": max(Config.MIN_RADIUS, origin.radius + max(dx, dy) / 2)}

    if isinstance(origin, LineOverlay):
        if handle == "start":
            return {"x1": origin.x1 + dx, "y1": origin.y1 + dy}
        return {"x2": origin.x2 + dx, "y2": origin.y2 + dy}

    raise TypeError(f"Cannot resize {type(origin).__name__}")
