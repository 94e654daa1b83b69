"""
Color conversion helpers.

Overlay colors are stored as ``#RRGGBB`` strings; the PDF writer wants
normalized floats and Qt wants 0-255 integers.
"""
import re
from typing import Optional, Tuple

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

NO_FILL = "none"


def is_hex_color(value: str) -> bool:
    """Check whether a string is a ``#RGB`` or ``#RRGGBB`` color."""
    return isinstance(value, str) and bool(_HEX_PATTERN.match(value))


def hex_to_rgb255(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert hex color to RGB tuple (0-255 range).

    Args:
        hex_color: Hex color string (e.g., '#AABBCC' or 'AABBCC')

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    if not is_hex_color(hex_color):
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    hex_color = hex_color.lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(c * 2 for c in hex_color)
    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))


def hex_to_rgb(hex_color: str) -> Tuple[float, float, float]:
    """Convert hex color to a normalized (0-1) RGB tuple."""
    return tuple(c / 255.0 for c in hex_to_rgb255(hex_color))


def fill_to_rgb(fill: Optional[str]) -> Optional[Tuple[float, float, float]]:
    """Normalized RGB for a fill value, or None when the shape is unfilled."""
    if fill is None or fill in (NO_FILL, "transparent"):
        return None
    return hex_to_rgb(fill)
