"""
Tool option records used when new overlays are placed.
"""
from dataclasses import dataclass, field

from inkstamp.config import Config
from inkstamp.utils.color_utils import NO_FILL, is_hex_color

TEXT_ALIGNMENTS = ("left", "center", "right")


def _check_color(name: str, value: str, allow_none: bool = False) -> None:
    if allow_none and value in (NO_FILL, "transparent"):
        return
    if not is_hex_color(value):
        raise ValueError(f"{name} must be a hex color, got {value!r}")


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


@dataclass(frozen=True)
class TextOptions:
    """Options for the text tool."""

    font: str = "Arial"
    size: float = 16.0  # points
    color: str = "#000000"
    bold: bool = False
    italic: bool = False
    align: str = "left"  # left | center | right

    def __post_init__(self):
        if self.align not in TEXT_ALIGNMENTS:
            raise ValueError(f"align must be one of {TEXT_ALIGNMENTS}, got {self.align!r}")
        _check_positive("size", self.size)
        _check_color("color", self.color)


@dataclass(frozen=True)
class ShapeOptions:
    """Options shared by rect, circle, line and arrow."""

    stroke: str = "#000000"
    fill: str = NO_FILL
    stroke_width: float = 2.0

    def __post_init__(self):
        _check_color("stroke", self.stroke)
        _check_color("fill", self.fill, allow_none=True)
        _check_positive("stroke_width", self.stroke_width)


@dataclass(frozen=True)
class DrawOptions:
    """Options for the freehand tool."""

    color: str = "#000000"
    width: float = 2.0

    def __post_init__(self):
        _check_color("color", self.color)
        _check_positive("width", self.width)


@dataclass(frozen=True)
class SignatureOptions:
    color: str = "#000080"
    text: str = Config.DEFAULT_SIGNATURE

    def __post_init__(self):
        _check_color("color", self.color)


@dataclass
class ToolOptions:
    """Current options of every placement tool."""

    text: TextOptions = field(default_factory=TextOptions)
    shape: ShapeOptions = field(default_factory=ShapeOptions)
    highlight_color: str = "#FFFF00"
    draw: DrawOptions = field(default_factory=DrawOptions)
    signature: SignatureOptions = field(default_factory=SignatureOptions)

    def __post_init__(self):
        _check_color("highlight_color", self.highlight_color)
