"""
Overlay data model.

Each annotation kind is its own dataclass; ``kind`` discriminates them. All
geometry is stored in document space (unscaled PDF points, top-left origin).
"""
import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Tuple

from inkstamp.config import Config
from inkstamp.utils.color_utils import NO_FILL

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]  # x0, y0, x1, y1

# Text boxes are estimated without font metrics
TEXT_ADVANCE_RATIO = 0.55
TEXT_LINE_RATIO = 1.2

_id_counter = itertools.count(1)


def next_overlay_id() -> int:
    """Allocate a process-unique overlay id. Ids are never handed out twice."""
    return next(_id_counter)


class OverlayKind(Enum):
    """Types of overlay objects."""

    TEXT = "text"
    RECT = "rect"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    HIGHLIGHT = "highlight"
    WHITEOUT = "whiteout"
    DRAWING = "drawing"
    SIGNATURE = "signature"
    IMAGE = "image"


@dataclass(frozen=True)
class ImageAsset:
    """Decoded image data referenced by an image overlay."""

    width: int
    height: int
    data: bytes = field(repr=False)
    format: str  # "png", "jpeg" or "other"

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 1.0


@dataclass
class Overlay:
    """
    Base class for all overlay variants.

    Abstract: variants must implement anchor(), bounds() and translate_fields().
    """

    kind: ClassVar[OverlayKind]
    handles: ClassVar[Tuple[str, ...]] = ()

    id: int = 0  # assigned by OverlayStore.add

    def anchor(self) -> Point:
        """Reference point used for dragging."""
        raise NotImplementedError("Subclasses must implement anchor()")

    def bounds(self) -> Bounds:
        raise NotImplementedError("Subclasses must implement bounds()")

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        """Field values that move this overlay by (dx, dy)."""
        raise NotImplementedError("Subclasses must implement translate_fields()")

    def handle_positions(self) -> Dict[str, Point]:
        """Resize handle locations in document space."""
        return {}

    def enforce_limits(self) -> None:
        """Clamp geometry to the minimum-size invariant."""


@dataclass
class BoxOverlay(Overlay):
    """An overlay described by a top-left corner and a size."""

    handles: ClassVar[Tuple[str, ...]] = ("nw", "ne", "sw", "se", "n", "s", "e", "w")

    x: float = 0.0
    y: float = 0.0
    width: float = Config.MIN_BOX_SIZE
    height: float = Config.MIN_BOX_SIZE

    def anchor(self) -> Point:
        return (self.x, self.y)

    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"x": self.x + dx, "y": self.y + dy}

    def handle_positions(self) -> Dict[str, Point]:
        x0, y0, x1, y1 = self.bounds()
        mx, my = (x0 + x1) / 2, (y0 + y1) / 2
        return {
            "nw": (x0, y0), "ne": (x1, y0), "sw": (x0, y1), "se": (x1, y1),
            "n": (mx, y0), "s": (mx, y1), "e": (x1, my), "w": (x0, my),
        }

    def enforce_limits(self) -> None:
        self.width = max(Config.MIN_BOX_SIZE, self.width)
        self.height = max(Config.MIN_BOX_SIZE, self.height)


@dataclass
class TextOverlay(Overlay):
    """Single line of text; (x, y) is the top-left of the line box."""

    kind: ClassVar[OverlayKind] = OverlayKind.TEXT

    x: float = 0.0
    y: float = 0.0
    content: str = Config.DEFAULT_TEXT
    font: str = "Arial"
    size: float = 16.0
    color: str = "#000000"
    bold: bool = False
    italic: bool = False
    align: str = "left"

    def anchor(self) -> Point:
        return (self.x, self.y)

    def bounds(self) -> Bounds:
        width = max(len(self.content), 1) * self.size * TEXT_ADVANCE_RATIO
        if self.align == "center":
            x0 = self.x - width / 2
        elif self.align == "right":
            x0 = self.x - width
        else:
            x0 = self.x
        return (x0, self.y, x0 + width, self.y + self.size * TEXT_LINE_RATIO)

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"x": self.x + dx, "y": self.y + dy}


@dataclass
class RectOverlay(BoxOverlay):
    kind: ClassVar[OverlayKind] = OverlayKind.RECT

    stroke: str = "#000000"
    stroke_width: float = 2.0
    fill: str = NO_FILL


@dataclass
class HighlightOverlay(BoxOverlay):
    kind: ClassVar[OverlayKind] = OverlayKind.HIGHLIGHT

    color: str = "#FFFF00"

    @property
    def opacity(self) -> float:
        return Config.HIGHLIGHT_OPACITY


@dataclass
class WhiteoutOverlay(BoxOverlay):
    kind: ClassVar[OverlayKind] = OverlayKind.WHITEOUT


@dataclass
class ImageOverlay(BoxOverlay):
    kind: ClassVar[OverlayKind] = OverlayKind.IMAGE

    asset: ImageAsset = None


@dataclass
class CircleOverlay(Overlay):
    """Circle around a center point."""

    kind: ClassVar[OverlayKind] = OverlayKind.CIRCLE
    handles: ClassVar[Tuple[str, ...]] = ("se",)

    x: float = 0.0
    y: float = 0.0
    radius: float = Config.CIRCLE_RADIUS
    stroke: str = "#000000"
    stroke_width: float = 2.0
    fill: str = NO_FILL

    def anchor(self) -> Point:
        return (self.x, self.y)

    def bounds(self) -> Bounds:
        r = self.radius
        return (self.x - r, self.y - r, self.x + r, self.y + r)

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"x": self.x + dx, "y": self.y + dy}

    def handle_positions(self) -> Dict[str, Point]:
        return {"se": (self.x + self.radius, self.y + self.radius)}

    def enforce_limits(self) -> None:
        self.radius = max(Config.MIN_RADIUS, self.radius)


@dataclass
class LineOverlay(Overlay):
    """Straight segment between two endpoints."""

    kind: ClassVar[OverlayKind] = OverlayKind.LINE
    handles: ClassVar[Tuple[str, ...]] = ("start", "end")

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    stroke: str = "#000000"
    stroke_width: float = 2.0

    def anchor(self) -> Point:
        return (min(self.x1, self.x2), min(self.y1, self.y2))

    def bounds(self) -> Bounds:
        return (min(self.x1, self.x2), min(self.y1, self.y2),
                max(self.x1, self.x2), max(self.y1, self.y2))

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"x1": self.x1 + dx, "y1": self.y1 + dy,
                "x2": self.x2 + dx, "y2": self.y2 + dy}

    def handle_positions(self) -> Dict[str, Point]:
        return {"start": (self.x1, self.y1), "end": (self.x2, self.y2)}


@dataclass
class ArrowOverlay(LineOverlay):
    """Line with a filled head at (x2, y2)."""

    kind: ClassVar[OverlayKind] = OverlayKind.ARROW


@dataclass
class DrawingOverlay(Overlay):
    """Freehand stroke."""

    kind: ClassVar[OverlayKind] = OverlayKind.DRAWING

    points: List[Point] = field(default_factory=list)
    color: str = "#000000"
    width: float = 2.0

    def anchor(self) -> Point:
        x0, y0, _, _ = self.bounds()
        return (x0, y0)

    def bounds(self) -> Bounds:
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"points": [(px + dx, py + dy) for px, py in self.points]}


@dataclass
class SignatureOverlay(Overlay):
    """Signature label; (x, y) is the left end of the baseline."""

    kind: ClassVar[OverlayKind] = OverlayKind.SIGNATURE

    x: float = 0.0
    y: float = 0.0
    text: str = Config.DEFAULT_SIGNATURE
    color: str = "#000080"

    @property
    def size(self) -> float:
        return Config.SIGNATURE_FONT_SIZE

    def anchor(self) -> Point:
        return (self.x, self.y)

    def bounds(self) -> Bounds:
        width = max(len(self.text), 1) * self.size * TEXT_ADVANCE_RATIO
        return (self.x, self.y - self.size, self.x + width, self.y + self.size * 0.3)

    def translate_fields(self, dx: float, dy: float) -> Dict[str, Any]:
        return {"x": self.x + dx, "y": self.y + dy}


# Kinds whose text can be edited in place
EDITABLE_KINDS = (OverlayKind.TEXT, OverlayKind.SIGNATURE)
