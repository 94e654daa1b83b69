"""
Conversion of overlays into PDF drawing primitives.
"""
import logging
from typing import Dict, List, Mapping, Sequence

from inkstamp.config import Config
from inkstamp.core.annotations import (
    ArrowOverlay,
    CircleOverlay,
    DrawingOverlay,
    HighlightOverlay,
    ImageOverlay,
    LineOverlay,
    Overlay,
    OverlayKind,
    OverlayStore,
    RectOverlay,
    SignatureOverlay,
    TextOverlay,
    WhiteoutOverlay,
)
from inkstamp.core.geometry import arrow_geometry
from inkstamp.utils.color_utils import fill_to_rgb, hex_to_rgb
from .primitives import (
    WHITE,
    EllipsePrimitive,
    ImagePrimitive,
    LinePrimitive,
    PolygonPrimitive,
    Primitive,
    RectPrimitive,
    TextPrimitive,
)

logger = logging.getLogger(__name__)

# Regular, bold, italic, bold-italic faces of the PDF base-14 families
_BASE14_FACES = {
    "helv": ("helv", "hebo", "heit", "hebi"),
    "tiro": ("tiro", "tibo", "tiit", "tibi"),
    "cour": ("cour", "cobo", "coit", "cobi"),
}

_FONT_FAMILIES = {
    "Arial": "helv",
    "Verdana": "helv",
    "Times New Roman": "tiro",
    "Georgia": "tiro",
    "Courier New": "cour",
}

SIGNATURE_FONT = "tiit"


def base14_font(family: str, bold: bool = False, italic: bool = False) -> str:
    """Pick the base-14 face closest to a UI font family."""
    faces = _BASE14_FACES[_FONT_FAMILIES.get(family, "helv")]
    return faces[(2 if italic else 0) + (1 if bold else 0)]


class ExportTransformer:
    """
    Emits drawing primitives for overlays, flipping y to the PDF convention.

    Pure: reads overlays, never mutates them, and keeps their z-order.
    """

    def transform(self, store: OverlayStore,
                  page_heights: Mapping[int, float]) -> Dict[int, List[Primitive]]:
        """
        Transform every page of a store.

        Args:
            store: Overlay store to read
            page_heights: Height of each page of the output document

        Returns:
            Dictionary of page index to ordered primitives
        """
        result = {}
        for page_index in store.pages():
            if page_index not in page_heights:
                logger.warning("Page %d is not in the document, its overlays are dropped",
                               page_index + 1)
                continue
            result[page_index] = self.transform_page(store.get(page_index),
                                                     page_heights[page_index])
        return result

    def transform_page(self, overlays: Sequence[Overlay],
                       page_height: float) -> List[Primitive]:
        primitives: List[Primitive] = []
        for overlay in overlays:
            primitives.extend(self.transform_overlay(overlay, page_height))
        return primitives

    def transform_overlay(self, overlay: Overlay, page_height: float) -> List[Primitive]:
        kind = overlay.kind

        if kind == OverlayKind.TEXT:
            return [self._text(overlay, page_height)]
        elif kind == OverlayKind.RECT:
            return [self._rect(overlay, page_height)]
        elif kind == OverlayKind.CIRCLE:
            return [self._circle(overlay, page_height)]
        elif kind == OverlayKind.HIGHLIGHT:
            return [self._highlight(overlay, page_height)]
        elif kind == OverlayKind.WHITEOUT:
            return [self._whiteout(overlay, page_height)]
        elif kind == OverlayKind.LINE:
            return [self._line(overlay, page_height)]
        elif kind == OverlayKind.ARROW:
            return self._arrow(overlay, page_height)
        elif kind == OverlayKind.DRAWING:
            return self._drawing(overlay, page_height)
        elif kind == OverlayKind.SIGNATURE:
            return [self._signature(overlay, page_height)]
        elif kind == OverlayKind.IMAGE:
            return self._image(overlay, page_height)
        raise TypeError(f"No export rule for overlay kind {kind!r}")

    # ------------------------------------------------------------------

    @staticmethod
    def _text(overlay: TextOverlay, page_height: float) -> TextPrimitive:
        return TextPrimitive(
            x=overlay.x,
            y=page_height - (overlay.y + overlay.size),
            text=overlay.content,
            font=base14_font(overlay.font, overlay.bold, overlay.italic),
            size=overlay.size,
            color=hex_to_rgb(overlay.color),
            align=overlay.align,
        )

    @staticmethod
    def _rect(overlay: RectOverlay, page_height: float) -> RectPrimitive:
        return RectPrimitive(
            x=overlay.x,
            y=page_height - overlay.y - overlay.height,
            width=overlay.width,
            height=overlay.height,
            stroke=hex_to_rgb(overlay.stroke),
            stroke_width=overlay.stroke_width,
            fill=fill_to_rgb(overlay.fill),
        )

    @staticmethod
    def _circle(overlay: CircleOverlay, page_height: float) -> EllipsePrimitive:
        return EllipsePrimitive(
            cx=overlay.x,
            cy=page_height - overlay.y,
            rx=overlay.radius,
            ry=overlay.radius,
            stroke=hex_to_rgb(overlay.stroke),
            stroke_width=overlay.stroke_width,
            fill=fill_to_rgb(overlay.fill),
        )

    @staticmethod
    def _highlight(overlay: HighlightOverlay, page_height: float) -> RectPrimitive:
        return RectPrimitive(
            x=overlay.x,
            y=page_height - overlay.y - overlay.height,
            width=overlay.width,
            height=overlay.height,
            fill=hex_to_rgb(overlay.color),
            opacity=overlay.opacity,
        )

    @staticmethod
    def _whiteout(overlay: WhiteoutOverlay, page_height: float) -> RectPrimitive:
        return RectPrimitive(
            x=overlay.x,
            y=page_height - overlay.y - overlay.height,
            width=overlay.width,
            height=overlay.height,
            fill=WHITE,
            opacity=1.0,
        )

    @staticmethod
    def _line(overlay: LineOverlay, page_height: float) -> LinePrimitive:
        return LinePrimitive(
            start=(overlay.x1, page_height - overlay.y1),
            end=(overlay.x2, page_height - overlay.y2),
            color=hex_to_rgb(overlay.stroke),
            width=overlay.stroke_width,
        )

    @staticmethod
    def _arrow(overlay: ArrowOverlay, page_height: float) -> List[Primitive]:
        geometry = arrow_geometry(overlay.x1, overlay.y1, overlay.x2, overlay.y2,
                                  overlay.stroke_width)
        color = hex_to_rgb(overlay.stroke)

        def flip(point):
            return (point[0], page_height - point[1])

        return [
            LinePrimitive(
                start=flip(geometry.line_start),
                end=flip(geometry.line_end),
                color=color,
                width=overlay.stroke_width,
            ),
            PolygonPrimitive(points=tuple(flip(p) for p in geometry.head), fill=color),
        ]

    @staticmethod
    def _drawing(overlay: DrawingOverlay, page_height: float) -> List[Primitive]:
        color = hex_to_rgb(overlay.color)
        points = [(x, page_height - y) for x, y in overlay.points]
        return [
            LinePrimitive(start=points[i], end=points[i + 1], color=color, width=overlay.width)
            for i in range(len(points) - 1)
        ]

    @staticmethod
    def _signature(overlay: SignatureOverlay, page_height: float) -> TextPrimitive:
        return TextPrimitive(
            x=overlay.x,
            y=page_height - overlay.y,
            text=overlay.text or Config.DEFAULT_SIGNATURE,
            font=SIGNATURE_FONT,
            size=overlay.size,
            color=hex_to_rgb(overlay.color),
        )

    @staticmethod
    def _image(overlay: ImageOverlay, page_height: float) -> List[Primitive]:
        asset = overlay.asset
        if asset is None:
            logger.warning("Image overlay %s has no image data, skipped", overlay.id)
            return []
        return [ImagePrimitive(
            x=overlay.x,
            y=page_height - overlay.y - overlay.height,
            width=overlay.width,
            height=overlay.height,
            data=asset.data,
            format=asset.format,
        )]
