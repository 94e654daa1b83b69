"""
Writes drawing primitives into a PDF with PyMuPDF.
"""
from typing import Optional

import fitz  # PyMuPDF

from .primitives import (
    EllipsePrimitive,
    ImagePrimitive,
    LinePrimitive,
    PolygonPrimitive,
    Primitive,
    RectPrimitive,
    TextPrimitive,
)


class UnsupportedImageFormat(ValueError):
    """Raised when an image primitive declares a format the writer cannot embed."""


class PdfWriter:
    """Burns primitives into the page content of a copy of the source PDF."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None

    def open_document(self, data: bytes) -> int:
        """
        Open the source PDF.

        Args:
            data: Bytes of the original PDF

        Returns:
            Number of pages
        """
        self.close()
        self.doc = fitz.open(stream=data, filetype="pdf")
        return self.doc.page_count

    def page_height(self, page_index: int) -> float:
        return self._page(page_index).rect.height

    def draw_primitive(self, page_index: int, primitive: Primitive) -> None:
        """Draw one primitive given in bottom-left-origin page coordinates."""
        page = self._page(page_index)

        if isinstance(primitive, TextPrimitive):
            self._draw_text(page, primitive)
        elif isinstance(primitive, RectPrimitive):
            self._draw_shape(page, primitive, self._rect(page, primitive.x, primitive.y,
                                                         primitive.width, primitive.height),
                             oval=False)
        elif isinstance(primitive, EllipsePrimitive):
            rect = self._rect(page, primitive.cx - primitive.rx, primitive.cy - primitive.ry,
                              primitive.rx * 2, primitive.ry * 2)
            self._draw_shape(page, primitive, rect, oval=True)
        elif isinstance(primitive, LinePrimitive):
            shape = page.new_shape()
            shape.draw_line(self._point(page, *primitive.start),
                            self._point(page, *primitive.end))
            shape.finish(color=primitive.color, width=primitive.width,
                         stroke_opacity=primitive.opacity)
            shape.commit()
        elif isinstance(primitive, PolygonPrimitive):
            shape = page.new_shape()
            shape.draw_polyline([self._point(page, x, y) for x, y in primitive.points])
            shape.finish(color=None, fill=primitive.fill, closePath=True,
                         fill_opacity=primitive.opacity)
            shape.commit()
        elif isinstance(primitive, ImagePrimitive):
            self._draw_image(page, primitive)
        else:
            raise TypeError(f"Unknown primitive {type(primitive).__name__}")

    def serialize(self) -> bytes:
        """Return the modified PDF."""
        if self.doc is None:
            raise RuntimeError("No document is open")
        return self.doc.tobytes(garbage=4, deflate=True)

    def close(self) -> None:
        if self.doc is not None:
            self.doc.close()
            self.doc = None

    # ------------------------------------------------------------------

    def _page(self, page_index: int) -> fitz.Page:
        if self.doc is None:
            raise RuntimeError("No document is open")
        return self.doc[page_index]

    @staticmethod
    def _point(page: fitz.Page, x: float, y: float) -> fitz.Point:
        # PyMuPDF pages are top-left based
        return fitz.Point(x, page.rect.height - y)

    @staticmethod
    def _rect(page: fitz.Page, x: float, y: float, width: float, height: float) -> fitz.Rect:
        top = page.rect.height - y - height
        return fitz.Rect(x, top, x + width, top + height)

    @staticmethod
    def _draw_shape(page: fitz.Page, primitive, rect: fitz.Rect, oval: bool) -> None:
        shape = page.new_shape()
        if oval:
            shape.draw_oval(rect)
        else:
            shape.draw_rect(rect)
        stroke = primitive.stroke
        shape.finish(
            color=stroke,
            fill=primitive.fill,
            width=primitive.stroke_width if stroke is not None else 0,
            fill_opacity=primitive.opacity,
            stroke_opacity=primitive.opacity,
        )
        shape.commit()

    def _draw_text(self, page: fitz.Page, primitive: TextPrimitive) -> None:
        x = primitive.x
        if primitive.align != "left":
            width = fitz.get_text_length(primitive.text, fontname=primitive.font,
                                         fontsize=primitive.size)
            x -= width / 2 if primitive.align == "center" else width
        page.insert_text(
            self._point(page, x, primitive.y),
            primitive.text,
            fontsize=primitive.size,
            fontname=primitive.font,
            color=primitive.color,
            fill_opacity=primitive.opacity,
        )

    def _draw_image(self, page: fitz.Page, primitive: ImagePrimitive) -> None:
        rect = self._rect(page, primitive.x, primitive.y, primitive.width, primitive.height)
        if primitive.format in ("png", "jpeg"):
            page.insert_image(rect, stream=primitive.data, keep_proportion=False)
        elif primitive.format == "other":
            # Let MuPDF decode it and embed the raw pixels
            pixmap = fitz.Pixmap(primitive.data)
            page.insert_image(rect, pixmap=pixmap, keep_proportion=False)
        else:
            raise UnsupportedImageFormat(f"Cannot embed image format {primitive.format!r}")
