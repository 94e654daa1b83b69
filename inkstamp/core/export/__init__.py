"""
Export of overlays into the output PDF.
"""
from .export_worker import ExportWorker
from .pdf_exporter import ExportError, PDFExporter
from .pdf_writer import PdfWriter, UnsupportedImageFormat
from .primitives import (
    EllipsePrimitive,
    ImagePrimitive,
    LinePrimitive,
    PolygonPrimitive,
    Primitive,
    RectPrimitive,
    TextPrimitive,
)
from .transformer import ExportTransformer, base14_font

__all__ = [
    "ExportWorker",
    "ExportError",
    "PDFExporter",
    "PdfWriter",
    "UnsupportedImageFormat",
    "ExportTransformer",
    "base14_font",
    "Primitive",
    "TextPrimitive",
    "RectPrimitive",
    "EllipsePrimitive",
    "LinePrimitive",
    "PolygonPrimitive",
    "ImagePrimitive",
]
