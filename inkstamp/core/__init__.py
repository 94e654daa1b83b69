"""
Core business logic for Inkstamp PDF.
"""

# Annotations first, every other core package builds on them
from .annotations import HistoryLog, Overlay, OverlayKind, OverlayStore, ToolOptions
from .geometry import ViewTransform
from .interaction import InteractionMachine, Key, Tool
from .export import ExportError, PDFExporter
from .document import PdfDocument, decode_image

__all__ = [
    "Overlay",
    "OverlayKind",
    "OverlayStore",
    "HistoryLog",
    "ToolOptions",
    "ViewTransform",
    "InteractionMachine",
    "Tool",
    "Key",
    "PDFExporter",
    "ExportError",
    "PdfDocument",
    "decode_image",
]
