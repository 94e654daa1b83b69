"""
Document loading, rendering and image decoding.
"""
from .images import ImageDecodeError, decode_image, sniff_format
from .pdf_document import PdfDocument
from .thumbnail_worker import ThumbnailWorker

__all__ = ["PdfDocument", "ThumbnailWorker", "decode_image", "sniff_format", "ImageDecodeError"]
