"""
PDF document loading and page rendering.
"""
import logging
from typing import Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage

from inkstamp.config import Config

logger = logging.getLogger(__name__)


class PdfDocument:
    """Handles PDF document loading and rendering pages to images."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.current_file_path: Optional[str] = None
        self.source_bytes: Optional[bytes] = None

    @property
    def is_open(self) -> bool:
        return self.doc is not None

    def load(self, file_path: str) -> Tuple[bool, int]:
        """
        Load a PDF document from disk.

        Args:
            file_path: Path to the PDF file

        Returns:
            Tuple of (success flag, number of pages)
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.error("Error reading %s: %s", file_path, e)
            return False, 0

        ok, pages = self.load_bytes(data)
        if ok:
            self.current_file_path = file_path
        return ok, pages

    def load_bytes(self, data: bytes) -> Tuple[bool, int]:
        """
        Load a PDF document from memory.

        The current document stays open if the new one cannot be parsed.
        """
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            logger.error("Error loading PDF: %s", e)
            return False, 0

        self.close()
        self.doc = doc
        self.source_bytes = data
        self.total_pages = self.doc.page_count
        logger.info("Opened document with %d pages", self.total_pages)
        return True, self.total_pages

    def close(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None

        self.total_pages = 0
        self.current_file_path = None
        self.source_bytes = None

    def page_size(self, page_index: int) -> Tuple[float, float]:
        """Unscaled (width, height) of a page in document units."""
        rect = self._load_page(page_index).rect
        return (rect.width, rect.height)

    def render_page(self, page_index: int, scale: float) -> QImage:
        """
        Render a single page of the PDF to an image.

        Args:
            page_index: 0-based index of the page to render
            scale: Zoom factor for rendering

        Returns:
            The rendered page (a deep copy, safe to keep)
        """
        page = self._load_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
        # QImage does not own pix.samples
        return img.copy()

    def render_thumbnail(self, page_index: int) -> QImage:
        return self.render_page(page_index, Config.THUMBNAIL_SCALE)

    def _load_page(self, page_index: int) -> fitz.Page:
        if not self.doc:
            raise RuntimeError("No document is open")
        if not 0 <= page_index < self.total_pages:
            raise IndexError(f"Page {page_index} out of range (0-{self.total_pages - 1})")
        return self.doc.load_page(page_index)
