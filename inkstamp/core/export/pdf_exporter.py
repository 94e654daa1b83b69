"""
Export of overlays into a new PDF.
"""
import logging
from typing import Callable, Optional

from inkstamp.core.annotations import OverlayStore
from .pdf_writer import PdfWriter
from .primitives import ImagePrimitive
from .transformer import ExportTransformer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class ExportError(Exception):
    """The output document could not be produced."""


class PDFExporter:
    """Burns the overlays of a store into a copy of the source PDF."""

    def __init__(self, writer_factory: Callable[[], PdfWriter] = PdfWriter):
        self.writer_factory = writer_factory
        self.transformer = ExportTransformer()
        self.skipped_images: int = 0

    def export(self, source_pdf: bytes, store: OverlayStore,
               progress: Optional[ProgressCallback] = None) -> bytes:
        """
        Export overlays to PDF bytes.

        Args:
            source_pdf: Bytes of the original PDF
            store: Overlays to burn in (read only)
            progress: Optional callback receiving (current, total) pages

        Returns:
            Bytes of the new PDF

        Raises:
            ExportError: if the document could not be written
        """
        writer = self.writer_factory()
        self.skipped_images = 0
        try:
            page_count = writer.open_document(source_pdf)
            heights = {page: writer.page_height(page)
                       for page in store.pages() if page < page_count}
            pages = self.transformer.transform(store, heights)

            total_pages = len(pages)
            for current, (page_index, primitives) in enumerate(pages.items()):
                if progress:
                    progress(current, total_pages)
                for primitive in primitives:
                    self._draw(writer, page_index, primitive)
            if progress:
                progress(total_pages, total_pages)

            return writer.serialize()
        except Exception as e:
            logger.exception("Failed to export annotations to PDF")
            raise ExportError(f"Failed to export annotations to PDF: {e}") from e
        finally:
            writer.close()

    def _draw(self, writer: PdfWriter, page_index: int, primitive) -> None:
        if not isinstance(primitive, ImagePrimitive):
            writer.draw_primitive(page_index, primitive)
            return

        # A broken image only costs that image
        try:
            writer.draw_primitive(page_index, primitive)
        except Exception as e:
            self.skipped_images += 1
            logger.warning("Skipping image on page %d: %s", page_index + 1, e)
