import logging

import fitz  # PyMuPDF
from PyQt5.QtCore import QThread, pyqtSignal
from PyQt5.QtGui import QImage

from inkstamp.config import Config

logger = logging.getLogger(__name__)


class ThumbnailWorker(QThread):
    """Renders page thumbnails in the background."""

    thumbnail_ready = pyqtSignal(int, QImage)  # page index, image
    finished_all = pyqtSignal(int)  # pages rendered

    def __init__(self, source_pdf: bytes, scale: float = Config.THUMBNAIL_SCALE):
        super().__init__()
        # The worker opens its own document, fitz documents are not thread safe
        self.source_pdf = source_pdf
        self.scale = scale
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def run(self):
        rendered = 0
        try:
            doc = fitz.open(stream=self.source_pdf, filetype="pdf")
        except Exception as e:
            logger.warning("Thumbnail generation failed: %s", e)
            self.finished_all.emit(0)
            return

        try:
            matrix = fitz.Matrix(self.scale, self.scale)
            for page_index in range(doc.page_count):
                if self._cancelled:
                    break
                pix = doc.load_page(page_index).get_pixmap(matrix=matrix, alpha=False)
                img = QImage(pix.samples, pix.width, pix.height, pix.stride,
                             QImage.Format_RGB888).copy()
                self.thumbnail_ready.emit(page_index, img)
                rendered += 1
        finally:
            doc.close()
        self.finished_all.emit(rendered)
