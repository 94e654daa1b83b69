import logging
import os
import shutil
import tempfile

from PyQt5.QtCore import QThread, pyqtSignal

from inkstamp.core.annotations import OverlayStore, StoreState
from .pdf_exporter import ExportError, PDFExporter

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """Worker thread for exporting overlays to PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message
    page_progress = pyqtSignal(int, int)  # current, total pages

    def __init__(self, source_pdf: bytes, output_pdf: str, state: StoreState):
        """
        Args:
            source_pdf: Bytes of the original PDF
            output_pdf: Destination path
            state: Snapshot of the overlay store taken when export started
        """
        super().__init__()
        self.source_pdf = source_pdf
        self.output_pdf = output_pdf
        self.store = OverlayStore()
        self.store.restore(state)
        self.temp_path = None
        self.exporter = PDFExporter()

    def run(self):
        """Execute the export in a background thread."""
        try:
            self.progress.emit("Exporting annotations...")
            data = self.exporter.export(self.source_pdf, self.store,
                                        progress=self.page_progress.emit)

            self.progress.emit("Finalizing...")
            # Write next to the target so the final move is atomic
            output_dir = os.path.dirname(os.path.abspath(self.output_pdf))
            temp_fd, self.temp_path = tempfile.mkstemp(suffix='.pdf', dir=output_dir)
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(data)
            shutil.move(self.temp_path, self.output_pdf)
            self.temp_path = None

            message = "Annotations saved successfully to PDF!"
            if self.exporter.skipped_images:
                message += f" ({self.exporter.skipped_images} image(s) could not be embedded)"
            logger.info("Exported %s", self.output_pdf)
            self.finished.emit(True, message)

        except ExportError as e:
            self._cleanup()
            self.finished.emit(False, str(e))
        except OSError as e:
            logger.exception("Failed to write %s", self.output_pdf)
            self._cleanup()
            self.finished.emit(False, f"Error writing {self.output_pdf}: {e}")

    def _cleanup(self):
        # Never leave a partial file behind
        if self.temp_path and os.path.exists(self.temp_path):
            os.remove(self.temp_path)
        self.temp_path = None
