import logging
import os

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QIcon, QIntValidator, QKeySequence
from PyQt5.QtWidgets import (
    QFileDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QMainWindow, QMessageBox,
    QProgressDialog, QScrollArea, QSizePolicy, QSpacerItem, QToolButton, QVBoxLayout, QWidget,
)

from inkstamp.config import Config
from inkstamp.controllers import AnnotationController
from inkstamp.core.document import ImageDecodeError, ThumbnailWorker
from inkstamp.core.interaction import Key
from inkstamp.ui.toolbars import AnnotationToolbar
from inkstamp.ui.widgets import PageCanvas, ThumbnailList
from inkstamp.utils import get_resource_path

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, file_path=None):
        super().__init__()

        icon_path = get_resource_path("resources/icons/inkstamp.ico")
        if os.path.exists(icon_path):
            self.setWindowIcon(QIcon(icon_path))
        self.setWindowTitle(Config.APP_NAME)
        self.resize(Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

        self.controller = AnnotationController(parent=self)
        self.thumbnail_worker = None
        self.progress_dialog = None

        self.setup_ui()
        self._connect_controller()

        if file_path:
            self.load_pdf(file_path)

    def setup_ui(self):
        # TOP BAR
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        self.open_button = self._text_button("Open", "Open PDF (Ctrl+O)", self.open_pdf)
        self.close_button = self._text_button("Close", "Close PDF (Ctrl+W)", self.close_pdf)
        self.export_button = self._text_button("Export", "Export annotated PDF (Ctrl+S)",
                                               self.save_annotations_to_pdf)

        self.top_layout.addSpacerItem(QSpacerItem(15, 20, QSizePolicy.Fixed, QSizePolicy.Minimum))

        self.file_name_label = QLabel("No PDF Loaded", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold; color: #8899AA;")
        self.top_layout.addWidget(self.file_name_label)

        self.top_layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        # Page controls
        self._text_button("<", "Previous page", self.controller.previous_page)
        self.page_edit = QLineEdit("1", self.top_frame)
        self.page_edit.setFixedWidth(50)
        self.page_edit.setAlignment(Qt.AlignCenter)
        self.page_edit.returnPressed.connect(self.page_number_changed)
        self.top_layout.addWidget(self.page_edit)
        self.total_page_label = QLabel("/ 0", self.top_frame)
        self.top_layout.addWidget(self.total_page_label)
        self._text_button(">", "Next page", self.controller.next_page)

        self.top_layout.addSpacerItem(QSpacerItem(15, 20, QSizePolicy.Fixed, QSizePolicy.Minimum))

        # Zoom controls
        self._text_button("-", "Zoom out", self.controller.zoom_out)
        self.zoom_label = QLabel(self._zoom_text(self.controller.scale), self.top_frame)
        self.zoom_label.setFixedWidth(50)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        self.top_layout.addWidget(self.zoom_label)
        self._text_button("+", "Zoom in", self.controller.zoom_in)

        # Annotation tools
        self.annotation_toolbar = AnnotationToolbar(self.controller.options)

        # Page area
        self.canvas = PageCanvas(self.controller)
        self.scroll_area = QScrollArea()
        self.scroll_area.setAlignment(Qt.AlignCenter)
        self.scroll_area.setWidget(self.canvas)
        self.scroll_area.setWidgetResizable(False)

        self.thumbnail_list = ThumbnailList()
        self.thumbnail_list.page_clicked.connect(self.controller.set_page)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.addWidget(self.thumbnail_list)
        body.addWidget(self.scroll_area, 1)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.top_frame)
        layout.addWidget(self.annotation_toolbar)
        layout.addLayout(body, 1)
        self.setCentralWidget(central)

        self._set_document_controls(False)

    def _text_button(self, text, tooltip, slot):
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(lambda _checked=False: slot())
        self.top_layout.addWidget(btn)
        return btn

    @staticmethod
    def _zoom_text(scale: float) -> str:
        return f"{int(round(scale * 100))}%"

    def _connect_controller(self):
        controller = self.controller
        toolbar = self.annotation_toolbar

        toolbar.tool_selected.connect(controller.select_tool)
        toolbar.image_requested.connect(self.insert_image)
        toolbar.undo_requested.connect(controller.undo)
        toolbar.redo_requested.connect(controller.redo)
        toolbar.delete_requested.connect(controller.delete_selected)
        toolbar.clear_page_requested.connect(controller.clear_page)
        toolbar.text_options_changed.connect(lambda changes: self._apply_options(
            controller.set_text_options, changes))
        toolbar.shape_options_changed.connect(lambda changes: self._apply_options(
            controller.set_shape_options, changes))
        toolbar.draw_options_changed.connect(lambda changes: self._apply_options(
            controller.set_draw_options, changes))
        toolbar.signature_options_changed.connect(lambda changes: self._apply_options(
            controller.set_signature_options, changes))
        toolbar.highlight_color_changed.connect(lambda color: self._apply_options(
            lambda **kw: controller.set_highlight_color(kw["color"]), {"color": color}))

        controller.tool_changed.connect(toolbar.set_active_tool)
        controller.history_changed.connect(toolbar.set_history_state)
        controller.page_changed.connect(self._on_page_changed)
        controller.zoom_changed.connect(self._on_zoom_changed)
        controller.export_finished.connect(self._on_export_finished)
        controller.export_progress.connect(self._on_export_progress)
        controller.export_page_progress.connect(self._on_export_page_progress)

    def _apply_options(self, setter, changes: dict):
        try:
            setter(**changes)
        except ValueError as e:
            QMessageBox.warning(self, "Invalid Option", str(e))

    def _set_document_controls(self, enabled: bool):
        self.close_button.setEnabled(enabled)
        self.export_button.setEnabled(enabled)
        self.annotation_toolbar.setEnabled(enabled)
        self.page_edit.setEnabled(enabled)

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def open_pdf(self):
        if not self._confirm_discard("open another PDF"):
            return
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path):
        if not self.controller.open_document(file_path):
            QMessageBox.critical(self, "Error", f"Could not open PDF:\n{file_path}")
            return

        total_pages = self.controller.document.total_pages
        self.total_page_label.setText(f"/ {total_pages}")
        self.page_edit.setValidator(QIntValidator(1, total_pages, self))
        self.file_name_label.setText(os.path.basename(file_path))
        self._set_document_controls(True)
        self._render_current_page()
        self._load_thumbnails()
        self.canvas.setFocus()

    def close_pdf(self):
        """Closes the currently loaded PDF and resets the application state."""
        if not self.controller.has_document:
            return
        if not self._confirm_discard("close the PDF"):
            return

        self._stop_thumbnails()
        self.controller.close_document()
        self.canvas.set_page_image(None)
        self.thumbnail_list.clear()
        self.file_name_label.setText("No PDF Loaded")
        self.total_page_label.setText("/ 0")
        self.page_edit.setText("1")
        self._set_document_controls(False)

    def _confirm_discard(self, action: str) -> bool:
        if not self.controller.has_unsaved_changes:
            return True
        reply = QMessageBox.question(
            self,
            "Unsaved Changes",
            f"You have annotations that were not exported. Discard them and {action}?",
            QMessageBox.Discard | QMessageBox.Cancel,
            QMessageBox.Cancel
        )
        return reply == QMessageBox.Discard

    def closeEvent(self, event):
        """Handle window close event - check for unsaved changes."""
        if self.controller.has_document and not self._confirm_discard("quit"):
            event.ignore()
            return
        self._stop_thumbnails()
        event.accept()

    def _render_current_page(self):
        if not self.controller.has_document:
            return
        try:
            image = self.controller.document.render_page(self.controller.page_index,
                                                         self.controller.scale)
        except (RuntimeError, IndexError) as e:
            logger.error("Failed to render page %d: %s", self.controller.page_index + 1, e)
            return
        self.canvas.set_page_image(image)

    def _load_thumbnails(self):
        self._stop_thumbnails()
        self.thumbnail_list.reset_pages(self.controller.document.total_pages)
        self.thumbnail_list.set_loading(True)
        self.thumbnail_worker = ThumbnailWorker(self.controller.document.source_bytes)
        self.thumbnail_worker.thumbnail_ready.connect(self.thumbnail_list.set_thumbnail)
        self.thumbnail_worker.finished_all.connect(self._on_thumbnails_finished)
        self.thumbnail_worker.start()

    def _stop_thumbnails(self):
        if self.thumbnail_worker is not None:
            self.thumbnail_worker.cancel()
            self.thumbnail_worker.wait()
            self.thumbnail_worker = None
        self.thumbnail_list.set_loading(False)

    def _on_thumbnails_finished(self, rendered: int):
        if self.sender() is not self.thumbnail_worker:
            return  # a cancelled worker from a previous document
        logger.debug("Rendered %d thumbnails", rendered)
        self.thumbnail_list.set_loading(False)

    # ------------------------------------------------------------------
    # Navigation and zoom
    # ------------------------------------------------------------------

    def page_number_changed(self):
        try:
            page_num = int(self.page_edit.text())
        except ValueError:
            page_num = 0
        if not self.controller.set_page(page_num - 1):
            self.page_edit.setText(str(self.controller.page_index + 1))

    def _on_page_changed(self, page_index: int):
        if not self.page_edit.hasFocus():
            self.page_edit.setText(str(page_index + 1))
        self.thumbnail_list.set_current_page(page_index)
        self._render_current_page()

    def _on_zoom_changed(self, scale: float):
        self.zoom_label.setText(self._zoom_text(scale))
        self._render_current_page()

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def insert_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Insert Image", "", "Images (*.png *.jpg *.jpeg *.gif *.bmp *.tif *.tiff)"
        )
        if not file_path:
            return
        try:
            self.controller.insert_image_file(file_path)
        except (ImageDecodeError, OSError) as e:
            logger.warning("Could not insert image %s: %s", file_path, e)
            QMessageBox.warning(self, "Insert Image", f"Could not read the image:\n{e}")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def save_annotations_to_pdf(self):
        """Export the annotated PDF using a background thread."""
        if not self.controller.has_document:
            QMessageBox.warning(self, "No PDF", "No PDF document is currently loaded.")
            return False

        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Annotated PDF",
            self.controller.default_export_path(),
            "PDF Files (*.pdf)"
        )
        if not output_path:
            return False

        self.progress_dialog = QProgressDialog("Preparing to export annotations...", None, 0, 100, self)
        self.progress_dialog.setWindowTitle("Exporting PDF")
        self.progress_dialog.setWindowModality(Qt.WindowModal)
        self.progress_dialog.setMinimumDuration(0)
        self.progress_dialog.setCancelButton(None)
        self.progress_dialog.setAutoClose(False)
        self.progress_dialog.setAutoReset(False)
        self.progress_dialog.show()

        if self.controller.export(output_path) is None:
            self.progress_dialog.close()
            self.progress_dialog = None
            return False
        return True

    def _on_export_progress(self, message: str):
        if self.progress_dialog is not None:
            self.progress_dialog.setLabelText(message)

    def _on_export_page_progress(self, current: int, total: int):
        if self.progress_dialog is not None and total > 0:
            self.progress_dialog.setValue(int((current / total) * 100))
            self.progress_dialog.setLabelText(f"Processing annotations: {current}/{total} pages")

    def _on_export_finished(self, success: bool, message: str):
        if self.progress_dialog is not None:
            self.progress_dialog.close()
            self.progress_dialog = None

        if success:
            QMessageBox.information(self, "Success", message)
        else:
            QMessageBox.critical(self, "Export Failed", message)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def keyPressEvent(self, event):
        if event.matches(QKeySequence.Open):
            self.open_pdf()
        elif event.matches(QKeySequence.Close):
            self.close_pdf()
        elif event.matches(QKeySequence.Save):
            self.save_annotations_to_pdf()
        elif event.matches(QKeySequence.ZoomIn):
            self.controller.zoom_in()
        elif event.matches(QKeySequence.ZoomOut):
            self.controller.zoom_out()
        elif event.key() == Qt.Key_PageDown:
            self.controller.next_page()
        elif event.key() == Qt.Key_PageUp:
            self.controller.previous_page()
        elif event.matches(QKeySequence.Undo):
            self.controller.key_press(Key.UNDO)
        elif event.matches(QKeySequence.Redo):
            self.controller.key_press(Key.REDO)
        elif event.key() == Qt.Key_Escape:
            self.controller.key_press(Key.ESCAPE)
        else:
            super().keyPressEvent(event)
            return
        event.accept()
