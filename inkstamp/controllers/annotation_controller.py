"""
Controller tying the document, the overlay store and the interaction machine
to the UI.
"""
import dataclasses
import logging
import os
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkstamp.config import Config
from inkstamp.core.annotations import HistoryLog, Overlay, OverlayStore, ToolOptions
from inkstamp.core.document import PdfDocument, decode_image
from inkstamp.core.export import ExportWorker, PDFExporter
from inkstamp.core.interaction import InteractionMachine, Key, Tool

logger = logging.getLogger(__name__)


class AnnotationController(QObject):
    """Handles all annotation operations and reports changes through signals."""

    # Signals
    document_loaded = pyqtSignal(int)  # page count
    document_closed = pyqtSignal()
    page_changed = pyqtSignal(int)  # 0-based page index
    zoom_changed = pyqtSignal(float)
    overlays_changed = pyqtSignal()  # Emitted when the store was mutated
    selection_changed = pyqtSignal(object)  # selected overlay or None
    editing_changed = pyqtSignal(object)  # overlay opened for text editing or None
    tool_changed = pyqtSignal(object)  # Tool
    history_changed = pyqtSignal(bool, bool)  # can undo, can redo
    export_progress = pyqtSignal(str)
    export_page_progress = pyqtSignal(int, int)  # current, total pages
    export_finished = pyqtSignal(bool, str)  # success, message

    def __init__(self, document: Optional[PdfDocument] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.document = document or PdfDocument()
        self.store = OverlayStore()
        self.history = HistoryLog()
        self.history.reset(self.store.snapshot())
        self.machine = InteractionMachine(self.store, self.history, ToolOptions())
        self.export_worker: Optional[ExportWorker] = None
        self._saved_state = self.store.snapshot()
        self._pending_state = self._saved_state

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    @property
    def has_document(self) -> bool:
        return self.document.is_open

    @property
    def page_index(self) -> int:
        return self.machine.page_index

    @property
    def scale(self) -> float:
        return self.machine.transform.scale

    @property
    def options(self) -> ToolOptions:
        return self.machine.options

    def open_document(self, file_path: str) -> bool:
        """
        Open a PDF, discarding the overlays of the previous one.

        Returns:
            True if the document was loaded
        """
        ok, page_count = self.document.load(file_path)
        if not ok:
            return False
        self._start_session(page_count)
        return True

    def open_bytes(self, data: bytes) -> bool:
        ok, page_count = self.document.load_bytes(data)
        if not ok:
            return False
        self._start_session(page_count)
        return True

    def close_document(self) -> None:
        self.document.close()
        self._reset_overlays()
        self.machine.set_page_size(None)
        self.document_closed.emit()
        self._emit_all()

    @property
    def has_unsaved_changes(self) -> bool:
        """True if the overlays differ from the last export or the freshly opened document."""
        return self.store.snapshot() != self._saved_state

    def default_export_path(self) -> str:
        """Suggested output path: the source name with the export prefix, same folder."""
        source = self.document.current_file_path or "document.pdf"
        folder, name = os.path.split(source)
        return os.path.join(folder, Config.EXPORT_PREFIX + name)

    def _start_session(self, page_count: int) -> None:
        self._reset_overlays()
        self.machine.set_page_size(self.document.page_size(0))
        logger.info("Editing session started, %d pages", page_count)
        self.document_loaded.emit(page_count)
        self.page_changed.emit(0)
        self._emit_all()

    def _reset_overlays(self) -> None:
        self.store.clear()
        self.history.reset(self.store.snapshot())
        self._saved_state = self.store.snapshot()
        self.machine.reset()

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def set_page(self, page_index: int) -> bool:
        if not self.has_document:
            return False
        if not 0 <= page_index < self.document.total_pages:
            return False
        if page_index == self.machine.page_index:
            return True

        self._dispatch(self.machine.set_page, page_index)
        self.machine.set_page_size(self.document.page_size(page_index))
        self.page_changed.emit(page_index)
        return True

    def next_page(self) -> bool:
        return self.set_page(self.page_index + 1)

    def previous_page(self) -> bool:
        return self.set_page(self.page_index - 1)

    def set_scale(self, scale: float) -> float:
        """Set the zoom factor (clamped) and return the applied value."""
        previous = self.scale
        self.machine.set_scale(scale)
        if self.scale != previous:
            self.zoom_changed.emit(self.scale)
        return self.scale

    def zoom_in(self) -> float:
        return self.set_scale(self.scale + Config.ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_scale(self.scale - Config.ZOOM_STEP)

    # ------------------------------------------------------------------
    # Tools and options
    # ------------------------------------------------------------------

    def select_tool(self, tool: Tool) -> None:
        self._dispatch(self.machine.select_tool, tool)

    def set_text_options(self, **changes) -> None:
        self.options.text = dataclasses.replace(self.options.text, **changes)

    def set_shape_options(self, **changes) -> None:
        self.options.shape = dataclasses.replace(self.options.shape, **changes)

    def set_draw_options(self, **changes) -> None:
        self.options.draw = dataclasses.replace(self.options.draw, **changes)

    def set_signature_options(self, **changes) -> None:
        self.options.signature = dataclasses.replace(self.options.signature, **changes)

    def set_highlight_color(self, color: str) -> None:
        # Route through the dataclass so the color is validated
        self.machine.options = dataclasses.replace(self.options, highlight_color=color)

    # ------------------------------------------------------------------
    # Input passthrough (view pixels)
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        if self.has_document:
            self._dispatch(self.machine.pointer_down, x, y)

    def pointer_move(self, x: float, y: float) -> None:
        if self.has_document:
            self._dispatch(self.machine.pointer_move, x, y)

    def pointer_up(self, x: float, y: float) -> None:
        if self.has_document:
            self._dispatch(self.machine.pointer_up, x, y)

    def key_press(self, key: Key) -> bool:
        return self._dispatch(self.machine.key_press, key)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self._dispatch(self.machine.undo)

    def redo(self) -> bool:
        return self._dispatch(self.machine.redo)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def delete_selected(self) -> bool:
        return self._dispatch(self.machine.delete_selected)

    def clear_selection(self) -> None:
        self._dispatch(self.machine.clear_selection)

    def clear_page(self) -> bool:
        return self._dispatch(self.machine.clear_page)

    def begin_text_edit(self, overlay_id: int) -> bool:
        return self._dispatch(self.machine.begin_text_edit, overlay_id)

    def commit_text_edit(self, text: str) -> bool:
        return self._dispatch(self.machine.commit_text_edit, text)

    def insert_image(self, data: bytes) -> Optional[int]:
        """
        Decode image bytes and place them on the current page.

        Raises:
            ImageDecodeError: if the bytes are not a readable image
        """
        if not self.has_document:
            return None
        asset = decode_image(data)
        return self._dispatch(self.machine.place_image, asset)

    def insert_image_file(self, file_path: str) -> Optional[int]:
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.insert_image(data)

    def overlays(self, page_index: Optional[int] = None):
        """Overlays of a page (default: the current one) in paint order."""
        return self.store.get(self.page_index if page_index is None else page_index)

    def selected_overlay(self) -> Optional[Overlay]:
        return self.machine.selected_overlay()

    def editing_overlay(self) -> Optional[Overlay]:
        if self.machine.editing_id is None:
            return None
        return self.store.find(self.page_index, self.machine.editing_id)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_bytes(self) -> bytes:
        """
        Export synchronously.

        Raises:
            ExportError: if the output could not be produced
        """
        if not self.has_document:
            raise RuntimeError("No document is open")
        return PDFExporter().export(self.document.source_bytes, self.store)

    def export(self, output_path: str) -> Optional[ExportWorker]:
        """
        Export in a background thread; export_finished reports the outcome.

        Edits made after this call are not part of the output.
        """
        if not self.has_document:
            return None
        if self.export_worker is not None and self.export_worker.isRunning():
            logger.warning("Export already in progress")
            return None

        self._dispatch(self.machine.cancel_gesture)
        worker = ExportWorker(self.document.source_bytes, output_path, self.store.snapshot())
        worker.progress.connect(self.export_progress)
        worker.page_progress.connect(self.export_page_progress)
        worker.finished.connect(self._on_export_finished)
        self._pending_state = worker.store.snapshot()
        self.export_worker = worker
        worker.start()
        return worker

    def _on_export_finished(self, success: bool, message: str) -> None:
        if success:
            self._saved_state = self._pending_state
            logger.info(message)
        else:
            logger.error("Export failed: %s", message)
        self.export_finished.emit(success, message)

    # ------------------------------------------------------------------
    # Change tracking
    # ------------------------------------------------------------------

    def _observe(self):
        machine = self.machine
        return (machine.revision, machine.selected_id, machine.editing_id, machine.tool,
                self.history.can_undo(), self.history.can_redo())

    def _dispatch(self, action, *args):
        """Run a machine action and emit a signal for everything it changed."""
        before = self._observe()
        result = action(*args)
        after = self._observe()

        revision, selected, editing, tool, can_undo, can_redo = after
        if revision != before[0]:
            self.overlays_changed.emit()
        if selected != before[1] or revision != before[0]:
            self.selection_changed.emit(self.selected_overlay())
        if editing != before[2]:
            self.editing_changed.emit(self.editing_overlay())
        if tool != before[3]:
            self.tool_changed.emit(tool)
        if (can_undo, can_redo) != before[4:]:
            self.history_changed.emit(can_undo, can_redo)
        return result

    def _emit_all(self) -> None:
        self.overlays_changed.emit()
        self.selection_changed.emit(self.selected_overlay())
        self.editing_changed.emit(self.editing_overlay())
        self.tool_changed.emit(self.machine.tool)
        self.history_changed.emit(self.can_undo(), self.can_redo())
