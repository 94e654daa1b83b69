import fitz  # PyMuPDF
import pytest

from inkstamp.controllers import AnnotationController
from inkstamp.core.document import ImageDecodeError
from inkstamp.core.interaction import Key, Tool


class SignalRecorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(lambda *args: self.calls.append(args))

    def __len__(self):
        return len(self.calls)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def controller(qapp, pdf_bytes):
    controller = AnnotationController()
    assert controller.open_bytes(pdf_bytes)
    return controller


def test_open_emits_document_loaded(qapp, pdf_bytes):
    controller = AnnotationController()
    loaded = SignalRecorder(controller.document_loaded)
    history = SignalRecorder(controller.history_changed)

    assert controller.open_bytes(pdf_bytes)

    assert loaded.calls == [(2,)]
    assert history.last == (False, False)
    assert controller.machine.transform.page_size == (595, 842)


def test_open_invalid_document(qapp):
    controller = AnnotationController()
    assert not controller.open_bytes(b"junk")
    assert not controller.has_document


def test_placing_emits_change_signals(controller):
    overlays = SignalRecorder(controller.overlays_changed)
    selection = SignalRecorder(controller.selection_changed)
    tools = SignalRecorder(controller.tool_changed)
    history = SignalRecorder(controller.history_changed)

    controller.select_tool(Tool.RECT)
    controller.pointer_down(200, 100)
    controller.pointer_up(200, 100)

    assert len(overlays) == 1
    assert selection.last[0].kind.value == "rect"
    assert [call[0] for call in tools.calls] == [Tool.RECT, Tool.SELECT]
    assert history.last == (True, False)


def test_undo_redo_through_keys(controller):
    controller.select_tool(Tool.CIRCLE)
    controller.pointer_down(100, 100)
    controller.pointer_up(100, 100)
    history = SignalRecorder(controller.history_changed)

    assert controller.key_press(Key.UNDO)
    assert controller.overlays() == []
    assert history.last == (False, True)

    assert controller.redo()
    assert len(controller.overlays()) == 1


def test_no_signal_when_nothing_changes(controller):
    overlays = SignalRecorder(controller.overlays_changed)

    controller.pointer_move(10, 10)
    controller.undo()

    assert len(overlays) == 0


def test_input_is_ignored_without_a_document(qapp):
    controller = AnnotationController()
    controller.select_tool(Tool.RECT)
    controller.pointer_down(100, 100)

    assert controller.store.count() == 0


def test_text_editing_signals(controller):
    editing = SignalRecorder(controller.editing_changed)
    controller.select_tool(Tool.TEXT)
    controller.pointer_down(100, 100)
    controller.pointer_up(100, 100)
    overlay = controller.selected_overlay()

    assert controller.begin_text_edit(overlay.id)
    assert editing.last[0].id == overlay.id
    assert controller.commit_text_edit("Edited")
    assert editing.last == (None,)
    assert controller.overlays()[0].content == "Edited"


def test_zoom_is_clamped(controller):
    zoom = SignalRecorder(controller.zoom_changed)

    for _ in range(20):
        controller.zoom_in()
    assert controller.scale == 3.0

    controller.set_scale(0.01)
    assert controller.scale == 0.5
    assert zoom.last == (0.5,)


def test_page_navigation(controller):
    pages = SignalRecorder(controller.page_changed)

    assert controller.next_page()
    assert not controller.next_page()
    assert controller.previous_page()
    assert not controller.set_page(5)

    assert pages.calls == [(1,), (0,)]


def test_option_changes_are_validated(controller):
    controller.set_shape_options(stroke="#FF0000", stroke_width=4)
    assert controller.options.shape.stroke == "#FF0000"

    with pytest.raises(ValueError):
        controller.set_text_options(align="justify")
    with pytest.raises(ValueError):
        controller.set_highlight_color("yellow")

    controller.set_highlight_color("#00FF00")
    controller.select_tool(Tool.HIGHLIGHT)
    controller.pointer_down(200, 200)
    assert controller.overlays()[0].color == "#00FF00"


def test_insert_image(controller, png_bytes):
    overlay_id = controller.insert_image(png_bytes)
    image = controller.store.find(0, overlay_id)

    assert (image.width, image.height) == (40, 20)
    with pytest.raises(ImageDecodeError):
        controller.insert_image(b"garbage")


def test_unsaved_changes_and_close(controller):
    assert not controller.has_unsaved_changes
    controller.select_tool(Tool.WHITEOUT)
    controller.pointer_down(100, 100)
    assert controller.has_unsaved_changes

    controller.close_document()

    assert not controller.has_document
    assert controller.store.count() == 0
    assert not controller.can_undo()


def test_reopening_starts_a_fresh_session(controller, pdf_bytes):
    controller.select_tool(Tool.RECT)
    controller.pointer_down(100, 100)

    assert controller.open_bytes(pdf_bytes)

    assert controller.store.count() == 0
    assert not controller.can_undo()
    assert controller.page_index == 0


def test_export_bytes(controller):
    controller.select_tool(Tool.SIGNATURE)
    controller.pointer_down(100, 200)

    doc = fitz.open(stream=controller.export_bytes(), filetype="pdf")
    assert "Signature" in doc[0].get_text()
    doc.close()


def test_default_export_path(qapp, pdf_bytes, tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(pdf_bytes)
    controller = AnnotationController()
    controller.open_document(str(path))

    assert controller.default_export_path() == str(tmp_path / "edited-report.pdf")


def test_failed_open_keeps_the_current_session(controller, pdf_bytes):
    controller.select_tool(Tool.RECT)
    controller.pointer_down(200, 100)
    closed = SignalRecorder(controller.document_closed)
    loaded = SignalRecorder(controller.document_loaded)

    assert not controller.open_bytes(b"not a pdf")

    assert controller.has_document
    assert controller.document.source_bytes == pdf_bytes
    assert controller.store.count(0) == 1
    assert controller.can_undo()
    assert len(closed) == 0
    assert len(loaded) == 0

    controller.select_tool(Tool.CIRCLE)
    controller.pointer_down(300, 300)
    assert controller.store.count(0) == 2
