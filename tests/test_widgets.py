from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QKeyEvent, QMouseEvent

from inkstamp.controllers import AnnotationController
from inkstamp.core.interaction import Tool
from inkstamp.ui.widgets import PageCanvas, ThumbnailList
from inkstamp.ui.windows import MainWindow


def _mouse(kind, x, y, buttons=Qt.LeftButton):
    return QMouseEvent(kind, QPointF(x, y), Qt.LeftButton, buttons, Qt.NoModifier)


def test_canvas_forwards_mouse_input(qapp, pdf_bytes):
    controller = AnnotationController()
    controller.open_bytes(pdf_bytes)
    canvas = PageCanvas(controller)
    canvas.set_page_image(controller.document.render_page(0, controller.scale))

    controller.select_tool(Tool.DRAW)
    canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 10, 10))
    canvas.mouseMoveEvent(_mouse(QEvent.MouseMove, 40, 30))
    canvas.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 40, 30, Qt.NoButton))

    assert controller.store.count(0) == 1
    # Painting every overlay kind must not raise
    canvas.grab()


def test_canvas_escape_key(qapp, pdf_bytes):
    controller = AnnotationController()
    controller.open_bytes(pdf_bytes)
    canvas = PageCanvas(controller)
    controller.select_tool(Tool.RECT)

    canvas.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Escape, Qt.NoModifier))

    assert controller.machine.tool == Tool.SELECT


def test_main_window_opens_a_document(qapp, pdf_bytes, tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(pdf_bytes)

    window = MainWindow(str(path))

    assert window.total_page_label.text() == "/ 2"
    assert window.canvas.width() == 595
    window._stop_thumbnails()
    window.close()


def _canvas_with_page(pdf_bytes):
    controller = AnnotationController()
    controller.open_bytes(pdf_bytes)
    canvas = PageCanvas(controller)
    canvas.set_page_image(controller.document.render_page(0, controller.scale))
    return controller, canvas


def test_image_cache_survives_undo_redo_cycles(qapp, pdf_bytes, png_bytes):
    controller, canvas = _canvas_with_page(pdf_bytes)
    controller.insert_image(png_bytes)
    canvas.grab()

    for _ in range(20):
        controller.undo()
        canvas.grab()
        controller.redo()
        canvas.grab()

    assert list(canvas._image_cache) == [png_bytes]


def test_image_cache_drops_removed_images(qapp, pdf_bytes, png_factory):
    controller, canvas = _canvas_with_page(pdf_bytes)
    first, second = png_factory(40, 20), png_factory(10, 30)
    controller.insert_image(first)
    controller.insert_image(second)
    canvas.grab()
    assert set(canvas._image_cache) == {first, second}

    controller.delete_selected()
    assert set(canvas._image_cache) == {first}

    controller.clear_page()
    assert canvas._image_cache == {}


def test_thumbnail_list_loading_state(qapp):
    thumbnails = ThumbnailList()
    thumbnails.reset_pages(3)

    thumbnails.set_loading(True)
    assert thumbnails.loading
    assert "Rendering" in thumbnails.toolTip()

    thumbnails.set_loading(False)
    assert not thumbnails.loading
    assert thumbnails.count() == 3


def test_main_window_clears_loading_when_thumbnails_finish(qapp, pdf_bytes, tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(pdf_bytes)
    window = MainWindow(str(path))

    window.thumbnail_worker.wait()
    qapp.processEvents()

    assert not window.thumbnail_list.loading
    window._stop_thumbnails()
    window.close()
