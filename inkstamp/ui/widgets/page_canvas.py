"""
Page widget showing the rendered page with its overlays on top.
"""

from typing import Dict, Optional

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QImage,
    QKeyEvent,
    QKeySequence,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QPixmap,
    QPolygonF,
)
from PyQt5.QtWidgets import QLabel, QLineEdit

from inkstamp.config import Config
from inkstamp.controllers import AnnotationController
from inkstamp.core.annotations import EDITABLE_KINDS, Overlay, OverlayKind
from inkstamp.core.geometry import arrow_geometry
from inkstamp.core.interaction import Key, Tool
from inkstamp.utils.color_utils import fill_to_rgb, hex_to_rgb255

SELECTION_COLOR = QColor(74, 158, 255)


def _qcolor(hex_color: str, alpha: float = 1.0) -> QColor:
    r, g, b = hex_to_rgb255(hex_color)
    return QColor(r, g, b, int(round(alpha * 255)))


class PageCanvas(QLabel):
    """
    Displays one page and forwards pointer and key input to the controller.

    Overlays are painted from the store on every repaint, so the canvas keeps
    no overlay state of its own besides decoded image pixmaps.
    """

    def __init__(self, controller: AnnotationController, parent=None):
        super().__init__(parent)

        self.controller = controller
        self._page_pixmap: Optional[QPixmap] = None
        # Keyed by the encoded bytes, so restored copies of an asset share one entry
        self._image_cache: Dict[bytes, QImage] = {}

        # In-place editor for text and signatures
        self.editor = QLineEdit(self)
        self.editor.hide()
        self.editor.editingFinished.connect(self._commit_editor)

        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        controller.overlays_changed.connect(self._prune_image_cache)
        controller.overlays_changed.connect(self.update)
        controller.selection_changed.connect(lambda _overlay: self.update())
        controller.editing_changed.connect(self._on_editing_changed)
        controller.tool_changed.connect(self._on_tool_changed)

    @property
    def scale(self) -> float:
        return self.controller.scale

    def set_page_image(self, image: Optional[QImage]):
        """Show a rendered page (already at the current scale)."""
        if image is None:
            self._page_pixmap = None
            self.clear()
            return
        self._page_pixmap = QPixmap.fromImage(image)
        self.setPixmap(self._page_pixmap)
        self.setFixedSize(self._page_pixmap.size())
        self._place_editor()
        self.update()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        self.setFocus()
        pos = event.localPos()
        self.controller.pointer_down(pos.x(), pos.y())
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        if not event.buttons() & Qt.LeftButton:
            return super().mouseMoveEvent(event)
        pos = event.localPos()
        self.controller.pointer_move(pos.x(), pos.y())
        # Freehand previews do not touch the store
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        pos = event.localPos()
        self.controller.pointer_up(pos.x(), pos.y())
        self.update()

    def keyPressEvent(self, event: QKeyEvent):
        key = self._map_key(event)
        if key is None:
            return super().keyPressEvent(event)
        self.controller.key_press(key)
        self.update()

    @staticmethod
    def _map_key(event: QKeyEvent) -> Optional[Key]:
        if event.matches(QKeySequence.Undo):
            return Key.UNDO
        if event.matches(QKeySequence.Redo):
            return Key.REDO
        if event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            return Key.DELETE
        if event.key() == Qt.Key_Escape:
            return Key.ESCAPE
        return None

    def _on_tool_changed(self, tool):
        self.setCursor(Qt.ArrowCursor if tool == Tool.SELECT else Qt.CrossCursor)

    # ------------------------------------------------------------------
    # In-place text editing
    # ------------------------------------------------------------------

    def _on_editing_changed(self, overlay: Optional[Overlay]):
        if overlay is None or overlay.kind not in EDITABLE_KINDS:
            self.editor.hide()
            return
        text = overlay.content if overlay.kind == OverlayKind.TEXT else overlay.text
        self.editor.setText(text)
        self._place_editor()
        self.editor.show()
        self.editor.setFocus()
        self.editor.selectAll()

    def _place_editor(self):
        overlay = self.controller.editing_overlay()
        if overlay is None:
            return
        x0, y0, x1, y1 = overlay.bounds()
        s = self.scale
        self.editor.setGeometry(int(x0 * s), int(y0 * s),
                                max(int((x1 - x0) * s) + 40, 80), max(int((y1 - y0) * s) + 6, 22))

    def _commit_editor(self):
        # editingFinished fires on Return and on focus loss
        if not self.editor.isVisible():
            return
        text = self.editor.text()
        self.editor.hide()
        self.controller.commit_text_edit(text)
        self.setFocus()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event):
        super().paintEvent(event)
        if self._page_pixmap is None:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.scale(self.scale, self.scale)
        try:
            for overlay in self.controller.overlays():
                self._paint_overlay(painter, overlay)
            self._paint_drawing_preview(painter)
            self._paint_selection(painter)
        finally:
            painter.end()

    def _paint_overlay(self, painter: QPainter, overlay: Overlay):
        kind = overlay.kind
        painter.save()
        if kind == OverlayKind.TEXT:
            self._paint_text(painter, overlay)
        elif kind in (OverlayKind.RECT, OverlayKind.CIRCLE):
            self._paint_shape(painter, overlay)
        elif kind == OverlayKind.LINE:
            painter.setPen(self._stroke_pen(overlay.stroke, overlay.stroke_width))
            painter.drawLine(QPointF(overlay.x1, overlay.y1), QPointF(overlay.x2, overlay.y2))
        elif kind == OverlayKind.ARROW:
            self._paint_arrow(painter, overlay)
        elif kind == OverlayKind.HIGHLIGHT:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(_qcolor(overlay.color, overlay.opacity)))
            painter.drawRect(QRectF(overlay.x, overlay.y, overlay.width, overlay.height))
        elif kind == OverlayKind.WHITEOUT:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(Qt.white))
            painter.drawRect(QRectF(overlay.x, overlay.y, overlay.width, overlay.height))
        elif kind == OverlayKind.DRAWING:
            self._paint_path(painter, overlay.points, _qcolor(overlay.color), overlay.width)
        elif kind == OverlayKind.SIGNATURE:
            font = QFont("Times New Roman")
            font.setItalic(True)
            font.setPixelSize(max(int(overlay.size), 1))
            painter.setFont(font)
            painter.setPen(_qcolor(overlay.color))
            painter.drawText(QPointF(overlay.x, overlay.y), overlay.text)
        elif kind == OverlayKind.IMAGE:
            self._paint_image(painter, overlay)
        painter.restore()

    @staticmethod
    def _stroke_pen(color: str, width: float) -> QPen:
        pen = QPen(_qcolor(color), width)
        pen.setCapStyle(Qt.RoundCap)
        return pen

    def _paint_text(self, painter: QPainter, overlay):
        font = QFont(overlay.font)
        font.setPixelSize(max(int(overlay.size), 1))
        font.setBold(overlay.bold)
        font.setItalic(overlay.italic)
        painter.setFont(font)
        painter.setPen(_qcolor(overlay.color))

        width = QFontMetricsF(font).horizontalAdvance(overlay.content)
        x = overlay.x
        if overlay.align == "center":
            x -= width / 2
        elif overlay.align == "right":
            x -= width
        painter.drawText(QPointF(x, overlay.y + overlay.size), overlay.content)

    def _paint_shape(self, painter: QPainter, overlay):
        painter.setPen(self._stroke_pen(overlay.stroke, overlay.stroke_width))
        fill = fill_to_rgb(overlay.fill)
        painter.setBrush(QBrush(_qcolor(overlay.fill)) if fill is not None else Qt.NoBrush)
        if overlay.kind == OverlayKind.RECT:
            painter.drawRect(QRectF(overlay.x, overlay.y, overlay.width, overlay.height))
        else:
            painter.drawEllipse(QPointF(overlay.x, overlay.y), overlay.radius, overlay.radius)

    def _paint_arrow(self, painter: QPainter, overlay):
        geometry = arrow_geometry(overlay.x1, overlay.y1, overlay.x2, overlay.y2,
                                  overlay.stroke_width)
        color = _qcolor(overlay.stroke)
        painter.setPen(self._stroke_pen(overlay.stroke, overlay.stroke_width))
        painter.drawLine(QPointF(*geometry.line_start), QPointF(*geometry.line_end))
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawPolygon(QPolygonF([QPointF(*p) for p in geometry.head]))

    def _paint_path(self, painter: QPainter, points, color: QColor, width: float):
        if len(points) < 2:
            return
        pen = QPen(color, width)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)

        path = QPainterPath()
        path.moveTo(*points[0])
        for point in points[1:]:
            path.lineTo(*point)
        painter.drawPath(path)

    def _paint_image(self, painter: QPainter, overlay):
        if overlay.asset is None:
            return
        key = overlay.asset.data
        image = self._image_cache.get(key)
        if image is None:
            image = QImage.fromData(overlay.asset.data)
            self._image_cache[key] = image
        target = QRectF(overlay.x, overlay.y, overlay.width, overlay.height)
        if image.isNull():
            painter.setPen(QPen(Qt.red, 1, Qt.DashLine))
            painter.drawRect(target)
            return
        painter.drawImage(target, image)

    def _prune_image_cache(self):
        """Drop decoded images no overlay refers to any more."""
        store = self.controller.store
        live = {
            overlay.asset.data
            for page_index in store.pages()
            for overlay in store.get(page_index)
            if overlay.kind == OverlayKind.IMAGE and overlay.asset is not None
        }
        for key in [key for key in self._image_cache if key not in live]:
            del self._image_cache[key]

    def _paint_drawing_preview(self, painter: QPainter):
        """Paint the freehand stroke in progress."""
        points = self.controller.machine.pending_path
        if len(points) < 2:
            return
        draw = self.controller.options.draw
        painter.save()
        self._paint_path(painter, points, _qcolor(draw.color, 0.6), draw.width)
        painter.restore()

    def _paint_selection(self, painter: QPainter):
        overlay = self.controller.selected_overlay()
        if overlay is None:
            return

        # Outline and handles keep a constant on-screen size
        s = self.scale
        painter.save()
        pen = QPen(SELECTION_COLOR, 1 / s, Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        x0, y0, x1, y1 = overlay.bounds()
        painter.drawRect(QRectF(x0, y0, x1 - x0, y1 - y0))

        radius = Config.HANDLE_RADIUS / s
        painter.setPen(QPen(SELECTION_COLOR, 1 / s))
        painter.setBrush(QBrush(Qt.white))
        for hx, hy in overlay.handle_positions().values():
            painter.drawRect(QRectF(hx - radius / 2, hy - radius / 2, radius, radius))
        painter.restore()
