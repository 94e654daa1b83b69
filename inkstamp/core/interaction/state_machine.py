"""
Pointer and keyboard driven editing of overlays.
"""
import copy
import dataclasses
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

from inkstamp.config import Config
from inkstamp.core.annotations import (
    EDITABLE_KINDS,
    ArrowOverlay,
    CircleOverlay,
    DrawingOverlay,
    HighlightOverlay,
    HistoryLog,
    ImageAsset,
    ImageOverlay,
    LineOverlay,
    Overlay,
    OverlayKind,
    OverlayStore,
    RectOverlay,
    SignatureOverlay,
    TextOverlay,
    ToolOptions,
    WhiteoutOverlay,
)
from inkstamp.core.geometry import ViewTransform, handle_at, overlay_at
from .resize import resize_fields

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Tool(Enum):
    """Tools selectable from the toolbar."""

    SELECT = "select"
    TEXT = "text"
    RECT = "rect"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    HIGHLIGHT = "highlight"
    WHITEOUT = "whiteout"
    DRAW = "draw"
    SIGNATURE = "signature"
    IMAGE = "image"


# Tools that create one overlay per click and then fall back to SELECT
PLACEMENT_TOOLS = frozenset({
    Tool.TEXT, Tool.RECT, Tool.CIRCLE, Tool.LINE, Tool.ARROW,
    Tool.HIGHLIGHT, Tool.WHITEOUT, Tool.SIGNATURE,
})


class InteractionState(Enum):
    SELECT = "select"
    PLACING = "placing"
    DRAGGING = "dragging"
    RESIZING = "resizing"
    DRAWING = "drawing"


class Key(Enum):
    """Global keyboard commands."""

    UNDO = "undo"
    REDO = "redo"
    DELETE = "delete"
    ESCAPE = "escape"


@dataclass(frozen=True)
class DragGesture:
    """Pointer pressed on an overlay body; a drag once past the threshold."""

    page_index: int
    overlay_id: int
    origin: Overlay  # copy taken at pointer-down
    start_view: Point
    start_doc: Point
    active: bool = False


@dataclass(frozen=True)
class ResizeGesture:
    page_index: int
    overlay_id: int
    origin: Overlay
    handle: str
    start_doc: Point


@dataclass(frozen=True)
class DrawGesture:
    page_index: int
    points: Tuple[Point, ...]


Gesture = Union[DragGesture, ResizeGesture, DrawGesture]


class InteractionMachine:
    """
    Turns pointer and keyboard input into overlay store mutations.

    Holds the active tool, the selection and at most one gesture in
    progress. Store changes made while a drag or resize is in flight are
    recorded in the history only when the gesture ends.
    """

    def __init__(self, store: OverlayStore, history: HistoryLog,
                 options: Optional[ToolOptions] = None,
                 transform: Optional[ViewTransform] = None):
        self.store = store
        self.history = history
        self.options = options or ToolOptions()
        self.transform = transform or ViewTransform()

        self.tool: Tool = Tool.SELECT
        self.page_index: int = 0
        self.selected_id: Optional[int] = None
        self.editing_id: Optional[int] = None
        self._gesture: Optional[Gesture] = None

        # Bumped on every store mutation, lets the host detect repaints
        self.revision: int = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def gesture(self) -> Optional[Gesture]:
        return self._gesture

    @property
    def state(self) -> InteractionState:
        gesture = self._gesture
        if isinstance(gesture, DrawGesture):
            return InteractionState.DRAWING
        if isinstance(gesture, ResizeGesture):
            return InteractionState.RESIZING
        if isinstance(gesture, DragGesture) and gesture.active:
            return InteractionState.DRAGGING
        if self.tool == Tool.SELECT:
            return InteractionState.SELECT
        return InteractionState.PLACING

    @property
    def pending_path(self) -> List[Point]:
        """Points of the freehand stroke being drawn."""
        if isinstance(self._gesture, DrawGesture):
            return list(self._gesture.points)
        return []

    def selected_overlay(self) -> Optional[Overlay]:
        if self.selected_id is None:
            return None
        return self.store.find(self.page_index, self.selected_id)

    # ------------------------------------------------------------------
    # Host commands
    # ------------------------------------------------------------------

    def select_tool(self, tool: Tool) -> None:
        self.cancel_gesture()
        self.editing_id = None
        self.tool = tool

    def set_page(self, page_index: int) -> None:
        if page_index < 0:
            raise ValueError(f"Invalid page index: {page_index}")
        if page_index == self.page_index:
            return
        self.cancel_gesture()
        self.clear_selection()
        self.page_index = page_index

    def set_scale(self, scale: float) -> None:
        self.transform = self.transform.with_scale(scale)

    def set_page_size(self, page_size: Optional[Tuple[float, float]]) -> None:
        self.transform = self.transform.with_page_size(page_size)

    def clear_selection(self) -> None:
        self.selected_id = None
        self.editing_id = None

    def reset(self) -> None:
        """Forget all transient state, e.g. when a new document is opened."""
        self._gesture = None
        self.tool = Tool.SELECT
        self.page_index = 0
        self.clear_selection()
        self._mutated()

    # ------------------------------------------------------------------
    # Pointer input (view pixels)
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        if self._gesture is not None:
            return

        doc = self.transform.to_document(x, y)

        if self.tool == Tool.DRAW:
            self._gesture = DrawGesture(self.page_index, (doc,))
            return

        if self.tool in PLACEMENT_TOOLS:
            self._place(self.tool, doc)
            return

        if self.tool != Tool.SELECT:
            return

        selected = self.selected_overlay()
        if selected is not None:
            radius = self.transform.view_length(Config.HANDLE_RADIUS)
            handle = handle_at(selected, doc[0], doc[1], radius)
            if handle is not None:
                self.editing_id = None
                self._gesture = ResizeGesture(
                    self.page_index, selected.id, copy.deepcopy(selected), handle, doc
                )
                return

        tolerance = self.transform.view_length(Config.HIT_TOLERANCE)
        hit = overlay_at(self.store.get(self.page_index), doc[0], doc[1], tolerance)
        if hit is None:
            self.clear_selection()
            return

        if hit.id != self.editing_id:
            self.editing_id = None
        self.selected_id = hit.id
        self._gesture = DragGesture(
            self.page_index, hit.id, copy.deepcopy(hit), (x, y), doc
        )

    def pointer_move(self, x: float, y: float) -> None:
        gesture = self._gesture
        if gesture is None:
            return

        doc = self.transform.to_document(x, y)

        if isinstance(gesture, DrawGesture):
            self._gesture = replace(gesture, points=gesture.points + (doc,))
            return

        if isinstance(gesture, DragGesture) and not gesture.active:
            threshold = Config.DRAG_THRESHOLD
            if (abs(x - gesture.start_view[0]) <= threshold
                    and abs(y - gesture.start_view[1]) <= threshold):
                return
            gesture = replace(gesture, active=True)
            self._gesture = gesture
            self.editing_id = None

        dx = doc[0] - gesture.start_doc[0]
        dy = doc[1] - gesture.start_doc[1]
        if isinstance(gesture, DragGesture):
            fields = gesture.origin.translate_fields(dx, dy)
        else:
            fields = resize_fields(gesture.origin, gesture.handle, dx, dy)

        if not self.store.update(gesture.page_index, gesture.overlay_id, **fields):
            # Overlay vanished under the gesture
            self._gesture = None
            return
        self._mutated()

    def pointer_up(self, x: float, y: float) -> None:
        gesture = self._gesture
        self._gesture = None
        if gesture is None:
            return

        if isinstance(gesture, DrawGesture):
            self._finish_drawing(gesture)
            return

        current = self.store.find(gesture.page_index, gesture.overlay_id)
        if current is None:
            return

        if isinstance(gesture, DragGesture) and not gesture.active:
            # A click: text-like overlays open for editing
            if current.kind in EDITABLE_KINDS:
                self.editing_id = current.id
            return

        if current != gesture.origin:
            self._commit()

    def cancel_gesture(self) -> None:
        """Abandon the gesture in progress, putting the overlay back."""
        gesture = self._gesture
        self._gesture = None
        if isinstance(gesture, (DragGesture, ResizeGesture)):
            origin = gesture.origin
            fields = {f.name: copy.deepcopy(getattr(origin, f.name))
                      for f in dataclasses.fields(origin) if f.name != "id"}
            if self.store.update(gesture.page_index, gesture.overlay_id, **fields):
                self._mutated()

    # ------------------------------------------------------------------
    # Keyboard and commands
    # ------------------------------------------------------------------

    def key_press(self, key: Key) -> bool:
        """
        Handle a global key binding.

        Returns:
            True if the key changed anything
        """
        if key == Key.UNDO:
            return self.undo()
        elif key == Key.REDO:
            return self.redo()
        elif key == Key.DELETE:
            return self.delete_selected()
        elif key == Key.ESCAPE:
            self.cancel_gesture()
            self.tool = Tool.SELECT
            self.clear_selection()
            return True
        raise ValueError(f"Unknown key command: {key!r}")

    def undo(self) -> bool:
        self.cancel_gesture()
        state = self.history.undo()
        if state is None:
            return False
        self._install(state)
        return True

    def redo(self) -> bool:
        self.cancel_gesture()
        state = self.history.redo()
        if state is None:
            return False
        self._install(state)
        return True

    def delete_selected(self) -> bool:
        if self.selected_id is None:
            return False
        self.cancel_gesture()
        removed = self.store.remove(self.page_index, self.selected_id)
        self.clear_selection()
        if removed:
            self._commit()
        return removed

    def clear_page(self) -> bool:
        """Remove every overlay on the current page as one undoable step."""
        self.cancel_gesture()
        self.clear_selection()
        if not self.store.clear_page(self.page_index):
            return False
        self._commit()
        return True

    def begin_text_edit(self, overlay_id: int) -> bool:
        overlay = self.store.find(self.page_index, overlay_id)
        if overlay is None or overlay.kind not in EDITABLE_KINDS:
            return False
        self.selected_id = overlay_id
        self.editing_id = overlay_id
        return True

    def commit_text_edit(self, text: str) -> bool:
        """
        Store the edited text of the overlay being edited (on focus loss).

        Returns:
            True if the text changed and was committed
        """
        overlay_id = self.editing_id
        self.editing_id = None
        if overlay_id is None:
            return False

        overlay = self.store.find(self.page_index, overlay_id)
        if overlay is None:
            return False

        field_name = "content" if overlay.kind == OverlayKind.TEXT else "text"
        if getattr(overlay, field_name) == text:
            return False
        self.store.update(self.page_index, overlay_id, **{field_name: text})
        self._commit()
        return True

    def place_image(self, asset: ImageAsset) -> int:
        """Insert a decoded image on the current page and select it."""
        width = min(Config.IMAGE_MAX_WIDTH, asset.width)
        height = width / asset.aspect_ratio
        x, y = Config.IMAGE_POSITION
        overlay = ImageOverlay(x=x, y=y, width=width, height=height, asset=asset)
        return self._insert(overlay)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _place(self, tool: Tool, doc: Point) -> None:
        x, y = doc
        options = self.options
        shape = options.shape

        if tool == Tool.TEXT:
            text = options.text
            overlay = TextOverlay(
                x=x, y=y, content=Config.DEFAULT_TEXT, font=text.font, size=text.size,
                color=text.color, bold=text.bold, italic=text.italic, align=text.align,
            )
        elif tool == Tool.RECT:
            width, height = Config.RECT_SIZE
            overlay = RectOverlay(
                x=x - width / 2, y=y - height / 2, width=width, height=height,
                stroke=shape.stroke, stroke_width=shape.stroke_width, fill=shape.fill,
            )
        elif tool == Tool.CIRCLE:
            overlay = CircleOverlay(
                x=x, y=y, radius=Config.CIRCLE_RADIUS,
                stroke=shape.stroke, stroke_width=shape.stroke_width, fill=shape.fill,
            )
        elif tool in (Tool.LINE, Tool.ARROW):
            cls = ArrowOverlay if tool == Tool.ARROW else LineOverlay
            half = Config.LINE_HALF_LENGTH
            overlay = cls(
                x1=x - half, y1=y, x2=x + half, y2=y,
                stroke=shape.stroke, stroke_width=shape.stroke_width,
            )
        elif tool == Tool.HIGHLIGHT:
            width, height = Config.HIGHLIGHT_SIZE
            overlay = HighlightOverlay(
                x=x - width / 2, y=y - height / 2, width=width, height=height,
                color=options.highlight_color,
            )
        elif tool == Tool.WHITEOUT:
            width, height = Config.WHITEOUT_SIZE
            overlay = WhiteoutOverlay(x=x - width / 2, y=y - height / 2,
                                      width=width, height=height)
        elif tool == Tool.SIGNATURE:
            overlay = SignatureOverlay(x=x, y=y, text=options.signature.text,
                                       color=options.signature.color)
        else:
            raise ValueError(f"{tool.value} is not a placement tool")

        self._insert(overlay)

    def _insert(self, overlay: Overlay) -> int:
        overlay_id = self.store.add(self.page_index, overlay)
        self._commit()
        self.tool = Tool.SELECT
        self.selected_id = overlay_id
        self.editing_id = None
        logger.debug("Placed %s overlay %s on page %s",
                     overlay.kind.value, overlay_id, self.page_index)
        return overlay_id

    def _finish_drawing(self, gesture: DrawGesture) -> None:
        if len(gesture.points) < 2:
            return
        draw = self.options.draw
        self.store.add(gesture.page_index, DrawingOverlay(
            points=list(gesture.points), color=draw.color, width=draw.width,
        ))
        self._commit()

    def _install(self, state) -> None:
        self.store.restore(state)
        self.editing_id = None
        if self.selected_overlay() is None:
            self.selected_id = None
        self._mutated()

    def _commit(self) -> None:
        self.history.push(self.store.snapshot())
        self._mutated()

    def _mutated(self) -> None:
        self.revision += 1
