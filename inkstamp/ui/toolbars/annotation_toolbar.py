from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QButtonGroup, QCheckBox, QColorDialog, QComboBox, QDoubleSpinBox, QFrame,
    QHBoxLayout, QLabel, QLineEdit, QSpinBox, QToolButton, QVBoxLayout,
)

from inkstamp.config import Config
from inkstamp.core.annotations import ToolOptions
from inkstamp.core.interaction import Tool
from inkstamp.utils.color_utils import NO_FILL

TOOL_LABELS = [
    (Tool.SELECT, "Select", "Select, move and resize (Esc)"),
    (Tool.TEXT, "Text", "Place a text box"),
    (Tool.RECT, "Rect", "Place a rectangle"),
    (Tool.CIRCLE, "Circle", "Place a circle"),
    (Tool.LINE, "Line", "Place a line"),
    (Tool.ARROW, "Arrow", "Place an arrow"),
    (Tool.HIGHLIGHT, "Highlight", "Place a highlight"),
    (Tool.WHITEOUT, "Whiteout", "Cover content with white"),
    (Tool.DRAW, "Draw", "Draw freehand"),
    (Tool.SIGNATURE, "Sign", "Place a signature"),
]


class AnnotationToolbar(QFrame):
    """Tool palette and the options of the tool in use."""

    tool_selected = pyqtSignal(object)  # Tool
    image_requested = pyqtSignal()
    text_options_changed = pyqtSignal(dict)
    shape_options_changed = pyqtSignal(dict)
    draw_options_changed = pyqtSignal(dict)
    signature_options_changed = pyqtSignal(dict)
    highlight_color_changed = pyqtSignal(str)
    undo_requested = pyqtSignal()
    redo_requested = pyqtSignal()
    delete_requested = pyqtSignal()
    clear_page_requested = pyqtSignal()

    def __init__(self, options: ToolOptions, parent=None):
        super().__init__(parent)
        self.setObjectName("AnnotationToolbar")
        self.tool_buttons = {}
        self.color_buttons = {}
        self.setup_ui(options)

    def setup_ui(self, options: ToolOptions):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 6, 8, 6)
        main_layout.setSpacing(6)

        # Tool row
        tools_layout = QHBoxLayout()
        tools_layout.setSpacing(4)
        self.tool_group = QButtonGroup(self)
        self.tool_group.setExclusive(True)
        for tool, label, tooltip in TOOL_LABELS:
            btn = QToolButton(self)
            btn.setText(label)
            btn.setToolTip(tooltip)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked, t=tool: self.tool_selected.emit(t))
            self.tool_group.addButton(btn)
            self.tool_buttons[tool] = btn
            tools_layout.addWidget(btn)

        image_button = QToolButton(self)
        image_button.setText("Image")
        image_button.setToolTip("Insert an image")
        image_button.clicked.connect(self.image_requested)
        tools_layout.addWidget(image_button)

        tools_layout.addStretch()

        for text, tooltip, signal in (
            ("Undo", "Undo (Ctrl+Z)", self.undo_requested),
            ("Redo", "Redo (Ctrl+Y)", self.redo_requested),
            ("Delete", "Delete selected (Del)", self.delete_requested),
            ("Clear Page", "Remove all annotations on this page", self.clear_page_requested),
        ):
            btn = QToolButton(self)
            btn.setText(text)
            btn.setToolTip(tooltip)
            btn.clicked.connect(signal)
            tools_layout.addWidget(btn)
            if text == "Undo":
                self.undo_button = btn
            elif text == "Redo":
                self.redo_button = btn

        main_layout.addLayout(tools_layout)

        # Options row
        options_layout = QHBoxLayout()
        options_layout.setSpacing(8)

        options_layout.addWidget(self._label("Font:"))
        self.font_combo = QComboBox(self)
        self.font_combo.addItems(Config.FONTS)
        self.font_combo.setCurrentText(options.text.font)
        self.font_combo.currentTextChanged.connect(
            lambda font: self.text_options_changed.emit({"font": font}))
        options_layout.addWidget(self.font_combo)

        self.size_spinbox = QSpinBox(self)
        self.size_spinbox.setRange(6, 96)
        self.size_spinbox.setValue(int(options.text.size))
        self.size_spinbox.valueChanged.connect(
            lambda size: self.text_options_changed.emit({"size": float(size)}))
        options_layout.addWidget(self.size_spinbox)

        self.bold_box = QCheckBox("B", self)
        self.bold_box.setChecked(options.text.bold)
        self.bold_box.toggled.connect(lambda on: self.text_options_changed.emit({"bold": on}))
        options_layout.addWidget(self.bold_box)

        self.italic_box = QCheckBox("I", self)
        self.italic_box.setChecked(options.text.italic)
        self.italic_box.toggled.connect(lambda on: self.text_options_changed.emit({"italic": on}))
        options_layout.addWidget(self.italic_box)

        self.align_combo = QComboBox(self)
        self.align_combo.addItems(["left", "center", "right"])
        self.align_combo.setCurrentText(options.text.align)
        self.align_combo.currentTextChanged.connect(
            lambda align: self.text_options_changed.emit({"align": align}))
        options_layout.addWidget(self.align_combo)

        options_layout.addWidget(self._color_button(
            "text", options.text.color, "Text color",
            lambda color: self.text_options_changed.emit({"color": color})))

        options_layout.addWidget(self._label("Stroke:"))
        options_layout.addWidget(self._color_button(
            "stroke", options.shape.stroke, "Stroke color",
            lambda color: self.shape_options_changed.emit({"stroke": color})))

        self.stroke_spinbox = QDoubleSpinBox(self)
        self.stroke_spinbox.setRange(0.5, 20.0)
        self.stroke_spinbox.setSingleStep(0.5)
        self.stroke_spinbox.setValue(options.shape.stroke_width)
        self.stroke_spinbox.valueChanged.connect(
            lambda width: self.shape_options_changed.emit({"stroke_width": width}))
        options_layout.addWidget(self.stroke_spinbox)

        options_layout.addWidget(self._label("Fill:"))
        fill = options.shape.fill if options.shape.fill != NO_FILL else "#FFFFFF"
        options_layout.addWidget(self._color_button("fill", fill, "Fill color", self._on_fill_color))
        self.fill_box = QCheckBox("Filled", self)
        self.fill_box.setChecked(options.shape.fill != NO_FILL)
        self.fill_box.toggled.connect(self._on_fill_toggled)
        options_layout.addWidget(self.fill_box)

        options_layout.addWidget(self._label("Highlight:"))
        self.highlight_combo = QComboBox(self)
        self.highlight_combo.addItems(Config.HIGHLIGHT_COLORS)
        self.highlight_combo.setCurrentText(options.highlight_color)
        self.highlight_combo.currentTextChanged.connect(self.highlight_color_changed)
        options_layout.addWidget(self.highlight_combo)

        options_layout.addWidget(self._label("Pen:"))
        options_layout.addWidget(self._color_button(
            "draw", options.draw.color, "Pen color",
            lambda color: self.draw_options_changed.emit({"color": color})))
        self.pen_spinbox = QSpinBox(self)
        self.pen_spinbox.setRange(1, 20)
        self.pen_spinbox.setValue(int(options.draw.width))
        self.pen_spinbox.valueChanged.connect(
            lambda width: self.draw_options_changed.emit({"width": float(width)}))
        options_layout.addWidget(self.pen_spinbox)

        options_layout.addWidget(self._label("Signature:"))
        self.signature_edit = QLineEdit(options.signature.text, self)
        self.signature_edit.setFixedWidth(120)
        self.signature_edit.editingFinished.connect(
            lambda: self.signature_options_changed.emit({"text": self.signature_edit.text()}))
        options_layout.addWidget(self.signature_edit)
        options_layout.addWidget(self._color_button(
            "signature", options.signature.color, "Signature color",
            lambda color: self.signature_options_changed.emit({"color": color})))

        options_layout.addStretch()
        main_layout.addLayout(options_layout)

        self.set_active_tool(Tool.SELECT)
        self.set_history_state(False, False)

    def _label(self, text: str) -> QLabel:
        label = QLabel(text, self)
        label.setStyleSheet("color: #8899AA;")
        return label

    def _color_button(self, name: str, color: str, tooltip: str, on_change) -> QToolButton:
        btn = QToolButton(self)
        btn.setToolTip(tooltip)
        btn.setFixedSize(24, 24)
        btn.setProperty("hex_color", color)
        btn.clicked.connect(lambda: self._choose_color(btn, tooltip, on_change))
        self._update_color_button(btn)
        self.color_buttons[name] = btn
        return btn

    def _choose_color(self, btn: QToolButton, title: str, on_change):
        """Open color picker dialog."""
        color = QColorDialog.getColor(QColor(btn.property("hex_color")), self, title)
        if color.isValid():
            hex_color = color.name().upper()
            btn.setProperty("hex_color", hex_color)
            self._update_color_button(btn)
            on_change(hex_color)

    @staticmethod
    def _update_color_button(btn: QToolButton):
        btn.setStyleSheet(f"""
            QToolButton {{
                background-color: {btn.property("hex_color")};
                border: 2px solid #555555;
                border-radius: 4px;
            }}
            QToolButton:hover {{
                border: 2px solid #777777;
            }}
        """)

    def _on_fill_color(self, color: str):
        if self.fill_box.isChecked():
            self.shape_options_changed.emit({"fill": color})

    def _on_fill_toggled(self, filled: bool):
        color = self.color_buttons["fill"].property("hex_color")
        self.shape_options_changed.emit({"fill": color if filled else NO_FILL})

    def set_active_tool(self, tool: Tool):
        """Reflect the active tool (which may change without a click)."""
        btn = self.tool_buttons.get(tool)
        if btn is not None:
            btn.setChecked(True)

    def set_history_state(self, can_undo: bool, can_redo: bool):
        self.undo_button.setEnabled(can_undo)
        self.redo_button.setEnabled(can_redo)
