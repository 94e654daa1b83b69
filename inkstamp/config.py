"""
Global configuration for Inkstamp PDF.
"""
from typing import Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Inkstamp PDF"
    APP_DIR_NAME: Final[str] = "InkstampPDF"
    APP_VERSION: Final[str] = "0.3.0"

    # View / zoom
    MIN_SCALE: Final[float] = 0.5
    MAX_SCALE: Final[float] = 3.0
    DEFAULT_SCALE: Final[float] = 1.0
    ZOOM_STEP: Final[float] = 0.2
    THUMBNAIL_SCALE: Final[float] = 0.2

    # Interaction
    DRAG_THRESHOLD: Final[float] = 3.0  # view pixels
    HANDLE_RADIUS: Final[float] = 6.0  # view pixels
    HIT_TOLERANCE: Final[float] = 5.0  # view pixels, lines and strokes

    # Geometry limits (document units)
    MIN_BOX_SIZE: Final[float] = 20.0
    MIN_RADIUS: Final[float] = 10.0

    # Placement defaults (document units)
    RECT_SIZE: Final[tuple] = (100.0, 50.0)
    CIRCLE_RADIUS: Final[float] = 30.0
    LINE_HALF_LENGTH: Final[float] = 50.0
    HIGHLIGHT_SIZE: Final[tuple] = (120.0, 20.0)
    WHITEOUT_SIZE: Final[tuple] = (100.0, 20.0)
    IMAGE_POSITION: Final[tuple] = (100.0, 100.0)
    IMAGE_MAX_WIDTH: Final[float] = 200.0
    DEFAULT_TEXT: Final[str] = "Click to edit"
    DEFAULT_SIGNATURE: Final[str] = "Signature"

    # Rendering
    HIGHLIGHT_OPACITY: Final[float] = 0.4
    SIGNATURE_FONT_SIZE: Final[float] = 18.0
    ARROW_MIN_HEAD: Final[float] = 12.0
    ARROW_HEAD_FACTOR: Final[float] = 5.0
    ARROW_MAX_HEAD_RATIO: Final[float] = 0.9
    ARROW_WIDTH_RATIO: Final[float] = 0.6

    # History
    HISTORY_LIMIT: Final[int] = 100

    # Tool option palettes
    FONTS: Final[list] = ["Arial", "Times New Roman", "Courier New", "Georgia", "Verdana"]
    COLORS: Final[list] = [
        "#000000", "#FF0000", "#00FF00", "#0000FF", "#FFFF00",
        "#FF00FF", "#00FFFF", "#FFA500", "#800080", "#FFFFFF",
    ]
    HIGHLIGHT_COLORS: Final[list] = ["#FFFF00", "#00FF00", "#FF69B4", "#87CEEB", "#FFA500"]

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1280
    DEFAULT_WINDOW_HEIGHT: Final[int] = 860
    EXPORT_PREFIX: Final[str] = "edited-"
