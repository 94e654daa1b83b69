"""
Overlay model, storage and history.
"""
from .models import (
    ArrowOverlay,
    BoxOverlay,
    CircleOverlay,
    DrawingOverlay,
    EDITABLE_KINDS,
    HighlightOverlay,
    ImageAsset,
    ImageOverlay,
    LineOverlay,
    Overlay,
    OverlayKind,
    RectOverlay,
    SignatureOverlay,
    TextOverlay,
    WhiteoutOverlay,
)
from .store import OverlayStore, StoreState
from .history import HistoryLog
from .options import DrawOptions, ShapeOptions, SignatureOptions, TextOptions, ToolOptions

__all__ = [
    'Overlay',
    'OverlayKind',
    'BoxOverlay',
    'TextOverlay',
    'RectOverlay',
    'CircleOverlay',
    'LineOverlay',
    'ArrowOverlay',
    'HighlightOverlay',
    'WhiteoutOverlay',
    'DrawingOverlay',
    'SignatureOverlay',
    'ImageOverlay',
    'ImageAsset',
    'EDITABLE_KINDS',
    'OverlayStore',
    'StoreState',
    'HistoryLog',
    'TextOptions',
    'ShapeOptions',
    'DrawOptions',
    'SignatureOptions',
    'ToolOptions',
]
