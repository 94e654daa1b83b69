"""
Interactive editing: tools, gestures and the interaction state machine.
"""
from .resize import resize_fields
from .state_machine import (
    DragGesture,
    DrawGesture,
    InteractionMachine,
    InteractionState,
    Key,
    PLACEMENT_TOOLS,
    ResizeGesture,
    Tool,
)

__all__ = [
    "InteractionMachine",
    "InteractionState",
    "Tool",
    "Key",
    "PLACEMENT_TOOLS",
    "DragGesture",
    "ResizeGesture",
    "DrawGesture",
    "resize_fields",
]
