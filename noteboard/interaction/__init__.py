"""
Interaction module - pointer capture and card drag state machines.
"""
from .listeners import PointerListenerRegistry
from .drag_state import DragState, DragController
from .session import BoardInteraction

__all__ = [
    "PointerListenerRegistry",
    "DragState",
    "DragController",
    "BoardInteraction",
]
