"""
PaddleBall input handling.

Pointer sources produce PointerEvents; the PointerMapper turns drags inside
the control zones into paddle-move commands.
"""
from paddleball.input.pointer_event import PointerEvent, PointerPhase
from paddleball.input.pointer_mapper import PointerAssignment, PointerMapper
from paddleball.input.input_manager import InputManager

__all__ = [
    'InputManager',
    'PointerAssignment',
    'PointerEvent',
    'PointerMapper',
    'PointerPhase',
]
