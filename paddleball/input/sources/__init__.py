"""Input sources for PaddleBall."""

from .base import InputSource
from .pointer import MOUSE_POINTER_ID, PygamePointerSource

__all__ = ['InputSource', 'MOUSE_POINTER_ID', 'PygamePointerSource']
