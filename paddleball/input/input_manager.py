"""
Input Manager - Owns the active pointer source for the host loop.
"""
from typing import List, Optional

from paddleball.input.pointer_event import PointerEvent
from paddleball.input.sources.base import InputSource


class InputManager:
    """Front for whichever InputSource is plugged in.

    The host calls ``update()`` once per frame and hands ``get_events()`` to
    the game; swapping the source (pygame pointers, a scripted replay)
    needs no change on either side.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source

    def set_source(self, source: InputSource) -> None:
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Let the source collect this frame's events."""
        if self._source is None:
            return
        self._source.update(dt)

    def get_events(self) -> List[PointerEvent]:
        """Pointer events gathered since the previous call."""
        return self._source.poll_events() if self._source is not None else []

    def clear_events(self) -> None:
        """Discard whatever the source has buffered."""
        self.get_events()
