"""
Base Input Source - Abstract interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from paddleball.input.pointer_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    All backends (mouse, touch, scripted replays) must implement this interface.
    """

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Poll for new pointer events.

        Returns:
            List of PointerEvent objects since last poll.
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Delta time in seconds since last update.
        """
        pass
