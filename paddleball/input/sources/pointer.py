"""
Pygame Pointer Source - Mouse and multi-touch input.

Converts pygame mouse and finger events into PointerEvent models. The mouse
is reported as a single pointer with id MOUSE_POINTER_ID; each finger keeps
its SDL finger id, so two players can drag at once on a touch screen.
"""
import time
from typing import List, Optional

import pygame

from paddleball.input.pointer_event import PointerEvent, PointerPhase
from paddleball.input.sources.base import InputSource
from paddleball.primitives import Vector2D

MOUSE_POINTER_ID = -1

_FINGER_PHASES = {
    pygame.FINGERDOWN: PointerPhase.PRESS,
    pygame.FINGERMOTION: PointerPhase.MOVE,
    pygame.FINGERUP: PointerPhase.RELEASE,
}


class PygamePointerSource(InputSource):
    """Pointer source backed by the pygame event queue.

    Either feed it events from the host loop with ``handle_pygame_event()``,
    or call ``update()`` to let it drain the queue itself (non-pointer events
    are re-posted for the main loop to handle).
    """

    def __init__(self, screen_width: float, screen_height: float):
        """Initialize the source.

        Args:
            screen_width: Window width, used to scale normalized finger X
            screen_height: Window height, used to scale normalized finger Y
        """
        self._screen_width = screen_width
        self._screen_height = screen_height
        self._event_queue: List[PointerEvent] = []
        self._mouse_down = False

    def poll_events(self) -> List[PointerEvent]:
        """Get new pointer events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer events."""
        for event in pygame.event.get():
            if not self.handle_pygame_event(event):
                pygame.event.post(event)

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()

    def handle_pygame_event(self, event: pygame.event.Event) -> bool:
        """Translate one pygame event.

        Returns:
            True if the event was a pointer event and has been consumed
        """
        if event.type in _FINGER_PHASES:
            position = Vector2D(x=event.x * self._screen_width, y=event.y * self._screen_height)
            self._push(event.finger_id, position, _FINGER_PHASES[event.type])
            return True

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
            if getattr(event, 'touch', False):
                # Synthesized from a finger event already handled above
                return True
            phase = self._mouse_phase(event)
            if phase is not None:
                x, y = event.pos
                self._push(MOUSE_POINTER_ID, Vector2D(x=float(x), y=float(y)), phase)
            return True

        if event.type == pygame.WINDOWLEAVE and self._mouse_down:
            self._mouse_down = False
            x, y = pygame.mouse.get_pos()
            self._push(MOUSE_POINTER_ID, Vector2D(x=float(x), y=float(y)), PointerPhase.CANCEL)
            return True

        return False

    def _mouse_phase(self, event: pygame.event.Event) -> Optional[PointerPhase]:
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button != 1:
                return None
            self._mouse_down = True
            return PointerPhase.PRESS
        if event.type == pygame.MOUSEBUTTONUP:
            if event.button != 1:
                return None
            self._mouse_down = False
            return PointerPhase.RELEASE
        # Motion only matters while the left button is held
        return PointerPhase.MOVE if self._mouse_down else None

    def _push(self, pointer_id: int, position: Vector2D, phase: PointerPhase) -> None:
        self._event_queue.append(PointerEvent(
            pointer_id=pointer_id,
            position=position,
            phase=phase,
            timestamp=time.monotonic(),
        ))
