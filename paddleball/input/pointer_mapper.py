"""
Pointer Mapper - Turns pointer drags into paddle moves.

A press inside a control zone claims that zone's paddle for the pointer;
subsequent moves of the same pointer slide the paddle by the horizontal
delta; release (or cancel) gives the zone back.
"""
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Optional

from paddleball.game.entities import Zone
from paddleball.logging import get_logger

from .pointer_event import PointerEvent, PointerPhase

log = get_logger('input')

MoveCallback = Callable[[Zone, float], object]


@dataclass(frozen=True)
class PointerAssignment:
    """Zone owned by a pointer and the last X it was seen at."""
    zone: Zone
    last_x: float


class PointerMapper:
    """Maps pointers to control zones and emits paddle-move commands.

    At most one pointer owns a zone at any time. Events for pointers that hold
    no assignment (stale moves, releases after a cancel) are ignored.
    """

    def __init__(self, on_move: MoveCallback, control_zone_height: float):
        """Initialize the mapper.

        Args:
            on_move: Called as ``on_move(zone, dx)`` for every drag step,
                typically ``GameEngine.move_paddle``
            control_zone_height: Height of each control zone, measured from
                its wall
        """
        self._on_move = on_move
        self._control_zone_height = control_zone_height
        self._assignments: Dict[int, PointerAssignment] = {}

    @property
    def assignments(self) -> Dict[int, PointerAssignment]:
        """Copy of the pointer_id -> assignment table."""
        return dict(self._assignments)

    def owner_of(self, zone: Zone) -> Optional[int]:
        """Pointer id currently owning ``zone``, or None."""
        for pointer_id, assignment in self._assignments.items():
            if assignment.zone is zone:
                return pointer_id
        return None

    def zone_at(self, y: float, arena_height: float) -> Optional[Zone]:
        """Control zone containing screen Y, if any."""
        if y < self._control_zone_height:
            return Zone.TOP
        if y > arena_height - self._control_zone_height:
            return Zone.BOTTOM
        return None

    def handle(self, event: PointerEvent, arena_height: float) -> None:
        """Process one pointer event.

        Args:
            event: Pointer event
            arena_height: Current arena height (locates the bottom zone)
        """
        if event.phase is PointerPhase.PRESS:
            self._press(event, arena_height)
        elif event.phase is PointerPhase.MOVE:
            self._move(event)
        elif event.ends_pointer:
            if self._assignments.pop(event.pointer_id, None) is not None:
                log.debug("Pointer %d released", event.pointer_id)

    def handle_events(self, events: Iterable[PointerEvent], arena_height: float) -> None:
        """Process a batch of pointer events in order."""
        for event in events:
            self.handle(event, arena_height)

    def clear(self) -> None:
        """Drop every assignment (e.g. when the session restarts)."""
        self._assignments.clear()

    def _press(self, event: PointerEvent, arena_height: float) -> None:
        zone = self.zone_at(event.position.y, arena_height)
        if zone is None:
            return
        if event.pointer_id in self._assignments:
            return
        if self.owner_of(zone) is not None:
            log.trace("Zone %s already owned; press from pointer %d ignored",
                      zone.value, event.pointer_id)
            return

        self._assignments[event.pointer_id] = PointerAssignment(zone, event.position.x)
        log.debug("Pointer %d took the %s zone", event.pointer_id, zone.value)

    def _move(self, event: PointerEvent) -> None:
        assignment = self._assignments.get(event.pointer_id)
        if assignment is None:
            return

        dx = event.position.x - assignment.last_x
        self._on_move(assignment.zone, dx)
        self._assignments[event.pointer_id] = replace(assignment, last_x=event.position.x)
