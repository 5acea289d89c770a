"""
Pointer Event - A single press, drag or release from one pointer.

Uses Pydantic for validation and immutability.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from paddleball.primitives import Vector2D


class PointerPhase(Enum):
    """Lifecycle phase of a pointer."""
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    CANCEL = "cancel"   # pointer left the window or the gesture was aborted


class PointerEvent(BaseModel):
    """Immutable pointer event from any source.

    All input sources (mouse, touch) convert their events to this common
    format before handing them to the PointerMapper.

    Attributes:
        pointer_id: Opaque identifier, stable for the life of one pointer
        position: Position in screen coordinates
        phase: PRESS, MOVE, RELEASE or CANCEL
        timestamp: Time when the event occurred (seconds, monotonic clock)
    """
    pointer_id: int
    position: Vector2D
    phase: PointerPhase
    timestamp: float = 0.0

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    @property
    def ends_pointer(self) -> bool:
        """True for RELEASE and CANCEL."""
        return self.phase in (PointerPhase.RELEASE, PointerPhase.CANCEL)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"PointerEvent(id={self.pointer_id}, "
                f"pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"phase={self.phase.value}, t={self.timestamp:.3f})")
