"""Paddle entity.

Paddles are axis-aligned rectangles tagged with the zone they belong to.
The tag, not object identity, decides which face of the paddle the ball
can strike: the TOP paddle is hit on its bottom edge, the BOTTOM paddle on
its top edge.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class Zone(Enum):
    """Screen half owned by one player."""
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Paddle:
    """Player paddle (x, y is the top-left corner)."""

    zone: Zone
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def impact_y(self) -> float:
        """Y of the face the ball bounces off."""
        return self.bottom if self.zone is Zone.TOP else self.top

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        """Bounding rectangle (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def moved_by(self, dx: float, arena_width: float) -> 'Paddle':
        """Slide horizontally by ``dx``, clamped to ``[0, arena_width - width]``."""
        new_x = max(0.0, min(arena_width - self.width, self.x + dx))
        return replace(self, x=new_x)

    def shrunk(self, factor: float, min_width: float, arena_width: float) -> 'Paddle':
        """Scale the width by ``factor`` keeping the paddle centred.

        The width never drops below ``min_width`` and the result stays inside
        the arena.
        """
        new_width = max(min_width, self.width * factor)
        new_width = min(new_width, arena_width)
        new_x = self.x + (self.width - new_width) / 2
        new_x = max(0.0, min(arena_width - new_width, new_x))
        return replace(self, x=new_x, width=new_width)

    def advanced(self, step: float, y_range: Tuple[float, float]) -> 'Paddle':
        """Move ``step`` toward the centre line, within ``y_range``.

        TOP paddles move down, BOTTOM paddles move up. A paddle already past
        its limit stays where it is.
        """
        low, high = y_range
        if self.zone is Zone.TOP:
            new_y = max(low, min(self.y + step, max(self.y, high)))
        else:
            new_y = min(high, max(self.y - step, min(self.y, low)))
        return replace(self, y=new_y)
