"""Ball entity.

The ball is an immutable value: every movement, bounce or speed-up returns a
new Ball, so a GameState holding one can be shared with the renderer safely.
"""

from dataclasses import dataclass, replace
import math
import random
from typing import Optional, Tuple


@dataclass(frozen=True)
class Ball:
    """Circular ball with per-tick velocity."""

    x: float
    y: float
    radius: float
    vx: float = 0.0
    vy: float = 0.0

    @classmethod
    def serve(
        cls,
        center: Tuple[float, float],
        radius: float,
        base_speed_x: float,
        base_speed_y: float,
        jitter: Tuple[float, float] = (0.8, 1.2),
        rng: Optional[random.Random] = None,
    ) -> 'Ball':
        """Create a fresh ball at ``center`` heading in a random direction.

        Each axis independently gets a random sign and a speed of
        ``base * U[low, high)``.

        Args:
            center: Spawn position (x, y)
            radius: Ball radius
            base_speed_x: Nominal horizontal speed per tick
            base_speed_y: Nominal vertical speed per tick
            jitter: (low, high) speed factor range
            rng: Random source (module-level random if None)

        Returns:
            New Ball
        """
        rng = rng or random
        low, high = jitter

        factor_x = low + rng.random() * (high - low)
        factor_y = low + rng.random() * (high - low)
        sign_x = 1.0 if rng.random() > 0.5 else -1.0
        sign_y = 1.0 if rng.random() > 0.5 else -1.0

        return cls(
            x=center[0],
            y=center[1],
            radius=radius,
            vx=sign_x * base_speed_x * factor_x,
            vy=sign_y * base_speed_y * factor_y,
        )

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        """Magnitude of the velocity."""
        return math.hypot(self.vx, self.vy)

    def moved(self) -> Tuple[float, float]:
        """Tentative position after one tick at the current velocity."""
        return (self.x + self.vx, self.y + self.vy)

    def at(self, x: float, y: float) -> 'Ball':
        """Return a copy of the ball at a new position."""
        return replace(self, x=x, y=y)

    def with_velocity(self, vx: float, vy: float) -> 'Ball':
        """Return a copy of the ball with a new velocity."""
        return replace(self, vx=vx, vy=vy)

    def get_bounds(self) -> Tuple[float, float, float, float]:
        """Get ball bounding box (left, top, right, bottom)."""
        return (
            self.x - self.radius,
            self.y - self.radius,
            self.x + self.radius,
            self.y + self.radius,
        )
