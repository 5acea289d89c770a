"""Authoritative game state.

A GameState is immutable. The engine replaces it wholesale once per tick
(and once per paddle move), so any reference a renderer holds is a
consistent snapshot: a goal and the re-served ball always appear together.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict

from .entities import Ball, Paddle, Zone


@dataclass(frozen=True)
class GameState:
    """Complete simulation state for one session."""

    ball: Ball
    paddle_top: Paddle
    paddle_bottom: Paddle
    score_top: int = 0
    score_bottom: int = 0
    collision_count: int = 0
    progression_level: int = 0
    last_progression_at: int = 0

    def paddle(self, zone: Zone) -> Paddle:
        """Get the paddle belonging to ``zone``."""
        return self.paddle_top if zone is Zone.TOP else self.paddle_bottom

    def with_paddle(self, paddle: Paddle) -> 'GameState':
        """Return a copy with the paddle for ``paddle.zone`` replaced."""
        if paddle.zone is Zone.TOP:
            return replace(self, paddle_top=paddle)
        return replace(self, paddle_bottom=paddle)

    def score(self, zone: Zone) -> int:
        return self.score_top if zone is Zone.TOP else self.score_bottom

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable snapshot."""
        def paddle_dict(p: Paddle) -> Dict[str, Any]:
            return {'x': p.x, 'y': p.y, 'width': p.width, 'height': p.height}

        return {
            'ball': {
                'x': self.ball.x,
                'y': self.ball.y,
                'radius': self.ball.radius,
                'vx': self.ball.vx,
                'vy': self.ball.vy,
            },
            'paddle_top': paddle_dict(self.paddle_top),
            'paddle_bottom': paddle_dict(self.paddle_bottom),
            'score_top': self.score_top,
            'score_bottom': self.score_bottom,
            'collision_count': self.collision_count,
            'progression_level': self.progression_level,
        }
