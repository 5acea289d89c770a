"""PaddleBall physics and collision detection."""

from .collision import (
    CollisionResult,
    check_scoring,
    check_side_walls,
    resolve_paddle_collision,
)

__all__ = [
    'CollisionResult',
    'check_scoring',
    'check_side_walls',
    'resolve_paddle_collision',
]
