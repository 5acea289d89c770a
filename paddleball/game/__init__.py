"""PaddleBall simulation core."""

from .engine import GameEngine
from .entities import Ball, Paddle, Zone
from .geometry import ArenaGeometry
from .state import GameState

__all__ = [
    'ArenaGeometry',
    'Ball',
    'GameEngine',
    'GameState',
    'Paddle',
    'Zone',
]
