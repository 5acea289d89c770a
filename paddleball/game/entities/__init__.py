"""PaddleBall game entities."""

from .ball import Ball
from .paddle import Paddle, Zone

__all__ = [
    'Ball',
    'Paddle',
    'Zone',
]
