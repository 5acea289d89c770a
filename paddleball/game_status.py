"""Session status reported by the PaddleBall host.

The simulation core has no notion of a match ending; the host maps scores
to one of these states.
"""
from enum import Enum


class GameStatus(Enum):
    """Host-level session states.

    States:
        PLAYING: Active gameplay in progress
        PAUSED: Ticks suspended; input still tracked
        GAME_OVER: A player reached the target score
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
