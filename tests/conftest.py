"""Shared pytest fixtures for PaddleBall tests."""
import copy
import os
import random

# Headless pygame for host and input-source tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from paddleball import logging as pb_logging
from paddleball.game import Ball, GameEngine, GameState, Zone
from paddleball.models import GameConfig

ARENA_WIDTH = 400.0
ARENA_HEIGHT = 800.0


@pytest.fixture
def config():
    """Default (progressive) configuration."""
    return GameConfig()


@pytest.fixture
def rng():
    """Seeded random source so serves are reproducible."""
    return random.Random(1234)


@pytest.fixture
def engine(config, rng):
    """Engine on a 400x800 arena.

    Geometry: paddles 140 wide (x 130..270), 16 thick, ball radius 8,
    control zones 160 high, top paddle y=176 (face at 192),
    bottom paddle y=608 (face at 608).
    """
    return GameEngine(ARENA_WIDTH, ARENA_HEIGHT, config, rng=rng)


@pytest.fixture
def place_ball(engine):
    """Put a ball with the given position/velocity into the engine's state."""
    def _place(x, y, vx, vy, radius=None, **state_fields) -> GameState:
        state = engine.snapshot()
        ball = Ball(
            x=x, y=y,
            radius=engine.geometry.ball_radius if radius is None else radius,
            vx=vx, vy=vy,
        )
        fields = {
            'ball': ball,
            'paddle_top': state.paddle_top,
            'paddle_bottom': state.paddle_bottom,
            'score_top': state.score_top,
            'score_bottom': state.score_bottom,
            'collision_count': state.collision_count,
            'progression_level': state.progression_level,
            'last_progression_at': state.last_progression_at,
        }
        fields.update(state_fields)
        new_state = GameState(**fields)
        engine.restore(new_state)
        return new_state
    return _place


@pytest.fixture(autouse=True)
def isolated_logging():
    """Keep logging configuration and sinks from leaking between tests."""
    saved = copy.deepcopy(pb_logging._config)
    pb_logging.disable_logging()
    yield
    pb_logging.close_all_sinks()
    pb_logging._config.clear()
    pb_logging._config.update(saved)


@pytest.fixture
def assert_paddles_inside():
    """Check both paddles lie within the arena width."""
    def _check(state: GameState, width: float = ARENA_WIDTH) -> None:
        for zone in (Zone.TOP, Zone.BOTTOM):
            paddle = state.paddle(zone)
            assert paddle.x >= 0
            assert paddle.x + paddle.width <= width + 1e-9
    return _check
