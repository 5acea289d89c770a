"""PaddleBall - Two-player ball and paddle game.

Host layer around the simulation core:
- Fixed-timestep driver: variable frame times are accumulated and spent in
  whole engine ticks, with a cap on catch-up ticks after a stall
- Pointer input: each player drags inside their own control zone
- Match end: first to the target score (0 plays forever)
- Rendering of engine snapshots with pygame
"""

import random
from typing import Iterable, Optional

import pygame

from paddleball import config as host_config
from paddleball.config_loader import DEFAULT_PRESET, ConfigLoader
from paddleball.game import GameEngine, GameState, Zone
from paddleball.game_status import GameStatus
from paddleball.input import PointerEvent, PointerMapper
from paddleball.logging import emit_record, get_logger
from paddleball.models import GameConfig

log = get_logger('host')


class PaddleBallMode:
    """Playable PaddleBall session."""

    NAME = "PaddleBall"
    DESCRIPTION = "Two players, one ball, shrinking paddles."
    VERSION = "1.0.0"

    def __init__(
        self,
        width: float = host_config.SCREEN_WIDTH,
        height: float = host_config.SCREEN_HEIGHT,
        preset: str = DEFAULT_PRESET,
        config: Optional[GameConfig] = None,
        target_score: int = host_config.TARGET_SCORE,
        max_catchup_steps: int = host_config.MAX_CATCHUP_STEPS,
        rng: Optional[random.Random] = None,
    ):
        """Initialize a session.

        Args:
            width: Arena width in pixels
            height: Arena height in pixels
            preset: Preset name, used when ``config`` is None
            config: Explicit configuration (overrides ``preset``)
            target_score: Score that ends the match (0 = endless)
            max_catchup_steps: Max ticks run per update() after a stall
            rng: Random source for serves
        """
        self._config = config or ConfigLoader().load_preset(preset)
        self._engine = GameEngine(width, height, self._config, rng=rng)
        self._mapper = PointerMapper(
            on_move=self._engine.move_paddle,
            control_zone_height=self._engine.geometry.control_zone_height,
        )
        self._target_score = max(0, target_score)
        self._max_catchup_steps = max(1, max_catchup_steps)
        self._step = 1.0 / self._config.ticks_per_second
        self._accumulator = 0.0
        self._status = GameStatus.PLAYING
        self._winner: Optional[Zone] = None

        self._score_font: Optional[pygame.font.Font] = None
        self._message_font: Optional[pygame.font.Font] = None

        log.info("New %s session (preset '%s', target %s)",
                 self.NAME, self._config.name, self._target_score or 'endless')

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def mapper(self) -> PointerMapper:
        return self._mapper

    @property
    def state(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Optional[Zone]:
        return self._winner

    def snapshot(self) -> GameState:
        return self._engine.snapshot()

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def toggle_pause(self) -> None:
        if self._status is GameStatus.PLAYING:
            self._status = GameStatus.PAUSED
        elif self._status is GameStatus.PAUSED:
            self._status = GameStatus.PLAYING
            self._accumulator = 0.0

    def reset(self) -> None:
        """Restart the match with fresh scores."""
        self._engine.reset()
        self._mapper.clear()
        self._accumulator = 0.0
        self._status = GameStatus.PLAYING
        self._winner = None

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def handle_input(self, events: Iterable[PointerEvent]) -> None:
        """Route pointer events to the paddles.

        Paddles follow drags even while paused; nothing moves after game over.
        """
        if self._status is GameStatus.GAME_OVER:
            return
        self._mapper.handle_events(events, self._engine.geometry.height)

    def update(self, dt: float) -> int:
        """Advance the simulation by ``dt`` seconds of wall time.

        Args:
            dt: Seconds since the previous frame

        Returns:
            Number of engine ticks run
        """
        if self._status is not GameStatus.PLAYING or dt <= 0:
            return 0

        self._accumulator += dt
        ticks = 0
        while self._accumulator >= self._step and ticks < self._max_catchup_steps:
            state = self._engine.tick()
            self._accumulator -= self._step
            ticks += 1
            if self._check_match_over(state):
                break

        if ticks == self._max_catchup_steps and self._accumulator >= self._step:
            log.debug("Dropping %.3fs of simulation after a stall", self._accumulator)
            self._accumulator = 0.0

        return ticks

    def _check_match_over(self, state: GameState) -> bool:
        if not self._target_score:
            return False
        winner = next((zone for zone in (Zone.TOP, Zone.BOTTOM)
                       if state.score(zone) >= self._target_score), None)
        if winner is None:
            return False

        self._winner = winner
        self._status = GameStatus.GAME_OVER
        self._accumulator = 0.0
        log.info("Match over: %s wins %d - %d",
                 self._winner.value, state.score_top, state.score_bottom)
        emit_record('match', {
            'type': 'match_over',
            'winner': self._winner.value,
            'score_top': state.score_top,
            'score_bottom': state.score_bottom,
            'collision_count': state.collision_count,
            'progression_level': state.progression_level,
        })
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _fonts(self):
        if self._score_font is None:
            pygame.font.init()
            self._score_font = pygame.font.Font(None, host_config.SCORE_FONT_SIZE)
            self._message_font = pygame.font.Font(None, host_config.MESSAGE_FONT_SIZE)
        return self._score_font, self._message_font

    def _draw_control_zones(self, surface: pygame.Surface) -> None:
        geo = self._engine.geometry
        zone_h = int(geo.control_zone_height)
        width = int(geo.width)
        overlay = pygame.Surface((width, zone_h), pygame.SRCALPHA)

        for top in (0, int(geo.height) - zone_h):
            overlay.fill(host_config.CONTROL_ZONE_FILL)
            pygame.draw.rect(overlay, host_config.CONTROL_ZONE_OUTLINE,
                             overlay.get_rect(), host_config.CONTROL_ZONE_OUTLINE_WIDTH)
            surface.blit(overlay, (0, top))

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current snapshot."""
        state = self._engine.snapshot()
        surface.fill(host_config.BACKGROUND_COLOR)
        self._draw_control_zones(surface)

        ball = state.ball
        pygame.draw.circle(surface, host_config.FOREGROUND_COLOR,
                           (int(ball.x), int(ball.y)), max(1, int(ball.radius)))
        for paddle in (state.paddle_top, state.paddle_bottom):
            pygame.draw.rect(surface, host_config.FOREGROUND_COLOR,
                             pygame.Rect(*(int(v) for v in paddle.rect)))

        score_font, message_font = self._fonts()
        center = (surface.get_width() // 2, surface.get_height() // 2)
        score = score_font.render(f"{state.score_top} - {state.score_bottom}",
                                  True, host_config.SCORE_COLOR)
        surface.blit(score, score.get_rect(center=center))

        message = None
        if self._status is GameStatus.PAUSED:
            message = "PAUSED"
        elif self._status is GameStatus.GAME_OVER and self._winner is not None:
            message = f"{self._winner.value.upper()} WINS - press R"
        if message:
            text = message_font.render(message, True, host_config.FOREGROUND_COLOR)
            surface.blit(text, text.get_rect(center=(center[0], center[1] + score.get_height())))
