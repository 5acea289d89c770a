"""Simulation engine.

Owns the authoritative GameState and advances it one fixed step per
``tick()``. Velocities are per tick; the engine never reads a clock, so the
host decides how ticks are scheduled.

Tick order:
    1. tentative position = position + velocity
    2. goal check (a goal re-serves the ball and ends the tick)
    3. side-wall reflection
    4. paddle collision, TOP first, BOTTOM only if TOP missed
    5. progression step every N paddle hits (paddles advance no closer
       than the ball in front of them)
    6. commit the new state
"""

import random
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from paddleball.logging import emit_record, get_logger
from paddleball.models import GameConfig

from .entities import Ball, Paddle, Zone
from .geometry import ArenaGeometry
from .physics import check_scoring, check_side_walls, resolve_paddle_collision
from .state import GameState

log = get_logger('engine')


class GameEngine:
    """Two-paddle ball simulation.

    ``tick()``, ``move_paddle()``, ``snapshot()``, ``restore()`` and
    ``reset()`` are each atomic with respect to one another, so paddle moves
    delivered from an input thread can never observe or produce a half-applied
    tick.
    """

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the engine and serve the first ball.

        Args:
            width: Arena width in pixels
            height: Arena height in pixels
            config: Game configuration (defaults to GameConfig())
            rng: Random source for serves (a fresh Random if None)

        Raises:
            pydantic.ValidationError: If the arena dimensions are not
                positive, finite numbers
            ValueError: If the ball cannot pass between the paddles
        """
        self._config = config or GameConfig()
        self._geometry = ArenaGeometry.from_arena(width, height, self._config)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._tick_count = 0
        self._state = self._create_initial_state()

        log.info(
            "Engine ready: arena %.0fx%.0f, preset '%s', paddle %.1f, ball r=%.1f",
            self._geometry.width, self._geometry.height, self._config.name,
            self._geometry.paddle_length, self._geometry.ball_radius,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def geometry(self) -> ArenaGeometry:
        return self._geometry

    @property
    def tick_count(self) -> int:
        """Number of ticks advanced since construction or reset."""
        return self._tick_count

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def _serve_ball(self) -> Ball:
        geo = self._geometry
        return Ball.serve(
            center=geo.center,
            radius=geo.ball_radius,
            base_speed_x=geo.base_speed_x,
            base_speed_y=geo.base_speed_y,
            jitter=self._config.serve_speed_jitter,
            rng=self._rng,
        )

    def _create_initial_state(self) -> GameState:
        geo = self._geometry
        x = (geo.width - geo.paddle_length) / 2
        return GameState(
            ball=self._serve_ball(),
            paddle_top=Paddle(
                zone=Zone.TOP,
                x=x,
                y=geo.top_paddle_home_y,
                width=geo.paddle_length,
                height=geo.paddle_thickness,
            ),
            paddle_bottom=Paddle(
                zone=Zone.BOTTOM,
                x=x,
                y=geo.bottom_paddle_home_y,
                width=geo.paddle_length,
                height=geo.paddle_thickness,
            ),
        )

    def snapshot(self) -> GameState:
        """Get the current state.

        GameState is immutable, so the returned object is a consistent copy
        that later ticks will not modify.
        """
        with self._lock:
            return self._state

    def restore(self, state: GameState) -> None:
        """Replace the authoritative state (e.g. to resume a saved session).

        Paddles outside the arena are clamped back inside it.
        """
        contained = self._contain_paddles(state)
        with self._lock:
            self._state = contained
        if contained != state:
            log.warning("Restored paddles clamped into the %.0f px arena", self._geometry.width)

    def _contain_paddles(self, state: GameState) -> GameState:
        arena_width = self._geometry.width
        for zone in (Zone.TOP, Zone.BOTTOM):
            paddle = state.paddle(zone)
            if paddle.width > arena_width:
                paddle = replace(paddle, width=arena_width)
            state = state.with_paddle(paddle.moved_by(0, arena_width))
        return state

    def reset(self) -> None:
        """Start a new session: scores, hits and paddles back to their initial values."""
        with self._lock:
            self._state = self._create_initial_state()
            self._tick_count = 0
        log.info("Session reset")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def move_paddle(self, zone: Zone, delta_x: float) -> Paddle:
        """Slide a paddle horizontally, clamped to the arena.

        Applied immediately, independent of the tick cadence.

        Args:
            zone: Which player's paddle to move
            delta_x: Signed horizontal offset in pixels

        Returns:
            The paddle after the move
        """
        with self._lock:
            paddle = self._state.paddle(zone).moved_by(delta_x, self._geometry.width)
            self._state = self._state.with_paddle(paddle)
        return paddle

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> GameState:
        """Advance the simulation by one fixed step.

        Logging and match records for the tick are written after the lock
        is released.

        Returns:
            The new state
        """
        with self._lock:
            state, records = self._step(self._state)
            self._state = state
            self._tick_count += 1
        self._report(records)
        return state

    def _step(self, state: GameState) -> Tuple[GameState, List[Dict[str, Any]]]:
        geo = self._geometry
        cfg = self._config
        ball = state.ball
        records: List[Dict[str, Any]] = []

        prev_pos = ball.position
        tent_x, tent_y = ball.moved()
        vx, vy = ball.velocity

        scorer = check_scoring(ball, tent_y, geo.height)
        if scorer is not None:
            new_state = self._score_goal(state, scorer)
            records.append({
                'type': 'goal',
                'tick': self._tick_count,
                'scorer': scorer.value,
                'score_top': new_state.score_top,
                'score_bottom': new_state.score_bottom,
                'collision_count': new_state.collision_count,
            })
            return new_state, records

        tent_x, vx = check_side_walls(ball, tent_x, vx, geo.width, cfg.collision_tolerance)

        result = None
        for paddle in (state.paddle_top, state.paddle_bottom):
            result = resolve_paddle_collision(
                ball, paddle, prev_pos, (tent_x, tent_y), (vx, vy),
                config=cfg, max_speed=geo.max_ball_speed,
            )
            if result.hit:
                records.append({'type': 'hit', 'zone': paddle.zone.value, 'face': result.face})
                break

        (new_x, new_y), (new_vx, new_vy) = result.position, result.velocity
        new_state = replace(
            state,
            ball=replace(ball, x=new_x, y=new_y, vx=new_vx, vy=new_vy),
        )

        if result.hit:
            new_state = replace(new_state, collision_count=state.collision_count + 1)
            progressed = self._maybe_progress(new_state)
            if progressed is not new_state:
                records.append({
                    'type': 'progression',
                    'tick': self._tick_count,
                    'level': progressed.progression_level,
                    'collision_count': progressed.collision_count,
                    'paddle_width': progressed.paddle_top.width,
                    'paddle_top_y': progressed.paddle_top.y,
                    'paddle_bottom_y': progressed.paddle_bottom.y,
                })
            new_state = progressed

        return new_state, records

    def _report(self, records: List[Dict[str, Any]]) -> None:
        for record in records:
            kind = record['type']
            if kind == 'hit':
                log.trace("Paddle hit: %s %s", record['zone'], record['face'])
                continue
            if kind == 'goal':
                log.info(
                    "Goal for %s: %d - %d",
                    record['scorer'], record['score_top'], record['score_bottom'],
                )
            else:
                log.debug(
                    "Progression step %d after %d hits: paddle width %.1f",
                    record['level'], record['collision_count'], record['paddle_width'],
                )
            emit_record('match', record)

    def _score_goal(self, state: GameState, scorer: Zone) -> GameState:
        if scorer is Zone.TOP:
            return replace(state, score_top=state.score_top + 1, ball=self._serve_ball())
        return replace(state, score_bottom=state.score_bottom + 1, ball=self._serve_ball())

    def _advance_range(
        self, paddle: Paddle, ball: Ball, y_range: Tuple[float, float],
    ) -> Tuple[float, float]:
        """Narrow a paddle's advance range so it stops short of a ball in front of it."""
        low, high = y_range
        clearance = ball.radius + self._config.collision_tolerance
        if paddle.zone is Zone.TOP and ball.y >= paddle.bottom:
            high = min(high, ball.y - clearance - paddle.height)
        elif paddle.zone is Zone.BOTTOM and ball.y <= paddle.top:
            low = max(low, ball.y + clearance)
        return low, high

    def _maybe_progress(self, state: GameState) -> GameState:
        progression = self._config.progression
        if not progression.enabled:
            return state
        if state.collision_count - state.last_progression_at < progression.collisions_per_step:
            return state

        geo = self._geometry
        ball = state.ball
        top = state.paddle_top.shrunk(progression.shrink_factor, geo.min_paddle_length, geo.width)
        top = top.advanced(geo.advance_step, self._advance_range(top, ball, geo.top_paddle_y_range))
        bottom = state.paddle_bottom.shrunk(progression.shrink_factor, geo.min_paddle_length, geo.width)
        bottom = bottom.advanced(
            geo.advance_step, self._advance_range(bottom, ball, geo.bottom_paddle_y_range),
        )

        return replace(
            state,
            paddle_top=top,
            paddle_bottom=bottom,
            progression_level=state.progression_level + 1,
            last_progression_at=state.collision_count,
        )
