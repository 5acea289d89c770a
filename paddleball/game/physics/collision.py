"""Collision detection and response for PaddleBall.

Handles ball-wall, ball-goal-line and ball-paddle collisions.

Paddle collisions use a swept test: the ball's leading edge is compared at
the start of the tick and at its tentative end-of-tick position, so a ball
that passes through a paddle face between two samples still bounces. The
test is still discrete: horizontal overlap is only checked at the tentative
sample, and a tick whose tentative position is past a goal line scores before
paddles are tested, so a fast enough ball can slip past a paddle
(see GameConfig.max_ball_speed_ratio).
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from paddleball.models import GameConfig
from ..entities.paddle import Zone

if TYPE_CHECKING:
    from ..entities.ball import Ball
    from ..entities.paddle import Paddle

_DEFAULT_CONFIG = GameConfig()


@dataclass(frozen=True)
class CollisionResult:
    """Outcome of testing the ball against one paddle.

    When ``hit`` is False, position and velocity are the inputs unchanged.
    """

    hit: bool
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    face: Optional[str] = None  # "flat", "left" or "right"


def check_scoring(ball: 'Ball', tentative_y: float, screen_height: float) -> Optional[Zone]:
    """Check whether the ball's tentative position crosses a goal line.

    Args:
        ball: Ball being moved
        tentative_y: Ball centre Y after this tick
        screen_height: Arena height

    Returns:
        Zone of the player who scored, or None
    """
    if tentative_y - ball.radius < 0:
        return Zone.BOTTOM
    if tentative_y + ball.radius > screen_height:
        return Zone.TOP
    return None


def check_side_walls(
    ball: 'Ball',
    tentative_x: float,
    vx: float,
    screen_width: float,
    tolerance: float = _DEFAULT_CONFIG.collision_tolerance,
) -> Tuple[float, float]:
    """Reflect the ball off the left and right walls.

    Args:
        ball: Ball being moved
        tentative_x: Ball centre X after this tick
        vx: Current X velocity
        screen_width: Arena width
        tolerance: Extra clearance from the wall after correction

    Returns:
        Tuple of (corrected x, corrected vx)
    """
    if tentative_x - ball.radius < 0:
        return ball.radius + tolerance, abs(vx)
    if tentative_x + ball.radius > screen_width:
        return screen_width - ball.radius - tolerance, -abs(vx)
    return tentative_x, vx


def _cap_speed(vx: float, vy: float, max_speed: Optional[float]) -> Tuple[float, float]:
    if max_speed is None:
        return vx, vy
    speed = math.hypot(vx, vy)
    if speed <= max_speed or speed == 0:
        return vx, vy
    scale = max_speed / speed
    return vx * scale, vy * scale


def resolve_paddle_collision(
    ball: 'Ball',
    paddle: 'Paddle',
    prev_pos: Tuple[float, float],
    tentative_pos: Tuple[float, float],
    velocity: Tuple[float, float],
    config: Optional[GameConfig] = None,
    max_speed: Optional[float] = None,
) -> CollisionResult:
    """Resolve a possible collision between the ball and one paddle.

    Two phases, mutually exclusive:

    1. Flat face: only when moving toward the paddle's impact face. The
       leading edge must cross the face between ``prev_pos`` and
       ``tentative_pos`` while overlapping the paddle horizontally. Y velocity
       inverts, X velocity is bent by the hit offset from the paddle centre.
    2. Side edges: the leading edge crosses the paddle's left or right edge
       while overlapping it vertically. X velocity inverts.

    Any hit multiplies both velocity components by the speed increase
    factor, then applies the optional ``max_speed`` cap.

    Args:
        ball: Ball (only its radius is used)
        paddle: Paddle to test against
        prev_pos: Ball centre at the start of the tick
        tentative_pos: Ball centre at the end of the tick, before correction
        velocity: Ball velocity for this tick (after wall correction)
        config: Physics constants (defaults to GameConfig())
        max_speed: Optional cap on the post-hit speed

    Returns:
        CollisionResult with corrected position and velocity
    """
    cfg = config or _DEFAULT_CONFIG
    tol = cfg.collision_tolerance
    r = ball.radius
    prev_x, prev_y = prev_pos
    tent_x, tent_y = tentative_pos
    vx, vy = velocity

    is_top = paddle.zone is Zone.TOP
    moving_toward_face = (is_top and vy < 0) or (not is_top and vy > 0)

    if moving_toward_face:
        face_y = paddle.impact_y
        if is_top:
            lead_tent = tent_y - r
            lead_prev = prev_y - r
            crossed = lead_tent < face_y + tol and lead_prev >= face_y - tol
        else:
            lead_tent = tent_y + r
            lead_prev = prev_y + r
            crossed = lead_tent > face_y - tol and lead_prev <= face_y + tol

        overlaps_x = tent_x + r > paddle.left and tent_x - r < paddle.right

        if crossed and overlaps_x:
            half_width = paddle.width / 2
            offset = (tent_x - paddle.center_x) / half_width
            offset = max(-1.0, min(1.0, offset))

            limit = abs(vy) * cfg.max_bounce_slope
            new_vx = vx + offset * cfg.max_bounce_angle_effect
            new_vx = max(-limit, min(limit, new_vx))
            new_vy = -vy

            if is_top:
                new_y = face_y + r + tol
            else:
                new_y = face_y - r - tol

            new_vx, new_vy = _cap_speed(
                new_vx * cfg.speed_increase_factor,
                new_vy * cfg.speed_increase_factor,
                max_speed,
            )
            return CollisionResult(True, (tent_x, new_y), (new_vx, new_vy), 'flat')

    hits_left = vx > 0 and tent_x + r > paddle.left and prev_x + r <= paddle.left + tol
    hits_right = vx < 0 and tent_x - r < paddle.right and prev_x - r >= paddle.right - tol

    if hits_left or hits_right:
        overlaps_y = tent_y + r > paddle.top and tent_y - r < paddle.bottom
        if overlaps_y:
            if hits_left:
                new_x = paddle.left - r - tol
                face = 'left'
            else:
                new_x = paddle.right + r + tol
                face = 'right'

            new_vx, new_vy = _cap_speed(
                -vx * cfg.speed_increase_factor,
                vy * cfg.speed_increase_factor,
                max_speed,
            )
            return CollisionResult(True, (new_x, tent_y), (new_vx, new_vy), face)

    return CollisionResult(False, (tent_x, tent_y), (vx, vy))
