"""Resolution-independent arena geometry.

Every size the simulation uses is derived once per session from the arena
dimensions and the active GameConfig ratios.
"""

from dataclasses import dataclass
from typing import Optional

from paddleball.models import ArenaSize, GameConfig


@dataclass(frozen=True)
class ArenaGeometry:
    """Absolute sizes and speeds for one arena.

    Speeds are in pixels per tick.
    """

    width: float
    height: float
    paddle_length: float
    paddle_thickness: float
    ball_radius: float
    control_zone_height: float
    paddle_gap: float
    min_paddle_length: float
    base_speed_x: float
    base_speed_y: float
    advance_step: float
    max_ball_speed: Optional[float] = None

    @classmethod
    def from_arena(
        cls,
        width: float,
        height: float,
        config: Optional[GameConfig] = None,
    ) -> 'ArenaGeometry':
        """Derive geometry for an arena.

        Args:
            width: Arena width in pixels (must be > 0)
            height: Arena height in pixels (must be > 0)
            config: Ratios and physics constants (defaults to GameConfig())

        Returns:
            ArenaGeometry for the arena

        Raises:
            pydantic.ValidationError: If either dimension is not a positive,
                finite number
            ValueError: If the ball cannot pass between the paddles at
                their home positions
        """
        arena = ArenaSize(width=width, height=height)
        cfg = config or GameConfig()
        w, h = arena.width, arena.height

        base_speed_y = h * cfg.ball_speed_ratio_per_second / cfg.ticks_per_second
        max_speed = None
        if cfg.max_ball_speed_ratio is not None:
            max_speed = h * cfg.max_ball_speed_ratio

        geometry = cls(
            width=w,
            height=h,
            paddle_length=w * cfg.paddle_length_ratio,
            paddle_thickness=h * cfg.paddle_thickness_ratio,
            ball_radius=w * cfg.ball_radius_ratio,
            control_zone_height=h * cfg.control_zone_height_ratio,
            paddle_gap=h * cfg.paddle_gap_ratio,
            min_paddle_length=w * cfg.min_paddle_length_ratio,
            base_speed_x=base_speed_y * arena.aspect_ratio,
            base_speed_y=base_speed_y,
            advance_step=h * cfg.progression.advance_ratio,
            max_ball_speed=max_speed,
        )

        top_face = geometry.top_paddle_home_y + geometry.paddle_thickness
        clear_above = h / 2 - 2 * geometry.ball_radius
        if top_face >= clear_above:
            raise ValueError(
                f'Arena {w:g}x{h:g} leaves no room for the ball between the paddles: '
                f'top paddle face at {top_face:g}, needs to be above {clear_above:g}'
            )
        return geometry

    @property
    def center(self) -> tuple:
        return (self.width / 2, self.height / 2)

    @property
    def top_paddle_home_y(self) -> float:
        """Initial Y of the top paddle, just below the top control zone."""
        return self.control_zone_height + self.paddle_gap

    @property
    def bottom_paddle_home_y(self) -> float:
        """Initial Y of the bottom paddle, just above the bottom control zone."""
        return self.height - self.control_zone_height - self.paddle_gap - self.paddle_thickness

    @property
    def top_paddle_y_range(self) -> tuple:
        """(min, max) Y the top paddle may occupy while advancing.

        It never rises into its control zone and its bottom edge stays at
        least one ball diameter above the centre line.
        """
        low = self.control_zone_height
        high = self.height / 2 - 2 * self.ball_radius - self.paddle_thickness
        return (low, max(low, high))

    @property
    def bottom_paddle_y_range(self) -> tuple:
        """(min, max) Y the bottom paddle may occupy while advancing."""
        high = self.height - self.control_zone_height - self.paddle_thickness
        low = self.height / 2 + 2 * self.ball_radius
        return (min(low, high), high)
