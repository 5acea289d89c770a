"""
Pydantic configuration models for PaddleBall.

These models are the single, versioned source of every tunable constant:
arena-relative sizing ratios, physics factors and the progression rules.
All of them are frozen and validated on construction, so a GameEngine never
sees a NaN, a negative size or a speed factor that would slow the ball down.
"""

from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

CONFIG_VERSION = "1.0"


class ArenaSize(BaseModel):
    """Arena (screen) dimensions in pixels.

    Attributes:
        width: Arena width, strictly positive and finite
        height: Arena height, strictly positive and finite

    Examples:
        >>> ArenaSize(width=400, height=800).aspect_ratio
        0.5
    """
    width: float = Field(..., gt=0, allow_inf_nan=False)
    height: float = Field(..., gt=0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def __str__(self) -> str:
        return f"ArenaSize({self.width:g}x{self.height:g})"


class ProgressionConfig(BaseModel):
    """Progressive-difficulty rules.

    Every ``collisions_per_step`` paddle hits both paddles shrink by
    ``shrink_factor`` and move ``advance_ratio * arena height`` toward the
    centre line.
    """
    enabled: bool = True
    collisions_per_step: int = Field(default=5, ge=1)
    shrink_factor: float = Field(default=0.98, gt=0, le=1)
    advance_ratio: float = Field(default=0.005, ge=0, lt=0.5)

    model_config = ConfigDict(frozen=True)


class GameConfig(BaseModel):
    """Complete, versioned game configuration.

    Sizes are ratios of the arena so behaviour is resolution independent:
    lengths along X are fractions of the width, thicknesses and zones along Y
    are fractions of the height. Velocities are per tick, derived from
    ``ball_speed_ratio_per_second`` and ``ticks_per_second``.
    """
    version: str = CONFIG_VERSION
    name: str = "Progressive"
    description: str = ""

    # Layout (ratios of the arena)
    paddle_length_ratio: float = Field(default=0.35, gt=0, le=1)
    paddle_thickness_ratio: float = Field(default=0.02, gt=0, lt=0.5)
    ball_radius_ratio: float = Field(default=0.02, gt=0, lt=0.5)
    control_zone_height_ratio: float = Field(default=0.2, ge=0, lt=0.5)
    paddle_gap_ratio: float = Field(default=0.02, ge=0, lt=0.5)
    min_paddle_length_ratio: float = Field(default=0.15, gt=0, le=1)

    # Physics
    ball_speed_ratio_per_second: float = Field(default=0.5, gt=0)
    ticks_per_second: int = Field(default=60, gt=0)
    serve_speed_jitter: Tuple[float, float] = (0.8, 1.2)
    speed_increase_factor: float = Field(default=1.05, gt=1)
    max_bounce_angle_effect: float = Field(default=7.5, ge=0)
    max_bounce_slope: float = Field(default=1.5, gt=0)
    collision_tolerance: float = Field(default=0.1, ge=0)
    max_ball_speed_ratio: Optional[float] = Field(default=None, gt=0)

    progression: ProgressionConfig = Field(default_factory=ProgressionConfig)

    model_config = ConfigDict(frozen=True)

    @field_validator('serve_speed_jitter')
    @classmethod
    def validate_jitter(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """Jitter range must be positive and ordered."""
        low, high = v
        if low <= 0 or high < low:
            raise ValueError(f'serve_speed_jitter must satisfy 0 < low <= high, got {v}')
        return v

    @model_validator(mode='after')
    def validate_min_paddle_length(self) -> 'GameConfig':
        if self.min_paddle_length_ratio > self.paddle_length_ratio:
            raise ValueError(
                'min_paddle_length_ratio must not exceed paddle_length_ratio '
                f'({self.min_paddle_length_ratio} > {self.paddle_length_ratio})'
            )
        return self

    @model_validator(mode='after')
    def validate_paddles_apart(self) -> 'GameConfig':
        """Both home paddles must sit inside their own half of the arena."""
        reach = self.control_zone_height_ratio + self.paddle_gap_ratio + self.paddle_thickness_ratio
        if reach >= 0.5:
            raise ValueError(
                'control_zone_height_ratio + paddle_gap_ratio + paddle_thickness_ratio '
                f'must be below 0.5, got {reach:.3f}'
            )
        return self

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: str) -> 'GameConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            return cls.model_validate_json(f.read())
