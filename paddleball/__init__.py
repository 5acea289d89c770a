"""
PaddleBall - two-player ball-and-paddle game.

Provides:
- game: simulation core (engine, entities, collision physics, geometry)
- input: pointer events, sources and the pointer-to-paddle mapper
- models: versioned pydantic configuration
- config_loader: YAML presets
- logging: per-module logging and structured match records
- game_mode / main: pygame host
"""

__version__ = "1.0.0"
