"""
PaddleBall - Host configuration.

Window and session settings for the standalone pygame host, loaded from the
environment (or a .env file next to the package) with sensible defaults.
Physics and layout constants live in the preset YAML files instead.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_str(key: str, default: str) -> str:
    """Get string from environment."""
    return os.getenv(key, default)


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 480)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 854)
FULLSCREEN = _get_bool('FULLSCREEN', False)
FPS = _get_int('FPS', 60)

# Session
PRESET = _get_str('PRESET', 'progressive')
TARGET_SCORE = _get_int('TARGET_SCORE', 0)  # 0 = endless
MAX_CATCHUP_STEPS = _get_int('MAX_CATCHUP_STEPS', 5)
RECORD_MATCH = _get_bool('RECORD_MATCH', False)

# Colors
BACKGROUND_COLOR = (0, 0, 0)
FOREGROUND_COLOR = (255, 255, 255)
CONTROL_ZONE_FILL = (255, 255, 255, 38)      # white at ~15% alpha
CONTROL_ZONE_OUTLINE = (255, 255, 255, 77)   # white at ~30% alpha
SCORE_COLOR = (179, 179, 179)

# UI
SCORE_FONT_SIZE = 72
MESSAGE_FONT_SIZE = 36
CONTROL_ZONE_OUTLINE_WIDTH = 2
