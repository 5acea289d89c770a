"""
Preset Loader - YAML configuration loading with Pydantic validation.

Discovers preset YAML files and validates them into GameConfig models.

Examples:
    >>> loader = ConfigLoader()
    >>> config = loader.load_preset("progressive")
    >>> config.name
    'Progressive'
    >>> loader.list_presets()
    ['classic', 'progressive']
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from paddleball.logging import get_logger
from paddleball.models import GameConfig

log = get_logger('config')

PRESETS_DIR = Path(__file__).parent / 'presets'
DEFAULT_PRESET = 'progressive'


class ConfigLoader:
    """Loads and validates game presets from YAML files.

    Attributes:
        presets_dir: Path to the directory containing preset YAML files
    """

    def __init__(self, presets_dir: Optional[Path] = None):
        """Initialize the preset loader.

        Args:
            presets_dir: Optional custom path to presets directory.
                Defaults to the presets shipped with the package.
        """
        self.presets_dir = Path(presets_dir) if presets_dir is not None else PRESETS_DIR

    def load_preset(self, preset_id: str) -> GameConfig:
        """Load and validate a preset.

        Args:
            preset_id: The ID of the preset to load (without .yaml extension)

        Returns:
            Validated GameConfig instance

        Raises:
            FileNotFoundError: If the preset YAML file doesn't exist
            ValueError: If the YAML content does not describe a valid config
            yaml.YAMLError: If the YAML syntax is malformed
        """
        yaml_path = self.presets_dir / f"{preset_id}.yaml"

        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Preset '{preset_id}' not found. "
                f"Expected file: {yaml_path}"
            )

        return self.load_file(yaml_path)

    def load_file(self, yaml_path: Path) -> GameConfig:
        """Load and validate a GameConfig from an arbitrary YAML file."""
        yaml_path = Path(yaml_path)
        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Failed to parse YAML file '{yaml_path}': {e}"
            )

        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Invalid preset in '{yaml_path}': expected a mapping, "
                f"got {type(config_dict).__name__}"
            )

        try:
            config = GameConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(
                f"Invalid game configuration in '{yaml_path}':\n{e}"
            ) from e

        log.debug("Loaded preset '%s' (version %s) from %s", config.name, config.version, yaml_path)
        return config

    def list_presets(self) -> List[str]:
        """List all available preset IDs, sorted alphabetically."""
        if not self.presets_dir.exists():
            return []
        return sorted(f.stem for f in self.presets_dir.glob("*.yaml"))

    def preset_exists(self, preset_id: str) -> bool:
        """Check if a preset exists."""
        return (self.presets_dir / f"{preset_id}.yaml").exists()


def load_preset(preset_id: str = DEFAULT_PRESET) -> GameConfig:
    """Load one of the bundled presets."""
    return ConfigLoader().load_preset(preset_id)
