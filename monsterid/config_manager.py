"""Configuration persistence manager for the monster generator.

This module handles loading and saving of generator settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from PIL import ImageColor

from monsterid.models import CONFIG_FILE, MonsterConfig

logger = logging.getLogger(__name__)


def parse_background(value) -> "tuple[int, int, int, int]":
    """Parse a background from a config value.

    Args:
        value: Either a 3/4 item list of channel values or a color string
            understood by PIL.ImageColor (e.g. "#ff0000", "lightgrey")

    Returns:
        RGBA tuple (0-255 each channel)

    Raises:
        ValueError: If the value cannot be interpreted as a color
    """
    if isinstance(value, str):
        color = ImageColor.getcolor(value, "RGBA")
        return tuple(color)  # type: ignore[return-value]

    channels = [int(c) for c in value]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        raise ValueError(f"Background needs 3 or 4 channels, got {value!r}")
    if not all(0 <= c <= 255 for c in channels):
        raise ValueError(f"Background channels must be in 0-255, got {value!r}")
    return tuple(channels)  # type: ignore[return-value]


class ConfigManager:
    """Handles loading and saving of generator configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.monsterid_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> MonsterConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            MonsterConfig with loaded or default values
        """
        config = MonsterConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # Update config with loaded values (fallback to defaults)
                config.artistic = bool(data.get("artistic", config.artistic))
                config.greyscale = bool(data.get("greyscale", config.greyscale))
                if "background" in data:
                    config.background = parse_background(data["background"])
                config.parts_dir = data.get("parts_dir", config.parts_dir)
                config.cache_parts = bool(data.get("cache_parts", config.cache_parts))
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            config = MonsterConfig()

        return config

    def save(self, config: MonsterConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: MonsterConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            data = asdict(config)
            data["background"] = list(config.background)
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
