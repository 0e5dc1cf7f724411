"""
Generation configuration loader.

Loads and validates floor generation settings from a JSON config file.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from engine.error_handler import ConfigError, log_error
from settings import DEFAULT_FLOOR_HEIGHT, DEFAULT_FLOOR_WIDTH

logger = logging.getLogger("crawlcore.config")

# Config file location
CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"
GENERATION_CONFIG_FILE = CONFIG_DIR / "generation_settings.json"

Position = Tuple[int, int]


@dataclass
class GenerationConfig:
    """
    Settings for building one floor.

    ``entrance`` / ``exit`` default to the middle of the left and right
    edges when left as None.
    """
    width: int = DEFAULT_FLOOR_WIDTH
    height: int = DEFAULT_FLOOR_HEIGHT
    wall_density: float = 0.12
    enemy_budget: int = 3
    chest_budget: int = 1
    min_path_length: int = 3
    entrance: Optional[Position] = None
    exit: Optional[Position] = None
    use_template: bool = False
    floor_number: int = 1

    def validate(self) -> None:
        """Raise ConfigError for settings no floor can be built from."""
        if self.width < 1 or self.height < 1:
            raise ConfigError(f"Floor size must be positive, got {self.width}x{self.height}")
        if self.width * self.height < 2:
            raise ConfigError("Floor needs at least two cells for an entrance and an exit")
        for name in ("enemy_budget", "chest_budget", "min_path_length"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} cannot be negative")
        if self.entrance is not None and self.entrance == self.exit:
            raise ConfigError(f"Entrance and exit must differ, both are {self.entrance}")

    def resolved_entrance(self) -> Position:
        return self.entrance if self.entrance is not None else (0, self.height // 2)

    def resolved_exit(self) -> Position:
        return self.exit if self.exit is not None else (self.width - 1, self.height // 2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        """
        Build a config from plain data. Unknown keys are ignored and missing
        or malformed fields keep their defaults.
        """
        config = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(config, f.name)
            try:
                if f.name in ("entrance", "exit"):
                    value = None if value is None else (int(value[0]), int(value[1]))
                elif isinstance(default, bool):
                    value = bool(value)
                elif isinstance(default, int):
                    value = int(value)
                elif isinstance(default, float):
                    value = float(value)
            except (TypeError, ValueError, IndexError, KeyError):
                logger.warning("Ignoring malformed generation setting %s=%r", f.name, value)
                continue
            setattr(config, f.name, value)

        if not 0.0 <= config.wall_density <= 1.0:
            logger.warning("wall_density %.2f out of range, clamping", config.wall_density)
            config.wall_density = min(1.0, max(0.0, config.wall_density))
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("entrance", "exit"):
            if data[key] is not None:
                data[key] = list(data[key])
        return data

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "GenerationConfig":
        """
        Load configuration from file, using defaults if file doesn't exist.

        Args:
            config_file: Optional path to config file (defaults to standard location)

        Returns:
            GenerationConfig instance
        """
        if config_file is None:
            config_file = GENERATION_CONFIG_FILE

        if not config_file.exists():
            logger.info("Generation config file not found at %s, using defaults.", config_file)
            return cls()

        try:
            with config_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Error loading generation config %s: %s. Using defaults.", config_file, e)
            return cls()

        if not isinstance(data, dict):
            logger.warning("Generation config %s is not a JSON object. Using defaults.", config_file)
            return cls()

        config = cls.from_dict(data)
        try:
            config.validate()
        except ConfigError as e:
            log_error(e, "load_generation_config", "Using default generation settings.")
            return cls()
        return config

    def save(self, config_file: Optional[Path] = None) -> bool:
        """
        Save configuration to file.

        Args:
            config_file: Optional path to config file (defaults to standard location)

        Returns:
            True if saved successfully, False otherwise
        """
        if config_file is None:
            config_file = GENERATION_CONFIG_FILE

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with config_file.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving generation config: %s", e)
            return False


def load_generation_config(config_file: Optional[Path] = None) -> GenerationConfig:
    """
    Convenience function to load generation config.

    Args:
        config_file: Optional path to config file

    Returns:
        GenerationConfig instance
    """
    return GenerationConfig.load(config_file)
