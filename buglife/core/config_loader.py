"""Configuration loader for the tile world and level validator."""

import json
import logging
import os
from dataclasses import dataclass, fields

from buglife.core.constants import (
    ASSET_ROOT,
    CROWDED_SOLID_RATIO,
    MAX_TILE_TYPES,
    MIN_MAP_DIMENSION,
    OPEN_SOLID_RATIO,
    TILE_SIZE,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/game_config.json"


@dataclass(frozen=True)
class GameConfig:
    """Immutable settings shared by the registry, world and validator."""
    tile_size: int = TILE_SIZE
    max_tile_types: int = MAX_TILE_TYPES

    # Map quality heuristics
    crowded_solid_ratio: float = CROWDED_SOLID_RATIO
    open_solid_ratio: float = OPEN_SOLID_RATIO
    min_map_dimension: int = MIN_MAP_DIMENSION

    # Root directory for tile sprite paths
    asset_root: str = ASSET_ROOT

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")


def _coerce(value, default):
    """Return value converted to the type of default, or None if it doesn't fit."""
    # bool is an int subclass; keep it out of numeric fields
    if isinstance(value, bool) and not isinstance(default, bool):
        return None
    if isinstance(default, float) and isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, type(default)):
        return value
    return None


def load_game_config(config_path: str = DEFAULT_CONFIG_PATH) -> GameConfig:
    """
    Load GameConfig from a JSON file.

    The file holds a top-level "game_config" object. Unknown keys and values
    of the wrong type are ignored; a missing or unreadable file yields the
    defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        GameConfig: Loaded configuration
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return GameConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return GameConfig()

    config_data = data.get('game_config', {}) if isinstance(data, dict) else {}
    if not isinstance(config_data, dict):
        logger.warning("Config section game_config is not an object, using defaults")
        config_data = {}
    defaults = GameConfig()
    allowed = {f.name: getattr(defaults, f.name) for f in fields(GameConfig)}

    filtered = {}
    for key, value in config_data.items():
        if key not in allowed:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        coerced = _coerce(value, allowed[key])
        if coerced is None:
            logger.warning("Config key %s has invalid value %r, using default", key, value)
            continue
        filtered[key] = coerced

    try:
        return GameConfig(**filtered)
    except ValueError as e:
        logger.warning("Invalid config: %s, using defaults", e)
        return GameConfig()
