# buglife/core/constants.py
"""
Global constants for the game, including tile size and coordinate system rules.

Coordinate System:
- Origin: Top-left corner of the level.
- X-axis: Increases from left to right (0 to W-1).
- Y-axis: Increases from top to bottom (0 to H-1).
- Pixel space: world coordinates in pixels.
- Tile space: grid coordinates, tile = floor(pixel / TILE_SIZE).

These are defaults only. Runtime code receives them through GameConfig
(see buglife/core/config_loader.py) instead of reading this module.
"""

# === World ===
TILE_SIZE = 64
MAX_TILE_TYPES = 50

# === Validation heuristics ===
CROWDED_SOLID_RATIO = 0.7   # above this the level "may feel cramped"
OPEN_SOLID_RATIO = 0.1      # below this the level is "very open"
MIN_MAP_DIMENSION = 10      # tiles, either axis

# === Assets ===
ASSET_ROOT = "res"

# Food type tag that needs the speed boost mechanic
ENERGY_SEED = "ENERGY_SEED"

# Sentinel returned by LevelData.get_tile for out-of-bounds coordinates
OUT_OF_BOUNDS_TILE = -1
