"""The live tile world used by gameplay movement code.

World owns the current TileGrid and answers collision queries against it.
Loading a level builds a complete new grid first and then swaps it in with
a single assignment, so a query never sees a half-loaded level.
"""

import logging
from typing import List, Optional, Tuple

from buglife.core.config_loader import GameConfig
from buglife.tiles.tile_collision import TileCollision
from buglife.tiles.tile_grid import TileGrid
from buglife.tiles.tile_parser import TileParser
from buglife.tiles.tile_registry import TileRegistry

logger = logging.getLogger(__name__)


class World:
    """Current level grid plus collision, built by the composition root."""

    def __init__(self, registry: TileRegistry, grid: TileGrid,
                 config: Optional[GameConfig] = None):
        self.registry = registry
        self.config = config if config is not None else registry.config
        self.collision = TileCollision(registry, self.config)
        self._grid = grid

    @classmethod
    def from_file(cls, path: str, registry: TileRegistry,
                  config: Optional[GameConfig] = None) -> "World":
        return cls(registry, TileParser().load_file(path), config)

    @property
    def grid(self) -> TileGrid:
        return self._grid

    @property
    def tile_size(self) -> int:
        return self.config.tile_size

    def get_map_width(self) -> int:
        return self._grid.width

    def get_map_height(self) -> int:
        return self._grid.height

    def load_level(self, path: str) -> TileGrid:
        """Parse a level file and make it the current grid.

        On MalformedLevelFile the current grid stays in place.
        """
        grid = TileParser().load_file(path)
        self.set_grid(grid)
        logger.info("Loaded level %s (%dx%d)", path, grid.width, grid.height)
        return grid

    def set_grid(self, grid: TileGrid):
        self._grid = grid

    # === Lookup ===

    def tile_at(self, col: int, row: int) -> int:
        return self._grid.tile_at(col, row)

    def visible_tile_range(self, camera_x: float, camera_y: float,
                           view_width: int, view_height: int) -> Tuple[int, int, int, int]:
        return self._grid.visible_tile_range(camera_x, camera_y, view_width, view_height,
                                             self.tile_size)

    def find_tiles(self, tile_id: int) -> List[Tuple[int, int]]:
        return self._grid.find_tiles(tile_id)

    # === Collision ===

    def is_solid_at_pixel(self, x: float, y: float) -> bool:
        return self.collision.is_solid_at_pixel(self._grid, x, y)

    def check_box_collision(self, x: int, y: int, width: int, height: int) -> bool:
        return self.collision.check_box_collision(self._grid, x, y, width, height)

    def check_box_collision_centered(self, center_x: float, center_y: float,
                                     width: int, height: int) -> bool:
        return self.collision.check_box_collision_centered(self._grid, center_x, center_y,
                                                           width, height)

    def is_slow_at_pixel(self, x: float, y: float) -> bool:
        return self.collision.is_slow_at_pixel(self._grid, x, y)

    def is_shadow_at_pixel(self, x: float, y: float) -> bool:
        return self.collision.is_shadow_at_pixel(self._grid, x, y)
