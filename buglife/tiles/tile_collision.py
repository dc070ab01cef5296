import logging
from typing import List, Optional, Tuple

from buglife.core.config_loader import GameConfig
from .tile_grid import TileGrid
from .tile_registry import TileRegistry

logger = logging.getLogger(__name__)


class TileCollision:
    """Point and box collision queries against a TileGrid.

    Out-of-grid policy: any pixel whose tile lies outside the grid, on any
    side, counts as solid. Tile ids missing from the registry also count as
    solid.
    """

    def __init__(self, registry: TileRegistry, config: Optional[GameConfig] = None):
        self.registry = registry
        config = config if config is not None else registry.config
        self.tile_size = config.tile_size

    def to_tile(self, x: float, y: float) -> Tuple[int, int]:
        """Convert pixel coordinates to tile coordinates (floor division)."""
        return int(x // self.tile_size), int(y // self.tile_size)

    def tile_at_pixel(self, grid: TileGrid, x: float, y: float) -> Optional[int]:
        """Tile id under a pixel, or None outside the grid."""
        col, row = self.to_tile(x, y)
        if not grid.in_bounds(col, row):
            return None
        return grid.tile_at(col, row)

    def is_solid_at_pixel(self, grid: TileGrid, x: float, y: float) -> bool:
        """True if the pixel lies in a solid tile or outside the grid."""
        if x < 0 or y < 0:
            return True
        tile_id = self.tile_at_pixel(grid, x, y)
        if tile_id is None:
            return True
        tile_data = self.registry.get_tile(tile_id)
        if tile_data is None:
            logger.debug("Unknown tile id %s at pixel (%s, %s), treating as solid", tile_id, x, y)
            return True
        return tile_data.is_solid

    @staticmethod
    def sample_points(x: int, y: int, width: int, height: int) -> List[Tuple[int, int]]:
        """The five points checked for a box: four corners, then the center."""
        left = x
        right = x + width - 1
        top = y
        bottom = y + height - 1
        return [
            (left, top),
            (right, top),
            (left, bottom),
            (right, bottom),
            (x + width // 2, y + height // 2),
        ]

    def check_box_collision(self, grid: TileGrid, x: int, y: int, width: int, height: int) -> bool:
        """
        True if any of the five sample points of the box is solid.

        The box covers [x, x+width-1] x [y, y+height-1]. Obstacles thinner
        than the gap between samples can slip through.
        """
        for px, py in self.sample_points(x, y, width, height):
            if self.is_solid_at_pixel(grid, px, py):
                return True
        return False

    def check_box_collision_centered(self, grid: TileGrid, center_x: float, center_y: float,
                                     width: int, height: int) -> bool:
        """Box collision for a box given by its center. Corner is truncated toward zero."""
        return self.check_box_collision(
            grid,
            int(center_x - width / 2.0),
            int(center_y - height / 2.0),
            width,
            height,
        )

    def is_slow_at_pixel(self, grid: TileGrid, x: float, y: float) -> bool:
        """True on sticky floor. False outside the grid or on unknown tiles."""
        tile_data = self._tile_data_at_pixel(grid, x, y)
        return tile_data.is_slow if tile_data else False

    def is_shadow_at_pixel(self, grid: TileGrid, x: float, y: float) -> bool:
        """True on shadow tiles. False outside the grid or on unknown tiles."""
        tile_data = self._tile_data_at_pixel(grid, x, y)
        return tile_data.is_shadow if tile_data else False

    def tiles_in_box(self, grid: TileGrid, x: float, y: float,
                     width: int, height: int) -> List[Tuple[int, int, int]]:
        """All in-grid tiles overlapped by a box, as (tile_id, col, row)."""
        if width <= 0 or height <= 0:
            return []
        start_col, start_row = self.to_tile(x, y)
        end_col, end_row = self.to_tile(x + width - 1, y + height - 1)
        start_col, start_row = max(0, start_col), max(0, start_row)
        end_col, end_row = min(grid.width - 1, end_col), min(grid.height - 1, end_row)

        tiles = []
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                tiles.append((grid.tile_at(col, row), col, row))
        return tiles

    def _tile_data_at_pixel(self, grid: TileGrid, x: float, y: float):
        tile_id = self.tile_at_pixel(grid, x, y)
        if tile_id is None:
            return None
        return self.registry.get_tile(tile_id)
