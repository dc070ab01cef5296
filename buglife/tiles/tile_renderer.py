import logging
import os
from typing import Dict, Optional, Tuple

import pygame

from buglife.core.config_loader import GameConfig
from buglife.core.constants import ASSET_ROOT
from .tile_grid import TileGrid
from .tile_registry import TileRegistry
from .tile_types import TileType

logger = logging.getLogger(__name__)


class TileImageLoader:
    """Loads tile sprites with pygame. Pass an instance to TileRegistry as its image provider."""

    def __init__(self, asset_root: str = ASSET_ROOT):
        self.asset_root = asset_root
        self._cache: Dict[str, pygame.Surface] = {}

    @classmethod
    def from_config(cls, config: GameConfig) -> "TileImageLoader":
        return cls(config.asset_root)

    def __call__(self, tile_type: TileType, sprite_path: str) -> Optional[pygame.Surface]:
        return self.load(sprite_path)

    def load(self, sprite_path: str) -> Optional[pygame.Surface]:
        """Load (or fetch from cache) an image. Returns None if it can't be read."""
        if sprite_path in self._cache:
            return self._cache[sprite_path]

        full_path = os.path.join(self.asset_root, sprite_path)
        try:
            image = pygame.image.load(full_path)
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("Failed to load tile image %s: %s", full_path, e)
            return None

        self._cache[sprite_path] = image
        return image


class TileRenderer:
    """Draws the on-screen part of a TileGrid."""

    def __init__(self, registry: TileRegistry, tile_size: Optional[int] = None):
        self.registry = registry
        self.tile_size = tile_size if tile_size is not None else registry.config.tile_size
        self._scaled_cache: Dict[int, pygame.Surface] = {}

    def _get_tile_surface(self, tile_id: int) -> Optional[pygame.Surface]:
        """Registry image for tile_id scaled to tile_size, cached per id."""
        if tile_id in self._scaled_cache:
            return self._scaled_cache[tile_id]

        image = self.registry.image(tile_id)
        if image is None:
            return None
        if image.get_size() != (self.tile_size, self.tile_size):
            image = pygame.transform.scale(image, (self.tile_size, self.tile_size))
        self._scaled_cache[tile_id] = image
        return image

    def draw(self, surface: pygame.Surface, grid: TileGrid,
             camera_offset: Tuple[float, float] = (0, 0)) -> int:
        """
        Blit every visible tile that has an image.

        Returns:
            Number of tiles drawn.
        """
        camera_x, camera_y = camera_offset
        view_width, view_height = surface.get_size()
        col_start, col_end, row_start, row_end = grid.visible_tile_range(
            camera_x, camera_y, view_width, view_height, self.tile_size
        )

        drawn = 0
        for row in range(row_start, row_end):
            for col in range(col_start, col_end):
                tile_surface = self._get_tile_surface(grid.tile_at(col, row))
                if tile_surface is None:
                    continue
                screen_x = int(col * self.tile_size - camera_x)
                screen_y = int(row * self.tile_size - camera_y)
                surface.blit(tile_surface, (screen_x, screen_y))
                drawn += 1
        return drawn
