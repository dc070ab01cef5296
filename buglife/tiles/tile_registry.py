import logging
from typing import Any, Callable, Dict, List, Optional

from buglife.core.config_loader import GameConfig
from buglife.core.exceptions import UnknownTileType
from .tile_types import LEVEL_COMPLETE_TILE, TileType
from .tile_data import TileData, TileProperties

logger = logging.getLogger(__name__)

# Called once per tile at registry construction: (tile_type, sprite_path) -> image
ImageProvider = Callable[[TileType, str], Any]

SOLID = TileProperties(solid=True)
OPEN = TileProperties()

# (tile type, sprite path, properties), grouped by id range
_DEFAULT_TILES = [
    # Basic tiles 0-5
    (TileType.FLOOR, "sprites/tiles/floor_1.png", OPEN),
    (TileType.WALL, "sprites/tiles/wall_5.png", SOLID),
    (TileType.WALL_ALT, "sprites/tiles/wall.png", SOLID),
    (TileType.STICKY_FLOOR, "sprites/tiles/sticky_floor.png", TileProperties(slow=True)),
    (TileType.BROKEN_TILE, "sprites/tiles/broken_tile.png", SOLID),
    (TileType.SHADOW_TILE, "sprites/tiles/shadow_tile.png", TileProperties(shadow=True)),

    # Stain floors 6-9
    (TileType.STAIN_1, "sprites/tiles/stain_1.png", OPEN),
    (TileType.STAIN_2, "sprites/tiles/stain_2.png", OPEN),
    (TileType.STAIN_3, "sprites/tiles/stain_3.png", OPEN),
    (TileType.STAIN_4, "sprites/tiles/stain_4.png", OPEN),

    # Sack props 11-14
    (TileType.SACK_W1, "sprites/tiles/sack_w1.png", SOLID),
    (TileType.SACK_W2, "sprites/tiles/sack_w2.png", SOLID),
    (TileType.SACK_W3, "sprites/tiles/sack_w3.png", OPEN),
    (TileType.SACK_W4, "sprites/tiles/sack_w4.png", SOLID),

    # Planks 31-34
    (TileType.PLANK_1, "sprites/tiles/plank1.png", OPEN),
    (TileType.PLANK_2, "sprites/tiles/plank2.png", OPEN),
    (TileType.PLANK_3, "sprites/tiles/plank3.png", OPEN),
    (TileType.PLANK_4, "sprites/tiles/plank4.png", OPEN),

    # Ladders 35-38; LADDER_3 is the walkable exit
    (TileType.LADDER_1, "sprites/tiles/l1.png", SOLID),
    (TileType.LADDER_2, "sprites/tiles/l2.png", SOLID),
    (TileType.LADDER_3, "sprites/tiles/l3.png", OPEN),
    (TileType.LADDER_4, "sprites/tiles/l4.png", SOLID),

    # Chimney intro tiles 41-46
    (TileType.INTRO_TILE_1, "sprites/tiles/introtile1.png", OPEN),
    (TileType.INTRO_TILE_2, "sprites/tiles/introtile2.png", OPEN),
    (TileType.INTRO_TILE_3, "sprites/tiles/introtile3.png", OPEN),
    (TileType.INTRO_TILE_4, "sprites/tiles/introtile4.png", SOLID),
    (TileType.INTRO_TILE_5, "sprites/tiles/introtile5.png", SOLID),
    (TileType.INTRO_TILE_6, "sprites/tiles/introtile6.png", SOLID),
]


class TileRegistry:
    """Registry for storing tile definitions.

    Built once by the composition root and passed to whatever needs tile
    semantics. The table is read-only after construction.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 image_provider: Optional[ImageProvider] = None):
        self.config = config if config is not None else GameConfig()
        self._tiles: Dict[int, TileData] = {}
        self._initialize_default_tiles(image_provider)

    def _initialize_default_tiles(self, image_provider: Optional[ImageProvider]):
        """Populate the fixed tile table, asking the provider for each image."""
        for tile_type, sprite_path, properties in _DEFAULT_TILES:
            image = None
            if image_provider is not None:
                image = image_provider(tile_type, sprite_path)
                if image is None:
                    logger.warning("No image for tile %s (%s)", tile_type.display_name, sprite_path)
            self._register_tile(TileData(
                tile_type=tile_type,
                name=tile_type.display_name,
                properties=properties,
                sprite_path=sprite_path,
                image=image,
            ))

    def _register_tile(self, tile_data: TileData):
        tile_id = int(tile_data.tile_type)
        if not 0 <= tile_id < self.config.max_tile_types:
            raise ValueError(
                f"Tile id {tile_id} outside table size {self.config.max_tile_types}"
            )
        self._tiles[tile_id] = tile_data

    def get_tile(self, tile_id: int) -> Optional[TileData]:
        """Get tile data by id, or None if unknown."""
        return self._tiles.get(tile_id)

    def properties(self, tile_id: int) -> TileProperties:
        """Get the semantic properties of a tile id.

        Raises:
            UnknownTileType: if the id has no entry.
        """
        tile_data = self._tiles.get(tile_id)
        if tile_data is None:
            raise UnknownTileType(tile_id)
        return tile_data.properties

    def is_known(self, tile_id: int) -> bool:
        return tile_id in self._tiles

    def is_solid(self, tile_id: int) -> bool:
        return self.properties(tile_id).solid

    def is_slow(self, tile_id: int) -> bool:
        return self.properties(tile_id).slow

    def is_shadow(self, tile_id: int) -> bool:
        return self.properties(tile_id).shadow

    def is_exit(self, tile_id: int) -> bool:
        return tile_id == int(LEVEL_COMPLETE_TILE)

    def image(self, tile_id: int) -> Any:
        """Image handle for a tile, or None if unknown or not loaded."""
        tile_data = self._tiles.get(tile_id)
        return tile_data.image if tile_data else None

    def get_all_tiles(self) -> Dict[int, TileData]:
        """Get all registered tiles."""
        return self._tiles.copy()

    def tiles_with_property(self, property_name: str, value=True) -> List[TileData]:
        """Get all tiles whose TileProperties field matches value."""
        matching_tiles = []
        for tile_data in self._tiles.values():
            if getattr(tile_data.properties, property_name, None) == value:
                matching_tiles.append(tile_data)
        return matching_tiles

    def __contains__(self, tile_id: int) -> bool:
        return self.is_known(tile_id)

    def __len__(self) -> int:
        return len(self._tiles)
