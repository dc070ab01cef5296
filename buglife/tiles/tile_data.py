from dataclasses import dataclass, field
from typing import Any, Optional
from .tile_types import TileType


@dataclass(frozen=True)
class TileProperties:
    """Gameplay semantics of a tile."""
    solid: bool = False   # blocks movement and collision
    slow: bool = False    # slows the player (sticky floor)
    shadow: bool = False  # hides the player from spiders


@dataclass(frozen=True)
class TileData:
    """Complete data for a tile type."""
    tile_type: TileType
    name: str
    properties: TileProperties = field(default_factory=TileProperties)
    sprite_path: Optional[str] = None
    # Renderable handle from the image provider; never loaded here
    image: Any = None

    @property
    def is_solid(self) -> bool:
        return self.properties.solid

    @property
    def is_slow(self) -> bool:
        return self.properties.slow

    @property
    def is_shadow(self) -> bool:
        return self.properties.shadow
