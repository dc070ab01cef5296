from enum import IntEnum


class TileType(IntEnum):
    """Enumeration of all tile types in the game."""

    # Basic tiles
    FLOOR = 0
    WALL = 1
    WALL_ALT = 2
    STICKY_FLOOR = 3
    BROKEN_TILE = 4
    SHADOW_TILE = 5

    # Stain floors
    STAIN_1 = 6
    STAIN_2 = 7
    STAIN_3 = 8
    STAIN_4 = 9

    # Sack props
    SACK_W1 = 11
    SACK_W2 = 12
    SACK_W3 = 13
    SACK_W4 = 14

    # Planks
    PLANK_1 = 31
    PLANK_2 = 32
    PLANK_3 = 33
    PLANK_4 = 34

    # Ladders
    LADDER_1 = 35
    LADDER_2 = 36
    LADDER_3 = 37
    LADDER_4 = 38

    # Chimney intro tiles
    INTRO_TILE_1 = 41
    INTRO_TILE_2 = 42
    INTRO_TILE_3 = 43
    INTRO_TILE_4 = 44
    INTRO_TILE_5 = 45
    INTRO_TILE_6 = 46

    @property
    def display_name(self) -> str:
        """Return human-readable name."""
        return _DISPLAY_NAMES.get(self, f"Tile {self.value}")


# Reaching this tile completes the level. Gameplay and the validator
# must both use this constant.
LEVEL_COMPLETE_TILE = TileType.LADDER_3

_DISPLAY_NAMES = {
    TileType.FLOOR: "Floor",
    TileType.WALL: "Wall",
    TileType.WALL_ALT: "Wall (Alt)",
    TileType.STICKY_FLOOR: "Sticky Floor",
    TileType.BROKEN_TILE: "Broken Tile",
    TileType.SHADOW_TILE: "Shadow",
    TileType.STAIN_1: "Stain 1",
    TileType.STAIN_2: "Stain 2",
    TileType.STAIN_3: "Stain 3",
    TileType.STAIN_4: "Stain 4",
    TileType.SACK_W1: "Sack W1",
    TileType.SACK_W2: "Sack W2",
    TileType.SACK_W3: "Sack W3",
    TileType.SACK_W4: "Sack W4",
    TileType.PLANK_1: "Plank 1",
    TileType.PLANK_2: "Plank 2",
    TileType.PLANK_3: "Plank 3",
    TileType.PLANK_4: "Plank 4",
    TileType.LADDER_1: "Ladder 1",
    TileType.LADDER_2: "Ladder 2",
    TileType.LADDER_3: "Ladder 3 (Exit)",
    TileType.LADDER_4: "Ladder 4",
    TileType.INTRO_TILE_1: "Intro 1",
    TileType.INTRO_TILE_2: "Intro 2",
    TileType.INTRO_TILE_3: "Intro 3",
    TileType.INTRO_TILE_4: "Intro 4",
    TileType.INTRO_TILE_5: "Intro 5",
    TileType.INTRO_TILE_6: "Intro 6",
}


def tile_name(tile_id: int) -> str:
    """Human-readable name for any tile id, known or not."""
    try:
        return TileType(tile_id).display_name
    except ValueError:
        return f"Tile {tile_id}"
