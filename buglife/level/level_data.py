"""Level data model shared by the editor and the validator.

Coordinate spaces differ per entity kind and are kept exactly as level
content uses them:
- player spawn, toy spawn, snails, tripwires: pixel space
- spider waypoints, food: tile space
Food in tile space while snails sit in pixel space looks inconsistent. It is
kept as is until the content owners decide which convention is intended.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from buglife.core.constants import OUT_OF_BOUNDS_TILE, TILE_SIZE
from buglife.core.exceptions import GridSizeMismatch
from buglife.tiles.tile_grid import TileGrid
from buglife.tiles.tile_parser import TileParser
from buglife.tiles.tile_types import TileType


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass
class SpiderData:
    """Spider patrol path; waypoints are tile coordinates."""
    waypoints: List[Point] = field(default_factory=list)
    description: str = ""

    def add_waypoint(self, tile_x: int, tile_y: int):
        self.waypoints.append(Point(tile_x, tile_y))


@dataclass
class SnailData:
    """Snail NPC; position is in pixels."""
    position: Point = field(default_factory=lambda: Point(0, 0))
    dialogue: List[str] = field(default_factory=list)
    requires_interaction: bool = True
    description: str = ""


@dataclass
class FoodData:
    """Food pickup; position is in tiles."""
    position: Point = field(default_factory=lambda: Point(0, 0))
    type: str = "BERRY"  # BERRY or ENERGY_SEED
    description: str = ""


@dataclass
class MechanicsFlags:
    """Which gameplay systems are active in a level."""
    dash_enabled: bool = False
    toy_enabled: bool = False
    trip_wires_enabled: bool = False
    speed_boost_food_enabled: bool = False


@dataclass
class LevelData:
    """Complete description of one level: tiles, entities and mechanics.

    Tiles are stored flat in row-major order. Leaving tiles unset builds a
    floor level with a wall border.
    """
    width: int = 20
    height: int = 20
    tiles: Optional[List[int]] = None

    # Metadata
    name: str = "untitled"
    author: str = ""
    description: str = ""
    version: int = 1

    # Entity spawns, in author order
    player_spawn: Optional[Point] = field(default_factory=lambda: Point(64, 64))
    toy_spawn: Optional[Point] = None
    snails: List[SnailData] = field(default_factory=list)
    spiders: List[SpiderData] = field(default_factory=list)
    food: List[FoodData] = field(default_factory=list)
    tripwires: List[Point] = field(default_factory=list)

    mechanics: MechanicsFlags = field(default_factory=MechanicsFlags)

    def __post_init__(self):
        if self.tiles is None:
            self._initialize_tiles()
        elif len(self.tiles) != self.width * self.height:
            raise GridSizeMismatch(self.width, self.height, len(self.tiles))
        else:
            self.tiles = list(self.tiles)

    def _initialize_tiles(self):
        self.tiles = [int(TileType.FLOOR)] * (self.width * self.height)
        wall = int(TileType.WALL)
        for x in range(self.width):
            self.set_tile(x, 0, wall)
            self.set_tile(x, self.height - 1, wall)
        for y in range(self.height):
            self.set_tile(0, y, wall)
            self.set_tile(self.width - 1, y, wall)

    # === Tile access ===

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> int:
        """Tile id at (x, y), or OUT_OF_BOUNDS_TILE (-1) outside the map."""
        if not self.in_bounds(x, y):
            return OUT_OF_BOUNDS_TILE
        index = y * self.width + x
        if index >= len(self.tiles):
            return OUT_OF_BOUNDS_TILE
        return self.tiles[index]

    def set_tile(self, x: int, y: int, tile_id: int):
        """Write a tile; writes outside the map are ignored."""
        if not self.in_bounds(x, y):
            return
        self.tiles[y * self.width + x] = tile_id

    def resize(self, new_width: int, new_height: int):
        """Resize the map, keeping the overlapping region. New tiles are floor."""
        old_tiles, old_width, old_height = self.tiles, self.width, self.height
        self.width = new_width
        self.height = new_height
        self.tiles = [int(TileType.FLOOR)] * (new_width * new_height)
        for y in range(min(old_height, new_height)):
            for x in range(min(old_width, new_width)):
                self.tiles[y * new_width + x] = old_tiles[y * old_width + x]

    def to_tile_array(self) -> List[List[int]]:
        return [[self.get_tile(x, y) for x in range(self.width)] for y in range(self.height)]

    def from_tile_array(self, data: List[List[int]]):
        """Replace dimensions and tiles from a list of rows.

        Raises GridSizeMismatch on ragged rows, leaving the level unchanged.
        """
        height = len(data)
        width = len(data[0]) if data else 0
        if any(len(row) != width for row in data):
            raise GridSizeMismatch(width, height, sum(len(row) for row in data))
        self.height = height
        self.width = width
        self.tiles = [0] * (self.width * self.height)
        for y in range(self.height):
            for x in range(self.width):
                self.set_tile(x, y, data[y][x])

    def to_tile_grid(self) -> TileGrid:
        """Snapshot the tiles as an immutable TileGrid for the live world."""
        return TileGrid(self.width, self.height, self.tiles)

    # === Conversion ===

    @staticmethod
    def pixel_to_tile(point: Point, tile_size: int = TILE_SIZE) -> Point:
        return Point(point.x // tile_size, point.y // tile_size)

    @classmethod
    def from_tile_grid(cls, grid: TileGrid, name: str = "untitled") -> "LevelData":
        """Level with the grid's tiles and default entities."""
        return cls(width=grid.width, height=grid.height, tiles=list(grid.cells), name=name)

    @classmethod
    def from_text_map(cls, path: str, name: Optional[str] = None) -> "LevelData":
        """Import tiles from a legacy text map. Entities keep their defaults."""
        grid = TileParser().load_file(path)
        if name is None:
            name = _stem(path)
        return cls.from_tile_grid(grid, name=name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelData":
        """
        Build a level from the editor's dictionary form.

        Keys follow the editor's camelCase names. Unknown keys are ignored; a
        key that is present but null (for example "playerSpawn": null) means
        the entity is absent.

        Raises:
            ValueError: if a field has the wrong shape.
            GridSizeMismatch: if tiles don't match width * height.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Level data must be a mapping, got {type(data).__name__}")

        width = int(data.get("width", 20))
        height = int(data.get("height", 20))
        tiles = data.get("tiles")
        if tiles is not None:
            tiles = [int(t) for t in tiles]

        kwargs: Dict[str, Any] = {
            "width": width,
            "height": height,
            "tiles": tiles,
            "name": str(data.get("levelName", data.get("name", "untitled"))),
            "author": str(data.get("author", "")),
            "description": str(data.get("description", "")),
            "version": int(data.get("version", 1)),
        }
        if "playerSpawn" in data:
            kwargs["player_spawn"] = _point_or_none(data["playerSpawn"])
        kwargs["toy_spawn"] = _point_or_none(data.get("toySpawn"))

        kwargs["snails"] = [
            SnailData(
                position=_point(s.get("position", {})),
                dialogue=_dialogue(s.get("dialogue")),
                requires_interaction=bool(s.get("requiresInteraction", True)),
                description=str(s.get("description", "")),
            )
            for s in _list_of_dicts(data.get("snails"), "snails")
        ]
        kwargs["spiders"] = [
            SpiderData(
                waypoints=[_point(wp) for wp in (s.get("waypoints") or [])],
                description=str(s.get("description", "")),
            )
            for s in _list_of_dicts(data.get("spiders"), "spiders")
        ]
        kwargs["food"] = [
            FoodData(
                position=_point(f.get("position", {})),
                type=str(f.get("type", "BERRY")),
                description=str(f.get("description", "")),
            )
            for f in _list_of_dicts(data.get("food"), "food")
        ]
        kwargs["tripwires"] = [_point(p) for p in (data.get("tripwires") or [])]

        mechanics = data.get("mechanics") or {}
        kwargs["mechanics"] = MechanicsFlags(
            dash_enabled=bool(mechanics.get("dashEnabled", False)),
            toy_enabled=bool(mechanics.get("toyEnabled", False)),
            trip_wires_enabled=bool(mechanics.get("tripWiresEnabled", False)),
            speed_boost_food_enabled=bool(mechanics.get("speedBoostFoodEnabled", False)),
        )
        return cls(**kwargs)


def export_text_map(level: LevelData, path: str):
    """Write the level's tiles in the legacy text map format."""
    TileParser().save_file(level.to_tile_grid(), path)


# === Internal helpers ===

def _stem(path: str) -> str:
    base = os.path.basename(path)
    return base[:-4] if base.endswith(".txt") else base


def _point(raw) -> Point:
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a point mapping, got {raw!r}")
    return Point(int(raw.get("x", 0)), int(raw.get("y", 0)))


def _point_or_none(raw) -> Optional[Point]:
    return None if raw is None else _point(raw)


def _dialogue(raw) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw else []
    return [str(line) for line in raw]


def _list_of_dicts(raw, key: str) -> List[dict]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise ValueError(f"{key} must be a list of mappings")
    return raw
