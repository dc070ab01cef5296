import pytest

from buglife.core.exceptions import GridSizeMismatch, MalformedLevelFile
from buglife.level.level_data import (
    FoodData,
    LevelData,
    MechanicsFlags,
    Point,
    SnailData,
    SpiderData,
    export_text_map,
)
from buglife.tiles.tile_grid import TileGrid


def test_default_level_has_wall_border_and_floor_interior():
    level = LevelData(width=6, height=4)
    assert len(level.tiles) == 24
    assert level.to_tile_array() == [
        [1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1],
    ]
    assert level.player_spawn == Point(64, 64)
    assert level.toy_spawn is None
    assert level.mechanics == MechanicsFlags()


def test_get_tile_out_of_bounds_sentinel():
    level = LevelData(width=3, height=3)
    assert level.get_tile(-1, 0) == -1
    assert level.get_tile(3, 0) == -1
    assert level.get_tile(0, 3) == -1


def test_set_tile_ignores_out_of_bounds():
    level = LevelData(width=3, height=3)
    before = list(level.tiles)
    level.set_tile(5, 5, 37)
    level.set_tile(-1, 0, 37)
    assert level.tiles == before
    level.set_tile(1, 1, 37)
    assert level.get_tile(1, 1) == 37


def test_tiles_must_match_dimensions():
    with pytest.raises(GridSizeMismatch):
        LevelData(width=3, height=3, tiles=[0] * 8)


def test_resize_keeps_overlap():
    level = LevelData(width=3, height=3)
    level.set_tile(1, 1, 37)
    level.resize(5, 2)
    assert (level.width, level.height) == (5, 2)
    assert level.to_tile_array() == [
        [1, 1, 1, 0, 0],
        [1, 37, 1, 0, 0],
    ]


def test_tile_array_round_trip():
    level = LevelData(width=2, height=2)
    level.from_tile_array([[0, 1, 2], [3, 4, 5]])
    assert (level.width, level.height) == (3, 2)
    assert level.tiles == [0, 1, 2, 3, 4, 5]
    assert level.to_tile_grid() == TileGrid(3, 2, [0, 1, 2, 3, 4, 5])


def test_ragged_tile_array_leaves_level_unchanged():
    level = LevelData(width=3, height=3)
    before = list(level.tiles)
    with pytest.raises(GridSizeMismatch):
        level.from_tile_array([[0, 0, 0], [0, 0], [0, 0, 0]])
    assert (level.width, level.height) == (3, 3)
    assert level.tiles == before


def test_pixel_to_tile_floors():
    assert LevelData.pixel_to_tile(Point(127, 64)) == Point(1, 1)
    assert LevelData.pixel_to_tile(Point(-1, 0)) == Point(-1, 0)
    assert LevelData.pixel_to_tile(Point(40, 40), tile_size=16) == Point(2, 2)


def test_spider_add_waypoint():
    spider = SpiderData()
    spider.add_waypoint(2, 3)
    assert spider.waypoints == [Point(2, 3)]


def test_text_map_import_and_export(tmp_path):
    path = tmp_path / "level3.txt"
    path.write_text("1 1 1\n1 37 1\n1 1 1\n")
    level = LevelData.from_text_map(str(path))
    assert level.name == "level3"
    assert (level.width, level.height) == (3, 3)
    assert level.get_tile(1, 1) == 37
    assert level.player_spawn == Point(64, 64)

    out = tmp_path / "exported.txt"
    export_text_map(level, str(out))
    assert out.read_text() == path.read_text()


def test_text_map_import_rejects_malformed(tmp_path):
    path = tmp_path / "broken.txt"
    path.write_text("1 1 1\n1 1\n")
    with pytest.raises(MalformedLevelFile):
        LevelData.from_text_map(str(path))


def test_from_dict_editor_shape():
    data = {
        "version": 1,
        "levelName": "attic",
        "width": 3,
        "height": 2,
        "tiles": [1, 1, 1, 1, 37, 1],
        "playerSpawn": {"x": 70, "y": 70},
        "toySpawn": {"x": 100, "y": 80},
        "snails": [{"position": {"x": 64, "y": 64}, "dialogue": ["Hello", "Bye"],
                    "requiresInteraction": False}],
        "spiders": [{"waypoints": [{"x": 1, "y": 1}, {"x": 2, "y": 1}],
                     "description": "guard"}],
        "food": [{"position": {"x": 1, "y": 0}, "type": "ENERGY_SEED"}],
        "tripwires": [{"x": 64, "y": 0}],
        "mechanics": {"toyEnabled": True, "speedBoostFoodEnabled": True},
        "editorOnly": "ignored",
    }
    level = LevelData.from_dict(data)
    assert level.name == "attic"
    assert level.tiles == [1, 1, 1, 1, 37, 1]
    assert level.player_spawn == Point(70, 70)
    assert level.toy_spawn == Point(100, 80)
    assert level.snails == [SnailData(Point(64, 64), ["Hello", "Bye"], False, "")]
    assert level.spiders[0].waypoints == [Point(1, 1), Point(2, 1)]
    assert level.food == [FoodData(Point(1, 0), "ENERGY_SEED", "")]
    assert level.tripwires == [Point(64, 0)]
    assert level.mechanics == MechanicsFlags(toy_enabled=True, speed_boost_food_enabled=True)


def test_from_dict_null_spawn_means_absent():
    level = LevelData.from_dict({"width": 3, "height": 3, "playerSpawn": None})
    assert level.player_spawn is None
    assert LevelData.from_dict({"width": 3, "height": 3}).player_spawn == Point(64, 64)


def test_from_dict_rejects_bad_shapes():
    with pytest.raises(ValueError):
        LevelData.from_dict([])
    with pytest.raises(ValueError):
        LevelData.from_dict({"spiders": "lots"})
    with pytest.raises(ValueError):
        LevelData.from_dict({"tripwires": [[1, 2]]})
    with pytest.raises(GridSizeMismatch):
        LevelData.from_dict({"width": 2, "height": 2, "tiles": [0, 0, 0]})
