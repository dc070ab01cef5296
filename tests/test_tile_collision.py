import pytest

from buglife.core.config_loader import GameConfig
from buglife.core.exceptions import MalformedLevelFile
from buglife.tiles.tile_collision import TileCollision
from buglife.tiles.tile_grid import TileGrid
from buglife.tiles.tile_registry import TileRegistry
from buglife.tiles.tile_types import TileType
from buglife.world.world import World

T = 64
FLOOR = int(TileType.FLOOR)
WALL = int(TileType.WALL)


@pytest.fixture(scope="module")
def registry():
    return TileRegistry()


@pytest.fixture(scope="module")
def collision(registry):
    return TileCollision(registry)


def _box_grid(w=5, h=5):
    """Wall border, floor interior."""
    rows = [[WALL] * w]
    for _ in range(h - 2):
        rows.append([WALL] + [FLOOR] * (w - 2) + [WALL])
    rows.append([WALL] * w)
    return TileGrid.from_rows(rows)


def test_point_solidity(collision):
    grid = _box_grid()
    assert collision.is_solid_at_pixel(grid, 10, 10)
    assert not collision.is_solid_at_pixel(grid, T + 1, T + 1)
    assert not collision.is_solid_at_pixel(grid, 2 * T - 1, 2 * T - 1)
    assert collision.is_solid_at_pixel(grid, 4 * T, 2 * T)


@pytest.mark.parametrize("x,y", [(-1, 100), (100, -1), (-64, -64), (5 * T, 100), (100, 5 * T), (10_000, 10_000)])
def test_out_of_grid_is_solid_on_every_side(collision, x, y):
    grid = TileGrid.from_rows([[FLOOR] * 5 for _ in range(5)])
    assert collision.is_solid_at_pixel(grid, x, y)


def test_unknown_tile_is_solid_for_collision(collision):
    grid = TileGrid.from_rows([[FLOOR, 10]])
    assert not collision.is_solid_at_pixel(grid, 10, 10)
    assert collision.is_solid_at_pixel(grid, T + 10, 10)


def test_sample_points_are_corners_then_center():
    assert TileCollision.sample_points(10, 20, 32, 16) == [
        (10, 20), (41, 20), (10, 35), (41, 35), (26, 28),
    ]


def test_box_collision_detects_each_corner(collision):
    grid = _box_grid()
    # Box entirely inside the floor tile (1,1)..(3,3)
    assert not collision.check_box_collision(grid, T, T, 3 * T, 3 * T)
    # One pixel too far right: right corners land in the wall column
    assert collision.check_box_collision(grid, T + 1, T, 3 * T, 3 * T)
    # One pixel too far up
    assert collision.check_box_collision(grid, T, T - 1, 32, 32)


def test_box_collision_center_sample_catches_pillar(collision):
    # A single wall tile in the middle of a 5x5 floor, box straddles it with
    # every corner on floor: only the center sample hits the pillar.
    rows = [[FLOOR] * 5 for _ in range(5)]
    rows[2][2] = WALL
    grid = TileGrid.from_rows(rows)
    x, y, size = T + 10, T + 10, 3 * T - 20
    corners = TileCollision.sample_points(x, y, size, size)[:4]
    assert not any(collision.is_solid_at_pixel(grid, px, py) for px, py in corners)
    assert collision.check_box_collision(grid, x, y, size, size)


def test_box_collision_misses_thin_obstacle_between_samples(collision):
    # Pillar off-center and between corners: the five-point sampling misses it.
    rows = [[FLOOR] * 6 for _ in range(6)]
    rows[1][2] = WALL
    grid = TileGrid.from_rows(rows)
    # Box spans columns 1..3 and rows 1..3; corners at cols 1/3, center at col 2 row 2
    assert not collision.check_box_collision(grid, T, T, 3 * T, 3 * T)
    assert collision.tiles_in_box(grid, T, T, 3 * T, 3 * T)[1] == (WALL, 2, 1)


def test_centered_box_uses_truncation(collision):
    grid = _box_grid()
    # center 96.5 - 16 = 80.5 -> 80
    assert not collision.check_box_collision_centered(grid, 96.5, 96.5, 32, 32)
    # center 79 - 16 = 63 -> corner in wall tile (0, *)
    assert collision.check_box_collision_centered(grid, 79, 96, 32, 32)
    # Odd width: 80 - 16.5 = 63.5 -> 63
    assert collision.check_box_collision_centered(grid, 80, 96, 33, 32)


def test_slow_and_shadow_queries(collision):
    grid = TileGrid.from_rows([[int(TileType.STICKY_FLOOR), int(TileType.SHADOW_TILE), FLOOR]])
    assert collision.is_slow_at_pixel(grid, 5, 5)
    assert not collision.is_slow_at_pixel(grid, T + 5, 5)
    assert collision.is_shadow_at_pixel(grid, T + 5, 5)
    assert not collision.is_shadow_at_pixel(grid, 2 * T + 5, 5)
    assert not collision.is_slow_at_pixel(grid, -5, 5)


def test_tile_at_pixel_uses_floor_division(collision):
    grid = _box_grid()
    assert collision.tile_at_pixel(grid, T, T) == FLOOR
    assert collision.tile_at_pixel(grid, T - 1, T) == WALL
    assert collision.tile_at_pixel(grid, -1, 0) is None


def test_tile_size_comes_from_config(registry):
    collision = TileCollision(registry, GameConfig(tile_size=16))
    grid = _box_grid()
    assert collision.is_solid_at_pixel(grid, 15, 20)
    assert not collision.is_solid_at_pixel(grid, 16, 16)


# === World ===

def test_world_queries_delegate_to_current_grid(registry, tmp_path):
    path = tmp_path / "level1.txt"
    path.write_text("1 1 1\n1 0 1\n1 37 1\n")
    world = World.from_file(str(path), registry)
    assert (world.get_map_width(), world.get_map_height()) == (3, 3)
    assert world.tile_at(1, 2) == 37
    assert world.find_tiles(37) == [(1, 2)]
    assert not world.is_solid_at_pixel(T + 5, T + 5)
    assert world.check_box_collision(T - 1, T, 10, 10)
    assert not world.check_box_collision_centered(T + 32, T + 32, 32, 32)
    assert world.visible_tile_range(0, 0, 128, 128) == (0, 3, 0, 3)


def test_world_load_level_swaps_whole_grid(registry, tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("0 0\n0 0\n")
    second.write_text("1 1 1\n1 1 1\n")
    world = World.from_file(str(first), registry)
    old_grid = world.grid

    world.load_level(str(second))
    assert world.grid is not old_grid
    assert (world.get_map_width(), world.get_map_height()) == (3, 2)
    assert old_grid.tile_at(0, 0) == FLOOR


def test_world_keeps_grid_when_load_fails(registry, tmp_path):
    good = tmp_path / "good.txt"
    bad = tmp_path / "bad.txt"
    good.write_text("0 0\n0 0\n")
    bad.write_text("0 0\n0 ?\n")
    world = World.from_file(str(good), registry)
    grid = world.grid
    with pytest.raises(MalformedLevelFile):
        world.load_level(str(bad))
    assert world.grid is grid
