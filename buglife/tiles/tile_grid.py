from typing import Iterable, List, Sequence, Tuple

from buglife.core.constants import TILE_SIZE
from buglife.core.exceptions import GridSizeMismatch, OutOfBounds


class TileGrid:
    """Fixed-size, row-major grid of tile ids for one level.

    The grid is read-only once built. Replacing a level means building a
    new TileGrid, never editing this one in place.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, cells: Iterable[int]):
        cells = tuple(cells)
        if width <= 0 or height <= 0 or len(cells) != width * height:
            raise GridSizeMismatch(width, height, len(cells))
        self.width = width
        self.height = height
        self._cells = cells

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "TileGrid":
        """Build a grid from a list of equal-length rows."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        cells: List[int] = []
        for row in rows:
            if len(row) != width:
                raise GridSizeMismatch(width, height, sum(len(r) for r in rows))
            cells.extend(row)
        return cls(width, height, cells)

    @property
    def cells(self) -> Tuple[int, ...]:
        return self._cells

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def tile_at(self, col: int, row: int) -> int:
        """Tile id at (col, row).

        Raises:
            OutOfBounds: if the coordinate is outside the grid.
        """
        if not self.in_bounds(col, row):
            raise OutOfBounds(col, row, self.width, self.height)
        return self._cells[row * self.width + col]

    def rows(self) -> List[List[int]]:
        """Copy of the grid as a list of rows."""
        w = self.width
        return [list(self._cells[r * w:(r + 1) * w]) for r in range(self.height)]

    def find_tiles(self, tile_id: int) -> List[Tuple[int, int]]:
        """All (col, row) positions holding tile_id, top-to-bottom, left-to-right."""
        w = self.width
        return [(i % w, i // w) for i, t in enumerate(self._cells) if t == tile_id]

    def contains_tile(self, tile_id: int) -> bool:
        return tile_id in self._cells

    def visible_tile_range(self, camera_x: float, camera_y: float,
                           view_width: int, view_height: int,
                           tile_size: int = TILE_SIZE) -> Tuple[int, int, int, int]:
        """
        Tiles overlapping the camera view, clipped to the grid.

        Returns:
            (col_start, col_end, row_start, row_end), end-exclusive. The end
            carries one extra tile so partially visible edge tiles are drawn.
        """
        col_start = int(camera_x // tile_size)
        col_end = int((camera_x + view_width) // tile_size) + 1
        row_start = int(camera_y // tile_size)
        row_end = int((camera_y + view_height) // tile_size) + 1

        col_start = max(0, min(col_start, self.width))
        col_end = max(col_start, min(col_end, self.width))
        row_start = max(0, min(row_start, self.height))
        row_end = max(row_start, min(row_end, self.height))
        return col_start, col_end, row_start, row_end

    def __eq__(self, other):
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)

    def __hash__(self):
        return hash((self.width, self.height, self._cells))

    def __repr__(self):
        return f"TileGrid({self.width}x{self.height})"
