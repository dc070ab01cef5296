"""Structural errors for level assets.

These are raised (fail-fast) when a level asset is corrupt or incompatible.
Design-quality findings are never raised; LevelValidator returns them as
ValidationIssue records instead.
"""


class BuglifeError(Exception):
    """Base class for all structural level errors."""


class UnknownTileType(BuglifeError, LookupError):
    """A tile id has no entry in the TileRegistry."""

    def __init__(self, tile_id: int):
        super().__init__(f"Unknown tile type id: {tile_id}")
        self.tile_id = tile_id


class OutOfBounds(BuglifeError, IndexError):
    """A tile coordinate lies outside the grid."""

    def __init__(self, col: int, row: int, width: int, height: int):
        super().__init__(
            f"Tile ({col}, {row}) is outside the {width}x{height} grid"
        )
        self.col = col
        self.row = row
        self.width = width
        self.height = height


class MalformedLevelFile(BuglifeError, ValueError):
    """A level text file could not be parsed into a rectangular grid."""

    def __init__(self, source: str, reason: str, line_number: int = None):
        where = f"{source}:{line_number}" if line_number is not None else source
        super().__init__(f"Malformed level file {where}: {reason}")
        self.source = source
        self.reason = reason
        self.line_number = line_number


class GridSizeMismatch(BuglifeError, ValueError):
    """Grid dimensions and cell data disagree."""

    def __init__(self, width: int, height: int, cell_count: int):
        super().__init__(
            f"Grid {width}x{height} needs {width * height} cells, got {cell_count}"
        )
        self.width = width
        self.height = height
        self.cell_count = cell_count
