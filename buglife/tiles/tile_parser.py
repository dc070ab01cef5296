import logging
import os
from typing import Iterable, List

from buglife.core.exceptions import MalformedLevelFile
from .tile_grid import TileGrid

logger = logging.getLogger(__name__)


class TileParser:
    """Parses the plain-text level format into tile grids.

    One grid row per line, tile ids separated by any run of whitespace,
    blank lines ignored. The first row sets the width and every other row
    must match it.
    """

    def parse_lines(self, lines: Iterable[str], source: str = "<string>") -> TileGrid:
        """
        Parse level text lines into a TileGrid.

        Raises:
            MalformedLevelFile: on a non-numeric or negative token, an empty
                file or ragged rows. No grid is built in that case.
        """
        rows: List[List[int]] = []
        for line_number, line in enumerate(lines, start=1):
            tokens = line.split()
            if not tokens:
                continue
            row = []
            for token in tokens:
                if not (token.isascii() and token.isdigit()):
                    raise MalformedLevelFile(source, f"invalid tile id {token!r}", line_number)
                row.append(int(token))
            if rows and len(row) != len(rows[0]):
                raise MalformedLevelFile(
                    source,
                    f"row has {len(row)} tiles, expected {len(rows[0])}",
                    line_number,
                )
            rows.append(row)

        if not rows:
            raise MalformedLevelFile(source, "no tile rows")

        grid = TileGrid.from_rows(rows)
        logger.debug("Parsed %s: %dx%d tiles", source, grid.width, grid.height)
        return grid

    def parse_text(self, text: str, source: str = "<string>") -> TileGrid:
        return self.parse_lines(text.splitlines(), source)

    def load_file(self, path: str) -> TileGrid:
        """Load a level file from disk."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Level file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                try:
                    return self.parse_lines(f, source=path)
                except UnicodeDecodeError:
                    raise MalformedLevelFile(path, "file is not valid UTF-8") from None
        except MalformedLevelFile as e:
            logger.error("Failed to load level file %s: %s", path, e.reason)
            raise

    def format_grid(self, grid: TileGrid) -> str:
        """Render a grid back to level text, one row per line."""
        return "".join(" ".join(str(t) for t in row) + "\n" for row in grid.rows())

    def save_file(self, grid: TileGrid, path: str):
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.format_grid(grid))


def load_tile_grid(path: str) -> TileGrid:
    """Convenience wrapper used by the world and the CLI."""
    return TileParser().load_file(path)
