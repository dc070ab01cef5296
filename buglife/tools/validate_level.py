"""Command-line level validation.

Usage:
    buglife-validate res/maps/level1.txt

Text maps carry tiles only, so entities and mechanics keep their
LevelData defaults.

Exit codes: 0 no errors, 1 validation errors, 2 level could not be loaded.
"""

import argparse
import logging
import sys
from typing import List, Optional

from buglife.core.config_loader import DEFAULT_CONFIG_PATH, load_game_config
from buglife.core.exceptions import BuglifeError
from buglife.level.level_data import LevelData
from buglife.level.level_validator import (
    LevelValidator,
    Severity,
    count_by_severity,
    has_errors,
)
from buglife.tiles.tile_registry import TileRegistry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate a Buglife level map")
    parser.add_argument("level", help="Path to a text map (.txt)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH,
                        help="Path to game_config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    config = load_game_config(args.config)
    try:
        level = LevelData.from_text_map(args.level)
    except (BuglifeError, OSError) as e:
        logger.error("Cannot load level: %s", e)
        return 2

    validator = LevelValidator(TileRegistry(config), config)
    issues = validator.validate(level)

    for issue in issues:
        print(issue)
    print(
        f"{level.name}: {count_by_severity(issues, Severity.ERROR)} error(s), "
        f"{count_by_severity(issues, Severity.WARNING)} warning(s), "
        f"{count_by_severity(issues, Severity.INFO)} info"
    )
    return 1 if has_errors(issues) else 0


if __name__ == "__main__":
    sys.exit(main())
