"""
Level Validator - design checks for authored levels.

Walks a LevelData and reports everything that would break the level or
hurt its quality. Findings are returned as data, never raised, so an
editor or CLI can show the full list and decide what to do with it.
Only has_errors() should gate shipping a level.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from buglife.core.config_loader import GameConfig
from buglife.core.constants import ENERGY_SEED
from buglife.tiles.tile_registry import TileRegistry
from buglife.tiles.tile_types import LEVEL_COMPLETE_TILE
from .level_data import LevelData, Point


class Severity(Enum):
    ERROR = "ERROR"      # Must fix - game will not work correctly
    WARNING = "WARNING"  # Should fix - may cause issues
    INFO = "INFO"        # Suggestion - quality improvement


class IssueCategory(Enum):
    """One category per rule group, in evaluation order."""
    SPAWN = "Spawn"
    EXIT = "Exit"
    SPIDER = "Spider"
    SNAIL = "Snail"
    FOOD = "Food"
    TRIPWIRE = "Tripwire"
    QUALITY = "Quality"
    TILE = "Tile"


@dataclass(frozen=True)
class EntityRef:
    kind: str   # "spider", "snail", "food", "tripwire"
    index: int  # zero-based position in the level's list


@dataclass(frozen=True)
class TileRef:
    x: int
    y: int


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding from LevelValidator."""
    severity: Severity
    category: IssueCategory
    message: str
    entity: Optional[EntityRef] = None
    tile: Optional[TileRef] = None

    def __str__(self):
        text = f"[{self.severity.value}] {self.category.value}: {self.message}"
        if self.tile is not None:
            text += f" @ tile({self.tile.x},{self.tile.y})"
        if self.entity is not None:
            text += f" [{self.entity.kind} #{self.entity.index + 1}]"
        return text


def _issue(severity: Severity, category: IssueCategory, message: str,
           entity: Optional[EntityRef] = None, tile: Optional[Point] = None) -> ValidationIssue:
    tile_ref = TileRef(tile.x, tile.y) if tile is not None else None
    return ValidationIssue(severity, category, message, entity, tile_ref)


class LevelValidator:
    """Rule engine over LevelData.

    Holds only the registry and configuration; validate() keeps no state
    between calls and never mutates its input.
    """

    def __init__(self, registry: Optional[TileRegistry] = None,
                 config: Optional[GameConfig] = None):
        self.registry = registry if registry is not None else TileRegistry(config)
        self.config = config if config is not None else self.registry.config
        self.tile_size = self.config.tile_size

    def validate(self, level: LevelData) -> List[ValidationIssue]:
        """
        Validate level data and return the ordered list of issues.

        Order: spawns, exit tile, spiders, snails, food, tripwires, map
        quality, unknown tiles. Within a group, entities are reported in the
        order the level lists them.
        """
        issues: List[ValidationIssue] = []
        issues.extend(self._validate_required_spawns(level))
        issues.extend(self._validate_exit_tile(level))
        issues.extend(self._validate_spiders(level))
        issues.extend(self._validate_snails(level))
        issues.extend(self._validate_food(level))
        issues.extend(self._validate_tripwires(level))
        issues.extend(self._validate_map_quality(level))
        issues.extend(self._validate_tile_ids(level))
        return issues

    # === Helpers ===

    def _to_tile(self, p: Point) -> Point:
        return LevelData.pixel_to_tile(p, self.tile_size)

    def _is_solid(self, level: LevelData, x: int, y: int) -> bool:
        """Solidity for validation. Out-of-map and unknown ids are not solid."""
        tile_data = self.registry.get_tile(level.get_tile(x, y))
        return tile_data is not None and tile_data.is_solid

    # === Rule groups ===

    def _validate_required_spawns(self, level: LevelData) -> List[ValidationIssue]:
        issues = []

        if level.player_spawn is None:
            issues.append(_issue(Severity.ERROR, IssueCategory.SPAWN,
                                 "Missing player spawn point"))
        else:
            t = self._to_tile(level.player_spawn)
            if not level.in_bounds(t.x, t.y):
                issues.append(_issue(Severity.ERROR, IssueCategory.SPAWN,
                                     "Player spawn is outside map bounds", tile=t))
            elif self._is_solid(level, t.x, t.y):
                issues.append(_issue(Severity.ERROR, IssueCategory.SPAWN,
                                     "Player spawn is on a solid tile", tile=t))

        # Toy spawn is only bounds-checked; the toy may rest against a wall
        if level.mechanics.toy_enabled:
            if level.toy_spawn is None:
                issues.append(_issue(Severity.ERROR, IssueCategory.SPAWN,
                                     "Toy mechanics enabled but no toy spawn point set"))
            else:
                t = self._to_tile(level.toy_spawn)
                if not level.in_bounds(t.x, t.y):
                    issues.append(_issue(Severity.ERROR, IssueCategory.SPAWN,
                                         "Toy spawn is outside map bounds", tile=t))
        return issues

    def _validate_exit_tile(self, level: LevelData) -> List[ValidationIssue]:
        exit_id = int(LEVEL_COMPLETE_TILE)
        for y in range(level.height):
            for x in range(level.width):
                if self.registry.is_exit(level.get_tile(x, y)):
                    return []
        return [_issue(Severity.ERROR, IssueCategory.EXIT,
                       f"No exit tile found (tile ID {exit_id})")]

    def _validate_spiders(self, level: LevelData) -> List[ValidationIssue]:
        issues = []
        for i, spider in enumerate(level.spiders):
            ref = EntityRef("spider", i)
            waypoints = spider.waypoints or []

            if not waypoints:
                issues.append(_issue(Severity.ERROR, IssueCategory.SPIDER,
                                     "Spider has no waypoints", ref))
                continue
            if len(waypoints) < 2:
                issues.append(_issue(Severity.WARNING, IssueCategory.SPIDER,
                                     "Spider has only 1 waypoint (will not patrol)", ref))

            for j, wp in enumerate(waypoints, start=1):
                if not level.in_bounds(wp.x, wp.y):
                    issues.append(_issue(Severity.ERROR, IssueCategory.SPIDER,
                                         f"Waypoint {j} is outside map bounds", ref, wp))
                elif self._is_solid(level, wp.x, wp.y):
                    issues.append(_issue(Severity.WARNING, IssueCategory.SPIDER,
                                         f"Waypoint {j} is on solid tile", ref, wp))
        return issues

    def _validate_snails(self, level: LevelData) -> List[ValidationIssue]:
        issues = []
        for i, snail in enumerate(level.snails):
            ref = EntityRef("snail", i)
            t = self._to_tile(snail.position)
            if not level.in_bounds(t.x, t.y):
                issues.append(_issue(Severity.ERROR, IssueCategory.SNAIL,
                                     "Snail position is outside map bounds", ref, t))
            if not snail.dialogue:
                issues.append(_issue(Severity.WARNING, IssueCategory.SNAIL,
                                     "Snail has no dialogue", ref))
        return issues

    def _validate_food(self, level: LevelData) -> List[ValidationIssue]:
        issues = []
        has_energy_seed = False

        for i, food in enumerate(level.food):
            ref = EntityRef("food", i)
            # Food positions are already tile coordinates
            p = food.position
            if not level.in_bounds(p.x, p.y):
                issues.append(_issue(Severity.ERROR, IssueCategory.FOOD,
                                     "Food is outside map bounds", ref, p))
            elif self._is_solid(level, p.x, p.y):
                issues.append(_issue(Severity.WARNING, IssueCategory.FOOD,
                                     "Food is on solid tile (unreachable)", ref, p))
            if food.type == ENERGY_SEED:
                has_energy_seed = True

        if has_energy_seed and not level.mechanics.speed_boost_food_enabled:
            issues.append(_issue(Severity.WARNING, IssueCategory.FOOD,
                                 "Energy seeds placed but speedBoostFood mechanic is disabled"))
        return issues

    def _validate_tripwires(self, level: LevelData) -> List[ValidationIssue]:
        issues = []
        if level.tripwires and not level.mechanics.trip_wires_enabled:
            issues.append(_issue(Severity.WARNING, IssueCategory.TRIPWIRE,
                                 "Tripwires placed but tripWires mechanic is disabled"))

        # Tripwires are ground triggers, so only bounds matter
        for i, pos in enumerate(level.tripwires):
            t = self._to_tile(pos)
            if not level.in_bounds(t.x, t.y):
                issues.append(_issue(Severity.ERROR, IssueCategory.TRIPWIRE,
                                     "Tripwire is outside map bounds", EntityRef("tripwire", i), t))
        return issues

    def _validate_map_quality(self, level: LevelData) -> List[ValidationIssue]:
        issues = []
        width, height = level.width, level.height
        total_tiles = width * height

        if total_tiles > 0:
            solid_count = sum(
                1 for y in range(height) for x in range(width) if self._is_solid(level, x, y)
            )
            solid_ratio = solid_count / total_tiles

            if solid_ratio > self.config.crowded_solid_ratio:
                issues.append(_issue(
                    Severity.INFO, IssueCategory.QUALITY,
                    f"High solid tile ratio ({solid_ratio * 100:.0f}%) - may feel cramped"))
            if solid_ratio < self.config.open_solid_ratio:
                issues.append(_issue(
                    Severity.INFO, IssueCategory.QUALITY,
                    f"Low solid tile ratio ({solid_ratio * 100:.0f}%) - very open level"))

        min_dim = self.config.min_map_dimension
        if width < min_dim or height < min_dim:
            issues.append(_issue(Severity.INFO, IssueCategory.QUALITY,
                                 f"Map is very small ({width}x{height})"))

        if not self._has_border_walls(level):
            issues.append(_issue(Severity.WARNING, IssueCategory.QUALITY,
                                 "Map edges are not fully walled - player may walk off map"))
        return issues

    def _has_border_walls(self, level: LevelData) -> bool:
        """Top and bottom rows first, then left and right columns; stops at the first gap."""
        for x in range(level.width):
            if not self._is_solid(level, x, 0) or not self._is_solid(level, x, level.height - 1):
                return False
        for y in range(level.height):
            if not self._is_solid(level, 0, y) or not self._is_solid(level, level.width - 1, y):
                return False
        return True

    def _validate_tile_ids(self, level: LevelData) -> List[ValidationIssue]:
        """One error per tile id the registry doesn't know, at its first occurrence."""
        first_seen: Dict[int, Point] = {}
        counts: Dict[int, int] = {}
        for y in range(level.height):
            for x in range(level.width):
                tile_id = level.get_tile(x, y)
                if self.registry.is_known(tile_id):
                    continue
                if tile_id not in first_seen:
                    first_seen[tile_id] = Point(x, y)
                counts[tile_id] = counts.get(tile_id, 0) + 1

        return [
            _issue(Severity.ERROR, IssueCategory.TILE,
                   f"Unknown tile ID {tile_id} used on {counts[tile_id]} tile(s)",
                   tile=pos)
            for tile_id, pos in first_seen.items()
        ]


# === Tooling surface ===

def validate(level: LevelData, registry: Optional[TileRegistry] = None,
             config: Optional[GameConfig] = None) -> List[ValidationIssue]:
    """Validate a level with a freshly built validator."""
    return LevelValidator(registry, config).validate(level)


def has_errors(issues: List[ValidationIssue]) -> bool:
    """True if any issue is an ERROR. This is the only signal that should block a level."""
    return any(issue.severity is Severity.ERROR for issue in issues)


def count_by_severity(issues: List[ValidationIssue], severity: Severity) -> int:
    return sum(1 for issue in issues if issue.severity is severity)
