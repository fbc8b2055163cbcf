"""Monster AI decision engine for chunked, tile-based worlds."""

from .accounting import generate_units, total_resources, unit_count
from .classifier import (
    find_attackable_monster_groups,
    find_mergeable_monster_groups,
    find_player_groups,
    is_available,
    is_monster_group,
)
from .geometry import chunk_key_of, distance, path
from .models import (
    AdjacentTarget,
    Coordinate,
    Group,
    LocationOfInterest,
    Personality,
    Structure,
    TargetType,
    Tile,
    Unit,
    WorldScan,
)
from .narrative import growth_message, move_message, spawn_message
from .scanner import find_adjacent_target, scan_world
from .store import InMemoryWorldStore, JsonWorldStore, TileShapeError, WorldStore, WorldStoreError, parse_tile
from .strategy import plan_growth, plan_merge, plan_move, select_attack_targets

__all__ = [
    "AdjacentTarget",
    "Coordinate",
    "Group",
    "InMemoryWorldStore",
    "JsonWorldStore",
    "LocationOfInterest",
    "Personality",
    "Structure",
    "TargetType",
    "Tile",
    "TileShapeError",
    "Unit",
    "WorldScan",
    "WorldStore",
    "WorldStoreError",
    "chunk_key_of",
    "distance",
    "find_adjacent_target",
    "find_attackable_monster_groups",
    "find_mergeable_monster_groups",
    "find_player_groups",
    "generate_units",
    "growth_message",
    "is_available",
    "is_monster_group",
    "move_message",
    "parse_tile",
    "path",
    "plan_growth",
    "plan_merge",
    "plan_move",
    "scan_world",
    "select_attack_targets",
    "spawn_message",
    "total_resources",
    "unit_count",
]
