"""Predicates over a single tile's groups and structure."""

from __future__ import annotations

from .models import Group, Structure, Tile

MONSTER = "monster"
IDLE = "idle"


def is_monster_group(group: Group) -> bool:
    return group.type == MONSTER


def is_available(group: Group) -> bool:
    """A group can act only when it is idle and not fighting."""
    return group.status == IDLE and not group.in_battle


def find_player_groups(tile: Tile) -> list[Group]:
    return [
        group
        for group in tile.groups.values()
        if group.owner and is_available(group) and not is_monster_group(group)
    ]


def find_mergeable_monster_groups(tile: Tile, exclude_group_id: str) -> list[Group]:
    return [
        group
        for group_id, group in tile.groups.items()
        if group_id != exclude_group_id and is_monster_group(group) and is_available(group)
    ]


def find_attackable_monster_groups(tile: Tile, exclude_group_id: str) -> list[Group]:
    """Rival monster groups a feral group may turn on instead of merging with."""
    return find_mergeable_monster_groups(tile, exclude_group_id)


def is_monster_structure(structure: Structure) -> bool:
    return structure.monster or structure.owner == MONSTER or (structure.type is not None and MONSTER in structure.type)


def is_player_structure(structure: Structure) -> bool:
    return not is_monster_structure(structure)


def is_attackable_structure(structure: Structure) -> bool:
    return structure.owner != MONSTER


def has_player_presence(tile: Tile) -> bool:
    return any(group.owner and group.owner != MONSTER for group in tile.groups.values())
