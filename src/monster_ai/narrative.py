"""Human-readable event lines for spawns, growth, merges and movement."""

from __future__ import annotations

from .accounting import unit_count
from .models import AdjacentTarget, Coordinate, Group, Personality, TargetType

DEFAULT_GROUP_NAME = "Monster group"

_MOVE_TEMPLATES = {
    TargetType.player_spawn.value: "A {size} {prefix}{name} is marching toward the settlement at ({x}, {y})!",
    TargetType.monster_structure.value: "{prefix}{name} is moving toward their lair at ({x}, {y}).",
    TargetType.resource_hotspot.value: "{prefix}{name} is searching for resources near ({x}, {y}).",
    TargetType.monster_home.value: "{prefix}{name} is returning to their home at ({x}, {y}).",
    TargetType.territory_return.value: "The territorial {prefix}{name} is returning to their claimed area at ({x}, {y}).",
}
_MOVE_FALLBACK = "{prefix}{name} is on the move."


def _display_location(location: str) -> str:
    return location.replace(",", ", ", 1)


def _size_tier(group: Group) -> str:
    count = unit_count(group)
    if count <= 3:
        return "small"
    if count <= 8:
        return "medium-sized"
    return "large"


def spawn_message(monster_name: str, count: int, location: str, personality: Personality | None = None) -> str:
    where = _display_location(location)
    flavour = f" {personality.emoji} {personality.name}" if personality else ""

    if count <= 2:
        return f"A small group of{flavour} {monster_name} has been spotted at ({where})"
    if count <= 5:
        return f"A band of{flavour} {monster_name} has appeared at ({where})"
    return f"A large horde of{flavour} {monster_name} has emerged at ({where})"


def growth_message(monster_name: str, old_count: int, new_count: int, location: str) -> str:
    if new_count < old_count:
        raise ValueError(f"Group cannot grow from {old_count} to {new_count} units")

    where = _display_location(location)
    added = new_count - old_count
    if added == 1:
        return f"Another creature has joined the {monster_name} at ({where})"
    return f"{added} more creatures have joined the {monster_name} at ({where})"


def move_message(group: Group, target_type: TargetType | str, target_location: Coordinate) -> str:
    key = target_type.value if isinstance(target_type, TargetType) else target_type
    emoji = group.personality.emoji if group.personality else None
    template = _MOVE_TEMPLATES.get(key, _MOVE_FALLBACK)
    return template.format(
        size=_size_tier(group),
        prefix=f"{emoji} " if emoji else "",
        name=group.name or DEFAULT_GROUP_NAME,
        x=target_location.x,
        y=target_location.y,
    )


def attack_move_message(group: Group, target: AdjacentTarget) -> str:
    name = group.name or DEFAULT_GROUP_NAME
    if target.structure is not None:
        structure_name = target.structure.name or target.structure.type or "settlement"
        return f"{name} is moving to attack the {structure_name} at ({target.x}, {target.y})!"
    return f"{name} is moving to attack players at ({target.x}, {target.y})!"


def merge_message(group: Group, absorbed_count: int) -> str:
    name = group.name or DEFAULT_GROUP_NAME
    noun = "group" if absorbed_count == 1 else "groups"
    return f"{name} has grown in strength, absorbing {absorbed_count} other monster {noun}!"
