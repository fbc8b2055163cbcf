"""Decide what a monster group does next.

Every function here returns a plan; persisting moves, units and chat lines is the
caller's job.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from . import config
from .accounting import generate_units, unit_count, units_as_mapping
from .geometry import distance, path, step_towards
from .models import (
    AdjacentTarget,
    Coordinate,
    GrowthPlan,
    Group,
    LocationOfInterest,
    MergePlan,
    MovePlan,
    TargetType,
    WorldScan,
)
from .narrative import attack_move_message, growth_message, merge_message, move_message

STEP_THRESHOLD = 1.5
MONSTER_STRUCTURE_CHANCE = 0.7
RESOURCE_CHANCE = 0.7
DEPOSIT_CHANCE = 0.6
SMALL_GROUP_LIMIT = 5
MEDIUM_GROUP_LIMIT = 10
MAX_ATTACK_TARGETS = 3

DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)


def _nearest(
    location: Coordinate,
    candidates: Sequence[LocationOfInterest],
    max_distance: float,
) -> tuple[LocationOfInterest | None, float]:
    best: LocationOfInterest | None = None
    best_distance = float("inf")
    for candidate in candidates:
        candidate_distance = distance(location, candidate.coordinate)
        if candidate_distance < best_distance and candidate_distance < max_distance:
            best = candidate
            best_distance = candidate_distance
    return best, best_distance


def _choose_target(
    group: Group,
    location: Coordinate,
    scan: WorldScan,
    rng: random.Random,
    max_distance: float,
) -> tuple[LocationOfInterest | None, TargetType | None, float]:
    if group.preferred_structure_id:
        for home in scan.monster_structures:
            if home.structure is not None and home.structure.id == group.preferred_structure_id:
                home_distance = distance(location, home.coordinate)
                if home_distance <= max_distance:
                    return home, TargetType.monster_home, home_distance
                break

    if scan.monster_structures and rng.random() < MONSTER_STRUCTURE_CHANCE:
        target, target_distance = _nearest(location, scan.monster_structures, max_distance)
        if target is not None:
            return target, TargetType.monster_structure, target_distance

    size = unit_count(group)
    if size < SMALL_GROUP_LIMIT:
        if scan.resource_hotspots and rng.random() < RESOURCE_CHANCE:
            target, target_distance = _nearest(location, scan.resource_hotspots, max_distance)
            return target, TargetType.resource_hotspot, target_distance
    elif size < MEDIUM_GROUP_LIMIT:
        if scan.monster_structures and rng.random() < DEPOSIT_CHANCE:
            target, target_distance = _nearest(location, scan.monster_structures, max_distance)
            return target, TargetType.monster_structure, target_distance
    elif scan.player_spawns:
        target, target_distance = _nearest(location, scan.player_spawns, max_distance)
        return target, TargetType.player_spawn, target_distance

    return None, None, float("inf")


def random_move(location: Coordinate, *, rng: random.Random | None = None) -> MovePlan:
    """Wander one to three tiles in one of the eight compass directions."""
    rng = rng or random.Random()
    dx, dy = rng.choice(DIRECTIONS)
    reach = rng.randint(1, 3)
    target = location.offset(dx * reach, dy * reach)
    return MovePlan(
        target_type=TargetType.random,
        target=target,
        distance=distance(location, target),
        path=path(location, target, rng.randint(1, 3)),
    )


def plan_move(
    group: Group,
    location: Coordinate,
    scan: WorldScan,
    *,
    adjacent: AdjacentTarget | None = None,
    rng: random.Random | None = None,
    max_scan_distance: float | None = None,
) -> MovePlan:
    """Pick the next destination for ``group`` standing at ``location``.

    An adjacent attack target always wins. After that the group heads home, to a
    lair, to resources or to a player spawn depending on its size and chance, and
    wanders randomly when nothing is within ``max_scan_distance``, which defaults to
    the configured ``MONSTER_AI_MAX_SCAN_DISTANCE``.
    """
    rng = rng or random.Random()
    if max_scan_distance is None:
        max_scan_distance = config.settings.max_scan_distance

    if adjacent is not None:
        target = adjacent.coordinate
        return MovePlan(
            target_type=TargetType.structure_attack,
            target=target,
            distance=distance(location, target),
            path=[location, target],
            message=attack_move_message(group, adjacent),
        )

    chosen, target_type, target_distance = _choose_target(group, location, scan, rng, max_scan_distance)
    if chosen is None or target_type is None or target_distance > max_scan_distance:
        return random_move(location, rng=rng)

    target = chosen.coordinate
    if target_distance > STEP_THRESHOLD:
        next_step = step_towards(location, target)
        return MovePlan(
            target_type=target_type,
            target=target,
            distance=target_distance,
            path=[location, next_step],
            message=move_message(group, target_type, target),
        )

    return MovePlan(
        target_type=target_type,
        target=target,
        distance=target_distance,
        path=path(location, target, rng.randint(1, 3)),
        message=move_message(group, target_type, target),
    )


def select_attack_targets(player_groups: Sequence[Group], limit: int = MAX_ATTACK_TARGETS) -> list[Group]:
    """The smallest player groups first, at most ``limit`` of them."""
    return sorted(player_groups, key=unit_count)[:limit]


def plan_merge(group: Group, mergeable: Sequence[Group]) -> MergePlan | None:
    if not mergeable:
        return None

    units = units_as_mapping(group)
    items = list(group.items)
    for other in mergeable:
        units.update(units_as_mapping(other))
        items.extend(other.items)

    return MergePlan(
        units=units,
        items=items,
        absorbed_group_ids=[other.id for other in mergeable],
        total_units=sum(unit_count(member) for member in (group, *mergeable)),
        message=merge_message(group, len(mergeable)),
    )


def plan_growth(
    group: Group,
    monster_name: str,
    added: int,
    location: str,
    *,
    unit_type: str | None = None,
    rng: random.Random | None = None,
) -> GrowthPlan:
    if added < 0:
        raise ValueError(f"Cannot grow a group by {added} units")

    if unit_type is None:
        existing = list(units_as_mapping(group).values())
        unit_type = existing[0].type if existing else monster_name

    old_count = unit_count(group)
    new_count = old_count + added
    return GrowthPlan(
        new_units=generate_units(unit_type, added, rng=rng),
        old_count=old_count,
        new_count=new_count,
        message=growth_message(monster_name, old_count, new_count, location),
    )
