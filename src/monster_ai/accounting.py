"""Unit and resource bookkeeping for groups."""

from __future__ import annotations

import random
import time
from collections.abc import Mapping
from typing import Any

from .models import Group, Unit

_ID_RANDOM_RANGE = 10_000


def unit_count(group: Group) -> int:
    if group.units is None:
        return 1
    return len(group.units)


def total_resources(items: Any) -> int:
    """Sum item quantities, counting an item without a quantity as one.

    Anything that is not a list or tuple of items totals zero.
    """
    if not isinstance(items, (list, tuple)):
        return 0

    total = 0
    for item in items:
        quantity = item.get("quantity") if isinstance(item, Mapping) else None
        total += quantity or 1
    return total


def generate_units(unit_type: str, count: int, *, rng: random.Random | None = None) -> dict[str, Unit]:
    rng = rng or random.Random()
    stamp = time.time_ns() // 1_000_000
    units: dict[str, Unit] = {}
    for index in range(count):
        unit_id = f"monster_unit_{stamp}_{rng.randrange(_ID_RANDOM_RANGE)}_{index}"
        units[unit_id] = Unit(id=unit_id, type=unit_type)
    return units


def units_as_mapping(group: Group) -> dict[str, Unit]:
    if group.units is None:
        return {}
    if isinstance(group.units, Mapping):
        return dict(group.units)
    return {unit.id: unit for unit in group.units}
