from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TargetType(str, Enum):
    player_spawn = "player_spawn"
    monster_structure = "monster_structure"
    resource_hotspot = "resource_hotspot"
    monster_home = "monster_home"
    territory_return = "territory_return"
    structure_attack = "structure_attack"
    random = "random"


@dataclass(frozen=True, slots=True)
class Coordinate:
    x: int
    y: int

    @property
    def key(self) -> str:
        return f"{self.x},{self.y}"

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)


@dataclass(slots=True)
class Unit:
    id: str
    type: str


@dataclass(slots=True)
class Personality:
    emoji: str | None = None
    name: str | None = None


@dataclass(slots=True)
class Structure:
    type: str | None = None
    owner: str | None = None
    monster: bool = False
    id: str | None = None
    name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Group:
    id: str
    type: str | None = None
    owner: str | None = None
    status: str | None = None
    in_battle: bool = False
    units: dict[str, Unit] | list[Unit] | None = None
    personality: Personality | None = None
    name: str | None = None
    items: list[dict[str, Any]] = field(default_factory=list)
    preferred_structure_id: str | None = None


@dataclass(slots=True)
class Tile:
    structure: Structure | None = None
    groups: dict[str, Group] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class AdjacentTarget:
    """A neighbouring tile worth attacking: a non-monster structure or player groups."""

    x: int
    y: int
    structure: Structure | None = None
    has_player_groups: bool = False

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.x, self.y)


@dataclass(slots=True)
class LocationOfInterest:
    x: int
    y: int
    chunk_key: str
    tile_key: str
    structure: Structure | None = None
    resources: dict[str, Any] | None = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.x, self.y)


@dataclass(slots=True)
class WorldScan:
    player_spawns: list[LocationOfInterest] = field(default_factory=list)
    monster_structures: list[LocationOfInterest] = field(default_factory=list)
    resource_hotspots: list[LocationOfInterest] = field(default_factory=list)


@dataclass(slots=True)
class MovePlan:
    """Where a group should go next and how it gets there."""

    target_type: TargetType
    target: Coordinate
    distance: float
    path: list[Coordinate]
    message: str | None = None


@dataclass(slots=True)
class MergePlan:
    units: dict[str, Unit]
    items: list[dict[str, Any]]
    absorbed_group_ids: list[str]
    total_units: int
    message: str


@dataclass(slots=True)
class GrowthPlan:
    new_units: dict[str, Unit]
    old_count: int
    new_count: int
    message: str
