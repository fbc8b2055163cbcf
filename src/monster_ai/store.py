"""Boundary to the persistent world store.

The engine never holds a live connection. Callers inject something that satisfies
``WorldStore``; raw records read through it are validated into tagged dataclasses by
``parse_tile`` before any algorithm looks at them.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from .geometry import DEFAULT_CHUNK_SIZE, chunk_key_of, tile_key_of
from .models import Group, Personality, Structure, Tile, Unit


class WorldStoreError(RuntimeError):
    """Raised when the store cannot answer a read (network, timeout, corrupt data)."""


class TileShapeError(WorldStoreError):
    """Raised when a stored tile does not match the expected record shape."""


class WorldStore(Protocol):
    """Read-only access to chunked world tiles."""

    def get(self, world_id: str, chunk_key: str, tile_key: str) -> Mapping[str, Any] | None:
        """Return the raw tile record, or ``None`` when nothing is stored there."""

    def chunks(self, world_id: str) -> Mapping[str, Mapping[str, Any]]:
        """Return every chunk of a world keyed by chunk key."""


class InMemoryWorldStore:
    """Dict-backed store used for tests and embedding."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._chunk_size = chunk_size
        self._worlds: dict[str, dict[str, dict[str, Any]]] = {}

    def put_tile(self, world_id: str, x: int, y: int, tile: Mapping[str, Any]) -> None:
        chunk = self._worlds.setdefault(world_id, {}).setdefault(chunk_key_of(x, y, self._chunk_size), {})
        chunk[tile_key_of(x, y)] = dict(tile)

    def get(self, world_id: str, chunk_key: str, tile_key: str) -> Mapping[str, Any] | None:
        return self._worlds.get(world_id, {}).get(chunk_key, {}).get(tile_key)

    def chunks(self, world_id: str) -> Mapping[str, Mapping[str, Any]]:
        return self._worlds.get(world_id, {})


class JsonWorldStore:
    """Store backed by a JSON snapshot file.

    The file is shaped ``{"worlds": {<world>: {"chunks": {<chunk>: {<tile>: {...}}}}}}``
    and is re-read on every call.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path)

    def get(self, world_id: str, chunk_key: str, tile_key: str) -> Mapping[str, Any] | None:
        chunk = self.chunks(world_id).get(chunk_key)
        if not isinstance(chunk, Mapping):
            return None
        return chunk.get(tile_key)

    def chunks(self, world_id: str) -> Mapping[str, Mapping[str, Any]]:
        world = self._load().get("worlds", {}).get(world_id)
        if not isinstance(world, Mapping):
            return {}
        chunks = world.get("chunks")
        return chunks if isinstance(chunks, Mapping) else {}

    def _load(self) -> dict[str, Any]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise WorldStoreError(f"Unable to read world snapshot {self._path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise WorldStoreError(f"World snapshot {self._path} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise WorldStoreError(f"World snapshot {self._path} must contain a JSON object")
        return payload


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TileShapeError(f"Expected {what} to be a mapping, got {type(value).__name__}")
    return value


def _as_records(raw: Any) -> list[tuple[str | None, Any]]:
    # Sparse arrays come back from the store as objects keyed "0", "1", ...
    if isinstance(raw, list):
        return [(None, item) for item in raw]
    if isinstance(raw, Mapping):
        return [(str(key), item) for key, item in raw.items()]
    return []


def _parse_unit(unit_id: str | None, raw: Any) -> Unit | None:
    if not isinstance(raw, Mapping):
        return None
    resolved_id = raw.get("id", unit_id)
    if resolved_id is None:
        return None
    return Unit(id=str(resolved_id), type=str(raw.get("type", "unknown")))


def _parse_units(raw: Any) -> dict[str, Unit] | list[Unit] | None:
    """Units are optional detail; unreadable records are dropped, not fatal."""
    if isinstance(raw, list):
        return [unit for _, item in _as_records(raw) if (unit := _parse_unit(None, item)) is not None]
    if isinstance(raw, Mapping):
        return {
            unit_id: unit
            for unit_id, item in _as_records(raw)
            if unit_id is not None and (unit := _parse_unit(unit_id, item)) is not None
        }
    return None


def _parse_items(raw: Any) -> list[dict[str, Any]]:
    return [dict(item) for _, item in _as_records(raw) if isinstance(item, Mapping)]


def _parse_personality(raw: Any) -> Personality | None:
    if not isinstance(raw, Mapping):
        return None
    return Personality(emoji=_optional_str(raw.get("emoji")), name=_optional_str(raw.get("name")))


def _parse_group(group_id: str, raw: Any) -> Group:
    record = _require_mapping(raw, f"group {group_id}")
    return Group(
        id=group_id,
        type=_optional_str(record.get("type")),
        owner=_optional_str(record.get("owner")),
        status=_optional_str(record.get("status")),
        in_battle=bool(record.get("inBattle", False)),
        units=_parse_units(record.get("units")),
        personality=_parse_personality(record.get("personality")),
        name=_optional_str(record.get("name")),
        items=_parse_items(record.get("items")),
        preferred_structure_id=_optional_str(record.get("preferredStructureId")),
    )


def _parse_structure(raw: Any) -> Structure | None:
    if raw is None:
        return None
    record = _require_mapping(raw, "structure")
    known = {"type", "owner", "monster", "id", "name"}
    return Structure(
        type=_optional_str(record.get("type")),
        owner=_optional_str(record.get("owner")),
        monster=record.get("monster") is True,
        id=_optional_str(record.get("id")),
        name=_optional_str(record.get("name")),
        details={key: value for key, value in record.items() if key not in known},
    )


def parse_tile(raw: Any) -> Tile:
    """Validate a raw tile record and convert it to a ``Tile``.

    Only the shapes classification depends on are enforced: the tile, its structure,
    its group and resource mappings, and each group record. Malformed optional group
    detail (units, items, personality) degrades to an empty default.
    """
    record = _require_mapping(raw, "tile")
    groups = _require_mapping(record.get("groups") or {}, "groups")
    resources = _require_mapping(record.get("resources") or {}, "resources")
    return Tile(
        structure=_parse_structure(record.get("structure")),
        groups={str(group_id): _parse_group(str(group_id), group) for group_id, group in groups.items()},
        resources=dict(resources),
    )
