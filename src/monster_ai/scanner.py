"""Store-reading scans: the eight neighbours of a tile, and the whole world."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from typing import Any

from .classifier import has_player_presence, is_attackable_structure, is_monster_structure
from .geometry import chunk_key_of, parse_tile_key
from .models import AdjacentTarget, Coordinate, LocationOfInterest, WorldScan
from .store import TileShapeError, WorldStore, parse_tile

NEIGHBOUR_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

_logger = logging.getLogger("monster_ai.scanner")


def find_adjacent_target(
    store: WorldStore,
    world_id: str,
    location: Coordinate,
    *,
    rng: random.Random | None = None,
    chunker: Callable[[int, int], str] = chunk_key_of,
    logger: logging.Logger | None = None,
) -> AdjacentTarget | None:
    """Return the first neighbour holding an attackable structure or player groups.

    Neighbours are probed in shuffled order and the first hit wins, so a nearer or
    richer target may be passed over. A neighbour whose read fails is skipped.
    """
    rng = rng or random.Random()
    logger = logger or _logger

    offsets = list(NEIGHBOUR_OFFSETS)
    rng.shuffle(offsets)

    for dx, dy in offsets:
        neighbour = location.offset(dx, dy)
        chunk_key = chunker(neighbour.x, neighbour.y)
        try:
            raw = store.get(world_id, chunk_key, neighbour.key)
            if not raw:
                continue
            tile = parse_tile(raw)
        except Exception:  # noqa: BLE001 - a failed neighbour read never aborts the scan.
            logger.warning(
                "tile_fetch_failed",
                exc_info=True,
                extra={"world_id": world_id, "chunk_key": chunk_key, "tile_key": neighbour.key},
            )
            continue

        if tile.structure is not None and is_attackable_structure(tile.structure):
            return AdjacentTarget(x=neighbour.x, y=neighbour.y, structure=tile.structure)

        if has_player_presence(tile):
            return AdjacentTarget(x=neighbour.x, y=neighbour.y, has_player_groups=True)

    return None


def scan_world(
    store: WorldStore,
    world_id: str,
    chunks: Mapping[str, Mapping[str, Any] | None] | None = None,
    *,
    logger: logging.Logger | None = None,
) -> WorldScan:
    """Classify every occupied tile into spawns, monster structures and resource hotspots.

    ``chunks`` may be passed when the caller already holds them; otherwise they are
    read in bulk from ``store``. A tile can land in more than one list.
    """
    logger = logger or _logger
    if chunks is None:
        chunks = store.chunks(world_id)

    scan = WorldScan()
    tiles_seen = 0
    for chunk_key, chunk in chunks.items():
        if not isinstance(chunk, Mapping):
            continue

        for tile_key, raw in chunk.items():
            if not raw or not isinstance(raw, Mapping):
                continue

            try:
                coordinate = parse_tile_key(tile_key)
                tile = parse_tile(raw)
            except (ValueError, TileShapeError):
                logger.warning(
                    "tile_malformed",
                    exc_info=True,
                    extra={"world_id": world_id, "chunk_key": chunk_key, "tile_key": tile_key},
                )
                continue

            tiles_seen += 1
            base = {"x": coordinate.x, "y": coordinate.y, "chunk_key": chunk_key, "tile_key": tile_key}

            if tile.structure is not None and tile.structure.type == "spawn":
                scan.player_spawns.append(LocationOfInterest(**base, structure=tile.structure))

            if tile.structure is not None and is_monster_structure(tile.structure):
                scan.monster_structures.append(LocationOfInterest(**base, structure=tile.structure))

            if tile.resources:
                scan.resource_hotspots.append(LocationOfInterest(**base, resources=tile.resources))

    logger.info(
        "world_scan_completed",
        extra={
            "world_id": world_id,
            "tiles": tiles_seen,
            "player_spawns": len(scan.player_spawns),
            "monster_structures": len(scan.monster_structures),
            "resource_hotspots": len(scan.resource_hotspots),
        },
    )
    return scan
