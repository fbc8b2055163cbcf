from __future__ import annotations

import json
from pathlib import Path

import pytest

from monster_ai.models import Unit
from monster_ai.store import InMemoryWorldStore, JsonWorldStore, TileShapeError, WorldStoreError, parse_tile


def test_parse_tile_builds_tagged_records() -> None:
    tile = parse_tile(
        {
            "structure": {"type": "spawn", "owner": "alice", "id": "s1", "level": 2},
            "groups": {
                "g1": {
                    "type": "monster",
                    "status": "idle",
                    "inBattle": True,
                    "units": {"u1": {"type": "orc"}},
                    "personality": {"emoji": "🐺", "name": "Feral"},
                    "preferredStructureId": "lair-9",
                },
                "g2": {"owner": "bob", "units": [{"id": "u2", "type": "knight"}]},
            },
            "resources": {"wood": {"qty": 5}},
        }
    )

    assert tile.structure is not None
    assert tile.structure.type == "spawn"
    assert tile.structure.monster is False
    assert tile.structure.details == {"level": 2}
    assert tile.groups["g1"].id == "g1"
    assert tile.groups["g1"].in_battle is True
    assert tile.groups["g1"].units == {"u1": Unit("u1", "orc")}
    assert tile.groups["g1"].preferred_structure_id == "lair-9"
    assert tile.groups["g1"].personality is not None
    assert tile.groups["g1"].personality.emoji == "🐺"
    assert tile.groups["g2"].units == [Unit("u2", "knight")]
    assert tile.resources == {"wood": {"qty": 5}}


def test_parse_tile_allows_missing_sections() -> None:
    tile = parse_tile({})

    assert tile.structure is None
    assert tile.groups == {}
    assert tile.resources == {}


@pytest.mark.parametrize(
    "raw",
    [
        "not a tile",
        {"groups": ["g1"]},
        {"groups": {"g1": "idle"}},
        {"structure": "spawn"},
        {"resources": ["wood"]},
    ],
)
def test_parse_tile_rejects_malformed_records(raw: object) -> None:
    with pytest.raises(TileShapeError):
        parse_tile(raw)


def test_in_memory_store_places_tiles_by_chunk() -> None:
    store = InMemoryWorldStore(chunk_size=10)
    store.put_tile("w1", -3, 12, {"resources": {"ore": {}}})

    assert store.get("w1", "-1,1", "-3,12") == {"resources": {"ore": {}}}
    assert store.get("w1", "0,0", "-3,12") is None
    assert store.get("other", "-1,1", "-3,12") is None
    assert list(store.chunks("w1")) == ["-1,1"]


def test_json_store_reads_snapshot(tmp_path: Path) -> None:
    snapshot = tmp_path / "world.json"
    snapshot.write_text(
        json.dumps({"worlds": {"w1": {"chunks": {"0,0": {"1,2": {"structure": {"type": "spawn"}}}}}}}),
        encoding="utf-8",
    )
    store = JsonWorldStore(snapshot)

    assert store.get("w1", "0,0", "1,2") == {"structure": {"type": "spawn"}}
    assert store.get("w1", "0,0", "9,9") is None
    assert store.get("w1", "5,5", "100,100") is None
    assert store.chunks("missing") == {}


def test_json_store_raises_store_error_for_unreadable_snapshots(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(WorldStoreError):
        JsonWorldStore(broken).get("w1", "0,0", "0,0")
    with pytest.raises(WorldStoreError):
        JsonWorldStore(tmp_path / "missing.json").chunks("w1")


def test_parse_tile_accepts_sparse_array_items() -> None:
    tile = parse_tile({"groups": {"p1": {"owner": "alice", "items": {"0": {"id": "wood"}, "2": {"id": "ore"}}}}})

    assert tile.groups["p1"].items == [{"id": "wood"}, {"id": "ore"}]


def test_parse_tile_degrades_malformed_optional_group_detail() -> None:
    tile = parse_tile(
        {
            "structure": {"type": "spawn", "owner": "alice"},
            "groups": {
                "g1": {
                    "owner": "alice",
                    "status": "idle",
                    "items": "wood",
                    "personality": "grumpy",
                    "units": [{"type": "orc"}, "broken", {"id": "u2", "type": "orc"}],
                },
                "g2": {"type": "monster", "units": 7},
            },
        }
    )

    player, monster = tile.groups["g1"], tile.groups["g2"]
    assert player.items == []
    assert player.personality is None
    assert player.units == [Unit("u2", "orc")]
    assert monster.units is None
    assert tile.structure is not None
    assert tile.structure.type == "spawn"
