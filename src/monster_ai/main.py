"""Developer CLI for inspecting AI decisions against a JSON world snapshot."""

from __future__ import annotations

import random
from dataclasses import asdict
from functools import partial

import typer
from rich import print

from monster_ai.config import settings
from monster_ai.geometry import chunk_key_of, path as build_path
from monster_ai.models import Coordinate
from monster_ai.scanner import find_adjacent_target, scan_world
from monster_ai.store import JsonWorldStore, WorldStoreError
from monster_ai.telemetry import LoggingTelemetry, configure_logging

app = typer.Typer(help="Monster AI inspection tools")


def _build_store(snapshot: str | None) -> JsonWorldStore:
    source = snapshot or settings.snapshot_path
    if not source:
        raise typer.BadParameter("Provide --snapshot or set MONSTER_AI_SNAPSHOT_PATH")
    return JsonWorldStore(source)


@app.callback()
def main() -> None:
    configure_logging(settings.log_level)


@app.command()
def scan(
    world_id: str,
    snapshot: str = typer.Option(None, help="Path to a JSON world snapshot"),
) -> None:
    """Classify every tile of a world into spawns, lairs and resource hotspots."""
    store = _build_store(snapshot)
    try:
        result = scan_world(store, world_id)
    except WorldStoreError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    summary = {
        "player_spawns": len(result.player_spawns),
        "monster_structures": len(result.monster_structures),
        "resource_hotspots": len(result.resource_hotspots),
    }
    LoggingTelemetry().emit("cli_scan", {"world_id": world_id, **summary})
    print({"summary": summary, "scan": asdict(result)})


@app.command()
def adjacent(
    world_id: str,
    x: int = typer.Option(..., help="Current X"),
    y: int = typer.Option(..., help="Current Y"),
    seed: int = typer.Option(None, help="Seed for the neighbour shuffle"),
    snapshot: str = typer.Option(None, help="Path to a JSON world snapshot"),
) -> None:
    """Show the attack target a group at (x, y) would pick next to it."""
    store = _build_store(snapshot)
    target = find_adjacent_target(
        store,
        world_id,
        Coordinate(x, y),
        rng=random.Random(seed),
        chunker=partial(chunk_key_of, chunk_size=settings.chunk_size),
    )
    print({"adjacent_target": asdict(target) if target else None})


@app.command()
def path(
    from_x: int = typer.Option(..., help="Start X"),
    from_y: int = typer.Option(..., help="Start Y"),
    to_x: int = typer.Option(..., help="Target X"),
    to_y: int = typer.Option(..., help="Target Y"),
    max_steps: int = typer.Option(settings.max_path_steps, help="Step cap"),
) -> None:
    """Print the straight-line path between two tiles."""
    points = build_path(Coordinate(from_x, from_y), Coordinate(to_x, to_y), max_steps)
    print({"path": [(point.x, point.y) for point in points]})


if __name__ == "__main__":
    app()
