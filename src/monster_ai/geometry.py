"""Grid geometry: distances, straight-line paths and chunk partitioning."""

from __future__ import annotations

import math

from .models import Coordinate

DEFAULT_CHUNK_SIZE = 20
DEFAULT_MAX_STEPS = 20


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def distance(a: Coordinate, b: Coordinate) -> float:
    return math.dist((a.x, a.y), (b.x, b.y))


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def path(start: Coordinate, end: Coordinate, max_steps: int = DEFAULT_MAX_STEPS) -> list[Coordinate]:
    """Rasterize the line from ``start`` towards ``end`` with Bresenham's error term.

    At most ``min(max_steps, manhattan distance)`` steps are taken after ``start``.
    When the walk stops short of ``end`` and the path holds fewer than ``max_steps``
    points, ``end`` is appended as a final jump.
    """
    x0, y0 = _round_half_up(start.x), _round_half_up(start.y)
    x1, y1 = _round_half_up(end.x), _round_half_up(end.y)

    points = [Coordinate(x0, y0)]
    if (x0, y0) == (x1, y1):
        return points

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1

    err = dx - dy
    x, y = x0, y0
    steps_left = min(max_steps, dx + dy)

    while (x != x1 or y != y1) and steps_left > 0:
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        points.append(Coordinate(x, y))
        steps_left -= 1

    last = points[-1]
    if len(points) < max_steps and (last.x, last.y) != (x1, y1):
        points.append(Coordinate(x1, y1))

    return points


def step_towards(start: Coordinate, target: Coordinate) -> Coordinate:
    """Return the tile one step from ``start`` along the direction to ``target``."""
    dx = target.x - start.x
    dy = target.y - start.y
    length = math.hypot(dx, dy)
    if length == 0:
        return start
    return Coordinate(start.x + _round_half_up(dx / length), start.y + _round_half_up(dy / length))


def chunk_key_of(x: int, y: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    return f"{x // chunk_size},{y // chunk_size}"


def local_coordinates(x: int, y: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> tuple[int, int]:
    # Python's modulo is already non-negative for a positive divisor.
    return x % chunk_size, y % chunk_size


def tile_key_of(x: int, y: int) -> str:
    return f"{x},{y}"


def parse_tile_key(tile_key: str) -> Coordinate:
    parts = tile_key.split(",")
    if len(parts) != 2:
        raise ValueError(f"Malformed tile key: {tile_key!r}")
    try:
        return Coordinate(int(parts[0]), int(parts[1]))
    except ValueError as exc:
        raise ValueError(f"Malformed tile key: {tile_key!r}") from exc
