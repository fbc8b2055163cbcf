from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from monster_ai.store import InMemoryWorldStore


class FixedRandom:
    """Deterministic stand-in for ``random.Random``: always the lowest option."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq: Sequence[Any]) -> Any:
        return seq[0]

    def shuffle(self, items: list[Any]) -> None:
        items.reverse()


@pytest.fixture
def store() -> InMemoryWorldStore:
    return InMemoryWorldStore()


@pytest.fixture
def fixed_random() -> FixedRandom:
    return FixedRandom()
