"""Batch-aware inventory expansion and shuffling."""

import random
from collections.abc import Iterable, MutableSequence
from typing import Any, Protocol

from mealz.models import Card


class Shuffler(Protocol):
    """Randomness source: anything that can shuffle a list in place uniformly."""

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


def make_rng(seed: int | None = None) -> random.Random:
    """Create the default randomness source, seeded from the OS unless a seed is given."""
    return random.Random(seed)


def expand_inventory(candidates: Iterable[Card], rng: Shuffler) -> list[Card]:
    """
    Build the shuffled multiset of card portions.

    Each card contributes ``max_batch_size`` entries, all referring to the same
    card. The whole multiset is then shuffled by ``rng``.
    """
    inventory = [card for card in candidates for _ in range(card.max_batch_size)]
    rng.shuffle(inventory)
    return inventory
