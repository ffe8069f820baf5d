"""Draw distinct practice item indices."""

from __future__ import annotations

import random


class DrawRangeError(ValueError):
    """Raised when a draw asks for more distinct items than exist."""


def draw_distinct(k: int, population_size: int, rng: random.Random | None = None) -> set[int]:
    """Return ``k`` distinct indices chosen uniformly from ``range(population_size)``.

    Impossible requests are rejected rather than clamped, so a caller always gets
    exactly the number of items it asked for.
    """
    if population_size < 0:
        raise DrawRangeError(f"Population size must not be negative, got {population_size}.")
    if k < 0:
        raise DrawRangeError(f"Cannot draw a negative number of items ({k}).")
    if k > population_size:
        raise DrawRangeError(f"Cannot draw {k} distinct items from {population_size}.")
    source = rng if rng is not None else random
    # Partial shuffle over the index range; terminates even when k == population_size.
    return set(source.sample(range(population_size), k))
