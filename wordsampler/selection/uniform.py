"""Uniform selection without replacement."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

import numpy as np

from wordsampler.rng import SeedLike, make_rng
from wordsampler.selection.base import SelectionPolicy, check_count

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fraction of the catalogue picked after which rejection sampling gives way to
# drawing from an explicit list of the indices not picked yet.
REJECTION_THRESHOLD = 0.8


def choose_indices(n: int, count: int, rng: np.random.Generator) -> list[int]:
    """Draw ``count`` distinct indices from ``range(n)`` in draw order.

    Indices are drawn by rejection against the already-picked set until more
    than ``REJECTION_THRESHOLD`` of the range is taken; from then on the
    remaining indices are materialized once and drawn from directly, which
    bounds the work for near-complete selections.

    Args:
        n: Size of the index range.
        count: Number of indices to draw; must not exceed ``n``.
        rng: Generator supplying all randomness.

    Returns:
        List of distinct indices.
    """
    if count == 0:
        return []
    if count == 1:
        return [int(rng.integers(n))]

    picked_set: set[int] = set()
    picked: list[int] = []
    not_yet_picked: list[int] = []
    from_remaining = False

    for i in range(1, count + 1):
        if from_remaining:
            index = not_yet_picked.pop(int(rng.integers(len(not_yet_picked))))
        else:
            index = int(rng.integers(n))
            while index in picked_set:
                index = int(rng.integers(n))

        picked_set.add(index)
        picked.append(index)

        if i < count and not from_remaining and i / n > REJECTION_THRESHOLD:
            from_remaining = True
            not_yet_picked = [j for j in range(n) if j not in picked_set]

    return picked


def choose_without_replacement(
    items: Sequence[T],
    count: int,
    seed: SeedLike = None,
) -> list[T]:
    """Select ``count`` distinct items uniformly at random.

    Args:
        items: Candidate catalogue. Duplicate values are distinct slots.
        count: Number of items to select. Requests larger than the catalogue
            are clamped to its size.
        seed: Optional seed (or generator) for a reproducible selection.

    Returns:
        Selected items in draw order, ``min(count, len(items))`` long.

    Raises:
        ValueError: If ``count`` is negative.

    Examples:
        >>> choose_without_replacement(["X"], 1, seed=42)
        ['X']
    """
    check_count(count)
    rng = make_rng(seed)
    if count == 0:
        return []
    n = len(items)
    if count > n:
        logger.debug(f"Clamping uniform selection of {count} to catalogue size {n}")
        count = n
    return [items[i] for i in choose_indices(n, count, rng)]


class UniformPolicy(SelectionPolicy):
    """Select catalogue items uniformly at random, ignoring recording counts."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize uniform policy.

        Args:
            seed: Random seed for reproducibility.
        """
        self._rng = make_rng(seed)

    def select(
        self,
        items: Sequence[Any],
        n_select: int,
        counts: Sequence[int] | None = None,
    ) -> list[Any]:
        """Return uniformly drawn items."""
        return choose_without_replacement(items, n_select, seed=self._rng)
