"""Lowest-count-first stratified selection."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import Any, TypeVar

from wordsampler.rng import SeedLike, make_rng
from wordsampler.selection.base import SelectionPolicy, check_aligned, check_count
from wordsampler.selection.uniform import choose_indices

logger = logging.getLogger(__name__)

T = TypeVar("T")


def choose_least_recorded(
    items: Sequence[T],
    counts: Sequence[int],
    count: int,
    seed: SeedLike = None,
) -> list[T]:
    """Select up to ``count`` items, least-recorded first.

    Items are grouped by recording count and the groups are drained in
    ascending count order. Within a group, items are drawn uniformly without
    replacement, so ties are broken at random. A higher-count item is only
    chosen once every lower-count item has been taken.

    Args:
        items: Candidate catalogue.
        counts: Number of prior recordings per item, aligned by index.
        count: Maximum number of items to select.
        seed: Optional seed (or generator) for a reproducible selection.

    Returns:
        Selected items, lowest-count group first; shorter than ``count`` when
        the catalogue runs out.

    Raises:
        ValueError: If ``count`` is negative, the sequences differ in length,
            or a count is negative.
    """
    check_count(count)
    check_aligned(items, counts, "counts")
    rng = make_rng(seed)
    if count == 0 or len(items) == 0:
        return []

    buckets: dict[int, list[int]] = defaultdict(list)
    for index, recorded in enumerate(counts):
        if int(recorded) != recorded:
            raise ValueError(f"recording counts must be integers, got {recorded!r}")
        recorded = int(recorded)
        if recorded < 0:
            raise ValueError("recording counts must be non-negative")
        buckets[recorded].append(index)

    logger.debug(
        f"Least-recorded selection of {count} from {len(items)} items "
        f"across {len(buckets)} count levels"
    )

    result: list[T] = []
    remaining = count
    for recorded in sorted(buckets):
        if remaining <= 0:
            break
        bucket = buckets[recorded]
        n_selected = min(len(bucket), remaining)
        result.extend(items[bucket[i]] for i in choose_indices(len(bucket), n_selected, rng))
        remaining -= n_selected

    return result


class LeastRecordedPolicy(SelectionPolicy):
    """Prefer the words with the fewest recordings, breaking ties at random."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize least-recorded policy.

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
        """Return items from the lowest-count groups first."""
        if counts is None:
            counts = [0] * len(items)
        return choose_least_recorded(items, counts, n_select, seed=self._rng)
