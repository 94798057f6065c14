"""Weight-proportional selection without replacement.

Weights are sorted ascending and laid end to end as cumulative buckets. Each
draw picks a point in ``(0, S]`` where ``S`` is the remaining total weight,
binary-searches the bucket holding it, and removes that bucket before the next
draw, so later draws renormalize over the remaining pool.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import partial
from typing import Any, Callable, TypeVar

import numpy as np

from wordsampler.rng import SeedLike, make_rng
from wordsampler.selection.base import SelectionPolicy, check_aligned, check_count
from wordsampler.weights import WEIGHTINGS, quota_weights

logger = logging.getLogger(__name__)

T = TypeVar("T")


def locate_region(
    regions: Sequence[float],
    target: float,
    lo: int = 0,
    hi: int | None = None,
) -> int:
    """Find the cumulative bucket containing ``target``.

    Returns the smallest index ``i`` in ``[lo, hi)`` with
    ``regions[i] >= target``. A target past the last bound of the range maps
    to ``hi - 1``.

    Args:
        regions: Ascending cumulative bucket upper bounds.
        target: Point to locate.
        lo: First index of the search range.
        hi: End of the search range (exclusive); defaults to ``len(regions)``.

    Examples:
        >>> locate_region([1.5, 3.7, 4.9, 8.0, 11.6, 17.7], 9.4, 0, 6)
        4
    """
    if hi is None:
        hi = len(regions)
    end = hi
    while lo < hi:
        mid = (lo + hi) // 2
        if regions[mid] >= target:
            hi = mid
        elif mid + 1 >= end:
            return mid
        elif regions[mid + 1] >= target:
            return mid + 1
        else:
            lo = mid + 1
    return lo


def choose_weighted_without_replacement(
    items: Sequence[T],
    weights: Sequence[float],
    count: int,
    seed: SeedLike = None,
) -> list[T]:
    """Select up to ``count`` distinct items with probability proportional to weight.

    Each draw is proportional to the weight remaining in the pool after the
    earlier draws were removed. Items with zero weight are never selected, so
    the result is shorter than ``count`` once the positive-weight items run out.

    Args:
        items: Candidate catalogue.
        weights: Non-negative weight per item, aligned by index.
        count: Maximum number of items to select.
        seed: Optional seed (or generator) for a reproducible selection.

    Returns:
        Selected items in draw order.

    Raises:
        ValueError: If ``count`` is negative, the sequences differ in length,
            or a weight is negative or not finite.
    """
    check_count(count)
    check_aligned(items, weights, "weights")
    rng = make_rng(seed)
    if count == 0 or len(items) == 0:
        return []

    weight_arr = np.asarray(weights, dtype=np.float64)
    if not np.all(np.isfinite(weight_arr)):
        raise ValueError("weights must be finite")
    if float(weight_arr.min()) < 0.0:
        raise ValueError("weights must be non-negative")
    if float(weight_arr.sum()) == 0.0:
        return []

    logger.debug(f"Weighted selection of {count} from {len(items)} items")

    order = np.argsort(weight_arr, kind="stable")
    sorted_weights = weight_arr[order]
    cumulative = np.cumsum(sorted_weights)
    logger.debug(f"Cumulative weights: {cumulative.tolist()}")

    result: list[T] = []
    while len(result) < count and order.size > 0:
        total = float(cumulative[-1])
        if total <= 0.0:
            break
        point = total * (1.0 - rng.random())
        bucket = locate_region(cumulative, point)

        result.append(items[int(order[bucket])])

        order = np.delete(order, bucket)
        sorted_weights = np.delete(sorted_weights, bucket)
        # Rebuilt rather than shifted in place so repeated draws do not drift.
        cumulative = np.cumsum(sorted_weights)

    return result


class WeightedPolicy(SelectionPolicy):
    """Select items with probability derived from their recording counts.

    Counts are turned into weights with one of the ``weights`` transforms;
    explicit weights can be supplied instead through ``weights_fn``.
    """

    def __init__(
        self,
        seed: int | None = None,
        weighting: str = "quota",
        recordings_per_word: int = 20,
        weights_fn: Callable[[Sequence[int]], Sequence[float]] | None = None,
    ) -> None:
        """Initialize weighted policy.

        Args:
            seed: Random seed for reproducibility.
            weighting: ``"quota"`` or ``"inverse"``; ignored when ``weights_fn``
                is given.
            recordings_per_word: Quota used by the ``"quota"`` weighting.
            weights_fn: Custom mapping from counts to weights.
        """
        if weights_fn is None:
            if weighting not in WEIGHTINGS:
                raise ValueError(f"Unknown weighting: {weighting!r}")
            if weighting == "quota":
                weights_fn = partial(quota_weights, recordings_per_word=recordings_per_word)
            else:
                weights_fn = WEIGHTINGS[weighting]
        self._rng = make_rng(seed)
        self.weights_fn = weights_fn

    def select(
        self,
        items: Sequence[Any],
        n_select: int,
        counts: Sequence[int] | None = None,
    ) -> list[Any]:
        """Return weight-proportional items; unrecorded catalogues weigh evenly."""
        if counts is None:
            counts = [0] * len(items)
        check_aligned(items, counts, "counts")
        weights = self.weights_fn(counts)
        return choose_weighted_without_replacement(items, weights, n_select, seed=self._rng)
