"""Transforms from per-word recording counts to sampling weights."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def _as_counts(counts: Sequence[int]) -> np.ndarray:
    arr = np.asarray(counts, dtype=np.int64)
    if arr.size and int(arr.min()) < 0:
        raise ValueError("recording counts must be non-negative")
    return arr


def quota_weights(counts: Sequence[int], recordings_per_word: int) -> list[float]:
    """Weight each word by its share of the recordings still owed.

    A word recorded ``c`` times out of a quota of ``q`` gets weight
    ``(q - c) / (q * n - total)`` while no word is over quota. Words at or above
    quota get zero weight, and every weight is zero once the whole catalogue
    has met its quota.

    Args:
        counts: Recording count per word.
        recordings_per_word: Target number of recordings for each word.

    Returns:
        One weight per word, summing to 1.0 unless all weights are zero.
    """
    if recordings_per_word <= 0:
        raise ValueError("recordings_per_word must be > 0")
    arr = _as_counts(counts)
    owed = np.clip(recordings_per_word - arr, 0, None).astype(np.float64)
    remaining = float(owed.sum())
    if remaining <= 0.0:
        return [0.0] * len(arr)
    return (owed / remaining).tolist()


def inverse_count_weights(counts: Sequence[int]) -> list[float]:
    """Weight each word by ``max(1, total) / max(1, count)``.

    Unrecorded words share the largest weight; the most recorded word gets the
    smallest.
    """
    arr = _as_counts(counts)
    total = max(1.0, float(arr.sum()))
    return (total / np.maximum(1.0, arr.astype(np.float64))).tolist()


WEIGHTINGS = {
    "quota": quota_weights,
    "inverse": inverse_count_weights,
}
