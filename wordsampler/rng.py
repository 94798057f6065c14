"""Random generator construction.

Every sampler call owns its generator; nothing here touches the global
``np.random`` state.
"""

from __future__ import annotations

from typing import Union

import numpy as np

SeedLike = Union[int, np.integer, np.random.Generator, None]

_UINT64_MASK = (1 << 64) - 1


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Build a generator for one selection call.

    Args:
        seed: ``None`` for fresh system entropy, a (possibly negative) 64-bit
            integer for a reproducible stream, or an existing generator which is
            returned unchanged so callers can share one stream across calls.

    Returns:
        A ``numpy.random.Generator``.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        return np.random.default_rng()
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValueError(f"seed must be an integer or None, got {type(seed).__name__}")
    return np.random.default_rng(int(seed) & _UINT64_MASK)
