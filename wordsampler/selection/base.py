"""Selection policy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class SelectionPolicy(ABC):
    """Base interface for session word-selection policies."""

    @abstractmethod
    def select(
        self,
        items: Sequence[Any],
        n_select: int,
        counts: Sequence[int] | None = None,
    ) -> list[Any]:
        """Select up to ``n_select`` distinct items from the catalogue."""


def check_count(count: int) -> None:
    """Raise if the requested selection size is negative."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")


def check_aligned(items: Sequence[Any], values: Sequence[Any], name: str) -> None:
    """Raise if a per-item value sequence is not aligned with ``items``."""
    if len(values) != len(items):
        raise ValueError(
            f"{name} length ({len(values)}) must match number of items ({len(items)})"
        )
