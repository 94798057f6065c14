"""Recording-progress summaries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from wordsampler.selection.base import check_aligned


@dataclass
class RecordingStats:
    """Progress of a catalogue towards its recording quota.

    Attributes:
        total_recordings: Sum of all per-word counts.
        top_words: Most recorded words as ``(word, count)`` pairs, highest count
            first and alphabetical within a count. Unrecorded words are left out.
        finished: ``True`` once every word has reached the quota.
    """

    total_recordings: int
    top_words: list[tuple[str, int]] = field(default_factory=list)
    finished: bool = False


def summarize_counts(
    items: Sequence[str],
    counts: Sequence[int],
    top_n: int = 5,
    recordings_per_word: int | None = None,
) -> RecordingStats:
    """Summarize recording counts for display to the participant.

    Args:
        items: Catalogue words.
        counts: Recording count per word, aligned by index.
        top_n: Maximum number of entries in ``top_words``.
        recordings_per_word: Quota used for ``finished``; without one the
            catalogue is never considered finished.

    Raises:
        ValueError: If the sequences differ in length or ``top_n`` is negative.
    """
    check_aligned(items, counts, "counts")
    if top_n < 0:
        raise ValueError("top_n must be non-negative")

    recorded = [(str(word), int(n)) for word, n in zip(items, counts) if n > 0]
    recorded.sort(key=lambda pair: (-pair[1], pair[0]))

    finished = (
        recordings_per_word is not None
        and len(items) > 0
        and all(int(n) >= recordings_per_word for n in counts)
    )
    return RecordingStats(
        total_recordings=int(sum(int(n) for n in counts)),
        top_words=recorded[:top_n],
        finished=finished,
    )
