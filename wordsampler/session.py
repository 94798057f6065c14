"""Session planning: SessionPlanner plus the plan_session convenience function.

The primary API is :class:`SessionPlanner`: initialize it with the catalogue,
a selection policy, and the current recording counts, call
:meth:`SessionPlanner.propose` to get the words for the next session (calling
it again rerolls), then :meth:`SessionPlanner.record` once the session has been
recorded to update the counts.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from wordsampler.rng import SeedLike
from wordsampler.selection.base import SelectionPolicy, check_aligned
from wordsampler.selection.least_recorded import choose_least_recorded
from wordsampler.selection.uniform import choose_without_replacement
from wordsampler.selection.weighted import choose_weighted_without_replacement
from wordsampler.stats import RecordingStats, summarize_counts
from wordsampler.weights import quota_weights

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config and result dataclasses
# ---------------------------------------------------------------------------


@dataclass
class SessionConfig:
    """Runtime configuration for session planning.

    Attributes:
        words_per_session: Number of words prompted in one session.
        recordings_per_word: Target number of recordings for every word.
        max_sessions_per_sitting: Sessions a participant records before the
            sitting ends and a break is required.
    """

    words_per_session: int = 10
    recordings_per_word: int = 20
    max_sessions_per_sitting: int = 3

    def __post_init__(self) -> None:
        for name in ("words_per_session", "recordings_per_word", "max_sessions_per_sitting"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")


@dataclass
class SessionPlan:
    """Words chosen for one recording session.

    Attributes:
        session_idx: Zero-based index of the session.
        words: Words to prompt, in prompt order.
        counts_before: Recording count of each chosen word when it was chosen.
    """

    session_idx: int
    words: list[str]
    counts_before: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# SessionPlanner
# ---------------------------------------------------------------------------


class SessionPlanner:
    """Plans recording sessions and tracks recording counts between them.

    Attributes:
        catalogue: Full list of vocabulary words.
        policy: Selection policy used to choose each session's words.
        config: Session sizing and quota configuration.
        counts: Current recording count per word.
        history: Plans of the sessions recorded so far.
        session_idx: Index of the *next* session to be recorded.
        sessions_in_sitting: Sessions recorded since the sitting started.
    """

    def __init__(
        self,
        catalogue: Sequence[str],
        policy: SelectionPolicy,
        config: SessionConfig | None = None,
        counts: Mapping[str, int] | None = None,
    ) -> None:
        self.catalogue: list[str] = list(catalogue)
        duplicates = sorted(word for word, n in Counter(self.catalogue).items() if n > 1)
        if duplicates:
            raise ValueError(f"catalogue contains duplicate words: {duplicates}")
        self.policy = policy
        self.config = config or SessionConfig()

        # Mutable state
        self.counts: dict[str, int] = {word: 0 for word in self.catalogue}
        if counts is not None:
            for word, n in counts.items():
                if int(n) < 0:
                    raise ValueError(f"recording count for {word!r} must be non-negative")
                if word in self.counts:
                    self.counts[word] = int(n)
        self.history: list[SessionPlan] = []
        self.session_idx: int = 0
        self.sessions_in_sitting: int = 0

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def propose(self) -> SessionPlan:
        """Choose the words for the next session without committing them.

        Calling this again before :meth:`record` rerolls the selection.
        """
        counts = [self.counts[word] for word in self.catalogue]
        words = self.policy.select(
            self.catalogue,
            self.config.words_per_session,
            counts=counts,
        )
        logger.info(
            f"Proposed {len(words)} words for session {self.session_idx} "
            f"from a catalogue of {len(self.catalogue)}"
        )
        return SessionPlan(
            session_idx=self.session_idx,
            words=list(words),
            counts_before={word: self.counts[word] for word in words},
        )

    def record(self, plan: SessionPlan) -> None:
        """Commit a recorded session, adding one recording to each of its words."""
        if plan.session_idx != self.session_idx:
            raise ValueError(
                f"plan is for session {plan.session_idx}, expected {self.session_idx}"
            )
        unknown = [word for word in plan.words if word not in self.counts]
        if unknown:
            raise ValueError(f"plan contains words outside the catalogue: {unknown}")

        for word in plan.words:
            self.counts[word] += 1
        self.history.append(plan)
        self.session_idx += 1
        self.sessions_in_sitting += 1

    def start_sitting(self) -> None:
        """Begin a new sitting after a break."""
        self.sessions_in_sitting = 0

    def stats(self, top_n: int = 5) -> RecordingStats:
        """Summarize the current recording counts."""
        return summarize_counts(
            self.catalogue,
            [self.counts[word] for word in self.catalogue],
            top_n=top_n,
            recordings_per_word=self.config.recordings_per_word,
        )

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------

    @property
    def is_sitting_over(self) -> bool:
        """``True`` once the sitting's session limit has been reached."""
        return self.sessions_in_sitting >= self.config.max_sessions_per_sitting

    @property
    def total_recordings(self) -> int:
        """Total recordings across the catalogue."""
        return sum(self.counts.values())


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------


def plan_session(
    catalogue: Sequence[str],
    counts: Sequence[int],
    words_per_session: int,
    policy: str = "least_recorded",
    seed: SeedLike = None,
    recordings_per_word: int = 20,
) -> list[str]:
    """Choose one session's words with a named policy.

    Args:
        catalogue: Vocabulary words.
        counts: Recording count per word, aligned by index.
        words_per_session: Number of words to choose.
        policy: ``"least_recorded"``, ``"weighted"`` (quota weights), or
            ``"uniform"``.
        seed: Optional seed for a reproducible selection.
        recordings_per_word: Quota used by the ``"weighted"`` policy.

    Returns:
        Words for the session, in prompt order.
    """
    check_aligned(catalogue, counts, "counts")
    if policy == "least_recorded":
        return choose_least_recorded(catalogue, counts, words_per_session, seed=seed)
    if policy == "weighted":
        weights = quota_weights(counts, recordings_per_word)
        return choose_weighted_without_replacement(catalogue, weights, words_per_session, seed=seed)
    if policy == "uniform":
        return choose_without_replacement(catalogue, words_per_session, seed=seed)
    raise ValueError(f"Unknown policy: {policy!r}")
