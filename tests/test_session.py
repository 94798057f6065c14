"""Tests for session planning and count bookkeeping."""

from __future__ import annotations

import pytest

from wordsampler.selection import LeastRecordedPolicy, UniformPolicy
from wordsampler.session import SessionConfig, SessionPlan, SessionPlanner, plan_session

WORDS = [f"word{i:02d}" for i in range(20)]


def _planner(**config) -> SessionPlanner:
    return SessionPlanner(WORDS, LeastRecordedPolicy(seed=5), config=SessionConfig(**config))


@pytest.mark.parametrize(
    "field_name", ["words_per_session", "recordings_per_word", "max_sessions_per_sitting"]
)
def test_session_config_rejects_non_positive(field_name: str) -> None:
    with pytest.raises(ValueError):
        SessionConfig(**{field_name: 0})


def test_propose_does_not_change_counts() -> None:
    planner = _planner(words_per_session=10)
    plan = planner.propose()
    assert plan.session_idx == 0
    assert len(plan.words) == 10
    assert planner.total_recordings == 0
    assert planner.history == []


def test_propose_prefers_unrecorded_words() -> None:
    counts = {word: 3 for word in WORDS[:15]}
    planner = SessionPlanner(
        WORDS, LeastRecordedPolicy(seed=1), SessionConfig(words_per_session=5), counts=counts
    )
    plan = planner.propose()
    assert sorted(plan.words) == WORDS[15:]
    assert all(n == 0 for n in plan.counts_before.values())


def test_record_updates_counts_and_history() -> None:
    planner = _planner(words_per_session=10)
    plan = planner.propose()
    planner.record(plan)
    assert planner.total_recordings == 10
    assert all(planner.counts[word] == 1 for word in plan.words)
    assert planner.history == [plan]
    assert planner.session_idx == 1


def test_two_sessions_cover_catalogue_once() -> None:
    """Least-recorded planning never repeats a word before every word is recorded."""
    planner = _planner(words_per_session=10)
    for _ in range(2):
        planner.record(planner.propose())
    assert set(planner.counts.values()) == {1}


def test_record_rejects_stale_or_foreign_plans() -> None:
    planner = _planner(words_per_session=3)
    with pytest.raises(ValueError):
        planner.record(SessionPlan(session_idx=4, words=WORDS[:3]))
    with pytest.raises(ValueError):
        planner.record(SessionPlan(session_idx=0, words=["not-a-word"]))


def test_sitting_limit() -> None:
    planner = _planner(words_per_session=2, max_sessions_per_sitting=2)
    planner.record(planner.propose())
    assert not planner.is_sitting_over
    planner.record(planner.propose())
    assert planner.is_sitting_over
    planner.start_sitting()
    assert not planner.is_sitting_over


def test_duplicate_catalogue_words_rejected() -> None:
    """Repeated words would share one counter, so the planner refuses them."""
    with pytest.raises(ValueError):
        SessionPlanner(
            ["a", "a", "b"], LeastRecordedPolicy(seed=1), SessionConfig(words_per_session=3)
        )


def test_initial_counts_validation() -> None:
    planner = SessionPlanner(WORDS, UniformPolicy(seed=1), counts={"word00": 4, "unknown": 9})
    assert planner.counts["word00"] == 4
    assert "unknown" not in planner.counts
    with pytest.raises(ValueError):
        SessionPlanner(WORDS, UniformPolicy(seed=1), counts={"word00": -1})


def test_stats_reflect_recordings() -> None:
    planner = _planner(words_per_session=20, recordings_per_word=1)
    planner.record(planner.propose())
    stats = planner.stats()
    assert stats.total_recordings == 20
    assert stats.finished is True


@pytest.mark.parametrize("policy", ["least_recorded", "weighted", "uniform"])
def test_plan_session_policies(policy: str) -> None:
    counts = [0] * len(WORDS)
    words = plan_session(WORDS, counts, 10, policy=policy, seed=3)
    assert len(words) == 10
    assert len(set(words)) == 10
    assert words == plan_session(WORDS, counts, 10, policy=policy, seed=3)


def test_plan_session_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        plan_session(WORDS, [0] * len(WORDS), 5, policy="round_robin")
    with pytest.raises(ValueError):
        plan_session(WORDS, [0], 5)
