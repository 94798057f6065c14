"""wordsampler: session word selection for recording data collection.

Public API
----------
The entire usable surface is importable directly from ``wordsampler``::

    from wordsampler import choose_least_recorded, SessionPlanner, SessionConfig
    from wordsampler.selection import LeastRecordedPolicy, WeightedPolicy
"""

from __future__ import annotations

# Pure selection functions
from wordsampler.selection import (
    LeastRecordedPolicy,
    SelectionPolicy,
    UniformPolicy,
    WeightedPolicy,
    choose_least_recorded,
    choose_weighted_without_replacement,
    choose_without_replacement,
    locate_region,
)

# Session planning
from wordsampler.session import SessionConfig, SessionPlan, SessionPlanner, plan_session

# Simulation and summaries
from wordsampler.simulation import compute_coverage_curve, simulate_collection
from wordsampler.stats import RecordingStats, summarize_counts
from wordsampler.weights import inverse_count_weights, quota_weights

__version__ = "0.1.0"

__all__ = [
    # Selection
    "choose_without_replacement",
    "choose_weighted_without_replacement",
    "choose_least_recorded",
    "locate_region",
    "SelectionPolicy",
    "UniformPolicy",
    "WeightedPolicy",
    "LeastRecordedPolicy",
    # Weights and summaries
    "quota_weights",
    "inverse_count_weights",
    "RecordingStats",
    "summarize_counts",
    # Sessions
    "SessionConfig",
    "SessionPlan",
    "SessionPlanner",
    "plan_session",
    "simulate_collection",
    "compute_coverage_curve",
    "__version__",
]
