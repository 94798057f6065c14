"""Data-collection coverage simulation.

Drives a :class:`~wordsampler.session.SessionPlanner` through many sessions,
assuming every proposed word gets recorded once, to compare how evenly each
selection policy spreads recordings over the catalogue.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from wordsampler.session import SessionPlan, SessionPlanner

# Optional dependency: session metrics are only logged when wandb is installed.
try:
    import wandb as _wandb

    _WANDB_AVAILABLE = True
except ImportError:
    _wandb = None  # type: ignore[assignment]
    _WANDB_AVAILABLE = False

logger = logging.getLogger(__name__)


def simulate_collection(planner: SessionPlanner, n_sessions: int) -> list[SessionPlan]:
    """Propose and record ``n_sessions`` sessions.

    A new sitting is started whenever the current one is over. The simulation
    stops early if a proposal comes back empty.

    Returns:
        Plans of the sessions recorded during this call.
    """
    if n_sessions < 0:
        raise ValueError("n_sessions must be non-negative")

    plans: list[SessionPlan] = []
    for _ in range(n_sessions):
        if planner.is_sitting_over:
            planner.start_sitting()
        plan = planner.propose()
        if not plan.words:
            logger.info(f"Stopping after {len(plans)} sessions: empty proposal")
            break
        planner.record(plan)
        plans.append(plan)

        if _WANDB_AVAILABLE and _wandb is not None and _wandb.run is not None:
            counts = list(planner.counts.values())
            _wandb.log(
                {
                    "session": plan.session_idx,
                    "total_recordings": planner.total_recordings,
                    "coverage/min_count": min(counts),
                    "coverage/max_count": max(counts),
                }
            )

    logger.info(
        f"Simulated {len(plans)} sessions; {planner.total_recordings} total recordings"
    )
    return plans


def compute_coverage_curve(plans: list[SessionPlan], catalogue: Sequence[str]) -> Any:
    """Convert recorded session plans into a per-session coverage table.

    Counts start from zero for every catalogue word and grow by one for each
    word of each plan, in plan order.

    Requires ``pandas`` (install ``wordsampler[analysis]``).

    Args:
        plans: Session plans in recording order.
        catalogue: Full list of vocabulary words.

    Returns:
        ``pandas.DataFrame`` with one row per session and columns
        ``session_idx``, ``total_recordings``, ``min_count``, ``max_count``,
        ``count_spread`` and ``n_unrecorded``.
    """
    try:
        import pandas as pd
    except ImportError as exc:  # pragma: no cover
        raise ImportError(
            "compute_coverage_curve requires pandas. Install it with: pip install pandas"
        ) from exc

    counts = {word: 0 for word in catalogue}
    rows: list[dict[str, Any]] = []
    for plan in plans:
        for word in plan.words:
            counts[word] = counts.get(word, 0) + 1
        values = list(counts.values())
        rows.append(
            {
                "session_idx": plan.session_idx,
                "total_recordings": sum(values),
                "min_count": min(values, default=0),
                "max_count": max(values, default=0),
                "count_spread": max(values, default=0) - min(values, default=0),
                "n_unrecorded": sum(1 for v in values if v == 0),
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "session_idx",
            "total_recordings",
            "min_count",
            "max_count",
            "count_spread",
            "n_unrecorded",
        ],
    )
