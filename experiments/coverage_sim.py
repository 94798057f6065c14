"""Coverage simulation: how evenly a selection policy spreads recordings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import hydra
import pandas as pd
import wandb
from dotenv import load_dotenv
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

from wordsampler.session import SessionConfig, SessionPlan, SessionPlanner
from wordsampler.simulation import compute_coverage_curve, simulate_collection

logger = logging.getLogger(__name__)


@dataclass
class SimRunArtifacts:
    """Container for simulation outputs needed by downstream scripts."""

    plans: list[SessionPlan]
    curve: pd.DataFrame
    output_dir: Path


def _load_catalogue(cfg: DictConfig) -> list[str]:
    """Read the catalogue from a word file when configured, else the inline list."""
    path = cfg.catalogue.get("path")
    if path:
        lines = Path(str(path)).read_text(encoding="utf-8").splitlines()
        words = [line.strip() for line in lines if line.strip()]
    else:
        words = [str(w) for w in cfg.catalogue.get("words", [])]
    if not words:
        raise ValueError("Catalogue is empty")
    return words


def _policy_name(cfg: DictConfig) -> str:
    return str(cfg.policy._target_).split(".")[-1]


def _summary_row(policy: str, curve: pd.DataFrame) -> dict[str, Any]:
    """Summarize the final coverage state of one simulation."""
    if curve.empty:
        return {
            "policy": policy,
            "n_sessions": 0,
            "total_recordings": 0,
            "final_spread": 0,
            "first_full_coverage_session": -1,
        }
    last = curve.iloc[-1]
    covered = curve[curve["n_unrecorded"] == 0]
    return {
        "policy": policy,
        "n_sessions": int(len(curve)),
        "total_recordings": int(last["total_recordings"]),
        "final_spread": int(last["count_spread"]),
        "first_full_coverage_session": (
            int(covered["session_idx"].iloc[0]) if not covered.empty else -1
        ),
    }


def run_coverage_sim(cfg: DictConfig) -> SimRunArtifacts:
    """Execute the coverage simulation with the current Hydra config."""
    catalogue = _load_catalogue(cfg)
    policy = instantiate(cfg.policy)
    session_config = SessionConfig(
        words_per_session=int(cfg.session.words_per_session),
        recordings_per_word=int(cfg.session.recordings_per_word),
        max_sessions_per_sitting=int(cfg.session.max_sessions_per_sitting),
    )

    run = wandb.init(
        project=cfg.wandb.project,
        name=f"{cfg.experiment.name}_{_policy_name(cfg)}",
        config=OmegaConf.to_container(cfg, resolve=True),
        tags=[_policy_name(cfg)],
        group=cfg.experiment.name,
        mode=cfg.wandb.mode,
    )

    planner = SessionPlanner(catalogue, policy, config=session_config)
    plans = simulate_collection(planner, int(cfg.experiment.n_sessions))
    curve = compute_coverage_curve(plans, catalogue)

    out = Path(cfg.experiment.output_dir)
    out.mkdir(parents=True, exist_ok=True)
    curve.to_csv(out / "coverage_curve.csv", index=False)
    summary = pd.DataFrame([_summary_row(_policy_name(cfg), curve)])
    summary.to_csv(out / "coverage_summary.csv", index=False)
    logger.info(f"Wrote coverage curve and summary to {out}")

    if run is not None:
        wandb.finish()
    return SimRunArtifacts(plans=plans, curve=curve, output_dir=out)


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """Run the coverage simulation."""
    load_dotenv()
    run_coverage_sim(cfg)


if __name__ == "__main__":
    main()
