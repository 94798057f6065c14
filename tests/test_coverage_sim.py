"""Tests for the coverage simulation experiment helpers."""

from __future__ import annotations

import pandas as pd
import pytest
from omegaconf import OmegaConf

from experiments.coverage_sim import _load_catalogue, _summary_row, run_coverage_sim


def _cfg(tmp_path, **catalogue):
    return OmegaConf.create(
        {
            "seed": 3,
            "catalogue": {"words": ["a", "b", "c", "d"], "path": None, **catalogue},
            "policy": {"_target_": "wordsampler.selection.LeastRecordedPolicy", "seed": 3},
            "session": {
                "words_per_session": 2,
                "recordings_per_word": 5,
                "max_sessions_per_sitting": 3,
            },
            "experiment": {
                "name": "coverage_sim",
                "n_sessions": 4,
                "output_dir": str(tmp_path / "out"),
            },
            "wandb": {"project": "wordsampler", "mode": "disabled"},
        }
    )


def test_load_catalogue_inline_and_file(tmp_path) -> None:
    """Word files take precedence over the inline list and skip blank lines."""
    assert _load_catalogue(_cfg(tmp_path)) == ["a", "b", "c", "d"]
    word_file = tmp_path / "words.txt"
    word_file.write_text("hello\n\n world \n", encoding="utf-8")
    assert _load_catalogue(_cfg(tmp_path, path=str(word_file))) == ["hello", "world"]


def test_load_catalogue_empty_raises(tmp_path) -> None:
    with pytest.raises(ValueError):
        _load_catalogue(_cfg(tmp_path, words=[]))


def test_summary_row_reports_first_full_coverage() -> None:
    curve = pd.DataFrame(
        [
            {"session_idx": 0, "total_recordings": 2, "count_spread": 1, "n_unrecorded": 2},
            {"session_idx": 1, "total_recordings": 4, "count_spread": 0, "n_unrecorded": 0},
            {"session_idx": 2, "total_recordings": 6, "count_spread": 1, "n_unrecorded": 0},
        ]
    )
    row = _summary_row("LeastRecordedPolicy", curve)
    assert row["first_full_coverage_session"] == 1
    assert row["final_spread"] == 1
    assert row["n_sessions"] == 3


def test_summary_row_empty_curve() -> None:
    assert _summary_row("UniformPolicy", pd.DataFrame())["first_full_coverage_session"] == -1


def test_run_coverage_sim_writes_outputs(tmp_path) -> None:
    artifacts = run_coverage_sim(_cfg(tmp_path))
    assert len(artifacts.plans) == 4
    assert (artifacts.output_dir / "coverage_curve.csv").exists()
    summary = pd.read_csv(artifacts.output_dir / "coverage_summary.csv")
    assert int(summary.loc[0, "total_recordings"]) == 8
    assert int(summary.loc[0, "final_spread"]) == 0
