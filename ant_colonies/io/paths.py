"""Path construction helpers for run output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def fight_log_path(out_dir: Path) -> Path:
    """Return path to the fight log Parquet file."""
    return logs_dir(out_dir) / "fight_log.parquet"


def step_timeseries_path(out_dir: Path) -> Path:
    """Return path to the per-step timeseries Parquet file."""
    return logs_dir(out_dir) / "step_timeseries.parquet"


def final_map_path(out_dir: Path) -> Path:
    """Return path to the rendered surviving map."""
    return out_dir / "final_map.txt"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the run summary JSON file."""
    return out_dir / "run_summary.json"
