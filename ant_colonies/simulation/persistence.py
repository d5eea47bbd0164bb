"""Parquet persistence helpers for fight logs and step timeseries."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from ant_colonies.io.schemas import FIGHT_LOG_SCHEMA, STEP_TIMESERIES_SCHEMA
from ant_colonies.simulation.engine import FightEvent, StepSummary


def write_fight_log(fights: Sequence[FightEvent], path: Path) -> None:
    """Write every fight of a run to a single Parquet file (empty table if none)."""
    columns: dict[str, list[object]] = {
        "step": [event.step for event in fights],
        "colony_index": [event.colony for event in fights],
        "colony_name": [event.colony_name for event in fights],
        "ant_ids": [list(event.ants) for event in fights],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(pa.Table.from_pydict(columns, schema=FIGHT_LOG_SCHEMA), path)


def empty_timeseries_columns() -> dict[str, list[int]]:
    return {name: [] for name in STEP_TIMESERIES_SCHEMA.names}


def append_step(columns: dict[str, list[int]], summary: StepSummary) -> None:
    columns["step"].append(summary.step)
    columns["moves"].append(summary.moves)
    columns["fights"].append(summary.fights)
    columns["active_ants"].append(summary.active_ants)
    columns["surviving_colonies"].append(summary.surviving_colonies)


def flush_timeseries_columns(
    columns: dict[str, list[int]],
    path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated timeseries rows to Parquet and clear in-memory buffers."""
    if not columns["step"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=STEP_TIMESERIES_SCHEMA)
    if writer is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        writer = pq.ParquetWriter(path, STEP_TIMESERIES_SCHEMA)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer
