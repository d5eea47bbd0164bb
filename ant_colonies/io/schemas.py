"""Parquet schema definitions for simulation run artifacts.

All Arrow schemas used for persisting fight logs and per-step timeseries are
centralised here so that writers and readers work against the same column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_SUMMARY_SCHEMA_VERSION = 1

FIGHT_LOG_SCHEMA = pa.schema(
    [
        ("step", pa.int64()),
        ("colony_index", pa.int64()),
        ("colony_name", pa.string()),
        ("ant_ids", pa.list_(pa.int64())),
    ]
)

STEP_TIMESERIES_SCHEMA = pa.schema(
    [
        ("step", pa.int64()),
        ("moves", pa.int64()),
        ("fights", pa.int64()),
        ("active_ants", pa.int64()),
        ("surviving_colonies", pa.int64()),
    ]
)
