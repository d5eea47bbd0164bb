"""Single-run orchestration with optional artifact output."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from ant_colonies.config.constants import FLUSH_THRESHOLD
from ant_colonies.config.types import RunResult, SimulationConfig
from ant_colonies.domain.colony import Colony
from ant_colonies.io.map_format import render_topology
from ant_colonies.io.paths import (
    fight_log_path,
    final_map_path,
    run_summary_path,
    step_timeseries_path,
)
from ant_colonies.io.schemas import RUN_SUMMARY_SCHEMA_VERSION
from ant_colonies.metrics.topology import topology_summary
from ant_colonies.simulation.engine import Simulation, StepSummary
from ant_colonies.simulation.persistence import (
    append_step,
    empty_timeseries_columns,
    flush_timeseries_columns,
    write_fight_log,
)


def run_simulation(
    colonies: Sequence[Colony],
    num_ants: int,
    config: SimulationConfig | None = None,
    out_dir: Path | None = None,
    write_timeseries: bool = False,
    rng: Random | None = None,
) -> tuple[Simulation, RunResult]:
    """Build and run one simulation, persisting artifacts when ``out_dir`` is set."""
    simulation = Simulation(colonies, num_ants, config=config, rng=rng)
    if out_dir is None:
        return simulation, simulation.run()

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    ts_path = step_timeseries_path(out_dir)
    ts_writer: pq.ParquetWriter | None = None
    ts_columns = empty_timeseries_columns()

    def record(summary: StepSummary) -> None:
        nonlocal ts_writer
        append_step(ts_columns, summary)
        if len(ts_columns["step"]) >= FLUSH_THRESHOLD:
            ts_writer = flush_timeseries_columns(ts_columns, ts_path, ts_writer)

    try:
        result = simulation.run(on_step=record if write_timeseries else None)
        if write_timeseries:
            ts_writer = flush_timeseries_columns(ts_columns, ts_path, ts_writer)
    finally:
        if ts_writer is not None:
            ts_writer.close()

    write_fight_log(simulation.fights, fight_log_path(out_dir))
    topology = simulation.final_topology()
    final_map_path(out_dir).write_text(render_topology(topology) + "\n")
    summary = {
        "schema_version": RUN_SUMMARY_SCHEMA_VERSION,
        "num_ants": num_ants,
        "num_colonies": len(simulation.colonies),
        "seed": simulation.config.seed,
        **result.to_dict(),
        "topology": topology_summary(topology),
    }
    run_summary_path(out_dir).write_text(json.dumps(summary, ensure_ascii=False, indent=2))
    return simulation, result
