"""Simulation engine and Parquet persistence."""

from ant_colonies.simulation.engine import FightEvent, Simulation, StepSummary
from ant_colonies.simulation.persistence import flush_timeseries_columns, write_fight_log

__all__ = [
    "FightEvent",
    "Simulation",
    "StepSummary",
    "flush_timeseries_columns",
    "write_fight_log",
]
