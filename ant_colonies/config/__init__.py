"""Configuration layer: constants and typed config dataclasses."""

from ant_colonies.config.constants import (
    DIRECTION_LABELS,
    FLUSH_THRESHOLD,
    MAX_MOVES,
    MAX_STEPS,
    MAX_TUNNELS,
)
from ant_colonies.config.types import (
    BenchmarkConfig,
    RunResult,
    SimulationConfig,
    TerminationReason,
)

__all__ = [
    "BenchmarkConfig",
    "DIRECTION_LABELS",
    "FLUSH_THRESHOLD",
    "MAX_MOVES",
    "MAX_STEPS",
    "MAX_TUNNELS",
    "RunResult",
    "SimulationConfig",
    "TerminationReason",
]
