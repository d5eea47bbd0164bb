"""Configuration dataclasses and result containers for simulation runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ant_colonies.config.constants import BENCHMARK_ANT_COUNTS, MAX_MOVES, MAX_STEPS

__all__ = [
    "BenchmarkConfig",
    "RunResult",
    "SimulationConfig",
    "TerminationReason",
]


class TerminationReason(Enum):
    """Why a run stopped."""

    CONCLUDED = "concluded"
    STEP_CAP = "step_cap"


@dataclass(frozen=True)
class SimulationConfig:
    """Core runtime knobs for one simulation run."""

    max_moves: int = MAX_MOVES
    max_steps: int = MAX_STEPS
    debug: bool = True
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.max_moves < 1:
            raise ValueError("max_moves must be >= 1")
        if self.max_steps < 1:
            raise ValueError("max_steps must be >= 1")


@dataclass(frozen=True)
class BenchmarkConfig:
    """Benchmark harness parameters."""

    ant_counts: tuple[int, ...] = BENCHMARK_ANT_COUNTS
    repeats: int = 20
    warmup: int = 2
    seed_start: int = 0
    max_moves: int = MAX_MOVES
    max_steps: int = MAX_STEPS

    def __post_init__(self) -> None:
        if not self.ant_counts:
            raise ValueError("ant_counts must not be empty")
        if any(count < 1 for count in self.ant_counts):
            raise ValueError("ant_counts values must be >= 1")
        if self.repeats < 1:
            raise ValueError("repeats must be >= 1")
        if self.warmup < 0:
            raise ValueError("warmup must be >= 0")

    def simulation_config(self, seed: int) -> SimulationConfig:
        """Silent per-run config for one benchmark iteration."""
        return SimulationConfig(
            max_moves=self.max_moves,
            max_steps=self.max_steps,
            debug=False,
            seed=seed,
        )


@dataclass(frozen=True)
class RunResult:
    """Outcome of one completed run."""

    termination_reason: TerminationReason
    steps: int
    active_ants: int
    surviving_ants: int
    surviving_colonies: int
    fights: int

    @property
    def stopped_early(self) -> bool:
        return self.termination_reason is TerminationReason.STEP_CAP

    def to_dict(self) -> dict[str, int | str | bool]:
        """JSON-ready representation."""
        return {
            "termination_reason": self.termination_reason.value,
            "stopped_early": self.stopped_early,
            "steps": self.steps,
            "active_ants": self.active_ants,
            "surviving_ants": self.surviving_ants,
            "surviving_colonies": self.surviving_colonies,
            "fights": self.fights,
        }
