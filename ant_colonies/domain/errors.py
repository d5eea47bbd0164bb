"""Error hierarchy for simulation setup and runtime invariant violations."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by the simulation core."""


class NoColoniesError(SimulationError, ValueError):
    """Raised when a simulation is built from an empty colony list."""

    def __init__(self) -> None:
        super().__init__("no locations provided")


class NoAntsError(SimulationError, ValueError):
    """Raised when a simulation is asked to place fewer than one ant."""

    def __init__(self) -> None:
        super().__init__("no agents requested")


class InvalidColonyError(SimulationError):
    """An ant or tunnel references a colony index outside the graph.

    This signals a broken caller-supplied graph and aborts the run.
    """

    def __init__(self, index: int, name: str | None = None) -> None:
        self.index = index
        self.name = name
        detail = f" (referenced from {name})" if name is not None else ""
        super().__init__(f"invalid colony index {index}{detail}")
