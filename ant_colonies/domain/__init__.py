"""Domain layer: colonies, ants, and error types."""

from ant_colonies.domain.ant import Ant
from ant_colonies.domain.colony import ALL_DIRECTIONS, Colony, Direction, Topology
from ant_colonies.domain.errors import (
    InvalidColonyError,
    NoAntsError,
    NoColoniesError,
    SimulationError,
)

__all__ = [
    "ALL_DIRECTIONS",
    "Ant",
    "Colony",
    "Direction",
    "InvalidColonyError",
    "NoAntsError",
    "NoColoniesError",
    "SimulationError",
    "Topology",
]
