"""Ant registry entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Ant:
    """Mutable per-ant state: move counter and current colony index."""

    ant_id: int
    colony: int | None = None
    moves: int = 0

    @property
    def alive(self) -> bool:
        return self.colony is not None

    def is_active(self, max_moves: int) -> bool:
        """Active iff placed, not removed by a fight, and below the move cap."""
        return self.colony is not None and self.moves < max_moves
