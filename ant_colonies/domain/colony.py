"""Colonies: graph nodes with up to four labeled one-way tunnels.

Tunnel slots are indexed by ``Direction``. A 4-bit availability mask mirrors
which slots are populated, so uniform random selection over the populated
slots is a single table lookup plus one ``randrange`` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from random import Random

from ant_colonies.config.constants import DIRECTION_LABELS, MAX_TUNNELS


class Direction(Enum):
    """Compass direction of a tunnel; the value is the slot index."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    @property
    def label(self) -> str:
        return DIRECTION_LABELS[self.value]

    @property
    def mask(self) -> int:
        return 1 << self.value

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Parse a case-insensitive direction label such as ``North``."""
        try:
            return cls[text.strip().upper()]
        except KeyError as exc:
            valid = ", ".join(DIRECTION_LABELS)
            raise ValueError(f"direction must be one of {valid}, got {text!r}") from exc


ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)

# mask -> populated directions in slot order
_DIRECTIONS_BY_MASK: tuple[tuple[Direction, ...], ...] = tuple(
    tuple(d for d in ALL_DIRECTIONS if mask & d.mask) for mask in range(1 << MAX_TUNNELS)
)


@dataclass
class Colony:
    """A single colony in the tunnel graph."""

    name: str
    tunnel_slots: list[int | None] = field(default_factory=lambda: [None] * MAX_TUNNELS)
    destroyed: bool = False
    resident: int | None = None  # ant index
    _mask: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if len(self.tunnel_slots) != MAX_TUNNELS:
            raise ValueError(f"tunnel_slots must have exactly {MAX_TUNNELS} entries")
        self._mask = 0
        for direction in ALL_DIRECTIONS:
            if self.tunnel_slots[direction.value] is not None:
                self._mask |= direction.mask

    def add_tunnel(self, direction: Direction, target: int) -> None:
        """Record a one-way tunnel, replacing any earlier tunnel in that direction."""
        self.tunnel_slots[direction.value] = target
        self._mask |= direction.mask

    def target(self, direction: Direction) -> int | None:
        return self.tunnel_slots[direction.value]

    def random_direction(self, rng: Random) -> Direction | None:
        """Pick uniformly among populated directions; ``None`` if there are none."""
        available = _DIRECTIONS_BY_MASK[self._mask]
        if not available:
            return None
        if len(available) == 1:
            return available[0]
        return available[rng.randrange(len(available))]

    def remove_tunnel_to(self, target: int) -> None:
        """Clear every tunnel pointing at ``target``; no-op if there is none."""
        for direction in _DIRECTIONS_BY_MASK[self._mask]:
            if self.tunnel_slots[direction.value] == target:
                self.tunnel_slots[direction.value] = None
                self._mask &= ~direction.mask

    def mark_destroyed(self) -> None:
        """Destroy the colony permanently, dropping its outbound tunnels and resident."""
        self.destroyed = True
        self.resident = None
        self.tunnel_slots = [None] * MAX_TUNNELS
        self._mask = 0

    @property
    def tunnel_count(self) -> int:
        return len(_DIRECTIONS_BY_MASK[self._mask])

    def tunnels(self) -> list[tuple[Direction, int]]:
        """Populated ``(direction, target)`` pairs in north/south/east/west order."""
        slots = self.tunnel_slots
        return [(d, slots[d.value]) for d in _DIRECTIONS_BY_MASK[self._mask]]  # type: ignore[misc]


Topology = list[tuple[str, list[tuple[str, str]]]]
"""Surviving colonies as ``(name, [(direction_label, target_name), ...])`` in index order."""
