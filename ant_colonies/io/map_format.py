"""Map-file parsing and rendering.

One colony per line: the colony name followed by ``direction=target`` tokens,
for example::

    Foo north=Bar west=Baz south=Qu-ux
    Bar south=Foo west=Bee

Names are resolved to stable indices in order of first declaration. Targets
that never get a line of their own become tunnel-less colonies appended after
the declared ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ant_colonies.domain.colony import Colony, Direction, Topology

logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """Raised for map lines that cannot name a colony."""


@dataclass
class MapEntry:
    """One declared colony and its tunnels by target name."""

    name: str
    tunnels: dict[Direction, str] = field(default_factory=dict)


def parse_map_text(text: str) -> list[MapEntry]:
    """Parse map text into entries; repeated names merge into the first entry."""
    entries: dict[str, MapEntry] = {}
    for line_no, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if not parts:
            continue
        name, *tokens = parts
        if "=" in name:
            raise MapFormatError(f"line {line_no}: missing colony name before {name!r}")
        entry = entries.setdefault(name, MapEntry(name=name))
        for token in tokens:
            direction_raw, sep, target = token.partition("=")
            if not sep or not target:
                logger.warning("line %d: skipping malformed tunnel %r", line_no, token)
                continue
            try:
                direction = Direction.parse(direction_raw)
            except ValueError:
                logger.warning("line %d: skipping unknown direction %r", line_no, direction_raw)
                continue
            entry.tunnels[direction] = target
    return list(entries.values())


def build_colonies(entries: list[MapEntry]) -> list[Colony]:
    """Resolve tunnel target names to indices and build the colony list."""
    index: dict[str, int] = {}
    colonies: list[Colony] = []

    def resolve(name: str) -> int:
        if name not in index:
            index[name] = len(colonies)
            colonies.append(Colony(name=name))
        return index[name]

    for entry in entries:
        resolve(entry.name)
    for entry in entries:
        colony = colonies[index[entry.name]]
        for direction, target_name in entry.tunnels.items():
            colony.add_tunnel(direction, resolve(target_name))
    return colonies


def load_map(path: Path) -> list[Colony]:
    """Read and resolve a map file."""
    return build_colonies(parse_map_text(Path(path).read_text(encoding="utf-8")))


def render_topology(topology: Topology) -> str:
    """Render ``(name, [(direction, target), ...])`` pairs back into map lines."""
    lines = []
    for name, tunnels in topology:
        tokens = [name] + [f"{direction}={target}" for direction, target in tunnels]
        lines.append(" ".join(tokens))
    return "\n".join(lines)
