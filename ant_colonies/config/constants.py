"""Centralized domain constants for ant colony simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

MAX_MOVES = 10_000
"""Default per-ant move cap; an ant at the cap stops proposing moves."""

MAX_STEPS = 100_000
"""Default global step cap; reaching it stops the run early."""

DIRECTION_LABELS: tuple[str, ...] = ("north", "south", "east", "west")
"""Tunnel direction vocabulary, in slot order."""

MAX_TUNNELS = 4
"""Maximum number of outbound tunnels per colony (one per direction)."""

FLUSH_THRESHOLD = 8_192
"""Flush step timeseries rows to Parquet once this in-memory row count is reached."""

BENCHMARK_ANT_COUNTS: tuple[int, ...] = (3, 6, 9)
"""Ant counts exercised by the benchmark harness."""
