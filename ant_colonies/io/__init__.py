"""I/O layer: map-file format, Arrow schemas, and output paths."""

from ant_colonies.io.map_format import (
    MapEntry,
    MapFormatError,
    build_colonies,
    load_map,
    parse_map_text,
    render_topology,
)
from ant_colonies.io.schemas import FIGHT_LOG_SCHEMA, STEP_TIMESERIES_SCHEMA

__all__ = [
    "FIGHT_LOG_SCHEMA",
    "MapEntry",
    "MapFormatError",
    "STEP_TIMESERIES_SCHEMA",
    "build_colonies",
    "load_map",
    "parse_map_text",
    "render_topology",
]
