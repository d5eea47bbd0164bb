"""CLI entrypoint for running one ant colony simulation.

This module owns CLI argument parsing and output. All domain logic lives in
the extracted modules:

- ``ant_colonies.io.map_format``       – map parsing and rendering
- ``ant_colonies.config``              – configuration dataclasses
- ``ant_colonies.simulation.engine``   – the step engine and run loop
- ``ant_colonies.experiments.runner``  – artifact persistence around a run
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from ant_colonies.config.constants import MAX_MOVES, MAX_STEPS
from ant_colonies.config.types import SimulationConfig
from ant_colonies.domain.errors import SimulationError
from ant_colonies.experiments.runner import run_simulation
from ant_colonies.io.map_format import MapFormatError, load_map, render_topology
from ant_colonies.metrics.topology import topology_summary

# ---------------------------------------------------------------------------
# Option resolution (CLI > config file > default)
# ---------------------------------------------------------------------------


def _resolve(
    cli_val: object, key: str, file_cfg: dict[str, object], default: object = None
) -> object:
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _as_count(raw: object, key: str) -> int:
    """Integer option; JSON booleans and fractional numbers are rejected."""
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError(f"{key} must be an integer value, got {raw!r}")
    try:
        return int(raw)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc


def _as_flag(raw: object, key: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{key} must be true or false, got {raw!r}")
    return raw


def _as_path(raw: object, key: str) -> Path | None:
    if raw is None:
        return None
    if not isinstance(raw, (str, Path)):
        raise ValueError(f"{key} must be a file path, got {raw!r}")
    return Path(raw)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate ants invading a map of colonies connected by tunnels"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("-a", "--ants", type=int, default=None, help="Number of ants to create")
    parser.add_argument("-m", "--map", type=Path, default=None, help="Path to the map file")
    parser.add_argument("--max-moves", type=int, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print a line for every destroyed colony",
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--write-timeseries",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also write logs/step_timeseries.parquet (requires --out-dir)",
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a simulation run.

    Fight notifications go to stdout through ``logging`` while the run is in
    progress; the surviving map and a JSON summary are printed afterwards.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text(encoding="utf-8"))
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        except OSError as exc:
            parser.error(f"Cannot read config file {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        ants_raw = _resolve(args.ants, "ants", file_cfg)
        num_ants = None if ants_raw is None else _as_count(ants_raw, "ants")
        map_path = _as_path(_resolve(args.map, "map", file_cfg), "map")
        seed_raw = _resolve(args.seed, "seed", file_cfg)
        config = SimulationConfig(
            max_moves=_as_count(
                _resolve(args.max_moves, "max_moves", file_cfg, MAX_MOVES), "max_moves"
            ),
            max_steps=_as_count(
                _resolve(args.max_steps, "max_steps", file_cfg, MAX_STEPS), "max_steps"
            ),
            debug=_as_flag(_resolve(args.debug, "debug", file_cfg, True), "debug"),
            seed=None if seed_raw is None else _as_count(seed_raw, "seed"),
        )
        out_dir = _as_path(_resolve(args.out_dir, "out_dir", file_cfg), "out_dir")
        write_timeseries = _as_flag(
            _resolve(args.write_timeseries, "write_timeseries", file_cfg, False),
            "write_timeseries",
        )
    except ValueError as exc:
        parser.error(str(exc))

    if num_ants is None:
        parser.error("--ants is required (on the command line or in the config file)")
    if map_path is None:
        parser.error("--map is required (on the command line or in the config file)")
    if write_timeseries and out_dir is None:
        parser.error("--write-timeseries requires --out-dir")

    logging.basicConfig(stream=sys.stdout, format="%(message)s", level=logging.INFO)

    try:
        colonies = load_map(map_path)
    except FileNotFoundError:
        parser.error(f"Map file not found: {map_path}")
    except (MapFormatError, UnicodeDecodeError) as exc:
        parser.error(f"Invalid map file {map_path}: {exc}")
    except OSError as exc:
        parser.error(f"Cannot read map file {map_path}: {exc}")

    start = time.perf_counter()
    try:
        simulation, result = run_simulation(
            colonies,
            num_ants,
            config=config,
            out_dir=out_dir,
            write_timeseries=write_timeseries,
        )
    except SimulationError as exc:
        parser.error(str(exc))
    elapsed = time.perf_counter() - start

    topology = simulation.final_topology()
    print(f"\nSimulation completed in {elapsed:.6f}s")
    rendered = render_topology(topology)
    if rendered:
        print(rendered)
    summary = {**result.to_dict(), "topology": topology_summary(topology)}
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
