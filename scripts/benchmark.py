"""Wall-clock benchmark of the simulation run loop.

Runs the two-colony ping-pong map (A north=B, B south=A) with a handful of
ant counts and reports timing statistics per ant count.

Usage:
    uv run python scripts/benchmark.py
    uv run python scripts/benchmark.py --ant-counts 3,6,9 --repeats 50 --out bench.json
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from random import Random

import numpy as np

from ant_colonies.config.types import BenchmarkConfig
from ant_colonies.domain.colony import Colony, Direction
from ant_colonies.simulation.engine import Simulation


def create_test_map() -> list[Colony]:
    """Two colonies tunnelled to each other."""
    colony_a = Colony(name="A")
    colony_a.add_tunnel(Direction.NORTH, 1)
    colony_b = Colony(name="B")
    colony_b.add_tunnel(Direction.SOUTH, 0)
    return [colony_a, colony_b]


def time_run(num_ants: int, config: BenchmarkConfig, seed: int) -> float:
    """Time one full run on a fresh map; map construction is excluded."""
    colonies = create_test_map()
    start = time.perf_counter()
    simulation = Simulation(
        colonies, num_ants, config=config.simulation_config(seed), rng=Random(seed)
    )
    simulation.run()
    return time.perf_counter() - start


def run_benchmark(config: BenchmarkConfig) -> dict[str, dict[str, float]]:
    """Return ``{"<n>_ants": {mean, std, p50, p95, min, max}}`` in seconds."""
    results: dict[str, dict[str, float]] = {}
    for num_ants in config.ant_counts:
        for i in range(config.warmup):
            time_run(num_ants, config, config.seed_start - 1 - i)
        samples = np.array(
            [time_run(num_ants, config, config.seed_start + i) for i in range(config.repeats)],
            dtype=float,
        )
        results[f"{num_ants}_ants"] = {
            "mean": float(samples.mean()),
            "std": float(samples.std(ddof=1)) if samples.size > 1 else 0.0,
            "p50": float(np.percentile(samples, 50)),
            "p95": float(np.percentile(samples, 95)),
            "min": float(samples.min()),
            "max": float(samples.max()),
        }
    return results


def _parse_ant_counts(raw: str) -> tuple[int, ...]:
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if not parts:
        raise ValueError("ant-counts must not be empty")
    try:
        return tuple(int(part) for part in parts)
    except ValueError as exc:
        raise ValueError("ant-counts must contain integers") from exc


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--ant-counts", type=str, default="3,6,9")
    parser.add_argument("--repeats", type=int, default=20)
    parser.add_argument("--warmup", type=int, default=2)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-moves", type=int, default=10_000)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args(argv)

    try:
        config = BenchmarkConfig(
            ant_counts=_parse_ant_counts(args.ant_counts),
            repeats=args.repeats,
            warmup=args.warmup,
            seed_start=args.seed,
            max_moves=args.max_moves,
        )
    except ValueError as exc:
        parser.error(str(exc))

    results = run_benchmark(config)
    payload = json.dumps(results, indent=2)
    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload)
        print(f"Results saved to {args.out}")
    print(payload)


if __name__ == "__main__":
    main()
