"""Experiments layer: single-run orchestration and the command-line entry point."""

from ant_colonies.experiments.runner import run_simulation

__all__ = ["run_simulation"]
