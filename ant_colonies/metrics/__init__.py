"""Metrics over the surviving tunnel graph."""

from ant_colonies.metrics.topology import topology_graph, topology_summary

__all__ = ["topology_graph", "topology_summary"]
