"""Graph summaries of a surviving topology via NetworkX."""

from __future__ import annotations

import networkx as nx

from ant_colonies.domain.colony import Topology


def topology_graph(topology: Topology) -> nx.DiGraph:
    """Build a directed graph; edges carry the tunnel ``direction`` label."""
    graph = nx.DiGraph()
    for name, _ in topology:
        graph.add_node(name)
    for name, tunnels in topology:
        for direction, target in tunnels:
            graph.add_edge(name, target, direction=direction)
    return graph


def topology_summary(topology: Topology) -> dict[str, int]:
    """Counts describing how fragmented the surviving map is."""
    graph = topology_graph(topology)
    if graph.number_of_nodes() == 0:
        return {
            "surviving_colonies": 0,
            "tunnels": 0,
            "weak_components": 0,
            "largest_component": 0,
            "isolated_colonies": 0,
        }
    components = list(nx.weakly_connected_components(graph))
    return {
        "surviving_colonies": graph.number_of_nodes(),
        "tunnels": graph.number_of_edges(),
        "weak_components": len(components),
        "largest_component": max(len(component) for component in components),
        "isolated_colonies": sum(1 for _ in nx.isolates(graph)),
    }
