"""
Connectivity highlighting: which nodes and edges to emphasize for an active node.
"""

from collections import deque
from dataclasses import dataclass

from .model import CompanyGraph
from .schema import Node, NodeKind


@dataclass(frozen=True)
class Emphasis:
    """Emphasis flags for every node and edge in a graph."""

    nodes: dict[str, bool]
    edges: dict[str, bool]

    def emphasized_nodes(self) -> set[str]:
        return {node_id for node_id, flag in self.nodes.items() if flag}

    def emphasized_edges(self) -> set[str]:
        return {edge_id for edge_id, flag in self.edges.items() if flag}


def resolve_active_node(hovered_id: str | None, selected_id: str | None) -> str | None:
    """Hover takes precedence over selection."""
    return hovered_id or selected_id


def is_traversable(node: Node) -> bool:
    """Companies stop the traversal: sharing an employer alone is not a link."""
    return node.kind != NodeKind.COMPANY


def highlight(graph: CompanyGraph, active_id: str | None) -> Emphasis:
    """Emphasize everything reachable from ``active_id`` without passing through a company.

    Traversal ignores edge direction. A company reached during the walk is
    emphasized but not walked through, unless it is the active node itself.
    Edges are emphasized when both endpoints are emphasized.

    With no active node, or one that is not in the graph, everything is
    emphasized.

    Args:
        graph: Graph to evaluate
        active_id: Hovered or selected node id

    Returns:
        Emphasis flags for every node and edge
    """
    if active_id is None or not graph.has_node(active_id):
        return Emphasis(
            nodes={node_id: True for node_id in graph.nodes},
            edges={edge_id: True for edge_id in graph.edges},
        )

    undirected = graph.to_networkx().to_undirected(as_view=True)

    emphasized = {active_id}
    queue = deque([active_id])
    while queue:
        current = queue.popleft()
        if current != active_id and not is_traversable(graph.nodes[current]):
            continue
        for neighbor in undirected.neighbors(current):
            if neighbor not in emphasized:
                emphasized.add(neighbor)
                queue.append(neighbor)

    return Emphasis(
        nodes={node_id: node_id in emphasized for node_id in graph.nodes},
        edges={
            edge_id: edge.source in emphasized and edge.target in emphasized
            for edge_id, edge in graph.edges.items()
        },
    )
