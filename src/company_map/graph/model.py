"""
The investigation graph: flat node and edge mappings keyed by identity.
"""

import logging
from collections.abc import Iterable, Iterator

import networkx as nx

from ..shared.exceptions import GraphIntegrityError
from .schema import Edge, Node, NodeKind


class CompanyGraph:
    """Nodes and edges keyed by id, in insertion order.

    Adding an id that is already present is a no-op, so the first writer of an
    identity wins. Edges are only accepted once both endpoints exist.
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self.nodes: dict[str, Node] = {}
        self.edges: dict[str, Edge] = {}
        self._address_index: dict[str, str] = {}
        self.logger = logging.getLogger(__name__)

        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self.edges

    def get_node(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def add_node(self, node: Node) -> bool:
        """Add a node unless its identity is already taken.

        Returns:
            True if the node was added
        """
        if node.id in self.nodes:
            self.logger.debug(f"Node {node.id} already present, keeping existing")
            return False

        self.nodes[node.id] = node
        if node.kind == NodeKind.ADDRESS:
            self._address_index.setdefault(node.label, node.id)
        return True

    def add_edge(self, edge: Edge) -> bool:
        """Add an edge unless its identity is taken or an endpoint is missing.

        Returns:
            True if the edge was added
        """
        if edge.id in self.edges:
            return False
        if edge.source not in self.nodes or edge.target not in self.nodes:
            self.logger.debug(f"Dropping edge {edge.id}: endpoint not in graph")
            return False

        self.edges[edge.id] = edge
        return True

    def replace_node(self, node: Node) -> None:
        """Swap in a new version of an existing node (annotations, position, details)."""
        current = self.nodes.get(node.id)
        if current is None:
            raise GraphIntegrityError("Cannot replace unknown node", {"node_id": node.id})
        if current.kind != node.kind:
            raise GraphIntegrityError(
                "Node kind is immutable",
                {"node_id": node.id, "kind": current.kind.value, "new_kind": node.kind.value},
            )
        self.nodes[node.id] = node

    def find_address_node(self, label: str) -> Node | None:
        """First address node whose formatted label equals ``label``."""
        node_id = self._address_index.get(label)
        return self.nodes[node_id] if node_id else None

    def nodes_of_kind(self, kind: NodeKind) -> list[Node]:
        return [node for node in self.nodes.values() if node.kind == kind]

    def copy(self) -> "CompanyGraph":
        """Shallow copy; nodes and edges are immutable so sharing them is safe."""
        clone = CompanyGraph()
        clone.nodes = dict(self.nodes)
        clone.edges = dict(self.edges)
        clone._address_index = dict(self._address_index)
        return clone

    def to_networkx(self) -> nx.MultiDiGraph:
        """Directed multigraph view keyed by edge id, for traversal and layout."""
        graph = nx.MultiDiGraph()
        for node_id, node in self.nodes.items():
            graph.add_node(node_id, kind=node.kind.value)
        for edge_id, edge in self.edges.items():
            graph.add_edge(edge.source, edge.target, key=edge_id, relation=edge.relation.value)
        return graph

    def get_statistics(self) -> dict[str, int]:
        """Node counts per kind plus totals."""
        stats = {kind.value: 0 for kind in NodeKind}
        for node in self.nodes.values():
            stats[node.kind.value] += 1
        stats["nodes"] = len(self.nodes)
        stats["edges"] = len(self.edges)
        return stats
