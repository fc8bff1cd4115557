"""
Base class for per-kind node expanders.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from ...registry.base import RegistrySource
from ..edges import make_edge
from ..model import CompanyGraph
from ..schema import Node, NodeKind, RelationKind


class BaseExpander(ABC):
    """Base class for per-kind expansion of a single frontier node.

    Expansion is split in two phases. :meth:`fetch` talks to the registry and
    runs concurrently with sibling nodes, so it may read the graph but never
    write it. :meth:`merge` runs afterwards, one node at a time in frontier
    order, and is the only place the graph is mutated.
    """

    kind: NodeKind

    def __init__(self, registry: RegistrySource):
        self.registry = registry
        self.logger = logging.getLogger(__name__)

    def can_expand(self, node: Node) -> bool:
        return node.is_expandable

    @abstractmethod
    def fetch(self, node: Node, graph: CompanyGraph) -> Any:
        """Retrieve everything needed to expand ``node``.

        Args:
            node: Frontier node
            graph: Working graph, read-only during this phase

        Returns:
            Payload handed to :meth:`merge`
        """
        pass

    @abstractmethod
    def merge(self, node: Node, payload: Any, graph: CompanyGraph) -> list[str]:
        """Add discovered nodes and edges to ``graph``.

        Returns:
            Ids of every neighbour touched, new or already present
        """
        pass

    def add_node(self, graph: CompanyGraph, node: Node) -> bool:
        """Delegate to the graph's add_node method."""
        return graph.add_node(node)

    def link(
        self,
        graph: CompanyGraph,
        source: str,
        target: str,
        relation: RelationKind,
        label: str | None = None,
    ) -> bool:
        """Build an edge and add it to the graph."""
        return graph.add_edge(make_edge(source, target, relation, label))
