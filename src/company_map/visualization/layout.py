"""
Layered layout engine for investigation graphs.

Positions nodes in ranks along the layout direction, Sugiyama style:

1. Cycle removal: edges that go against a greedy feedback-arc-set ordering
   are reversed for ranking purposes only.
2. Rank assignment: longest path, honouring a minimum rank span per edge.
   Correspondence-address edges span one rank so an address sits right
   under its officer; every other edge spans three.
3. Ordering: barycenter sweeps reduce crossings within each rank.
4. Coordinates: ranks and nodes are spaced by fixed node size and separation,
   then shifted so positions are top-left corners starting at the origin.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict

import networkx as nx

from ..graph.model import CompanyGraph
from ..graph.schema import Edge, Position, RelationKind
from ..shared.exceptions import LayoutError, create_error_context
from ..shared.models import LayoutDirection

NODE_WIDTH = 240
NODE_HEIGHT = 80
NODE_SEP = 200
RANK_SEP = 120

SHORT_SPAN = 1
LONG_SPAN = 3


def minimum_span(edge: Edge) -> int:
    """Minimum number of ranks between an edge's endpoints."""
    if edge.relation == RelationKind.CORRESPONDENCE_ADDRESS:
        return SHORT_SPAN
    return LONG_SPAN


class LayoutEngine(ABC):
    """Assigns a position to every node of a graph."""

    @abstractmethod
    def compute_positions(
        self, graph: CompanyGraph, direction: LayoutDirection = LayoutDirection.TB
    ) -> dict[str, Position]:
        """Compute top-left positions keyed by node id, ignoring any prior position."""
        pass

    def layout(
        self, graph: CompanyGraph, direction: LayoutDirection = LayoutDirection.TB
    ) -> CompanyGraph:
        """Return a copy of ``graph`` whose nodes carry their new positions."""
        positions = self.compute_positions(graph, direction)
        laid_out = graph.copy()
        for node_id, position in positions.items():
            laid_out.replace_node(laid_out.nodes[node_id].evolve(position=position))
        return laid_out


def greedy_fas_ordering(graph: nx.DiGraph) -> list[str]:
    """Node ordering from the greedy feedback-arc-set heuristic (Eades, Lin, Smyth).

    Sinks are peeled to the back, sources to the front, and inside cycles the
    node with the largest out-minus-in degree goes next. Candidates are always
    scanned in graph insertion order so the result is deterministic.
    """
    active = dict.fromkeys(graph.nodes)
    out_deg = {node: graph.out_degree(node) for node in graph.nodes}
    in_deg = {node: graph.in_degree(node) for node in graph.nodes}

    front: list[str] = []
    back: list[str] = []

    def remove(node: str) -> None:
        del active[node]
        for succ in graph.successors(node):
            if succ in active:
                in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            if pred in active:
                out_deg[pred] -= 1

    while active:
        changed = True
        while changed:
            changed = False
            for node in [n for n in active if out_deg[n] == 0]:
                remove(node)
                back.append(node)
                changed = True
            for node in [n for n in active if in_deg[n] == 0]:
                remove(node)
                front.append(node)
                changed = True

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            remove(best)
            front.append(best)

    back.reverse()
    return front + back


class LayeredLayoutEngine(LayoutEngine):
    """Rank-based layout with per-edge minimum rank span."""

    def __init__(
        self,
        node_width: int = NODE_WIDTH,
        node_height: int = NODE_HEIGHT,
        node_sep: int = NODE_SEP,
        rank_sep: int = RANK_SEP,
        sweeps: int = 4,
    ):
        """Initialize the layout engine.

        Args:
            node_width: Width of every node box
            node_height: Height of every node box
            node_sep: Gap between neighbouring nodes in the same rank
            rank_sep: Gap added per rank of edge span
            sweeps: Number of down/up barycenter sweep pairs
        """
        self.node_width = node_width
        self.node_height = node_height
        self.node_sep = node_sep
        self.rank_sep = rank_sep
        self.sweeps = sweeps
        self.logger = logging.getLogger(__name__)

    def compute_positions(
        self, graph: CompanyGraph, direction: LayoutDirection = LayoutDirection.TB
    ) -> dict[str, Position]:
        if not graph.nodes:
            return {}

        try:
            dag = self._build_dag(graph)
            ranks = self._assign_ranks(dag)
            layers = self._order_layers(dag, ranks)
        except nx.NetworkXException as e:
            raise LayoutError(
                f"Layout failed: {e}", create_error_context(nodes=len(graph.nodes))
            ) from e

        positions = self._assign_coordinates(layers, ranks, LayoutDirection.parse(direction))
        self.logger.debug(f"Laid out {len(positions)} nodes in {len(layers)} ranks")
        return positions

    def _build_dag(self, graph: CompanyGraph) -> nx.DiGraph:
        """Collapse parallel edges, drop self-loops and reverse back-edges."""
        collapsed = nx.DiGraph()
        collapsed.add_nodes_from(graph.nodes)
        for edge in graph.edges.values():
            if edge.source == edge.target:
                continue
            span = minimum_span(edge)
            if collapsed.has_edge(edge.source, edge.target):
                span = max(span, collapsed[edge.source][edge.target]["minlen"])
            collapsed.add_edge(edge.source, edge.target, minlen=span)

        order = {node: index for index, node in enumerate(greedy_fas_ordering(collapsed))}

        dag = nx.DiGraph()
        dag.add_nodes_from(collapsed.nodes)
        for source, target, data in collapsed.edges(data=True):
            if order[source] > order[target]:
                source, target = target, source
            span = data["minlen"]
            if dag.has_edge(source, target):
                span = max(span, dag[source][target]["minlen"])
            dag.add_edge(source, target, minlen=span)
        return dag

    def _assign_ranks(self, dag: nx.DiGraph) -> dict[str, int]:
        """Longest-path ranking, then pull pure sources down next to their successors."""
        topo = list(nx.topological_sort(dag))

        ranks = dict.fromkeys(topo, 0)
        for node in topo:
            for succ in dag.successors(node):
                ranks[succ] = max(ranks[succ], ranks[node] + dag[node][succ]["minlen"])

        for node in reversed(topo):
            if dag.in_degree(node) == 0 and dag.out_degree(node) > 0:
                ranks[node] = min(
                    ranks[succ] - dag[node][succ]["minlen"] for succ in dag.successors(node)
                )

        lowest = min(ranks.values())
        return {node: rank - lowest for node, rank in ranks.items()}

    def _order_layers(self, dag: nx.DiGraph, ranks: dict[str, int]) -> list[list[str]]:
        """Group nodes by rank and reorder each rank by barycenter sweeps."""
        by_rank: dict[int, list[str]] = defaultdict(list)
        for node in dag.nodes:
            by_rank[ranks[node]].append(node)
        layers = [by_rank[rank] for rank in sorted(by_rank)]

        for _sweep in range(self.sweeps):
            for index in range(1, len(layers)):
                layers[index] = self._sort_layer(layers[index], layers, dag.predecessors)
            for index in range(len(layers) - 2, -1, -1):
                layers[index] = self._sort_layer(layers[index], layers, dag.successors)

        return layers

    def _sort_layer(self, layer: list[str], layers: list[list[str]], neighbors) -> list[str]:
        slots = self._centered_slots(layers)

        def barycenter(item: tuple[int, str]) -> float:
            index, node = item
            positions = [slots[n] for n in neighbors(node)]
            if not positions:
                return index - (len(layer) - 1) / 2
            return sum(positions) / len(positions)

        return [node for _, node in sorted(enumerate(layer), key=barycenter)]

    @staticmethod
    def _centered_slots(layers: list[list[str]]) -> dict[str, float]:
        """Slot of each node relative to the middle of its rank."""
        slots = {}
        for layer in layers:
            offset = (len(layer) - 1) / 2
            for index, node in enumerate(layer):
                slots[node] = index - offset
        return slots

    def _assign_coordinates(
        self, layers: list[list[str]], ranks: dict[str, int], direction: LayoutDirection
    ) -> dict[str, Position]:
        if direction == LayoutDirection.TB:
            rank_extent, order_extent = self.node_height, self.node_width
        else:
            rank_extent, order_extent = self.node_width, self.node_height

        # Empty ranks still cost rank_sep, occupied ranks also cost the node extent
        occupied = {ranks[layer[0]] for layer in layers}
        centers: dict[int, float] = {}
        cursor = 0.0
        for rank in range(max(occupied) + 1):
            extent = rank_extent if rank in occupied else 0
            if rank > 0:
                cursor += self.rank_sep
            centers[rank] = cursor + extent / 2
            cursor += extent

        order_step = order_extent + self.node_sep
        centered: dict[str, tuple[float, float]] = {}
        for layer in layers:
            offset = (len(layer) - 1) / 2
            for index, node in enumerate(layer):
                along_rank = centers[ranks[node]]
                across = (index - offset) * order_step
                if direction == LayoutDirection.TB:
                    centered[node] = (across, along_rank)
                else:
                    centered[node] = (along_rank, across)

        # Anchor at the top-left corner and shift everything to start at the origin
        corners = {
            node: (x - self.node_width / 2, y - self.node_height / 2)
            for node, (x, y) in centered.items()
        }
        min_x = min(x for x, _ in corners.values())
        min_y = min(y for _, y in corners.values())
        return {node: Position(x - min_x, y - min_y) for node, (x, y) in corners.items()}
