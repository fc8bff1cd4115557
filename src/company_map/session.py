"""
Investigation session: owns the current graph and coordinates every change to it.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace

from .graph.address import format_address
from .graph.assembler import GraphAssembler
from .graph.edges import make_edge
from .graph.expansion import ExpansionEngine, ExpansionReport
from .graph.highlight import Emphasis, highlight, resolve_active_node
from .graph.model import CompanyGraph
from .graph.normalizer import unique_identity
from .graph.records import AppointmentRecord, CompanyRecord, OfficerRecord, PscRecord
from .graph.schema import Node, NodeKind
from .registry.base import RegistrySource
from .shared.exceptions import (
    ExpansionError,
    GraphIntegrityError,
    RegistryError,
    SeedFetchError,
    StaleGraphError,
    create_error_context,
)
from .shared.formatting import format_date
from .shared.models import ExplorationConfig, LayoutDirection
from .visualization.details import describe_node
from .visualization.export import graph_to_payload
from .visualization.layout import LayeredLayoutEngine, LayoutEngine


@dataclass
class NodeDetails:
    """Everything the detail view shows for one node."""

    node: Node
    rows: list[tuple[str, str]]
    officers: list[OfficerRecord] = field(default_factory=list)
    pscs: list[PscRecord] = field(default_factory=list)
    appointments: list[AppointmentRecord] = field(default_factory=list)


class InvestigationSession:
    """Single active investigation.

    The session holds one :class:`CompanyGraph` at a time and replaces it
    wholesale on every committed change. ``epoch`` counts root searches and
    ``version`` counts commits. An expansion remembers the epoch it started
    in and is discarded if a new root search happened meanwhile.

    Expansions may finish on a worker thread (:meth:`expand_async`), so
    commits are serialized by a lock. Network calls never run under it.
    """

    def __init__(
        self,
        registry: RegistrySource,
        config: ExplorationConfig | None = None,
        layout_engine: LayoutEngine | None = None,
        expansion_engine: ExpansionEngine | None = None,
        assembler: GraphAssembler | None = None,
    ):
        """Initialize the session.

        Args:
            registry: Source of registry data
            config: Expansion and layout settings
            layout_engine: Layout implementation, layered by default
            expansion_engine: Expansion implementation built from ``registry`` by default
            assembler: Seed graph assembler
        """
        self.registry = registry
        self.config = config or ExplorationConfig()
        self.layout_engine = layout_engine or LayeredLayoutEngine()
        self.expansion_engine = expansion_engine or ExpansionEngine(registry, self.config)
        self.assembler = assembler or GraphAssembler()
        self.direction = LayoutDirection.parse(self.config.direction)
        self.logger = logging.getLogger(__name__)

        self._graph = CompanyGraph()
        self._lock = threading.Lock()
        self._executor: ThreadPoolExecutor | None = None

        self.epoch = 0
        self.version = 0
        self.root_id: str | None = None
        self.selected_id: str | None = None
        self.hovered_id: str | None = None
        self.last_report: ExpansionReport | None = None

    def __enter__(self) -> "InvestigationSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Wait for background expansions and release their worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    @property
    def graph(self) -> CompanyGraph:
        return self._graph

    def _commit(self, graph: CompanyGraph) -> CompanyGraph:
        self._graph = graph
        self.version += 1
        return graph

    def _require_node(self, node_id: str) -> Node:
        node = self._graph.get_node(node_id)
        if node is None:
            raise GraphIntegrityError("Unknown node", create_error_context(node_id=node_id))
        return node

    # Root search

    def start(self, query: str) -> CompanyGraph:
        """Start a new investigation from a company number or name.

        The previous graph is discarded immediately; on failure the session is
        left with an empty graph.

        Raises:
            SeedFetchError: If the root company cannot be resolved or fetched
        """
        with self._lock:
            self.epoch += 1
            epoch = self.epoch
            self.root_id = self.selected_id = self.hovered_id = None
            self.last_report = None
            self._commit(CompanyGraph())

        try:
            company_number = self.registry.resolve_company_number(query)
            bundle = self.registry.fetch_company(company_number)
        except RegistryError as e:
            self.logger.error(f"Could not load company for '{query}': {e}")
            raise SeedFetchError(
                f"Could not load company '{query}': {e.message}",
                create_error_context(query=query, reason=type(e).__name__),
            ) from e

        graph = self.assembler.assemble(bundle.company, bundle.officers, bundle.pscs)
        laid_out = self.layout_engine.layout(graph, self.direction)

        with self._lock:
            if epoch != self.epoch:
                raise StaleGraphError(
                    "Root search superseded by a newer search", create_error_context(query=query)
                )
            self.root_id = self.selected_id = bundle.company.company_number
            return self._commit(laid_out)

    # Expansion

    def expand(self, node_id: str | None = None, levels: int | None = None) -> CompanyGraph:
        """Expand a node (the selected one by default) and commit the result.

        Raises:
            ConfigurationError: If ``levels`` is out of range
            ExpansionError: If nothing can be expanded or the expansion failed
            StaleGraphError: If a new root search replaced the graph meanwhile
        """
        with self._lock:
            target = node_id or self.selected_id
            base = self._graph
            epoch = self.epoch

        if target is None:
            raise ExpansionError("No node selected to expand")

        result = self.expansion_engine.run([target], base, levels)
        laid_out = self.layout_engine.layout(result.graph, self.direction)
        return self._commit_expansion(base, laid_out, epoch, result.report)

    def expand_async(self, node_id: str | None = None, levels: int | None = None) -> Future:
        """Run :meth:`expand` in the background and return its future."""
        target = node_id or self.selected_id
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="expansion")
        return self._executor.submit(self.expand, target, levels)

    def _commit_expansion(
        self,
        base: CompanyGraph,
        expanded: CompanyGraph,
        epoch: int,
        report: ExpansionReport,
    ) -> CompanyGraph:
        with self._lock:
            if epoch != self.epoch:
                self.logger.warning("Discarding expansion result for a replaced graph")
                raise StaleGraphError(
                    "Graph was replaced while the expansion was running",
                    create_error_context(started_epoch=epoch, current_epoch=self.epoch),
                )

            current = self._graph
            if current is base:
                self.last_report = report
                return self._commit(expanded)

            # Another commit landed meanwhile: replay this expansion's additions onto it
            merged = current.copy()
            renamed: dict[str, str] = {}
            for node_id, node in expanded.nodes.items():
                if node_id in base.nodes:
                    continue
                if node.kind == NodeKind.ADDRESS:
                    existing = merged.find_address_node(node.label)
                    if existing is not None:
                        renamed[node_id] = existing.id
                        continue
                    if node_id in merged.nodes:
                        node = replace(node, id=unique_identity(node_id, merged))
                        renamed[node_id] = node.id
                merged.add_node(node)

            for edge_id, edge in expanded.edges.items():
                if edge_id in base.edges:
                    continue
                source = renamed.get(edge.source, edge.source)
                target = renamed.get(edge.target, edge.target)
                if (source, target) != (edge.source, edge.target):
                    edge = make_edge(source, target, edge.relation, edge.label)
                merged.add_edge(edge)

            self.last_report = report
            return self._commit(self.layout_engine.layout(merged, self.direction))

    # Selection and emphasis

    def select(self, node_id: str | None) -> None:
        if node_id is not None:
            self._require_node(node_id)
        self.selected_id = node_id

    def hover(self, node_id: str | None) -> None:
        if node_id is not None:
            self._require_node(node_id)
        self.hovered_id = node_id

    @property
    def active_id(self) -> str | None:
        return resolve_active_node(self.hovered_id, self.selected_id)

    def emphasis(self) -> Emphasis:
        return highlight(self._graph, self.active_id)

    def to_payload(self) -> dict:
        """Presentation payload for the current graph and emphasis."""
        return graph_to_payload(self._graph, self.emphasis())

    # Annotations and layout

    def annotate(
        self, node_id: str, custom_color: str | None = None, notes: str | None = None
    ) -> Node:
        """Save user annotations on a node. Empty values clear the annotation."""
        with self._lock:
            node = self._require_node(node_id)
            updated = node.evolve(custom_color=custom_color or None, notes=notes or None)
            graph = self._graph.copy()
            graph.replace_node(updated)
            self._commit(graph)
            return updated

    def set_layout_direction(self, direction: LayoutDirection | str) -> CompanyGraph:
        self.direction = LayoutDirection.parse(direction)
        return self.relayout()

    def relayout(self) -> CompanyGraph:
        with self._lock:
            return self._commit(self.layout_engine.layout(self._graph, self.direction))

    # Details

    def node_details(self, node_id: str) -> list[tuple[str, str]]:
        return describe_node(self._require_node(node_id))

    def load_details(self, node_id: str) -> NodeDetails:
        """Fetch what the detail view needs beyond what the node already holds.

        Companies known only from a search hit or an appointment get their
        display attributes refreshed from the full profile. Fetch failures are
        logged and the details fall back to what the node carries.
        """
        node = self._require_node(node_id)
        epoch = self.epoch
        details = NodeDetails(node=node, rows=[])

        try:
            if node.kind == NodeKind.COMPANY:
                bundle = self.registry.fetch_company(node.id)
                details.officers = bundle.officers
                details.pscs = bundle.pscs
                details.node = self._refresh_company(node, bundle.company, epoch)
            elif node.kind == NodeKind.OFFICER and node.officer_registry_id:
                details.appointments = self.registry.fetch_officer_appointments(
                    node.officer_registry_id
                )
        except RegistryError as e:
            self.logger.warning(f"Could not load details for {node_id}: {e}")

        details.rows = describe_node(details.node)
        return details

    def _refresh_company(self, node: Node, profile: CompanyRecord, epoch: int) -> Node:
        current = node.source_record
        if isinstance(current, CompanyRecord) and current.is_full_profile:
            return node

        refreshed = node.evolve(
            source_record=profile,
            subtext=f"Inc: {format_date(profile.date_of_creation)}",
            status=profile.company_status or node.status,
            address=format_address(profile.registered_office_address) or node.address,
        )
        with self._lock:
            if epoch != self.epoch or node.id not in self._graph.nodes:
                return refreshed
            latest = self._graph.nodes[node.id]
            refreshed = refreshed.evolve(
                custom_color=latest.custom_color, notes=latest.notes, position=latest.position
            )
            graph = self._graph.copy()
            graph.replace_node(refreshed)
            self._commit(graph)
        return refreshed
