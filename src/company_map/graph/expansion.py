"""
Breadth-first, level-bounded expansion of an investigation graph.
"""

import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from ..registry.base import RegistrySource
from ..shared.exceptions import ExpansionError, create_error_context
from ..shared.models import ExplorationConfig
from .expanders import AddressExpander, BaseExpander, CompanyExpander, OfficerExpander
from .model import CompanyGraph
from .schema import Node, NodeKind


@dataclass
class ExpansionReport:
    """What an expansion run did, level by level."""

    levels_run: int = 0
    expanded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    nodes_added: int = 0
    edges_added: int = 0
    duration: float = 0.0


@dataclass
class ExpansionResult:
    graph: CompanyGraph
    report: ExpansionReport


class ExpansionEngine:
    """Expands frontier nodes outward by up to N levels.

    Within a level every frontier node is fetched concurrently. Results are
    merged afterwards in frontier order, so the outcome does not depend on
    which request finished first. A node whose fetch fails is skipped with a
    warning. Any other failure aborts the run and the input graph is left as
    it was, since all work happens on a copy.
    """

    def __init__(self, registry: RegistrySource, config: ExplorationConfig | None = None):
        """Initialize the engine.

        Args:
            registry: Source of registry data
            config: Worker counts and depth limits
        """
        self.config = config or ExplorationConfig()
        self.logger = logging.getLogger(__name__)

        self.expanders: dict[NodeKind, BaseExpander] = {
            NodeKind.OFFICER: OfficerExpander(registry, self.config.detail_workers),
            NodeKind.COMPANY: CompanyExpander(registry),
            NodeKind.ADDRESS: AddressExpander(registry),
        }

    def expand(
        self, frontier: Iterable[Node | str], graph: CompanyGraph, max_levels: int | None = None
    ) -> CompanyGraph:
        """Expand and return the new graph. See :meth:`run`."""
        return self.run(frontier, graph, max_levels).graph

    def run(
        self, frontier: Iterable[Node | str], graph: CompanyGraph, max_levels: int | None = None
    ) -> ExpansionResult:
        """Expand ``frontier`` by up to ``max_levels`` levels.

        Args:
            frontier: Nodes (or node ids) to expand first; all must be in ``graph``
            graph: Current graph, never modified
            max_levels: Depth, 1 to the configured maximum

        Returns:
            The expanded graph together with a report

        Raises:
            ConfigurationError: If the depth is out of range
            ExpansionError: If the expansion failed as a whole
        """
        levels = self.config.validate_levels(max_levels)
        report = ExpansionReport()
        start_time = time.time()
        working = graph.copy()

        try:
            frontier_ids = self._initial_frontier(frontier, working)

            for level in range(1, levels + 1):
                if not frontier_ids:
                    break

                self.logger.debug(f"Expansion level {level}: {len(frontier_ids)} frontier nodes")
                fetched = self._fetch_level(frontier_ids, working, report)
                frontier_ids = self._merge_level(fetched, working)
                report.levels_run = level

        except ExpansionError:
            raise
        except Exception as e:
            raise ExpansionError(
                f"Expansion failed: {e}",
                create_error_context(level=report.levels_run + 1, original_error=type(e).__name__),
            ) from e

        report.nodes_added = len(working.nodes) - len(graph.nodes)
        report.edges_added = len(working.edges) - len(graph.edges)
        report.duration = time.time() - start_time

        self.logger.info(
            f"Expansion finished after {report.levels_run} level(s): "
            f"+{report.nodes_added} nodes, +{report.edges_added} edges, "
            f"{len(report.failed)} failed"
        )
        return ExpansionResult(working, report)

    def _initial_frontier(self, frontier: Iterable[Node | str], graph: CompanyGraph) -> list[str]:
        ids: list[str] = []
        for item in frontier:
            node_id = item.id if isinstance(item, Node) else item
            if not graph.has_node(node_id):
                raise ExpansionError(
                    "Frontier node is not in the graph", create_error_context(node_id=node_id)
                )
            if node_id not in ids:
                ids.append(node_id)
        return ids

    def _fetch_level(
        self, frontier_ids: list[str], graph: CompanyGraph, report: ExpansionReport
    ) -> list[tuple[Node, BaseExpander, Any]]:
        """Fetch every expandable frontier node concurrently, keeping frontier order."""
        jobs: list[tuple[Node, BaseExpander]] = []
        for node_id in frontier_ids:
            node = graph.nodes[node_id]
            expander = self.expanders.get(node.kind)
            if expander is None or not expander.can_expand(node):
                self.logger.debug(f"Node {node_id} ({node.kind.value}) is not expandable")
                report.skipped.append(node_id)
                continue
            jobs.append((node, expander))

        if not jobs:
            return []

        results: list[tuple[Node, BaseExpander, Any]] = []
        workers = max(1, min(self.config.max_workers, len(jobs)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(expander.fetch, node, graph) for node, expander in jobs]

            for (node, expander), future in zip(jobs, futures):
                try:
                    payload = future.result()
                except Exception as e:
                    self.logger.warning(f"Expansion of {node.id} failed, skipping: {e}")
                    report.failed[node.id] = str(e)
                    continue
                results.append((node, expander, payload))
                report.expanded.append(node.id)

        return results

    def _merge_level(
        self, fetched: list[tuple[Node, BaseExpander, Any]], graph: CompanyGraph
    ) -> list[str]:
        """Merge fetched payloads in order and return the next frontier."""
        next_frontier: list[str] = []
        seen: set[str] = set()

        for node, expander, payload in fetched:
            for neighbor_id in expander.merge(node, payload, graph):
                if neighbor_id not in seen:
                    seen.add(neighbor_id)
                    next_frontier.append(neighbor_id)

        return next_frontier
