"""
Builds the seed graph for a root company from its profile, officers and PSCs.
"""

import logging

from .address import format_address
from .edges import make_edge
from .model import CompanyGraph
from .normalizer import (
    PRIMARY_ADDRESS_ID,
    address_identity,
    address_node,
    company_node,
    officer_node,
    psc_node,
)
from .records import AddressRecord, CompanyRecord, OfficerRecord, PscRecord
from .schema import Edge, Node, RelationKind


class GraphAssembler:
    """Turns one company bundle into a fresh graph."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def assemble(
        self,
        profile: CompanyRecord,
        officers: list[OfficerRecord],
        pscs: list[PscRecord],
    ) -> CompanyGraph:
        """Assemble the seed graph.

        Officers and PSCs with the same computed identity collapse to the first
        occurrence. Officer addresses equal to the registered office reuse the
        registered-office node; other equal addresses share one node.

        Args:
            profile: Root company profile
            officers: Officer listing for the company
            pscs: PSC listing for the company

        Returns:
            New graph containing only the root company and its direct relations
        """
        root = company_node(profile)
        company_address = format_address(profile.registered_office_address)

        officer_nodes: list[Node] = []
        psc_nodes: list[Node] = []
        address_nodes: list[Node] = []
        edges: list[Edge] = []

        seen_officers: set[str] = set()
        for index, record in enumerate(officers):
            node = officer_node(record, root.id, index)
            if node.id in seen_officers:
                self.logger.debug(f"Duplicate officer identity {node.id}, keeping first")
                continue
            seen_officers.add(node.id)
            officer_nodes.append(node)
            edges.append(make_edge(root.id, node.id, RelationKind.OFFICER_ROLE, node.role))

        seen_pscs: set[str] = set()
        for index, record in enumerate(pscs):
            node = psc_node(record, index)
            if node.id in seen_pscs:
                continue
            seen_pscs.add(node.id)
            psc_nodes.append(node)
            edges.append(make_edge(root.id, node.id, RelationKind.PSC))

        if company_address:
            edges.append(make_edge(root.id, PRIMARY_ADDRESS_ID, RelationKind.REGISTERED_OFFICE))

        # Correspondence addresses, deduplicated by formatted string within this batch
        batch_addresses: dict[str, str] = {}
        taken_ids = {PRIMARY_ADDRESS_ID}
        for index, record in enumerate(officers):
            label = format_address(record.address)
            if not label:
                continue

            if company_address and label == company_address:
                target_id = PRIMARY_ADDRESS_ID
            elif label in batch_addresses:
                target_id = batch_addresses[label]
            else:
                target_id = address_identity(label, index, taken_ids)
                taken_ids.add(target_id)
                batch_addresses[label] = target_id
                address_nodes.append(
                    address_node(target_id, AddressRecord(label, record.address, "correspondence"))
                )

            officer_id = officer_node(record, root.id, index).id
            edges.append(make_edge(officer_id, target_id, RelationKind.CORRESPONDENCE_ADDRESS))

        nodes = [root, *officer_nodes, *psc_nodes]
        if company_address:
            nodes.append(
                address_node(
                    PRIMARY_ADDRESS_ID,
                    AddressRecord(company_address, profile.registered_office_address, "registered"),
                )
            )
        nodes.extend(address_nodes)

        graph = CompanyGraph(nodes, edges)
        self.logger.info(
            f"Assembled graph for {root.id}: {len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        return graph
