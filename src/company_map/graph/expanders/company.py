"""
Company expansion: officers and their correspondence addresses.
"""

from ..address import format_address
from ..model import CompanyGraph
from ..normalizer import address_identity, address_node, officer_identity, officer_node
from ..records import AddressRecord, OfficerRecord
from ..schema import Node, NodeKind, RelationKind
from .base import BaseExpander


class CompanyExpander(BaseExpander):
    """Expands a company into its officers and their correspondence addresses."""

    kind = NodeKind.COMPANY

    def fetch(self, node: Node, graph: CompanyGraph) -> list[OfficerRecord]:
        return self.registry.fetch_company_officers(node.id)

    def merge(self, node: Node, payload: list[OfficerRecord], graph: CompanyGraph) -> list[str]:
        touched: list[str] = []

        for index, record in enumerate(payload):
            officer_id = officer_identity(record, node.id, index)

            if graph.has_node(officer_id):
                self.link(
                    graph, node.id, officer_id, RelationKind.OFFICER_ROLE, record.officer_role
                )
                touched.append(officer_id)
                continue

            officer = officer_node(record, node.id, index)
            self.add_node(graph, officer)
            self.link(graph, node.id, officer.id, RelationKind.OFFICER_ROLE, officer.role)
            touched.append(officer.id)

            label = format_address(record.address)
            if not label:
                continue

            existing = graph.find_address_node(label)
            if existing is not None:
                address_id = existing.id
            else:
                address_id = address_identity(label, index, graph)
                self.add_node(
                    graph,
                    address_node(address_id, AddressRecord(label, record.address)),
                )
                touched.append(address_id)

            self.link(graph, officer.id, address_id, RelationKind.CORRESPONDENCE_ADDRESS)

        return touched
