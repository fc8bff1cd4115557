"""
Address expansion: companies registered at a location.
"""

from ..model import CompanyGraph
from ..normalizer import located_company_node
from ..records import CompanyRecord
from ..schema import Node, NodeKind, RelationKind
from .base import BaseExpander


class AddressExpander(BaseExpander):
    """Expands an address into the companies registered there."""

    kind = NodeKind.ADDRESS

    def fetch(self, node: Node, graph: CompanyGraph) -> list[CompanyRecord]:
        return self.registry.search_companies_at_location(node.label)

    def merge(self, node: Node, payload: list[CompanyRecord], graph: CompanyGraph) -> list[str]:
        touched: list[str] = []

        for record in payload:
            company_id = record.company_number
            if not company_id:
                continue

            if not graph.has_node(company_id):
                self.add_node(graph, located_company_node(record, node.label))
                self.link(graph, node.id, company_id, RelationKind.REGISTERED_AT)
            touched.append(company_id)

        return touched
