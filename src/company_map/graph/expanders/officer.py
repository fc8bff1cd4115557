"""
Officer expansion: appointments and the companies they lead to.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from ...registry.base import RegistrySource
from ..address import format_address
from ..model import CompanyGraph
from ..normalizer import appointed_company_node
from ..records import AppointmentRecord, CompanyRecord
from ..schema import Node, NodeKind, RelationKind
from .base import BaseExpander


@dataclass
class OfficerPayload:
    appointments: list[AppointmentRecord]
    profiles: dict[str, CompanyRecord | None] = field(default_factory=dict)


class OfficerExpander(BaseExpander):
    """Expands an officer into the companies they are appointed to."""

    kind = NodeKind.OFFICER

    def __init__(self, registry: RegistrySource, detail_workers: int = 4):
        super().__init__(registry)
        self.detail_workers = detail_workers

    def fetch(self, node: Node, graph: CompanyGraph) -> OfficerPayload:
        appointments = self.registry.fetch_officer_appointments(node.officer_registry_id or "")

        missing: list[str] = []
        for appointment in appointments:
            number = appointment.company_number
            if number and not graph.has_node(number) and number not in missing:
                missing.append(number)

        return OfficerPayload(appointments, self._fetch_profiles(missing))

    def _fetch_profiles(self, company_numbers: list[str]) -> dict[str, CompanyRecord | None]:
        """Fetch profiles concurrently; a failed fetch maps to None."""
        profiles: dict[str, CompanyRecord | None] = {}
        if not company_numbers:
            return profiles

        workers = max(1, min(self.detail_workers, len(company_numbers)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.registry.fetch_company_profile, number): number
                for number in company_numbers
            }
            for future in as_completed(futures):
                number = futures[future]
                try:
                    profiles[number] = future.result()
                except Exception as e:
                    self.logger.warning(f"Could not fetch profile for {number}: {e}")
                    profiles[number] = None
        return profiles

    def merge(self, node: Node, payload: OfficerPayload, graph: CompanyGraph) -> list[str]:
        touched: list[str] = []

        for appointment in payload.appointments:
            company_id = appointment.company_number
            if not company_id:
                continue

            if not graph.has_node(company_id):
                self.add_node(
                    graph, appointed_company_node(appointment, payload.profiles.get(company_id))
                )
            touched.append(company_id)

            self.link(
                graph,
                node.id,
                company_id,
                RelationKind.OFFICER_ROLE,
                appointment.officer_role or node.role,
            )

            # Only relink to addresses already on the map, never create them here
            label = format_address(appointment.address)
            existing = graph.find_address_node(label) if label else None
            if existing is not None:
                self.link(graph, company_id, existing.id, RelationKind.REGISTERED_OFFICE)

        return touched
