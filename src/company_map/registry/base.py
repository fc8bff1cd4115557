"""
Abstract source of company registry data.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..graph.records import AppointmentRecord, CompanyRecord, OfficerRecord, PscRecord
from ..shared.exceptions import RegistryNotFoundError, create_error_context

COMPANY_NUMBER_PATTERN = re.compile(r"^(\d{8}|[A-Z]{2}\d{6})$")


@dataclass
class CompanyBundle:
    """A company profile together with its officer and PSC listings."""

    company: CompanyRecord
    officers: list[OfficerRecord] = field(default_factory=list)
    pscs: list[PscRecord] = field(default_factory=list)


def looks_like_company_number(query: str) -> bool:
    return bool(COMPANY_NUMBER_PATTERN.match(query.strip().upper()))


class RegistrySource(ABC):
    """Fetch capability the graph layer depends on.

    Implementations raise :class:`~company_map.shared.exceptions.RegistryError`
    subclasses on failure and return parsed records on success.
    """

    @abstractmethod
    def fetch_company(self, company_number: str) -> CompanyBundle:
        """Profile, officers and PSCs of one company."""
        pass

    @abstractmethod
    def fetch_officer_appointments(self, officer_id: str) -> list[AppointmentRecord]:
        pass

    @abstractmethod
    def fetch_company_officers(self, company_number: str) -> list[OfficerRecord]:
        pass

    @abstractmethod
    def search_companies_at_location(self, location: str) -> list[CompanyRecord]:
        pass

    @abstractmethod
    def search_companies_by_name(self, query: str) -> list[CompanyRecord]:
        pass

    def fetch_company_profile(self, company_number: str) -> CompanyRecord:
        """Profile only. Override when the source can fetch it without the listings."""
        return self.fetch_company(company_number).company

    def resolve_company_number(self, query: str) -> str:
        """Turn user input into a company number.

        Input that already looks like a company number is used as-is; anything
        else is searched by name and the first hit wins.

        Raises:
            RegistryNotFoundError: If a name search returns nothing usable
        """
        query = query.strip()
        if looks_like_company_number(query):
            return query.upper()

        for hit in self.search_companies_by_name(query):
            if hit.company_number:
                return hit.company_number

        raise RegistryNotFoundError("No company found", create_error_context(query=query))
