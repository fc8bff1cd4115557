"""
Pytest configuration and shared fixtures for company-map tests.
"""

import copy
import tempfile
import threading
import time
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from company_map.graph.records import (
    AppointmentRecord,
    CompanyRecord,
    OfficerRecord,
    PscRecord,
)
from company_map.registry.base import CompanyBundle, RegistrySource
from company_map.shared.exceptions import RegistryNotFoundError, RegistryRequestError

ADDRESS_A = {
    "premises": "Suite 4",
    "address_line_1": "1 High Street",
    "locality": "London",
    "postal_code": "EC1A 1AA",
    "country": "United Kingdom",
}
ADDRESS_A_LABEL = "1 High Street, London, EC1A 1AA, United Kingdom"

ADDRESS_B = {
    "address_line_1": "22 Mill Lane",
    "address_line_2": "Unit 3",
    "locality": "Leeds",
    "postal_code": "LS1 4AB",
}
ADDRESS_B_LABEL = "22 Mill Lane, Unit 3, Leeds, LS1 4AB"


class FakeRegistry(RegistrySource):
    """In-memory registry with failure injection.

    Keys in ``failing``, ``delays`` and ``gates`` look like ``"<operation>:<id>"``, e.g.
    ``"appointments:abc"`` or ``"profile:00000007"``.
    """

    def __init__(
        self,
        companies: dict[str, dict[str, Any]] | None = None,
        officers: dict[str, list[dict[str, Any]]] | None = None,
        pscs: dict[str, list[dict[str, Any]]] | None = None,
        appointments: dict[str, list[dict[str, Any]]] | None = None,
        locations: dict[str, list[dict[str, Any]]] | None = None,
        name_hits: dict[str, list[dict[str, Any]]] | None = None,
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self.companies = companies or {}
        self.officers = officers or {}
        self.pscs = pscs or {}
        self.appointments = appointments or {}
        self.locations = locations or {}
        self.name_hits = name_hits or {}
        self.failing = failing or set()
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.gates: dict[str, tuple[threading.Event, threading.Event]] = {}
        self._lock = threading.Lock()

    def _record_call(self, operation: str, key: str) -> None:
        with self._lock:
            self.calls.append((operation, key))
        call_key = f"{operation}:{key}"
        if call_key in self.gates:
            entered, release = self.gates[call_key]
            entered.set()
            release.wait(timeout=5)
        if call_key in self.delays:
            time.sleep(self.delays[call_key])
        if call_key in self.failing:
            raise RegistryRequestError("Injected failure", {"call": call_key})

    def gate(self, call_key: str) -> tuple[threading.Event, threading.Event]:
        """Hold the given call until released; returns (entered, release) events."""
        events = (threading.Event(), threading.Event())
        self.gates[call_key] = events
        return events

    def called(self, operation: str) -> list[str]:
        return [key for op, key in self.calls if op == operation]

    def fetch_company_profile(self, company_number: str) -> CompanyRecord:
        self._record_call("profile", company_number)
        if company_number not in self.companies:
            raise RegistryNotFoundError("Not found", {"company": company_number})
        return CompanyRecord.from_api(self.companies[company_number])

    def fetch_company(self, company_number: str) -> CompanyBundle:
        self._record_call("company", company_number)
        if company_number not in self.companies:
            raise RegistryNotFoundError("Not found", {"company": company_number})
        return CompanyBundle(
            company=CompanyRecord.from_api(self.companies[company_number]),
            officers=[OfficerRecord.from_api(o) for o in self.officers.get(company_number, [])],
            pscs=[PscRecord.from_api(p) for p in self.pscs.get(company_number, [])],
        )

    def fetch_officer_appointments(self, officer_id: str) -> list[AppointmentRecord]:
        self._record_call("appointments", officer_id)
        return [AppointmentRecord.from_api(a) for a in self.appointments.get(officer_id, [])]

    def fetch_company_officers(self, company_number: str) -> list[OfficerRecord]:
        self._record_call("officers", company_number)
        return [OfficerRecord.from_api(o) for o in self.officers.get(company_number, [])]

    def search_companies_at_location(self, location: str) -> list[CompanyRecord]:
        self._record_call("location", location)
        return [CompanyRecord.from_api(c) for c in self.locations.get(location, [])]

    def search_companies_by_name(self, query: str) -> list[CompanyRecord]:
        self._record_call("name", query)
        return [CompanyRecord.from_api(c) for c in self.name_hits.get(query, [])]


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def company_profile() -> dict[str, Any]:
    """Return a full company profile as served by the registry."""
    return {
        "company_number": "00000006",
        "company_name": "ACME LIMITED",
        "company_status": "active",
        "date_of_creation": "2001-03-05",
        "type": "ltd",
        "jurisdiction": "england-wales",
        "registered_office_address": dict(ADDRESS_A),
        "sic_codes": ["62020"],
        "accounts": {"next_due": "2025-12-31", "last_accounts": {"made_up_to": "2024-03-31"}},
    }


@pytest.fixture
def officer_jane() -> dict[str, Any]:
    """Return an officer listing entry with a resolvable officer id and no address."""
    return {
        "name": "DOE, Jane",
        "officer_role": "director",
        "appointed_on": "2015-06-01",
        "nationality": "British",
        "occupation": "Company Director",
        "country_of_residence": "England",
        "links": {"officer": {"appointments": "/officers/abc/appointments"}},
    }


@pytest.fixture
def psc_smith() -> dict[str, Any]:
    """Return a PSC listing entry."""
    return {
        "name": "Mr John Smith",
        "natures_of_control": ["ownership-of-shares-75-to-100-percent"],
        "nationality": "British",
        "notified_on": "2016-04-06",
        "kind": "individual-person-with-significant-control",
    }


@pytest.fixture
def second_company() -> dict[str, Any]:
    """Return a profile for a company reachable through Jane's appointments."""
    return {
        "company_number": "00000007",
        "company_name": "WIDGETS PLC",
        "company_status": "active",
        "date_of_creation": "1999-11-20",
        "type": "plc",
        "registered_office_address": dict(ADDRESS_B),
        "sic_codes": ["64209"],
    }


@pytest.fixture
def fake_registry(
    company_profile: dict[str, Any],
    officer_jane: dict[str, Any],
    psc_smith: dict[str, Any],
    second_company: dict[str, Any],
) -> FakeRegistry:
    """Return a registry seeded with a small two-company network."""
    return FakeRegistry(
        companies={
            "00000006": company_profile,
            "00000007": second_company,
        },
        officers={
            "00000006": [officer_jane],
            "00000007": [copy.deepcopy(officer_jane)],
        },
        pscs={"00000006": [psc_smith]},
        appointments={
            "abc": [
                {
                    "appointed_to": {
                        "company_number": "00000006",
                        "company_name": "ACME LIMITED",
                        "company_status": "active",
                    },
                    "officer_role": "director",
                    "appointed_on": "2015-06-01",
                },
                {
                    "appointed_to": {
                        "company_number": "00000007",
                        "company_name": "WIDGETS PLC",
                        "company_status": "active",
                    },
                    "officer_role": "secretary",
                    "appointed_on": "2018-02-14",
                    "address": dict(ADDRESS_A),
                },
            ]
        },
        locations={
            ADDRESS_A_LABEL: [
                {
                    "company_number": "00000006",
                    "company_name": "ACME LIMITED",
                    "company_status": "active",
                },
                {
                    "company_number": "00000008",
                    "company_name": "SHELL HOLDINGS LTD",
                    "company_status": "dissolved",
                    "date_of_creation": "2010-01-01",
                    "registered_office_address": dict(ADDRESS_A),
                },
            ]
        },
        name_hits={
            "acme": [
                {"company_number": "00000006", "title": "ACME LIMITED", "company_status": "active"}
            ]
        },
    )


@pytest.fixture
def address_a() -> dict[str, Any]:
    """Return the registered office of the root company."""
    return dict(ADDRESS_A)


@pytest.fixture
def address_b() -> dict[str, Any]:
    """Return an address not otherwise on the seed graph."""
    return dict(ADDRESS_B)
