"""
Typed records parsed from raw registry payloads.

Every registry JSON object is turned into one of these records at the point it
enters the graph layer, so node construction never reads loosely-shaped dicts.
The untouched payload is kept on ``raw`` for detail views and exports.
"""

from dataclasses import dataclass, field
from typing import Any


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _address(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) and value else None


def extract_officer_id(raw: dict[str, Any]) -> str | None:
    """Return the registry officer id from an explicit field or the appointments link.

    The link has the shape ``/officers/<id>/appointments``.
    """
    explicit = _text(raw.get("officer_id"))
    if explicit:
        return explicit

    link = ((raw.get("links") or {}).get("officer") or {}).get("appointments")
    if not isinstance(link, str):
        return None
    parts = link.split("/")
    return _text(parts[2]) if len(parts) > 2 else None


@dataclass(frozen=True)
class CompanyRecord:
    """A company profile or a company search hit."""

    company_number: str | None
    company_name: str | None = None
    company_status: str | None = None
    date_of_creation: str | None = None
    company_type: str | None = None
    jurisdiction: str | None = None
    registered_office_address: dict[str, Any] | None = None
    sic_codes: tuple[str, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "CompanyRecord":
        return cls(
            company_number=_text(raw.get("company_number")),
            company_name=_text(raw.get("company_name") or raw.get("title")),
            company_status=_text(raw.get("company_status")),
            date_of_creation=_text(raw.get("date_of_creation")),
            company_type=_text(raw.get("type") or raw.get("company_type")),
            jurisdiction=_text(raw.get("jurisdiction")),
            registered_office_address=_address(
                raw.get("registered_office_address") or raw.get("address")
            ),
            sic_codes=tuple(str(code) for code in raw.get("sic_codes") or ()),
            raw=raw,
        )

    @property
    def is_full_profile(self) -> bool:
        """Search hits and appointment stubs carry no SIC codes; full profiles do."""
        return "sic_codes" in self.raw


@dataclass(frozen=True)
class OfficerRecord:
    """An officer appointment listed under a company."""

    name: str | None
    officer_role: str | None = None
    officer_id: str | None = None
    appointed_on: str | None = None
    nationality: str | None = None
    occupation: str | None = None
    country_of_residence: str | None = None
    address: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "OfficerRecord":
        return cls(
            name=_text(raw.get("name")),
            officer_role=_text(raw.get("officer_role")),
            officer_id=extract_officer_id(raw),
            appointed_on=_text(raw.get("appointed_on")),
            nationality=_text(raw.get("nationality")),
            occupation=_text(raw.get("occupation")),
            country_of_residence=_text(raw.get("country_of_residence")),
            address=_address(raw.get("address")),
            raw=raw,
        )


@dataclass(frozen=True)
class PscRecord:
    """A person (or entity) with significant control over a company."""

    name: str | None
    natures_of_control: tuple[str, ...] = ()
    nationality: str | None = None
    notified_on: str | None = None
    kind: str | None = None
    address: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "PscRecord":
        return cls(
            name=_text(raw.get("name")),
            natures_of_control=tuple(str(n) for n in raw.get("natures_of_control") or ()),
            nationality=_text(raw.get("nationality")),
            notified_on=_text(raw.get("notified_on")),
            kind=_text(raw.get("kind")),
            address=_address(raw.get("address")),
            raw=raw,
        )


@dataclass(frozen=True)
class AppointmentRecord:
    """One company appointment held by an officer."""

    company_number: str | None
    company_name: str | None = None
    company_status: str | None = None
    officer_role: str | None = None
    appointed_on: str | None = None
    address: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "AppointmentRecord":
        appointed_to = raw.get("appointed_to") or {}
        return cls(
            company_number=_text(appointed_to.get("company_number")),
            company_name=_text(appointed_to.get("company_name")),
            company_status=_text(appointed_to.get("company_status")),
            officer_role=_text(raw.get("officer_role")),
            appointed_on=_text(raw.get("appointed_on")),
            address=_address(raw.get("address")),
            raw=raw,
        )


@dataclass(frozen=True)
class AddressRecord:
    """A postal address as referenced by a company or an officer."""

    formatted: str
    address: dict[str, Any] | None = None
    origin: str = "correspondence"


RegistryRecord = CompanyRecord | OfficerRecord | PscRecord | AppointmentRecord | AddressRecord
