"""
Projection of registry records into graph nodes.

Identity rules live here and nowhere else:

    company   <company_number>
    officer   officer-<registry officer id>, else officer-<parent>-<index>
    psc       psc-<index>
    address   address-1 for the root registered office,
              else address-<slug(label)>-<index>

Officer and PSC identities built from a position in a listing are only unique
within that listing. Such nodes get ``has_stable_identity=False`` and carry a
content fingerprint (name, date, role) for diagnostics.
"""

import hashlib
from collections.abc import Container

from ..shared.formatting import format_date
from .address import address_slug, format_address
from .records import (
    AddressRecord,
    AppointmentRecord,
    CompanyRecord,
    OfficerRecord,
    PscRecord,
)
from .schema import Node, NodeKind

ROOT_COMPANY_ROLE = "Target Company"
PRIMARY_ADDRESS_ID = "address-1"
REGISTERED_ADDRESS_ROLE = "Registered Address"
CORRESPONDENCE_ROLE = "Correspondence Address"


def content_fingerprint(*parts: str | None) -> str:
    key = "|".join(part or "" for part in parts)
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def officer_identity(record: OfficerRecord, parent_id: str, index: int) -> str:
    if record.officer_id:
        return f"officer-{record.officer_id}"
    return f"officer-{parent_id}-{index}"


def psc_identity(index: int) -> str:
    return f"psc-{index}"


def unique_identity(base: str, taken: Container[str]) -> str:
    """``base``, or ``base`` with the first free numeric suffix (``-2``, ``-3``, ...)."""
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def address_identity(label: str, index: int, taken: Container[str] = ()) -> str:
    """Identity for a new address node, suffixed when the base id is already used.

    Args:
        label: Formatted address
        index: Position of the referencing record in its listing
        taken: Identities already in use (a graph or a set of ids)
    """
    return unique_identity(f"address-{address_slug(label)}-{index}", taken)


def company_node(record: CompanyRecord, role: str = ROOT_COMPANY_ROLE) -> Node:
    """Node for a company whose full profile was fetched."""
    return Node(
        id=record.company_number or "",
        kind=NodeKind.COMPANY,
        label=record.company_name or record.company_number or "Unknown Company",
        role=role,
        subtext=f"Inc: {format_date(record.date_of_creation)}",
        status=record.company_status,
        address=format_address(record.registered_office_address) or None,
        source_record=record,
    )


def appointed_company_node(
    appointment: AppointmentRecord, profile: CompanyRecord | None = None
) -> Node:
    """Node for a company reached through an officer appointment.

    ``profile`` is the company's fetched profile, or None when that fetch failed
    and only the appointment payload is known.
    """
    if profile is not None:
        role = profile.company_type or "Limited Company"
        subtext = f"Inc: {format_date(profile.date_of_creation)}"
        status = profile.company_status or appointment.company_status
        address = format_address(profile.registered_office_address) or format_address(
            appointment.address
        )
        label = appointment.company_name or profile.company_name
    else:
        role = "Limited Company"
        subtext = f"Appointed: {format_date(appointment.appointed_on)}"
        status = appointment.company_status
        address = format_address(appointment.address)
        label = appointment.company_name

    return Node(
        id=appointment.company_number or "",
        kind=NodeKind.COMPANY,
        label=label or appointment.company_number or "Unknown Company",
        role=role,
        subtext=subtext,
        status=status,
        address=address or None,
        source_record=profile if profile is not None else appointment,
    )


def located_company_node(record: CompanyRecord, address_label: str) -> Node:
    """Node for a company found registered at an already-known address."""
    return Node(
        id=record.company_number or "",
        kind=NodeKind.COMPANY,
        label=record.company_name or record.company_number or "Unknown Company",
        role=record.company_status or "Company",
        subtext=f"Inc: {format_date(record.date_of_creation)}",
        status=record.company_status,
        address=address_label,
        source_record=record,
    )


def officer_node(record: OfficerRecord, parent_id: str, index: int) -> Node:
    stable = bool(record.officer_id)
    return Node(
        id=officer_identity(record, parent_id, index),
        kind=NodeKind.OFFICER,
        label=record.name or "",
        role=record.officer_role,
        subtext=record.nationality,
        address=format_address(record.address) or None,
        country=record.country_of_residence,
        occupation=record.occupation,
        appointed_on=record.appointed_on,
        officer_registry_id=record.officer_id,
        fingerprint=content_fingerprint(
            "officer", record.name, record.appointed_on, record.officer_role
        ),
        has_stable_identity=stable,
        source_record=record,
    )


def psc_role(record: PscRecord) -> str:
    """First nature of control in words, e.g. "ownership of shares 75 to 100 percent"."""
    if record.natures_of_control:
        return record.natures_of_control[0].replace("-", " ")
    return "Significant Control"


def psc_node(record: PscRecord, index: int) -> Node:
    return Node(
        id=psc_identity(index),
        kind=NodeKind.PSC,
        label=record.name or "",
        role=psc_role(record),
        subtext=record.nationality,
        address=format_address(record.address) or None,
        fingerprint=content_fingerprint("psc", record.name, record.notified_on, psc_role(record)),
        has_stable_identity=False,
        source_record=record,
    )


def address_node(node_id: str, record: AddressRecord) -> Node:
    role = REGISTERED_ADDRESS_ROLE if record.origin == "registered" else CORRESPONDENCE_ROLE
    return Node(
        id=node_id,
        kind=NodeKind.ADDRESS,
        label=record.formatted,
        role=role,
        address=record.formatted,
        source_record=record,
    )
