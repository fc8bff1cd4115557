"""
Render-time detail rows for a node, with display fallbacks applied.
"""

from ..graph.records import AppointmentRecord, CompanyRecord, OfficerRecord, PscRecord
from ..graph.schema import Node, NodeKind
from ..shared.formatting import (
    display_value,
    format_company_type,
    format_date,
    format_jurisdiction,
    format_long_date,
    sic_description,
)


def _nested(raw: dict, *keys: str) -> str | None:
    value = raw
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value if isinstance(value, str) else None


def _company_rows(node: Node) -> list[tuple[str, str]]:
    record = node.source_record
    company = record if isinstance(record, CompanyRecord) else None
    raw = company.raw if company else {}

    rows = [
        ("Company Number", node.id),
        ("Status", display_value(node.status)),
        ("Incorporated", format_date(company.date_of_creation if company else None)),
        ("Type", format_company_type(company.company_type if company else None)),
        ("Jurisdiction", format_jurisdiction(company.jurisdiction if company else None)),
        ("Registered Address", display_value(node.address)),
    ]

    if company and company.sic_codes:
        activities = "; ".join(f"{code} - {sic_description(code)}" for code in company.sic_codes)
        rows.append(("Nature of Business", activities))
    else:
        rows.append(("Nature of Business", display_value(None)))

    rows.extend(
        [
            ("Accounts Next Due", format_date(_nested(raw, "accounts", "next_due"))),
            (
                "Accounts Last Made Up To",
                format_date(_nested(raw, "accounts", "last_accounts", "made_up_to")),
            ),
            (
                "Confirmation Statement Next Due",
                format_date(_nested(raw, "confirmation_statement", "next_due")),
            ),
            (
                "Confirmation Statement Last Made Up To",
                format_date(_nested(raw, "confirmation_statement", "last_made_up_to")),
            ),
        ]
    )
    return rows


def _person_rows(node: Node) -> list[tuple[str, str]]:
    record = node.source_record
    rows = [("Role", display_value(node.role))]

    if isinstance(record, OfficerRecord):
        rows.extend(
            [
                ("Appointed", format_long_date(record.appointed_on)),
                ("Nationality", display_value(record.nationality)),
                ("Occupation", display_value(record.occupation)),
                ("Country of Residence", display_value(record.country_of_residence)),
            ]
        )
    elif isinstance(record, PscRecord):
        rows.extend(
            [
                ("Notified", format_long_date(record.notified_on)),
                ("Nationality", display_value(record.nationality)),
                ("Natures of Control", display_value(", ".join(record.natures_of_control))),
            ]
        )

    rows.append(("Correspondence Address", display_value(node.address)))
    return rows


def describe_node(node: Node) -> list[tuple[str, str]]:
    """Label/value rows for a node's detail view.

    Absent values show as "N/A"; nothing here is written back to the node.
    """
    rows: list[tuple[str, str]] = [("Name", display_value(node.label))]

    if node.kind == NodeKind.COMPANY:
        rows.extend(_company_rows(node))
    elif node.kind in (NodeKind.OFFICER, NodeKind.PSC):
        rows.extend(_person_rows(node))
    else:
        rows.append(("Address", display_value(node.address or node.label)))
        rows.append(("Type", display_value(node.role)))

    if node.notes:
        rows.append(("Notes", node.notes))
    return rows


def describe_appointment(record: AppointmentRecord) -> tuple[str, str, str]:
    """(company, role, appointed) summary of one appointment."""
    company = record.company_name or record.company_number
    return (
        display_value(company),
        display_value(record.officer_role),
        format_date(record.appointed_on),
    )
