"""
Canonical single-line rendering of registry addresses.

Every place that compares or displays an address goes through
:func:`format_address`, so two records describing the same place always
produce the same string and therefore share one address node.
"""

import re
from typing import Any

ADDRESS_FIELDS = (
    "address_line_1",
    "address_line_2",
    "locality",
    "region",
    "postal_code",
    "country",
)

SLUG_LENGTH = 20


def format_address(address: dict[str, Any] | None) -> str:
    """Join the populated address fields in fixed order with ", ".

    Args:
        address: Registry address object, or None

    Returns:
        The formatted address, or an empty string when nothing is populated
    """
    if not address:
        return ""

    parts = []
    for field_name in ADDRESS_FIELDS:
        value = address.get(field_name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            parts.append(text)
    return ", ".join(parts)


def address_slug(label: str, length: int = SLUG_LENGTH) -> str:
    """Identity-safe prefix of a formatted address: whitespace runs become "-", lower-cased."""
    return re.sub(r"\s+", "-", label).lower()[:length]
