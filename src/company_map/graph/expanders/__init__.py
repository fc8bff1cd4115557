"""
One-hop neighbour discovery, one expander per expandable node kind.
"""

from .address import AddressExpander
from .base import BaseExpander
from .company import CompanyExpander
from .officer import OfficerExpander, OfficerPayload

__all__ = [
    "BaseExpander",
    "OfficerExpander",
    "OfficerPayload",
    "CompanyExpander",
    "AddressExpander",
]
