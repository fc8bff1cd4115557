"""
company-map: corporate ownership investigation graphs from UK Companies House data.

This package provides functionality for:
- Resolving a company by number or name and building its seed graph
- Expanding officers, companies and addresses outward level by level
- Highlighting who an entity is linked to beyond a shared employer
- Laying out the graph in ranks and exporting it for presentation
"""

__version__ = "0.1.0"

from .graph import CompanyGraph, ExpansionEngine, GraphAssembler, highlight
from .registry import CompaniesHouseClient, RegistrySource
from .session import InvestigationSession
from .shared.exceptions import CompanyMapError
from .shared.models import ExplorationConfig, LayoutDirection, RegistryConfig
from .visualization import LayeredLayoutEngine

__all__ = [
    "__version__",
    "CompanyGraph",
    "GraphAssembler",
    "ExpansionEngine",
    "highlight",
    "CompaniesHouseClient",
    "RegistrySource",
    "InvestigationSession",
    "CompanyMapError",
    "ExplorationConfig",
    "LayoutDirection",
    "RegistryConfig",
    "LayeredLayoutEngine",
]
