"""
Registry module: access to Companies House data.
"""

from .base import CompanyBundle, RegistrySource, looks_like_company_number
from .client import CompaniesHouseClient

__all__ = ["CompanyBundle", "RegistrySource", "CompaniesHouseClient", "looks_like_company_number"]
