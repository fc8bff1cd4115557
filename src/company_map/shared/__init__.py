"""
Shared module for core functionality.

Contains configuration models, exceptions, caching, logging, display
formatting and output management shared across the package.
"""

from .caching import ResponseCache
from .exceptions import (
    CompanyMapError,
    ConfigurationError,
    ExpansionError,
    GraphIntegrityError,
    LayoutError,
    RegistryAuthError,
    RegistryError,
    RegistryNotFoundError,
    RegistryRequestError,
    SeedFetchError,
    StaleGraphError,
    create_error_context,
    wrap_external_error,
)
from .logging import ProgressLogger, get_logger, setup_logging
from .models import ExplorationConfig, LayoutDirection, RegistryConfig
from .output import OutputManager

__all__ = [
    # Configuration
    "RegistryConfig",
    "ExplorationConfig",
    "LayoutDirection",
    # Exceptions
    "CompanyMapError",
    "ConfigurationError",
    "RegistryError",
    "RegistryAuthError",
    "RegistryNotFoundError",
    "RegistryRequestError",
    "SeedFetchError",
    "ExpansionError",
    "StaleGraphError",
    "GraphIntegrityError",
    "LayoutError",
    "wrap_external_error",
    "create_error_context",
    # Management
    "OutputManager",
    "ResponseCache",
    "setup_logging",
    "get_logger",
    "ProgressLogger",
]
