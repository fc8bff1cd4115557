"""
Custom exception hierarchy for company-map.
"""

from typing import Any

import requests


class CompanyMapError(Exception):
    """Base exception for all company-map errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize with message and optional context.

        Args:
            message: Error message
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(CompanyMapError):
    """Invalid or missing configuration."""

    pass


# Registry-related exceptions
class RegistryError(CompanyMapError):
    """Base exception for company registry access."""

    pass


class RegistryAuthError(RegistryError):
    """Missing API key or credentials rejected by the registry."""

    pass


class RegistryNotFoundError(RegistryError):
    """Requested company, officer or search result does not exist."""

    pass


class RegistryRequestError(RegistryError):
    """Network failure, timeout, unexpected status or unreadable payload."""

    pass


# Graph-related exceptions
class SeedFetchError(CompanyMapError):
    """The root company of an investigation could not be loaded."""

    pass


class ExpansionError(CompanyMapError):
    """An expansion failed as a whole and was not applied."""

    pass


class StaleGraphError(ExpansionError):
    """An expansion finished after the graph it started from was replaced."""

    pass


class GraphIntegrityError(CompanyMapError):
    """A mutation would break node identity or reference a missing node."""

    pass


class LayoutError(CompanyMapError):
    """Positions could not be computed for the graph."""

    pass


# Utility functions for error handling
def wrap_external_error(
    error: Exception, context: dict[str, Any] | None = None
) -> CompanyMapError:
    """Wrap external exceptions in our custom exception hierarchy.

    Args:
        error: External exception to wrap
        context: Additional context information

    Returns:
        Appropriate CompanyMapError subclass
    """
    error_message = str(error)
    error_context = context or {}
    error_context["original_error"] = type(error).__name__

    if isinstance(error, requests.HTTPError):
        status = error.response.status_code if error.response is not None else None
        if status is not None:
            error_context["status"] = status
        if status == 404:
            return RegistryNotFoundError(f"Not found: {error_message}", error_context)
        if status in (401, 403):
            return RegistryAuthError(
                f"Registry rejected credentials: {error_message}", error_context
            )
        return RegistryRequestError(f"Registry request failed: {error_message}", error_context)

    elif isinstance(error, requests.Timeout):
        return RegistryRequestError(f"Registry request timed out: {error_message}", error_context)

    elif isinstance(error, requests.ConnectionError | ConnectionError):
        return RegistryRequestError(f"Network connection error: {error_message}", error_context)

    elif isinstance(error, requests.RequestException):
        return RegistryRequestError(f"Registry request failed: {error_message}", error_context)

    elif isinstance(error, TimeoutError):
        return RegistryRequestError(f"Operation timed out: {error_message}", error_context)

    elif isinstance(error, ValueError | TypeError):
        return CompanyMapError(f"Data validation error: {error_message}", error_context)

    else:
        return CompanyMapError(f"Unexpected error: {error_message}", error_context)


def create_error_context(**kwargs) -> dict[str, Any]:
    """Create error context dictionary with standardized keys.

    Args:
        **kwargs: Context key-value pairs

    Returns:
        Context dictionary
    """
    context = {}

    for key, value in kwargs.items():
        if value is not None:
            context[key] = value

    return context
