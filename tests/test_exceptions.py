"""
Tests for custom exception hierarchy.
"""

from unittest.mock import MagicMock

import pytest
import requests

from company_map.shared.exceptions import (
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


def _http_error(status: int) -> requests.HTTPError:
    return requests.HTTPError(f"{status} error", response=MagicMock(status_code=status))


class TestCompanyMapError:
    """Tests for base exception class."""

    def test_basic_creation(self) -> None:
        """Test creating exception with just a message."""
        error = CompanyMapError("Test error message")
        assert error.message == "Test error message"
        assert error.context == {}
        assert str(error) == "Test error message"

    def test_creation_with_context(self) -> None:
        """Test creating exception with context."""
        error = CompanyMapError("Test error", context={"company": "00000006", "level": 2})
        assert "company=00000006" in str(error)
        assert "level=2" in str(error)
        assert "(Context:" in str(error)


class TestHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "error_class",
        [RegistryAuthError, RegistryNotFoundError, RegistryRequestError],
    )
    def test_registry_errors(self, error_class: type[CompanyMapError]) -> None:
        """Test registry failures share a base class."""
        error = error_class("failure")
        assert isinstance(error, RegistryError)
        assert isinstance(error, CompanyMapError)

    def test_stale_graph_is_expansion_error(self) -> None:
        """Test a stale expansion is reported as an expansion failure."""
        assert isinstance(StaleGraphError("stale"), ExpansionError)

    @pytest.mark.parametrize(
        "error_class",
        [ConfigurationError, SeedFetchError, GraphIntegrityError, LayoutError, ExpansionError],
    )
    def test_graph_errors(self, error_class: type[CompanyMapError]) -> None:
        """Test other errors derive from the base class only."""
        error = error_class("failure")
        assert isinstance(error, CompanyMapError)
        assert not isinstance(error, RegistryError)


class TestWrapExternalError:
    """Tests for wrap_external_error."""

    def test_not_found_status(self) -> None:
        """Test a 404 maps to RegistryNotFoundError."""
        error = wrap_external_error(_http_error(404))
        assert isinstance(error, RegistryNotFoundError)
        assert error.context["status"] == 404
        assert error.context["original_error"] == "HTTPError"

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_status(self, status: int) -> None:
        """Test rejected credentials map to RegistryAuthError."""
        assert isinstance(wrap_external_error(_http_error(status)), RegistryAuthError)

    def test_other_status(self) -> None:
        """Test other HTTP failures map to RegistryRequestError."""
        error = wrap_external_error(_http_error(500), {"endpoint": "/company/1"})
        assert isinstance(error, RegistryRequestError)
        assert error.context["endpoint"] == "/company/1"

    def test_timeout(self) -> None:
        """Test requests timeouts map to RegistryRequestError."""
        error = wrap_external_error(requests.Timeout("read timed out"))
        assert isinstance(error, RegistryRequestError)
        assert "timed out" in error.message

    def test_connection_error(self) -> None:
        """Test connection failures map to RegistryRequestError."""
        error = wrap_external_error(requests.ConnectionError("refused"))
        assert isinstance(error, RegistryRequestError)
        assert "Network connection error" in error.message

    def test_value_error(self) -> None:
        """Test ValueError is wrapped as a data validation error."""
        error = wrap_external_error(ValueError("bad value"))
        assert type(error) is CompanyMapError
        assert "Data validation error" in error.message

    def test_unexpected_error(self) -> None:
        """Test unknown exceptions are wrapped generically."""
        error = wrap_external_error(RuntimeError("boom"))
        assert "Unexpected error" in error.message
        assert error.context["original_error"] == "RuntimeError"


class TestCreateErrorContext:
    """Tests for create_error_context."""

    def test_filters_none_values(self) -> None:
        """Test None values are dropped."""
        context = create_error_context(node_id="psc-0", level=None, query="acme")
        assert context == {"node_id": "psc-0", "query": "acme"}

    def test_empty(self) -> None:
        """Test no arguments produce an empty context."""
        assert create_error_context() == {}
