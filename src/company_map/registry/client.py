"""
Companies House REST API client.
"""

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from ..graph.records import AppointmentRecord, CompanyRecord, OfficerRecord, PscRecord
from ..shared.caching import ResponseCache
from ..shared.exceptions import (
    RegistryAuthError,
    RegistryNotFoundError,
    RegistryRequestError,
    create_error_context,
    wrap_external_error,
)
from ..shared.logging import mask_secret
from ..shared.models import API_KEY_ENV_VAR, RegistryConfig
from .base import CompanyBundle, RegistrySource


class CompaniesHouseClient(RegistrySource):
    """Thin client over the Companies House public data API.

    Requests share one ``requests.Session`` authenticated with HTTP basic auth
    (API key as user name, empty password). Failures surface as
    :class:`RegistryError` subclasses; there are no retries.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        session: requests.Session | None = None,
        cache: ResponseCache | None = None,
    ):
        """Initialize the client.

        Args:
            config: Connection settings, read from the environment when omitted
            session: Pre-built HTTP session (tests inject one)
            cache: Response cache; built from ``config`` when caching is enabled
        """
        self.config = config or RegistryConfig.from_env()
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()
        if self.config.api_key:
            self.session.auth = HTTPBasicAuth(self.config.api_key, "")
        self.session.headers.update({"Accept": "application/json"})

        if cache is None and self.config.cache_enabled:
            cache = ResponseCache(self.config.cache_dir, self.config.cache_max_age_hours)
        self.cache = cache

        self.logger.debug(f"Registry client using API key {mask_secret(self.config.api_key)}")

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a registry endpoint and return its JSON body."""
        if not self.config.api_key:
            raise RegistryAuthError(
                "API key missing", create_error_context(env_var=API_KEY_ENV_VAR)
            )

        if self.cache is not None:
            cached = self.cache.get(endpoint, params)
            if cached is not None:
                self.logger.debug(f"Cache hit for {endpoint}")
                return cached

        url = f"{self.config.base_url.rstrip('/')}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise wrap_external_error(e, create_error_context(endpoint=endpoint)) from e
        except ValueError as e:
            raise RegistryRequestError(
                "Registry returned an unreadable response",
                create_error_context(endpoint=endpoint, original_error=type(e).__name__),
            ) from e

        if not isinstance(payload, dict):
            raise RegistryRequestError(
                "Registry returned an unexpected response",
                create_error_context(endpoint=endpoint, body_type=type(payload).__name__),
            )

        if self.cache is not None:
            self.cache.put(endpoint, params, payload)
        return payload

    def _items(self, endpoint: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Items of a listing or search endpoint. The registry answers 404 for empty listings."""
        try:
            payload = self._get(endpoint, params)
        except RegistryNotFoundError:
            self.logger.debug(f"No items at {endpoint}")
            return []
        items = payload.get("items")
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def fetch_company_profile(self, company_number: str) -> CompanyRecord:
        return CompanyRecord.from_api(self._get(f"/company/{company_number}"))

    def fetch_company_officers(self, company_number: str) -> list[OfficerRecord]:
        items = self._items(
            f"/company/{company_number}/officers",
            {"items_per_page": self.config.officers_page_size},
        )
        return [OfficerRecord.from_api(item) for item in items]

    def fetch_company_pscs(self, company_number: str) -> list[PscRecord]:
        items = self._items(
            f"/company/{company_number}/persons-with-significant-control",
            {"items_per_page": self.config.psc_page_size},
        )
        return [PscRecord.from_api(item) for item in items]

    def fetch_company(self, company_number: str) -> CompanyBundle:
        """Fetch profile, officers and PSCs for a company."""
        self.logger.debug(f"Fetching company bundle for {company_number}")
        return CompanyBundle(
            company=self.fetch_company_profile(company_number),
            officers=self.fetch_company_officers(company_number),
            pscs=self.fetch_company_pscs(company_number),
        )

    def fetch_officer_appointments(self, officer_id: str) -> list[AppointmentRecord]:
        items = self._items(
            f"/officers/{officer_id}/appointments",
            {"items_per_page": self.config.appointments_page_size},
        )
        return [AppointmentRecord.from_api(item) for item in items]

    def search_companies_at_location(self, location: str) -> list[CompanyRecord]:
        items = self._items(
            "/advanced-search/companies",
            {"location": location, "size": self.config.location_page_size},
        )
        return [CompanyRecord.from_api(item) for item in items]

    def search_companies_by_name(self, query: str) -> list[CompanyRecord]:
        items = self._items(
            "/search/companies",
            {"q": query, "items_per_page": self.config.search_page_size},
        )
        return [CompanyRecord.from_api(item) for item in items]
