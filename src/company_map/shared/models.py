"""
Configuration models for company-map using simple dataclasses.
"""

import os
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.company-information.service.gov.uk"
API_KEY_ENV_VAR = "COMPANIES_HOUSE_API_KEY"


class LayoutDirection(str, Enum):
    """Direction in which graph ranks are stacked."""

    TB = "TB"  # top to bottom
    LR = "LR"  # left to right

    @classmethod
    def parse(cls, value: "str | LayoutDirection") -> "LayoutDirection":
        """Parse a direction name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ConfigurationError(
                f"Unknown layout direction: {value}", {"allowed": "TB, LR"}
            ) from None


@dataclass
class RegistryConfig:
    """Connection settings for the company registry API."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 30
    search_page_size: int = 5
    officers_page_size: int = 20
    psc_page_size: int = 20
    appointments_page_size: int = 50
    location_page_size: int = 20
    cache_enabled: bool = False
    cache_dir: Path = Path("outputs/.cache/registry")
    cache_max_age_hours: float = 24.0

    @classmethod
    def from_env(cls, **overrides: Any) -> "RegistryConfig":
        """Build a config from the environment, with keyword overrides taking precedence."""
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(
                "Unknown registry settings", {"settings": ", ".join(sorted(unknown))}
            )

        values = {k: v for k, v in overrides.items() if v is not None}
        if "api_key" not in values:
            env_key = os.getenv(API_KEY_ENV_VAR, "").strip()
            values["api_key"] = env_key or None
        return cls(**values)


@dataclass
class ExplorationConfig:
    """Settings for graph expansion and presentation."""

    max_workers: int = 8
    detail_workers: int = 4
    default_levels: int = 1
    max_levels: int = 3
    direction: LayoutDirection = LayoutDirection.TB

    def validate_levels(self, levels: int | None) -> int:
        """Return the requested depth, or the default, rejecting out-of-range values."""
        if levels is None:
            return self.default_levels
        if not 1 <= levels <= self.max_levels:
            raise ConfigurationError(
                "Expansion depth out of range",
                {"levels": levels, "allowed": f"1-{self.max_levels}"},
            )
        return levels
