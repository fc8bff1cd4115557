"""
On-disk caching of registry responses.
"""

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any


class ResponseCache:
    """Stores successful registry JSON responses keyed by endpoint and parameters."""

    def __init__(self, cache_dir: Path, max_age_hours: float = 24.0):
        """Initialize response cache.

        Args:
            cache_dir: Directory to store cache files
            max_age_hours: Entries older than this are treated as missing
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.max_age_seconds = max_age_hours * 3600
        self.logger = logging.getLogger(__name__)

    def compute_cache_key(self, endpoint: str, params: dict[str, Any] | None = None) -> str:
        """Compute a unique cache key for an endpoint and its query parameters.

        Args:
            endpoint: Registry endpoint path
            params: Query parameters

        Returns:
            SHA256 hash as cache key
        """
        param_str = "&".join(f"{k}={v}" for k, v in sorted((params or {}).items()))
        key = f"{endpoint}|{param_str}"
        return hashlib.sha256(key.encode()).hexdigest()

    def cache_path(self, endpoint: str, params: dict[str, Any] | None = None) -> Path:
        """Return the file a response for this request would be stored in."""
        return self.cache_dir / f"{self.compute_cache_key(endpoint, params)}.json"

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any | None:
        """Return a cached response, or None when missing, expired or unreadable."""
        path = self.cache_path(endpoint, params)
        if not self.cache_exists(path):
            return None

        age = time.time() - path.stat().st_mtime
        if age > self.max_age_seconds:
            self.logger.debug(f"Cache entry expired for {endpoint}")
            return None

        try:
            with open(path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable cache file {path}: {e}")
            return None

    def put(self, endpoint: str, params: dict[str, Any] | None, payload: Any) -> Path:
        """Store a response payload and return the cache file path."""
        path = self.cache_path(endpoint, params)
        with open(path, "w") as f:
            json.dump(payload, f)
        return path

    def clean_cache(self, pattern: str = "*.json") -> int:
        """Clean cache files matching the given pattern.

        Args:
            pattern: Glob pattern for files to delete

        Returns:
            Number of files removed
        """
        removed = 0
        for file in self.cache_dir.glob(pattern):
            try:
                file.unlink()
                removed += 1
                self.logger.debug(f"Removed cache file: {file}")
            except OSError as e:
                self.logger.warning(f"Error removing cache file {file}: {e}")
        return removed

    def cache_exists(self, cache_path: Path) -> bool:
        """Check if a cache file exists.

        Args:
            cache_path: Path to cache file

        Returns:
            True if cache file exists, False otherwise
        """
        return cache_path.exists() and cache_path.is_file()
