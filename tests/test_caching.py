"""
Tests for the registry response cache.
"""

import os
import time
from pathlib import Path

from company_map.shared.caching import ResponseCache


class TestResponseCache:
    """Tests for ResponseCache class."""

    def test_initialization(self, temp_dir: Path) -> None:
        """Test cache creates its directory."""
        cache_dir = temp_dir / "cache"
        cache = ResponseCache(cache_dir)
        assert cache_dir.exists()
        assert cache.cache_dir == cache_dir

    def test_compute_cache_key(self, temp_dir: Path) -> None:
        """Test cache key computation is deterministic and order-independent."""
        cache = ResponseCache(temp_dir)
        key1 = cache.compute_cache_key("/search/companies", {"q": "acme", "items_per_page": 5})
        key2 = cache.compute_cache_key("/search/companies", {"items_per_page": 5, "q": "acme"})
        assert key1 == key2
        assert len(key1) == 64

    def test_different_requests_different_keys(self, temp_dir: Path) -> None:
        """Test different endpoints or parameters produce different keys."""
        cache = ResponseCache(temp_dir)
        assert cache.compute_cache_key("/company/1") != cache.compute_cache_key("/company/2")
        first = cache.compute_cache_key("/x", {"q": "a"})
        assert first != cache.compute_cache_key("/x", {"q": "b"})

    def test_put_and_get(self, temp_dir: Path) -> None:
        """Test a stored payload is returned."""
        cache = ResponseCache(temp_dir)
        path = cache.put("/company/00000006", None, {"company_number": "00000006"})
        assert path.exists()
        assert cache.get("/company/00000006") == {"company_number": "00000006"}

    def test_missing_entry(self, temp_dir: Path) -> None:
        """Test a missing entry returns None."""
        assert ResponseCache(temp_dir).get("/company/unknown") is None

    def test_expired_entry(self, temp_dir: Path) -> None:
        """Test entries older than the max age are ignored."""
        cache = ResponseCache(temp_dir, max_age_hours=1)
        path = cache.put("/company/1", None, {"a": 1})
        old = time.time() - 7200
        os.utime(path, (old, old))
        assert cache.get("/company/1") is None

    def test_unreadable_entry(self, temp_dir: Path) -> None:
        """Test corrupt cache files are treated as missing."""
        cache = ResponseCache(temp_dir)
        cache.cache_path("/company/1").write_text("{not json")
        assert cache.get("/company/1") is None

    def test_clean_cache(self, temp_dir: Path) -> None:
        """Test cache cleaning removes stored entries."""
        cache = ResponseCache(temp_dir)
        cache.put("/company/1", None, {})
        cache.put("/company/2", None, {})
        assert cache.clean_cache() == 2
        assert cache.get("/company/1") is None
