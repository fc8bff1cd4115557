"""
Output management and organization for company-map.
"""

import re
from datetime import datetime
from pathlib import Path


class OutputManager:
    """Manages the organized output structure for exported maps and the registry cache."""

    def __init__(self, base_output_dir: Path = Path("outputs")):
        """Initialize output manager.

        Args:
            base_output_dir: Base directory for all outputs
        """
        self.base_dir = Path(base_output_dir)

        # Subdirectories are created lazily when a path is requested
        self.dirs = {
            "maps": self.base_dir / "maps",
            "cache": self.base_dir / ".cache" / "registry",
        }

    def _ensure_dir_exists(self, dir_path: Path) -> Path:
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path

    def clean_name(self, value: str) -> str:
        """Turn a company number or search text into a filename-safe stem."""
        clean = re.sub(r"[^\w\-.]+", "_", value.strip().lower()).strip("_")
        return clean or "map"

    def get_map_path(self, query: str, direction: str = "TB", overwrite: bool = False) -> Path:
        """Get organized path for an exported investigation map.

        Args:
            query: Root company number or name the map was seeded from
            direction: Layout direction the map was laid out in
            overwrite: Use a fixed filename instead of a timestamped one

        Returns:
            Path for the map JSON file
        """
        stem = f"{self.clean_name(query)}_{direction.lower()}"
        if overwrite:
            filename = f"{stem}.json"
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M")
            filename = f"{stem}_{timestamp}.json"

        self._ensure_dir_exists(self.dirs["maps"])
        return self.dirs["maps"] / filename

    @property
    def cache_dir(self) -> Path:
        return self.dirs["cache"]
