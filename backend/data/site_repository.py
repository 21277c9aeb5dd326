"""Repository for wind farm site data."""
import json
import logging
from pathlib import Path
from typing import List, Optional

from backend.config import settings
from wind_analysis.models.site import Site, SiteCatalog

logger = logging.getLogger(__name__)


class SiteRepository:
    """Loads the wind farm list once and serves it as a SiteCatalog."""

    def __init__(self, sites_file: Path = None):
        """Initialize repository with path to sites file."""
        self.sites_file = sites_file or settings.sites_file
        self._catalog: Optional[SiteCatalog] = None

    def _load(self) -> SiteCatalog:
        """Load sites from JSON file."""
        with open(self.sites_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        records = data["windFarms"] if isinstance(data, dict) else data
        catalog = SiteCatalog([Site.from_record(r) for r in records])
        logger.info("Loaded %d wind farms from %s", len(catalog), self.sites_file)
        return catalog

    @property
    def catalog(self) -> SiteCatalog:
        """Get the site catalog."""
        if self._catalog is None:
            self._catalog = self._load()
        return self._catalog

    def get_all_sites(self) -> List[Site]:
        """Get all sites."""
        return list(self.catalog)

    def get_site(self, name: str) -> Optional[Site]:
        """Get a single site by name."""
        return self.catalog.get(name)

    def get_regions(self) -> List[str]:
        """Get list of all regions with sites."""
        return self.catalog.regions()
