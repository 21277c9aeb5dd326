"""Tests for the wind farm site repository."""
import json

import pytest

from backend.data.site_repository import SiteRepository


class TestSiteRepository:
    """Tests for SiteRepository."""

    def create_sites_file(self, tmp_path, data):
        path = tmp_path / "wind_farms.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_load_wrapped_list(self, tmp_path):
        """Test loading the ``windFarms`` object format."""
        path = self.create_sites_file(tmp_path, {"windFarms": [
            {"name": "West Wind", "lat": -41.28, "lon": 174.66, "region": "Wellington",
             "capacity": 142.6, "operator": "Meridian Energy"},
            {"name": "Te Uku", "lat": -37.84, "lon": 174.93, "region": "Waikato"},
        ]})
        repo = SiteRepository(path)

        assert len(repo.get_all_sites()) == 2
        assert repo.get_site("West Wind").capacity == 142.6
        assert repo.get_site("Te Uku").operator is None
        assert repo.get_site("Nowhere") is None
        assert repo.get_regions() == ["Waikato", "Wellington"]

    def test_load_plain_list(self, tmp_path):
        """Test loading a bare JSON list."""
        path = self.create_sites_file(tmp_path, [{"name": "A", "lat": -40, "lon": 175}])
        assert SiteRepository(path).get_site("A").latitude == -40.0

    def test_duplicate_names_rejected(self, tmp_path):
        """Test that duplicate site names are refused."""
        path = self.create_sites_file(tmp_path, [
            {"name": "A", "lat": -40, "lon": 175},
            {"name": "A", "lat": -41, "lon": 176},
        ])
        with pytest.raises(ValueError, match="Duplicate"):
            SiteRepository(path).catalog

    def test_bundled_sites_file(self):
        """Test the shipped New Zealand wind farm list."""
        catalog = SiteRepository().catalog

        assert len(catalog) == 12
        assert catalog.get("West Wind").region == "Wellington"
        assert all(-48 < site.latitude < -34 for site in catalog)
