"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from backend.config import settings
from backend.data.site_repository import SiteRepository
from backend.services.location_analysis_service import LocationAnalysisService
from wind_analysis.models.reading import ReadingSource
from wind_analysis.models.site import SiteCatalog
from wind_analysis.services.open_meteo_service import OpenMeteoService


@lru_cache()
def get_site_repository() -> SiteRepository:
    """Get cached site repository instance."""
    return SiteRepository()


def get_site_catalog() -> SiteCatalog:
    """Get the site catalog, loaded once per process."""
    return get_site_repository().catalog


@lru_cache()
def get_open_meteo_service() -> OpenMeteoService:
    """Get cached Open-Meteo client."""
    return OpenMeteoService(
        timezone=settings.open_meteo_timezone,
        timeout=settings.request_timeout,
    )


def get_reading_source() -> ReadingSource:
    """Get the reading source used by multi-site analyses."""
    return get_open_meteo_service()


@lru_cache()
def get_location_analysis_service() -> LocationAnalysisService:
    """Get cached location analysis service instance."""
    return LocationAnalysisService(data_source=get_open_meteo_service())
