"""API routes for wind farm sites."""
from typing import List
from fastapi import APIRouter, Depends

from backend.schemas.site import SiteResponse
from backend.api.dependencies import get_site_catalog
from wind_analysis.models.site import SiteCatalog

router = APIRouter(prefix="/api/wind-farms", tags=["sites"])


@router.get("", response_model=List[SiteResponse])
def get_wind_farms(
    catalog: SiteCatalog = Depends(get_site_catalog),
) -> List[SiteResponse]:
    """Get all monitored wind farms."""
    return catalog.to_list()


@router.get("/regions", response_model=List[str])
def get_regions(
    catalog: SiteCatalog = Depends(get_site_catalog),
) -> List[str]:
    """Get list of all regions with wind farms."""
    return catalog.regions()
