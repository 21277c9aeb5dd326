"""API routes for single-location wind analysis."""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Path

from backend.services.location_analysis_service import LocationAnalysisService
from backend.api.dependencies import get_location_analysis_service

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get("/{lat}/{lon}")
def get_location_analysis(
    lat: float = Path(..., ge=-90, le=90),
    lon: float = Path(..., ge=-180, le=180),
    start_date: Optional[date] = Query(None, description="First day of history (default: a year ago)"),
    end_date: Optional[date] = Query(None, description="Last day of history (default: yesterday)"),
    threshold: Optional[float] = Query(None, gt=0, description="Strong wind threshold in km/h"),
    extreme_threshold: Optional[float] = Query(None, gt=0, description="Extreme wind threshold in km/h"),
    service: LocationAnalysisService = Depends(get_location_analysis_service),
) -> dict:
    """
    Analyse wind patterns at a location.

    Combines historical and forecast readings and returns summary statistics,
    strong wind periods at 10m, hourly/daily/directional distributions, gust
    and height analysis, and recommendations.
    """
    return service.analyze(
        lat,
        lon,
        start_date=start_date,
        end_date=end_date,
        strong_threshold=threshold,
        extreme_threshold=extreme_threshold,
    )
