"""API routes for multi-site strong wind analysis."""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException

from backend.config import settings
from backend.api.dependencies import get_reading_source, get_site_catalog
from wind_analysis.models.reading import ReadingSource
from wind_analysis.models.site import SiteCatalog
from wind_analysis.services.multi_site_aggregator import MultiSiteAggregator

router = APIRouter(prefix="/api", tags=["strong-wind"])


def _aggregator(
    catalog: SiteCatalog,
    reading_source: ReadingSource,
    threshold: Optional[float],
    min_duration_hours: Optional[float],
) -> MultiSiteAggregator:
    return MultiSiteAggregator(
        catalog,
        reading_source,
        threshold=threshold if threshold is not None else settings.strong_wind_threshold,
        min_duration_hours=(
            min_duration_hours if min_duration_hours is not None
            else settings.minimum_duration_hours
        ),
        extreme_threshold=settings.extreme_wind_threshold,
        max_workers=settings.max_workers,
    )


@router.get("/multi-location-analysis")
def get_multi_location_analysis(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    threshold: Optional[float] = Query(None, gt=0, description="Strong wind threshold in km/h"),
    min_duration_hours: Optional[float] = Query(None, ge=0, alias="minDurationHours"),
    catalog: SiteCatalog = Depends(get_site_catalog),
    reading_source: ReadingSource = Depends(get_reading_source),
) -> dict:
    """
    Analyse a strong wind event across all wind farms.

    Sites that fail to load are reported in ``errors`` rather than failing
    the whole request.
    """
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")
    aggregator = _aggregator(catalog, reading_source, threshold, min_duration_hours)
    return aggregator.analyze(start_date, end_date).to_dict()


@router.get("/strong-wind-periods")
def get_strong_wind_periods(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    days: Optional[int] = Query(None, ge=1, le=366, description="Analyse the last N days"),
    catalog: SiteCatalog = Depends(get_site_catalog),
    reading_source: ReadingSource = Depends(get_reading_source),
) -> dict:
    """
    Find NZ-wide strong wind days.

    Uses ``startDate``/``endDate`` when both are given, otherwise the last
    ``days`` days (default 7).
    """
    aggregator = _aggregator(catalog, reading_source, None, None)
    if days is None and start_date is not None and end_date is not None:
        if start_date > end_date:
            raise HTTPException(status_code=400, detail="startDate must not be after endDate")
        return aggregator.analyze(start_date, end_date).to_dict()
    return aggregator.analyze_recent(days or settings.default_recent_days).to_dict()
