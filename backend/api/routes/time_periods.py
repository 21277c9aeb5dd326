"""API routes for time period re-analysis."""
from fastapi import APIRouter, Depends

from backend.config import settings
from backend.schemas.time_periods import TimePeriodsRequest
from backend.api.dependencies import get_reading_source, get_site_catalog
from wind_analysis.models.period import TimeWindow
from wind_analysis.models.reading import ReadingSource
from wind_analysis.models.site import SiteCatalog
from wind_analysis.services.time_period_analyzer import TimePeriodAnalyzer, parse_time_windows

router = APIRouter(prefix="/api", tags=["time-periods"])


@router.post("/time-periods-analysis")
def analyze_time_periods(
    request: TimePeriodsRequest,
    catalog: SiteCatalog = Depends(get_site_catalog),
    reading_source: ReadingSource = Depends(get_reading_source),
) -> dict:
    """
    Average wind speed at every wind farm for each supplied time window.

    Accepts structured windows or pasted text lines; lines that are not in
    ``YYYY-MM-DD HH:MM - YYYY-MM-DD HH:MM`` form are ignored.
    """
    if request.text is not None:
        windows = parse_time_windows(request.text)
    else:
        windows = [TimeWindow(start=w.start, end=w.end) for w in request.time_periods]

    analyzer = TimePeriodAnalyzer(catalog, reading_source, max_workers=settings.max_workers)
    return analyzer.analyze(windows).to_dict()
