"""Service for single-location wind analysis."""
import logging
from datetime import date, timedelta
from typing import List, Optional

from wind_analysis.models.reading import Reading, SpeedField
from wind_analysis.services.open_meteo_service import OpenMeteoService
from wind_analysis.services.period_detector import PeriodDetector
from wind_analysis.services.recommendation_engine import RecommendationEngine
from wind_analysis.services.series_statistics import SeriesStatistics, sort_readings

from backend.config import settings

logger = logging.getLogger(__name__)


class LocationAnalysisService:
    """Combines historical and forecast readings for one location and analyses them."""

    def __init__(
        self,
        data_source: OpenMeteoService = None,
        recommendation_engine: RecommendationEngine = None,
        history_days: int = None,
    ):
        self.data_source = data_source or OpenMeteoService(
            timezone=settings.open_meteo_timezone,
            timeout=settings.request_timeout,
        )
        self.recommendation_engine = recommendation_engine or RecommendationEngine()
        self.history_days = history_days if history_days is not None else settings.history_days

    def _load_readings(
        self,
        latitude: float,
        longitude: float,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> List[Reading]:
        """Fetch historical plus forecast readings, ordered by timestamp."""
        end_date = end_date or date.today() - timedelta(days=1)
        start_date = start_date or end_date - timedelta(days=self.history_days)

        historical = self.data_source.get_historical(latitude, longitude, start_date, end_date)
        forecast = self.data_source.get_forecast(latitude, longitude)
        return sort_readings(historical + forecast)

    def analyze(
        self,
        latitude: float,
        longitude: float,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        strong_threshold: float = None,
        extreme_threshold: float = None,
    ) -> dict:
        """
        Analyse wind patterns at a location.

        Returns:
            Dict with summary, strong wind periods, distributions, gust and
            height analysis, and recommendations
        """
        if strong_threshold is None:
            strong_threshold = settings.strong_wind_threshold
        if extreme_threshold is None:
            extreme_threshold = settings.extreme_wind_threshold

        readings = self._load_readings(latitude, longitude, start_date, end_date)
        logger.info("Analyzing %d readings at %s,%s", len(readings), latitude, longitude)

        statistics = SeriesStatistics(strong_threshold, extreme_threshold)
        detector = PeriodDetector(threshold=strong_threshold, speed_field=SpeedField.REFERENCE)

        summary = statistics.summary(readings)
        gusts = statistics.gust_analysis(readings)
        heights = statistics.height_comparison(readings)

        result = {
            "location": {"lat": latitude, "lon": longitude},
            "threshold": strong_threshold,
            "extreme_threshold": extreme_threshold,
            "summary": summary.to_dict(),
            "strong_wind_periods": [p.to_dict() for p in detector.detect(readings)],
            "hourly_distribution": {
                str(hour): bucket.to_dict()
                for hour, bucket in enumerate(statistics.hourly_distribution(readings))
            },
            "daily_distribution": {
                day: bucket.to_dict()
                for day, bucket in statistics.daily_distribution(readings).items()
            },
            "wind_rose": {b.sector: b.to_dict() for b in statistics.wind_rose(readings)},
            "gust_analysis": gusts.to_dict(),
            "height_comparison": heights.to_dict(),
            "recommendations": [
                r.to_dict()
                for r in self.recommendation_engine.for_location(summary, gusts, heights)
            ],
        }
        return result
