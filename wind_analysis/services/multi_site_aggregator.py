"""Service for detecting and aggregating strong wind periods across sites."""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, timedelta
from typing import Callable, Dict, List, Sequence, TypeVar

import numpy as np

from wind_analysis.config import (
    EXTREME_WIND_THRESHOLD,
    MINIMUM_DURATION_HOURS,
    STRONG_WIND_THRESHOLD,
)
from wind_analysis.exceptions import EmptyInput, SiteAnalysisFailure
from wind_analysis.models.event import (
    CrossSiteStats,
    EventAnalysis,
    RankedSite,
    RegionStats,
    SiteResult,
)
from wind_analysis.models.reading import ReadingSource, SpeedField
from wind_analysis.models.site import Site, SiteCatalog
from wind_analysis.services.period_detector import PeriodDetector, find_strong_wind_days
from wind_analysis.services.recommendation_engine import RecommendationEngine
from wind_analysis.services.series_statistics import SeriesStatistics, sort_readings

logger = logging.getLogger(__name__)

UNKNOWN_REGION = "Unknown"

T = TypeVar("T")


def run_per_site(
    sites: Sequence[Site],
    task: Callable[[Site], T],
    max_workers: int = 1,
) -> List[T]:
    """
    Run a task for every site and return results in site order.

    Tasks are independent; with ``max_workers > 1`` they run on a thread
    pool and results are collected once all have finished. Tasks are
    expected to handle their own failures.
    """
    if max_workers <= 1 or len(sites) <= 1:
        return [task(site) for site in sites]

    results: Dict[int, T] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(task, site): i for i, site in enumerate(sites)}
        for completed, future in enumerate(as_completed(futures), start=1):
            i = futures[future]
            results[i] = future.result()
            logger.debug("[%d/%d] %s: done", completed, len(sites), sites[i].name)

    return [results[i] for i in range(len(sites))]


def median(values: Sequence[float]) -> float:
    """Middle value, or mean of the two middle values for even counts. 0 if empty."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation. 0 if empty."""
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=np.float64)))


class MultiSiteAggregator:
    """Runs the period detector per site and folds the results.

    A failure at one site is recorded on that site's result and never
    aborts the other sites.
    """

    def __init__(
        self,
        catalog: SiteCatalog,
        reading_source: ReadingSource,
        threshold: float = STRONG_WIND_THRESHOLD,
        min_duration_hours: float = MINIMUM_DURATION_HOURS,
        extreme_threshold: float = EXTREME_WIND_THRESHOLD,
        speed_field: SpeedField = SpeedField.HUB,
        max_workers: int = 4,
        recommendation_engine: RecommendationEngine = None,
    ):
        """
        Initialize aggregator.

        Args:
            catalog: Sites to analyse
            reading_source: Fetches readings for a location and date range
            threshold: Strong wind threshold (km/h)
            min_duration_hours: Minimum period duration to keep
            extreme_threshold: Extreme wind threshold (km/h)
            speed_field: Height the detector tests
            max_workers: Concurrent site fetches (1 = sequential)
            recommendation_engine: Event advisory rules
        """
        self.catalog = catalog
        self.reading_source = reading_source
        self.threshold = threshold
        self.min_duration_hours = min_duration_hours
        self.speed_field = SpeedField(speed_field)
        self.max_workers = max_workers
        self.detector = PeriodDetector(
            threshold=threshold,
            min_duration_hours=min_duration_hours,
            speed_field=self.speed_field,
        )
        self.statistics = SeriesStatistics(threshold, extreme_threshold)
        self.recommendation_engine = recommendation_engine or RecommendationEngine()

    def _analyze_site(self, site: Site, start_date: date, end_date: date) -> SiteResult:
        """Fetch one site's readings and detect its strong wind periods."""
        readings = self.reading_source(site.latitude, site.longitude, start_date, end_date)
        if not readings:
            raise SiteAnalysisFailure(site.name, "No wind data available for this period")

        readings = sort_readings(readings)
        periods = self.detector.detect(readings, site_name=site.name)
        speeds = np.array([r.speed(self.speed_field) for r in readings], dtype=np.float64)
        gusts = np.array([r.gust for r in readings], dtype=np.float64)

        return SiteResult(
            site=site,
            periods=periods,
            total_readings=len(readings),
            strong_readings=int((speeds >= self.threshold).sum()),
            max_speed=float(speeds.max()),
            avg_speed=float(speeds.mean()),
            max_gust=float(gusts.max()),
            avg_gust=float(gusts.mean()),
            heights=self.statistics.height_comparison(readings),
            hourly_distribution=self.statistics.hourly_distribution(readings),
            wind_rose=self.statistics.wind_rose(readings),
        )

    def _safe_analyze_site(self, site: Site, start_date: date, end_date: date) -> SiteResult:
        """Analyse one site, converting any failure into an error marker."""
        logger.info("Analyzing %s...", site.name)
        try:
            result = self._analyze_site(site, start_date, end_date)
        except Exception as exc:
            logger.warning("Error analyzing %s: %s", site.name, exc)
            return SiteResult.failed(site, str(exc))

        logger.info("%s: %d periods, max %.1f km/h", site.name, len(result.periods), result.max_speed)
        return result

    def _rank(self, results: Sequence[SiteResult]) -> List[RankedSite]:
        """Rank successful sites by max speed, highest first."""
        ordered = sorted((r for r in results if r.ok), key=lambda r: r.max_speed, reverse=True)
        return [
            RankedSite(
                rank=i + 1,
                site_name=r.site.name,
                region=r.site.region,
                max_speed=r.max_speed,
                avg_speed=r.avg_speed,
                capacity=r.site.capacity,
            )
            for i, r in enumerate(ordered)
        ]

    def _cross_site_stats(self, results: Sequence[SiteResult]) -> CrossSiteStats:
        valid = [r for r in results if r.ok]
        averages = [r.avg_speed for r in valid if r.avg_speed > 0]
        affected = sum(1 for r in valid if r.has_strong_winds)
        return CrossSiteStats(
            mean_speed=float(np.mean(averages)) if averages else 0.0,
            median_speed=median(averages),
            std_speed=population_std(averages),
            sites_above_threshold=affected,
            percentage_affected=affected / len(valid) * 100.0 if valid else 0.0,
        )

    def _regional_stats(self, results: Sequence[SiteResult]) -> Dict[str, RegionStats]:
        regions: Dict[str, RegionStats] = {}
        for result in results:
            if not result.ok:
                continue
            region = result.site.region or UNKNOWN_REGION
            stats = regions.setdefault(region, RegionStats(region=region))
            stats.site_count += 1
            stats.total_avg_speed += result.avg_speed
            stats.max_speed = max(stats.max_speed, result.max_speed)
            if result.has_strong_winds:
                stats.sites_with_strong_winds += 1
        return regions

    def analyze(self, start_date: date, end_date: date) -> EventAnalysis:
        """
        Analyse all sites over a date range.

        Args:
            start_date: First day to fetch
            end_date: Last day to fetch (inclusive)

        Returns:
            EventAnalysis with per-site results, strong wind days, ranking,
            cross-site and regional statistics, and recommendations

        Raises:
            EmptyInput: If the site catalog is empty
        """
        if len(self.catalog) == 0:
            raise EmptyInput("Site list is empty")

        logger.info(
            "Analyzing strong wind periods from %s to %s across %d sites",
            start_date, end_date, len(self.catalog),
        )
        sites = list(self.catalog)
        results = run_per_site(
            sites,
            lambda site: self._safe_analyze_site(site, start_date, end_date),
            max_workers=self.max_workers,
        )

        ranking = self._rank(results)
        cross_site = self._cross_site_stats(results)
        regional = self._regional_stats(results)
        top = ranking[0] if ranking else None
        recommendations = self.recommendation_engine.for_event(
            percentage_affected=cross_site.percentage_affected,
            max_speed=top.max_speed if top else 0.0,
            max_speed_site=top.site_name if top else "",
            regional_stats=regional,
            ranked_site_names=[r.site_name for r in ranking],
        )

        return EventAnalysis(
            start_date=start_date,
            end_date=end_date,
            threshold=self.threshold,
            min_duration_hours=self.min_duration_hours,
            site_results=results,
            strong_wind_days=find_strong_wind_days(p for r in results for p in r.periods),
            ranking=ranking,
            cross_site=cross_site,
            regional_stats=regional,
            recommendations=recommendations,
        )

    def analyze_recent(self, days: int = 7, today: date = None) -> EventAnalysis:
        """Analyse the last ``days`` days up to and including today."""
        end_date = today or date.today()
        return self.analyze(end_date - timedelta(days=days), end_date)
