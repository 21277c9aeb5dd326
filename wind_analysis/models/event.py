"""Multi-site analysis result models."""
from datetime import date
from typing import Dict, List, Optional, Tuple

from attrs import define, field

from wind_analysis.models.distribution import DirectionBucket, DistributionBucket
from wind_analysis.models.period import DailyStrongWindRecord, Period
from wind_analysis.models.recommendation import Recommendation
from wind_analysis.models.site import Site
from wind_analysis.models.statistics import HeightComparison


@define(frozen=True)
class SiteResult:
    """Outcome of analysing one site, or an error marker if it failed.

    Speed statistics use the same height the periods were detected at. The
    hourly and directional buckets count strong readings at reference height
    and carry hub-height averages alongside.
    """

    site: Site
    periods: Tuple[Period, ...] = field(converter=tuple, factory=tuple)
    total_readings: int = 0
    strong_readings: int = 0
    max_speed: float = 0.0
    avg_speed: float = 0.0
    max_gust: float = 0.0
    avg_gust: float = 0.0
    heights: Optional[HeightComparison] = None
    hourly_distribution: Tuple[DistributionBucket, ...] = field(converter=tuple, factory=tuple)
    wind_rose: Tuple[DirectionBucket, ...] = field(converter=tuple, factory=tuple)
    error: Optional[str] = None

    @classmethod
    def failed(cls, site: Site, error: str) -> "SiteResult":
        """Create an error marker for a site."""
        return cls(site=site, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_strong_winds(self) -> bool:
        return self.strong_readings > 0

    @property
    def strong_percentage(self) -> float:
        if self.total_readings == 0:
            return 0.0
        return self.strong_readings / self.total_readings * 100.0

    @property
    def total_duration(self) -> float:
        return sum(p.duration_hours for p in self.periods)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        if not self.ok:
            return {"site": self.site.to_dict(), "error": self.error}
        return {
            "site": self.site.to_dict(),
            "total_readings": self.total_readings,
            "strong_readings": self.strong_readings,
            "strong_percentage": self.strong_percentage,
            "has_strong_winds": self.has_strong_winds,
            "max_speed": self.max_speed,
            "avg_speed": self.avg_speed,
            "max_gust": self.max_gust,
            "avg_gust": self.avg_gust,
            "height_comparison": self.heights.to_dict() if self.heights else None,
            "hourly_distribution": {
                str(hour): bucket.to_dict() for hour, bucket in enumerate(self.hourly_distribution)
            },
            "wind_rose": {b.sector: b.to_dict() for b in self.wind_rose},
            "total_periods": len(self.periods),
            "total_duration": self.total_duration,
            "periods": [p.to_dict() for p in self.periods],
        }


@define(frozen=True)
class RankedSite:
    """A site's position in the max-speed ranking."""

    rank: int
    site_name: str
    region: Optional[str]
    max_speed: float
    avg_speed: float
    capacity: Optional[float]

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "site_name": self.site_name,
            "region": self.region,
            "max_speed": self.max_speed,
            "avg_speed": self.avg_speed,
            "capacity": self.capacity,
        }


@define
class RegionStats:
    """Aggregated site results for one region."""

    region: str
    site_count: int = 0
    total_avg_speed: float = 0.0
    max_speed: float = 0.0
    sites_with_strong_winds: int = 0

    @property
    def avg_speed(self) -> float:
        return self.total_avg_speed / self.site_count if self.site_count else 0.0

    @property
    def percentage_affected(self) -> float:
        if self.site_count == 0:
            return 0.0
        return self.sites_with_strong_winds / self.site_count * 100.0

    def to_dict(self) -> dict:
        return {
            "region": self.region,
            "site_count": self.site_count,
            "avg_speed": self.avg_speed,
            "max_speed": self.max_speed,
            "sites_with_strong_winds": self.sites_with_strong_winds,
            "percentage_affected": self.percentage_affected,
        }


@define(frozen=True)
class CrossSiteStats:
    """Spread of per-site average speeds, over sites with a nonzero average."""

    mean_speed: float
    median_speed: float
    std_speed: float
    sites_above_threshold: int
    percentage_affected: float

    def to_dict(self) -> dict:
        return {
            "mean_speed": self.mean_speed,
            "median_speed": self.median_speed,
            "std_speed": self.std_speed,
            "sites_above_threshold": self.sites_above_threshold,
            "percentage_affected": self.percentage_affected,
        }


@define(frozen=True)
class EventAnalysis:
    """Result of running the period detector across all sites for a date range."""

    start_date: date
    end_date: date
    threshold: float
    min_duration_hours: float
    site_results: Tuple[SiteResult, ...] = field(converter=tuple)
    strong_wind_days: Tuple[DailyStrongWindRecord, ...] = field(converter=tuple)
    ranking: Tuple[RankedSite, ...] = field(converter=tuple)
    cross_site: CrossSiteStats
    regional_stats: Dict[str, RegionStats]
    recommendations: Tuple[Recommendation, ...] = field(converter=tuple)

    @property
    def sites_analysed(self) -> int:
        return sum(1 for r in self.site_results if r.ok)

    @property
    def errors(self) -> List[dict]:
        return [{"site": r.site.name, "error": r.error} for r in self.site_results if not r.ok]

    @property
    def periods(self) -> List[Period]:
        """All detected periods across sites, ordered by start time."""
        periods = [p for r in self.site_results for p in r.periods]
        return sorted(periods, key=lambda p: p.start)

    @property
    def sites_with_periods(self) -> int:
        return sum(1 for r in self.site_results if r.periods)

    @property
    def total_duration(self) -> float:
        return sum(p.duration_hours for p in self.periods)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        top = self.ranking[0] if self.ranking else None
        return {
            "summary": {
                "start_date": self.start_date.isoformat(),
                "end_date": self.end_date.isoformat(),
                "threshold": self.threshold,
                "min_duration_hours": self.min_duration_hours,
                "total_sites": len(self.site_results),
                "sites_analysed": self.sites_analysed,
                "sites_with_strong_winds": self.cross_site.sites_above_threshold,
                "sites_with_periods": self.sites_with_periods,
                "total_periods": len(self.periods),
                "total_duration": self.total_duration,
                "max_speed": top.max_speed if top else 0.0,
                "max_speed_site": top.site_name if top else None,
            },
            "cross_site": self.cross_site.to_dict(),
            "ranking": [r.to_dict() for r in self.ranking],
            "regional_stats": {k: v.to_dict() for k, v in self.regional_stats.items()},
            "strong_wind_days": [d.to_dict() for d in self.strong_wind_days],
            "site_results": [r.to_dict() for r in self.site_results],
            "errors": self.errors,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
