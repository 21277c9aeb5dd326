"""Service for re-analysing sites over externally supplied time windows."""
import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from attrs import define, field

from wind_analysis.config import TIME_WINDOW_FORMAT, TIME_WINDOW_PATTERN
from wind_analysis.exceptions import EmptyInput
from wind_analysis.models.period import Period, TimeWindow
from wind_analysis.models.reading import Reading, ReadingSource
from wind_analysis.models.site import Site, SiteCatalog
from wind_analysis.services.multi_site_aggregator import run_per_site

logger = logging.getLogger(__name__)

_WINDOW_RE = re.compile(TIME_WINDOW_PATTERN)


def parse_time_windows(text: str) -> List[TimeWindow]:
    """
    Parse one ``YYYY-MM-DD HH:MM - YYYY-MM-DD HH:MM`` window per line.

    Lines that do not match, or name an impossible date, are skipped.
    """
    windows = []
    for line in text.splitlines():
        match = _WINDOW_RE.match(line)
        if not match:
            continue
        start_day, start_time, end_day, end_time = match.groups()
        try:
            start = datetime.strptime(f"{start_day} {start_time}", TIME_WINDOW_FORMAT)
            end = datetime.strptime(f"{end_day} {end_time}", TIME_WINDOW_FORMAT)
        except ValueError:
            continue
        windows.append(TimeWindow(start=start, end=end))
    return windows


def format_time_windows(periods: Iterable[Period]) -> str:
    """Format detected periods as text that ``parse_time_windows`` reads back."""
    return "\n".join(
        TimeWindow(start=p.start, end=p.end).to_text() for p in periods
    )


def mean_speed_in_window(readings: Sequence[Reading], window: TimeWindow) -> Optional[float]:
    """Mean reference-height speed of readings within the window, or None."""
    speeds = [r.speed_ref for r in readings if window.contains(r.timestamp)]
    if not speeds:
        return None
    return sum(speeds) / len(speeds)


@define(frozen=True)
class SiteWindowRow:
    """Average speed per window for one site."""

    site_name: str
    average_speeds: List[Optional[float]]
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"name": self.site_name, "average_speeds": list(self.average_speeds)}
        if self.error is not None:
            data["error"] = self.error
        return data


@define(frozen=True)
class TimePeriodAnalysis:
    """Site x window matrix of average speeds."""

    windows: List[TimeWindow]
    rows: List[SiteWindowRow] = field(factory=list)

    @property
    def values(self) -> List[float]:
        """All non-null cells."""
        return [v for row in self.rows if row.error is None for v in row.average_speeds if v is not None]

    def summary(self) -> dict:
        values = self.values
        return {
            "total_sites": len(self.rows),
            "sites_with_data": sum(1 for row in self.rows if row.error is None),
            "total_windows": len(self.windows),
            "overall_average_speed": sum(values) / len(values) if values else 0.0,
            "max_average_speed": max(values) if values else 0.0,
            "min_average_speed": min(values) if values else 0.0,
        }

    def to_dict(self) -> dict:
        return {
            "windows": [w.to_dict() for w in self.windows],
            "sites": [row.to_dict() for row in self.rows],
            "summary": self.summary(),
        }


class TimePeriodAnalyzer:
    """Average speed per site for arbitrary caller-supplied windows."""

    def __init__(
        self,
        catalog: SiteCatalog,
        reading_source: ReadingSource,
        max_workers: int = 4,
    ):
        self.catalog = catalog
        self.reading_source = reading_source
        self.max_workers = max_workers

    def _analyze_site(self, site: Site, windows: Sequence[TimeWindow]) -> SiteWindowRow:
        """
        Average each window for one site.

        A window whose fetch or averaging fails is left empty. If every
        window fails the row carries the last error.
        """
        logger.info("Analyzing %s...", site.name)
        averages: List[Optional[float]] = []
        errors: List[str] = []

        for window in windows:
            try:
                readings = self.reading_source(
                    site.latitude, site.longitude, window.start.date(), window.end.date()
                )
                average = mean_speed_in_window(readings, window)
            except Exception as exc:
                logger.warning("Error analyzing %s for %s: %s", site.name, window.to_text(), exc)
                errors.append(str(exc))
                averages.append(None)
                continue
            averages.append(average)

        if len(errors) == len(windows):
            return SiteWindowRow(site.name, averages, error=errors[-1])
        return SiteWindowRow(site.name, averages)

    def analyze(self, windows: Sequence[TimeWindow]) -> TimePeriodAnalysis:
        """
        Compute the mean reference-height speed for every site and window.

        Raises:
            EmptyInput: If no windows are given or the catalog is empty
        """
        windows = list(windows)
        if not windows:
            raise EmptyInput("Time window list is empty")
        if len(self.catalog) == 0:
            raise EmptyInput("Site list is empty")

        logger.info("Analyzing %d time windows across %d sites", len(windows), len(self.catalog))
        rows = run_per_site(
            list(self.catalog),
            lambda site: self._analyze_site(site, windows),
            max_workers=self.max_workers,
        )
        return TimePeriodAnalysis(windows=windows, rows=rows)

    def analyze_text(self, text: str) -> TimePeriodAnalysis:
        """Parse windows from text and analyse them."""
        return self.analyze(parse_time_windows(text))
