"""Service for detecting strong wind periods in a reading series."""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional

from wind_analysis.config import STRONG_WIND_THRESHOLD
from wind_analysis.models.period import DailyStrongWindRecord, Period
from wind_analysis.models.reading import Reading, SpeedField


class PeriodDetector:
    """Run-length scan for contiguous readings at or above a threshold.

    A period opens on the first qualifying reading and closes on the first
    reading below the threshold, whose timestamp becomes the period end but
    which is not part of the period. A run still open when the data ends is
    closed at its own last reading.

    Readings must be ordered by timestamp.
    """

    def __init__(
        self,
        threshold: float = STRONG_WIND_THRESHOLD,
        min_duration_hours: float = 0.0,
        speed_field: SpeedField = SpeedField.HUB,
    ):
        """
        Initialize period detector.

        Args:
            threshold: Minimum speed (km/h) for a reading to qualify
            min_duration_hours: Periods shorter than this are dropped (0 = keep all)
            speed_field: Which measured speed is tested against the threshold
        """
        self.threshold = threshold
        self.min_duration_hours = min_duration_hours
        self.speed_field = SpeedField(speed_field)

    def _close(
        self,
        site_name: Optional[str],
        run: List[Reading],
        end_reading: Reading,
    ) -> Optional[Period]:
        """Build the period for a finished run, or None if it is too short."""
        start = run[0].timestamp
        end = end_reading.timestamp
        duration_hours = (end - start).total_seconds() / 3600.0

        speeds = [r.speed(self.speed_field) for r in run]
        period = Period(
            site_name=site_name,
            start=start,
            end=end,
            duration_hours=duration_hours,
            readings=run,
            max_speed=max(speeds),
            avg_speed=sum(speeds) / len(speeds),
            speed_field=self.speed_field,
        )

        if duration_hours < self.min_duration_hours:
            return None
        return period

    def iter_periods(
        self,
        readings: Iterable[Reading],
        site_name: Optional[str] = None,
    ) -> Iterator[Period]:
        """
        Scan readings once, yielding each qualifying period as it closes.

        Args:
            readings: Readings ordered by timestamp
            site_name: Site label attached to emitted periods

        Yields:
            Periods in start order
        """
        active: Optional[List[Reading]] = None
        last: Optional[Reading] = None

        for reading in readings:
            last = reading
            if reading.speed(self.speed_field) >= self.threshold:
                if active is None:
                    active = [reading]
                else:
                    active.append(reading)
            elif active is not None:
                period = self._close(site_name, active, reading)
                active = None
                if period is not None:
                    yield period

        # Run reaches the end of the data
        if active is not None:
            period = self._close(site_name, active, last)
            if period is not None:
                yield period

    def detect(
        self,
        readings: Iterable[Reading],
        site_name: Optional[str] = None,
    ) -> List[Period]:
        """Detect all qualifying periods in a reading series."""
        return list(self.iter_periods(readings, site_name))


def group_periods_by_date(periods: Iterable[Period]) -> Dict[date, List[Period]]:
    """Group periods by the calendar date of their start, ordered by start time."""
    grouped: Dict[date, List[Period]] = defaultdict(list)
    for period in sorted(periods, key=lambda p: p.start):
        grouped[period.start_date].append(period)
    return dict(sorted(grouped.items()))


def find_strong_wind_days(periods: Iterable[Period]) -> List[DailyStrongWindRecord]:
    """
    Find dates on which any site had a strong wind period start.

    A date qualifies as soon as one site has one period starting on it, so
    the result is the union over sites. Records are ordered by number of
    affected sites, most first; dates with equal counts stay in date order.
    """
    records = [
        DailyStrongWindRecord(
            date=day,
            site_names={p.site_name for p in day_periods},
            periods=day_periods,
        )
        for day, day_periods in group_periods_by_date(periods).items()
    ]
    return sorted(records, key=lambda r: r.site_count, reverse=True)
