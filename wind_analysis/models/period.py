"""Strong wind period and analysis window models."""
from datetime import date, datetime
from typing import FrozenSet, Optional, Tuple

from attrs import define, field

from wind_analysis.config import TIME_WINDOW_FORMAT
from wind_analysis.models.reading import Reading, SpeedField


@define(frozen=True)
class Period:
    """A maximal run of readings at or above a speed threshold.

    ``end`` is the timestamp of the first reading that broke the run, or the
    last in-run reading when the run reaches the end of the data.
    """

    site_name: Optional[str]
    start: datetime
    end: datetime
    duration_hours: float
    readings: Tuple[Reading, ...] = field(converter=tuple)
    max_speed: float
    avg_speed: float
    speed_field: SpeedField = SpeedField.HUB

    @property
    def start_date(self) -> date:
        """Calendar date the period started on."""
        return self.start.date()

    def to_dict(self, include_readings: bool = False) -> dict:
        """Convert to serializable dictionary."""
        data = {
            "site_name": self.site_name,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_hours": self.duration_hours,
            "reading_count": len(self.readings),
            "max_speed": self.max_speed,
            "avg_speed": self.avg_speed,
            "speed_field": self.speed_field.value,
        }
        if include_readings:
            data["readings"] = [r.to_dict() for r in self.readings]
        return data


@define(frozen=True)
class DailyStrongWindRecord:
    """All strong wind periods that started on one calendar date, across sites."""

    date: date
    site_names: FrozenSet[str] = field(converter=frozenset)
    periods: Tuple[Period, ...] = field(converter=tuple)

    @property
    def site_count(self) -> int:
        return len(self.site_names)

    @property
    def total_duration(self) -> float:
        return sum(p.duration_hours for p in self.periods)

    @property
    def max_speed(self) -> float:
        return max((p.max_speed for p in self.periods), default=0.0)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "date": self.date.isoformat(),
            "site_names": sorted(self.site_names),
            "site_count": self.site_count,
            "total_duration": self.total_duration,
            "max_speed": self.max_speed,
            "periods": [p.to_dict() for p in self.periods],
        }


@define(frozen=True)
class TimeWindow:
    """An externally supplied analysis window, inclusive on both ends."""

    start: datetime
    end: datetime

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0

    def contains(self, timestamp: datetime) -> bool:
        """Check if a timestamp falls within this window."""
        return self.start <= timestamp <= self.end

    def to_text(self) -> str:
        """Format as ``YYYY-MM-DD HH:MM - YYYY-MM-DD HH:MM``."""
        return (
            f"{self.start.strftime(TIME_WINDOW_FORMAT)} - "
            f"{self.end.strftime(TIME_WINDOW_FORMAT)}"
        )

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_hours": self.duration_hours,
        }
