"""Summary statistics for a single location's readings."""
from datetime import datetime
from typing import Optional

from attrs import define, asdict


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@define(frozen=True)
class SeriesSummary:
    """Headline statistics over one series. Speeds in km/h."""

    total_readings: int
    strong_readings: int
    strong_percentage: float
    extreme_readings: int
    extreme_percentage: float
    max_speed: float
    max_speed_hub: float
    max_gust: float
    avg_speed: float
    avg_speed_hub: float
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["first_timestamp"] = _isoformat(self.first_timestamp)
        data["last_timestamp"] = _isoformat(self.last_timestamp)
        return data


@define(frozen=True)
class GustAnalysis:
    """Gust frequency and intensity."""

    total_readings: int
    gust_readings: int
    strong_gust_readings: int
    extreme_gust_readings: int
    max_gust: float
    avg_gust: float

    @property
    def gust_percentage(self) -> float:
        return self._percentage(self.gust_readings)

    @property
    def strong_gust_percentage(self) -> float:
        return self._percentage(self.strong_gust_readings)

    @property
    def extreme_gust_percentage(self) -> float:
        return self._percentage(self.extreme_gust_readings)

    def _percentage(self, count: int) -> float:
        if self.total_readings == 0:
            return 0.0
        return count / self.total_readings * 100.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data.update(
            gust_percentage=self.gust_percentage,
            strong_gust_percentage=self.strong_gust_percentage,
            extreme_gust_percentage=self.extreme_gust_percentage,
        )
        return data


@define(frozen=True)
class HeightComparison:
    """Reference (10m) versus hub (100m) speeds.

    ``speed_ratio`` is ``avg_speed_hub / avg_speed_ref``, or 0.0 when the
    reference average is zero.
    """

    total_readings: int
    avg_speed_ref: float
    avg_speed_hub: float
    max_speed_ref: float
    max_speed_hub: float
    speed_ratio: float

    def to_dict(self) -> dict:
        return asdict(self)
