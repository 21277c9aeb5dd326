"""Distribution buckets for hourly, daily and directional statistics.

Buckets hold raw counts, sums and maxima only. Averages and percentages are
derived on read and report zero for empty buckets.
"""
import math

from attrs import define


def _ratio(numerator: float, count: int) -> float:
    return numerator / count if count > 0 else 0.0


@define
class DistributionBucket:
    """Aggregated readings sharing one key (hour of day or date)."""

    count: int = 0
    strong_count: int = 0
    extreme_count: int = 0
    total_speed: float = 0.0
    total_speed_hub: float = 0.0
    total_gust: float = 0.0
    max_speed: float = 0.0
    max_speed_hub: float = 0.0
    max_gust: float = 0.0

    @property
    def avg_speed(self) -> float:
        return _ratio(self.total_speed, self.count)

    @property
    def avg_speed_hub(self) -> float:
        return _ratio(self.total_speed_hub, self.count)

    @property
    def avg_gust(self) -> float:
        return _ratio(self.total_gust, self.count)

    @property
    def strong_percentage(self) -> float:
        return _ratio(self.strong_count * 100.0, self.count)

    @property
    def extreme_percentage(self) -> float:
        return _ratio(self.extreme_count * 100.0, self.count)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "count": self.count,
            "strong_count": self.strong_count,
            "extreme_count": self.extreme_count,
            "total_speed": self.total_speed,
            "total_speed_hub": self.total_speed_hub,
            "total_gust": self.total_gust,
            "max_speed": self.max_speed,
            "max_speed_hub": self.max_speed_hub,
            "max_gust": self.max_gust,
            "avg_speed": self.avg_speed,
            "avg_speed_hub": self.avg_speed_hub,
            "avg_gust": self.avg_gust,
            "strong_percentage": self.strong_percentage,
            "extreme_percentage": self.extreme_percentage,
        }


@define
class DailyBucket(DistributionBucket):
    """Distribution bucket for one calendar date, with a running minimum."""

    running_min: float = math.inf

    @property
    def min_speed(self) -> float:
        return 0.0 if math.isinf(self.running_min) else self.running_min

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["min_speed"] = self.min_speed
        return data


@define
class DirectionBucket:
    """Wind rose sector."""

    sector: str
    count: int = 0
    strong_count: int = 0
    extreme_count: int = 0
    total_speed: float = 0.0
    total_speed_hub: float = 0.0

    @property
    def avg_speed(self) -> float:
        return _ratio(self.total_speed, self.count)

    @property
    def avg_speed_hub(self) -> float:
        return _ratio(self.total_speed_hub, self.count)

    @property
    def strong_percentage(self) -> float:
        return _ratio(self.strong_count * 100.0, self.count)

    @property
    def extreme_percentage(self) -> float:
        return _ratio(self.extreme_count * 100.0, self.count)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "sector": self.sector,
            "count": self.count,
            "strong_count": self.strong_count,
            "extreme_count": self.extreme_count,
            "avg_speed": self.avg_speed,
            "avg_speed_hub": self.avg_speed_hub,
            "strong_percentage": self.strong_percentage,
            "extreme_percentage": self.extreme_percentage,
        }
