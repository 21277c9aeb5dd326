"""Hourly wind reading model."""
from datetime import date, datetime
from enum import Enum
from typing import Callable, List

from attrs import define


class SpeedField(str, Enum):
    """Which measured speed a threshold is tested against."""

    REFERENCE = "speed_ref"  # 10m meteorological height
    HUB = "speed_hub"        # 100m turbine hub height


@define(frozen=True)
class Reading:
    """A single hourly observation for one location. Speeds in km/h."""

    timestamp: datetime
    speed_ref: float = 0.0
    speed_hub: float = 0.0
    gust: float = 0.0
    direction: float = 0.0
    temperature: float = 0.0
    humidity: float = 0.0
    pressure: float = 0.0

    def speed(self, speed_field: SpeedField) -> float:
        """Get the speed measured at the selected height."""
        return getattr(self, SpeedField(speed_field).value)

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "speed_ref": self.speed_ref,
            "speed_hub": self.speed_hub,
            "gust": self.gust,
            "direction": self.direction,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
        }


# (latitude, longitude, start_date, end_date) -> readings ordered by timestamp.
# Returns an empty list when there is no data and raises on fetch failure.
ReadingSource = Callable[[float, float, date, date], List[Reading]]
