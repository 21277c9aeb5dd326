"""Service for statistics over a single location's reading series."""
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from wind_analysis.config import (
    COMPASS_SECTORS,
    EXTREME_WIND_THRESHOLD,
    HOURS_PER_DAY,
    SECTOR_WIDTH_DEGREES,
    STRONG_WIND_THRESHOLD,
)
from wind_analysis.models.distribution import (
    DailyBucket,
    DirectionBucket,
    DistributionBucket,
)
from wind_analysis.models.reading import Reading
from wind_analysis.models.statistics import GustAnalysis, HeightComparison, SeriesSummary


def sort_readings(readings: Iterable[Reading]) -> List[Reading]:
    """Order readings by timestamp. Duplicate timestamps are kept."""
    return sorted(readings, key=lambda r: r.timestamp)


def compass_sector_index(degrees: np.ndarray) -> np.ndarray:
    """
    Map directions in degrees to wind rose sector indices.

    Sectors are centred on multiples of 22.5 degrees and halfway values
    round up, so 11.25 falls in NNE and 360 wraps to N.
    """
    degrees = np.asarray(degrees, dtype=np.float64)
    index = np.floor(degrees / SECTOR_WIDTH_DEGREES + 0.5).astype(np.int64)
    return np.mod(index, len(COMPASS_SECTORS))


def compass_sector(degrees: float) -> str:
    """Get the compass sector name for a direction in degrees."""
    return COMPASS_SECTORS[int(compass_sector_index(np.array([degrees]))[0])]


def _grouped_max(keys: np.ndarray, values: np.ndarray, size: int) -> np.ndarray:
    result = np.zeros(size, dtype=np.float64)
    np.maximum.at(result, keys, values)
    return result


class SeriesStatistics:
    """Distribution and summary statistics over one location's readings.

    Strong and extreme counts test the reference-height speed. Every method
    sorts its input by timestamp first.
    """

    def __init__(
        self,
        strong_threshold: float = STRONG_WIND_THRESHOLD,
        extreme_threshold: float = EXTREME_WIND_THRESHOLD,
    ):
        """
        Initialize statistics service.

        Args:
            strong_threshold: Speed (km/h) at or above which a reading is strong
            extreme_threshold: Speed (km/h) at or above which a reading is extreme
        """
        self.strong_threshold = strong_threshold
        self.extreme_threshold = extreme_threshold

    def _to_frame(self, readings: Sequence[Reading]) -> pd.DataFrame:
        """Convert readings to a time-ordered DataFrame."""
        ordered = sort_readings(readings)
        return pd.DataFrame({
            "timestamp": pd.to_datetime([r.timestamp for r in ordered]),
            "speed": np.array([r.speed_ref for r in ordered], dtype=np.float64),
            "speed_hub": np.array([r.speed_hub for r in ordered], dtype=np.float64),
            "gust": np.array([r.gust for r in ordered], dtype=np.float64),
            "direction": np.array([r.direction for r in ordered], dtype=np.float64),
        })

    def summary(self, readings: Sequence[Reading]) -> SeriesSummary:
        """Compute headline statistics."""
        df = self._to_frame(readings)
        total = len(df)
        if total == 0:
            return SeriesSummary(
                total_readings=0,
                strong_readings=0,
                strong_percentage=0.0,
                extreme_readings=0,
                extreme_percentage=0.0,
                max_speed=0.0,
                max_speed_hub=0.0,
                max_gust=0.0,
                avg_speed=0.0,
                avg_speed_hub=0.0,
            )

        strong = int((df["speed"] >= self.strong_threshold).sum())
        extreme = int((df["speed"] >= self.extreme_threshold).sum())
        return SeriesSummary(
            total_readings=total,
            strong_readings=strong,
            strong_percentage=strong / total * 100.0,
            extreme_readings=extreme,
            extreme_percentage=extreme / total * 100.0,
            max_speed=float(df["speed"].max()),
            max_speed_hub=float(df["speed_hub"].max()),
            max_gust=float(df["gust"].max()),
            avg_speed=float(df["speed"].mean()),
            avg_speed_hub=float(df["speed_hub"].mean()),
            first_timestamp=df["timestamp"].iloc[0].to_pydatetime(),
            last_timestamp=df["timestamp"].iloc[-1].to_pydatetime(),
        )

    def hourly_distribution(self, readings: Sequence[Reading]) -> List[DistributionBucket]:
        """
        Aggregate readings into 24 hour-of-day buckets.

        Returns:
            List of 24 buckets, index = hour of day (0-23)
        """
        df = self._to_frame(readings)
        hours = df["timestamp"].dt.hour.to_numpy(dtype=np.int64)
        speed = df["speed"].to_numpy()
        speed_hub = df["speed_hub"].to_numpy()
        gust = df["gust"].to_numpy()

        is_strong = (speed >= self.strong_threshold).astype(np.float64)
        is_extreme = (speed >= self.extreme_threshold).astype(np.float64)

        counts = np.bincount(hours, minlength=HOURS_PER_DAY)
        strong = np.bincount(hours, weights=is_strong, minlength=HOURS_PER_DAY)
        extreme = np.bincount(hours, weights=is_extreme, minlength=HOURS_PER_DAY)
        total_speed = np.bincount(hours, weights=speed, minlength=HOURS_PER_DAY)
        total_hub = np.bincount(hours, weights=speed_hub, minlength=HOURS_PER_DAY)
        total_gust = np.bincount(hours, weights=gust, minlength=HOURS_PER_DAY)
        max_speed = _grouped_max(hours, speed, HOURS_PER_DAY)
        max_hub = _grouped_max(hours, speed_hub, HOURS_PER_DAY)
        max_gust = _grouped_max(hours, gust, HOURS_PER_DAY)

        return [
            DistributionBucket(
                count=int(counts[h]),
                strong_count=int(strong[h]),
                extreme_count=int(extreme[h]),
                total_speed=float(total_speed[h]),
                total_speed_hub=float(total_hub[h]),
                total_gust=float(total_gust[h]),
                max_speed=float(max_speed[h]),
                max_speed_hub=float(max_hub[h]),
                max_gust=float(max_gust[h]),
            )
            for h in range(HOURS_PER_DAY)
        ]

    def daily_distribution(self, readings: Sequence[Reading]) -> Dict[str, DailyBucket]:
        """
        Aggregate readings per calendar date present in the data.

        Returns:
            Dict mapping "YYYY-MM-DD" to bucket, in date order
        """
        df = self._to_frame(readings)
        if df.empty:
            return {}

        df["date"] = df["timestamp"].dt.strftime("%Y-%m-%d")
        df["strong"] = df["speed"] >= self.strong_threshold
        df["extreme"] = df["speed"] >= self.extreme_threshold

        grouped = df.groupby("date", sort=True).agg(
            count=("speed", "size"),
            strong_count=("strong", "sum"),
            extreme_count=("extreme", "sum"),
            total_speed=("speed", "sum"),
            total_speed_hub=("speed_hub", "sum"),
            total_gust=("gust", "sum"),
            max_speed=("speed", "max"),
            max_speed_hub=("speed_hub", "max"),
            max_gust=("gust", "max"),
            running_min=("speed", "min"),
        )

        daily: Dict[str, DailyBucket] = {}
        for day, row in grouped.iterrows():
            daily[day] = DailyBucket(
                count=int(row["count"]),
                strong_count=int(row["strong_count"]),
                extreme_count=int(row["extreme_count"]),
                total_speed=float(row["total_speed"]),
                total_speed_hub=float(row["total_speed_hub"]),
                total_gust=float(row["total_gust"]),
                max_speed=max(0.0, float(row["max_speed"])),
                max_speed_hub=max(0.0, float(row["max_speed_hub"])),
                max_gust=max(0.0, float(row["max_gust"])),
                running_min=float(row["running_min"]),
            )
        return daily

    def wind_rose(self, readings: Sequence[Reading]) -> List[DirectionBucket]:
        """
        Aggregate readings into 16 compass sectors.

        Returns:
            List of 16 buckets in compass order starting at N
        """
        df = self._to_frame(readings)
        sectors = compass_sector_index(df["direction"].to_numpy())
        speed = df["speed"].to_numpy()
        size = len(COMPASS_SECTORS)

        is_strong = (speed >= self.strong_threshold).astype(np.float64)
        is_extreme = (speed >= self.extreme_threshold).astype(np.float64)

        counts = np.bincount(sectors, minlength=size)
        strong = np.bincount(sectors, weights=is_strong, minlength=size)
        extreme = np.bincount(sectors, weights=is_extreme, minlength=size)
        total_speed = np.bincount(sectors, weights=speed, minlength=size)
        total_hub = np.bincount(sectors, weights=df["speed_hub"].to_numpy(), minlength=size)

        return [
            DirectionBucket(
                sector=name,
                count=int(counts[i]),
                strong_count=int(strong[i]),
                extreme_count=int(extreme[i]),
                total_speed=float(total_speed[i]),
                total_speed_hub=float(total_hub[i]),
            )
            for i, name in enumerate(COMPASS_SECTORS)
        ]

    def gust_analysis(self, readings: Sequence[Reading]) -> GustAnalysis:
        """Compute gust frequency and intensity."""
        gust = np.array([r.gust for r in readings], dtype=np.float64)
        if len(gust) == 0:
            return GustAnalysis(0, 0, 0, 0, 0.0, 0.0)

        return GustAnalysis(
            total_readings=len(gust),
            gust_readings=int((gust > 0).sum()),
            strong_gust_readings=int((gust >= self.strong_threshold).sum()),
            extreme_gust_readings=int((gust >= self.extreme_threshold).sum()),
            max_gust=float(gust.max()),
            avg_gust=float(gust.mean()),
        )

    def height_comparison(self, readings: Sequence[Reading]) -> HeightComparison:
        """Compare reference-height and hub-height speeds."""
        speed_ref = np.array([r.speed_ref for r in readings], dtype=np.float64)
        speed_hub = np.array([r.speed_hub for r in readings], dtype=np.float64)
        if len(speed_ref) == 0:
            return HeightComparison(0, 0.0, 0.0, 0.0, 0.0, 0.0)

        avg_ref = float(speed_ref.mean())
        avg_hub = float(speed_hub.mean())
        return HeightComparison(
            total_readings=len(speed_ref),
            avg_speed_ref=avg_ref,
            avg_speed_hub=avg_hub,
            max_speed_ref=float(speed_ref.max()),
            max_speed_hub=float(speed_hub.max()),
            speed_ratio=avg_hub / avg_ref if avg_ref != 0 else 0.0,
        )
