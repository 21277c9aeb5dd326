"""Tests for single-series wind statistics."""
from datetime import datetime

import pytest

from wind_analysis.config import COMPASS_SECTORS
from wind_analysis.services.series_statistics import (
    SeriesStatistics,
    compass_sector,
    sort_readings,
)


class TestCompassSector:
    """Tests for direction to sector mapping."""

    @pytest.mark.parametrize("degrees,expected", [
        (0, "N"),
        (360, "N"),
        (11.2, "N"),
        (11.25, "NNE"),
        (90, "E"),
        (180, "S"),
        (270, "W"),
        (348.74, "NNW"),
        (348.75, "N"),
    ])
    def test_sector_boundaries(self, degrees, expected):
        """Test sector centres, halfway rounding and wrap-around."""
        assert compass_sector(degrees) == expected


class TestSeriesStatistics:
    """Tests for SeriesStatistics."""

    def create_two_days(self, make_readings):
        """48 hourly readings over two days with varied speeds and directions."""
        speeds = [float((h * 7) % 120) for h in range(48)]
        return make_readings(
            hub_speeds=[s * 1.3 for s in speeds],
            ref_speeds=speeds,
            gusts=[s + 10 for s in speeds],
            directions=[(h * 30) % 360 for h in range(48)],
        )

    def test_summary(self, make_readings):
        """Test counts, percentages and maxima on reference speed."""
        readings = make_readings(
            hub_speeds=[20, 80, 120, 40],
            ref_speeds=[10, 60, 100, 30],
            gusts=[15, 70, 130, 35],
        )
        summary = SeriesStatistics(60, 100).summary(readings)

        assert summary.total_readings == 4
        assert summary.strong_readings == 2
        assert summary.strong_percentage == 50.0
        assert summary.extreme_readings == 1
        assert summary.extreme_percentage == 25.0
        assert summary.max_speed == 100.0
        assert summary.max_speed_hub == 120.0
        assert summary.max_gust == 130.0
        assert summary.avg_speed == 50.0
        assert summary.avg_speed_hub == 65.0

    def test_summary_sorts_input(self, make_readings):
        """Test that unordered input gives the correct time span."""
        readings = make_readings([10, 20, 30])
        summary = SeriesStatistics().summary(list(reversed(readings)))

        assert summary.first_timestamp == readings[0].timestamp
        assert summary.last_timestamp == readings[-1].timestamp

    def test_empty_input(self):
        """Test that empty input gives zeros and empty buckets."""
        stats = SeriesStatistics()

        summary = stats.summary([])
        assert summary.total_readings == 0
        assert summary.strong_percentage == 0.0
        assert summary.first_timestamp is None

        hourly = stats.hourly_distribution([])
        assert len(hourly) == 24
        assert all(b.count == 0 and b.avg_speed == 0.0 for b in hourly)

        assert stats.daily_distribution([]) == {}
        assert sum(b.count for b in stats.wind_rose([])) == 0
        assert stats.gust_analysis([]).strong_gust_percentage == 0.0
        assert stats.height_comparison([]).speed_ratio == 0.0

    def test_hourly_distribution(self, make_readings):
        """Test that every reading lands in its hour bucket."""
        readings = self.create_two_days(make_readings)
        hourly = SeriesStatistics(60, 100).hourly_distribution(readings)

        assert len(hourly) == 24
        assert sum(b.count for b in hourly) == len(readings)
        assert all(b.count == 2 for b in hourly)

        # Hour 9 holds readings at 63 and 111 km/h (h=9 and h=33)
        bucket = hourly[9]
        assert bucket.strong_count == 2
        assert bucket.extreme_count == 1
        assert bucket.avg_speed == pytest.approx(87.0)
        assert bucket.max_speed == 111.0
        assert bucket.max_gust == 121.0
        assert bucket.strong_percentage == 100.0

    def test_daily_distribution(self, make_readings):
        """Test per-date buckets keyed by ISO date."""
        readings = self.create_two_days(make_readings)
        daily = SeriesStatistics(60, 100).daily_distribution(readings)

        assert list(daily) == ["2024-06-21", "2024-06-22"]
        assert sum(b.count for b in daily.values()) == len(readings)

        first_day = [float((h * 7) % 120) for h in range(24)]
        bucket = daily["2024-06-21"]
        assert bucket.count == 24
        assert bucket.max_speed == max(first_day)
        assert bucket.min_speed == min(first_day)
        assert bucket.strong_count == sum(1 for s in first_day if s >= 60)
        assert bucket.extreme_count == sum(1 for s in first_day if s >= 100)
        assert bucket.avg_speed == pytest.approx(sum(first_day) / 24)

    def test_wind_rose(self, make_readings):
        """Test that sectors cover every reading in compass order."""
        readings = make_readings(
            hub_speeds=[0, 0, 0, 0],
            ref_speeds=[70, 20, 110, 30],
            directions=[0, 359, 90, 11.25],
        )
        rose = SeriesStatistics(60, 100).wind_rose(readings)

        assert [b.sector for b in rose] == list(COMPASS_SECTORS)
        assert sum(b.count for b in rose) == 4

        by_sector = {b.sector: b for b in rose}
        assert by_sector["N"].count == 2
        assert by_sector["N"].strong_count == 1
        assert by_sector["N"].avg_speed == 45.0
        assert by_sector["E"].extreme_count == 1
        assert by_sector["NNE"].count == 1
        assert by_sector["S"].count == 0
        assert by_sector["S"].avg_speed == 0.0

    def test_gust_analysis(self, make_readings):
        """Test gust frequency against both thresholds."""
        readings = make_readings([0] * 4, gusts=[0, 50, 70, 110])
        gusts = SeriesStatistics(60, 100).gust_analysis(readings)

        assert gusts.gust_readings == 3
        assert gusts.strong_gust_readings == 2
        assert gusts.extreme_gust_readings == 1
        assert gusts.strong_gust_percentage == 50.0
        assert gusts.max_gust == 110.0
        assert gusts.avg_gust == 57.5

    def test_height_comparison(self, make_readings):
        """Test hub to reference speed ratio."""
        readings = make_readings(hub_speeds=[30, 50], ref_speeds=[20, 20])
        heights = SeriesStatistics().height_comparison(readings)

        assert heights.avg_speed_ref == 20.0
        assert heights.avg_speed_hub == 40.0
        assert heights.speed_ratio == 2.0
        assert heights.max_speed_hub == 50.0

    def test_height_ratio_zero_when_reference_calm(self, make_readings):
        """Test that a zero reference average gives a zero ratio."""
        readings = make_readings(hub_speeds=[30, 50], ref_speeds=[0, 0])
        assert SeriesStatistics().height_comparison(readings).speed_ratio == 0.0


class TestSortReadings:
    """Tests for sort_readings."""

    def test_keeps_duplicates(self, make_readings):
        """Test that equal timestamps are both kept."""
        readings = make_readings([10, 20])
        duplicate = make_readings([30], start=readings[0].timestamp)[0]

        ordered = sort_readings([readings[1], readings[0], duplicate])

        assert len(ordered) == 3
        assert ordered[-1].timestamp == datetime(2024, 6, 21, 1)
