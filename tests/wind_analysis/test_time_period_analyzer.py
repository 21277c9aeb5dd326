"""Tests for re-analysing sites over supplied time windows."""
from datetime import date, datetime, timezone

import attrs
import pytest

from wind_analysis.exceptions import DataSourceError, EmptyInput
from wind_analysis.models.period import TimeWindow
from wind_analysis.models.site import Site, SiteCatalog
from wind_analysis.services.period_detector import PeriodDetector
from wind_analysis.services.time_period_analyzer import (
    TimePeriodAnalyzer,
    format_time_windows,
    mean_speed_in_window,
    parse_time_windows,
)

from conftest import build_readings


class TestParseTimeWindows:
    """Tests for the time window text format."""

    def test_parse(self):
        """Test one window per line."""
        text = "2024-06-21 02:00 - 2024-06-21 08:00\n2024-06-22 22:00 - 2024-06-23 04:00\n"
        windows = parse_time_windows(text)

        assert windows == [
            TimeWindow(datetime(2024, 6, 21, 2), datetime(2024, 6, 21, 8)),
            TimeWindow(datetime(2024, 6, 22, 22), datetime(2024, 6, 23, 4)),
        ]
        assert windows[1].duration_hours == 6.0

    def test_skips_bad_lines(self):
        """Test that malformed lines and impossible dates are dropped."""
        text = "\n".join([
            "Strong wind periods:",
            "2024-06-21 02:00 - 2024-06-21 08:00",
            "2024-06-21 02:00 -2024-06-21 08:00",
            "2024-6-21 02:00 - 2024-06-21 08:00",
            "2024-02-30 02:00 - 2024-03-01 08:00",
            "",
            "  2024-06-25 10:00 - 2024-06-25 18:00  ",
        ])
        windows = parse_time_windows(text)

        assert [w.start for w in windows] == [datetime(2024, 6, 21, 2), datetime(2024, 6, 25, 10)]

    def test_format_round_trip(self, make_readings):
        """Test that formatted detector output parses back to the same windows."""
        readings = make_readings([70] * 6 + [10] * 3 + [80] * 7 + [10])
        periods = PeriodDetector(threshold=60).detect(readings, site_name="West Wind")

        text = format_time_windows(periods)
        windows = parse_time_windows(text)

        assert text.splitlines()[0] == "2024-06-21 00:00 - 2024-06-21 06:00"
        assert [(w.start, w.end) for w in windows] == [(p.start, p.end) for p in periods]

    def test_empty_text(self):
        assert parse_time_windows("") == []


class TestMeanSpeedInWindow:
    """Tests for mean_speed_in_window."""

    def test_bounds_inclusive(self, make_readings):
        """Test that readings on both window edges count."""
        readings = make_readings(hub_speeds=[0] * 5, ref_speeds=[10, 20, 30, 40, 50])
        window = TimeWindow(datetime(2024, 6, 21, 1), datetime(2024, 6, 21, 3))

        assert mean_speed_in_window(readings, window) == 30.0

    def test_no_readings_in_window(self, make_readings):
        """Test that an empty window gives None rather than zero."""
        readings = make_readings([10, 20])
        window = TimeWindow(datetime(2024, 7, 1), datetime(2024, 7, 2))

        assert mean_speed_in_window(readings, window) is None


class FakeReadingSource:
    """Serves one day of readings per site, or raises for listed sites."""

    def __init__(self, failing_lats=(), failing_dates=()):
        self.failing_lats = set(failing_lats)
        self.failing_dates = set(failing_dates)
        self.calls = []

    def __call__(self, latitude, longitude, start_date, end_date):
        self.calls.append((latitude, start_date, end_date))
        if latitude in self.failing_lats or start_date in self.failing_dates:
            raise DataSourceError("Open-Meteo request failed: timeout")
        base = abs(latitude)
        return build_readings(
            hub_speeds=[0] * 24,
            ref_speeds=[base + h for h in range(24)],
            start=datetime(2024, 6, 21),
        )


class TestTimePeriodAnalyzer:
    """Tests for TimePeriodAnalyzer."""

    def create_catalog(self):
        return SiteCatalog([
            Site("West Wind", -41.0, 174.0, "Wellington"),
            Site("Te Uku", -37.0, 174.9, "Waikato"),
        ])

    def create_windows(self):
        return [
            TimeWindow(datetime(2024, 6, 21, 0), datetime(2024, 6, 21, 2)),
            TimeWindow(datetime(2024, 6, 22, 0), datetime(2024, 6, 22, 6)),
        ]

    def test_analyze(self):
        """Test the site by window matrix."""
        source = FakeReadingSource()
        analysis = TimePeriodAnalyzer(self.create_catalog(), source, max_workers=1).analyze(
            self.create_windows()
        )

        assert [row.site_name for row in analysis.rows] == ["West Wind", "Te Uku"]
        # 00:00..02:00 inclusive -> base + 1; second window has no readings
        assert analysis.rows[0].average_speeds == [42.0, None]
        assert analysis.rows[1].average_speeds == [38.0, None]
        assert (-41.0, date(2024, 6, 22), date(2024, 6, 22)) in source.calls

        summary = analysis.summary()
        assert summary["total_sites"] == 2
        assert summary["sites_with_data"] == 2
        assert summary["total_windows"] == 2
        assert summary["overall_average_speed"] == 40.0
        assert summary["max_average_speed"] == 42.0
        assert summary["min_average_speed"] == 38.0

    def test_failed_site(self):
        """Test that a site whose fetches all fail carries an error."""
        source = FakeReadingSource(failing_lats=[-37.0])
        analysis = TimePeriodAnalyzer(self.create_catalog(), source, max_workers=1).analyze(
            self.create_windows()
        )

        failed = analysis.rows[1]
        assert failed.error == "Open-Meteo request failed: timeout"
        assert failed.average_speeds == [None, None]
        assert analysis.summary()["sites_with_data"] == 1
        assert analysis.summary()["overall_average_speed"] == 42.0
        assert analysis.to_dict()["sites"][1]["error"] == failed.error

    def test_failed_window_leaves_empty_cell(self):
        """Test that one failed fetch does not fail the whole row."""
        source = FakeReadingSource(failing_dates=[date(2024, 6, 22)])
        analysis = TimePeriodAnalyzer(self.create_catalog(), source, max_workers=1).analyze(
            self.create_windows()
        )

        assert analysis.rows[0].error is None
        assert analysis.rows[0].average_speeds == [42.0, None]

    def test_no_values(self):
        """Test summary with no readings in any window."""
        windows = [TimeWindow(datetime(2024, 7, 1), datetime(2024, 7, 1, 6))]
        analysis = TimePeriodAnalyzer(self.create_catalog(), FakeReadingSource(), max_workers=1).analyze(windows)

        assert analysis.summary()["overall_average_speed"] == 0.0
        assert analysis.summary()["max_average_speed"] == 0.0

    def test_empty_inputs(self):
        """Test that empty windows or catalog are rejected."""
        with pytest.raises(EmptyInput):
            TimePeriodAnalyzer(self.create_catalog(), FakeReadingSource()).analyze([])
        with pytest.raises(EmptyInput):
            TimePeriodAnalyzer(SiteCatalog([]), FakeReadingSource()).analyze(self.create_windows())
        with pytest.raises(EmptyInput):
            TimePeriodAnalyzer(self.create_catalog(), FakeReadingSource()).analyze_text("nothing here")

    def test_analyze_text(self):
        """Test parsing and analysing in one step."""
        analysis = TimePeriodAnalyzer(self.create_catalog(), FakeReadingSource(), max_workers=2).analyze_text(
            "2024-06-21 10:00 - 2024-06-21 12:00"
        )

        assert len(analysis.windows) == 1
        assert analysis.rows[0].average_speeds == [52.0]
        assert analysis.to_dict()["windows"][0]["duration_hours"] == 2.0

    def test_site_failing_while_averaging(self):
        """Test that a site whose readings cannot be sliced does not lose its sibling's row."""
        def mixed_source(latitude, longitude, start_date, end_date):
            readings = build_readings(
                hub_speeds=[0] * 24,
                ref_speeds=[abs(latitude) + h for h in range(24)],
            )
            if latitude == -37.0:
                # Offset-aware timestamps cannot be compared with naive windows
                return [attrs.evolve(r, timestamp=r.timestamp.replace(tzinfo=timezone.utc)) for r in readings]
            return readings

        analysis = TimePeriodAnalyzer(self.create_catalog(), mixed_source, max_workers=2).analyze(
            [TimeWindow(datetime(2024, 6, 21, 2), datetime(2024, 6, 21, 5))]
        )

        assert analysis.rows[0].error is None
        assert analysis.rows[0].average_speeds == [44.5]
        assert analysis.rows[1].average_speeds == [None]
        assert "offset-naive" in analysis.rows[1].error
        assert analysis.summary()["sites_with_data"] == 1
