"""Tests for the single-location analysis service."""
from datetime import date, datetime

from backend.services.location_analysis_service import LocationAnalysisService

from conftest import build_readings


class FakeOpenMeteo:
    """Historical and forecast readings at fixed hours, recording requested dates."""

    def __init__(self):
        self.historical_calls = []

    def get_historical(self, latitude, longitude, start_date, end_date):
        self.historical_calls.append((start_date, end_date))
        return build_readings(
            hub_speeds=[40, 80],
            ref_speeds=[30, 65],
            start=datetime(2024, 6, 21, 1),
        )

    def get_forecast(self, latitude, longitude):
        return build_readings([10], ref_speeds=[5], start=datetime(2024, 6, 21))


class TestLocationAnalysisService:
    """Tests for LocationAnalysisService."""

    def test_default_thresholds(self):
        """Test that omitted thresholds fall back to settings."""
        service = LocationAnalysisService(data_source=FakeOpenMeteo())
        result = service.analyze(-41.25, 174.66, date(2024, 6, 1), date(2024, 6, 21))

        assert result["threshold"] == 60.0
        assert result["extreme_threshold"] == 100.0
        assert result["summary"]["strong_readings"] == 1

    def test_zero_threshold_is_respected(self):
        """Test that an explicit zero threshold is not replaced by the default."""
        service = LocationAnalysisService(data_source=FakeOpenMeteo())
        result = service.analyze(
            -41.25, 174.66, date(2024, 6, 1), date(2024, 6, 21),
            strong_threshold=0.0, extreme_threshold=0.0,
        )

        assert result["threshold"] == 0.0
        assert result["summary"]["strong_readings"] == 3
        assert result["summary"]["extreme_readings"] == 3

    def test_merges_history_and_forecast_in_time_order(self):
        """Test that forecast readings are merged into the ordered series."""
        source = FakeOpenMeteo()
        result = LocationAnalysisService(data_source=source).analyze(
            -41.25, 174.66, date(2024, 6, 1), date(2024, 6, 21)
        )

        assert source.historical_calls == [(date(2024, 6, 1), date(2024, 6, 21))]
        assert result["summary"]["total_readings"] == 3
        assert result["summary"]["first_timestamp"] == "2024-06-21T00:00:00"
