"""Service for fetching hourly wind readings from the Open-Meteo API."""
import logging
from datetime import date
from typing import List, Optional

import requests

from wind_analysis.config import (
    OPEN_METEO_ARCHIVE_URL,
    OPEN_METEO_FORECAST_URL,
    OPEN_METEO_HOURLY_VARIABLES,
    OPEN_METEO_TIMEZONE,
)
from wind_analysis.exceptions import DataSourceError
from wind_analysis.models.reading import Reading
from wind_analysis.services.reading_normalizer import ReadingNormalizer

logger = logging.getLogger(__name__)


class OpenMeteoService:
    """Reading source backed by the Open-Meteo archive and forecast APIs.

    Timestamps are local to ``timezone``. Speeds are requested in km/h.
    Failed requests are not retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        archive_url: str = OPEN_METEO_ARCHIVE_URL,
        forecast_url: str = OPEN_METEO_FORECAST_URL,
        timezone: str = OPEN_METEO_TIMEZONE,
        timeout: float = 30.0,
        normalizer: ReadingNormalizer = None,
    ):
        self.session = session or requests.Session()
        self.archive_url = archive_url
        self.forecast_url = forecast_url
        self.timezone = timezone
        self.timeout = timeout
        self.normalizer = normalizer or ReadingNormalizer()

    def _params(self, latitude: float, longitude: float) -> dict:
        return {
            "latitude": float(latitude),
            "longitude": float(longitude),
            "hourly": ",".join(OPEN_METEO_HOURLY_VARIABLES),
            "wind_speed_unit": "kmh",
            "timezone": self.timezone,
        }

    def _fetch(self, url: str, params: dict) -> List[Reading]:
        """Request hourly data and normalize it into readings."""
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise DataSourceError(f"Open-Meteo request failed: {exc}", status_code=status) from exc
        except (requests.RequestException, ValueError) as exc:
            raise DataSourceError(f"Open-Meteo request failed: {exc}") from exc

        hourly = payload.get("hourly") if isinstance(payload, dict) else None
        if not hourly or not hourly.get("time"):
            logger.info("No hourly data returned for %s", params.get("start_date", "forecast"))
            return []

        return self.normalizer.normalize_response(payload)

    def get_historical(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
    ) -> List[Reading]:
        """
        Fetch archived hourly readings.

        Args:
            latitude: Site latitude
            longitude: Site longitude
            start_date: First day
            end_date: Last day (inclusive)

        Returns:
            Readings ordered by timestamp, empty if the archive has no data

        Raises:
            DataSourceError: If the request fails
            MalformedSourceData: If the response arrays are inconsistent
        """
        params = self._params(latitude, longitude)
        params["start_date"] = start_date.isoformat()
        params["end_date"] = end_date.isoformat()
        logger.debug("Fetching archive %s,%s %s..%s", latitude, longitude, start_date, end_date)
        return self._fetch(self.archive_url, params)

    def get_forecast(self, latitude: float, longitude: float) -> List[Reading]:
        """Fetch current and forecast hourly readings."""
        return self._fetch(self.forecast_url, self._params(latitude, longitude))

    def __call__(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
    ) -> List[Reading]:
        return self.get_historical(latitude, longitude, start_date, end_date)
