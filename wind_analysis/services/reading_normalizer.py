"""Service for converting provider responses into hourly readings."""
import logging
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np
import pandas as pd

from wind_analysis.config import HOURLY_FIELD_MAP, TIME_KEY
from wind_analysis.exceptions import MalformedSourceData
from wind_analysis.models.reading import Reading

logger = logging.getLogger(__name__)


class ReadingNormalizer:
    """Turns time-aligned parallel arrays into an ordered list of Readings."""

    def __init__(self, field_map: Mapping[str, str] = None, time_key: str = TIME_KEY):
        """
        Initialize normalizer.

        Args:
            field_map: Provider variable name -> Reading field name
            time_key: Name of the timestamp array
        """
        self.field_map = dict(field_map or HOURLY_FIELD_MAP)
        self.time_key = time_key

    def _parse_timestamps(self, times: Sequence[Any]) -> pd.DatetimeIndex:
        """Parse timestamps and check they are strictly increasing."""
        try:
            index = pd.DatetimeIndex(pd.to_datetime(list(times)))
        except (ValueError, TypeError) as exc:
            raise MalformedSourceData(f"Unparseable timestamps: {exc}") from exc

        if index.hasnans:
            raise MalformedSourceData("Timestamp array contains missing values")

        if len(index) > 1:
            steps = np.diff(index.asi8)
            if (steps <= 0).any():
                bad = int(np.argmax(steps <= 0)) + 1
                raise MalformedSourceData(
                    f"Timestamps not strictly increasing at position {bad} ({index[bad]})"
                )
        return index

    def _values(self, hourly: Mapping[str, Sequence], key: str, length: int) -> np.ndarray:
        """Get a variable as float array with missing values set to 0."""
        raw = hourly.get(key)
        if raw is None:
            return np.zeros(length, dtype=np.float64)

        if len(raw) != length:
            raise MalformedSourceData(
                f"Array '{key}' has {len(raw)} values, expected {length}"
            )

        values = pd.to_numeric(pd.Series(list(raw), dtype=object), errors="coerce")
        return values.fillna(0.0).to_numpy(dtype=np.float64)

    def normalize(self, hourly: Mapping[str, Sequence]) -> List[Reading]:
        """
        Build readings from a provider's hourly block.

        Args:
            hourly: Mapping with a timestamp array and one array per variable

        Returns:
            Readings ordered by timestamp

        Raises:
            MalformedSourceData: If arrays disagree in length or timestamps
                are not strictly increasing
        """
        if self.time_key not in hourly:
            raise MalformedSourceData(f"Missing '{self.time_key}' array")

        index = self._parse_timestamps(hourly[self.time_key])
        length = len(index)

        columns: Dict[str, np.ndarray] = {
            field_name: self._values(hourly, key, length)
            for key, field_name in self.field_map.items()
        }

        timestamps = index.to_pydatetime()
        readings = [
            Reading(
                timestamp=timestamps[i],
                **{name: float(values[i]) for name, values in columns.items()},
            )
            for i in range(length)
        ]
        logger.debug("Normalized %d readings", len(readings))
        return readings

    def normalize_response(self, payload: Mapping[str, Any]) -> List[Reading]:
        """Build readings from a full provider response (``{"hourly": {...}}``)."""
        hourly = payload.get("hourly") if isinstance(payload, Mapping) else None
        if not isinstance(hourly, Mapping):
            raise MalformedSourceData("Response has no 'hourly' block")
        return self.normalize(hourly)
