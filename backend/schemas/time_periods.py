"""Pydantic schemas for time period re-analysis requests."""
from datetime import datetime
from zoneinfo import ZoneInfo
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional

from backend.config import settings


class TimeWindowIn(BaseModel):
    """A caller-supplied analysis window (local time, inclusive).

    Offset-aware datetimes are converted to the reading source's local time
    and made naive so they compare with reading timestamps.
    """

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _to_local_naive(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(ZoneInfo(settings.open_meteo_timezone)).replace(tzinfo=None)


class TimePeriodsRequest(BaseModel):
    """Windows to analyse, as structured pairs or as pasted text lines."""

    time_periods: List[TimeWindowIn] = Field(default_factory=list, alias="timePeriods")
    text: Optional[str] = Field(
        default=None,
        description="One 'YYYY-MM-DD HH:MM - YYYY-MM-DD HH:MM' window per line",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _one_source(self):
        if self.time_periods and self.text:
            raise ValueError("Provide either timePeriods or text, not both")
        return self
