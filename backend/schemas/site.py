"""Pydantic schemas for wind farm sites."""
from pydantic import BaseModel
from typing import Optional


class SiteResponse(BaseModel):
    """Wind farm site."""

    name: str
    lat: float
    lon: float
    region: Optional[str] = None
    capacity: Optional[float] = None  # MW
    operator: Optional[str] = None
