"""Shared fixtures for building reading series."""
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

import pytest

from wind_analysis.models.reading import Reading


def build_readings(
    hub_speeds: Sequence[float],
    ref_speeds: Optional[Sequence[float]] = None,
    start: datetime = datetime(2024, 6, 21),
    step_hours: float = 1.0,
    gusts: Optional[Sequence[float]] = None,
    directions: Optional[Sequence[float]] = None,
) -> List[Reading]:
    """Create evenly spaced readings from parallel speed lists."""
    n = len(hub_speeds)
    ref_speeds = ref_speeds if ref_speeds is not None else [0.0] * n
    gusts = gusts if gusts is not None else [0.0] * n
    directions = directions if directions is not None else [0.0] * n
    return [
        Reading(
            timestamp=start + timedelta(hours=i * step_hours),
            speed_ref=float(ref_speeds[i]),
            speed_hub=float(hub_speeds[i]),
            gust=float(gusts[i]),
            direction=float(directions[i]),
        )
        for i in range(n)
    ]


@pytest.fixture
def make_readings():
    """Factory fixture for evenly spaced readings."""
    return build_readings
