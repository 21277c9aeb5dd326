"""Advisory message model."""
from enum import Enum
from typing import Dict, Optional

from attrs import define, field


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@define(frozen=True)
class Recommendation:
    """A rule-based advisory derived from analysis statistics."""

    severity: Severity
    message: str
    impact: Optional[str] = None
    metrics: Dict[str, float] = field(factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": self.severity.value,
            "message": self.message,
            "impact": self.impact,
            "metrics": dict(self.metrics),
        }
