"""Exceptions raised by the wind analysis core."""
from typing import Optional


class WindAnalysisError(Exception):
    """Base exception for wind analysis errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedSourceData(WindAnalysisError):
    """Raised when a provider response has mismatched or unordered arrays."""
    pass


class DataSourceError(WindAnalysisError):
    """Raised when the upstream reading source cannot be reached or read."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SiteAnalysisFailure(WindAnalysisError):
    """Raised when fetching or analysing a single site fails."""

    def __init__(self, site_name: str, message: str):
        self.site_name = site_name
        super().__init__(message)


class EmptyInput(WindAnalysisError):
    """Raised when a caller supplies an empty site or window list."""
    pass
