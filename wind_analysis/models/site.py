"""Wind farm site models."""
from typing import Iterator, List, Optional, Tuple

from attrs import define, field


@define(frozen=True)
class Site:
    """A monitored wind farm location."""

    name: str
    latitude: float
    longitude: float
    region: Optional[str] = None
    capacity: Optional[float] = None  # MW
    operator: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Site":
        """Create a Site from a wind farm JSON record."""
        return cls(
            name=record["name"],
            latitude=float(record["lat"]),
            longitude=float(record["lon"]),
            region=record.get("region"),
            capacity=record.get("capacity"),
            operator=record.get("operator"),
        )

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "name": self.name,
            "lat": self.latitude,
            "lon": self.longitude,
            "region": self.region,
            "capacity": self.capacity,
            "operator": self.operator,
        }


def _unique_names(instance, attribute, value: Tuple[Site, ...]) -> None:
    names = [site.name for site in value]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate site names: {', '.join(duplicates)}")


@define(frozen=True)
class SiteCatalog:
    """Read-only set of sites, loaded once and passed to the analysers."""

    sites: Tuple[Site, ...] = field(converter=tuple, validator=_unique_names)

    def __iter__(self) -> Iterator[Site]:
        return iter(self.sites)

    def __len__(self) -> int:
        return len(self.sites)

    def get(self, name: str) -> Optional[Site]:
        """Get a site by name."""
        for site in self.sites:
            if site.name == name:
                return site
        return None

    def regions(self) -> List[str]:
        """Get sorted list of regions with sites."""
        return sorted({site.region for site in self.sites if site.region})

    def to_list(self) -> List[dict]:
        """Convert to list of serializable dictionaries."""
        return [site.to_dict() for site in self.sites]
