from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueryScope:
    """What to ask the feed for."""

    region: str
    year_start: int
    severity_classes: tuple[str, ...]


@dataclass(frozen=True)
class RawFeed:
    """Both encodings of one feed response, in the same record order.

    ``geo_records`` holds the scalar columns of each feature plus its
    geometry. ``flat_records`` holds every property, including the
    structured ``flags`` column the geometry export drops.
    """

    geo_records: list[dict[str, Any]] = field(default_factory=list)
    flat_records: list[dict[str, Any]] = field(default_factory=list)
