"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Union

RADIUS_CHOICES_KM = (5, 25, 100, 500)


class FilterMode(str, Enum):
    """How past results are narrowed down on the server."""

    location = "location"
    radius = "radius"


class ViewMode(str, Enum):
    table = "table"
    chart = "chart"


@dataclass(frozen=True, slots=True)
class Measurement:
    """A single speed test result as returned by the API."""

    id: Union[int, str]
    timestamp: datetime
    location: str
    download_speed: float
    upload_speed: float
    ping: float


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class QueryFilter:
    """Current filter intent for the past results listing.

    ``center`` is the caller's own position and is required before a radius
    search can be issued.
    """

    mode: FilterMode = FilterMode.location
    location_text: str = ""
    radius_km: float = 10.0
    center: Optional[Coordinate] = None
    mine_only: bool = False

    def update(self, **changes) -> QueryFilter:
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class PageInfo:
    page: int
    page_size: int
    total_pages: int
    total_results: int


@dataclass(frozen=True, slots=True)
class ChartBucket:
    """Download statistics for every measurement sharing a location."""

    label: str
    avg_download: float
    max_download: float
    min_download: float
    sample_count: int
