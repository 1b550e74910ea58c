"""Per-location aggregation of download speeds for the chart view."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Sequence, Tuple

from models.records import ChartBucket, Measurement

LABEL_MAX_LENGTH = 20


def round_speed(value: float) -> float:
    """Round to two decimals with halves going up, as the chart has always shown."""
    return math.floor(value * 100 + 0.5) / 100


def truncate_label(location: str, limit: int = LABEL_MAX_LENGTH) -> str:
    if len(location) > limit:
        return f"{location[:limit]}..."
    return location


def aggregate_by_location(measurements: Iterable[Measurement]) -> List[ChartBucket]:
    """Group measurements by exact location and summarize download speeds.

    Buckets are ordered by average download, highest first; locations with
    equal averages keep the order in which they were first seen.
    """
    speeds_by_location: Dict[str, List[float]] = {}
    for measurement in measurements:
        speeds_by_location.setdefault(measurement.location, []).append(
            measurement.download_speed
        )

    buckets = [
        ChartBucket(
            label=truncate_label(location),
            avg_download=round_speed(sum(speeds) / len(speeds)),
            max_download=round_speed(max(speeds)),
            min_download=round_speed(min(speeds)),
            sample_count=len(speeds),
        )
        for location, speeds in speeds_by_location.items()
    ]
    return sorted(buckets, key=lambda bucket: bucket.avg_download, reverse=True)


def chart_summary(measurements: Sequence[Measurement]) -> Tuple[int, int]:
    """Return ``(location_count, measurement_count)`` for the chart caption."""
    locations = {measurement.location for measurement in measurements}
    return len(locations), len(measurements)


class Aggregator:
    """Pure aggregation component that can be swapped out in tests."""

    def aggregate(self, measurements: Iterable[Measurement]) -> List[ChartBucket]:
        return aggregate_by_location(measurements)
