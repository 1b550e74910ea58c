"""Unit tests for the per-location aggregation."""

from __future__ import annotations

from datetime import datetime

from models.records import ChartBucket, Measurement
from services.aggregator import Aggregator, aggregate_by_location, chart_summary, round_speed


def _measurement(location: str, download: float, index: int = 0) -> Measurement:
    """Helper to build deterministic measurements."""

    return Measurement(
        id=index,
        timestamp=datetime(2024, 1, 1, 12, 0, index),
        location=location,
        download_speed=download,
        upload_speed=1.0,
        ping=10.0,
    )


def test_aggregate_empty_input_returns_no_buckets() -> None:
    assert aggregate_by_location([]) == []


def test_aggregate_groups_and_orders_by_average() -> None:
    measurements = [
        _measurement("Paris", 10),
        _measurement("Paris", 20),
        _measurement("Berlin", 5),
    ]

    buckets = aggregate_by_location(measurements)

    assert buckets == [
        ChartBucket(label="Paris", avg_download=15.0, max_download=20.0, min_download=10.0, sample_count=2),
        ChartBucket(label="Berlin", avg_download=5.0, max_download=5.0, min_download=5.0, sample_count=1),
    ]


def test_aggregate_is_case_sensitive() -> None:
    buckets = aggregate_by_location([_measurement("paris", 1), _measurement("Paris", 2)])

    assert [bucket.label for bucket in buckets] == ["Paris", "paris"]


def test_ties_keep_first_seen_order() -> None:
    measurements = [
        _measurement("Lisbon", 30),
        _measurement("Oslo", 50),
        _measurement("Madrid", 30),
        _measurement("Lisbon", 30),
    ]

    labels = [bucket.label for bucket in aggregate_by_location(measurements)]

    assert labels == ["Oslo", "Lisbon", "Madrid"]


def test_long_locations_are_truncated() -> None:
    location = "a" * 25

    (bucket,) = aggregate_by_location([_measurement(location, 1)])

    assert bucket.label == "a" * 20 + "..."


def test_twenty_character_location_is_kept() -> None:
    location = "b" * 20

    (bucket,) = aggregate_by_location([_measurement(location, 1)])

    assert bucket.label == location


def test_statistics_are_rounded_to_two_decimals() -> None:
    measurements = [_measurement("Rome", 10.0), _measurement("Rome", 10.0), _measurement("Rome", 10.005)]

    (bucket,) = aggregate_by_location(measurements)

    assert bucket.avg_download == 10.0
    assert bucket.max_download == round_speed(10.005)
    assert bucket.min_download == 10.0
    assert bucket.sample_count == 3


def test_round_speed_rounds_halves_up() -> None:
    assert round_speed(2.5 / 100) == 0.03
    assert round_speed(-0.125) == -0.12
    assert round_speed(3.14159) == 3.14


def test_aggregation_is_deterministic() -> None:
    measurements = [_measurement(f"city-{i % 3}", float(i), i) for i in range(9)]

    assert aggregate_by_location(measurements) == aggregate_by_location(measurements)
    assert Aggregator().aggregate(measurements) == aggregate_by_location(measurements)


def test_chart_summary_counts_locations_and_rows() -> None:
    measurements = [_measurement("Paris", 1), _measurement("Paris", 2), _measurement("Berlin", 3)]

    assert chart_summary(measurements) == (2, 3)
