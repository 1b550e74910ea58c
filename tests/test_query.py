from __future__ import annotations

import pytest

from models.records import Coordinate, FilterMode, QueryFilter
from services.errors import ValidationError
from services.query import build_query_params, ensure_fetchable, format_number, is_fetchable


def test_location_mode_with_text() -> None:
    query = QueryFilter(location_text="Brazil")

    assert build_query_params(query, 2, 10) == {"page": "2", "pageSize": "10", "location": "Brazil"}


def test_location_mode_with_empty_text_is_unfiltered() -> None:
    assert build_query_params(QueryFilter(), 1, 10) == {"page": "1", "pageSize": "10"}


def test_radius_mode_includes_coordinates() -> None:
    query = QueryFilter(
        mode=FilterMode.radius,
        location_text="ignored",
        radius_km=25,
        center=Coordinate(lat=48.8566, lng=2.3522),
    )

    assert build_query_params(query, 1, 10) == {
        "page": "1",
        "pageSize": "10",
        "radius": "25",
        "latitude": "48.8566",
        "longitude": "2.3522",
    }


def test_mine_only_adds_me_flag() -> None:
    params = build_query_params(QueryFilter(mine_only=True), 1, 5)

    assert params["me"] == "true"
    assert "me" not in build_query_params(QueryFilter(), 1, 5)


def test_radius_without_center_is_rejected() -> None:
    query = QueryFilter(mode=FilterMode.radius)

    with pytest.raises(ValidationError):
        build_query_params(query, 1, 10)
    assert is_fetchable(query) is False


def test_non_positive_radius_is_rejected() -> None:
    query = QueryFilter(mode=FilterMode.radius, radius_km=0, center=Coordinate(lat=0, lng=0))

    with pytest.raises(ValidationError):
        ensure_fetchable(query)


def test_format_number_drops_integral_fraction() -> None:
    assert format_number(10.0) == "10"
    assert format_number(-33.5) == "-33.5"
