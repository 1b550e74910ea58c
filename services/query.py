"""Translate a ``QueryFilter`` into speed-test API query parameters."""

from __future__ import annotations

from typing import Dict

from models.records import FilterMode, QueryFilter
from services.errors import INVALID_RADIUS_MESSAGE, MISSING_CENTER_MESSAGE, ValidationError


def ensure_fetchable(query: QueryFilter) -> None:
    """Raise ``ValidationError`` if ``query`` must not reach the network."""
    if query.mode is FilterMode.radius:
        if query.center is None:
            raise ValidationError(MISSING_CENTER_MESSAGE)
        if query.radius_km <= 0:
            raise ValidationError(INVALID_RADIUS_MESSAGE)


def is_fetchable(query: QueryFilter) -> bool:
    try:
        ensure_fetchable(query)
    except ValidationError:
        return False
    return True


def format_number(value: float) -> str:
    # Match how the browser client renders numbers: 10, not 10.0.
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def build_query_params(query: QueryFilter, page: int, page_size: int) -> Dict[str, str]:
    """Build the parameter map for ``GET /api/speed-test``.

    ``page`` and ``pageSize`` are always present. The remaining parameters
    depend only on the filter mode and the "mine only" flag.
    """
    ensure_fetchable(query)
    params: Dict[str, str] = {"page": str(page), "pageSize": str(page_size)}

    if query.mode is FilterMode.location:
        if query.location_text:
            params["location"] = query.location_text
    elif query.mode is FilterMode.radius:
        center = query.center
        assert center is not None
        params["radius"] = format_number(query.radius_km)
        params["latitude"] = format_number(center.lat)
        params["longitude"] = format_number(center.lng)
    else:
        raise ValueError(f"Unsupported filter mode: {query.mode!r}")

    if query.mine_only:
        params["me"] = "true"
    return params
