from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    base_url: str
    timeout: float
    page_size: int
    radius_km: float


def _positive_or(value: Optional[float], default):
    if value is None or value <= 0:
        return default
    return value


def load_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    page_size: Optional[int] = None,
) -> CLIConfig:
    """Merge explicit command-line options over environment settings."""
    settings = get_settings()
    url = (base_url or "").strip() or settings.api_base_url
    return CLIConfig(
        base_url=url.rstrip("/"),
        timeout=_positive_or(timeout, settings.request_timeout),
        page_size=_positive_or(page_size, settings.page_size),
        radius_km=settings.radius_km,
    )
