from __future__ import annotations

import logging

from cli.config import load_config
from logging_config import ContextualFormatter
from settings import get_settings


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SPEED_HISTORY_API_URL", "https://speed.example.com/")
    monkeypatch.setenv("SPEED_HISTORY_PAGE_SIZE", "50")
    monkeypatch.setenv("SPEED_HISTORY_RADIUS_KM", "25")
    monkeypatch.setenv("SPEED_HISTORY_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.api_base_url == "https://speed.example.com"
        assert settings.page_size == 50
        assert settings.radius_km == 25.0
        assert settings.request_timeout == 5.0
        assert settings.log_level == "DEBUG"
    finally:
        get_settings.cache_clear()


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SPEED_HISTORY_API_URL", "   ")
    monkeypatch.setenv("SPEED_HISTORY_PAGE_SIZE", "-3")
    monkeypatch.setenv("SPEED_HISTORY_RADIUS_KM", "far")
    monkeypatch.delenv("SPEED_HISTORY_TIMEOUT", raising=False)
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.api_base_url == "http://localhost:3000"
        assert settings.page_size == 10
        assert settings.radius_km == 10.0
        assert settings.request_timeout == 30.0
    finally:
        get_settings.cache_clear()


def test_cli_options_override_settings(monkeypatch) -> None:
    monkeypatch.setenv("SPEED_HISTORY_PAGE_SIZE", "40")
    get_settings.cache_clear()

    try:
        config = load_config(base_url="http://other.test/", timeout=0, page_size=15)
        assert config.base_url == "http://other.test"
        assert config.timeout == get_settings().request_timeout
        assert config.page_size == 15
        assert load_config().page_size == 40
    finally:
        get_settings.cache_clear()


def test_contextual_formatter_appends_known_extras() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    record = logging.LogRecord("speed", logging.INFO, __file__, 1, "Fetched past results", None, None)
    record.page = 2
    record.mode = "radius"
    record.unrelated = "hidden"

    assert formatter.format(record) == "Fetched past results | page=2 mode=radius"
