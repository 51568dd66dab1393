"""Response Time Middleware — per-request duration logging."""

import logging

from movie_catalog.config import get_settings

LOGGER = "movie_catalog.api.middleware"


def _request_records(caplog, path: str) -> list[logging.LogRecord]:
    return [
        r for r in caplog.records
        if r.name == LOGGER and getattr(r, "path", None) == path
    ]


async def test_request_duration_logged(client, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    await client.get("/health/")

    [record] = _request_records(caplog, "/health/")
    assert record.levelno == logging.INFO
    assert record.method == "GET"
    assert record.status_code == 200
    assert record.duration_ms >= 0


async def test_slow_request_logged_as_warning(client, caplog, monkeypatch):
    monkeypatch.setattr(get_settings(), "slow_request_ms", -1)
    caplog.set_level(logging.INFO, logger=LOGGER)
    await client.get("/health/")

    [record] = _request_records(caplog, "/health/")
    assert record.levelno == logging.WARNING
