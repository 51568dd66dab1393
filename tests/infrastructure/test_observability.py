"""Structured Logging — formatters and idempotent setup."""

import json
import logging

from movie_catalog.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "movie_catalog.test", logging.WARNING, __file__, 1, "slow request", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_context_fields():
    line = JSONFormatter().format(_record(path="/movie", duration_ms=1200.5, user_id=None))
    entry = json.loads(line)
    assert entry["level"] == "WARNING"
    assert entry["message"] == "slow request"
    assert entry["path"] == "/movie"
    assert entry["duration_ms"] == 1200.5
    assert "user_id" not in entry


def test_text_formatter_appends_context():
    line = TextFormatter().format(_record(job="erase_orphan_files"))
    assert "slow request" in line
    assert line.endswith("job=erase_orphan_files")


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging("DEBUG", "text")
        setup_logging("INFO", "json")
        ours = [h for h in root.handlers if h.get_name() == "movie_catalog"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.INFO
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
