from __future__ import annotations

import json
import logging
import sys

from common.logger import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ideas_service.app.services.posts_fetcher",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="failed to fetch ideas: %s",
        args=("boom",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extra_fields() -> None:
    formatter = JsonFormatter(service_name="ideas-site")

    line = formatter.format(_record(page=2, per_page=10, sort="oldest", unrelated="x"))
    payload = json.loads(line)

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "ideas_service.app.services.posts_fetcher"
    assert payload["message"] == "failed to fetch ideas: boom"
    assert payload["page"] == 2
    assert payload["sort"] == "oldest"
    assert payload["service_name"] == "ideas-site"
    assert "unrelated" not in payload


def test_json_formatter_adds_exception_text() -> None:
    formatter = JsonFormatter()
    try:
        raise ValueError("bad payload")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(formatter.format(record))

    assert "ValueError: bad payload" in payload["exc_info"]
