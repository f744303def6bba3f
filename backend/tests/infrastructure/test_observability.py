"""Board Logging — tests for the JSON formatter and handler setup."""

import json
import logging

from board.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "board.test", logging.INFO, __file__, 1, "Post %s created", (7,), None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "board.test"
    assert log["message"] == "Post 7 created"
    assert "timestamp" in log


def test_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(user="alice", post_id=7, one_time_token="abc"),
    ))
    assert log["user"] == "alice"
    assert log["post_id"] == 7
    assert "one_time_token" not in log


def test_keeps_non_ascii_readable():
    record = _record(user="山田")
    assert "山田" in JSONFormatter().format(record)


def test_setup_logging_does_not_stack_handlers():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("INFO", "json")
        setup_logging("DEBUG", "text")
        ours = [h for h in logging.root.handlers if h.get_name() == "board"]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        logging.root.handlers[:] = before
        logging.root.setLevel(level)
