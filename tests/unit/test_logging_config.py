"""Unit tests for structured logging."""

import logging

from tuning.config import reset_config
from tuning.logging_config import StructuredFormatter, get_logger, setup_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tuning.state",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Current key now %s",
        args=("G major",),
        exc_info=None,
    )
    for name, value in extra.items():
        setattr(record, name, value)
    return record


def test_formats_key_value_pairs():
    line = StructuredFormatter().format(make_record())
    assert "level=INFO" in line
    assert "logger=tuning.state" in line
    assert "message=Current key now G major" in line


def test_includes_tuning_context():
    line = StructuredFormatter().format(make_record(key="G major", tonic_hz=390.0))
    assert "key=G major" in line
    assert "tonic_hz=390.0" in line
    assert "degree=" not in line


def test_setup_logging_sets_level(monkeypatch):
    monkeypatch.setenv("INTUNE_LOG_LEVEL", "WARNING")
    reset_config()
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    try:
        setup_logging()
        assert logging.getLogger("tuning").level == logging.WARNING
        handlers = root_logger.handlers
        assert any(isinstance(h.formatter, StructuredFormatter) for h in handlers)
    finally:
        reset_config()
        logging.getLogger("tuning").setLevel(logging.NOTSET)
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)


def test_get_logger():
    assert get_logger("tuning.resolver") is logging.getLogger("tuning.resolver")
