import json
import logging
from collections.abc import Generator
from logging.handlers import RotatingFileHandler

import pytest
from _pytest.logging import LogCaptureFixture

from personalos.logging_config import LOG_NAME, JsonFormatter, get_logger, set_level


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Ensure tests run with a clean logger state."""
    logger = logging.getLogger(LOG_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)


def _record(name: str, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_returns_json_with_extras() -> None:
    formatter = JsonFormatter()
    record = _record("test")
    record.table = "todos"
    record.count = 3
    data = json.loads(formatter.format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "test"
    assert data["message"] == "hello"
    assert data["extra"] == {"table": "todos", "count": 3}
    assert "category" not in data


def test_json_formatter_adds_category_for_child_loggers() -> None:
    data = json.loads(JsonFormatter().format(_record(f"{LOG_NAME}.bootstrap")))
    assert data["category"] == "bootstrap"


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        import sys

        record = _record("test")
        record.exc_info = sys.exc_info()
    data = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in data["exc_info"]


def test_get_logger_configures_two_handlers_once() -> None:
    logger = get_logger()
    assert len(logger.handlers) == 2
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    assert get_logger() is logger
    assert len(logger.handlers) == 2
    assert logger.propagate is False


def test_category_logger_is_child_without_own_handlers() -> None:
    child = get_logger("data")
    assert child.name == f"{LOG_NAME}.data"
    assert child.handlers == []
    assert len(logging.getLogger(LOG_NAME).handlers) == 2


def test_set_level_keeps_file_handler_at_info() -> None:
    set_level(logging.WARNING)
    logger = get_logger()
    assert logger.level == logging.WARNING
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            assert handler.level == logging.INFO
        else:
            assert handler.level == logging.WARNING


def test_child_messages_reach_project_handlers(caplog: LogCaptureFixture) -> None:
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    get_logger("general").info("Seeded", extra={"kind": "todos"})
    logger.removeHandler(caplog.handler)
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage() == "Seeded"
    data = json.loads(JsonFormatter().format(record))
    assert data["category"] == "general"
    assert data["extra"]["kind"] == "todos"
