"""Tests for the stdlib logging and loguru bridges."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest
from loguru import logger as loguru_logger

from fortlog import Level, intercept_loguru, intercept_standard_logger, new_std_logger, set_log_level_quiet
from fortlog.core.logging.intercept import level_from_std


def _records(output: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]


@pytest.fixture()
def loguru_to_fortlog() -> Iterator[int]:
    handler_id = intercept_loguru()
    yield handler_id
    loguru_logger.remove(handler_id)


@pytest.fixture()
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.mark.parametrize(
    ("levelno", "expected"),
    [
        (logging.DEBUG, Level.DEBUG),
        (5, Level.DEBUG),
        (15, Level.VERBOSE),
        (logging.INFO, Level.INFO),
        (25, Level.INFO),
        (logging.WARNING, Level.WARNING),
        (logging.ERROR, Level.ERROR),
        (logging.CRITICAL, Level.CRITICAL),
        (60, Level.CRITICAL),
    ],
)
def test_level_from_std(levelno: int, expected: Level) -> None:
    assert level_from_std(levelno) == expected


def test_new_std_logger(log_output: io.StringIO) -> None:
    std = new_std_logger("lib")

    std.warning("hello %s ", "there")
    std.debug("filtered by our threshold")

    (record,) = _records(log_output)
    assert record["level"] == "warn"
    assert record["msg"] == "hello there"
    assert record["src"] == "lib"
    assert "file" not in record


def test_new_std_logger_fixed_level(log_output: io.StringIO) -> None:
    std = new_std_logger("fixed", Level.ERROR)

    std.info("escalated")

    (record,) = _records(log_output)
    assert record["level"] == "err"


def test_std_exception_attribute(log_output: io.StringIO) -> None:
    std = new_std_logger("exc")

    try:
        raise KeyError("missing")
    except KeyError:
        std.exception("lookup failed")

    (record,) = _records(log_output)
    assert record["level"] == "err"
    assert record["error"] == "'missing'"


def test_intercept_standard_logger(root_logger: logging.Logger, log_output: io.StringIO) -> None:
    intercept_standard_logger()
    set_log_level_quiet(Level.DEBUG)

    logging.getLogger("some.library").debug("library debug")

    (record,) = _records(log_output)
    assert record["level"] == "dbug"
    assert record["src"] == "std"
    assert record["msg"] == "library debug"


def test_loguru_sink(loguru_to_fortlog: int, log_output: io.StringIO) -> None:
    loguru_logger.bind(user="bob", attempts=3).warning("login for {}", "bob")
    loguru_logger.debug("below threshold")

    (record,) = _records(log_output)
    assert record["level"] == "warn"
    assert record["msg"] == "login for bob"
    assert record["src"] == "loguru"
    assert record["user"] == "bob"
    assert record["attempts"] == 3


def test_loguru_exception(loguru_to_fortlog: int, log_output: io.StringIO) -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        loguru_logger.exception("failed")

    (record,) = _records(log_output)
    assert record["level"] == "err"
    assert record["error"] == "boom"


def test_bridged_records_follow_text_format(log_context, log_output: io.StringIO) -> None:
    log_context.config.json = False
    std = new_std_logger("lib")

    std.error("plain %d", 1)

    assert log_output.getvalue() == 'E> plain 1, src="lib"\n'
