"""Tests for JSON timestamps and parsing lines back."""

from __future__ import annotations

import io
from datetime import UTC, datetime, timedelta

import pytest

from fortlog import JSONEntry, Level, attr, s, time_to_ts
from fortlog.core.levels import JSON_STRING_LEVEL_TO_LEVEL
from fortlog.core.logging import time_to_ts_str


@pytest.mark.parametrize(
    ("nanos", "expected"),
    [
        (1688763601 * 10**9 + 199999999, "1688763601.199999"),
        (1688763601 * 10**9 + 42000, "1688763601.000042"),
        (1688763601 * 10**9, "1688763601.000000"),
        (999, "0.000000"),
    ],
)
def test_timestamp_truncates_to_microseconds(nanos: int, expected: str) -> None:
    assert time_to_ts_str(nanos) == expected


@pytest.mark.parametrize(
    "instant",
    [
        datetime(2023, 7, 7, 21, 0, 1, 199999, tzinfo=UTC),
        datetime(2001, 9, 9, 1, 46, 40, 1, tzinfo=UTC),
        datetime(2038, 1, 19, 3, 14, 8, 999999, tzinfo=UTC),
        datetime(1970, 1, 1, 0, 0, 0, 500000, tzinfo=UTC),
    ],
)
def test_timestamp_round_trip(instant: datetime) -> None:
    entry = JSONEntry(ts=time_to_ts(instant))

    assert entry.time() == instant


def test_timestamp_never_rounds_up() -> None:
    base = datetime(2023, 7, 7, 21, 0, 1, tzinfo=UTC)
    nanos = int((base - datetime(1970, 1, 1, tzinfo=UTC)).total_seconds()) * 10**9 + 999_999_999

    recovered = JSONEntry(ts=time_to_ts(nanos)).time()

    assert recovered == base + timedelta(microseconds=999_999)


def test_naive_datetime_is_local_time() -> None:
    aware = datetime(2023, 7, 7, 21, 0, 1, 5, tzinfo=UTC)
    naive_local = aware.astimezone().replace(tzinfo=None)

    assert time_to_ts(naive_local) == time_to_ts(aware)


def test_parse_output_line(log_output: io.StringIO) -> None:
    s(Level.ERROR, "parsed", attr("code", 7))

    entry = JSONEntry.parse(log_output.getvalue())

    assert entry.level == "err"
    assert JSON_STRING_LEVEL_TO_LEVEL[entry.level] == Level.ERROR
    assert entry.msg == "parsed"
    assert entry.file == "test_entry.py"
    assert entry.line > 0
    assert entry.model_extra == {"code": 7}
    assert abs(entry.time() - datetime.now(UTC)) < timedelta(minutes=1)


def test_json_level_tokens_map_back() -> None:
    assert JSON_STRING_LEVEL_TO_LEVEL == {
        "dbug": Level.DEBUG,
        "trace": Level.VERBOSE,
        "info": Level.INFO,
        "warn": Level.WARNING,
        "err": Level.ERROR,
        "crit": Level.CRITICAL,
        "fatal": Level.FATAL,
    }
