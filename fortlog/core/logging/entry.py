"""JSON output timestamps and the logical shape of a JSON log line."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)


def _to_micros(t: datetime | int) -> int:
    # int inputs are nanoseconds since epoch, as returned by time.time_ns().
    if isinstance(t, datetime):
        if t.tzinfo is None:
            t = t.astimezone()
        return (t - _EPOCH) // _MICROSECOND
    return t // 1000


def micros_to_ts_str(usec: int) -> str:
    """Seconds since epoch with exactly 6 decimals, as written in the ``ts`` field."""
    sec, frac = divmod(usec, 1_000_000)
    return f"{sec}.{frac:06d}"


def time_to_ts(t: datetime | int) -> float:
    """Seconds since epoch at microsecond resolution (truncated, never rounded up).

    ``t`` is a datetime (naive ones are taken as local time) or nanoseconds
    since epoch. Inverse of :meth:`JSONEntry.time`.
    """
    return _to_micros(t) / 1e6


def time_to_ts_str(t: datetime | int) -> str:
    return micros_to_ts_str(_to_micros(t))


class JSONEntry(BaseModel):
    """Logical format of one JSON output line.

    The output itself is assembled as text (it's cheaper); this model exists
    for consumers and tests parsing it back. Attributes end up as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    ts: float = 0.0  # seconds since epoch, see time_to_ts()
    r: int = 0  # thread id, if enabled
    level: str = ""
    file: str = ""
    line: int = 0
    msg: str = ""

    def time(self) -> datetime:
        """UTC datetime of ``ts``."""
        sec = int(self.ts)
        usec = round(1e6 * (self.ts - sec))
        return _EPOCH + timedelta(seconds=sec, microseconds=usec)

    @classmethod
    def parse(cls, line: str | bytes) -> JSONEntry:
        return cls.model_validate_json(line)


__all__ = ["JSONEntry", "micros_to_ts_str", "time_to_ts", "time_to_ts_str"]
