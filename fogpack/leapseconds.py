"""Leap second tables and conversion between TAI and UTC timestamps."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .timedelta import TimeDelta
from .timestamp import Timestamp

__all__ = [
    "NTP_EPOCH_OFFSET",
    "LeapSeconds",
    "set_utc_leap_seconds",
    "from_utc",
    "from_utc_secs",
    "to_utc",
    "now",
]

NTP_EPOCH_OFFSET = -86400 * (70 * 365 + 17)
"""Seconds to add to an NTP (1900 epoch) time to reach the 1970 epoch."""

_DEFAULT_NTP_LIST = """\
# Leap second table in NTP format: seconds since 1900-01-01 and TAI-UTC.
2272060800 10 # 1 Jan 1972
2287785600 11 # 1 Jul 1972
2303683200 12 # 1 Jan 1973
2335219200 13 # 1 Jan 1974
2366755200 14 # 1 Jan 1975
2398291200 15 # 1 Jan 1976
2429913600 16 # 1 Jan 1977
2461449600 17 # 1 Jan 1978
2492985600 18 # 1 Jan 1979
2524521600 19 # 1 Jan 1980
2571782400 20 # 1 Jul 1981
2603318400 21 # 1 Jul 1982
2634854400 22 # 1 Jul 1983
2698012800 23 # 1 Jul 1985
2776982400 24 # 1 Jan 1988
2840140800 25 # 1 Jan 1990
2871676800 26 # 1 Jan 1991
2918937600 27 # 1 Jul 1992
2950473600 28 # 1 Jul 1993
2982009600 29 # 1 Jul 1994
3029443200 30 # 1 Jan 1996
3076704000 31 # 1 Jul 1997
3124137600 32 # 1 Jan 1999
3345062400 33 # 1 Jan 2006
3439756800 34 # 1 Jan 2009
3550089600 35 # 1 Jul 2012
3644697600 36 # 1 Jul 2015
3692217600 37 # 1 Jan 2017
"""


@dataclass(frozen=True)
class LeapSeconds:
    """A table of TAI timestamps and the delta to apply from each one onward.

    Timestamps must be strictly increasing TAI times on the 1970 epoch, spaced
    well apart compared with the deltas.
    """

    entries: Tuple[Tuple[Timestamp, TimeDelta], ...] = ()

    def __init__(self, entries: Iterable[Tuple[Timestamp, TimeDelta]] = ()) -> None:
        object.__setattr__(self, "entries", tuple((t, d) for t, d in entries))

    def reverse_leap_seconds(self, t: Timestamp) -> TimeDelta:
        """The delta to subtract from a UTC-based timestamp to reach TAI."""
        for when, delta in reversed(self.entries):
            if t - delta >= when:
                return delta
        return TimeDelta()

    def leap_seconds(self, t: Timestamp) -> TimeDelta:
        """The delta to add to a TAI timestamp to reach UTC."""
        for when, delta in reversed(self.entries):
            if t >= when:
                return delta
        return TimeDelta()

    @classmethod
    def from_ntp_file(cls, text: str) -> LeapSeconds:
        """Parse the text of an NTP leap seconds list.

        Lines starting with ``#`` and empty lines are skipped. Raises
        :class:`ValueError` on a line that lacks two integer fields.
        """
        table = []
        for line in text.splitlines():
            if not line or line.startswith("#"):
                continue
            fields = line.split()
            if len(fields) < 2:
                raise ValueError(f"malformed leap second line: {line!r}")
            try:
                secs_utc = int(fields[0])
                delta = int(fields[1])
            except ValueError:
                raise ValueError(f"malformed leap second line: {line!r}") from None
            when = Timestamp.from_tai_secs(secs_utc + delta + NTP_EPOCH_OFFSET)
            table.append((when, TimeDelta.from_secs(-delta)))
        return cls(table)

    @classmethod
    def default(cls) -> LeapSeconds:
        """The built-in leap second table."""
        return cls.from_ntp_file(_DEFAULT_NTP_LIST)


_lock = threading.Lock()
_table: Optional[LeapSeconds] = None


def _current_table() -> LeapSeconds:
    global _table
    with _lock:
        if _table is None:
            _table = LeapSeconds.default()
        return _table


def set_utc_leap_seconds(table: LeapSeconds) -> None:
    """Replace the table used for TAI/UTC conversion."""
    global _table
    with _lock:
        _table = table


def from_utc(secs: int, nanos: int) -> Timestamp:
    """Build a TAI timestamp from UTC (Unix) seconds and nanoseconds."""
    t = Timestamp(secs, nanos)
    return t - _current_table().reverse_leap_seconds(t)


def from_utc_secs(secs: int) -> Timestamp:
    """Build a TAI timestamp from whole UTC (Unix) seconds."""
    return from_utc(secs, 0)


def to_utc(timestamp: Timestamp) -> Tuple[int, int]:
    """The UTC (Unix) seconds and nanoseconds of a TAI timestamp."""
    t = timestamp + _current_table().leap_seconds(timestamp)
    return t.secs, t.nanos


def now() -> Timestamp:
    """The current system time as a TAI timestamp."""
    secs, nanos = divmod(time.time_ns(), 1_000_000_000)
    return from_utc(secs, nanos)