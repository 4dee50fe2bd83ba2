"""TAI timestamps relative to the 1970 Unix epoch, and their byte encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .timedelta import MAX_NANOSEC, NANOS_PER_SEC, TimeDelta

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
U32_MAX = (1 << 32) - 1

__all__ = ["Timestamp"]


@dataclass(frozen=True, order=True)
class Timestamp:
    """A TAI timestamp: seconds since 1970-01-01T00:00:00 without leap seconds.

    Ordering compares seconds first, then nanoseconds.
    """

    secs: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos <= MAX_NANOSEC:
            raise ValueError(
                f"nanoseconds must be between 0 and {MAX_NANOSEC}, got {self.nanos}"
            )
        if not I64_MIN <= self.secs <= I64_MAX:
            raise OverflowError(f"timestamp seconds out of range: {self.secs}")

    @classmethod
    def from_tai(cls, secs: int, nanos: int) -> Timestamp:
        """Build a timestamp from TAI seconds and nanoseconds."""
        return cls(secs, nanos)

    @classmethod
    def from_tai_secs(cls, secs: int) -> Timestamp:
        """Build a timestamp from whole TAI seconds."""
        return cls(secs, 0)

    @classmethod
    def zero(cls) -> Timestamp:
        """The TAI Unix epoch."""
        return cls(0, 0)

    @classmethod
    def min_value(cls) -> Timestamp:
        """The earliest representable timestamp."""
        return cls(I64_MIN, 0)

    @classmethod
    def max_value(cls) -> Timestamp:
        """The latest representable timestamp."""
        return cls(I64_MAX, MAX_NANOSEC)

    def next(self) -> Timestamp:
        """The timestamp one nanosecond later."""
        if self.nanos < MAX_NANOSEC:
            return Timestamp(self.secs, self.nanos + 1)
        return Timestamp(self.secs + 1, 0)

    def prev(self) -> Timestamp:
        """The timestamp one nanosecond earlier."""
        if self.nanos > 0:
            return Timestamp(self.secs, self.nanos - 1)
        return Timestamp(self.secs - 1, MAX_NANOSEC)

    def time_since(self, other: Timestamp) -> TimeDelta:
        """The time elapsed from ``other`` to this timestamp."""
        secs = self.secs - other.secs
        nanos = self.nanos - other.nanos
        if nanos < 0:
            nanos += NANOS_PER_SEC
            secs -= 1
        return TimeDelta(secs, nanos)

    def to_bytes(self) -> bytes:
        """Encode as 4, 8 or 12 little-endian bytes.

        Nonzero nanoseconds give i64 seconds plus u32 nanoseconds; otherwise
        seconds that fit a u32 are written as one, and the rest as an i64.
        """
        if self.nanos != 0:
            return struct.pack("<qI", self.secs, self.nanos)
        if 0 <= self.secs <= U32_MAX:
            return struct.pack("<I", self.secs)
        return struct.pack("<q", self.secs)

    def size(self) -> int:
        """The length of :meth:`to_bytes` output."""
        if self.nanos != 0:
            return 12
        if 0 <= self.secs <= U32_MAX:
            return 4
        return 8

    @classmethod
    def from_bytes(cls, data: bytes) -> Timestamp:
        """Decode the output of :meth:`to_bytes`."""
        raw = bytes(data)
        if len(raw) == 12:
            secs, nanos = struct.unpack("<qI", raw)
        elif len(raw) == 8:
            (secs,) = struct.unpack("<q", raw)
            nanos = 0
        elif len(raw) == 4:
            (secs,) = struct.unpack("<I", raw)
            nanos = 0
        else:
            raise ValueError(f"not a recognized Timestamp length ({len(raw)} bytes)")
        return cls(secs, nanos)

    def __add__(self, other: object) -> Timestamp:
        if isinstance(other, TimeDelta):
            nanos = self.nanos + other.nanos
            secs = self.secs
            if nanos >= NANOS_PER_SEC:
                nanos -= NANOS_PER_SEC
                secs += 1
            return Timestamp(secs + other.secs, nanos)
        if isinstance(other, int):
            return Timestamp(self.secs + other, self.nanos)
        return NotImplemented

    def __sub__(self, other: object):
        if isinstance(other, Timestamp):
            return self.time_since(other)
        if isinstance(other, TimeDelta):
            nanos = self.nanos
            secs = self.secs
            if nanos < other.nanos:
                nanos += NANOS_PER_SEC
                secs -= 1
            return Timestamp(secs - other.secs, nanos - other.nanos)
        if isinstance(other, int):
            return Timestamp(self.secs - other, self.nanos)
        return NotImplemented

    def __str__(self) -> str:
        return f"TAI: {self.secs} secs + {self.nanos} ns"