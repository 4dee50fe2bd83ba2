"""Signed differences between timestamps, held as seconds plus nanoseconds."""

from __future__ import annotations

from dataclasses import dataclass

NANOS_PER_SEC = 1_000_000_000
MAX_NANOSEC = NANOS_PER_SEC - 1
MICROS_PER_SEC = 1_000_000
MILLIS_PER_SEC = 1_000

__all__ = ["TimeDelta", "NANOS_PER_SEC", "MAX_NANOSEC"]


@dataclass(frozen=True)
class TimeDelta:
    """A difference between timestamps.

    ``secs`` may be negative; ``nanos`` is always in ``0..=999_999_999`` and
    counts forward from ``secs``.
    """

    secs: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos <= MAX_NANOSEC:
            raise ValueError(
                f"nanoseconds must be between 0 and {MAX_NANOSEC}, got {self.nanos}"
            )

    @classmethod
    def from_secs(cls, secs: int) -> TimeDelta:
        """Build a delta of whole seconds."""
        return cls(secs, 0)

    @classmethod
    def from_millis(cls, millis: int) -> TimeDelta:
        """Build a delta from a millisecond count."""
        secs, rem = divmod(millis, MILLIS_PER_SEC)
        return cls(secs, rem)

    @classmethod
    def from_micros(cls, micros: int) -> TimeDelta:
        """Build a delta from a microsecond count."""
        secs, rem = divmod(micros, MICROS_PER_SEC)
        return cls(secs, rem)

    @classmethod
    def from_nanos(cls, nanos: int) -> TimeDelta:
        """Build a delta from a nanosecond count."""
        secs, rem = divmod(nanos, NANOS_PER_SEC)
        return cls(secs, rem)

    def __add__(self, other: object) -> TimeDelta:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        nanos = self.nanos + other.nanos
        secs = self.secs + other.secs
        if nanos >= NANOS_PER_SEC:
            nanos -= NANOS_PER_SEC
            secs += 1
        return TimeDelta(secs, nanos)

    def __sub__(self, other: object) -> TimeDelta:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        nanos = self.nanos
        secs = self.secs
        if nanos < other.nanos:
            nanos += NANOS_PER_SEC
            secs -= 1
        return TimeDelta(secs - other.secs, nanos - other.nanos)

    def __neg__(self) -> TimeDelta:
        secs = -self.secs
        nanos = self.nanos
        if nanos != 0:
            nanos = NANOS_PER_SEC - nanos
            secs -= 1
        return TimeDelta(secs, nanos)