"""Validator for byte sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .validators import AnyValidator, ValidationError, Validator, _type_name

__all__ = ["BinValidator"]

U32_MAX = (1 << 32) - 1


def _as_int(data: bytes) -> int:
    return int.from_bytes(data, "little")


@dataclass(frozen=True)
class BinValidator(Validator):
    """Passes byte sequences meeting bit, range, length and list limits.

    A byte sequence also reads as a little-endian unsigned integer for the
    ``max``/``min`` checks; an empty ``max`` means no maximum. The ``query``,
    ``bit``, ``ord`` and ``size`` flags allow queries to use the ``in``/``nin``
    lists, the bit fields, the range fields and the length fields.
    """

    comment: str = ""
    bits_clr: bytes = b""
    bits_set: bytes = b""
    max: bytes = b""
    min: bytes = b""
    ex_max: bool = False
    ex_min: bool = False
    max_len: int = U32_MAX
    min_len: int = 0
    in_list: Tuple[bytes, ...] = ()
    nin_list: Tuple[bytes, ...] = ()
    query: bool = False
    bit: bool = False
    ord: bool = False
    size: bool = False

    def __post_init__(self) -> None:
        for name in ("bits_clr", "bits_set", "max", "min"):
            object.__setattr__(self, name, bytes(getattr(self, name)))
        for name in ("in_list", "nin_list"):
            object.__setattr__(
                self, name, tuple(bytes(item) for item in getattr(self, name))
            )

    def validate(self, value: Any) -> Any:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ValidationError(f"expected Bin, got {_type_name(value)}")
        val = bytes(value)

        if len(val) > self.max_len:
            raise ValidationError("Bin is longer than max_len")
        if len(val) < self.min_len:
            raise ValidationError("Bin is shorter than min_len")

        padded = val + bytes(max(0, len(self.bits_set) - len(val)))
        if any((bits & byte) != bits for bits, byte in zip(self.bits_set, padded)):
            raise ValidationError("Bin does not have all required bits set")
        if any(bits & byte for bits, byte in zip(self.bits_clr, val)):
            raise ValidationError("Bin does not have all required bits cleared")

        if self.max or self.min or self.ex_min:
            number = _as_int(val)
            if self.max:
                limit = _as_int(self.max)
                max_pass = number < limit if self.ex_max else number <= limit
            else:
                max_pass = True
            if self.min:
                limit = _as_int(self.min)
                min_pass = number > limit if self.ex_min else number >= limit
            else:
                min_pass = number != 0 if self.ex_min else True
            if not max_pass:
                raise ValidationError("Bin greater than maximum allowed")
            if not min_pass:
                raise ValidationError("Bin less than minimum allowed")

        if self.in_list and val not in self.in_list:
            raise ValidationError("Bin is not on `in` list")
        if val in self.nin_list:
            raise ValidationError("Bin is on `nin` list")
        return value

    def _query_check_self(self, other: BinValidator) -> bool:
        return (
            (self.query or (not other.in_list and not other.nin_list))
            and (self.bit or (not other.bits_set and not other.bits_clr))
            and (
                self.ord
                or (
                    not other.ex_min
                    and not other.ex_max
                    and not other.min
                    and not other.max
                )
            )
            and (self.size or (other.max_len == U32_MAX and other.min_len == 0))
        )

    def query_check(self, other: Any) -> bool:
        if isinstance(other, BinValidator):
            return self._query_check_self(other)
        if isinstance(other, (list, tuple)):
            return all(
                isinstance(item, BinValidator) and self._query_check_self(item)
                for item in other
            )
        return isinstance(other, AnyValidator)

    def to_dict(self) -> dict:
        """The validator as a map, leaving out fields at their defaults."""
        out: dict = {}
        if self.comment:
            out["comment"] = self.comment
        if self.bits_clr:
            out["bits_clr"] = self.bits_clr
        if self.bits_set:
            out["bits_set"] = self.bits_set
        if self.max:
            out["max"] = self.max
        if self.min:
            out["min"] = self.min
        if self.ex_max:
            out["ex_max"] = True
        if self.ex_min:
            out["ex_min"] = True
        if self.max_len != U32_MAX:
            out["max_len"] = self.max_len
        if self.min_len != 0:
            out["min_len"] = self.min_len
        if self.in_list:
            out["in"] = list(self.in_list)
        if self.nin_list:
            out["nin"] = list(self.nin_list)
        for flag in ("query", "bit", "ord", "size"):
            if getattr(self, flag):
                out[flag] = True
        return out