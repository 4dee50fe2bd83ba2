"""Validator for arrays."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain, islice, repeat
from typing import Any, FrozenSet, Iterator, Optional, Tuple

from .validators import AnyValidator, ValidationError, Validator, _type_name

__all__ = ["ArrayValidator"]

U32_MAX = (1 << 32) - 1


def _strict_eq(a: Any, b: Any) -> bool:
    """Equality that keeps booleans, integers and floats apart."""
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(_strict_eq(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_strict_eq(a[k], b[k]) for k in a)
    binary = (bytes, bytearray, memoryview)
    if isinstance(a, binary) and isinstance(b, binary):
        return bytes(a) == bytes(b)
    return type(a) is type(b) and a == b


def _validator_dict(validator: Validator) -> Any:
    """A validator in its tagged map form, such as ``{"Bool": {...}}``."""
    if isinstance(validator, AnyValidator):
        return "Any"
    to_dict = getattr(validator, "to_dict", None)
    if to_dict is None:
        raise TypeError(f"cannot convert {type(validator).__name__} to a map")
    tag = type(validator).__name__
    if tag.endswith("Validator"):
        tag = tag[: -len("Validator")]
    return {tag: to_dict()}


@dataclass(frozen=True)
class ArrayValidator(Validator):
    """Passes arrays meeting length, list, uniqueness and item limits.

    Each item is checked against the validator at its index in ``prefix``,
    or against ``items`` past the end of ``prefix``. Every validator in
    ``contains`` must pass at least one item. The indices in ``same_len``
    must all be null or absent, or all be arrays of one length.

    The ``query``, ``array``, ``contains_ok``, ``unique_ok``, ``size`` and
    ``same_len_ok`` flags allow queries to use ``in``/``nin``,
    ``prefix``/``items``, ``contains``, ``unique``, the length limits and
    ``same_len``.
    """

    comment: str = ""
    contains: Tuple[Validator, ...] = ()
    items: Validator = field(default_factory=AnyValidator)
    prefix: Tuple[Validator, ...] = ()
    max_len: int = U32_MAX
    min_len: int = 0
    in_list: Tuple[Tuple[Any, ...], ...] = ()
    nin_list: Tuple[Tuple[Any, ...], ...] = ()
    same_len: FrozenSet[int] = frozenset()
    unique: bool = False
    extend: bool = False
    query: bool = False
    array: bool = False
    contains_ok: bool = False
    unique_ok: bool = False
    size: bool = False
    same_len_ok: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "contains", tuple(self.contains))
        object.__setattr__(self, "prefix", tuple(self.prefix))
        object.__setattr__(self, "same_len", frozenset(self.same_len))
        for name in ("in_list", "nin_list"):
            object.__setattr__(
                self, name, tuple(tuple(item) for item in getattr(self, name))
            )

    def _validators(self) -> Iterator[Validator]:
        return chain(self.prefix, repeat(self.items))

    def validate(self, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValidationError(f"Expected Array, got {_type_name(value)}")
        length = len(value)

        if length > self.max_len:
            raise ValidationError(
                f"Array is {length} elements, longer than maximum allowed of "
                f"{self.max_len}"
            )
        if length < self.min_len:
            raise ValidationError(
                f"Array is {length} elements, shorter than minimum allowed of "
                f"{self.min_len}"
            )

        if self.in_list and not any(_strict_eq(v, value) for v in self.in_list):
            raise ValidationError("Array is not on `in` list")
        if any(_strict_eq(v, value) for v in self.nin_list):
            raise ValidationError("Array is on `nin` list")
        if self.unique and any(
            _strict_eq(lhs, rhs)
            for index, lhs in enumerate(value)
            for rhs in islice(value, index + 1, None)
        ):
            raise ValidationError("Array does not contain unique elements")

        passed = [False] * len(self.contains)
        array_len: Optional[int] = None
        array_len_cnt = 0
        for index, (item, validator) in enumerate(zip(value, self._validators())):
            for slot, check in enumerate(self.contains):
                if passed[slot]:
                    continue
                try:
                    check.validate(item)
                except ValidationError:
                    continue
                passed[slot] = True

            if index in self.same_len:
                if item is None:
                    if array_len is not None:
                        raise ValidationError(
                            "some sub-arrays for `same_len` are present, but the "
                            f"one at {index} is not"
                        )
                elif isinstance(item, (list, tuple)):
                    if array_len is None:
                        array_len = len(item)
                    elif array_len != len(item):
                        raise ValidationError(
                            f"expected array of length {array_len} for index "
                            f"{index}, but length was {len(item)}"
                        )
                    array_len_cnt += 1
                else:
                    raise ValidationError(
                        f"`same_len` expected an array or null at index {index}"
                    )

            validator.validate(item)

        if array_len is not None and array_len_cnt != len(self.same_len):
            raise ValidationError(
                "Array had some, but not all, of the indices listed in `same_len`"
            )

        missing = [str(slot) for slot, ok in enumerate(passed) if not ok]
        if missing:
            raise ValidationError(
                "Array was missing items satisfying `contains` list: "
                + ", ".join(missing)
            )
        return value

    def _query_check_self(self, other: ArrayValidator) -> bool:
        initial = (
            (self.query or (not other.in_list and not other.nin_list))
            and (
                self.array
                or (not other.prefix and isinstance(other.items, AnyValidator))
            )
            and (self.contains_ok or not other.contains)
            and (self.unique_ok or not other.unique)
            and (self.same_len_ok or not other.same_len)
            and (self.size or (other.max_len == U32_MAX and other.min_len == 0))
        )
        if not initial:
            return False
        if self.contains_ok:
            contains_ok = all(
                self.items.query_check(query)
                and all(mine.query_check(query) for mine in self.prefix)
                for query in other.contains
            )
            if not contains_ok:
                return False
        if not self.array:
            return True
        if not self.items.query_check(other.items):
            return False
        count = max(len(self.prefix), len(other.prefix))
        pairs = islice(zip(self._validators(), other._validators()), count)
        return all(mine.query_check(query) for mine, query in pairs)

    def query_check(self, other: Any) -> bool:
        if isinstance(other, ArrayValidator):
            return self._query_check_self(other)
        if isinstance(other, (list, tuple)):
            return all(
                isinstance(item, ArrayValidator) and self._query_check_self(item)
                for item in other
            )
        return isinstance(other, AnyValidator)

    def to_dict(self) -> dict:
        """The validator as a map, leaving out fields at their defaults."""
        out: dict = {}
        if self.comment:
            out["comment"] = self.comment
        if self.contains:
            out["contains"] = [_validator_dict(v) for v in self.contains]
        if not isinstance(self.items, AnyValidator):
            out["items"] = _validator_dict(self.items)
        if self.prefix:
            out["prefix"] = [_validator_dict(v) for v in self.prefix]
        if self.max_len != U32_MAX:
            out["max_len"] = self.max_len
        if self.min_len != 0:
            out["min_len"] = self.min_len
        if self.in_list:
            out["in"] = [list(v) for v in self.in_list]
        if self.nin_list:
            out["nin"] = [list(v) for v in self.nin_list]
        if self.same_len:
            out["same_len"] = sorted(self.same_len)
        for flag in (
            "unique",
            "extend",
            "query",
            "array",
            "contains_ok",
            "unique_ok",
            "size",
            "same_len_ok",
        ):
            if getattr(self, flag):
                out[flag] = True
        return out