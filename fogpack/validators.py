"""Base validator types and the boolean validator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "ValidationError",
    "Validator",
    "AnyValidator",
    "BoolValidator",
]


class ValidationError(ValueError):
    """Raised when a value does not pass a validator."""


def _type_name(value: Any) -> str:
    if value is None:
        return "Null"
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, int):
        return "Int"
    if isinstance(value, float):
        return "F64"
    if isinstance(value, str):
        return "Str"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "Bin"
    if isinstance(value, (list, tuple)):
        return "Array"
    if isinstance(value, dict):
        return "Map"
    return type(value).__name__


class Validator(ABC):
    """A check that values must pass.

    ``query_check`` takes the validator a query would use at the same spot;
    a list or tuple of validators stands for a query that must pass all of them.
    """

    @abstractmethod
    def validate(self, value: Any) -> Any:
        """Return ``value`` if it passes, else raise :class:`ValidationError`."""

    @abstractmethod
    def query_check(self, other: Any) -> bool:
        """Whether a query using ``other`` is allowed by this validator."""


@dataclass(frozen=True)
class AnyValidator(Validator):
    """Passes every value."""

    def validate(self, value: Any) -> Any:
        return value

    def query_check(self, other: Any) -> bool:
        if isinstance(other, (list, tuple)):
            return all(isinstance(item, AnyValidator) for item in other)
        return isinstance(other, AnyValidator)


@dataclass(frozen=True)
class BoolValidator(Validator):
    """Passes booleans, and only ``val`` when it is set.

    ``query`` allows queries at this spot to set ``val``.
    """

    comment: str = ""
    val: Optional[bool] = None
    query: bool = False

    def validate(self, value: Any) -> Any:
        if not isinstance(value, bool):
            raise ValidationError(f"Expected Bool, got {_type_name(value)}")
        if self.val is not None and self.val != value:
            raise ValidationError("Boolean does not match the required value")
        return value

    def _query_check_bool(self, other: BoolValidator) -> bool:
        return self.query or other.val is None

    def query_check(self, other: Any) -> bool:
        if isinstance(other, BoolValidator):
            return self._query_check_bool(other)
        if isinstance(other, (list, tuple)):
            return all(
                isinstance(item, BoolValidator) and self._query_check_bool(item)
                for item in other
            )
        return isinstance(other, AnyValidator)

    def to_dict(self) -> dict:
        """The validator as a map, leaving out fields at their defaults."""
        out: dict = {}
        if self.comment:
            out["comment"] = self.comment
        if self.val is not None:
            out["val"] = self.val
        if self.query:
            out["query"] = True
        return out