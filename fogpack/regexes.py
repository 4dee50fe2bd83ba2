"""Counting the regular expressions a schema's validators would compile."""

from __future__ import annotations

from typing import Any

__all__ = ["count_regexes"]


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _sum_values(value: Any) -> int:
    if isinstance(value, dict):
        return sum(count_regexes(v) for v in value.values())
    return 0


def _sum_items(value: Any) -> int:
    if isinstance(value, (list, tuple)):
        return sum(count_regexes(v) for v in value)
    return 0


def count_regexes(value: Any) -> int:
    """Count the regexes in a validator given in its tagged map form.

    A validator is a one-pair map such as ``{"Str": {"matches": "..."}}``;
    anything else counts as none.
    """
    if not isinstance(value, dict) or len(value) != 1:
        return 0
    ((tag, inner),) = value.items()
    if tag == "Str":
        return int(isinstance(_get(inner, "matches"), str))
    if tag == "Map":
        if not isinstance(inner, dict):
            return 0
        key_matches = int(isinstance(_get(_get(inner, "keys"), "matches"), str))
        return (
            key_matches
            + _sum_values(_get(inner, "req"))
            + _sum_values(_get(inner, "opt"))
            + count_regexes(_get(inner, "values"))
        )
    if tag == "Array":
        if not isinstance(inner, dict):
            return 0
        return (
            _sum_items(_get(inner, "contains"))
            + count_regexes(_get(inner, "items"))
            + _sum_items(_get(inner, "prefix"))
        )
    if tag == "Hash":
        if not isinstance(inner, dict):
            return 0
        return count_regexes(_get(inner, "link"))
    if tag == "Enum":
        return _sum_values(inner)
    if tag == "Multi":
        return _sum_items(inner)
    return 0