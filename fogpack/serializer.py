"""Serialization of Python values into fog-pack bytes.

Values map onto fog-pack elements as follows:

- ``None`` is null, ``bool`` is a boolean, ``int`` an integer.
- ``float`` is a 64-bit float; wrap it in :class:`~fogpack.encoding.F32` for
  a 32-bit one.
- ``str`` is a string and ``bytes``-like objects are binary.
- ``list`` and ``tuple`` are arrays.
- ``dict`` is a map with string keys, written in key order.
- A dataclass instance is a map of its fields.
- An :class:`enum.Enum` member is the string of its name.
- A :class:`~fogpack.timestamp.Timestamp` is a timestamp extension element.

In ordered mode, maps and dataclass fields must already come in strictly
increasing key order; otherwise they are sorted on output.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable, List, Tuple

from .encoding import (
    F32,
    EncodeError,
    encode_array_header,
    encode_bin,
    encode_bool,
    encode_f32,
    encode_f64,
    encode_int,
    encode_map_header,
    encode_null,
    encode_str,
    encode_timestamp,
)
from .timestamp import Timestamp

__all__ = ["Serializer", "serialize"]


def _map_key(key: Any) -> str:
    """Turn a map key into its string form, or raise :class:`EncodeError`."""
    if isinstance(key, Enum):
        return key.name
    if isinstance(key, str):
        return key
    raise EncodeError(f"expected string, received {type(key).__name__}")


class Serializer:
    """Accumulates fog-pack encoded values in a byte buffer."""

    def __init__(self, ordered: bool = False) -> None:
        self.ordered = ordered
        self._buf = bytearray()

    def serialize(self, value: Any) -> None:
        """Encode ``value`` and append it to the buffer.

        On failure the buffer is left as it was.
        """
        out = bytearray()
        self._encode_to(value, out)
        self._buf += out

    def getvalue(self) -> bytes:
        """All bytes written so far."""
        return bytes(self._buf)

    def _write(self, data: bytes) -> None:
        self._buf += data

    def _encode_to(self, value: Any, out: bytearray) -> None:
        if value is None:
            out += encode_null()
        elif isinstance(value, Enum):
            out += encode_str(value.name)
        elif isinstance(value, bool):
            out += encode_bool(value)
        elif isinstance(value, int):
            out += encode_int(value)
        elif isinstance(value, F32):
            out += encode_f32(value)
        elif isinstance(value, float):
            out += encode_f64(value)
        elif isinstance(value, str):
            out += encode_str(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            out += encode_bin(value)
        elif isinstance(value, Timestamp):
            out += encode_timestamp(value)
        elif isinstance(value, (list, tuple)):
            out += encode_array_header(len(value))
            for item in value:
                self._encode_to(item, out)
        elif isinstance(value, dict):
            self._encode_pairs(list(value.items()), out)
        elif is_dataclass(value) and not isinstance(value, type):
            pairs = [(f.name, getattr(value, f.name)) for f in fields(value)]
            self._encode_pairs(pairs, out)
        else:
            raise TypeError(f"cannot encode value of type {type(value).__name__}")

    def _encode_pairs(self, pairs: List[Tuple[Any, Any]], out: bytearray) -> None:
        out += encode_map_header(len(pairs))
        keyed = [(_map_key(key), val) for key, val in pairs]
        keys = [key for key, _ in keyed]
        if self.ordered:
            for last, new in zip(keys, keys[1:]):
                if new <= last:
                    raise EncodeError(f"map keys are unordered: {new} follows {last}")
            ordered_pairs: Iterable[Tuple[str, Any]] = keyed
        else:
            if len(set(keys)) != len(keys):
                raise EncodeError("map has repeated keys")
            ordered_pairs = sorted(keyed, key=lambda pair: pair[0])
        for key, val in ordered_pairs:
            out += encode_str(key)
            self._encode_to(val, out)


def serialize(value: Any, ordered: bool = False) -> bytes:
    """Encode a single value into fog-pack bytes."""
    ser = Serializer(ordered)
    ser.serialize(value)
    return ser.getvalue()