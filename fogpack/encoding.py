"""Encoding of single fog-pack elements into their byte form."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Union

from .timestamp import Timestamp

__all__ = [
    "MAX_DOC_SIZE",
    "EncodeError",
    "F32",
    "encode_null",
    "encode_bool",
    "encode_int",
    "encode_f32",
    "encode_f64",
    "encode_str",
    "encode_bin",
    "encode_array_header",
    "encode_map_header",
    "encode_timestamp",
]

MAX_DOC_SIZE = (1 << 20) - 1
"""Largest number of bytes or array elements a single value may hold."""

_I64_MIN = -(1 << 63)
_U64_MAX = (1 << 64) - 1
_EXT_TIMESTAMP = 0x00


class EncodeError(ValueError):
    """Raised when a value cannot be encoded."""


@dataclass(frozen=True)
class F32:
    """A float to be encoded with single precision."""

    value: float

    def __float__(self) -> float:
        return float(self.value)


def _len3(length: int) -> bytes:
    return length.to_bytes(3, "little")


def _check_len(length: int, limit: int, what: str) -> None:
    if length < 0:
        raise EncodeError(f"{what} length cannot be negative: {length}")
    if length > limit:
        raise EncodeError(f"Value too large: {length} elements/bytes")


def encode_null() -> bytes:
    """Encode the null value."""
    return b"\xc0"


def encode_bool(value: bool) -> bytes:
    """Encode a boolean."""
    return b"\xc3" if value else b"\xc2"


def encode_int(value: int) -> bytes:
    """Encode an integer between the i64 minimum and the u64 maximum."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if value >= 0:
        if value <= 0x7F:
            return bytes([value])
        if value <= 0xFF:
            return b"\xcc" + struct.pack("<B", value)
        if value <= 0xFFFF:
            return b"\xcd" + struct.pack("<H", value)
        if value <= 0xFFFF_FFFF:
            return b"\xce" + struct.pack("<I", value)
        if value <= _U64_MAX:
            return b"\xcf" + struct.pack("<Q", value)
        raise EncodeError(f"integer too large to encode: {value}")
    if value >= -32:
        return bytes([value & 0xFF])
    if value >= -(1 << 7):
        return b"\xd0" + struct.pack("<b", value)
    if value >= -(1 << 15):
        return b"\xd1" + struct.pack("<h", value)
    if value >= -(1 << 31):
        return b"\xd2" + struct.pack("<i", value)
    if value >= _I64_MIN:
        return b"\xd3" + struct.pack("<q", value)
    raise EncodeError(f"integer too small to encode: {value}")


def encode_f32(value: Union[float, F32]) -> bytes:
    """Encode a single-precision float."""
    try:
        return b"\xca" + struct.pack("<f", float(value))
    except OverflowError:
        raise EncodeError(f"value does not fit a 32-bit float: {value}") from None


def encode_f64(value: float) -> bytes:
    """Encode a double-precision float."""
    return b"\xcb" + struct.pack("<d", float(value))


def encode_str(value: str) -> bytes:
    """Encode a string as UTF-8 with its length header."""
    data = value.encode("utf-8")
    length = len(data)
    _check_len(length, MAX_DOC_SIZE, "string")
    if length <= 31:
        header = bytes([0xA0 | length])
    elif length <= 0xFF:
        header = b"\xd4" + bytes([length])
    elif length <= 0xFFFF:
        header = b"\xd5" + struct.pack("<H", length)
    else:
        header = b"\xd6" + _len3(length)
    return header + data


def encode_bin(value: Union[bytes, bytearray, memoryview]) -> bytes:
    """Encode a byte sequence with its length header."""
    data = bytes(value)
    length = len(data)
    _check_len(length, MAX_DOC_SIZE, "binary")
    if length <= 0xFF:
        header = b"\xc4" + bytes([length])
    elif length <= 0xFFFF:
        header = b"\xc5" + struct.pack("<H", length)
    else:
        header = b"\xc6" + _len3(length)
    return header + data


def encode_array_header(length: int) -> bytes:
    """Encode the marker that starts an array of ``length`` elements."""
    _check_len(length, MAX_DOC_SIZE, "array")
    if length <= 15:
        return bytes([0x90 | length])
    if length <= 0xFF:
        return b"\xd7" + bytes([length])
    if length <= 0xFFFF:
        return b"\xd8" + struct.pack("<H", length)
    return b"\xd9" + _len3(length)


def encode_map_header(length: int) -> bytes:
    """Encode the marker that starts a map of ``length`` pairs."""
    _check_len(length, MAX_DOC_SIZE // 2, "map")
    if length <= 15:
        return bytes([0x80 | length])
    if length <= 0xFF:
        return b"\xda" + bytes([length])
    if length <= 0xFFFF:
        return b"\xdb" + struct.pack("<H", length)
    return b"\xdc" + _len3(length)


def _encode_ext(ext_type: int, data: bytes) -> bytes:
    length = len(data)
    _check_len(length, MAX_DOC_SIZE, "extension")
    if length <= 0xFF:
        header = b"\xc7" + bytes([length])
    elif length <= 0xFFFF:
        header = b"\xc8" + struct.pack("<H", length)
    else:
        header = b"\xc9" + _len3(length)
    return header + bytes([ext_type]) + data


def encode_timestamp(value: Timestamp) -> bytes:
    """Encode a timestamp as an extension element."""
    if not isinstance(value, Timestamp):
        raise TypeError(f"expected a Timestamp, got {type(value).__name__}")
    return _encode_ext(_EXT_TIMESTAMP, value.to_bytes())