"""Incremental encoding of maps and sequences, with or without a known length.

A map or sequence whose length is given up front has its header written at
once. Without a length, entries are buffered and the header is written when
the encoder ends. Map keys are checked for strict ordering in ordered mode.
Otherwise they are sorted on :meth:`MapEncoder.end`, which fails if a key
repeats.

Both encoders are context managers. Leaving the ``with`` block normally ends
the encoder.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .encoding import MAX_DOC_SIZE, EncodeError, encode_array_header, encode_map_header, encode_str
from .serializer import Serializer, _map_key, serialize

__all__ = ["MapEncoder", "SequenceEncoder", "open_map", "open_sequence"]

_MAX_PAIRS = MAX_DOC_SIZE >> 1


class _Encoder:
    _kind = "encoder"

    def __init__(self, serializer: Serializer) -> None:
        self._ser = serializer
        self._ended = False

    def _check_open(self) -> None:
        if self._ended:
            raise RuntimeError(f"{self._kind} encoder has already ended")

    def end(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and not self._ended:
            self.end()


class MapEncoder(_Encoder):
    """Writes a map into a :class:`Serializer` one entry at a time."""

    _kind = "map"

    def __init__(self, serializer: Serializer, length: Optional[int] = None) -> None:
        super().__init__(serializer)
        self._sized = length is not None
        self._ordered = serializer.ordered
        self._pairs: List[Tuple[str, bytes]] = []
        self._buffer = bytearray()
        self._last_key: Optional[str] = None
        self._count = 0
        if length is not None:
            serializer._write(encode_map_header(length))

    def entry(self, key: Any, value: Any) -> None:
        """Add one key and value to the map."""
        self._check_open()
        name = _map_key(key)
        if self._ordered:
            if not self._sized:
                self._count += 1
                if self._count > _MAX_PAIRS:
                    raise EncodeError(f"map too large: {self._count} pairs")
            if self._last_key is not None and name <= self._last_key:
                raise EncodeError(
                    f"map keys are unordered: {name} follows {self._last_key}"
                )
            encoded = encode_str(name) + serialize(value, True)
            self._last_key = name
            if self._sized:
                self._ser._write(encoded)
            else:
                self._buffer += encoded
        else:
            encoded = encode_str(name) + serialize(value, False)
            self._pairs.append((name, encoded))
            if not self._sized and len(self._pairs) > _MAX_PAIRS:
                raise EncodeError(f"map too large: {len(self._pairs)} pairs")

    def end(self) -> None:
        """Finish the map, writing whatever is still buffered."""
        self._check_open()
        self._ended = True
        if self._ordered:
            if not self._sized:
                self._ser._write(encode_map_header(self._count) + bytes(self._buffer))
            return
        pairs = sorted(self._pairs, key=lambda pair: pair[0])
        if len({name for name, _ in pairs}) != len(pairs):
            raise EncodeError("map has repeated keys")
        out = bytearray()
        if not self._sized:
            out += encode_map_header(len(pairs))
        for _, encoded in pairs:
            out += encoded
        self._ser._write(bytes(out))


class SequenceEncoder(_Encoder):
    """Writes an array into a :class:`Serializer` one element at a time."""

    _kind = "sequence"

    def __init__(self, serializer: Serializer, length: Optional[int] = None) -> None:
        super().__init__(serializer)
        self._sized = length is not None
        self._buffer = bytearray()
        self._count = 0
        if length is not None:
            serializer._write(encode_array_header(length))

    def element(self, value: Any) -> None:
        """Add one element to the array."""
        self._check_open()
        if self._sized:
            self._ser.serialize(value)
            return
        self._count += 1
        if self._count > MAX_DOC_SIZE:
            raise EncodeError(f"array too large: {self._count} elements")
        self._buffer += serialize(value, self._ser.ordered)

    def end(self) -> None:
        """Finish the array, writing whatever is still buffered."""
        self._check_open()
        self._ended = True
        if not self._sized:
            self._ser._write(encode_array_header(self._count) + bytes(self._buffer))


def open_map(serializer: Serializer, length: Optional[int] = None) -> MapEncoder:
    """Start a map of ``length`` pairs, or of unknown length if ``None``."""
    return MapEncoder(serializer, length)


def open_sequence(
    serializer: Serializer, length: Optional[int] = None
) -> SequenceEncoder:
    """Start an array of ``length`` elements, or of unknown length if ``None``."""
    return SequenceEncoder(serializer, length)