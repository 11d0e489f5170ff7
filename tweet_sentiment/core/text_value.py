#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Owned Text Value Type

Every string the classifier handles (CSV fields, tokens, tweet ids) is a
TextValue: a byte string that owns its buffer and behaves as a value.

- Construction and assignment always deep-copy the source
- Ordering is lexicographic by unsigned byte value, shorter-is-less
- Case folding only touches ASCII 'A'..'Z'
- Element access is bounds-checked and raises TextIndexError
"""

import functools
from typing import Iterator, Optional, Union

from ..config import TEXT_ENCODING, TEXT_ERRORS

Source = Union[None, str, bytes, bytearray, memoryview, "TextValue"]

_UPPER_A = ord("A")
_UPPER_Z = ord("Z")
_CASE_SHIFT = ord("a") - ord("A")


class TextIndexError(IndexError):
    """Raised when a TextValue is indexed outside [0, len)."""

    def __init__(self, index: int, length: int):
        super().__init__(f"index {index} out of range for text of length {length}")
        self.index = index
        self.length = length


def _to_buffer(source: Source) -> bytearray:
    """Copy ``source`` into a fresh null-free buffer."""
    if source is None:
        return bytearray()
    if isinstance(source, TextValue):
        return bytearray(source._data)
    if isinstance(source, str):
        raw = source.encode(TEXT_ENCODING, TEXT_ERRORS)
    elif isinstance(source, (bytes, bytearray, memoryview)):
        raw = bytes(source)
    else:
        raise TypeError(f"cannot build TextValue from {type(source).__name__}")
    # a NUL ends the logical content
    end = raw.find(0)
    if end != -1:
        raw = raw[:end]
    return bytearray(raw)


@functools.total_ordering
class TextValue:
    """
    Byte string with value semantics.

    Args:
        source: str, bytes-like, another TextValue, or None (empty)
    """

    __slots__ = ("_data",)

    def __init__(self, source: Source = None):
        self._data = _to_buffer(source)

    # ---------- copy / assign ----------
    def copy(self) -> "TextValue":
        return TextValue(self)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "TextValue":
        return TextValue(self)

    def assign(self, other: Source) -> "TextValue":
        """Replace content with a deep copy of ``other``; self-assignment is a no-op."""
        if other is self:
            return self
        self._data = _to_buffer(other)
        return self

    # ---------- size / access ----------
    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return len(self._data) > 0

    def _check(self, index: int) -> int:
        if not isinstance(index, int):
            raise TypeError("TextValue indices must be integers")
        if index < 0 or index >= len(self._data):
            raise TextIndexError(index, len(self._data))
        return index

    def __getitem__(self, index: int) -> int:
        return self._data[self._check(index)]

    def __setitem__(self, index: int, value: int) -> None:
        i = self._check(index)
        if not 0 < value <= 255:
            raise ValueError(f"byte value must be in 1..255, got {value}")
        self._data[i] = value

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self._data))

    # ---------- derived values ----------
    def __add__(self, other: Source) -> "TextValue":
        if not isinstance(other, (TextValue, str, bytes, bytearray, memoryview)):
            return NotImplemented
        out = TextValue()
        out._data = self._data + _to_buffer(other)
        return out

    def __radd__(self, other: Source) -> "TextValue":
        if not isinstance(other, (str, bytes, bytearray, memoryview)):
            return NotImplemented
        return TextValue(other) + self

    def substring(self, start: int, count: int) -> "TextValue":
        """
        Return up to ``count`` bytes starting at ``start``.

        Invalid ranges (negative start, start past the end, non-positive
        count) give an empty value; ranges running past the end are clipped.
        """
        n = len(self._data)
        if start < 0 or start >= n or count <= 0:
            return TextValue()
        out = TextValue()
        out._data = self._data[start:min(start + count, n)]
        return out

    def lower(self) -> "TextValue":
        out = TextValue()
        out._data = bytearray(
            b + _CASE_SHIFT if _UPPER_A <= b <= _UPPER_Z else b for b in self._data
        )
        return out

    def startswith(self, prefix: Source) -> bool:
        return self._data.startswith(_to_buffer(prefix))

    # ---------- comparison ----------
    @staticmethod
    def _coerce(other) -> Optional[bytes]:
        if isinstance(other, TextValue):
            return bytes(other._data)
        # str is not comparable: its hash differs from the encoded bytes
        if isinstance(other, (bytes, bytearray)):
            return bytes(other)
        return None

    def __eq__(self, other) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return bytes(self._data) == rhs

    def __lt__(self, other) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return bytes(self._data) < rhs

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    # ---------- rendering ----------
    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __str__(self) -> str:
        return self._data.decode(TEXT_ENCODING, TEXT_ERRORS)

    def __repr__(self) -> str:
        return f"TextValue({bytes(self._data)!r})"
