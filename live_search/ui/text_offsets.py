"""Conversion between Python string indices and Qt document positions.

Qt counts positions in UTF-16 code units, so every character outside the
Basic Multilingual Plane occupies two positions in a ``QTextDocument``.
"""

from __future__ import annotations


def to_qt_position(text: str, index: int) -> int:
    clamped = max(0, min(int(index), len(text)))
    return len(text[:clamped].encode("utf-16-le")) // 2


def from_qt_position(text: str, position: int) -> int:
    """Inverse of ``to_qt_position``; a position inside a surrogate pair maps past it."""
    target = max(0, int(position))
    units = 0
    for index, char in enumerate(text):
        if units >= target:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)
