from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from itertools import accumulate


@dataclass(frozen=True, slots=True)
class Location:
    """A concrete source position.

    Offsets are 0-based UTF-8 byte offsets; lines are 1-based. The zero value is
    only a placeholder.
    """

    line: int = 0
    offset: int = 0


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open byte span [start, end) of a construct, trailing comment and newline included."""

    start: Location = Location()
    end: Location = Location()

    def fragment(self, src: str | bytes) -> str | bytes:
        """Slice ``src`` by byte offsets; a str is sliced through its UTF-8 encoding."""
        if isinstance(src, str):
            return src.encode("utf-8")[self.start.offset : self.end.offset].decode("utf-8")
        return src[self.start.offset : self.end.offset]


class LineIndex:
    """Maps character indices of one source text to byte-offset locations."""

    __slots__ = ("_newlines", "_bytes", "_size")

    def __init__(self, src: str) -> None:
        self._newlines = [i for i, ch in enumerate(src) if ch == "\n"]
        self._size = len(src)
        # Byte offset of every character index, end of input included. ASCII maps 1:1.
        self._bytes: list[int] | None = None
        if not src.isascii():
            self._bytes = [0, *accumulate(len(ch.encode("utf-8")) for ch in src)]

    def byte_offset(self, index: int) -> int:
        if index < 0 or index > self._size:
            raise ValueError(f"offset {index} outside source of length {self._size}")
        if self._bytes is None:
            return index
        return self._bytes[index]

    def location(self, index: int) -> Location:
        offset = self.byte_offset(index)
        return Location(line=bisect_left(self._newlines, index) + 1, offset=offset)

    def range(self, start: int, end: int) -> Range:
        return Range(start=self.location(start), end=self.location(end))
