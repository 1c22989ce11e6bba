"""Source position bookkeeping shared by every file of one build."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional

NO_POS = 0


@dataclass(frozen=True)
class Position:
    """Human-readable location of a position: 1-based line and column."""

    filename: str
    line: int
    column: int


class TokenFile:
    """A file registered in a :class:`FileSet`."""

    def __init__(self, name: str, base: int, data: bytes) -> None:
        self.name = name
        self.base = base
        self.data = data
        self._line_starts = [0]
        for index, byte in enumerate(data):
            if byte == 0x0A:
                self._line_starts.append(index + 1)

    @property
    def size(self) -> int:
        return len(self.data)

    def pos(self, offset: int) -> int:
        if offset < 0 or offset > self.size:
            raise ValueError(f"offset {offset} out of range for {self.name}")
        return self.base + offset

    def offset(self, pos: int) -> int:
        return pos - self.base

    def position(self, pos: int) -> Position:
        offset = self.offset(pos)
        line = bisect_right(self._line_starts, offset)
        column = offset - self._line_starts[line - 1] + 1
        return Position(self.name, line, column)

    def text(self, pos: int, end: int) -> str:
        return self.data[self.offset(pos) : self.offset(end)].decode("utf-8", errors="replace")


class FileSet:
    """Assigns every file a distinct range of positions.

    A position is ``file.base + byte offset``; ``NO_POS`` never belongs to a
    file. One file set is owned by exactly one build.
    """

    def __init__(self) -> None:
        self._files: List[TokenFile] = []
        self._bases: List[int] = []
        self._next_base = 1

    def add_file(self, name: str, data: bytes) -> TokenFile:
        token_file = TokenFile(name, self._next_base, data)
        self._files.append(token_file)
        self._bases.append(token_file.base)
        self._next_base += len(data) + 1
        return token_file

    def file(self, pos: int) -> Optional[TokenFile]:
        if pos <= NO_POS:
            return None
        index = bisect_right(self._bases, pos) - 1
        if index < 0:
            return None
        token_file = self._files[index]
        if pos > token_file.base + token_file.size:
            return None
        return token_file

    def position(self, pos: int) -> Position:
        token_file = self.file(pos)
        if token_file is None:
            return Position("", 0, 0)
        return token_file.position(pos)


__all__ = ["FileSet", "NO_POS", "Position", "TokenFile"]
