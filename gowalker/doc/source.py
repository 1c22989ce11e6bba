"""Browse links and source code recovery for declarations."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from ..models import Source
from ..syntax.token import FileSet, Position

# Indentation put in front of the body of a one-line function.
ONE_LINE_BODY_INDENT = "       "


class CodeExtractor:
    """Recovers the source lines of declarations of one build.

    Files are split into lines the first time one of their declarations is
    requested and kept for the rest of the build.
    """

    def __init__(self, fset: FileSet, sources: Mapping[str, Source], line_format: str = "#L%d") -> None:
        self._fset = fset
        self._sources = sources
        self._line_format = line_format
        self._lines: Dict[str, List[str]] = {}

    def _browsable(self, pos: int) -> tuple[Position, Optional[Source]]:
        position = self._fset.position(pos)
        src = self._sources.get(position.filename)
        if src is None or not src.browse_url:
            # No browse location, e.g. positions remapped by //line comments.
            return position, None
        return position, src

    def url(self, pos: int) -> str:
        """Return the browse URL of the line holding ``pos``, or ``""``."""
        position, src = self._browsable(pos)
        if src is None:
            return ""
        return src.browse_url + self._line_format % position.line

    def lines(self, filename: str) -> List[str]:
        cached = self._lines.get(filename)
        if cached is None:
            cached = self._sources[filename].data.decode("utf-8", errors="replace").split("\n")
            self._lines[filename] = cached
        return cached

    def code(self, pos: int) -> str:
        """Return the body lines following the declaration line at ``pos``.

        Copying stops at the first line starting with ``}``. A declaration
        line without ``{`` followed by an empty line has no body. A one-line
        function yields its body text on a single indented line.
        """
        position, src = self._browsable(pos)
        if src is None:
            return ""
        code = self.lines(position.filename)

        out: List[str] = []
        start = position.line
        for index in range(start, len(code)):
            line = code[index]
            previous = code[index - 1]
            if line.startswith("}"):
                break
            if index == start and not line and "{" not in previous:
                break
            if len(previous) > 4 and previous[:4] == "func" and previous.endswith("}"):
                out.append(ONE_LINE_BODY_INDENT + previous[previous.find("{") + 1 : -1] + "\n")
                break
            out.append(line + "\n")
        return "".join(out)


__all__ = ["CodeExtractor"]
