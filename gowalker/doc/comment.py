"""Conversion of Go doc comments to HTML fragments.

Text is split into paragraphs, preformatted blocks (indented lines) and
headings (a lone capitalised line between blank lines, followed by
unindented text). URLs become links, and doubled back quotes or doubled
single quotes become curly quotes.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import List

_HTML_ESCAPES = str.maketrans(
    {
        "\0": "�",
        '"': "&#34;",
        "'": "&#39;",
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
    }
)

_URL_RX = re.compile(
    r"(?:https?|s?ftps?|file|gopher|mailto|nntp)://"
    r"[a-zA-Z0-9_@\-.\[\]:]+"
    r"(?:[.,:;?!]*[a-zA-Z0-9$'()*+&#=@~_/\-\[\]%])*"
)

_HEADING_FORBIDDEN = set(';:!?+*/=[]{}_^°&§~%#@<">\\')

_PARA, _HEAD, _PRE = range(3)


@dataclass
class _Block:
    op: int
    lines: List[str]


def html_escape(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


def _comment_escape(text: str) -> str:
    text = text.replace("``", "“").replace("''", "”")
    return html_escape(text).replace("“", "&ldquo;").replace("”", "&rdquo;")


def _split_lines(text: str) -> List[str]:
    """Split after every newline, keeping the newline on each line."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def _indent_len(line: str) -> int:
    count = 0
    while count < len(line) and line[count] in " \t":
        count += 1
    return count


def _unindent(lines: List[str]) -> None:
    prefix = None
    for line in lines:
        if _is_blank(line):
            continue
        indent = line[: _indent_len(line)]
        if prefix is None:
            prefix = indent
            continue
        common = 0
        while common < len(prefix) and common < len(indent) and prefix[common] == indent[common]:
            common += 1
        prefix = prefix[:common]
    if not prefix:
        return
    for index, line in enumerate(lines):
        if not _is_blank(line):
            lines[index] = line[len(prefix) :]


def heading(line: str) -> str:
    """Return ``line`` if it qualifies as a section heading, else ``""``."""
    line = line.strip()
    if not line:
        return ""
    first = line[0]
    if not first.isalpha() or not first.isupper():
        return ""
    last = line[-1]
    if not last.isalpha() and unicodedata.category(last) != "Nd":
        return ""
    if any(char in _HEADING_FORBIDDEN for char in line):
        return ""

    # "'" only as a possessive "'s"
    rest = line
    while True:
        index = rest.find("'")
        if index < 0:
            break
        if index + 1 >= len(rest) or rest[index + 1] != "s" or (
            index + 2 < len(rest) and rest[index + 2] != " "
        ):
            return ""
        rest = rest[index + 2 :]

    # "." only when followed by a non-space
    rest = line
    while True:
        index = rest.find(".")
        if index < 0:
            break
        if index + 1 >= len(rest) or rest[index + 1] == " ":
            return ""
        rest = rest[index + 1 :]

    return line


def _anchor_id(text: str) -> str:
    return "hdr-" + "".join(char if char.isalnum() else "_" for char in text)


def _blocks(text: str) -> List[_Block]:
    out: List[_Block] = []
    para: List[str] = []
    last_was_blank = False
    last_was_heading = False

    lines = _split_lines(text)
    _unindent(lines)

    index = 0
    while index < len(lines):
        line = lines[index]
        if _is_blank(line):
            if para:
                out.append(_Block(_PARA, para))
                para = []
            index += 1
            last_was_blank = True
            continue
        if _indent_len(line) > 0:
            if para:
                out.append(_Block(_PARA, para))
                para = []
            end = index + 1
            while end < len(lines) and (_is_blank(lines[end]) or _indent_len(lines[end]) > 0):
                end += 1
            while end > index and _is_blank(lines[end - 1]):
                end -= 1
            pre = lines[index:end]
            _unindent(pre)
            out.append(_Block(_PRE, pre))
            index = end
            last_was_heading = False
            continue
        if (
            last_was_blank
            and not last_was_heading
            and index + 2 < len(lines)
            and _is_blank(lines[index + 1])
            and not _is_blank(lines[index + 2])
            and _indent_len(lines[index + 2]) == 0
        ):
            head = heading(line)
            if head:
                if para:
                    out.append(_Block(_PARA, para))
                    para = []
                out.append(_Block(_HEAD, [head]))
                index += 2
                last_was_heading = True
                continue
        last_was_blank = False
        last_was_heading = False
        para.append(line)
        index += 1

    if para:
        out.append(_Block(_PARA, para))
    return out


def _emphasize(line: str) -> str:
    parts: List[str] = []
    position = 0
    for match in _URL_RX.finditer(line):
        url = match.group(0)
        end = match.end()
        # Drop a closing paren that is not part of the URL.
        while url.endswith(")") and url.count("(") < url.count(")"):
            url = url[:-1]
            end -= 1
        parts.append(_comment_escape(line[position : match.start()]))
        parts.append(f'<a href="{html_escape(url)}">{_comment_escape(url)}</a>')
        position = end
    parts.append(_comment_escape(line[position:]))
    return "".join(parts)


def to_html(text: str) -> str:
    """Render a doc comment as an HTML fragment."""
    out: List[str] = []
    for block in _blocks(text):
        if block.op == _PARA:
            out.append("<p>\n")
            out.extend(_emphasize(line) for line in block.lines)
            out.append("</p>\n")
        elif block.op == _HEAD:
            head = block.lines[0]
            out.append(f'<h3 id="{_anchor_id(head)}">{_comment_escape(head)}</h3>\n')
        else:
            out.append("<pre>")
            out.extend(html_escape(line) for line in block.lines)
            out.append("</pre>\n")
    return "".join(out)


__all__ = ["heading", "html_escape", "to_html"]
