"""One-sentence package summaries."""

from __future__ import annotations

import unicodedata

MAX_SYNOPSIS_LENGTH = 297

BAD_SYNOPSIS_PREFIXES = (
    "Autogenerated by Thrift Compiler",
    "Automatically generated ",
    "Auto-generated by ",
    "Copyright ",
    "COPYRIGHT ",
    'THE SOFTWARE IS PROVIDED "AS IS"',
    "TODO: ",
    "vim:",
)

_OTHER, _PERIOD, _SPACE = range(3)


def synopsis(text: str) -> str:
    """Extract the first sentence of ``text``.

    Only the first paragraph is considered, every run of whitespace becomes a
    single space and the sentence ends at the first period followed by
    whitespace. Results longer than ``MAX_SYNOPSIS_LENGTH`` are cut at a word
    boundary and marked with ``" ..."``. Headings, directives and boilerplate
    such as license headers yield an empty string.
    """
    text = text.split("\n\n", 1)[0]

    chars = []
    last = _SPACE
    for char in text:
        if char in " \t\r\n":
            if last == _PERIOD:
                break
            if last == _OTHER:
                chars.append(" ")
                last = _SPACE
        elif char == ".":
            last = _PERIOD
            chars.append(char)
        else:
            last = _OTHER
            chars.append(char)

    result = "".join(chars)
    if len(result) > MAX_SYNOPSIS_LENGTH:
        result = result[:MAX_SYNOPSIS_LENGTH]
        cut = result.rfind(" ")
        if cut >= 0:
            result = result[:cut]
        result += " ..."

    if not result or unicodedata.category(result[0])[0] in ("P", "S"):
        # Markdown headings, editor settings, build constraints and stray "*".
        return ""
    if result.startswith(BAD_SYNOPSIS_PREFIXES):
        return ""
    return result.rstrip(" \t\n\r")


__all__ = ["BAD_SYNOPSIS_PREFIXES", "MAX_SYNOPSIS_LENGTH", "synopsis"]
