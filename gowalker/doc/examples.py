"""Discovery and formatting of example functions in test files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Union

from ..models import Example
from ..syntax.ast import Block, File, FuncDecl, GenDecl, text_of
from .printer import Printer

_OUTPUT_PREFIX_RX = re.compile(r"^\s*(unordered )?output:", re.IGNORECASE)
_OUTPUT_COMMENT_RX = re.compile(r"//\s*output:", re.IGNORECASE)
_INDENT = "\n    "


@dataclass
class RawExample:
    """An example function as found in a test file."""

    name: str
    doc: str
    code: Union[Block, File]
    output: str = ""
    unordered: bool = False
    has_output: bool = False


def is_test_name(name: str, prefix: str) -> bool:
    """Report whether ``name`` is ``prefix`` or ``prefix`` followed by a non-lowercase rune."""
    if not name.startswith(prefix):
        return False
    if len(name) == len(prefix):
        return True
    return not name[len(prefix)].islower()


def _example_output(body: Block, parsed: File) -> tuple[str, bool, bool]:
    last = None
    for group in parsed.comments:
        if group.pos > body.pos and group.end < body.end:
            last = group
    if last is None:
        return "", False, False
    text = last.text()
    match = _OUTPUT_PREFIX_RX.match(text)
    if match is None:
        return "", False, False
    output = text[match.end() :].lstrip(" ")
    if output.startswith("\n"):
        output = output[1:]
    return output, match.group(1) is not None, True


def find_examples(parsed: File) -> List[RawExample]:
    """Return the examples of a test file, sorted by name.

    A file holding a single example, other declarations and no tests or
    benchmarks is a whole-file example.
    """
    found: List[RawExample] = []
    has_tests = False
    num_decl = 0
    for decl in parsed.decls:
        if isinstance(decl, GenDecl):
            if decl.tok != "import":
                num_decl += 1
            continue
        if not isinstance(decl, FuncDecl) or decl.is_method:
            continue
        num_decl += 1
        name = decl.name
        if is_test_name(name, "Test") or is_test_name(name, "Benchmark") or is_test_name(name, "Fuzz"):
            has_tests = True
            continue
        if not is_test_name(name, "Example"):
            continue
        if decl.num_params or decl.type_params or decl.body is None:
            continue
        output, unordered, has_output = _example_output(decl.body, parsed)
        found.append(
            RawExample(
                name=name[len("Example") :],
                doc=text_of(decl.doc),
                code=decl.body,
                output=output,
                unordered=unordered,
                has_output=has_output,
            )
        )
    if not has_tests and num_decl > 1 and len(found) == 1:
        found[0].code = parsed
    found.sort(key=lambda example: example.name)
    return found


class ExampleFormatter:
    """Turns raw examples into printable code and expected output."""

    def __init__(self, printer: Printer) -> None:
        self._printer = printer

    def format(self, raw: RawExample) -> Example:
        name = raw.name[1:] if raw.name.startswith("_") else raw.name
        output = raw.output
        code = self._printer.print_node(raw.code)

        if len(code) >= 2 and code[0] == "{" and code[-1] == "}":
            # Function body: drop the braces and one level of indentation.
            code = code[1:-1].replace(_INDENT, "\n")
            match = _OUTPUT_COMMENT_RX.search(code)
            if match is not None:
                code = code[: match.start()].strip()
        else:
            # The output comment is part of the code shown.
            output = ""

        return Example(name=name, doc=raw.doc, code=code, output=output)

    def format_all(self, raws: List[RawExample]) -> List[Example]:
        return [self.format(raw) for raw in raws]


__all__ = ["ExampleFormatter", "RawExample", "find_examples", "is_test_name"]
