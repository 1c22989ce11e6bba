"""Tests for browse links and source code recovery."""

from __future__ import annotations

from typing import Dict

from gowalker.doc.source import ONE_LINE_BODY_INDENT, CodeExtractor
from gowalker.models import Source
from gowalker.syntax.ast import FuncDecl, GenDecl
from gowalker.syntax.parser import GoParser
from gowalker.syntax.token import FileSet

SOURCE = b"""package demo

// Answer.
func Answer() int { return 42 }

// Sum adds.
func Sum(a, b int) int {
\treturn a + b
}

type Point struct {
\tX, Y int
}

func append(slice []Type, elems ...Type) []Type

func cap(v Type) int
"""

URL = "https://example.com/demo/blob/main/demo.go"


def _extract(go_parser: GoParser, browse_url: str = URL):
    fset = FileSet()
    parsed = go_parser.parse_file(fset, "demo.go", SOURCE)
    decls: Dict[str, object] = {}
    for decl in parsed.decls:
        if isinstance(decl, FuncDecl):
            decls[decl.name] = decl
        elif isinstance(decl, GenDecl):
            decls[decl.specs[0].name] = decl
    sources = {"demo.go": Source("demo.go", SOURCE, browse_url=browse_url)}
    return CodeExtractor(fset, sources), decls


def test_url_points_at_declaration_line(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser)
    assert extractor.url(decls["Answer"].pos) == URL + "#L4"
    assert extractor.url(decls["Point"].pos) == URL + "#L11"


def test_url_uses_configured_line_format(go_parser: GoParser) -> None:
    fset = FileSet()
    parsed = go_parser.parse_file(fset, "demo.go", SOURCE)
    extractor = CodeExtractor(fset, {"demo.go": Source("demo.go", SOURCE, browse_url=URL)}, line_format="?line=%d")
    assert extractor.url(parsed.decls[0].pos) == URL + "?line=4"


def test_code_copies_body_until_closing_brace(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser)
    assert extractor.code(decls["Sum"].pos) == "\treturn a + b\n"
    assert extractor.code(decls["Point"].pos) == "\tX, Y int\n"


def test_code_of_one_line_function(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser)
    code = extractor.code(decls["Answer"].pos)
    assert code == ONE_LINE_BODY_INDENT + " return 42 \n"
    assert code.count("\n") == 1


def test_code_of_declaration_without_body(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser)
    assert extractor.code(decls["append"].pos) == ""


def test_code_and_url_are_empty_without_browse_location(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser, browse_url="")
    assert extractor.url(decls["Sum"].pos) == ""
    assert extractor.code(decls["Sum"].pos) == ""
    assert extractor.code(0) == ""


def test_lines_are_split_once_per_file(go_parser: GoParser) -> None:
    extractor, decls = _extract(go_parser)
    first = extractor.lines("demo.go")
    extractor.code(decls["Sum"].pos)
    assert extractor.lines("demo.go") is first
