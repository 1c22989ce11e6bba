"""Tests for declaration printing."""

from __future__ import annotations

from dataclasses import replace

from gowalker.doc.printer import Printer
from gowalker.syntax.ast import FuncDecl, GenDecl
from gowalker.syntax.parser import GoParser
from gowalker.syntax.token import FileSet

SOURCE = b"""package demo

// Sum adds.
func Sum(a, b int) int {
\treturn a + b
}

type Point struct {
\tX, Y int
}

const (
\t// A is a.
\tA = 1
\tb = 2
\tC = 3 // c
)

type (
\t// Reader reads.
\tReader interface{}

\tShape struct {
\t\tSides int
\t}
)
"""


def _decls(go_parser: GoParser, fset: FileSet):
    parsed = go_parser.parse_file(fset, "demo.go", SOURCE)
    funcs = {decl.name: decl for decl in parsed.decls if isinstance(decl, FuncDecl)}
    gens = [decl for decl in parsed.decls if isinstance(decl, GenDecl)]
    return funcs, gens


def test_function_prints_signature_only(go_parser: GoParser, fset: FileSet) -> None:
    funcs, _ = _decls(go_parser, fset)
    assert Printer(fset).print_decl(funcs["Sum"]) == "func Sum(a, b int) int"


def test_declaration_tabs_become_spaces(go_parser: GoParser, fset: FileSet) -> None:
    _, gens = _decls(go_parser, fset)
    assert Printer(fset).print_decl(gens[0]) == "type Point struct {\n    X, Y int\n}"


def test_filtered_group_prints_retained_specs(go_parser: GoParser, fset: FileSet) -> None:
    _, gens = _decls(go_parser, fset)
    group = gens[1]
    first, _, third = group.specs
    filtered = replace(group, specs=[first, third], filtered=True)
    assert Printer(fset).print_decl(filtered) == "const (\n    // A is a.\n    A = 1\n    C = 3\n)"


def test_grouped_type_prints_standalone(go_parser: GoParser, fset: FileSet) -> None:
    _, gens = _decls(go_parser, fset)
    reader, shape = gens[2].specs
    printer = Printer(fset)
    single = GenDecl(tok="type", specs=[reader], pos=reader.pos, end=reader.end, doc=reader.doc, filtered=True)
    assert printer.print_decl(single) == "type Reader interface{}"
    single = GenDecl(tok="type", specs=[shape], pos=shape.pos, end=shape.end, filtered=True)
    assert printer.print_decl(single) == "type Shape struct {\n    Sides int\n}"


def test_printer_reuses_its_buffer(go_parser: GoParser, fset: FileSet) -> None:
    funcs, gens = _decls(go_parser, fset)
    printer = Printer(fset)
    printer.print_decl(gens[0])
    assert printer.print_decl(funcs["Sum"]) == "func Sum(a, b int) int"
