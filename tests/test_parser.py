"""Tests for the tree-sitter backed Go parser."""

from __future__ import annotations

import pytest

from gowalker.errors import BuildContextError, ParseError
from gowalker.syntax.ast import FuncDecl, GenDecl, TypeRef, TypeSpec, ValueSpec
from gowalker.syntax.parser import GoParser
from gowalker.syntax.token import FileSet

SOURCE = b"""// Copyright 2024 The Demo Authors.

// Package demo is a demo.
package demo

import (
\t"fmt"
\tstr "strings"
)

// Answer is the answer.
const Answer = 42

// Grouped values.
var (
\t// First is first.
\tFirst, second int = 1, 2
\tThird = "three" // trailing
)

type (
\t// Reader reads.
\tReader interface{}

\tAlias = Reader
)

// NewBuffer returns a buffer.
func NewBuffer(size int, name string) (*Buffer, error) {
\treturn nil, nil
}

func (b *Buffer) Len() int { return 0 }

func Map[T any, U any](in []T) []U { return nil }

func qualified() *str.Builder { return nil }
"""


def _parse(go_parser: GoParser, fset: FileSet, data: bytes = SOURCE):
    return go_parser.parse_file(fset, "demo.go", data)


def test_parse_file_reads_package_clause_and_doc(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    assert parsed.package_name == "demo"
    assert parsed.doc is not None
    assert parsed.doc.text() == "Package demo is a demo.\n"


def test_parse_file_reads_imports(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    assert [(spec.path, spec.name) for spec in parsed.imports] == [("fmt", None), ("strings", "str")]


def test_parse_file_reads_value_specs(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    values = [decl for decl in parsed.decls if isinstance(decl, GenDecl) and decl.tok in ("const", "var")]
    const, var = values
    assert const.lparen is False
    assert const.doc is not None and const.doc.text() == "Answer is the answer.\n"
    assert var.lparen is True
    first, third = var.specs
    assert isinstance(first, ValueSpec)
    assert first.names == ["First", "second"]
    assert first.type == TypeRef("int")
    assert first.has_value is True
    assert first.doc is not None and first.doc.text() == "First is first.\n"
    assert third.names == ["Third"]
    assert third.has_type is False
    # A trailing comment is never a doc comment.
    assert third.doc is None


def test_parse_file_reads_type_specs(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    (types,) = [decl for decl in parsed.decls if isinstance(decl, GenDecl) and decl.tok == "type"]
    reader, alias = types.specs
    assert isinstance(reader, TypeSpec)
    assert reader.name == "Reader"
    assert reader.doc is not None and reader.doc.text() == "Reader reads.\n"
    assert alias.name == "Alias"
    assert alias.is_alias is True


def test_parse_file_reads_functions(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    funcs = {decl.name: decl for decl in parsed.decls if isinstance(decl, FuncDecl)}

    new_buffer = funcs["NewBuffer"]
    assert new_buffer.num_params == 2
    assert new_buffer.results == [TypeRef("Buffer"), TypeRef("error")]
    assert new_buffer.doc is not None and new_buffer.doc.text() == "NewBuffer returns a buffer.\n"
    assert new_buffer.body is not None

    length = funcs["Len"]
    assert length.is_method is True
    assert length.recv == TypeRef("Buffer")
    assert length.doc is None

    generic = funcs["Map"]
    assert generic.type_params == ["T", "U"]
    assert generic.results == [TypeRef("U")]

    assert funcs["qualified"].results == [TypeRef("Builder", package="str")]


def test_parse_file_registers_positions(go_parser: GoParser, fset: FileSet) -> None:
    parsed = _parse(go_parser, fset)
    funcs = [decl for decl in parsed.decls if isinstance(decl, FuncDecl)]
    position = fset.position(funcs[0].pos)
    assert position.filename == "demo.go"
    assert position.line == 29
    assert position.column == 1


def test_copyright_header_is_not_the_package_doc(go_parser: GoParser, fset: FileSet) -> None:
    data = b"// Copyright 2024.\n\npackage demo\n"
    assert _parse(go_parser, fset, data).doc is None


def test_parse_file_failure_names_the_file(go_parser: GoParser, fset: FileSet) -> None:
    with pytest.raises(ParseError) as excinfo:
        go_parser.parse_file(fset, "broken.go", b"package demo\n\nfunc Broken( {\n")
    assert excinfo.value.filename == "broken.go"
    assert "broken.go" in str(excinfo.value)


def test_parse_header_tolerates_errors_after_imports(go_parser: GoParser) -> None:
    data = b'// Package demo.\npackage demo\n\nimport "C"\nimport "os"\n\nfunc Broken( {\n'
    header = go_parser.parse_header("demo.go", data)
    assert header.package_name == "demo"
    assert header.doc == "Package demo.\n"
    assert header.imports == ["C", "os"]


def test_parse_header_requires_package_clause(go_parser: GoParser) -> None:
    with pytest.raises(BuildContextError):
        go_parser.parse_header("empty.go", b"// nothing here\n")
