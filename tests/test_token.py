"""Tests for source position bookkeeping."""

from __future__ import annotations

from gowalker.syntax.token import NO_POS, FileSet, Position


def test_files_get_distinct_position_ranges() -> None:
    fset = FileSet()
    first = fset.add_file("a.go", b"package a\n")
    second = fset.add_file("b.go", b"package b\n\nfunc B() {}\n")

    assert first.base == 1
    assert second.base == first.base + first.size + 1
    assert fset.file(first.pos(3)) is first
    assert fset.file(second.pos(0)) is second


def test_position_resolves_line_and_column() -> None:
    fset = FileSet()
    fset.add_file("a.go", b"package a\n")
    token_file = fset.add_file("b.go", b"package b\n\nfunc B() {}\n")

    assert fset.position(token_file.pos(12)) == Position("b.go", 3, 2)
    assert token_file.text(token_file.pos(12), token_file.pos(18)) == "unc B("


def test_unknown_positions() -> None:
    fset = FileSet()
    token_file = fset.add_file("a.go", b"package a\n")
    assert fset.position(NO_POS) == Position("", 0, 0)
    assert fset.file(token_file.base + token_file.size + 1) is None
