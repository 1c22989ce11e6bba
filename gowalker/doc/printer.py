"""Printing of declarations and example code from their source text."""

from __future__ import annotations

import io
from typing import Union

from ..syntax.ast import Block, File, FuncDecl, GenDecl, TypeSpec, ValueSpec
from ..syntax.token import FileSet

TAB_WIDTH = 4
_INDENT = " " * TAB_WIDTH


class Printer:
    """Prints nodes of one build with tabs rendered as spaces.

    The scratch buffer is owned by the printer, and a printer is owned by a
    single build; never share one across concurrent builds.
    """

    def __init__(self, fset: FileSet) -> None:
        self._fset = fset
        self._buf = io.StringIO()

    def print_decl(self, decl: Union[FuncDecl, GenDecl]) -> str:
        """Print a declaration without its doc comment (and without a function body)."""
        self._reset()
        if isinstance(decl, FuncDecl):
            end = decl.body.pos if decl.body is not None else decl.end
            self._buf.write(self._source(decl.pos, end).rstrip())
        elif not decl.filtered:
            self._buf.write(self._source(decl.pos, decl.end))
        elif decl.lparen:
            self._buf.write(f"{decl.tok} (\n")
            for spec in decl.specs:
                for line in self._spec_source(spec).split("\n"):
                    self._buf.write(f"{_INDENT}{line}\n" if line else "\n")
            self._buf.write(")")
        else:
            specs = " ".join(self._spec_source(spec, with_doc=False) for spec in decl.specs)
            self._buf.write(f"{decl.tok} {specs}")
        return self._value()

    def print_node(self, node: Union[Block, File]) -> str:
        """Print a block or a whole file, comments included."""
        self._reset()
        self._buf.write(self._source(node.pos, node.end))
        return self._value()

    def _spec_source(self, spec: Union[TypeSpec, ValueSpec], with_doc: bool = True) -> str:
        # Specs come from a parenthesized group; continuation lines carry the
        # group's one-tab indentation.
        start = spec.doc.pos if with_doc and spec.doc is not None else spec.pos
        lines = self._spec_text(spec, start).split("\n")
        rest = [line[1:] if line.startswith("\t") else line for line in lines[1:]]
        return "\n".join([lines[0]] + rest)

    def _spec_text(self, spec: Union[TypeSpec, ValueSpec], start: int) -> str:
        if isinstance(spec, ValueSpec) and spec.name_spans:
            first, last = spec.name_spans[0][0], spec.name_spans[-1][1]
            if [self._source(pos, end) for pos, end in spec.name_spans] != spec.names:
                # The reader hid or dropped names; print the remaining list.
                names = ", ".join(spec.names)
                return self._source(start, first) + names + self._source(last, spec.end)
        return self._source(start, spec.end)

    def _source(self, pos: int, end: int) -> str:
        token_file = self._fset.file(pos)
        if token_file is None:
            return ""
        return token_file.text(pos, end)

    def _reset(self) -> None:
        self._buf.seek(0)
        self._buf.truncate()

    def _value(self) -> str:
        return self._buf.getvalue().expandtabs(TAB_WIDTH)


__all__ = ["Printer", "TAB_WIDTH"]
