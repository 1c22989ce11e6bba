"""Partitioning of documented declarations into exported and internal lists."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .doc.printer import Printer
from .doc.reader import FuncDoc, TypeDoc, ValueDoc
from .doc.source import CodeExtractor
from .models import Func, Type, Value
from .syntax.ast import is_exported


class DeclarationClassifier:
    """Prints documented declarations and sorts them by visibility.

    Order within each list follows the input order. Const and var groups are
    never split; they were already filtered when the package was read.
    """

    def __init__(self, printer: Printer, extractor: CodeExtractor, *, builtin: bool = False) -> None:
        self._printer = printer
        self._extractor = extractor
        self._builtin = builtin

    def is_exported(self, name: str) -> bool:
        return is_exported(name, builtin=self._builtin)

    def values(self, docs: Sequence[ValueDoc]) -> List[Value]:
        return [
            Value(
                decl=self._printer.print_decl(d.decl),
                url=self._extractor.url(d.decl.pos),
                doc=d.doc,
            )
            for d in docs
        ]

    def func(self, d: FuncDoc) -> Func:
        return Func(
            decl=self._printer.print_decl(d.decl),
            url=self._extractor.url(d.decl.pos),
            doc=d.doc,
            name=d.name,
            code=self._extractor.code(d.decl.pos),
        )

    def funcs(self, docs: Sequence[FuncDoc]) -> Tuple[List[Func], List[Func]]:
        exported: List[Func] = []
        internal: List[Func] = []
        for d in docs:
            (exported if self.is_exported(d.name) else internal).append(self.func(d))
        return exported, internal

    def types(self, docs: Sequence[TypeDoc]) -> Tuple[List[Type], List[Type]]:
        exported: List[Type] = []
        internal: List[Type] = []
        for d in docs:
            funcs, ifuncs = self.funcs(d.funcs)
            methods, imethods = self.funcs(d.methods)
            typ = Type(
                doc=d.doc,
                name=d.name,
                decl=self._printer.print_decl(d.decl),
                url=self._extractor.url(d.decl.pos),
                code=self._extractor.code(d.decl.pos),
                consts=self.values(d.consts),
                vars=self.values(d.vars),
                funcs=funcs,
                ifuncs=ifuncs,
                methods=methods,
                imethods=imethods,
            )
            (exported if self.is_exported(d.name) else internal).append(typ)
        return exported, internal


__all__ = ["DeclarationClassifier"]
