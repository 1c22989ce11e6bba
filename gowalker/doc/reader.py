"""Package-level documentation read from a merged syntax tree.

Declarations are grouped the way Go documentation presents them: typed
const/var groups, constructors and methods are attached to their type, the
rest stays at package level.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntFlag
from typing import Dict, List, Optional, Set

from ..syntax.ast import File, FuncDecl, GenDecl, Package, TypeSpec, ValueSpec, is_exported, text_of

PREDECLARED_TYPES = frozenset(
    "any bool byte comparable complex64 complex128 error float32 float64 int int8 "
    "int16 int32 int64 rune string uint uint8 uint16 uint32 uint64 uintptr".split()
)

# Share of typed specs a const/var group needs before it is attached to a type.
_TYPED_VALUE_THRESHOLD = 0.75


class Mode(IntFlag):
    EXPORTED = 0
    ALL_DECLS = 1


def inclusion_mode(import_path: str, *, build_all: bool, builtin_import_path: str = "builtin") -> Mode:
    """Pick the inclusion mode: everything for the builtin package or on request."""
    if import_path == builtin_import_path or build_all:
        return Mode.ALL_DECLS
    return Mode.EXPORTED


@dataclass
class ValueDoc:
    doc: str
    names: List[str]
    decl: GenDecl
    order: int = 0


@dataclass
class FuncDoc:
    doc: str
    name: str
    decl: FuncDecl
    recv: str = ""


@dataclass
class TypeDoc:
    doc: str
    name: str
    decl: GenDecl
    consts: List[ValueDoc] = field(default_factory=list)
    vars: List[ValueDoc] = field(default_factory=list)
    funcs: List[FuncDoc] = field(default_factory=list)
    methods: List[FuncDoc] = field(default_factory=list)


@dataclass
class PackageDoc:
    doc: str
    name: str
    import_path: str
    imports: List[str] = field(default_factory=list)
    filenames: List[str] = field(default_factory=list)
    consts: List[ValueDoc] = field(default_factory=list)
    vars: List[ValueDoc] = field(default_factory=list)
    funcs: List[FuncDoc] = field(default_factory=list)
    types: List[TypeDoc] = field(default_factory=list)


@dataclass
class _NamedType:
    name: str
    doc: str = ""
    decl: Optional[GenDecl] = None
    values: List[ValueDoc] = field(default_factory=list)
    funcs: Dict[str, FuncDoc] = field(default_factory=dict)
    methods: Dict[str, FuncDoc] = field(default_factory=dict)


class _Reader:
    def __init__(self, mode: Mode, declared: Set[str]) -> None:
        self._mode = mode
        self._declared = declared
        self.doc = ""
        self.values: List[ValueDoc] = []
        self.types: Dict[str, _NamedType] = {}
        self.funcs: Dict[str, FuncDoc] = {}
        self._order = 0

    def is_visible(self, name: str) -> bool:
        return bool(self._mode & Mode.ALL_DECLS) or is_exported(name)

    def is_predeclared(self, name: str) -> bool:
        return name in PREDECLARED_TYPES and name not in self._declared

    def lookup_type(self, name: str) -> Optional[_NamedType]:
        if not name or name == "_":
            return None
        typ = self.types.get(name)
        if typ is None:
            typ = _NamedType(name)
            self.types[name] = typ
        return typ

    def read_file(self, parsed: File) -> None:
        if parsed.doc is not None:
            text = parsed.doc.text()
            # Collect every package comment even though there should be one.
            self.doc = text if not self.doc else f"{self.doc}\n{text}"
        for decl in parsed.decls:
            if isinstance(decl, FuncDecl):
                self.read_func(decl)
            elif decl.tok in ("const", "var"):
                self.read_value(decl)
            elif decl.tok == "type":
                for spec in decl.specs:
                    if isinstance(spec, TypeSpec):
                        self.read_type(decl, spec)

    def read_value(self, decl: GenDecl) -> None:
        specs = [spec for spec in decl.specs if isinstance(spec, ValueSpec)]
        if not self._mode & Mode.ALL_DECLS:
            kept = [_exported_names(spec) for spec in specs]
            filtered = [spec for spec in kept if spec is not None]
            if any(new is not old for new, old in zip(kept, specs)):
                decl = replace(decl, specs=filtered, filtered=True)
            specs = filtered
        if not specs:
            return

        dom_name = ""
        dom_freq = 0
        prev = ""
        for spec in specs:
            name = ""
            if spec.has_type:
                if spec.type is not None and not spec.type.imported:
                    name = spec.type.name
            elif decl.tok == "const" and not spec.has_value:
                name = prev
            if name:
                if dom_name and dom_name != name:
                    dom_name = ""
                    break
                dom_name = name
                dom_freq += 1
            prev = name

        value = ValueDoc(
            doc=text_of(decl.doc),
            names=[name for spec in specs for name in spec.names],
            decl=decl,
            order=self._order,
        )
        self._order += 1

        if (
            dom_name
            and self.is_visible(dom_name)
            and dom_freq >= int(len(specs) * _TYPED_VALUE_THRESHOLD)
        ):
            typ = self.lookup_type(dom_name)
            if typ is not None:
                typ.values.append(value)
                return
        self.values.append(value)

    def read_type(self, decl: GenDecl, spec: TypeSpec) -> None:
        if not self.is_visible(spec.name):
            return
        typ = self.lookup_type(spec.name)
        if typ is None or typ.decl is not None:
            return
        doc = spec.doc if spec.doc is not None else decl.doc
        if decl.lparen or len(decl.specs) != 1:
            typ.decl = GenDecl(
                tok="type",
                specs=[spec],
                pos=spec.pos,
                end=spec.end,
                doc=doc,
                filtered=True,
            )
        else:
            typ.decl = decl
        typ.doc = text_of(doc)

    def read_func(self, fun: FuncDecl) -> None:
        if not self.is_visible(fun.name):
            return
        if fun.is_method:
            if fun.recv is None or fun.recv.imported:
                return
            typ = self.lookup_type(fun.recv.name)
            if typ is not None:
                typ.methods[fun.name] = FuncDoc(text_of(fun.doc), fun.name, fun, recv=fun.recv.name)
            return

        func_doc = FuncDoc(text_of(fun.doc), fun.name, fun)
        factory: Optional[_NamedType] = None
        count = 0
        for ref in fun.results:
            if ref is None or ref.imported or ref.name in fun.type_params:
                continue
            if self.is_visible(ref.name) and not self.is_predeclared(ref.name):
                typ = self.lookup_type(ref.name)
                if typ is not None:
                    factory = typ
                    count += 1
                    if count > 1:
                        break
        if count == 1 and factory is not None:
            factory.funcs[fun.name] = func_doc
            return
        self.funcs[fun.name] = func_doc

    def cleanup_types(self) -> None:
        for name in list(self.types):
            typ = self.types[name]
            if typ.decl is None and self.is_predeclared(name):
                # Keep values and constructors of predeclared types at package level.
                self.values.extend(typ.values)
                self.funcs.update(typ.funcs)
            if typ.decl is None or not self.is_visible(name):
                del self.types[name]


def _exported_names(spec: ValueSpec) -> Optional[ValueSpec]:
    """Hide the unexported names of a spec, or drop it when none is exported.

    Names paired with values (or with an implicit repetition of the previous
    expression) become ``_`` so the remaining names keep their position.
    """
    if all(is_exported(name) for name in spec.names):
        return spec
    if not any(is_exported(name) for name in spec.names):
        return None
    if spec.has_value or not spec.has_type:
        return replace(spec, names=[name if is_exported(name) else "_" for name in spec.names])
    return replace(spec, names=[name for name in spec.names if is_exported(name)])


def _declared_types(package: Package) -> Set[str]:
    names: Set[str] = set()
    for parsed in package.files.values():
        for decl in parsed.decls:
            if isinstance(decl, GenDecl) and decl.tok == "type":
                names.update(spec.name for spec in decl.specs if isinstance(spec, TypeSpec))
    return names


def _split_values(values: List[ValueDoc]) -> tuple[List[ValueDoc], List[ValueDoc]]:
    ordered = sorted(values, key=lambda value: value.order)
    consts = [value for value in ordered if value.decl.tok == "const"]
    variables = [value for value in ordered if value.decl.tok == "var"]
    return consts, variables


def _sorted_funcs(funcs: Dict[str, FuncDoc]) -> List[FuncDoc]:
    return [funcs[name] for name in sorted(funcs)]


def new_package_doc(package: Package, import_path: str, mode: Mode = Mode.EXPORTED) -> PackageDoc:
    """Compute the documentation of ``package``.

    Files are read in file name order. In ``Mode.EXPORTED`` only exported
    declarations are kept; ``Mode.ALL_DECLS`` keeps everything.
    """
    reader = _Reader(mode, _declared_types(package))
    for filename in sorted(package.files):
        reader.read_file(package.files[filename])
    reader.cleanup_types()

    consts, variables = _split_values(reader.values)
    types: List[TypeDoc] = []
    for name in sorted(reader.types):
        typ = reader.types[name]
        if typ.decl is None:
            raise RuntimeError(f"type {name} was read without a declaration")
        type_consts, type_vars = _split_values(typ.values)
        types.append(
            TypeDoc(
                doc=typ.doc,
                name=name,
                decl=typ.decl,
                consts=type_consts,
                vars=type_vars,
                funcs=_sorted_funcs(typ.funcs),
                methods=_sorted_funcs(typ.methods),
            )
        )

    return PackageDoc(
        doc=reader.doc,
        name=package.name,
        import_path=import_path,
        imports=sorted(package.imports),
        filenames=sorted(package.files),
        consts=consts,
        vars=variables,
        funcs=_sorted_funcs(reader.funcs),
        types=types,
    )


__all__ = [
    "FuncDoc",
    "Mode",
    "PackageDoc",
    "TypeDoc",
    "ValueDoc",
    "inclusion_mode",
    "new_package_doc",
]
