"""Syntax tree nodes for the parts of a Go file documentation cares about.

Positions are :class:`~gowalker.syntax.token.FileSet` positions, so any node
can be located and printed from the build's file set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

_DIRECTIVE_RX = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")


@dataclass
class Comment:
    """A single ``//`` or ``/* */`` comment, markers included."""

    pos: int
    end: int
    text: str


@dataclass
class CommentGroup:
    """Comments with no tokens and no blank line between them."""

    comments: List[Comment]
    trailing: bool = False

    @property
    def pos(self) -> int:
        return self.comments[0].pos

    @property
    def end(self) -> int:
        return self.comments[-1].end

    def text(self) -> str:
        """Return the comment text without markers, directives or blank runs."""
        lines: List[str] = []
        for comment in self.comments:
            body = comment.text
            if body.startswith("//"):
                body = body[2:]
                if _DIRECTIVE_RX.match(body):
                    continue
                if body.startswith(" "):
                    body = body[1:]
            elif body.startswith("/*"):
                body = body[2:-2]
            for line in body.split("\n"):
                lines.append(line.rstrip(" \t\n\r"))

        kept: List[str] = []
        for line in lines:
            if line or (kept and kept[-1]):
                kept.append(line)
        if kept and kept[-1]:
            kept.append("")
        return "\n".join(kept)


def is_exported(name: str, *, builtin: bool = False) -> bool:
    """Report whether ``name`` is part of the public surface.

    Names starting with an upper case letter are exported. With ``builtin``
    set every name is, since the lower case identifiers of the builtin
    package are its public surface.
    """
    return builtin or (bool(name) and name[0].isupper())


def text_of(group: Optional[CommentGroup]) -> str:
    return group.text() if group is not None else ""


@dataclass(frozen=True)
class TypeRef:
    """Base name of a type expression, with its package qualifier if any."""

    name: str
    package: Optional[str] = None

    @property
    def imported(self) -> bool:
        return self.package is not None


@dataclass
class ImportSpec:
    path: str
    name: Optional[str]
    pos: int
    end: int


@dataclass
class ValueSpec:
    names: List[str]
    pos: int
    end: int
    type: Optional[TypeRef] = None
    has_type: bool = False
    has_value: bool = False
    doc: Optional[CommentGroup] = None
    name_spans: List[Tuple[int, int]] = field(default_factory=list)


@dataclass
class TypeSpec:
    name: str
    pos: int
    end: int
    is_alias: bool = False
    doc: Optional[CommentGroup] = None


Spec = Union[ImportSpec, ValueSpec, TypeSpec]


@dataclass
class GenDecl:
    """An ``import``, ``const``, ``var`` or ``type`` declaration."""

    tok: str
    specs: List[Spec]
    pos: int
    end: int
    lparen: bool = False
    doc: Optional[CommentGroup] = None
    filtered: bool = False


@dataclass
class Block:
    pos: int
    end: int


@dataclass
class FuncDecl:
    """A function or method declaration."""

    name: str
    pos: int
    end: int
    doc: Optional[CommentGroup] = None
    recv: Optional[TypeRef] = None
    is_method: bool = False
    num_params: int = 0
    type_params: List[str] = field(default_factory=list)
    results: List[Optional[TypeRef]] = field(default_factory=list)
    body: Optional[Block] = None


Decl = Union[GenDecl, FuncDecl]


@dataclass
class PackageObject:
    """Placeholder symbol standing in for an imported package."""

    name: str
    path: str
    scope: Dict[str, object] = field(default_factory=dict)


@dataclass
class File:
    """A parsed Go source file."""

    name: str
    package_name: str
    pos: int
    end: int
    doc: Optional[CommentGroup] = None
    imports: List[ImportSpec] = field(default_factory=list)
    decls: List[Decl] = field(default_factory=list)
    comments: List[CommentGroup] = field(default_factory=list)
    import_scope: Dict[str, PackageObject] = field(default_factory=dict)
    dot_imports: List[PackageObject] = field(default_factory=list)

    def resolve_package(self, local_name: str) -> Optional[PackageObject]:
        return self.import_scope.get(local_name)


@dataclass
class Package:
    """Files of one package merged under a single name."""

    name: str
    files: Dict[str, File] = field(default_factory=dict)
    imports: Dict[str, PackageObject] = field(default_factory=dict)


__all__ = [
    "Block",
    "Comment",
    "CommentGroup",
    "Decl",
    "File",
    "FuncDecl",
    "GenDecl",
    "ImportSpec",
    "Package",
    "PackageObject",
    "Spec",
    "TypeRef",
    "TypeSpec",
    "ValueSpec",
    "is_exported",
    "text_of",
]
