"""Tree-sitter backed Go parser producing :mod:`gowalker.syntax.ast` nodes."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from functools import cache
from typing import Iterator, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import BuildContextError, ParseError
from .ast import (
    Block,
    Comment,
    CommentGroup,
    File,
    FuncDecl,
    GenDecl,
    ImportSpec,
    TypeRef,
    TypeSpec,
    ValueSpec,
)
from .token import FileSet, TokenFile

_SPEC_KINDS = {
    "import_declaration": ("import_spec",),
    "const_declaration": ("const_spec",),
    "var_declaration": ("var_spec",),
    "type_declaration": ("type_spec", "type_alias"),
}

_DECL_TOKENS = {
    "import_declaration": "import",
    "const_declaration": "const",
    "var_declaration": "var",
    "type_declaration": "type",
}

_PARAM_KINDS = ("parameter_declaration", "variadic_parameter_declaration")


@cache
def go_language() -> Language:
    return Language(tree_sitter_go.language())


@dataclass
class FileHeader:
    """Package clause, package doc and imports of a file."""

    package_name: str
    doc: str = ""
    imports: List[str] = field(default_factory=list)


class GoParser:
    """Parses Go source into syntax trees with comments attached.

    A parser instance is not safe to share between concurrent builds.
    """

    def __init__(self) -> None:
        self._parser = Parser(go_language())

    def parse_file(self, fset: FileSet, filename: str, data: bytes) -> File:
        tree = self._parser.parse(data)
        root = tree.root_node
        if root.has_error:
            raise ParseError(filename, _describe_error(root))
        token_file = fset.add_file(filename, data)
        return _Converter(token_file).file(root)

    def parse_header(self, filename: str, data: bytes) -> FileHeader:
        """Read only the package clause and imports, tolerating body errors."""
        tree = self._parser.parse(data)
        converter = _Converter(TokenFile(filename, 1, data))
        clause = _first_child(tree.root_node, "package_clause")
        if clause is None:
            raise BuildContextError(f"{filename}: expected 'package'")
        header = FileHeader(package_name=converter.package_name(clause))
        doc = converter.doc_for(clause)
        if doc is not None:
            header.doc = doc.text()
        for child in tree.root_node.named_children:
            if child.type == "import_declaration":
                header.imports.extend(spec.path for spec in converter.import_specs(child))
        return header


def _describe_error(root: Node) -> str:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            what = f"missing {node.type}" if node.is_missing else "syntax error"
            return f"{row + 1}:{column + 1}: {what}"
        stack.extend(reversed(node.children))
    return "syntax error"


def _first_child(node: Node, kind: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == kind:
            return child
    return None


def _iter_nodes(node: Node, kind: str) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == kind:
            yield current
        stack.extend(reversed(current.children))


class _Converter:
    """Turns one tree-sitter tree into ast nodes for a registered file."""

    def __init__(self, token_file: TokenFile) -> None:
        self._file = token_file
        self._data = token_file.data
        self._groups: List[CommentGroup] = []
        self._group_ends: List[int] = []
        self._comments_loaded = False

    def file(self, root: Node) -> File:
        clause = _first_child(root, "package_clause")
        if clause is None:
            raise ParseError(self._file.name, "expected 'package'")
        parsed = File(
            name=self._file.name,
            package_name=self.package_name(clause),
            pos=self._pos(root.start_byte),
            end=self._pos(root.end_byte),
            doc=self.doc_for(clause),
        )
        for child in root.named_children:
            if child.type == "import_declaration":
                specs = self.import_specs(child)
                parsed.imports.extend(specs)
                parsed.decls.append(self._gen_decl(child, list(specs)))
            elif child.type in _DECL_TOKENS:
                parsed.decls.append(self._gen_decl(child, self._value_or_type_specs(child)))
            elif child.type in ("function_declaration", "method_declaration"):
                parsed.decls.append(self._func_decl(child))
        parsed.comments = list(self._comment_groups(root))
        return parsed

    def package_name(self, clause: Node) -> str:
        for child in clause.named_children:
            if child.type in ("package_identifier", "identifier"):
                return self._text(child)
        raise BuildContextError(f"{self._file.name}: expected package name")

    def import_specs(self, decl: Node) -> List[ImportSpec]:
        specs: List[ImportSpec] = []
        for node in self._specs(decl):
            path_node = node.child_by_field_name("path")
            if path_node is None:
                continue
            name_node = node.child_by_field_name("name")
            specs.append(
                ImportSpec(
                    path=self._text(path_node)[1:-1],
                    name=self._text(name_node) if name_node is not None else None,
                    pos=self._pos(node.start_byte),
                    end=self._pos(node.end_byte),
                )
            )
        return specs

    def doc_for(self, node: Node) -> Optional[CommentGroup]:
        """Return the comment group ending on the line right above ``node``."""
        self._load_comments(node)
        index = bisect_right(self._group_ends, node.start_byte) - 1
        if index < 0:
            return None
        group = self._groups[index]
        if group.trailing:
            return None
        gap = self._data[self._file.offset(group.end) : node.start_byte]
        if gap.strip() or gap.count(b"\n") != 1:
            return None
        return group

    # Declarations -----------------------------------------------------

    def _specs(self, decl: Node) -> Iterator[Node]:
        kinds = _SPEC_KINDS[decl.type]
        for child in decl.named_children:
            if child.type in kinds:
                yield child
            elif child.type.endswith("_list"):
                for nested in child.named_children:
                    if nested.type in kinds:
                        yield nested

    def _gen_decl(self, node: Node, specs: list) -> GenDecl:
        lparen = any(child.type == "(" for child in node.children) or any(
            child.type.endswith("_list") for child in node.named_children
        )
        return GenDecl(
            tok=_DECL_TOKENS[node.type],
            specs=specs,
            pos=self._pos(node.start_byte),
            end=self._pos(node.end_byte),
            lparen=lparen,
            doc=self.doc_for(node),
        )

    def _value_or_type_specs(self, decl: Node) -> list:
        specs: list = []
        for node in self._specs(decl):
            if node.type in ("type_spec", "type_alias"):
                name_node = node.child_by_field_name("name")
                specs.append(
                    TypeSpec(
                        name=self._text(name_node) if name_node is not None else "",
                        pos=self._pos(node.start_byte),
                        end=self._pos(node.end_byte),
                        is_alias=node.type == "type_alias",
                        doc=self.doc_for(node),
                    )
                )
                continue
            type_node = node.child_by_field_name("type")
            name_nodes = node.children_by_field_name("name")
            specs.append(
                ValueSpec(
                    names=[self._text(name) for name in name_nodes],
                    pos=self._pos(node.start_byte),
                    end=self._pos(node.end_byte),
                    type=self._base_type(type_node) if type_node is not None else None,
                    has_type=type_node is not None,
                    has_value=node.child_by_field_name("value") is not None,
                    doc=self.doc_for(node),
                    name_spans=[
                        (self._pos(name.start_byte), self._pos(name.end_byte)) for name in name_nodes
                    ],
                )
            )
        return specs

    def _func_decl(self, node: Node) -> FuncDecl:
        name_node = node.child_by_field_name("name")
        decl = FuncDecl(
            name=self._text(name_node) if name_node is not None else "",
            pos=self._pos(node.start_byte),
            end=self._pos(node.end_byte),
            doc=self.doc_for(node),
            is_method=node.type == "method_declaration",
        )
        type_params = node.child_by_field_name("type_parameters")
        if type_params is not None:
            for param in type_params.named_children:
                decl.type_params.extend(
                    self._text(name) for name in param.children_by_field_name("name")
                )
        receiver = node.child_by_field_name("receiver")
        if receiver is not None:
            for param in receiver.named_children:
                if param.type in _PARAM_KINDS:
                    type_node = param.child_by_field_name("type")
                    decl.recv = self._base_type(type_node) if type_node is not None else None
                    break
        params = node.child_by_field_name("parameters")
        if params is not None:
            decl.num_params = sum(1 for p in params.named_children if p.type in _PARAM_KINDS)
        result = node.child_by_field_name("result")
        if result is not None:
            if result.type == "parameter_list":
                for param in result.named_children:
                    if param.type in _PARAM_KINDS:
                        type_node = param.child_by_field_name("type")
                        decl.results.append(self._result_type(type_node))
            else:
                decl.results.append(self._result_type(result))
        body = node.child_by_field_name("body")
        if body is not None:
            decl.body = Block(pos=self._pos(body.start_byte), end=self._pos(body.end_byte))
        return decl

    def _result_type(self, node: Optional[Node]) -> Optional[TypeRef]:
        if node is None:
            return None
        if node.type in ("slice_type", "array_type"):
            node = node.child_by_field_name("element")
            if node is None:
                return None
        return self._base_type(node)

    def _base_type(self, node: Node) -> Optional[TypeRef]:
        while node.type in ("pointer_type", "parenthesized_type"):
            children = node.named_children
            if not children:
                return None
            node = children[-1]
        if node.type == "generic_type":
            inner = node.child_by_field_name("type")
            if inner is None:
                return None
            node = inner
        if node.type == "type_identifier":
            return TypeRef(self._text(node))
        if node.type == "qualified_type":
            package = node.child_by_field_name("package")
            name = node.child_by_field_name("name")
            if package is None or name is None:
                return None
            return TypeRef(self._text(name), package=self._text(package))
        return None

    # Comments ---------------------------------------------------------

    def _load_comments(self, node: Node) -> None:
        if self._comments_loaded:
            return
        root = node
        while root.parent is not None:
            root = root.parent
        self._groups = self._group_comments(root)
        self._group_ends = [self._file.offset(group.end) for group in self._groups]
        self._comments_loaded = True

    def _comment_groups(self, root: Node) -> Iterator[CommentGroup]:
        self._load_comments(root)
        return iter(self._groups)

    def _group_comments(self, root: Node) -> List[CommentGroup]:
        groups: List[CommentGroup] = []
        current: Optional[CommentGroup] = None
        for node in _iter_nodes(root, "comment"):
            comment = Comment(
                pos=self._pos(node.start_byte),
                end=self._pos(node.end_byte),
                text=self._text(node),
            )
            trailing = self._is_trailing(node.start_byte)
            if current is not None and not trailing and not current.trailing:
                gap = self._data[self._file.offset(current.end) : node.start_byte]
                if not gap.strip() and gap.count(b"\n") <= 1:
                    current.comments.append(comment)
                    continue
            current = CommentGroup(comments=[comment], trailing=trailing)
            groups.append(current)
        return groups

    def _is_trailing(self, start: int) -> bool:
        line_start = self._data.rfind(b"\n", 0, start) + 1
        return bool(self._data[line_start:start].strip())

    # Helpers ----------------------------------------------------------

    def _pos(self, offset: int) -> int:
        return self._file.pos(offset)

    def _text(self, node: Node) -> str:
        return self._data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


__all__ = ["FileHeader", "GoParser", "go_language"]
