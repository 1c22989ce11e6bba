"""Conditional compilation constraints: file names, ``//go:build`` and ``// +build``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

KNOWN_OS = frozenset(
    "aix android darwin dragonfly freebsd hurd illumos ios js linux nacl netbsd "
    "openbsd plan9 solaris wasip1 windows zos".split()
)

KNOWN_ARCH = frozenset(
    "386 amd64 amd64p32 arm armbe arm64 arm64be loong64 mips mipsle mips64 mips64le "
    "mips64p32 mips64p32le ppc ppc64 ppc64le riscv riscv64 s390 s390x sparc sparc64 "
    "wasm".split()
)

UNIX_OS = frozenset(
    "aix android darwin dragonfly freebsd hurd illumos ios linux netbsd openbsd "
    "solaris".split()
)

TagMatcher = Callable[[str], bool]

_TOKEN_RX = re.compile(r"\s*(\|\||&&|!|\(|\)|[A-Za-z0-9_.]+)")
_TAG_RX = re.compile(r"^[A-Za-z0-9_.]+$")


class ConstraintSyntaxError(ValueError):
    """Raised when a build constraint line cannot be parsed."""


class Expr:
    """A boolean build constraint expression."""

    def eval(self, ok: TagMatcher) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError


@dataclass(frozen=True)
class TagExpr(Expr):
    tag: str

    def eval(self, ok: TagMatcher) -> bool:
        return ok(self.tag)


@dataclass(frozen=True)
class NotExpr(Expr):
    operand: Expr

    def eval(self, ok: TagMatcher) -> bool:
        return not self.operand.eval(ok)


@dataclass(frozen=True)
class AndExpr(Expr):
    left: Expr
    right: Expr

    def eval(self, ok: TagMatcher) -> bool:
        return self.left.eval(ok) and self.right.eval(ok)


@dataclass(frozen=True)
class OrExpr(Expr):
    left: Expr
    right: Expr

    def eval(self, ok: TagMatcher) -> bool:
        return self.left.eval(ok) or self.right.eval(ok)


class _ExprParser:
    def __init__(self, text: str) -> None:
        self._tokens = self._tokenize(text)
        self._index = 0

    @staticmethod
    def _tokenize(text: str) -> List[str]:
        tokens: List[str] = []
        position = 0
        while position < len(text):
            if text[position:].strip() == "":
                break
            match = _TOKEN_RX.match(text, position)
            if match is None:
                raise ConstraintSyntaxError(f"unexpected character in build constraint: {text[position:]!r}")
            tokens.append(match.group(1))
            position = match.end()
        return tokens

    def parse(self) -> Expr:
        if not self._tokens:
            raise ConstraintSyntaxError("empty build constraint")
        expr = self._or()
        if self._index != len(self._tokens):
            raise ConstraintSyntaxError(f"unexpected token {self._tokens[self._index]!r}")
        return expr

    def _peek(self) -> Optional[str]:
        return self._tokens[self._index] if self._index < len(self._tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise ConstraintSyntaxError("unexpected end of build constraint")
        self._index += 1
        return token

    def _or(self) -> Expr:
        expr = self._and()
        while self._peek() == "||":
            self._next()
            expr = OrExpr(expr, self._and())
        return expr

    def _and(self) -> Expr:
        expr = self._not()
        while self._peek() == "&&":
            self._next()
            expr = AndExpr(expr, self._not())
        return expr

    def _not(self) -> Expr:
        if self._peek() == "!":
            self._next()
            return NotExpr(self._not())
        return self._atom()

    def _atom(self) -> Expr:
        token = self._next()
        if token == "(":
            expr = self._or()
            if self._next() != ")":
                raise ConstraintSyntaxError("missing ) in build constraint")
            return expr
        if not _TAG_RX.match(token):
            raise ConstraintSyntaxError(f"unexpected token {token!r}")
        return TagExpr(token)


def is_go_build(line: str) -> bool:
    line = line.strip()
    return line.startswith("//go:build") and (len(line) == len("//go:build") or line[10] in " \t")


def is_plus_build(line: str) -> bool:
    line = line.strip()
    if not line.startswith("//"):
        return False
    fields = line[2:].split()
    return bool(fields) and fields[0] == "+build"


def parse_go_build(line: str) -> Expr:
    """Parse a ``//go:build`` line."""
    if not is_go_build(line):
        raise ConstraintSyntaxError(f"not a //go:build line: {line!r}")
    return _ExprParser(line.strip()[len("//go:build") :]).parse()


def parse_plus_build(line: str) -> Expr:
    """Parse a legacy ``// +build`` line: spaces are OR, commas are AND."""
    if not is_plus_build(line):
        raise ConstraintSyntaxError(f"not a // +build line: {line!r}")
    fields = line.strip()[2:].split()[1:]
    expr: Optional[Expr] = None
    for field in fields:
        term: Optional[Expr] = None
        for element in field.split(","):
            negate = element.startswith("!")
            tag = element[1:] if negate else element
            if not tag or not _TAG_RX.match(tag):
                raise ConstraintSyntaxError(f"invalid // +build term {element!r}")
            atom: Expr = NotExpr(TagExpr(tag)) if negate else TagExpr(tag)
            term = atom if term is None else AndExpr(term, atom)
        if term is not None:
            expr = term if expr is None else OrExpr(expr, term)
    if expr is None:
        raise ConstraintSyntaxError("empty // +build line")
    return expr


def scan_header(data: bytes) -> Tuple[List[str], Optional[str]]:
    """Scan the comment header that precedes the package clause.

    Returns the lines up to the last blank line of the leading comment run
    (where ``// +build`` lines count) and the ``//go:build`` line, which may
    sit anywhere in the header, including after a ``/* */`` block.
    """
    lines = data.decode("utf-8", errors="replace").split("\n")
    end = 0
    ended = False
    in_block = False
    go_build: Optional[str] = None
    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line and not ended:
            end = index
            continue
        if not line.startswith("//"):
            ended = True
        if not in_block and is_go_build(line):
            if go_build is not None:
                raise ConstraintSyntaxError("multiple //go:build comments")
            go_build = line
        while line:
            if in_block:
                close = line.find("*/")
                if close < 0:
                    break
                in_block = False
                line = line[close + 2 :].strip()
                continue
            if line.startswith("//"):
                break
            if line.startswith("/*"):
                in_block = True
                line = line[2:].strip()
                continue
            return lines[:end], go_build
    return lines[:end], go_build


def file_constraints(data: bytes) -> Tuple[Optional[str], List[str]]:
    """Return the ``//go:build`` line (if any) and the ``// +build`` lines of a file."""
    trimmed, go_build = scan_header(data)
    plus_build = [line.strip() for line in trimmed if is_plus_build(line)]
    return go_build, plus_build


def should_build(data: bytes, ok: TagMatcher) -> bool:
    """Report whether a file's content constraints are satisfied.

    ``//go:build`` wins over ``// +build`` lines when both are present.
    """
    go_build, plus_build = file_constraints(data)
    if go_build is not None:
        return parse_go_build(go_build).eval(ok)
    matched = True
    for line in plus_build:
        if not parse_plus_build(line).eval(ok):
            matched = False
    return matched


def good_os_arch_file(name: str, ok: TagMatcher) -> bool:
    """Report whether the ``_GOOS``/``_GOARCH`` suffixes of ``name`` match."""
    name = name.split(".", 1)[0]
    index = name.find("_")
    if index < 0:
        return True
    parts: Sequence[str] = name[index:].split("_")
    if parts and parts[-1] == "test":
        parts = parts[:-1]
    count = len(parts)
    if count >= 2 and parts[count - 2] in KNOWN_OS and parts[count - 1] in KNOWN_ARCH:
        return ok(parts[count - 2]) and ok(parts[count - 1])
    if count >= 1 and (parts[count - 1] in KNOWN_OS or parts[count - 1] in KNOWN_ARCH):
        return ok(parts[count - 1])
    return True


__all__ = [
    "ConstraintSyntaxError",
    "Expr",
    "KNOWN_ARCH",
    "KNOWN_OS",
    "UNIX_OS",
    "file_constraints",
    "good_os_arch_file",
    "scan_header",
    "is_go_build",
    "is_plus_build",
    "parse_go_build",
    "parse_plus_build",
    "should_build",
]
