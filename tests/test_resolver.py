"""Tests for placeholder import resolution and package merging."""

from __future__ import annotations

import pytest

from gowalker.models import Source
from gowalker.syntax.builder import SyntaxTreeBuilder
from gowalker.syntax.resolver import StubSymbolResolver, guess_package_name
from gowalker.syntax.token import FileSet


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("fmt", "fmt"),
        ("net/http", "http"),
        ("github.com/user/yaml.go", "yaml"),
        ("github.com/user/color-go", "color"),
        ("gopkg.in/go.uuid", "uuid"),
        ("github.com/user/go-sqlite3", "sqlite3"),
        ("code.google.com/p/biogo.bam", "bam"),
    ],
)
def test_guess_package_name_trims_decorations(path: str, expected: str) -> None:
    assert guess_package_name(path) == expected


def test_resolver_caches_one_object_per_path() -> None:
    resolver = StubSymbolResolver()
    first = resolver("net/http")
    assert resolver("net/http") is first
    assert first.name == "http"
    assert first.path == "net/http"
    assert set(resolver.imports) == {"net/http"}


def test_new_package_binds_imports_per_file() -> None:
    sources = {
        "a.go": Source("a.go", b'package demo\n\nimport (\n\t"fmt"\n\tgh "github.com/user/go-github"\n)\n'),
        "b.go": Source("b.go", b'package demo\n\nimport (\n\t_ "embed"\n\t. "strings"\n\t"fmt"\n)\n'),
    }
    builder = SyntaxTreeBuilder(FileSet())
    files = builder.parse_files(["a.go", "b.go"], sources)
    package = builder.new_package(files, StubSymbolResolver())

    assert package.name == "demo"
    assert sorted(package.imports) == ["embed", "fmt", "github.com/user/go-github", "strings"]

    a, b = files["a.go"], files["b.go"]
    assert set(a.import_scope) == {"fmt", "gh"}
    assert a.resolve_package("gh").path == "github.com/user/go-github"
    assert set(b.import_scope) == {"fmt"}
    assert [obj.path for obj in b.dot_imports] == ["strings"]
    # Placeholders are shared across files.
    assert a.resolve_package("fmt") is b.resolve_package("fmt")
