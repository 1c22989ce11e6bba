"""Tests for build constraint evaluation."""

from __future__ import annotations

import pytest

from gowalker.build.constraint import (
    ConstraintSyntaxError,
    file_constraints,
    good_os_arch_file,
    parse_go_build,
    parse_plus_build,
    should_build,
)


def _tags(*names: str):
    enabled = set(names)
    return lambda tag: tag in enabled


@pytest.mark.parametrize(
    ("line", "tags", "expected"),
    [
        ("//go:build linux", ("linux",), True),
        ("//go:build linux", ("windows",), False),
        ("//go:build linux && amd64", ("linux", "amd64"), True),
        ("//go:build linux && amd64", ("linux", "arm64"), False),
        ("//go:build linux || darwin", ("darwin",), True),
        ("//go:build !windows", ("linux",), True),
        ("//go:build !windows", ("windows",), False),
        ("//go:build (linux || darwin) && !cgo", ("darwin", "cgo"), False),
        ("//go:build go1.18", ("go1.18",), True),
    ],
)
def test_go_build_expressions(line: str, tags: tuple, expected: bool) -> None:
    assert parse_go_build(line).eval(_tags(*tags)) is expected


@pytest.mark.parametrize("line", ["//go:build", "//go:build linux &&", "//go:build (linux", "//go:build a b"])
def test_go_build_syntax_errors(line: str) -> None:
    with pytest.raises(ConstraintSyntaxError):
        parse_go_build(line)


def test_plus_build_spaces_are_or_commas_are_and() -> None:
    expr = parse_plus_build("// +build linux,amd64 darwin,!cgo")
    assert expr.eval(_tags("linux", "amd64"))
    assert expr.eval(_tags("darwin"))
    assert not expr.eval(_tags("darwin", "cgo"))
    assert not expr.eval(_tags("linux"))


def test_header_stops_at_package_clause() -> None:
    data = b"// +build ignore\n\npackage demo\n\n//go:build linux\n"
    go_build, plus_build = file_constraints(data)
    assert go_build is None
    assert plus_build == ["// +build ignore"]


def test_plus_build_needs_a_blank_line_before_package() -> None:
    data = b"// +build ignore\npackage demo\n"
    assert file_constraints(data) == (None, [])
    assert should_build(data, _tags()) is True


def test_go_build_is_read_without_a_blank_line() -> None:
    data = b"//go:build ignore\npackage demo\n"
    assert file_constraints(data) == ("//go:build ignore", [])
    assert should_build(data, _tags()) is False


def test_go_build_after_block_comment_licence() -> None:
    data = b"/*\nCopyright 2020 X\n*/\n\n//go:build ignore\n\npackage main\n"
    assert file_constraints(data) == ("//go:build ignore", [])
    assert should_build(data, _tags("linux", "amd64")) is False


def test_plus_build_after_block_comment_is_ignored() -> None:
    data = b"/* licence */\n\n// +build ignore\n\npackage demo\n"
    assert file_constraints(data) == (None, [])
    assert should_build(data, _tags()) is True


def test_go_build_inside_block_comment_is_ignored() -> None:
    data = b"/*\n//go:build ignore\n*/\n\npackage demo\n"
    assert file_constraints(data) == (None, [])


def test_go_build_wins_over_plus_build() -> None:
    data = b"//go:build linux\n// +build windows\n\npackage demo\n"
    assert should_build(data, _tags("linux")) is True
    assert should_build(data, _tags("windows")) is False


def test_multiple_plus_build_lines_are_anded() -> None:
    data = b"// +build linux darwin\n// +build amd64\n\npackage demo\n"
    assert should_build(data, _tags("darwin", "amd64")) is True
    assert should_build(data, _tags("darwin", "arm64")) is False


def test_multiple_go_build_lines_are_rejected() -> None:
    data = b"//go:build linux\n//go:build amd64\n\npackage demo\n"
    with pytest.raises(ConstraintSyntaxError):
        should_build(data, _tags("linux", "amd64"))


@pytest.mark.parametrize(
    ("name", "tags", "expected"),
    [
        ("file.go", (), True),
        ("file_linux.go", ("linux",), True),
        ("file_linux.go", ("windows",), False),
        ("file_amd64.go", ("amd64",), True),
        ("file_windows_amd64.go", ("windows", "amd64"), True),
        ("file_windows_amd64.go", ("windows", "386"), False),
        ("file_linux_test.go", ("darwin",), False),
        ("linux.go", ("darwin",), True),
        ("file_other.go", (), True),
    ],
)
def test_file_name_constraints(name: str, tags: tuple, expected: bool) -> None:
    assert good_os_arch_file(name, _tags(*tags)) is expected
