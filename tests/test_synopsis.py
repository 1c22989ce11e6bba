"""Tests for package synopsis extraction."""

from __future__ import annotations

import pytest

from gowalker.doc.synopsis import MAX_SYNOPSIS_LENGTH, synopsis


def test_synopsis_stops_at_first_sentence() -> None:
    text = "Package demo does things.\nIt also does other things.\n"
    assert synopsis(text) == "Package demo does things."


def test_synopsis_keeps_periods_not_followed_by_space() -> None:
    assert synopsis("Package semver parses v1.2.3 strings. More.") == (
        "Package semver parses v1.2.3 strings."
    )


def test_synopsis_collapses_whitespace_in_first_paragraph() -> None:
    text = "Package   demo\n\tdoes\n  things\n\nSecond paragraph."
    assert synopsis(text) == "Package demo does things"


def test_synopsis_without_period_returns_whole_first_paragraph() -> None:
    text = "Package demo has no sentence end\nat all"
    assert synopsis(text) == "Package demo has no sentence end at all"


def test_synopsis_truncates_long_text_on_word_boundary() -> None:
    words = " ".join(["word"] * 100)
    result = synopsis(words)
    assert result.endswith(" ...")
    body = result[: -len(" ...")]
    assert len(body) <= MAX_SYNOPSIS_LENGTH
    assert body.split(" ") == ["word"] * len(body.split(" "))


def test_synopsis_of_exactly_max_length_is_not_truncated() -> None:
    text = "a" * MAX_SYNOPSIS_LENGTH
    assert synopsis(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "Copyright 2020 The Authors. All rights reserved.",
        "COPYRIGHT 2020 ACME.",
        "Autogenerated by Thrift Compiler (0.9.0)",
        "Automatically generated by the tool.",
        "Auto-generated by protoc. Do not edit.",
        'THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY.',
        "TODO: write docs.",
        "vim: set ts=4.",
    ],
)
def test_synopsis_rejects_boilerplate(text: str) -> None:
    assert synopsis(text) == ""


@pytest.mark.parametrize("text", ["# Heading", "+build linux", "* starred", "", "   \n"])
def test_synopsis_rejects_leading_punctuation_and_empty_text(text: str) -> None:
    assert synopsis(text) == ""
