from __future__ import annotations

import pytest

from gowalker.syntax.parser import GoParser
from gowalker.syntax.token import FileSet
from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder() -> SourceBuilder:
    """Provide an empty in-memory package."""
    return SourceBuilder()


@pytest.fixture
def fset() -> FileSet:
    return FileSet()


@pytest.fixture
def go_parser() -> GoParser:
    return GoParser()
