"""Parses resolved files and merges them into one package tree."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

from ..logging import get_logger
from ..models import Source
from .ast import File, Package
from .parser import GoParser
from .resolver import StubSymbolResolver
from .token import FileSet

logger = get_logger("syntax")


class SyntaxTreeBuilder:
    """Parses the files of one build into a shared :class:`FileSet`."""

    def __init__(self, fset: FileSet, parser: Optional[GoParser] = None) -> None:
        self.fset = fset
        self._parser = parser or GoParser()

    def parse_files(self, names: Iterable[str], sources: Mapping[str, Source]) -> Dict[str, File]:
        """Parse ``names`` in order. The first failure raises :class:`ParseError`."""
        files: Dict[str, File] = {}
        for name in names:
            files[name] = self._parser.parse_file(self.fset, name, sources[name].data)
        logger.debug("Parsed %d file(s)", len(files))
        return files

    def new_package(
        self, files: Mapping[str, File], resolver: Optional[StubSymbolResolver] = None
    ) -> Package:
        """Merge per-file trees and bind every file's imports to package objects."""
        resolver = resolver or StubSymbolResolver()
        name = ""
        for filename in sorted(files):
            parsed = files[filename]
            if not name:
                name = parsed.package_name
            for spec in parsed.imports:
                obj = resolver(spec.path)
                if spec.name == "_":
                    continue
                if spec.name == ".":
                    parsed.dot_imports.append(obj)
                else:
                    parsed.import_scope[spec.name or obj.name] = obj
        return Package(name=name, files=dict(files), imports=resolver.imports)


__all__ = ["SyntaxTreeBuilder"]
