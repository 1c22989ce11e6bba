"""Builds package documentation from in-memory Go sources."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from .build.importer import MultiEnvironmentImporter
from .classify import DeclarationClassifier
from .config import WalkerConfig
from .doc.examples import ExampleFormatter, RawExample, find_examples
from .doc.printer import Printer
from .doc.reader import inclusion_mode, new_package_doc
from .doc.render import render_package_doc
from .doc.source import CodeExtractor
from .doc.synopsis import synopsis
from .errors import InvalidRootPathError, NoSourceFilesError, UnsupportedWalkTypeError
from .logging import get_logger
from .models import Package, Source, WalkDepth, WalkMode, WalkRequest, WalkType
from .syntax.builder import SyntaxTreeBuilder
from .syntax.parser import GoParser
from .syntax.resolver import StubSymbolResolver
from .syntax.token import FileSet
from .vfs import VirtualSourceTree

logger = get_logger("walker")

_CGO_IMPORTS = ("C", "os/user")


def is_cgo(imports: List[str]) -> bool:
    return any(name in _CGO_IMPORTS for name in imports)


class Walker:
    """Turns a :class:`WalkRequest` into a :class:`Package`.

    A walker holds configuration only. Every call to :meth:`build` owns its
    own source tree, position table and printer, so separate builds may run
    concurrently.
    """

    def __init__(self, config: Optional[WalkerConfig] = None) -> None:
        self.config = config or WalkerConfig()

    def build(self, request: WalkRequest) -> Package:
        return _Build(self.config, request).run()


class _Build:
    def __init__(self, config: WalkerConfig, request: WalkRequest) -> None:
        self.config = config
        self.request = request
        self.pdoc = Package(import_path=request.import_path, tag=request.tag)
        self.src_files: Dict[str, Source] = {}

    def run(self) -> Package:
        request = self.request
        if request.walk_type is WalkType.LOCAL:
            self._check_root_path()
            raise UnsupportedWalkTypeError("local walks are not supported yet")
        if request.walk_type is not WalkType.MEMORY:
            raise UnsupportedWalkTypeError(f"{request.walk_type.value} walks are not supported yet")

        self._collect_sources()
        parser = GoParser()
        tree = VirtualSourceTree(request.import_path, self.src_files)
        importer = MultiEnvironmentImporter(
            tree,
            self.config.environments,
            release_tags=self.config.release_tags,
            build_tags=self.config.build_tags,
            parser=parser,
        )
        bpkg = importer.import_package(request.import_path)

        pdoc = self.pdoc
        pdoc.is_cmd = bpkg.is_command()
        pdoc.synopsis = synopsis(bpkg.doc)
        pdoc.imports = bpkg.imports
        pdoc.is_cgo = is_cgo(bpkg.imports)
        pdoc.test_imports = bpkg.test_imports

        if request.depth <= WalkDepth.IMPORTS:
            return pdoc

        fset = FileSet()
        builder = SyntaxTreeBuilder(fset, parser)
        files = builder.parse_files(bpkg.source_files(), self.src_files)
        pdoc.files = list(files)
        apkg = builder.new_package(files, StubSymbolResolver())

        # Test files are parsed only to find examples.
        want_examples = not request.mode & WalkMode.NO_EXAMPLE
        raw_examples: List[RawExample] = []
        test_files = builder.parse_files(bpkg.test_files(), self.src_files)
        pdoc.test_files = list(test_files)
        if want_examples:
            for parsed in test_files.values():
                raw_examples.extend(find_examples(parsed))

        mode = inclusion_mode(
            request.import_path,
            build_all=request.build_all,
            builtin_import_path=self.config.builtin_import_path,
        )
        package_doc = new_package_doc(apkg, request.import_path, mode)
        pdoc.doc = render_package_doc(package_doc.doc)

        printer = Printer(fset)
        if want_examples:
            pdoc.examples = ExampleFormatter(printer).format_all(raw_examples)

        extractor = CodeExtractor(fset, self.src_files, self.config.line_format)
        classifier = DeclarationClassifier(
            printer,
            extractor,
            builtin=request.import_path == self.config.builtin_import_path,
        )
        pdoc.consts = classifier.values(package_doc.consts)
        pdoc.funcs, pdoc.ifuncs = classifier.funcs(package_doc.funcs)
        pdoc.types, pdoc.itypes = classifier.types(package_doc.types)
        pdoc.vars = classifier.values(package_doc.vars)
        pdoc.import_paths = "|".join(package_doc.imports)
        pdoc.import_num = len(package_doc.imports)

        logger.info(
            "Built %s: %d func(s), %d type(s), %d example(s)",
            request.import_path,
            len(pdoc.funcs) + len(pdoc.ifuncs),
            len(pdoc.types) + len(pdoc.itypes),
            len(pdoc.examples),
        )
        return pdoc

    def _check_root_path(self) -> None:
        root = self.request.root_path
        if not root:
            raise InvalidRootPathError("local walk: empty root path")
        if not Path(root).is_dir():
            raise InvalidRootPathError(f"local walk: {root} is not a directory")

    def _collect_sources(self) -> None:
        skip_readme = bool(self.request.tag) or bool(self.request.mode & WalkMode.NO_README)
        for src in self.request.sources:
            lowered = src.name.lower()
            if src.name.endswith(".go"):
                self.src_files[src.name] = src
            elif skip_readme:
                # Readmes of older versions are not collected.
                continue
            elif lowered.startswith(("readme_zh", "readme_cn")):
                self.pdoc.readme["zh"] = src.data
            elif lowered.startswith("readme"):
                self.pdoc.readme["en"] = src.data

        if not self.src_files:
            raise NoSourceFilesError(f"{self.request.import_path}: no Go source file")
        logger.debug("Collected %d Go source file(s)", len(self.src_files))


__all__ = ["Walker", "is_cgo"]
