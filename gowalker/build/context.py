"""Resolution of a package directory's buildable files for one environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..errors import BuildContextError, MultiplePackageError, NoGoError
from ..syntax.parser import GoParser
from ..vfs import VirtualSourceTree
from .constraint import UNIX_OS, ConstraintSyntaxError, good_os_arch_file, should_build


@dataclass
class BuildPackage:
    """Files and imports of a package directory under one environment."""

    dir: str
    name: str = ""
    doc: str = ""
    go_files: List[str] = field(default_factory=list)
    cgo_files: List[str] = field(default_factory=list)
    test_go_files: List[str] = field(default_factory=list)
    xtest_go_files: List[str] = field(default_factory=list)
    ignored_go_files: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)
    xtest_imports: List[str] = field(default_factory=list)

    def is_command(self) -> bool:
        return self.name == "main"

    def source_files(self) -> List[str]:
        return self.go_files + self.cgo_files

    def test_files(self) -> List[str]:
        return self.test_go_files + self.xtest_go_files


@dataclass
class BuildContext:
    """One (GOOS, GOARCH) environment evaluated against a virtual tree."""

    goos: str
    goarch: str
    tree: VirtualSourceTree
    cgo_enabled: bool = True
    compiler: str = "gc"
    release_tags: Sequence[str] = ()
    build_tags: Sequence[str] = ()
    parser: Optional[GoParser] = None

    def match_tag(self, tag: str) -> bool:
        if tag == "cgo":
            return self.cgo_enabled
        if tag in (self.goos, self.goarch, self.compiler):
            return True
        if tag == "linux" and self.goos == "android":
            return True
        if tag == "solaris" and self.goos == "illumos":
            return True
        if tag == "darwin" and self.goos == "ios":
            return True
        if tag == "unix" and self.goos in UNIX_OS:
            return True
        return tag in self.build_tags or tag in self.release_tags

    def import_dir(self, directory: str) -> BuildPackage:
        """Classify the files of ``directory``.

        Raises :class:`NoGoError` (carrying the partial result) when nothing
        is buildable, and :class:`BuildContextError` for any other failure.
        """
        if not self.tree.is_dir(directory):
            raise BuildContextError(f"cannot find package in {directory}")
        parser = self.parser or GoParser()
        pkg = BuildPackage(dir=directory)
        imports: Set[str] = set()
        test_imports: Set[str] = set()
        xtest_imports: Set[str] = set()
        first_file = ""

        for src in self.tree.read_dir(directory):
            if src.is_dir():
                continue
            name = src.name
            if not name.endswith(".go") or name.startswith(("_", ".")):
                continue
            if not good_os_arch_file(name, self.match_tag):
                pkg.ignored_go_files.append(name)
                continue

            with self.tree.open_file(self.tree.join(directory, name)) as handle:
                data = handle.read()
            try:
                buildable = should_build(data, self.match_tag)
            except ConstraintSyntaxError as exc:
                raise BuildContextError(f"{name}: {exc}") from exc
            if not buildable:
                pkg.ignored_go_files.append(name)
                continue

            header = parser.parse_header(name, data)
            package_name = header.package_name
            if package_name == "documentation":
                pkg.ignored_go_files.append(name)
                continue

            is_test = name.endswith("_test.go")
            is_xtest = False
            if is_test and package_name.endswith("_test") and pkg.name != package_name:
                is_xtest = True
                package_name = package_name[: -len("_test")]

            if not pkg.name:
                pkg.name = package_name
                first_file = name
            elif package_name != pkg.name:
                raise MultiplePackageError(
                    directory, (pkg.name, package_name), (first_file, name)
                )

            if header.doc and not pkg.doc and not is_test:
                pkg.doc = header.doc

            is_cgo = "C" in header.imports
            if is_cgo and is_test:
                raise BuildContextError(f"{name}: use of cgo in test not supported")

            if is_xtest:
                pkg.xtest_go_files.append(name)
                xtest_imports.update(header.imports)
            elif is_test:
                pkg.test_go_files.append(name)
                test_imports.update(header.imports)
            elif is_cgo and not self.cgo_enabled:
                pkg.ignored_go_files.append(name)
            else:
                if is_cgo:
                    pkg.cgo_files.append(name)
                else:
                    pkg.go_files.append(name)
                imports.update(header.imports)

        pkg.imports = sorted(imports)
        pkg.test_imports = sorted(test_imports)
        pkg.xtest_imports = sorted(xtest_imports)

        if not (pkg.go_files or pkg.cgo_files or pkg.test_go_files or pkg.xtest_go_files):
            raise NoGoError(directory, pkg)
        return pkg


__all__ = ["BuildContext", "BuildPackage"]
