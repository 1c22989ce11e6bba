"""Evaluates a package under several target environments."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..errors import BuildContextError, NoGoError
from ..logging import get_logger
from ..syntax.parser import GoParser
from ..vfs import VirtualSourceTree
from .context import BuildContext, BuildPackage

logger = get_logger("build")


class MultiEnvironmentImporter:
    """Resolves the buildable file set once per (GOOS, GOARCH) pair.

    The result of the last environment is the one returned; earlier
    environments only have to resolve without a hard error. Results are not
    unioned across environments.
    """

    def __init__(
        self,
        tree: VirtualSourceTree,
        environments: Sequence[Tuple[str, str]],
        *,
        release_tags: Sequence[str] = (),
        build_tags: Sequence[str] = (),
        parser: Optional[GoParser] = None,
    ) -> None:
        if not environments:
            raise ValueError("at least one build environment is required")
        self._tree = tree
        self._environments = list(environments)
        self._release_tags = tuple(release_tags)
        self._build_tags = tuple(build_tags)
        self._parser = parser or GoParser()

    def import_package(self, import_path: str) -> BuildPackage:
        resolved = [
            self._import_for(import_path, goos, goarch) for goos, goarch in self._environments
        ]
        return resolved[-1]

    def _import_for(self, import_path: str, goos: str, goarch: str) -> BuildPackage:
        context = BuildContext(
            goos=goos,
            goarch=goarch,
            tree=self._tree,
            cgo_enabled=True,
            release_tags=self._release_tags,
            build_tags=self._build_tags,
            parser=self._parser,
        )
        try:
            package = context.import_dir(import_path)
        except NoGoError as exc:
            # Still want the directory information.
            logger.debug("No buildable Go files for %s/%s in %s", goos, goarch, import_path)
            return exc.package
        except BuildContextError as exc:
            raise BuildContextError(f"import {import_path} ({goos}/{goarch}): {exc}") from exc
        logger.debug(
            "Resolved %s for %s/%s: %d file(s), %d import(s)",
            import_path,
            goos,
            goarch,
            len(package.source_files()),
            len(package.imports),
        )
        return package


__all__ = ["MultiEnvironmentImporter"]
