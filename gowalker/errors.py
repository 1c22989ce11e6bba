"""Exceptions raised while walking a package."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .build.context import BuildPackage


class WalkError(RuntimeError):
    """Base class for failures that abort a package build."""


class UnsupportedWalkTypeError(WalkError):
    """Raised when the requested acquisition mode is not implemented."""


class InvalidRootPathError(WalkError):
    """Raised when a local walk is requested with an unusable root path."""


class NoSourceFilesError(WalkError):
    """Raised when the request carries no Go source file."""


class BuildContextError(WalkError):
    """Raised when the buildable file set of a directory cannot be resolved."""


class NoGoError(BuildContextError):
    """No buildable Go source files for the current environment.

    The partially resolved package is kept on ``package`` because callers still
    want the directory information.
    """

    def __init__(self, directory: str, package: Optional["BuildPackage"] = None) -> None:
        super().__init__(f"no buildable Go source files in {directory}")
        self.directory = directory
        self.package = package


class MultiplePackageError(BuildContextError):
    """Raised when files in one directory declare different packages."""

    def __init__(self, directory: str, packages: tuple[str, str], files: tuple[str, str]) -> None:
        super().__init__(
            f"found packages {packages[0]} ({files[0]}) and {packages[1]} ({files[1]}) in {directory}"
        )
        self.directory = directory
        self.packages = packages
        self.files = files


class ParseError(WalkError):
    """Raised when a Go file cannot be parsed."""

    def __init__(self, filename: str, message: str) -> None:
        super().__init__(f"{filename}: {message}")
        self.filename = filename


__all__ = [
    "BuildContextError",
    "InvalidRootPathError",
    "MultiplePackageError",
    "NoGoError",
    "NoSourceFilesError",
    "ParseError",
    "UnsupportedWalkTypeError",
    "WalkError",
]
