"""Placeholder resolution of imported packages.

The resolver performs no real linking. It only guesses the name an import
path is conventionally referred to by, so that qualified identifiers in the
merged tree can be told apart from local ones. Nothing about the imported
package itself is known or checked.
"""

from __future__ import annotations

from typing import Dict

from .ast import PackageObject

_TRIMMED_SUFFIXES = (".go", "-go")
_TRIMMED_PREFIXES = ("go.", "go-", "biogo.")


def guess_package_name(path: str) -> str:
    """Guess the package name of ``path`` from its last element."""
    name = path[path.rfind("/") + 1 :]
    for suffix in _TRIMMED_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    for prefix in _TRIMMED_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix) :]
    return name


class StubSymbolResolver:
    """Fabricates one placeholder package object per import path. Never fails."""

    def __init__(self) -> None:
        self._objects: Dict[str, PackageObject] = {}

    def __call__(self, path: str) -> PackageObject:
        obj = self._objects.get(path)
        if obj is None:
            obj = PackageObject(name=guess_package_name(path), path=path)
            self._objects[path] = obj
        return obj

    @property
    def imports(self) -> Dict[str, PackageObject]:
        return dict(self._objects)


__all__ = ["StubSymbolResolver", "guess_package_name"]
