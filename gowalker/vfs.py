"""In-memory source tree presented as a single package directory."""

from __future__ import annotations

import errno
import io
import os
import posixpath
from typing import BinaryIO, List, Mapping

from .models import Source


class VirtualSourceTree:
    """Answers directory listings and file opens for one flat package root.

    Only the configured root exists. Listing any other directory is a
    contract violation rather than a recoverable error, because the tree only
    ever models one package directory.
    """

    def __init__(self, root: str, files: Mapping[str, Source]) -> None:
        self.root = root
        self._files = dict(files)

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __len__(self) -> int:
        return len(self._files)

    def source(self, name: str) -> Source:
        return self._files[name]

    def read_dir(self, directory: str) -> List[Source]:
        if directory != self.root:
            raise AssertionError(f"unexpected directory listing: {directory!r}")
        return [self._files[name] for name in sorted(self._files)]

    def open_file(self, path: str) -> BinaryIO:
        prefix = self.root + "/"
        if path.startswith(prefix):
            src = self._files.get(path[len(prefix) :])
            if src is not None:
                return io.BytesIO(src.data)
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    def join(self, *elements: str) -> str:
        return posixpath.join(*elements)

    def is_dir(self, path: str) -> bool:
        return True


__all__ = ["VirtualSourceTree"]
