"""Core data models shared across gowalker components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Dict, List


class WalkDepth(IntEnum):
    """How far a build goes."""

    IMPORTS = 0
    ALL = 1


class WalkType(Enum):
    """Where the walker gets its source files from."""

    LOCAL = "local"
    MEMORY = "memory"
    ZIP = "zip"
    TARGZ = "targz"
    HTTP = "http"


class WalkMode(IntFlag):
    """Optional work a build may skip."""

    ALL = 1
    NO_README = 2
    NO_EXAMPLE = 4


@dataclass(frozen=True)
class Source:
    """A named, immutable file buffer handed to the walker."""

    name: str
    data: bytes
    browse_url: str = ""
    tag: str = ""

    def is_dir(self) -> bool:
        return False

    def size(self) -> int:
        return len(self.data)


@dataclass
class WalkRequest:
    """Describes a single package build."""

    import_path: str
    sources: List[Source] = field(default_factory=list)
    depth: WalkDepth = WalkDepth.ALL
    walk_type: WalkType = WalkType.MEMORY
    mode: WalkMode = WalkMode.ALL
    tag: str = ""
    root_path: str = ""
    build_all: bool = False


@dataclass
class Value:
    """A documented const or var group."""

    decl: str
    url: str
    doc: str


@dataclass
class Func:
    """A documented function or method."""

    decl: str
    url: str
    doc: str
    name: str
    code: str


@dataclass
class Type:
    """A documented type with its associated declarations."""

    doc: str
    name: str
    decl: str
    url: str
    code: str = ""
    consts: List[Value] = field(default_factory=list)
    vars: List[Value] = field(default_factory=list)
    funcs: List[Func] = field(default_factory=list)
    ifuncs: List[Func] = field(default_factory=list)
    methods: List[Func] = field(default_factory=list)
    imethods: List[Func] = field(default_factory=list)


@dataclass
class Example:
    """A runnable example found in a test file."""

    name: str
    doc: str
    code: str
    output: str = ""


@dataclass
class Package:
    """Documentation record for one package, ready for rendering."""

    import_path: str
    tag: str = ""
    synopsis: str = ""
    doc: str = ""
    is_cmd: bool = False
    is_cgo: bool = False
    imports: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)
    import_paths: str = ""
    import_num: int = 0
    readme: Dict[str, bytes] = field(default_factory=dict)
    consts: List[Value] = field(default_factory=list)
    vars: List[Value] = field(default_factory=list)
    funcs: List[Func] = field(default_factory=list)
    ifuncs: List[Func] = field(default_factory=list)
    types: List[Type] = field(default_factory=list)
    itypes: List[Type] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    test_files: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the package."""
        payload = asdict(self)
        payload["readme"] = {
            locale: body.decode("utf-8", errors="replace")
            for locale, body in self.readme.items()
        }
        return payload


__all__ = [
    "Example",
    "Func",
    "Package",
    "Source",
    "Type",
    "Value",
    "WalkDepth",
    "WalkMode",
    "WalkRequest",
    "WalkType",
]
