"""Go syntax trees built on tree-sitter."""

from .ast import CommentGroup, File, FuncDecl, GenDecl, Package, PackageObject, TypeRef
from .builder import SyntaxTreeBuilder
from .parser import FileHeader, GoParser
from .resolver import StubSymbolResolver, guess_package_name
from .token import FileSet, Position

__all__ = [
    "CommentGroup",
    "File",
    "FileHeader",
    "FileSet",
    "FuncDecl",
    "GenDecl",
    "GoParser",
    "Package",
    "PackageObject",
    "Position",
    "StubSymbolResolver",
    "SyntaxTreeBuilder",
    "TypeRef",
    "guess_package_name",
]
