"""Documentation extraction from Go syntax trees."""

from .comment import to_html
from .examples import ExampleFormatter, RawExample, find_examples
from .printer import Printer
from .reader import Mode, PackageDoc, inclusion_mode, new_package_doc
from .render import render_package_doc
from .source import CodeExtractor
from .synopsis import synopsis

__all__ = [
    "CodeExtractor",
    "ExampleFormatter",
    "Mode",
    "PackageDoc",
    "Printer",
    "RawExample",
    "find_examples",
    "inclusion_mode",
    "new_package_doc",
    "render_package_doc",
    "synopsis",
    "to_html",
]
