"""Rendering of the package doc comment."""

from __future__ import annotations

from .comment import to_html


def render_package_doc(text: str) -> str:
    """Render ``text`` as HTML with its opening paragraph emphasized."""
    html = to_html(text.rstrip(" \t\n\r"))
    # Highlight the first sentence.
    html = html.replace("<p>", "<p><b>", 1)
    return html.replace("</p>", "</b></p>", 1)


__all__ = ["render_package_doc"]
