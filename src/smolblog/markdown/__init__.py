"""Markdown conversion for smolblog via patitas.

Converts the Markdown source a page references into HTML for its
template, and backs the ``renderMarkdown()`` template helper.

Basic usage::

    from smolblog.markdown import MarkdownRenderer, convert_file

    md = MarkdownRenderer()
    html = convert_file("content/about.md", md)

Requires ``patitas``::

    pip install patitas
"""

from smolblog.markdown.errors import MarkdownNotInstalledError
from smolblog.markdown.renderer import MarkdownRenderer, convert_file

__all__ = [
    "MarkdownNotInstalledError",
    "MarkdownRenderer",
    "convert_file",
]
