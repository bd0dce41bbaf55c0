"""Core markdown renderer wrapping patitas.

The converter is an opaque collaborator: bytes in, HTML out. Any
failure is surfaced as ``MarkdownConversionError`` so the render
pipeline can abort the page or request that asked for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from smolblog.errors import AssetReadError, MarkdownConversionError
from smolblog.markdown.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from patitas import Markdown


class MarkdownRenderer:
    """Render Markdown source to HTML via patitas.

    Wraps ``patitas.Markdown`` with a stable interface that smolblog
    controls. Every call does a full parse+render; there is no cache.

    Args:
        plugins: Patitas plugins to enable (default: all).
        highlight: Enable syntax highlighting for fenced code blocks.
    """

    def __init__(
        self,
        *,
        plugins: list[str] | tuple[str, ...] | None = None,
        highlight: bool = False,
    ) -> None:
        self._md: Markdown = _get_markdown(plugins=plugins, highlight=highlight)

    def render(self, source: str) -> str:
        """Render Markdown source to an HTML string."""
        if not source:
            return ""
        return self._md(source)

    def convert(self, source: bytes, path: str | Path | None = None) -> str:
        """Decode UTF-8 *source* bytes and render them.

        Raises:
            MarkdownConversionError: The bytes are not UTF-8 or patitas failed.
        """
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"error converting markdown {str(path)!r}: {exc}"
            raise MarkdownConversionError(msg, path) from exc

        try:
            return self.render(text)
        except Exception as exc:
            msg = f"error converting markdown {str(path)!r}: {exc}"
            raise MarkdownConversionError(msg, path) from exc


def convert_file(path: str | Path, renderer: MarkdownRenderer) -> str:
    """Read the Markdown file at *path* and convert it to HTML.

    Raises:
        AssetReadError: The file is missing or unreadable.
        MarkdownConversionError: The contents could not be converted.
    """
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        msg = f"error opening markdown {str(path)!r}: {exc}"
        raise AssetReadError(msg, path) from exc
    return renderer.convert(source, path)


def _get_markdown(
    *,
    plugins: list[str] | tuple[str, ...] | None,
    highlight: bool,
) -> Markdown:
    """Create a patitas Markdown instance, raising a clear error if missing."""
    try:
        from patitas import Markdown
    except ImportError:
        msg = (
            "smolblog.markdown requires 'patitas' for Markdown rendering. "
            "Install with: pip install patitas"
        )
        raise MarkdownNotInstalledError(msg) from None

    return Markdown(plugins=list(plugins) if plugins else ["all"], highlight=highlight)
