"""Markdown layer error hierarchy."""

from smolblog.errors import MarkdownConversionError


class MarkdownNotInstalledError(MarkdownConversionError):
    """Raised when patitas is not installed."""
