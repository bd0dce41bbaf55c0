"""Smolblog exception hierarchy.

Shared across the manifest loader, template set builder, render pipeline,
and both front-ends so every module raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path


class SmolblogError(Exception):
    """Base for all smolblog-specific errors."""


class ConfigurationError(SmolblogError):
    """Raised when a site configuration or CLI combination is invalid."""


class _FileError(SmolblogError):
    """An error tied to one file on disk."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ManifestReadError(_FileError):
    """The manifest file could not be opened or read."""


class ManifestParseError(_FileError):
    """The manifest is not JSON, or its structure has the wrong shape."""


class LayoutParseError(_FileError):
    """A layout file is missing or contains a template syntax error."""


class AssetReadError(_FileError):
    """A static file or Markdown source is missing or unreadable."""


class MarkdownConversionError(_FileError):
    """Markdown source could not be decoded or converted to HTML."""


class TemplateExecutionError(SmolblogError):
    """A named template is undefined or failed while executing."""

    def __init__(self, message: str, template: str = "") -> None:
        super().__init__(message)
        self.template = template


class OutputWriteError(_FileError):
    """A directory or file could not be created during export."""


@dataclass(frozen=True, slots=True)
class HTTPError(SmolblogError):
    """An error that maps directly to an HTTP status code.

    Raised by the serving front-end and caught by its error pipeline,
    which turns it into a plain-text response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFoundError(HTTPError):
    """404: the request path is not a key of the manifest's ``routes``."""

    def __init__(self, path: str = "", detail: str = "") -> None:
        super().__init__(
            status=404,
            detail=detail or (f"No route for {path!r}" if path else "Not Found"),
        )


class MethodNotAllowedError(HTTPError):
    """405: only ``GET`` is served.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, method: str, allowed: frozenset[str] = frozenset({"GET"})) -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=f"Method {method} not allowed. Allowed methods: {allow_value}",
            headers=(("Allow", allow_value),),
        )
