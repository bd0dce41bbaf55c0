"""Site configuration.

SiteConfig is a frozen dataclass built once at startup. The CLI builds
one and overrides fields with ``dataclasses.replace``.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MANIFEST = "smolmanifest.json"
DEFAULT_OUTPUT = "dist"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(manifest="site/smolmanifest.json", port=8080)
    """

    # Manifest
    manifest: str | Path = DEFAULT_MANIFEST

    # Server
    host: str = "127.0.0.1"
    port: int = 4444
    io_timeout: float = 1.0  # Read/write deadline applied to every connection

    # Export / mirror
    output_dir: str | Path | None = None

    # Templates
    autoescape: bool = True
    default_template: str = "post"

    # Markdown
    markdown_plugins: tuple[str, ...] = ()  # Empty = every patitas plugin
    markdown_highlight: bool = False

    # Logging
    log_level: str = "info"

    @property
    def manifest_path(self) -> Path:
        """The manifest location as an absolute path."""
        return Path(self.manifest).absolute()
