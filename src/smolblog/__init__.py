"""smolblog: a manifest-driven micro-site renderer.

A JSON manifest lists layout files plus routes (URL path -> static file
or template) and pages (name -> template + output path + optional
Markdown). Serve it with live reload, or export every page once.

Basic usage::

    from smolblog import SiteApp, SiteConfig, export_site

    # Serve, re-reading the manifest and layouts on every request
    app = SiteApp(SiteConfig(manifest="site/smolmanifest.json"))

    # Or render every page into ./dist
    export_site("site/smolmanifest.json", "dist")
"""

__version__ = "0.1.0"
__all__ = [
    "HTTPError",
    "Manifest",
    "MethodNotAllowedError",
    "RouteNotFoundError",
    "SiteApp",
    "SiteConfig",
    "SmolblogError",
    "TemplateSet",
    "build_template_set",
    "export_site",
    "load_manifest",
    "render_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import smolblog`` fast and free of kida/patitas until needed.
    """
    if name == "SiteApp":
        from smolblog.server.app import SiteApp

        return SiteApp

    if name == "SiteConfig":
        from smolblog.config import SiteConfig

        return SiteConfig

    if name in ("Manifest", "load_manifest"):
        from smolblog import manifest as _manifest

        return getattr(_manifest, name)

    if name in ("TemplateSet", "build_template_set"):
        from smolblog.templating import integration as _tmpl

        return getattr(_tmpl, name)

    if name == "render_request":
        from smolblog.render import render_request

        return render_request

    if name == "export_site":
        from smolblog.export import export_site

        return export_site

    if name in ("HTTPError", "MethodNotAllowedError", "RouteNotFoundError", "SmolblogError"):
        from smolblog import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
