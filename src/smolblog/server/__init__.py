"""Serving front-end: an ASGI app that re-renders the site per request."""

from smolblog.server.app import SiteApp

__all__ = ["SiteApp"]
