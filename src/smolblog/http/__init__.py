"""HTTP value types for the serving front-end."""

from smolblog.http.request import Request
from smolblog.http.response import Response

__all__ = ["Request", "Response"]
