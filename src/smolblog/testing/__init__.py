"""Test utilities for smolblog sites.

    from smolblog.testing import TestClient
"""

from smolblog.testing.client import TestClient

__all__ = ["TestClient"]
