"""Test utilities for staticweb applications.

    from staticweb.testing import TestClient
"""

from staticweb.testing.client import TestClient

__all__ = ["TestClient"]
