"""Test utilities for wayfinder applications::

    from wayfinder.testing import TestClient
"""

from wayfinder.testing.client import TestClient

__all__ = ["TestClient"]
