"""
sslguard testing package.

Provides testing utilities for sslguard applications:
- TestClient: Main testing interface
- TestRequest: Builder pattern for HTTP requests
- TestResponse: Response examination utilities
"""

from .client import TestClient
from .request import TestRequest
from .response import TestResponse

__all__ = ["TestClient", "TestRequest", "TestResponse"]
