"""
Routing package for sslguard applications.

Provides:
- Route class for individual route definitions with controller/action/prefix names
- Router class for managing collections of routes
"""

from .route import Route
from .router import Router

__all__ = [
    "Route",
    "Router",
]
