"""
sslguard middleware package.

Middleware processes requests and responses in a pipeline fashion.
SecureRouteMiddleware is the one that enforces the security policy.
"""

from .middleware_chain import MiddlewareChain, MiddlewareCallable
from .secure_route import (
    DECISION_STATE_KEY,
    SecureRouteMiddleware,
    decision_response,
    route_params_from_request,
)

__all__ = [
    "MiddlewareChain",
    "MiddlewareCallable",
    "SecureRouteMiddleware",
    "DECISION_STATE_KEY",
    "decision_response",
    "route_params_from_request",
]
