from .app import App
from .request import Request
from .response import (
    Response,
    text_response,
    json_response,
    redirect_response,
)
from .status import HTTPStatus
from .routing import Router, Route
from .policy import SecurityPolicy, AllActions, ActionSet
from .context import RouteParams, RequestContext
from .decision import Decision, NoAction, RedirectToSecure, RedirectToInsecure
from .guard import SecureRouteGuard, evaluate
from .middleware import SecureRouteMiddleware, decision_response
from .config import load_policy, load_policy_from_env

__version__ = "0.1.0"
__all__ = [
    "App",
    "Request",
    "Response",
    "HTTPStatus",
    "Router",
    "Route",
    "text_response",
    "json_response",
    "redirect_response",
    "SecurityPolicy",
    "AllActions",
    "ActionSet",
    "RouteParams",
    "RequestContext",
    "Decision",
    "NoAction",
    "RedirectToSecure",
    "RedirectToInsecure",
    "SecureRouteGuard",
    "evaluate",
    "SecureRouteMiddleware",
    "decision_response",
    "load_policy",
    "load_policy_from_env",
]
