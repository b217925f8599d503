"""
Secure route middleware.

Redirects requests to HTTPS or back to HTTP according to a SecurityPolicy,
using the controller, action and prefix the router resolved for the request.
"""

import logging
from typing import Awaitable, Callable, Optional, Tuple, Union

from ..context import RequestContext, RouteParams
from ..decision import Decision
from ..guard import SecureRouteGuard
from ..policy import SecurityPolicy
from ..request import Request
from ..response import Response, redirect_response
from ..status import HTTPStatus

logger = logging.getLogger(__name__)

# Key under which the decision is stored in request.state
DECISION_STATE_KEY = "secure_route"

RouteResolver = Callable[[Request], RouteParams]


def route_params_from_request(request: Request) -> RouteParams:
    """Default resolver: the params the router attached to the request."""
    return request.route_params or RouteParams()


def decision_response(
    decision: Decision,
    status_code: Union[int, HTTPStatus] = HTTPStatus.HTTP_302_FOUND,
) -> Optional[Response]:
    """
    Redirect response for a decision, or None when nothing has to happen.

    Handlers running with auto_redirect disabled can use this to act on
    ``request.state["secure_route"]`` themselves.
    """
    if not decision.is_redirect:
        return None
    return redirect_response(decision.url, status_code=status_code)


class SecureRouteMiddleware:
    """
    Middleware enforcing a SecurityPolicy on every request.

    Usage:
        policy = SecurityPolicy(secured={"users": ["login"]}, prefixes={"admin"})
        app.add_middleware(SecureRouteMiddleware(policy, server_name="www.example.com"))

    Without server_name the redirect host is taken from the client-supplied
    Host header. Set it in production so redirects always point at your own
    public host.
    """

    def __init__(
        self,
        policy: SecurityPolicy,
        trust_forwarded_headers: bool = False,
        server_name: Optional[str] = None,
        route_resolver: Optional[RouteResolver] = None,
    ):
        """
        Initialize secure route middleware.

        Args:
            policy: The security policy to enforce
            trust_forwarded_headers: Use X-Forwarded-* headers from a reverse proxy
                to detect HTTPS and the public host
            server_name: Public host (optionally with port) used in redirect URLs
                instead of the Host header; recommended in production
            route_resolver: Callable returning RouteParams for a request; defaults
                to the params resolved by the router
        """
        self.policy = policy
        self.guard = SecureRouteGuard(policy)
        self.trust_forwarded_headers = trust_forwarded_headers
        self.server_name = server_name
        self.route_resolver = route_resolver or route_params_from_request

    def evaluate(self, request: Request) -> Decision:
        """Compute the decision for a request without acting on it."""
        return self._evaluate(request)[1]

    def _evaluate(self, request: Request) -> Tuple[RouteParams, Decision]:
        params = self.route_resolver(request)
        context = RequestContext.from_request(
            request,
            trust_forwarded_headers=self.trust_forwarded_headers,
            server_name=self.server_name,
        )
        return params, self.guard.evaluate(params, context)

    async def __call__(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        params, decision = self._evaluate(request)
        request.state[DECISION_STATE_KEY] = decision

        if not decision.is_redirect or not self.policy.auto_redirect:
            return await call_next(request)

        logger.info(
            "Redirecting %s %s to %s",
            request.method,
            request.path,
            decision.scheme,
            extra={
                "controller": params.controller,
                "action": params.action,
                "prefix": params.prefix,
                "location": decision.url,
            },
        )
        return decision_response(decision, self.policy.redirect_status_code)
