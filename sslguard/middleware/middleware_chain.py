"""
Ordered pipeline of ``(request, call_next)`` middleware around an endpoint.
"""

from typing import Awaitable, Callable, List

from ..request import Request
from ..response import Response

Endpoint = Callable[[Request], Awaitable[Response]]
MiddlewareCallable = Callable[[Request, Endpoint], Awaitable[Response]]


class MiddlewareChain:
    """
    Middleware in registration order; the first one added sees the request first.

    With [A, B] registered the flow is A -> B -> endpoint -> B -> A, so a
    redirect returned by A means B and the endpoint never run.
    """

    def __init__(self):
        self._middlewares: List[MiddlewareCallable] = []

    def add(self, middleware: MiddlewareCallable) -> None:
        self._middlewares.append(middleware)

    def build(self, endpoint: Endpoint) -> Endpoint:
        """Wrap ``endpoint`` so that calling the result runs every middleware."""
        handler = endpoint
        for middleware in reversed(self._middlewares):
            handler = _link(middleware, handler)
        return handler

    def count(self) -> int:
        return len(self._middlewares)

    def clear(self) -> None:
        self._middlewares.clear()


def _link(middleware: MiddlewareCallable, call_next: Endpoint) -> Endpoint:
    async def handler(request: Request) -> Response:
        return await middleware(request, call_next)

    return handler
