"""
ASGI application object hosting the secure route middleware.

The route of each request is resolved before the middleware chain runs, so
SecureRouteMiddleware sees controller, action and prefix and can redirect
before any handler is called.
"""

import logging
from typing import Callable, Dict, Any, Awaitable, Optional, Set, List

from .request import Request
from .response import Response, text_response
from .status import HTTPStatus
from .routing import Router
from .middleware import MiddlewareChain, MiddlewareCallable

logger = logging.getLogger(__name__)

LifespanHandler = Callable[[], Awaitable[None]]


class App:
    """Routes, middleware and lifespan handlers behind one ASGI callable."""

    def __init__(self, router: Optional[Router] = None):
        self.router = router or Router()
        self.middleware_chain = MiddlewareChain()
        self._pipeline: Optional[Callable[[Request], Awaitable[Response]]] = None
        self._handlers: Dict[str, List[LifespanHandler]] = {"startup": [], "shutdown": []}

    @property
    def started(self) -> bool:
        return self._pipeline is not None

    def _build_pipeline(self) -> Callable[[Request], Awaitable[Response]]:
        if self._pipeline is None:
            self._pipeline = self.middleware_chain.build(self.router.handle_request)
        return self._pipeline

    def add_middleware(self, middleware: MiddlewareCallable) -> None:
        """
        Append middleware; the first added sees requests first.

        Raises:
            RuntimeError: Once the first request or startup event froze the chain
        """
        if self.started:
            raise RuntimeError("Middleware must be added before the application starts")
        self.middleware_chain.add(middleware)

    def include_router(self, router: Router, prefix: str = "", route_prefix: Optional[str] = None) -> None:
        """Mount ``router`` under ``prefix``; see Router.include_router for route_prefix."""
        self.router.include_router(router, prefix, route_prefix)

    def add_event_handler(self, event_type: str, func: LifespanHandler) -> None:
        if event_type not in self._handlers:
            raise ValueError(
                f"Invalid event type: {event_type}. Must be 'startup' or 'shutdown'"
            )
        self._handlers[event_type].append(func)

    def on_event(self, event_type: str):
        """Decorator form of add_event_handler."""

        def decorator(func: LifespanHandler) -> LifespanHandler:
            self.add_event_handler(event_type, func)
            return func

        return decorator

    def route(
        self,
        path: str,
        methods: Optional[Set[str]] = None,
        controller: Optional[str] = None,
        action: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        """Register a handler under the controller/action/prefix names the policy uses."""
        return self.router.route(path, methods, controller, action, prefix)

    def get(self, path: str, **names):
        return self.router.get(path, **names)

    def post(self, path: str, **names):
        return self.router.post(path, **names)

    async def __call__(self, scope: Dict[str, Any], receive: Callable, send: Callable):
        if scope["type"] == "http":
            await self._handle_http(scope, send)
        elif scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)

    async def _run_lifespan_event(self, event_type: str, send: Callable) -> None:
        try:
            if event_type == "startup":
                self._build_pipeline()
            for handler in self._handlers[event_type]:
                await handler()
        except Exception as e:
            logger.exception("Application %s failed", event_type)
            await send({"type": f"lifespan.{event_type}.failed", "message": str(e)})
        else:
            await send({"type": f"lifespan.{event_type}.complete"})

    async def _handle_lifespan(self, receive: Callable, send: Callable):
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await self._run_lifespan_event("startup", send)
            elif message["type"] == "lifespan.shutdown":
                await self._run_lifespan_event("shutdown", send)
                return

    async def _handle_http(self, scope: Dict[str, Any], send: Callable):
        try:
            request = Request(scope)
            self.router.resolve(request)
            response = await self._build_pipeline()(request)
        except Exception as e:
            logger.exception("Unhandled error while processing %s", scope.get("path"))
            response = text_response(
                f"Internal Server Error: {e}",
                status_code=HTTPStatus.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        message = response.to_asgi_response()
        await send(
            {
                "type": "http.response.start",
                "status": message["status"],
                "headers": message["headers"],
            }
        )
        await send({"type": "http.response.body", "body": message["body"], "more_body": False})
