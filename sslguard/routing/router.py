"""
Router class for sslguard applications.

Manages collections of routes, resolves the route of a request and dispatches it.
"""

from typing import List, Optional, Set, Callable, Awaitable, Tuple, Dict

from .route import Route
from ..context import RouteParams
from ..exceptions import InvalidRequest, MethodNotAllowedException, NotFoundException
from ..request import Request
from ..response import Response


class Router:
    """
    Router holding a collection of routes with support for:
    - Path prefixes
    - A default controller name for all of its routes
    - Routing prefixes ("admin") applied when included into another router
    """

    def __init__(self, prefix: str = "", controller: Optional[str] = None):
        """
        Initialize a Router.

        Args:
            prefix: URL prefix to apply to all routes in this router
            controller: Controller name given to routes that do not name one
        """
        self.prefix = prefix.rstrip("/")
        self.controller = controller
        self.routes: List[Route] = []

    def add_route(
        self,
        path: str,
        handler: Callable[..., Awaitable[Response]],
        methods: Optional[Set[str]] = None,
        controller: Optional[str] = None,
        action: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> Route:
        """
        Add a route to this router.

        Args:
            path: URL path pattern (supports {param})
            handler: Async function that handles the request
            methods: Set of HTTP methods this route accepts
            controller: Controller name (defaults to the router's controller)
            action: Action name (defaults to the handler name)
            prefix: Routing prefix such as "admin"

        Returns:
            The created Route object
        """
        full_path = self.prefix + path if path != "/" else (self.prefix or "/")
        route = Route(
            full_path,
            handler,
            methods,
            controller=controller or self.controller,
            action=action,
            prefix=prefix,
        )
        self.routes.append(route)
        return route

    def include_router(
        self,
        router: "Router",
        prefix: str = "",
        route_prefix: Optional[str] = None,
    ) -> None:
        """
        Include routes from another router under an optional path prefix.

        Included routes that have no routing prefix yet get ``route_prefix``, or
        the path prefix without slashes, so that ``include_router(admin, "/admin")``
        puts every admin route under the "admin" routing prefix.

        Args:
            router: Router whose routes to include
            prefix: Additional URL prefix to add to all included routes
            route_prefix: Routing prefix for the included routes
        """
        prefix = prefix.rstrip("/")
        combined_prefix = self.prefix + prefix
        if route_prefix is None:
            route_prefix = prefix.strip("/") or None

        for route in router.routes:
            new_path = combined_prefix + route.path if route.path != "/" else (combined_prefix or "/")
            self.routes.append(route.copy_with(new_path, route.prefix or route_prefix))

    def find_route(self, path: str, method: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        """
        Find the route for a path and method.

        Returns:
            Tuple of (matching Route, path_params dict) or None if no match found

        Raises:
            MethodNotAllowedException: The path exists but not for this method
        """
        path_found = False
        for route in self.routes:
            params = route.match_path(path)
            if params is None:
                continue
            if method.upper() in route.methods:
                return route, params
            path_found = True

        if path_found:
            raise MethodNotAllowedException(f"Method {method} not allowed on path {path}")
        return None

    def resolve(self, request: Request) -> None:
        """
        Attach the matching route, its path parameters and its route params to the request.

        Unmatched requests keep empty route params; errors are left for
        handle_request so middleware still runs for them.
        """
        try:
            found = self.find_route(request.route_path, request.method)
        except MethodNotAllowedException:
            found = None

        if found is None:
            request.route = None
            request.path_params = {}
            request.route_params = RouteParams()
            return

        route, params = found
        request.route = route
        request.path_params = params
        request.route_params = route.route_params

    async def handle_request(self, request: Request) -> Response:
        """Dispatch a request to its route, answering 404 or 405 when there is none."""
        try:
            route = request.route
            if route is None:
                found = self.find_route(request.route_path, request.method)
                if found is None:
                    raise NotFoundException()
                route, request.path_params = found
            return await route(request)
        except InvalidRequest as exc:
            return exc.http_response

    def route(
        self,
        path: str,
        methods: Optional[Set[str]] = None,
        controller: Optional[str] = None,
        action: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        """Decorator for registering routes."""

        def decorator(func: Callable[..., Awaitable[Response]]):
            self.add_route(path, func, methods, controller, action, prefix)
            return func

        return decorator

    def get(self, path: str, **names):
        """Decorator for GET routes."""
        return self.route(path, {"GET"}, **names)

    def post(self, path: str, **names):
        """Decorator for POST routes."""
        return self.route(path, {"POST"}, **names)
