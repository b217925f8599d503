"""
Route class for sslguard applications.

Represents an individual route with path, methods, handler and the
controller/action/prefix names the security policy is written against.
"""

import re
import inspect
from typing import Callable, Awaitable, Optional, Set, Dict, Any, Tuple

from ..context import RouteParams
from ..request import Request
from ..response import Response

VALID_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}

PARAM_PATTERN = re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}")


class Route:
    """
    A single route.

    Attributes:
        path (str): Normalized URL path pattern. Trailing slashes are removed except
                    for root ("/"). Examples: "/users", "/users/{user_id}"
        handler (Callable): Async function that handles requests matching this route.
                            Receives Request-annotated parameters and path parameters by name.
        methods (Set[str]): HTTP methods this route accepts. Defaults to {"GET"}.
        controller (str | None): Controller name used by the security policy.
        action (str): Action name used by the security policy. Defaults to the handler name.
        prefix (str | None): Routing prefix (e.g. "admin") used by the security policy.

    Example:
        >>> async def login(request: Request) -> Response:
        ...     return text_response("login form")
        >>>
        >>> route = Route("/users/login", login, {"GET", "POST"}, controller="users")
        >>> route.route_params
        RouteParams(controller='users', action='login', prefix=None)
    """

    def __init__(
        self,
        path: str,
        handler: Callable[..., Awaitable[Response]],
        methods: Optional[Set[str]] = None,
        controller: Optional[str] = None,
        action: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        self.path = path.rstrip("/") or "/"
        self.handler = handler
        self.methods = {method.upper() for method in (methods or {"GET"})}
        self.controller = controller
        self.action = action or getattr(handler, "__name__", None)
        self.prefix = prefix

        invalid_methods = self.methods - VALID_METHODS
        if invalid_methods:
            raise ValueError(f"Invalid HTTP methods: {invalid_methods}")

        self.param_names = PARAM_PATTERN.findall(self.path)
        self.route_regex = self._compile_route_pattern()

        self.request_params: list[str] = []
        self.handler_path_params: list[str] = []
        self._inspect_handler_signature()

    @property
    def route_params(self) -> RouteParams:
        return RouteParams(controller=self.controller, action=self.action, prefix=self.prefix)

    def copy_with(self, path: str, prefix: Optional[str]) -> "Route":
        """Same handler and names under a new path and routing prefix."""
        return Route(
            path,
            self.handler,
            self.methods,
            controller=self.controller,
            action=self.action,
            prefix=prefix,
        )

    def _compile_route_pattern(self) -> re.Pattern:
        """Turn "/users/{user_id}" into a regex with one named group per parameter."""
        pattern = ""
        last = 0
        for match in PARAM_PATTERN.finditer(self.path):
            pattern += re.escape(self.path[last:match.start()])
            pattern += f"(?P<{match.group(1)}>[^/]+)"
            last = match.end()
        pattern += re.escape(self.path[last:])
        return re.compile(f"^{pattern}$")

    def _inspect_handler_signature(self) -> None:
        """
        Work out what to inject when calling the handler.

        Parameters annotated with Request get the request; parameters named
        like a path parameter get its value.
        """
        sig = inspect.signature(self.handler)
        for param_name, param in sig.parameters.items():
            if param.annotation is Request:
                self.request_params.append(param_name)
            elif param_name in self.param_names:
                self.handler_path_params.append(param_name)

        missing_in_handler = set(self.param_names) - set(self.handler_path_params)
        if missing_in_handler:
            raise ValueError(
                f"Route pattern '{self.path}' defines path parameters {missing_in_handler} "
                f"but handler function does not have corresponding parameters."
            )

    def match_path(self, path: str) -> Optional[Dict[str, str]]:
        """Path parameters if the path matches this route, otherwise None."""
        normalized = path.rstrip("/") or "/"
        match = self.route_regex.match(normalized)
        if match is None:
            return None
        return match.groupdict()

    def matches(self, path: str, method: str) -> Tuple[bool, Dict[str, str]]:
        params = self.match_path(path)
        if params is None or method.upper() not in self.methods:
            return False, {}
        return True, params

    async def __call__(self, request: Request) -> Response:
        kwargs: Dict[str, Any] = {}
        for name in self.request_params:
            kwargs[name] = request
        for name in self.handler_path_params:
            kwargs[name] = request.path_params[name]
        return await self.handler(**kwargs)

    def __repr__(self) -> str:
        return f"<Route {sorted(self.methods)} {self.path} -> {self.controller}.{self.action}>"
