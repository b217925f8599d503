"""
Request class for sslguard applications.

Exposes what the router and the secure route middleware need from an ASGI
HTTP scope: method, transport, host information and the path/query exactly
as the client sent them.
"""

from typing import Dict, Any, Optional, Tuple, TYPE_CHECKING

from .context import RouteParams

if TYPE_CHECKING:
    from .routing.route import Route


class Request:
    """
    Wrapper around an ASGI HTTP scope.

    ``path`` is the decoded path used for routing. ``target_path`` is the
    percent-encoded path including the mount point, used to rebuild the URL
    on the other transport.
    """

    def __init__(self, scope: Dict[str, Any]):
        self._scope = scope
        self._headers: Optional[Dict[str, str]] = None

        # Filled by the router before the middleware chain runs
        self.route: Optional["Route"] = None
        self.path_params: Dict[str, Any] = {}
        self.route_params: RouteParams = RouteParams()

        # Per-request storage for middleware results
        self.state: Dict[str, Any] = {}

    @property
    def headers(self) -> Dict[str, str]:
        """Request headers with lowercase names."""
        if self._headers is None:
            self._headers = {
                name.decode("latin-1").lower(): value.decode("latin-1")
                for name, value in self._scope.get("headers", [])
            }
        return self._headers

    @property
    def method(self) -> str:
        return self._scope.get("method", "GET")

    @property
    def scheme(self) -> str:
        """Scheme the server received the request on ('http' or 'https')."""
        return self._scope.get("scheme", "http")

    @property
    def server(self) -> Optional[Tuple[str, Optional[int]]]:
        """(host, port) of the server socket, when the ASGI server reports it."""
        server = self._scope.get("server")
        return tuple(server) if server else None

    @property
    def path(self) -> str:
        """Decoded request path as the server reports it, e.g. '/users/login'."""
        return self._scope.get("path", "/")

    @property
    def root_path(self) -> str:
        """Mount point of the application without a trailing slash, e.g. '/shop'."""
        return self._scope.get("root_path", "").rstrip("/")

    @property
    def route_path(self) -> str:
        """Decoded path without the mount point; what routes are matched against."""
        path, root_path = self.path, self.root_path
        if _is_under(path, root_path):
            return path[len(root_path):] or "/"
        return path

    @property
    def target_path(self) -> str:
        """
        Path as sent on the wire, percent-encoding intact, with the mount point.

        Falls back to the decoded path when the server does not report raw_path.
        Servers disagree on whether path and raw_path already start with
        root_path, so it is only prepended when missing.
        """
        raw_path = self._scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else self.path
        root_path = self.root_path
        if root_path and not _is_under(path, root_path):
            path = root_path + path
        return path

    @property
    def query_string(self) -> str:
        """Raw query string, byte for byte (latin-1), without the leading '?'."""
        return self._scope.get("query_string", b"").decode("latin-1")

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.path}>"


def _is_under(path: str, root_path: str) -> bool:
    return bool(root_path) and (path == root_path or path.startswith(root_path + "/"))
