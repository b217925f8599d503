"""
Per-request values the guard decides on.

RouteParams and RequestContext are plain frozen values so the guard never
touches the framework request directly. ``RequestContext.from_request`` is
the adapter between the two.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .request import Request

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class RouteParams:
    controller: Optional[str] = None
    action: Optional[str] = None
    prefix: Optional[str] = None


@dataclass(frozen=True)
class RequestContext:
    """
    Transport state of a request plus what is needed to rebuild its URL.

    Attributes:
        is_secure: True if the request arrived over HTTPS.
        host: Host (and non-default port) the client used.
        path: Percent-encoded request path including any mount point, e.g. "/shop/users/login".
        query_string: Raw query string without the leading "?".
    """

    is_secure: bool
    host: str
    path: str = "/"
    query_string: str = ""

    @property
    def full_path(self) -> str:
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    def url_for_scheme(self, scheme: str) -> str:
        return f"{scheme}://{self.host}{self.full_path}"

    @classmethod
    def from_request(
        cls,
        request: "Request",
        trust_forwarded_headers: bool = False,
        server_name: Optional[str] = None,
    ) -> "RequestContext":
        """
        Build a context from a framework request.

        Args:
            request: The incoming request
            trust_forwarded_headers: Honour X-Forwarded-Proto, X-Forwarded-Ssl and
                X-Forwarded-Host set by a reverse proxy
            server_name: Fixed host for redirect targets, overriding request headers
        """
        is_secure = request.scheme.lower() == "https"
        if trust_forwarded_headers and not is_secure:
            forwarded_proto = request.headers.get("x-forwarded-proto", "")
            forwarded_ssl = request.headers.get("x-forwarded-ssl", "")
            # Proxies may append one value per hop; the first is the client's.
            is_secure = (
                forwarded_proto.split(",")[0].strip().lower() == "https"
                or forwarded_ssl.strip().lower() == "on"
            )

        if server_name:
            host = server_name
        else:
            host = ""
            if trust_forwarded_headers:
                host = request.headers.get("x-forwarded-host", "").split(",")[0].strip()
            host = host or request.headers.get("host", "")
            if not host:
                server = request.server
                if server:
                    server_host, server_port = server
                    host = f"{server_host}:{server_port}" if server_port else server_host

        return cls(
            is_secure=is_secure,
            host=strip_default_port(host),
            path=request.target_path,
            query_string=request.query_string,
        )


def strip_default_port(host: str) -> str:
    """Drop a :80 or :443 suffix; those ports belong to one scheme only."""
    if not host or host.endswith("]"):
        return host
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit() and int(port) in DEFAULT_PORTS.values():
        return name
    return host
