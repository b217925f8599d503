"""
Responses returned by routes and middleware, redirects in particular.
"""

import json
from typing import Dict, Any, Optional, Union

from .status import HTTPStatus

StatusCode = Union[int, HTTPStatus]


class Response:
    """
    HTTP response with a body, a status code and lowercase headers.

    Header values are sent as latin-1, the encoding of ASGI header bytes, so a
    redirect location rebuilt from raw request bytes reaches the client unchanged.
    """

    def __init__(
        self,
        body: Union[str, bytes] = b"",
        status_code: StatusCode = HTTPStatus.HTTP_200_OK,
        headers: Optional[Dict[str, str]] = None,
        content_type: str = "text/plain; charset=utf-8",
    ):
        self.status_code = int(status_code)
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.headers = {"content-type": content_type}
        for name, value in (headers or {}).items():
            self.headers[name.lower()] = value

    @property
    def location(self) -> Optional[str]:
        """Redirect target, if any."""
        return self.headers.get("location")

    def to_asgi_response(self) -> Dict[str, Any]:
        """Status, header byte pairs and body in the shape the ASGI send messages use."""
        headers = [
            [name.encode("latin-1"), str(value).encode("latin-1")]
            for name, value in self.headers.items()
        ]
        headers.append([b"content-length", str(len(self.body)).encode("latin-1")])
        return {"status": self.status_code, "headers": headers, "body": self.body}

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"


def text_response(content: str, status_code: StatusCode = HTTPStatus.HTTP_200_OK) -> Response:
    return Response(content, status_code)


def json_response(content: Union[dict, list], status_code: StatusCode = HTTPStatus.HTTP_200_OK) -> Response:
    body = json.dumps(content, ensure_ascii=False)
    return Response(body, status_code, content_type="application/json; charset=utf-8")


def redirect_response(
    url: str,
    status_code: StatusCode = HTTPStatus.HTTP_302_FOUND,
) -> Response:
    """Empty response sending the client to ``url``."""
    return Response(b"", status_code, headers={"location": url})
