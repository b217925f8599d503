import logging

import pytest

from sslguard.request import Request


@pytest.fixture(autouse=True)
def reset_sslguard_logger():
    """Undo handler and propagation changes made by sslguard.logger.configure_logging."""
    yield
    logger = logging.getLogger("sslguard")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_request():
    """Build a Request from scheme, path, query string, headers and mount point."""

    def factory(
        path="/",
        scheme="http",
        query_string=b"",
        headers=None,
        method="GET",
        server=("testserver", 80),
        raw_path=None,
        root_path="",
    ) -> Request:
        scope = {
            "type": "http",
            "method": method,
            "scheme": scheme,
            "path": path,
            "query_string": query_string,
            "headers": [
                (name.lower().encode(), value.encode())
                for name, value in (headers or {}).items()
            ],
            "server": server,
            "root_path": root_path,
        }
        if raw_path is not None:
            scope["raw_path"] = raw_path
        return Request(scope)

    return factory
