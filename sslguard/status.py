"""
HTTP status codes used by sslguard.
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    HTTP_200_OK = 200

    HTTP_301_MOVED_PERMANENTLY = 301
    HTTP_302_FOUND = 302
    HTTP_303_SEE_OTHER = 303
    HTTP_307_TEMPORARY_REDIRECT = 307
    HTTP_308_PERMANENT_REDIRECT = 308

    HTTP_404_NOT_FOUND = 404
    HTTP_405_METHOD_NOT_ALLOWED = 405

    HTTP_500_INTERNAL_SERVER_ERROR = 500


REDIRECT_STATUS_CODES = frozenset(
    {
        HTTPStatus.HTTP_301_MOVED_PERMANENTLY,
        HTTPStatus.HTTP_302_FOUND,
        HTTPStatus.HTTP_303_SEE_OTHER,
        HTTPStatus.HTTP_307_TEMPORARY_REDIRECT,
        HTTPStatus.HTTP_308_PERMANENT_REDIRECT,
    }
)
