from .response import Response, text_response
from .status import HTTPStatus


class SSLGuardError(Exception):
    """Base class for sslguard errors."""


class PolicyConfigurationError(SSLGuardError, ValueError):
    """Raised when a security policy cannot be loaded or validated."""


class InvalidRequest(SSLGuardError):
    def __init__(self):
        super().__init__()
        self.http_response: Response = None  # just to help with type hinting


class NotFoundException(InvalidRequest):
    def __init__(self, message: str = "Not found"):
        super().__init__()
        self.http_response = text_response(
            message, status_code=HTTPStatus.HTTP_404_NOT_FOUND
        )


class MethodNotAllowedException(InvalidRequest):
    def __init__(self, message: str = "Method not allowed"):
        super().__init__()
        self.http_response = text_response(
            message, status_code=HTTPStatus.HTTP_405_METHOD_NOT_ALLOWED
        )
