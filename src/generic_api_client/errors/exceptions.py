"""Exceptions raised by the client, its transports and its pagination helpers."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from generic_api_client.messages import Request, Response


class GenericApiClientError(Exception):
    """Base exception for every error raised by this package."""

    pass


class ConfigurationError(GenericApiClientError):
    """Raised when a required configuration value cannot be resolved."""

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class TransportError(GenericApiClientError):
    """Network or transport level failure. Never retried by the client."""

    def __init__(self, message: str, request: "Request | None" = None):
        super().__init__(message)
        self.request = request


class NoMatchingStubError(GenericApiClientError):
    """Raised by the fake transport when no registered stub matches a request."""

    def __init__(self, method: str, url: str):
        super().__init__(f"No stubbed response for {method} {url}")
        self.method = method
        self.url = url


class InvalidUrlError(GenericApiClientError):
    """Raised when a URL cannot be parsed after the base URL has been applied."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class SerializationError(GenericApiClientError):
    """Raised when request parameters cannot be encoded as a JSON body."""

    pass


class PaginationError(GenericApiClientError):
    """Raised when a next page is requested but cannot be produced."""

    pass


class MissingPaginationParameterError(PaginationError):
    """Raised when the previous request lacks a query parameter needed for the next page."""

    def __init__(self, message: str, parameter: str):
        super().__init__(message)
        self.parameter = parameter


class APIError(GenericApiClientError):
    """Base exception for unsuccessful HTTP responses."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "Response | httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass
