"""Map unsuccessful responses onto the APIError hierarchy."""

from typing import TYPE_CHECKING

from generic_api_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)

if TYPE_CHECKING:
    from generic_api_client.messages import Response

STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def raise_for_status(response: "Response") -> None:
    """Raise the matching APIError subclass when ``response`` is not a 2xx.

    Args:
        response: Response returned by the client

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code
    if status_code in STATUS_EXCEPTIONS:
        exc_class = STATUS_EXCEPTIONS[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    request = response.request
    response_text = response.text[:200]
    message = f"HTTP {status_code} for {request.method} {request.url}"
    if response_text:
        message = f"{message}: {response_text}"

    if exc_class is RateLimitError:
        retry_after = None
        header = response.header("retry-after")
        if header is not None:
            try:
                retry_after = int(header)
            except ValueError:
                retry_after = None
        raise RateLimitError(message, retry_after=retry_after, status_code=status_code, response=response)

    raise exc_class(message, status_code=status_code, response=response)
