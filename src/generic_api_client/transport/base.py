"""Transport protocol and the httpx-backed network transport."""

import logging
from typing import Protocol, runtime_checkable

import httpx

from generic_api_client.errors import TransportError
from generic_api_client.messages import Request

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Performs exactly one exchange for a request."""

    def send(self, request: Request) -> httpx.Response: ...


class HTTPTransport:
    """Send requests through an httpx transport.

    The response body is read completely before it is returned, so callers
    never deal with open streams.

    Args:
        wrapped_transport: The httpx transport to delegate to
            (default: ``httpx.HTTPTransport()``)

    Example:
        ```python
        transport = HTTPTransport(httpx.MockTransport(handler))
        client = Client(transport)
        ```
    """

    def __init__(self, wrapped_transport: httpx.BaseTransport | None = None) -> None:
        self._wrapped_transport = wrapped_transport if wrapped_transport is not None else httpx.HTTPTransport()

    def __enter__(self):
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self._wrapped_transport.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        self._wrapped_transport.close()

    def send(self, request: Request) -> httpx.Response:
        """Send ``request`` and return the fully read response.

        Raises:
            TransportError: The underlying transport failed to complete the exchange
        """
        try:
            response = self._wrapped_transport.handle_request(request.to_httpx())
            try:
                response.read()
            finally:
                response.close()
        except httpx.TransportError as e:
            logger.debug(f"Transport failure for {request.method} {request.url}: {e!r}")
            raise TransportError(f"{request.method} {request.url} failed: {e}", request=request) from e

        return response
