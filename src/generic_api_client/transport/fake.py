"""In-memory transport returning stubbed responses.

Stubs are consulted in registration order and the first one whose matcher
accepts the request wins. A request nothing matches fails loudly with
``NoMatchingStubError`` instead of touching the network.

Example:
    ```python
    transport = FakeTransport()
    transport.stub_response("https://dummyjson.com/products", {"products": []})
    transport.stub_response_with_matcher(
        lambda request: request.method == "POST",
        FakeResponse({"id": 1}, status=201),
    )
    ```
"""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import httpx

from generic_api_client.errors import NoMatchingStubError, SerializationError
from generic_api_client.messages import Request
from generic_api_client.transport.matchers import Matcher, UrlMatcher, as_matcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FakeResponse:
    """Canned response content.

    ``body`` may be None (empty body), ``str``/``bytes`` (sent as is) or any
    JSON-serializable value, which is encoded and labelled
    ``application/json`` unless a Content-Type header is given.
    """

    body: Any = None
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)

    def to_httpx(self, request: Request) -> httpx.Response:
        headers = httpx.Headers(self.headers)

        if self.body is None:
            content = b""
        elif isinstance(self.body, bytes):
            content = self.body
        elif isinstance(self.body, str):
            content = self.body.encode("utf-8")
        else:
            try:
                content = json.dumps(self.body, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Stubbed body is not JSON serializable: {e}") from e
            headers.setdefault("Content-Type", "application/json")

        return httpx.Response(self.status, headers=headers, content=content, request=request.to_httpx())


class Stub(NamedTuple):
    matcher: Matcher
    response: FakeResponse


class FakeTransport:
    """Transport answering from registered stubs without network access."""

    def __init__(self) -> None:
        self._stubs: list[Stub] = []

    @property
    def stubs(self) -> tuple[Stub, ...]:
        return tuple(self._stubs)

    def stub_response(
        self,
        url: str | httpx.URL,
        body: Any = None,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> "FakeTransport":
        """Stub the exact ``url`` (query string included) with a canned response."""
        return self.stub_response_with_matcher(UrlMatcher(url), FakeResponse(body, status, dict(headers or {})))

    def stub_response_with_matcher(
        self,
        matcher: Matcher | Callable[[Request], bool],
        fake_response: FakeResponse,
    ) -> "FakeTransport":
        self._stubs.append(Stub(as_matcher(matcher), fake_response))
        return self

    def clear(self) -> None:
        self._stubs.clear()

    def send(self, request: Request) -> httpx.Response:
        """Answer ``request`` from the first matching stub.

        Raises:
            NoMatchingStubError: No registered stub matches the request
        """
        for index, stub in enumerate(self._stubs):
            if stub.matcher.match(request):
                logger.debug(f"Stub #{index} ({stub.matcher!r}) matched {request.method} {request.url}")
                return stub.response.to_httpx(request)

        logger.warning(f"No stubbed response for {request.method} {request.url}")
        raise NoMatchingStubError(request.method, str(request.url))
