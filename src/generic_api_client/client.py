"""The client: builds requests, runs them through middleware and records them.

Example:
    ```python
    client = Client(
        base_url="https://dummyjson.com",
        pagination=SkipLimitPagination(),
        middleware=[BearerTokenMiddleware("123456789"), LoggingMiddleware()],
    )

    client.json("GET", "/products", {"limit": 25}).for_each_page(handle_products)
    ```

In tests the same client can be switched to fake mode, where stubbed
responses replace the network and every request can be asserted on:

    ```python
    client.stub_response("https://dummyjson.com/products?limit=25", {"products": []})
    client.json("GET", "/products", {"limit": 25})
    client.assert_sent(lambda request: request.url.params["limit"] == "25")
    ```
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

import httpx

from generic_api_client.config import ClientSettings
from generic_api_client.encoding import Params, encode_form, encode_json
from generic_api_client.messages import Request, Response
from generic_api_client.middleware import BearerTokenMiddleware, Middleware, MiddlewareChain, MiddlewareFunc
from generic_api_client.pagination import PaginationPolicy
from generic_api_client.recording import FailureReporter, RecordedExchange, RecordedExchangeLog, RequestPredicate
from generic_api_client.transport import FakeResponse, FakeTransport, HTTPTransport, Matcher, Transport
from generic_api_client.url import build_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Configuration fixed when a client is built.

    Attributes:
        base_url: Prefix for URLs that are not already absolute
        pagination: Policy attached to every response
        middleware: Middleware wrapped around the transport, outermost first
    """

    base_url: str | None = None
    pagination: PaginationPolicy | None = None
    middleware: tuple[Middleware | MiddlewareFunc, ...] = ()


class Client:
    """Synchronous API client.

    Args:
        transport: A ``Transport``, or an ``httpx.BaseTransport`` to send
            requests through (default: a fresh ``httpx.HTTPTransport``)
        base_url: Prefix for URLs that are not already absolute
        pagination: Policy attached to every response
        middleware: Middleware objects or callables, outermost first
        failure_reporter: Receives ``(passed, message)`` from the assertion
            helpers; defaults to raising ``AssertionError``
    """

    def __init__(
        self,
        transport: Transport | httpx.BaseTransport | None = None,
        *,
        base_url: str | None = None,
        pagination: PaginationPolicy | None = None,
        middleware: Iterable[Middleware | MiddlewareFunc] = (),
        failure_reporter: FailureReporter | None = None,
    ) -> None:
        if transport is None or isinstance(transport, httpx.BaseTransport):
            transport = HTTPTransport(transport)
        self._transport: Transport = transport
        self._owns_transport = True
        self._failure_reporter = failure_reporter
        self.config = ClientConfig(base_url=base_url, pagination=pagination, middleware=tuple(middleware))
        self._chain = MiddlewareChain(self.config.middleware)
        self._log = RecordedExchangeLog(failure_reporter)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: Transport | httpx.BaseTransport | None = None,
        **kwargs: Any,
    ) -> "Client":
        """Build a client from resolved settings, authenticating with the token when one is set."""
        middleware = tuple(kwargs.pop("middleware", ()))
        if settings.token:
            middleware = (BearerTokenMiddleware(settings.token), *middleware)
        return cls(transport, base_url=settings.base_url, middleware=middleware, **kwargs)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    # Configuration. Each with_* call returns a new client sharing the transport.

    def _copy(self, **changes: Any) -> "Client":
        config = replace(self.config, **changes)
        client = Client(
            self._transport,
            base_url=config.base_url,
            pagination=config.pagination,
            middleware=config.middleware,
            failure_reporter=self._failure_reporter,
        )
        client._owns_transport = False
        return client

    def with_base_url(self, base_url: str | None) -> "Client":
        return self._copy(base_url=base_url)

    def with_pagination(self, pagination: PaginationPolicy | None) -> "Client":
        return self._copy(pagination=pagination)

    def with_middleware(self, middleware: Iterable[Middleware | MiddlewareFunc]) -> "Client":
        return self._copy(middleware=tuple(middleware))

    def with_transport(self, transport: Transport | httpx.BaseTransport) -> "Client":
        client = self._copy()
        if isinstance(transport, httpx.BaseTransport):
            transport = HTTPTransport(transport)
        client._transport = transport
        client._owns_transport = True
        return client

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def middleware(self) -> MiddlewareChain:
        return self._chain

    # Fake mode. These change this client in place and return it for chaining.

    @property
    def is_fake(self) -> bool:
        return isinstance(self._transport, FakeTransport)

    def fake(self) -> "Client":
        """Replace the transport with an empty ``FakeTransport``.

        A transport this client created or was given is closed first; one
        shared with the client it was derived from by a ``with_*`` call is
        left open for that client.
        """
        logger.debug("Switching client to a fake transport")
        if self._owns_transport:
            self.close()
        self._transport = FakeTransport()
        self._owns_transport = True
        return self

    def _fake_transport(self) -> FakeTransport:
        if not isinstance(self._transport, FakeTransport):
            self.fake()
        return self._transport

    def stub_response(
        self,
        url: str,
        body: Any = None,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> "Client":
        """Stub the exact ``url`` with a canned response, faking the client if needed."""
        self._fake_transport().stub_response(url, body, status, headers)
        return self

    def stub_response_with_matcher(
        self,
        matcher: Matcher | Callable[[Request], bool],
        fake_response: FakeResponse,
    ) -> "Client":
        self._fake_transport().stub_response_with_matcher(matcher, fake_response)
        return self

    # Sending

    def build_url(self, method: str, url: str, params: Params | None = None) -> httpx.URL:
        return build_url(method, url, params, base_url=self.config.base_url)

    def send(self, request: Request) -> Response:
        """Send a hand-built request through the middleware and the transport.

        The request recorded and attached to the returned response is the one
        that reached the transport, after every middleware had its say.
        """
        final_request, raw_response = self._chain.dispatch(self._transport.send, request)
        response = Response.from_httpx(
            raw_response,
            final_request,
            pagination=self.config.pagination,
            client=self,
        )
        self._log.append(final_request, response)
        return response

    def json(self, method: str, url: str, params: Params | None = None) -> Response:
        """Send a JSON request.

        GET parameters go into the query string; for every other method they
        are encoded as the JSON body.

        Raises:
            SerializationError: ``params`` cannot be encoded as JSON
            InvalidUrlError: The URL cannot be parsed
        """
        params = params if params is not None else {}
        request = Request.build(
            method,
            self.build_url(method, url, params),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        if request.method != "GET":
            request = request.with_body(encode_json(params))
        return self.send(request)

    def form(self, method: str, url: str, params: Params | None = None) -> Response:
        """Send an ``application/x-www-form-urlencoded`` request."""
        params = params if params is not None else {}
        request = Request.build(
            method,
            self.build_url(method, url, params),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        if request.method != "GET":
            request = request.with_body(encode_form(params))
        return self.send(request)

    def get(self, url: str, params: Params | None = None) -> Response:
        return self.json("GET", url, params)

    def post(self, url: str, params: Params | None = None) -> Response:
        return self.json("POST", url, params)

    def put(self, url: str, params: Params | None = None) -> Response:
        return self.json("PUT", url, params)

    def patch(self, url: str, params: Params | None = None) -> Response:
        return self.json("PATCH", url, params)

    def delete(self, url: str, params: Params | None = None) -> Response:
        return self.json("DELETE", url, params)

    # Recorded exchanges

    @property
    def log(self) -> RecordedExchangeLog:
        return self._log

    def recorded(self, predicate: RequestPredicate | None = None) -> list[RecordedExchange]:
        return self._log.recorded(predicate)

    def assert_sent(self, predicate: RequestPredicate, message: str | None = None) -> None:
        self._log.assert_sent(predicate, message)

    def assert_not_sent(self, predicate: RequestPredicate, message: str | None = None) -> None:
        self._log.assert_not_sent(predicate, message)

    def assert_sent_count(self, count: int) -> None:
        self._log.assert_sent_count(count)
