"""Composition of middleware around the transport call.

Middleware are folded right at construction: for ``[m0, m1, m2]`` the call
``m0(request, next)`` reaches ``m1`` through ``next``, ``m1`` reaches ``m2``
and ``m2`` reaches the transport. The first registered middleware therefore
sees the request first and the response last.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Protocol, runtime_checkable

import httpx

from generic_api_client.messages import Request

logger = logging.getLogger(__name__)

Handler = Callable[[Request], httpx.Response]
MiddlewareFunc = Callable[[Request, Handler], httpx.Response]

# (request, terminal, trace) -> response; trace collects every request handed inwards
_Composed = Callable[[Request, Handler, list[Request]], httpx.Response]


@runtime_checkable
class Middleware(Protocol):
    """Intercepts a request on its way to the transport.

    ``handle`` may replace the request before calling ``next_``, replace the
    response after it, return a response without calling ``next_`` at all,
    or raise.
    """

    def handle(self, request: Request, next_: Handler) -> httpx.Response: ...


def _as_function(middleware: Middleware | MiddlewareFunc) -> MiddlewareFunc:
    if isinstance(middleware, Middleware):
        return middleware.handle
    if callable(middleware):
        return middleware
    raise TypeError(f"Expected a middleware or a callable, got {type(middleware).__name__}")


def _terminal(request: Request, terminal: Handler, trace: list[Request]) -> httpx.Response:
    trace.append(request)
    return terminal(request)


def _wrap(layer: MiddlewareFunc, inner: _Composed) -> _Composed:
    def composed(request: Request, terminal: Handler, trace: list[Request]) -> httpx.Response:
        trace.append(request)
        return layer(request, lambda next_request: inner(next_request, terminal, trace))

    return composed


class MiddlewareChain:
    """An immutable, ordered chain of middleware.

    Args:
        middleware: Middleware objects or ``(request, next_)`` callables,
            outermost first
    """

    def __init__(self, middleware: Iterable[Middleware | MiddlewareFunc] = ()) -> None:
        self._middleware = tuple(middleware)

        composed: _Composed = _terminal
        for layer in reversed(self._middleware):
            composed = _wrap(_as_function(layer), composed)
        self._composed = composed

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware | MiddlewareFunc]:
        return iter(self._middleware)

    def append(self, *middleware: Middleware | MiddlewareFunc) -> "MiddlewareChain":
        """Return a new chain with ``middleware`` added innermost."""
        return MiddlewareChain(self._middleware + middleware)

    def dispatch(self, terminal: Handler, request: Request) -> tuple[Request, httpx.Response]:
        """Run ``request`` through every middleware and finally ``terminal``.

        Returns:
            The request that reached the transport (or, when a middleware
            answered on its own, the last request handed to a middleware)
            and the response after all post-processing.
        """
        if not self._middleware:
            return request, terminal(request)

        trace: list[Request] = []
        response = self._composed(request, terminal, trace)
        final_request = trace[-1]
        logger.debug(f"Dispatched {final_request.method} {final_request.url} through {len(self)} middleware")
        return final_request, response
