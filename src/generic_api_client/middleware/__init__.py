"""Middleware wrapping every request sent by a client.

A middleware is either an object with a ``handle(request, next_)`` method or a
plain callable with the same signature.

Example:
    ```python
    from generic_api_client.middleware import BearerTokenMiddleware, LoggingMiddleware


    def add_trace_id(request, next_):
        return next_(request.with_header("X-Trace-Id", "abc123"))


    client = Client(middleware=[BearerTokenMiddleware("secret"), LoggingMiddleware(), add_trace_id])
    ```
"""

from generic_api_client.middleware.chain import Handler, Middleware, MiddlewareChain, MiddlewareFunc
from generic_api_client.middleware.common import (
    BearerTokenMiddleware,
    HeaderMiddleware,
    LoggingMiddleware,
    TimingMiddleware,
)

__all__ = [
    "BearerTokenMiddleware",
    "Handler",
    "HeaderMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareChain",
    "MiddlewareFunc",
    "TimingMiddleware",
]
