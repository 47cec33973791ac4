"""Ready-made middleware for authentication, static headers, logging and timing."""

import logging
import time
from collections.abc import Callable, Mapping

import httpx

from generic_api_client.messages import Request
from generic_api_client.middleware.chain import Handler

logger = logging.getLogger(__name__)


class BearerTokenMiddleware:
    """Adds ``Authorization: Bearer <token>`` to every request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __repr__(self) -> str:
        return "BearerTokenMiddleware(token='***')"

    def handle(self, request: Request, next_: Handler) -> httpx.Response:
        return next_(request.with_header("Authorization", f"Bearer {self._token}"))


class HeaderMiddleware:
    """Sets a fixed set of headers, overriding values already on the request."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    def handle(self, request: Request, next_: Handler) -> httpx.Response:
        return next_(request.with_headers(self.headers))


class LoggingMiddleware:
    """Logs each request before it is sent and its status once answered."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.log = log or logger
        self.level = level

    def handle(self, request: Request, next_: Handler) -> httpx.Response:
        self.log.log(self.level, f"Performing {request.method} request to {request.url}")
        response = next_(request)
        self.log.log(self.level, f"{request.method} {request.url} returned {response.status_code}")
        return response


class TimingMiddleware:
    """Measures how long the rest of the chain takes to answer.

    Args:
        on_timing: Optional callback receiving the request and elapsed seconds;
            when omitted the duration is logged at debug level
    """

    def __init__(self, on_timing: Callable[[Request, float], None] | None = None) -> None:
        self.on_timing = on_timing

    def handle(self, request: Request, next_: Handler) -> httpx.Response:
        start = time.perf_counter()
        response = next_(request)
        elapsed = time.perf_counter() - start

        if self.on_timing is not None:
            self.on_timing(request, elapsed)
        else:
            logger.debug(f"{request.method} {request.url} took {elapsed:.3f}s")
        return response
