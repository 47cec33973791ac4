"""Append-only log of sent requests and assertions over it."""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from threading import Lock

from generic_api_client.messages import Request, Response

logger = logging.getLogger(__name__)

RequestPredicate = Callable[[Request], bool]
FailureReporter = Callable[[bool, str], None]


def raise_assertion_error(passed: bool, message: str) -> None:
    """Default failure reporter: raise ``AssertionError`` when a check fails."""
    if not passed:
        raise AssertionError(message)


@dataclass(frozen=True)
class RecordedExchange:
    request: Request
    response: Response


class RecordedExchangeLog:
    """Every exchange a client completed, in the order they were sent.

    Args:
        failure_reporter: Called with ``(passed, message)`` by the assertion
            helpers; defaults to raising ``AssertionError``
    """

    def __init__(self, failure_reporter: FailureReporter | None = None) -> None:
        self._exchanges: list[RecordedExchange] = []
        self._lock = Lock()
        self.failure_reporter = failure_reporter or raise_assertion_error

    def __len__(self) -> int:
        return len(self._exchanges)

    def __iter__(self) -> Iterator[RecordedExchange]:
        return iter(self.recorded())

    def append(self, request: Request, response: Response) -> RecordedExchange:
        exchange = RecordedExchange(request, response)
        with self._lock:
            self._exchanges.append(exchange)
        logger.debug(f"Recorded {request.method} {request.url} -> {response.status_code}")
        return exchange

    def recorded(self, predicate: RequestPredicate | None = None) -> list[RecordedExchange]:
        """Return recorded exchanges, optionally only those whose request matches ``predicate``."""
        with self._lock:
            exchanges = list(self._exchanges)
        if predicate is None:
            return exchanges
        return [exchange for exchange in exchanges if predicate(exchange.request)]

    def assert_sent(self, predicate: RequestPredicate, message: str | None = None) -> None:
        self.failure_reporter(
            len(self.recorded(predicate)) > 0,
            message or "An expected request was not recorded.",
        )

    def assert_not_sent(self, predicate: RequestPredicate, message: str | None = None) -> None:
        matches = self.recorded(predicate)
        self.failure_reporter(
            len(matches) == 0,
            message
            or "An unexpected request was recorded: "
            + ", ".join(f"{exchange.request.method} {exchange.request.url}" for exchange in matches),
        )

    def assert_sent_count(self, count: int) -> None:
        self.failure_reporter(
            len(self) == count,
            f"Expected {count} recorded requests, found {len(self)}.",
        )
