"""Request matchers deciding which stubbed response the fake transport returns."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

import httpx

from generic_api_client.messages import Request


@runtime_checkable
class Matcher(Protocol):
    def match(self, request: Request) -> bool: ...


class UrlMatcher:
    """Matches requests whose full URL, query string included, equals ``url``."""

    def __init__(self, url: str | httpx.URL) -> None:
        self.url = httpx.URL(url) if isinstance(url, str) else url

    def match(self, request: Request) -> bool:
        return request.url == self.url

    def __repr__(self) -> str:
        return f"UrlMatcher({str(self.url)!r})"


class PredicateMatcher:
    """Matches requests for which ``predicate`` returns a truthy value."""

    def __init__(self, predicate: Callable[[Request], bool]) -> None:
        self.predicate = predicate

    def match(self, request: Request) -> bool:
        return bool(self.predicate(request))


def as_matcher(matcher: Matcher | Callable[[Request], bool]) -> Matcher:
    if isinstance(matcher, Matcher):
        return matcher
    if callable(matcher):
        return PredicateMatcher(matcher)
    raise TypeError(f"Expected a matcher or a callable, got {type(matcher).__name__}")
