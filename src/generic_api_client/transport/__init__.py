"""Transports performing a single request/response exchange.

Modules:
    base: Transport protocol and the httpx-backed network transport
    fake: In-memory transport answering from stubbed responses
    matchers: Matchers selecting which stub answers a request
"""

from generic_api_client.transport.base import HTTPTransport, Transport
from generic_api_client.transport.fake import FakeResponse, FakeTransport, Stub
from generic_api_client.transport.matchers import Matcher, PredicateMatcher, UrlMatcher, as_matcher

__all__ = [
    "FakeResponse",
    "FakeTransport",
    "HTTPTransport",
    "Matcher",
    "PredicateMatcher",
    "Stub",
    "Transport",
    "UrlMatcher",
    "as_matcher",
]
