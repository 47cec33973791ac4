"""Generic API Client - a small synchronous client for JSON/form HTTP APIs.

This library provides:
- A middleware chain wrapped around every request (auth, logging, timing, ...)
- Pluggable pagination turning one response into a lazy sequence of pages
- A fake transport with stubbed responses and assertions over sent requests
- Settings resolution from the environment and .env files

Example:
    ```python
    from generic_api_client import Client, SkipLimitPagination
    from generic_api_client.middleware import BearerTokenMiddleware

    client = Client(
        base_url="https://dummyjson.com",
        pagination=SkipLimitPagination(),
        middleware=[BearerTokenMiddleware("123456789")],
    )

    for page in client.json("GET", "/products", {"limit": 25}).pages():
        print(page.json("products", []))
    ```
"""

from generic_api_client.client import Client, ClientConfig
from generic_api_client.config import ClientSettings, SettingsResolver
from generic_api_client.messages import Request, Response
from generic_api_client.pagination import PageIterator, PaginationPolicy, SkipLimitPagination
from generic_api_client.recording import RecordedExchange, RecordedExchangeLog
from generic_api_client.transport import FakeResponse, FakeTransport, HTTPTransport

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "ClientSettings",
    "FakeResponse",
    "FakeTransport",
    "HTTPTransport",
    "PageIterator",
    "PaginationPolicy",
    "RecordedExchange",
    "RecordedExchangeLog",
    "Request",
    "Response",
    "SettingsResolver",
    "SkipLimitPagination",
    "__version__",
]
