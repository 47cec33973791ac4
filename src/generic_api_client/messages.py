"""Immutable request and response values passed through the client.

Every builder method on ``Request`` returns a new instance, so a middleware
can never change a request that an outer middleware (or the exchange log)
still holds a reference to. ``Response`` is frozen as well and remembers the
request that was actually sent, together with the pagination policy and
client needed to fetch the following page.
"""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from generic_api_client.errors import PaginationError, raise_for_status
from generic_api_client.pagination import PageIterator

if TYPE_CHECKING:
    from generic_api_client.pagination import PaginationPolicy

HeaderItems = tuple[tuple[str, str], ...]

_UNDECODABLE = object()


def _freeze_headers(headers: httpx.Headers) -> HeaderItems:
    return tuple(headers.multi_items())


@dataclass(frozen=True)
class Request:
    """An HTTP request that is never modified in place.

    Attributes:
        method: Upper-cased HTTP method
        url: Parsed URL
        header_items: Header name/value pairs, names lower-cased
        content: Request body, or None when there is no body
    """

    method: str
    url: httpx.URL
    header_items: HeaderItems = ()
    content: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if not isinstance(self.url, httpx.URL):
            object.__setattr__(self, "url", httpx.URL(self.url))

    @classmethod
    def build(
        cls,
        method: str,
        url: httpx.URL | str,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> "Request":
        """Create a request from loose arguments."""
        return cls(method, url, _freeze_headers(httpx.Headers(headers or {})), content)

    @property
    def headers(self) -> httpx.Headers:
        """A fresh case-insensitive copy of the headers."""
        return httpx.Headers(list(self.header_items))

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)

    def with_header(self, name: str, value: str) -> "Request":
        headers = self.headers
        headers[name] = value
        return replace(self, header_items=_freeze_headers(headers))

    def with_headers(self, headers: Mapping[str, str]) -> "Request":
        merged = self.headers
        merged.update(headers)
        return replace(self, header_items=_freeze_headers(merged))

    def without_header(self, name: str) -> "Request":
        headers = self.headers
        headers.pop(name, None)
        return replace(self, header_items=_freeze_headers(headers))

    def with_body(self, content: bytes | str | None) -> "Request":
        if isinstance(content, str):
            content = content.encode("utf-8")
        return replace(self, content=content)

    def with_url(self, url: httpx.URL | str) -> "Request":
        return replace(self, url=httpx.URL(url) if isinstance(url, str) else url)

    def with_method(self, method: str) -> "Request":
        return replace(self, method=method)

    def to_httpx(self) -> httpx.Request:
        """Convert to an ``httpx.Request`` for handing to an httpx transport."""
        return httpx.Request(self.method, self.url, headers=list(self.header_items), content=self.content)


class Sender(Protocol):
    """Anything able to send a request and hand back a wrapped response."""

    def send(self, request: Request) -> "Response": ...


@dataclass(frozen=True)
class Response:
    """A completed HTTP response paired with the request that produced it."""

    status_code: int
    header_items: HeaderItems
    content: bytes
    request: Request
    pagination: "PaginationPolicy | None" = None
    client: Sender | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_httpx(
        cls,
        response: httpx.Response,
        request: Request,
        pagination: "PaginationPolicy | None" = None,
        client: Sender | None = None,
    ) -> "Response":
        return cls(
            status_code=response.status_code,
            header_items=_freeze_headers(response.headers),
            content=response.content,
            request=request,
            pagination=pagination,
            client=client,
        )

    @property
    def headers(self) -> httpx.Headers:
        return httpx.Headers(list(self.header_items))

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.to_httpx().text

    @cached_property
    def _decoded(self) -> Any:
        try:
            return json.loads(self.content)
        except ValueError:
            return _UNDECODABLE

    def json(self, path: str | None = None, default: Any = None) -> Any:
        """Read the decoded JSON body, or a value inside it.

        ``path`` is a dotted key such as ``"meta.total"``; numeric segments
        index into lists (``"products.0.id"``). Missing keys and bodies that
        are not JSON return ``default``.
        """
        data = self._decoded
        if data is _UNDECODABLE:
            return default
        if path is None:
            return data

        for segment in str(path).split("."):
            if isinstance(data, Mapping) and segment in data:
                data = data[segment]
            elif isinstance(data, list) and segment.isdigit() and int(segment) < len(data):
                data = data[int(segment)]
            else:
                return default
        return data

    def raise_for_status(self) -> "Response":
        raise_for_status(self)
        return self

    def to_httpx(self) -> httpx.Response:
        # content is already decoded; httpx must not decode it a second time
        headers = [(name, value) for name, value in self.header_items if name != "content-encoding"]
        return httpx.Response(
            self.status_code,
            headers=headers,
            content=self.content,
            request=self.request.to_httpx(),
        )

    def has_next_page(self) -> bool:
        return self.pagination is not None and self.pagination.has_next_page(self)

    def next_page(self) -> "Response":
        """Fetch the following page through the client that sent this response.

        Raises:
            PaginationError: No pagination policy is attached, or the policy
                reports that this is the last page
        """
        if self.pagination is None or self.client is None:
            raise PaginationError("Response has no pagination policy attached")
        if not self.pagination.has_next_page(self):
            raise PaginationError(f"No page follows {self.request.method} {self.request.url}")
        return self.client.send(self.pagination.next_page_request(self))

    def pages(self) -> PageIterator:
        """Lazily iterate over this page and every page after it."""
        return PageIterator(self)

    def for_each_page(self, callback: Callable[["Response"], Any]) -> None:
        for page in self.pages():
            callback(page)
