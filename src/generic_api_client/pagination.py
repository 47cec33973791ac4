"""Pagination policies and the lazy page iterator.

A policy decides, from a completed response alone, whether another page
exists and which request fetches it. The bundled ``SkipLimitPagination``
reads ``total``/``skip``/``limit`` from the body of each page and advances
the ``skip`` query parameter of the request that produced it.

Example:
    ```python
    client = Client(base_url="https://dummyjson.com", pagination=SkipLimitPagination())

    client.json("GET", "/products", {"limit": 25}).for_each_page(
        lambda page: print(len(page.json("products", [])))
    )
    ```
"""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from generic_api_client.errors import MissingPaginationParameterError, PaginationError

if TYPE_CHECKING:
    from generic_api_client.messages import Request, Response

logger = logging.getLogger(__name__)


@runtime_checkable
class PaginationPolicy(Protocol):
    """Decides whether a response has a following page and how to request it."""

    def has_next_page(self, response: "Response") -> bool: ...

    def next_page_request(self, response: "Response") -> "Request": ...


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class SkipLimitPagination:
    """Offset pagination driven by ``skip`` and ``limit``.

    A next page exists while ``total > skip + limit``. Responses whose body is
    missing any of the three fields are treated as not paginated.

    Args:
        total_key: Body field holding the total number of items
        skip_key: Body field and query parameter holding the offset
        limit_key: Body field and query parameter holding the page size
    """

    def __init__(self, total_key: str = "total", skip_key: str = "skip", limit_key: str = "limit") -> None:
        self.total_key = total_key
        self.skip_key = skip_key
        self.limit_key = limit_key

    def has_next_page(self, response: "Response") -> bool:
        total = _as_int(response.json(self.total_key))
        skip = _as_int(response.json(self.skip_key))
        limit = _as_int(response.json(self.limit_key))

        if total is None or skip is None or limit is None:
            return False

        return total > skip + limit

    def next_page_request(self, response: "Response") -> "Request":
        """Build the request for the following page.

        Raises:
            MissingPaginationParameterError: The previous request had no limit
                query parameter
            PaginationError: skip or limit in the query are not integers
        """
        request = response.request
        params = request.url.params

        if self.limit_key not in params:
            raise MissingPaginationParameterError(
                f"Cannot compute next page of {request.url}: query parameter '{self.limit_key}' is missing",
                parameter=self.limit_key,
            )

        limit = _as_int(params[self.limit_key])
        skip = _as_int(params.get(self.skip_key, 0))
        if limit is None or skip is None:
            raise PaginationError(f"Cannot compute next page of {request.url}: skip and limit must be integers")

        next_url = request.url.copy_set_param(self.skip_key, skip + limit)
        logger.debug(f"Next page of {request.url} is {next_url}")
        return request.with_url(next_url)


class PageIterator(Iterator["Response"]):
    """Forward-only iterator over a response and the pages that follow it.

    The first item is the starting response itself. Each later item costs one
    blocking request, sent only when the item is asked for. Once exhausted,
    or once fetching a page has failed, the iterator yields nothing more.
    """

    def __init__(self, response: "Response") -> None:
        self._current = response
        self._started = False
        self._exhausted = False

    def __iter__(self) -> "PageIterator":
        return self

    def __next__(self) -> "Response":
        if self._exhausted:
            raise StopIteration

        if not self._started:
            self._started = True
            return self._current

        if not self._current.has_next_page():
            self._exhausted = True
            raise StopIteration

        # stays exhausted if next_page() raises
        self._exhausted = True
        self._current = self._current.next_page()
        self._exhausted = False
        return self._current
