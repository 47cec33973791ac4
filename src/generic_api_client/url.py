"""URL building for client calls."""

import httpx

from generic_api_client.encoding import Params, encode_query
from generic_api_client.errors import InvalidUrlError


def is_absolute_url(url: str) -> bool:
    """Return True when ``url`` parses and carries both a scheme and a host."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return bool(parsed.scheme and parsed.host)


def build_url(method: str, url: str, params: Params | None = None, base_url: str | None = None) -> httpx.URL:
    """Build the URL for a call.

    Absolute URLs are used verbatim, anything else is appended to
    ``base_url`` when one is given. For GET requests ``params`` are merged
    into the query string, replacing keys already present.

    Raises:
        InvalidUrlError: The resulting URL cannot be parsed
    """
    if base_url is not None and not is_absolute_url(url):
        url = f"{base_url}{url}"

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidUrlError(f"Invalid URL {url!r}: {e}", url=url) from e

    if method.upper() == "GET" and params:
        parsed = parsed.copy_merge_params(encode_query(params))

    return parsed
