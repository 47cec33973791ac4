"""Query string, form and JSON encoding of request parameters."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from generic_api_client.errors import SerializationError

Params = Mapping[str, Any] | Sequence[Any]


def _items(params: Params) -> list[tuple[Any, Any]]:
    if isinstance(params, Mapping):
        return list(params.items())
    return list(enumerate(params))


def _scalar(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    return value


def flatten_params(params: Params, prefix: str | None = None) -> list[tuple[str, Any]]:
    """Flatten nested parameters into ordered key/value pairs.

    ``None`` values are skipped, booleans become ``1``/``0``, lists of
    scalars become repeated keys and mappings use bracket notation::

        >>> flatten_params({"q": "phone", "tags": ["a", "b"], "filter": {"brand": "x"}})
        [('q', 'phone'), ('tags', 'a'), ('tags', 'b'), ('filter[brand]', 'x')]

    Containers inside a list are indexed, so ``{"m": [[1, 2]]}`` gives
    ``m[0][0]=1`` and ``m[0][1]=2``.
    """
    pairs: list[tuple[str, Any]] = []

    for key, value in _items(params):
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(flatten_params(value, name))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if isinstance(item, (Mapping, list, tuple)):
                    pairs.extend(flatten_params(item, f"{name}[{index}]"))
                elif item is not None:
                    pairs.append((name, _scalar(item)))
        else:
            pairs.append((name, _scalar(value)))

    return pairs


def encode_query(params: Params) -> httpx.QueryParams:
    return httpx.QueryParams(flatten_params(params))


def encode_form(params: Params) -> bytes:
    """Encode parameters as an ``application/x-www-form-urlencoded`` body."""
    return str(encode_query(params)).encode("ascii")


def encode_json(params: Any) -> bytes:
    """Encode parameters as a JSON body.

    Raises:
        SerializationError: ``params`` holds a value JSON cannot represent
    """
    try:
        return json.dumps(params, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Parameters are not JSON serializable: {e}") from e
