"""Tests for the exception hierarchy and status code mapping."""

import httpx
import pytest

from generic_api_client.errors import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    ForbiddenError,
    GenericApiClientError,
    InvalidUrlError,
    MissingPaginationParameterError,
    NoMatchingStubError,
    NotFoundError,
    PaginationError,
    RateLimitError,
    SerializationError,
    ServerError,
    TransportError,
    UnauthorizedError,
    raise_for_status,
)
from generic_api_client.messages import Request, Response


def make_response(status: int, text: str = "", headers=None) -> Response:
    request = Request.build("GET", "https://api.example.com/items")
    return Response.from_httpx(httpx.Response(status, text=text, headers=headers or {}), request)


@pytest.mark.unit
def test_exception_inheritance():
    """Every error derives from GenericApiClientError."""
    for exc_class in (
        ConfigurationError,
        TransportError,
        NoMatchingStubError,
        InvalidUrlError,
        SerializationError,
        PaginationError,
        APIError,
    ):
        assert issubclass(exc_class, GenericApiClientError)

    assert issubclass(MissingPaginationParameterError, PaginationError)
    assert issubclass(ClientError, APIError)
    assert issubclass(ServerError, APIError)
    for exc_class in (BadRequestError, UnauthorizedError, ForbiddenError, NotFoundError, ConflictError, RateLimitError):
        assert issubclass(exc_class, ClientError)


@pytest.mark.unit
def test_error_attributes():
    """Errors keep the details they were raised with."""
    assert NoMatchingStubError("GET", "https://x").method == "GET"
    assert InvalidUrlError("bad", url="::").url == "::"
    assert MissingPaginationParameterError("missing", parameter="limit").parameter == "limit"
    assert ConfigurationError("missing", env_var_name="X").env_var_name == "X"


@pytest.mark.unit
def test_raise_for_status_success_response():
    """2xx responses do not raise."""
    raise_for_status(make_response(200))
    raise_for_status(make_response(204))


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status", "exc_class"),
    [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ConflictError),
        (418, ClientError),
        (500, ServerError),
        (503, ServerError),
        (302, APIError),
    ],
)
def test_raise_for_status_maps_status(status, exc_class):
    """Each status raises its exception with status and response attached."""
    response = make_response(status, text="problem")

    with pytest.raises(exc_class) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == status
    assert exc_info.value.response is response
    assert str(status) in str(exc_info.value)
    assert "problem" in str(exc_info.value)


@pytest.mark.unit
def test_raise_for_status_rate_limit_retry_after():
    """Retry-After is parsed on 429."""
    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(make_response(429, headers={"Retry-After": "30"}))

    assert exc_info.value.retry_after == 30


@pytest.mark.unit
def test_raise_for_status_rate_limit_invalid_retry_after():
    """Unparseable Retry-After leaves retry_after unset."""
    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(make_response(429, headers={"Retry-After": "soon"}))

    assert exc_info.value.retry_after is None
