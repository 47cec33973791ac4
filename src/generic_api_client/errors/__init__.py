"""Error types raised by the client."""

from generic_api_client.errors.exceptions import (
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
)
from generic_api_client.errors.handler import raise_for_status

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "ForbiddenError",
    "GenericApiClientError",
    "InvalidUrlError",
    "MissingPaginationParameterError",
    "NoMatchingStubError",
    "NotFoundError",
    "PaginationError",
    "RateLimitError",
    "SerializationError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "raise_for_status",
]
