"""Core components."""

from .config import DEFAULT_CONTENT_TYPE, DEFAULT_USER_AGENT, ClientConfig
from .enums import (
    DEFAULT_OPERATIONS,
    ID_PLACEHOLDER,
    HttpMethod,
    Operation,
    resolve_path,
    resolve_verb,
)
from .exceptions import (
    ClientClosedError,
    ConfigurationError,
    MissingArgument,
    MissingArgumentError,
    ResourceError,
    RestResourceError,
    TransportError,
    TransportFailure,
    UnknownOperation,
    UnknownOperationError,
    UnknownResourceError,
    UnsupportedOperation,
    UnsupportedOperationError,
)
from .request import BoundRequest, Request, is_missing

__all__ = [
    "ClientConfig",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_USER_AGENT",
    "DEFAULT_OPERATIONS",
    "ID_PLACEHOLDER",
    "HttpMethod",
    "Operation",
    "resolve_path",
    "resolve_verb",
    "Request",
    "BoundRequest",
    "is_missing",
    # Exceptions
    "RestResourceError",
    "ResourceError",
    "UnsupportedOperationError",
    "UnknownOperationError",
    "MissingArgumentError",
    "UnknownResourceError",
    "ConfigurationError",
    "TransportError",
    "ClientClosedError",
    "UnsupportedOperation",
    "UnknownOperation",
    "MissingArgument",
    "TransportFailure",
]
