"""rest-resource - declarative resources over a REST API.

Describe a resource and the operations it supports, then call them:

    client = RestClient("api.example.com", options={"version": 2})
    people = client.register("people", ["list", "get", "create"])
    people.get(42)                      # GET https://api.example.com/v2/people/42
"""

from .api import RestResource
from .clients import CallResult, RestClient
from .core import (
    DEFAULT_OPERATIONS,
    BoundRequest,
    ClientClosedError,
    ClientConfig,
    ConfigurationError,
    HttpMethod,
    MissingArgument,
    MissingArgumentError,
    Operation,
    Request,
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

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "RestClient",
    "RestResource",
    "CallResult",
    "ClientConfig",
    "Request",
    "BoundRequest",
    "HttpMethod",
    "Operation",
    "DEFAULT_OPERATIONS",
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
