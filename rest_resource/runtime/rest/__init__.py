"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .transport import RESTTransport, encode_body

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
    "encode_body",
]
