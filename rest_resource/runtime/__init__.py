"""Runtime components: event loop runner and REST transport."""

from .loop_runner import LoopRunner
from .rest import HTTPClient, HTTPResponse, RESTTransport

__all__ = [
    "LoopRunner",
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
]
