"""Client implementations."""

from .rest_client import CallResult, RestClient

__all__ = ["RestClient", "CallResult"]
