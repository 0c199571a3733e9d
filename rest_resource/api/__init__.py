"""Resource-level API."""

from .resource import RestResource

__all__ = ["RestResource"]
