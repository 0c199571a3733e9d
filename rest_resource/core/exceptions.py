"""Custom exception hierarchy."""

from __future__ import annotations


class RestResourceError(Exception):
    """Base exception for all library errors."""

    pass


class ResourceError(RestResourceError):
    """A call on a resource failed validation before dispatch."""

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.resource = resource
        self.operation = operation


class UnsupportedOperationError(ResourceError):
    """Operation is not in the resource's supported set."""

    pass


class UnknownOperationError(ResourceError, AttributeError):
    """No registered request matches the operation name.

    Subclasses AttributeError so attribute-style dispatch on a resource
    behaves like a missing attribute (``hasattr`` and ``getattr`` defaults).
    """

    pass


class MissingArgumentError(ResourceError, ValueError):
    """A required ID or payload was None or empty."""

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        operation: str | None = None,
        argument: str | None = None,
    ) -> None:
        super().__init__(message, resource=resource, operation=operation)
        self.argument = argument


class UnknownResourceError(RestResourceError, AttributeError):
    """Client has no resource registered under the requested name."""

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class ConfigurationError(RestResourceError, ValueError):
    """Client options are invalid."""

    pass


class TransportError(RestResourceError):
    """The underlying HTTP call failed.

    ``status_code`` is set for non-2xx responses and None for network,
    TLS and timeout failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url


class ClientClosedError(RestResourceError):
    """Client was used after close()."""

    pass


# Short names used throughout the design notes
UnsupportedOperation = UnsupportedOperationError
UnknownOperation = UnknownOperationError
MissingArgument = MissingArgumentError
TransportFailure = TransportError
