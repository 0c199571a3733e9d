"""Resource facade validating and routing operation calls.

A RestResource is a named REST endpoint grouping ("people") with a set of
registered request templates, one per operation. Each call:

1. Checks that the operation is supported
2. Checks required arguments (ID, payload)
3. Binds a fresh call-scoped request from the template
4. Hands it to the owning client for execution

All validation runs synchronously in the caller's thread, so errors surface
at the call site even when a callback makes the call asynchronous.

See Also:
    - RestClient: Owns resources and executes bound requests
    - Request: Immutable templates registered per operation
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any

from ..core.enums import DEFAULT_OPERATIONS, Operation
from ..core.exceptions import (
    MissingArgumentError,
    UnknownOperationError,
    UnsupportedOperationError,
)
from ..core.request import BoundRequest, Request, is_missing

if TYPE_CHECKING:
    from ..clients.rest_client import RestClient

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class RestResource:
    """A named resource exposing default and custom operations."""

    def __init__(
        self,
        client: RestClient,
        name: str,
        supports: Iterable[str | Operation] = DEFAULT_OPERATIONS,
    ) -> None:
        name = (name or "").strip("/")
        if not name:
            raise ValueError("Resource name must not be empty")

        self._client = client
        self._name = name
        self._supports: list[str] = []
        self._requests: dict[str, Request] = {}

        if isinstance(supports, (str, Operation)):
            raise TypeError("supports must be an iterable of operation names, not a single name")

        for op in supports:
            op_name = op.value if isinstance(op, Operation) else str(op)
            if op_name not in self._supports:
                self._supports.append(op_name)
            self._requests[op_name] = Request.default(op_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, operations={self.operations!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def operations(self) -> tuple[str, ...]:
        return tuple(self._supports)

    def supports(self, operation: str | Operation) -> bool:
        """Check if this resource supports an operation."""
        op_name = operation.value if isinstance(operation, Operation) else operation
        return op_name in self._supports

    def get_request(self, name: str) -> Request | None:
        return self._requests.get(name)

    def register_method(self, request: Request | Mapping[str, Any]) -> Request:
        """Register a custom request, overwriting any entry with the same name.

        Overriding a default operation (e.g. a non-standard ``get`` path) is
        allowed; the name becomes supported if it was not already.
        """
        if not isinstance(request, Request):
            request = Request.from_definition(request)
        if request.name in self._requests:
            logger.debug(
                "Overriding registered request",
                extra={"resource": self._name, "operation": request.name},
            )
        self._requests[request.name] = request
        if request.name not in self._supports:
            self._supports.append(request.name)
        return request

    # Default operations

    def get(self, id: Any, callback: Callback | None = None) -> Any:
        """Fetch a single instance by ID."""
        return self._dispatch(self._prepare(Operation.GET, id=id), callback)

    def list(self, callback: Callback | None = None) -> Any:
        """List the resource collection."""
        return self._dispatch(self._prepare(Operation.LIST), callback)

    def create(self, payload: Any, callback: Callback | None = None) -> Any:
        """Create a new instance from ``payload``."""
        return self._dispatch(self._prepare(Operation.CREATE, payload=payload), callback)

    def update(self, id: Any, payload: Any, callback: Callback | None = None) -> Any:
        """Partially update the instance ``id`` with ``payload``."""
        return self._dispatch(self._prepare(Operation.UPDATE, id=id, payload=payload), callback)

    def delete(self, id: Any, callback: Callback | None = None) -> Any:
        """Delete the instance ``id``."""
        return self._dispatch(self._prepare(Operation.DELETE, id=id), callback)

    def invoke(
        self,
        operation: str | Operation,
        *,
        id: Any = None,
        payload: Any = None,
        callback: Callback | None = None,
    ) -> Any:
        """Call any registered operation, default or custom, by name."""
        return self._dispatch(self._bind(operation, id=id, payload=payload), callback)

    # Awaitable variants

    async def get_async(self, id: Any) -> Any:
        return await self._dispatch_async(self._prepare(Operation.GET, id=id))

    async def list_async(self) -> Any:
        return await self._dispatch_async(self._prepare(Operation.LIST))

    async def create_async(self, payload: Any) -> Any:
        return await self._dispatch_async(self._prepare(Operation.CREATE, payload=payload))

    async def update_async(self, id: Any, payload: Any) -> Any:
        return await self._dispatch_async(
            self._prepare(Operation.UPDATE, id=id, payload=payload)
        )

    async def delete_async(self, id: Any) -> Any:
        return await self._dispatch_async(self._prepare(Operation.DELETE, id=id))

    async def invoke_async(
        self, operation: str | Operation, *, id: Any = None, payload: Any = None
    ) -> Any:
        return await self._dispatch_async(self._bind(operation, id=id, payload=payload))

    # Custom operations via attribute access: people.address(42, callback)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        requests = self.__dict__.get("_requests", {})
        if name not in requests:
            raise self._unknown(name)

        def call(*args: Any, **kwargs: Any) -> Any:
            return self._call_custom(name, args, kwargs)

        call.__name__ = name
        return call

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._requests))

    def _call_custom(self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Map ``(id?, callback?)`` positional arguments onto invoke().

        A single callable argument is the callback; otherwise the first
        argument is the ID (str or int) and the optional second the callback.
        """
        if len(args) > 2:
            raise TypeError(f"{name}() takes at most 2 positional arguments ({len(args)} given)")

        id = kwargs.pop("id", None)
        payload = kwargs.pop("payload", None)
        callback = kwargs.pop("callback", None)
        if kwargs:
            raise TypeError(f"{name}() got unexpected keyword argument(s): {', '.join(kwargs)}")

        if len(args) == 1 and callable(args[0]):
            callback = args[0]
        elif args:
            first = args[0]
            if isinstance(first, bool) or not isinstance(first, (str, int)):
                raise TypeError(
                    f"{name}() expects an ID (str or int) or a callback, got {type(first).__name__}"
                )
            id = first
            if len(args) == 2:
                if not callable(args[1]):
                    raise TypeError(f"{name}() callback must be callable")
                callback = args[1]

        return self.invoke(name, id=id, payload=payload, callback=callback)

    # Validation and binding

    def _prepare(self, op: Operation, *, id: Any = None, payload: Any = None) -> BoundRequest:
        if not self.supports(op):
            raise UnsupportedOperationError(
                f"Resource '{self._name}' does not support '{op.value}'.",
                resource=self._name,
                operation=op.value,
            )

        request = self._requests[op.value]
        if (op.requires_id or request.requires_id) and is_missing(id):
            raise self._missing(op.value, "id", "an ID")
        if op.requires_payload and is_missing(payload):
            raise self._missing(op.value, "payload", "a payload")

        return request.bind(
            id=id if op.requires_id or request.requires_id else None,
            payload=payload if op.requires_payload else None,
        )

    def _bind(self, operation: str | Operation, *, id: Any, payload: Any) -> BoundRequest:
        op = Operation.lookup(operation)
        name = op.value if op is not None else str(operation)

        if name not in self._requests:
            if op is not None:
                return self._prepare(op, id=id, payload=payload)
            raise self._unknown(name)

        if op is not None and self.supports(op):
            # Default names keep their default argument rules
            return self._prepare(op, id=id, payload=payload)

        request = self._requests[name]
        if request.requires_id and is_missing(id):
            raise self._missing(name, "id", "an ID")
        return request.bind(id=id, payload=payload)

    def _missing(self, operation: str, argument: str, label: str) -> MissingArgumentError:
        return MissingArgumentError(
            f"The method '{operation}' on resource '{self._name}' requires {label}. "
            "You provided none.",
            resource=self._name,
            operation=operation,
            argument=argument,
        )

    def _unknown(self, name: str) -> UnknownOperationError:
        return UnknownOperationError(
            f"{type(self).__name__} '{self._name}' does not have a method '{name}'.",
            resource=self._name,
            operation=name,
        )

    # Delegation

    def _dispatch(self, bound: BoundRequest, callback: Callback | None) -> Any | Future:
        logger.debug(
            "Dispatching operation",
            extra={
                "resource": self._name,
                "operation": bound.name,
                "id": bound.id,
                "asynchronous": callback is not None,
            },
        )
        return self._client.execute(bound, self._name, callback)

    async def _dispatch_async(self, bound: BoundRequest) -> Any:
        return await self._client.execute_async(bound, self._name)
