"""Core enumerations for HTTP verbs and default resource operations.

Architecture:
    Operations are the logical actions a caller performs on a resource
    (list, get, create, update, delete). Each default operation carries a
    fixed HTTP verb and path convention so resources can build their request
    templates without any per-resource configuration.

Design Decisions:
    - String enums: values double as the operation names used for dispatch
    - Unknown names resolve to GET with an empty path, matching how a
      resource registers an operation it has no convention for

See Also:
    - Request: Uses these mappings to build default templates
    - RestResource: Validates calls against Operation requirements
"""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP verbs a request template may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: str | HttpMethod) -> HttpMethod:
        """Parse a verb case-insensitively.

        Raises:
            ValueError: If the verb is not a known HTTP method
        """
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


class Operation(str, Enum):
    """Default operations every resource may support."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def http_method(self) -> HttpMethod:
        return _VERB_MAP[self]

    @property
    def path_template(self) -> str:
        return ID_PLACEHOLDER if self.requires_id else ""

    @property
    def requires_id(self) -> bool:
        return self in (Operation.GET, Operation.UPDATE, Operation.DELETE)

    @property
    def requires_payload(self) -> bool:
        return self in (Operation.CREATE, Operation.UPDATE)

    @classmethod
    def lookup(cls, name: str | Operation) -> Operation | None:
        """Return the default operation for ``name`` or None for custom names."""
        if isinstance(name, Operation):
            return name
        try:
            return cls(name)
        except ValueError:
            return None


ID_PLACEHOLDER = "{id}"

_VERB_MAP = {
    Operation.LIST: HttpMethod.GET,
    Operation.GET: HttpMethod.GET,
    Operation.CREATE: HttpMethod.POST,
    Operation.UPDATE: HttpMethod.PATCH,
    Operation.DELETE: HttpMethod.DELETE,
}

DEFAULT_OPERATIONS: tuple[str, ...] = tuple(op.value for op in Operation)


def resolve_verb(name: str | Operation) -> HttpMethod:
    """Map a default operation name to its HTTP method (GET for anything else)."""
    op = Operation.lookup(name)
    return op.http_method if op is not None else HttpMethod.GET


def resolve_path(name: str | Operation) -> str:
    """Map a default operation name to its path template ("" for anything else)."""
    op = Operation.lookup(name)
    return op.path_template if op is not None else ""
