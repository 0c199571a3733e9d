"""Request templates and call-scoped bound requests.

Architecture:
    A ``Request`` is the fixed (verb, path template) pair a resource registers
    for one operation. It never changes after registration. Every call binds
    the template to its own ID and payload, producing a ``BoundRequest`` that
    travels to the transport. Concurrent calls on the same operation
    therefore never share mutable state.

Design Decisions:
    - Frozen dataclasses: templates are safe to share across threads
    - Empty collections count as a missing payload, while 0 is a valid ID
    - IDs are URL-quoted when substituted into the path

See Also:
    - RestResource: Owns templates and binds them per call
    - RESTTransport: Turns a BoundRequest into an HTTP call
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .enums import ID_PLACEHOLDER, HttpMethod, Operation, resolve_path, resolve_verb
from .exceptions import MissingArgumentError

_EMPTY_TYPES = (str, bytes, bytearray, Mapping, list, tuple, set, frozenset)


def is_missing(value: Any) -> bool:
    """Return True when a required argument should be treated as absent.

    None, empty strings and empty collections are missing. Numbers and
    booleans are never missing, so ``get(0)`` is a valid call.
    """
    if value is None:
        return True
    if isinstance(value, _EMPTY_TYPES):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class Request:
    """Immutable template for one callable HTTP operation."""

    name: str
    http_method: HttpMethod
    path_template: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Request name must not be empty")
        object.__setattr__(self, "http_method", HttpMethod.parse(self.http_method))
        object.__setattr__(self, "path_template", self.path_template.strip("/"))

    @classmethod
    def default(cls, name: str | Operation) -> Request:
        """Build the template for a default operation name."""
        value = name.value if isinstance(name, Operation) else name
        return cls(name=value, http_method=resolve_verb(name), path_template=resolve_path(name))

    @classmethod
    def from_definition(cls, definition: Mapping[str, Any]) -> Request:
        """Build a custom template from ``{name, method, http_method}``.

        ``method`` is the path template relative to the resource, e.g.
        ``"{id}/formatted_address"``. ``http_method`` defaults to GET.
        """
        if "name" not in definition:
            raise ValueError("Custom method definition requires a 'name'")
        return cls(
            name=str(definition["name"]),
            http_method=definition.get("http_method", HttpMethod.GET),
            path_template=str(definition.get("method") or ""),
        )

    @property
    def requires_id(self) -> bool:
        return ID_PLACEHOLDER in self.path_template

    def get_name(self) -> str:
        return self.name

    def bind(self, id: Any = None, payload: Any = None) -> BoundRequest:
        """Produce a call-scoped request. Does not validate arguments."""
        return BoundRequest(template=self, id=id, payload=payload)

    def with_id(self, value: Any) -> BoundRequest:
        if is_missing(value):
            raise MissingArgumentError(
                f"The method {self.name} requires an ID. You provided none.",
                operation=self.name,
                argument="id",
            )
        return self.bind(id=value)

    def with_payload(self, value: Any) -> BoundRequest:
        if is_missing(value):
            raise MissingArgumentError(
                f"The method {self.name} requires a payload. You provided none.",
                operation=self.name,
                argument="payload",
            )
        return self.bind(payload=value)


@dataclass(frozen=True)
class BoundRequest:
    """A request template plus the ID and payload of a single call."""

    template: Request
    id: Any = None
    payload: Any = None

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def http_method(self) -> HttpMethod:
        return self.template.http_method

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    def resolved_path(self) -> str:
        """Path relative to the resource with ``{id}`` substituted."""
        path = self.template.path_template
        if ID_PLACEHOLDER not in path:
            return path
        if is_missing(self.id):
            raise MissingArgumentError(
                f"The method {self.name} requires an ID. You provided none.",
                operation=self.name,
                argument="id",
            )
        return path.replace(ID_PLACEHOLDER, quote(str(self.id), safe=""))
