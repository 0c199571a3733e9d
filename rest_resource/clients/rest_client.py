"""REST client owning connection settings, headers and registered resources.

- register/register_method describe resources and their operations
- execute() runs a bound request synchronously, or in the background when a
  callback is supplied, delivering a CallResult exactly once
- execute_async() awaits the same work from any event loop
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from multidict import CIMultiDict

from ..api.resource import RestResource
from ..core.config import ClientConfig
from ..core.enums import DEFAULT_OPERATIONS, Operation
from ..core.exceptions import ClientClosedError, UnknownResourceError
from ..core.request import BoundRequest, Request
from ..runtime.loop_runner import LoopRunner
from ..runtime.rest.transport import RESTTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallResult:
    """Outcome of an asynchronous call: a decoded body or the error that ended it."""

    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value or raise the error."""
        if self.error is not None:
            raise self.error
        return self.value


ResultCallback = Callable[[CallResult], Any]


class RestClient:
    """Entry point: configure a host, register resources, call them."""

    def __init__(
        self,
        host: str,
        scheme: str = "https",
        options: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
        transport: RESTTransport | None = None,
    ) -> None:
        opts = dict(options or {})
        if timeout is not None:
            opts["timeout"] = timeout
        self._config = ClientConfig.from_options(host, scheme, opts)
        self._transport = transport or RESTTransport(self._config)
        self._runner = LoopRunner()
        self._headers = self._config.default_headers()
        self._headers_lock = threading.Lock()
        self._resources: dict[str, RestResource] = {}
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"RestClient(base_url={self._config.base_url!r}, "
            f"resources={list(self._resources)!r})"
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    # Resource registration

    def register(
        self, name: str, supports: Iterable[str | Operation] = DEFAULT_OPERATIONS
    ) -> RestResource:
        """Register a resource and its default operations.

        Registering an existing name replaces the previous resource.
        """
        resource = RestResource(self, name, supports)
        if resource.name in self._resources:
            logger.debug("Replacing registered resource", extra={"resource": resource.name})
        self._resources[resource.name] = resource
        return resource

    def register_method(
        self, resource_name: str, definition: Request | Mapping[str, Any]
    ) -> Request:
        """Register a custom operation ``{name, method, http_method}`` on a resource."""
        return self.resource(resource_name).register_method(definition)

    def resource(self, name: str) -> RestResource:
        try:
            return self._resources[name.strip("/")]
        except KeyError:
            raise UnknownResourceError(
                f"No resource named '{name}' is registered.", resource=name
            ) from None

    def __getitem__(self, name: str) -> RestResource:
        return self.resource(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip("/") in self._resources

    def __getattr__(self, name: str) -> RestResource:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resource(name)

    # Headers

    def add_header(self, name: str, value: str) -> None:
        """Set a header for all later requests, replacing any default of the same name."""
        with self._headers_lock:
            self._headers[name] = value

    @property
    def headers(self) -> CIMultiDict[str]:
        """Snapshot of the headers the next request will send."""
        with self._headers_lock:
            return CIMultiDict(self._headers)

    # Execution

    def execute(
        self,
        request: BoundRequest,
        resource_name: str,
        callback: ResultCallback | None = None,
    ) -> Any | Future[CallResult]:
        """Execute a bound request against ``resource_name``.

        Without a callback this blocks and returns the decoded body, raising
        TransportError on failure. With a callback it returns a Future
        immediately; the callback receives a CallResult once the HTTP call
        concludes, and the Future resolves to that same CallResult.
        """
        self._ensure_open()
        headers = self.headers

        if callback is None:
            if self._runner.in_loop_thread():
                raise RuntimeError(
                    "Blocking calls cannot run on the client's event loop; "
                    "use the *_async methods instead"
                )
            return self._runner.submit(
                self._transport.send(request, resource_name, headers)
            ).result()

        if not callable(callback):
            raise TypeError("callback must be callable")
        return self._runner.submit(
            self._run_with_callback(request, resource_name, headers, callback)
        )

    async def execute_async(self, request: BoundRequest, resource_name: str) -> Any:
        """Awaitable form of execute(); usable from any event loop."""
        self._ensure_open()
        future = self._runner.submit(self._transport.send(request, resource_name, self.headers))
        return await asyncio.wrap_future(future)

    async def _run_with_callback(
        self,
        request: BoundRequest,
        resource_name: str,
        headers: CIMultiDict[str],
        callback: ResultCallback,
    ) -> CallResult:
        try:
            value = await self._transport.send(request, resource_name, headers)
        except Exception as e:
            logger.warning(
                "Request failed; delivering error to callback",
                extra={"resource": resource_name, "operation": request.name, "error": str(e)},
            )
            result = CallResult(error=e)
        else:
            result = CallResult(value=value)

        await self._deliver(callback, result, resource_name, request.name)
        return result

    async def _deliver(
        self, callback: ResultCallback, result: CallResult, resource_name: str, operation: str
    ) -> None:
        try:
            if inspect.iscoroutinefunction(callback):
                await callback(result)
            else:
                # Sync callbacks run in the default executor so they never block the loop
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(None, callback, result)
        except Exception:
            logger.exception(
                "Response callback raised",
                extra={"resource": resource_name, "operation": operation},
            )

    # Lifecycle

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("RestClient has been closed")

    def close(self) -> None:
        """Close the HTTP session and stop the background loop. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._runner.stop(cleanup=self._transport.close())

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
