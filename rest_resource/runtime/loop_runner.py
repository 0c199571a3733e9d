"""Background event loop for dispatching coroutines off the caller's thread.

Architecture:
    The HTTP stack is asyncio-based (aiohttp), while resource calls are
    plain method calls that either block or hand back a future. A single
    event loop runs in a daemon thread; callers submit coroutines and get a
    ``concurrent.futures.Future`` they can block on, attach callbacks to, or
    wrap for use from another event loop.

Design Decisions:
    - Lazy start: no thread is spawned until the first submission
    - One loop per client: the aiohttp session is bound to this loop
    - No ordering between submissions; each coroutine is an independent task
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

from ..core.exceptions import ClientClosedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoopRunner:
    """Runs an asyncio event loop in a dedicated daemon thread."""

    def __init__(self, name: str = "rest-resource-loop") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The runner's loop, starting the thread if needed."""
        with self._lock:
            if self._stopped:
                raise ClientClosedError("Event loop runner has been stopped")
            if self._loop is None:
                self._start()
            assert self._loop is not None
            return self._loop

    def _start(self) -> None:
        loop = asyncio.new_event_loop()
        started = threading.Event()

        def _run() -> None:
            asyncio.set_event_loop(loop)
            loop.call_soon(started.set)
            loop.run_forever()

        self._thread = threading.Thread(target=_run, name=self._name, daemon=True)
        self._thread.start()
        started.wait()
        self._loop = loop
        logger.debug("Event loop thread started", extra={"loop_thread": self._name})

    def in_loop_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    def submit(self, coro: Coroutine[Any, Any, T]) -> Future[T]:
        """Schedule ``coro`` on the loop and return a thread-safe future."""
        try:
            loop = self.loop
        except ClientClosedError:
            coro.close()
            raise
        return asyncio.run_coroutine_threadsafe(coro, loop)

    def stop(self, cleanup: Coroutine[Any, Any, Any] | None = None, timeout: float = 5.0) -> None:
        """Run an optional cleanup coroutine, cancel pending tasks and join the thread.

        Idempotent; later calls are no-ops.
        """
        with self._lock:
            if self._stopped:
                if cleanup is not None:
                    cleanup.close()
                return
            self._stopped = True
            loop, thread = self._loop, self._thread

        if loop is None or thread is None:
            if cleanup is not None:
                cleanup.close()
            return

        async def _shutdown() -> None:
            if cleanup is not None:
                await cleanup
            current = asyncio.current_task()
            pending = [t for t in asyncio.all_tasks() if t is not current]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if threading.current_thread() is thread:
            # Called from a callback on the loop itself: finish asynchronously
            task = loop.create_task(_shutdown())
            task.add_done_callback(lambda _: loop.stop())
            return

        try:
            asyncio.run_coroutine_threadsafe(_shutdown(), loop).result(timeout)
        except Exception:
            logger.exception("Event loop shutdown did not complete cleanly")
        finally:
            loop.call_soon_threadsafe(loop.stop)
            thread.join(timeout)
            if not thread.is_alive():
                loop.close()
            logger.debug("Event loop thread stopped", extra={"loop_thread": self._name})
