"""In-memory missing-permissions cache."""

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryPermissionsCache:
    """Request-scoped compute-or-wait cache.

    Completed values (including ``None``) are stored as-is and returned
    by reference on every later lookup. When ``compute`` returns an
    awaitable, the pending task is stored instead so concurrent callers
    of the same key await one computation. A task that fails or is
    cancelled is removed, never stored as a completed value.

    The lock makes check-then-store atomic for hosts resolving sibling
    fields in threads. It is reentrant so that ``compute`` may consult
    the cache for another key.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._waiters: dict[str, int] = {}
        self._lock = threading.RLock()

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the value stored under ``key``, computing it at most once.

        Args:
            key: The cache key.
            compute: Zero-argument callable producing the value, or an
                awaitable resolving to it.

        Returns:
            The cached value, or a coroutine resolving to it while the
            computation is pending.
        """
        with self._lock:
            if key in self._entries:
                entry = self._entries[key]
                if isinstance(entry, asyncio.Future):
                    return self._wait(key, entry)
                return entry

            value = compute()
            if not inspect.isawaitable(value):
                self._entries[key] = value
                return value

            task = asyncio.ensure_future(value)
            self._entries[key] = task
            task.add_done_callback(partial(self._settle, key))
            return self._wait(key, task)

    async def _wait(self, key: str, task: "asyncio.Future[Any]") -> Any:
        with self._lock:
            self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            with self._lock:
                abandoned = self._waiters.get(key, 0) <= 1
            if abandoned and not task.done():
                logger.debug(f"Abandoning permissions check for {key}")
                task.cancel()
            raise
        finally:
            with self._lock:
                remaining = self._waiters.get(key, 0) - 1
                if remaining > 0:
                    self._waiters[key] = remaining
                else:
                    self._waiters.pop(key, None)

    def _settle(self, key: str, task: "asyncio.Future[Any]") -> None:
        with self._lock:
            if self._entries.get(key) is not task:
                return
            if task.cancelled() or task.exception() is not None:
                del self._entries[key]
            else:
                self._entries[key] = task.result()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries and not isinstance(
                self._entries[key], asyncio.Future
            )

    def __len__(self) -> int:
        """Return the number of completed entries."""
        with self._lock:
            return sum(
                1
                for entry in self._entries.values()
                if not isinstance(entry, asyncio.Future)
            )

    def clear(self) -> None:
        """Drop every entry, cancelling pending computations."""
        with self._lock:
            pending = [
                entry
                for entry in self._entries.values()
                if isinstance(entry, asyncio.Future)
            ]
            self._entries.clear()
        for task in pending:
            task.cancel()
