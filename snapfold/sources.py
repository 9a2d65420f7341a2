"""
Snapfold Sources - Asynchronous Source Capabilities
===================================================

The core never implements sources; it only relies on two capabilities:

**One-shot source**: ``register_completion(on_value, on_error)`` calls at most
one of the two continuations exactly once, at some later point, possibly
never. There is no way to cancel it.

**Stream source**: ``subscribe(on_data, on_error, on_done)`` returns a handle
whose ``cancel()`` stops delivery synchronously and may be called any number
of times. Rx observables fit this shape as-is (their handle is a disposable
with ``dispose()``).

Python-native objects are wrapped on attach:

- asyncio futures, tasks and other awaitables → ``FutureSource``
- async iterables (async generators, ``aiter``-able objects) →
  ``AsyncIterableSource``

Both wrappers need a running event loop at attach time.
"""

import asyncio
import logging
from typing import Any, AsyncIterable, Awaitable, Callable, Optional, Protocol

OnValue = Callable[[Any], None]
OnError = Callable[[Any], None]
OnDone = Callable[[], None]


# ============================================================================
# Protocols (Documentation Only - NOT for runtime checks)
# ============================================================================


class OneShotSource(Protocol):
    """A producer of at most one value or one error."""

    def register_completion(self, on_value: OnValue, on_error: OnError) -> None:
        ...


class CancellableHandle(Protocol):
    """Live stream subscription. ``cancel`` is idempotent."""

    def cancel(self) -> Any:
        ...


class StreamSource(Protocol):
    """A producer of zero or more value/error events, optionally completing."""

    def subscribe(
        self, on_data: OnValue, on_error: OnError, on_done: OnDone
    ) -> CancellableHandle:
        ...


# ============================================================================
# Awaitables
# ============================================================================


class FutureSource:
    """
    One-shot view of an asyncio future or awaitable.

    Coroutines are scheduled as tasks on first registration. A cancelled
    future completes with its ``CancelledError`` as the error payload.
    """

    __slots__ = ("_awaitable", "_future")

    def __init__(self, awaitable: Awaitable[Any]):
        self._awaitable = awaitable
        self._future: Optional[asyncio.Future] = None

    @property
    def future(self) -> asyncio.Future:
        if self._future is None:
            self._future = asyncio.ensure_future(self._awaitable)
        return self._future

    def register_completion(self, on_value: OnValue, on_error: OnError) -> None:
        def on_future_done(future: asyncio.Future) -> None:
            try:
                value = future.result()
            except (asyncio.CancelledError, Exception) as e:
                on_error(e)
            else:
                on_value(value)

        self.future.add_done_callback(on_future_done)

    def __repr__(self) -> str:
        return f"FutureSource({self._awaitable!r})"


# ============================================================================
# Async iterables
# ============================================================================


class _PumpHandle:
    """Handle for an ``AsyncIterableSource`` subscription."""

    __slots__ = ("_task", "cancelled")

    def __init__(self):
        self._task: Optional[asyncio.Task] = None
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()


class AsyncIterableSource:
    """
    Stream view of an async iterable, pumped by an asyncio task.

    An exception raised while iterating is delivered as an error event and
    ends the stream (async iterators cannot resume after raising).
    """

    __slots__ = ("_iterable",)

    def __init__(self, iterable: AsyncIterable[Any]):
        self._iterable = iterable

    def subscribe(self, on_data: OnValue, on_error: OnError, on_done: OnDone):
        handle = _PumpHandle()
        handle._task = asyncio.ensure_future(
            self._pump(handle, on_data, on_error, on_done)
        )
        return handle

    async def _pump(
        self, handle: _PumpHandle, on_data: OnValue, on_error: OnError, on_done: OnDone
    ) -> None:
        try:
            async for value in self._iterable:
                if handle.cancelled:
                    return
                self._notify(on_data, value)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not handle.cancelled:
                self._notify(on_error, e)
        if not handle.cancelled:
            self._notify(on_done)

    @staticmethod
    def _notify(callback: Callable, *args: Any) -> None:
        try:
            callback(*args)
        except Exception as e:
            logging.error(f"Error in async source notification: {e}")

    def __repr__(self) -> str:
        return f"AsyncIterableSource({self._iterable!r})"
