"""
Snapfold Subscriptions - Source Adapters
========================================

One adapter per kind of source, all driving the same ``FoldEngine``:

    NoSubscription       absent source, never connects
    OneShotSubscription  single completion, no cancel primitive
    StreamSubscription   event stream with a cancellable handle

``subscription_for`` picks the variant for a source object. The set is closed:
anything that is not recognised raises ``UnsupportedSourceError``.

Each adapter is used in three steps by the controller:

    steps = adapter.open(engine)   # new Connection, connect fold steps
    adapter.start()                # register / subscribe
    adapter.cancel()               # teardown, before the next adapter opens
"""

import asyncio
import inspect
import logging
from typing import Any, Optional, Sequence

from .engine import Connection, FoldEngine, Step
from .errors import UnsupportedSourceError
from .sources import AsyncIterableSource, FutureSource


class NoSubscription:
    """Placeholder adapter for an absent source."""

    __slots__ = ()

    source = None

    def open(self, engine: FoldEngine) -> Sequence[Step]:
        return ()

    def start(self) -> None:
        pass

    def cancel(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NoSubscription()"


class OneShotSubscription:
    """
    Adapter for a one-shot source.

    The completion continuations are bound to the ``Connection`` opened for
    this adapter. Once the controller moves on, that connection is stale and
    a late completion folds nothing.
    """

    __slots__ = ("source", "_completion", "_connection")

    def __init__(self, source: Any, completion: Optional[Any] = None):
        self.source = source
        self._completion = completion if completion is not None else source
        self._connection: Optional[Connection] = None

    def open(self, engine: FoldEngine) -> Sequence[Step]:
        self._connection = engine.open()
        return engine.connect_steps()

    def start(self) -> None:
        connection = self._connection
        self._completion.register_completion(connection.complete, connection.fail)

    def cancel(self) -> None:
        # nothing to cancel; the stale connection discards the completion
        if self._connection is not None and not self._connection.closed:
            logging.debug(f"Abandoned pending completion of {self.source!r}")

    def __repr__(self) -> str:
        return f"OneShotSubscription({self.source!r})"


class StreamSubscription:
    """
    Adapter for a stream source.

    The handle returned by ``subscribe`` is cancelled on teardown unless the
    stream already announced completion. Handles exposing ``dispose()``
    instead of ``cancel()`` (Rx disposables) are accepted.
    """

    __slots__ = ("source", "_stream", "_connection", "_handle", "_cancelled")

    def __init__(self, source: Any, stream: Optional[Any] = None):
        self.source = source
        self._stream = stream if stream is not None else source
        self._connection: Optional[Connection] = None
        self._handle = None
        self._cancelled = False

    def open(self, engine: FoldEngine) -> Sequence[Step]:
        self._connection = engine.open()
        return engine.connect_steps()

    def start(self) -> None:
        connection = self._connection
        handle = self._stream.subscribe(
            connection.data, connection.error, connection.done
        )
        self._handle = handle
        # torn down while subscribe was still running
        if self._cancelled or not connection.is_current:
            self._cancelled = True
            self._release(handle)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._handle is not None:
            self._release(self._handle)

    def _release(self, handle: Any) -> None:
        if self._connection.closed:
            return
        cancel = getattr(handle, "cancel", None)
        if cancel is None:
            cancel = handle.dispose
        cancel()
        logging.debug(f"Cancelled subscription to {self.source!r}")

    def __repr__(self) -> str:
        return f"StreamSubscription({self.source!r})"


def subscription_for(source: Any):
    """
    Select the adapter variant for ``source``.

    Capabilities are probed with ``hasattr`` in this order: explicit one-shot
    (``register_completion``), explicit stream (``subscribe``), awaitable,
    async iterable.
    """
    if source is None:
        return NoSubscription()
    if hasattr(source, "register_completion"):
        return OneShotSubscription(source)
    if hasattr(source, "subscribe"):
        return StreamSubscription(source)
    if asyncio.isfuture(source) or inspect.isawaitable(source):
        return OneShotSubscription(source, FutureSource(source))
    if hasattr(source, "__aiter__"):
        return StreamSubscription(source, AsyncIterableSource(source))
    raise UnsupportedSourceError(
        f"{type(source).__name__} is neither a one-shot nor a stream source"
    )
