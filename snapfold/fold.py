"""
Snapfold Fold - Lifecycle Fold Functions
========================================

A fold turns the lifecycle events of one subscription into an accumulator:

    initial()               value before any source is attached
    on_connect(acc)         subscription started
    on_data(acc, value)     value event
    on_error(acc, error)    error event
    on_done(acc)            source completed normally
    on_disconnect(acc)      subscription torn down before completing

``Fold`` is the base class to override (``initial`` is required, the other
hooks default to identity). ``FunctionFold`` builds one from plain callables,
and ``SnapshotFold`` is the default specialization producing ``Snapshot``
values.

Example:
    >>> collector = FunctionFold(
    ...     initial=list,
    ...     on_connect=lambda acc: acc + ["conn"],
    ...     on_data=lambda acc, value: acc + [f"data:{value}"],
    ... )
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

from .snapshot import MISSING, ConnectionPhase, Snapshot

S = TypeVar("S")


class Fold(ABC, Generic[S]):
    """Fold functions for one accumulator type."""

    @abstractmethod
    def initial(self) -> S:
        pass

    def on_connect(self, current: S) -> S:
        return current

    def on_data(self, current: S, value: Any) -> S:
        return current

    def on_error(self, current: S, error: Any) -> S:
        return current

    def on_done(self, current: S) -> S:
        return current

    def on_disconnect(self, current: S) -> S:
        return current

    def unchanged(self, previous: S, current: S) -> bool:
        """
        Whether a transition left nothing new to render.

        Accumulators may be mutated in place, so the base class cannot tell
        and always re-renders.
        """
        return False


class FunctionFold(Fold[S]):
    """Fold assembled from callables. Missing hooks are identity."""

    __slots__ = (
        "_initial",
        "_on_connect",
        "_on_data",
        "_on_error",
        "_on_done",
        "_on_disconnect",
        "_unchanged",
    )

    def __init__(
        self,
        initial: Callable[[], S],
        on_connect: Optional[Callable[[S], S]] = None,
        on_data: Optional[Callable[[S, Any], S]] = None,
        on_error: Optional[Callable[[S, Any], S]] = None,
        on_done: Optional[Callable[[S], S]] = None,
        on_disconnect: Optional[Callable[[S], S]] = None,
        unchanged: Optional[Callable[[S, S], bool]] = None,
    ):
        self._initial = initial
        self._on_connect = on_connect
        self._on_data = on_data
        self._on_error = on_error
        self._on_done = on_done
        self._on_disconnect = on_disconnect
        self._unchanged = unchanged

    def initial(self) -> S:
        return self._initial()

    def on_connect(self, current: S) -> S:
        if self._on_connect is None:
            return current
        return self._on_connect(current)

    def on_data(self, current: S, value: Any) -> S:
        if self._on_data is None:
            return current
        return self._on_data(current, value)

    def on_error(self, current: S, error: Any) -> S:
        if self._on_error is None:
            return current
        return self._on_error(current, error)

    def on_done(self, current: S) -> S:
        if self._on_done is None:
            return current
        return self._on_done(current)

    def on_disconnect(self, current: S) -> S:
        if self._on_disconnect is None:
            return current
        return self._on_disconnect(current)

    def unchanged(self, previous: S, current: S) -> bool:
        if self._unchanged is None:
            return False
        return self._unchanged(previous, current)


class SnapshotFold(Fold[Snapshot]):
    """
    Folds events into ``Snapshot`` values.

    Data and error events replace the payload and move to ``active``; the
    one-shot adapter follows them with ``on_done`` in the same transition, so
    one-shot sources land directly in ``done``. Completion keeps the payload.
    Disconnection resets to ``nothing()``.
    """

    __slots__ = ("_initial_data",)

    def __init__(self, initial_data: Any = MISSING):
        self._initial_data = initial_data

    def initial(self) -> Snapshot:
        if self._initial_data is MISSING:
            return Snapshot.nothing()
        return Snapshot.with_data(ConnectionPhase.NONE, self._initial_data)

    def on_connect(self, current: Snapshot) -> Snapshot:
        return current.in_phase(ConnectionPhase.WAITING)

    def on_data(self, current: Snapshot, value: Any) -> Snapshot:
        return Snapshot.with_data(ConnectionPhase.ACTIVE, value)

    def on_error(self, current: Snapshot, error: Any) -> Snapshot:
        return Snapshot.with_error(ConnectionPhase.ACTIVE, error)

    def on_done(self, current: Snapshot) -> Snapshot:
        return current.in_phase(ConnectionPhase.DONE)

    def on_disconnect(self, current: Snapshot) -> Snapshot:
        return Snapshot.nothing()

    def unchanged(self, previous: Snapshot, current: Snapshot) -> bool:
        # 1 == True == 1.0, but they render differently
        return (
            previous == current
            and type(previous.data) is type(current.data)
            and type(previous.error) is type(current.error)
        )
