"""
Snapfold Engine - Source-Agnostic Fold State Machine
====================================================

``FoldEngine`` owns the accumulator slot of one controller and applies fold
transitions to it, one at a time, in the order they are issued.

Connections:
    Every subscription gets a fresh ``Connection`` token. Sources deliver
    events through that token; the engine folds an event only while its
    token is the current one and has not reached done. Swapping or removing
    a source replaces the token, which turns every later event from the old
    source into a silent no-op. This is how one-shot sources without a
    cancel primitive are made safe against late completions.

Ordering:
    A transition issued while another one is being folded (a render callback
    that triggers a source, or a source that emits synchronously from
    ``subscribe``) is queued and applied after the current one finishes,
    breadth-first. Each transition runs all of its fold steps, then renders
    at most once.
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, Optional, Sequence, TypeVar

from .fold import Fold

S = TypeVar("S")

Step = Callable[[Any], Any]


class Connection:
    """
    Identity token for one subscription.

    Handed to the source adapters; every event they receive is forwarded
    through it. ``closed`` is set as soon as the source announces completion,
    ``finished`` once that completion has been folded.
    """

    __slots__ = ("_engine", "_serial", "closed", "finished")

    def __init__(self, engine: "FoldEngine", serial: int):
        self._engine = engine
        self._serial = serial
        self.closed = False
        self.finished = False

    @property
    def is_current(self) -> bool:
        return self._engine._connection is self

    def data(self, value: Any) -> None:
        fold = self._engine._fold
        self._engine._deliver(self, (lambda acc: fold.on_data(acc, value),))

    def error(self, error: Any) -> None:
        fold = self._engine._fold
        self._engine._deliver(self, (lambda acc: fold.on_error(acc, error),))

    def done(self) -> None:
        self.closed = True
        self._engine._deliver(self, (self._engine._fold.on_done,), terminal=True)

    def complete(self, value: Any) -> None:
        """One-shot success: data and done folded as one transition."""
        self.closed = True
        fold = self._engine._fold
        self._engine._deliver(
            self,
            (lambda acc: fold.on_data(acc, value), fold.on_done),
            terminal=True,
        )

    def fail(self, error: Any) -> None:
        """One-shot failure: error and done folded as one transition."""
        self.closed = True
        fold = self._engine._fold
        self._engine._deliver(
            self,
            (lambda acc: fold.on_error(acc, error), fold.on_done),
            terminal=True,
        )

    def __repr__(self) -> str:
        if self.finished:
            state = "finished"
        elif self.is_current:
            state = "current"
        else:
            state = "stale"
        return f"Connection(#{self._serial}, {state})"


class _Transition:
    """Queued fold steps. ``connection`` is None for lifecycle transitions."""

    __slots__ = ("connection", "steps", "terminal", "force_render")

    def __init__(
        self,
        connection: Optional[Connection],
        steps: Sequence[Step],
        terminal: bool = False,
        force_render: bool = False,
    ):
        self.connection = connection
        self.steps = steps
        self.terminal = terminal
        self.force_render = force_render


class FoldEngine(Generic[S]):
    """
    Accumulator slot plus the connect/event/disconnect state machine.

    Args:
        fold: Fold functions producing the accumulator
        render: Called with the accumulator after every transition that
            changed it. Its return value is kept as ``output``.
    """

    __slots__ = (
        "_fold",
        "_render",
        "_summary",
        "_connection",
        "_serial",
        "_pending",
        "_is_folding",
        "_output",
    )

    def __init__(self, fold: Fold[S], render: Callable[[S], Any]):
        self._fold = fold
        self._render = render
        self._summary = fold.initial()
        self._connection: Optional[Connection] = None
        self._serial = 0
        self._pending: Deque[_Transition] = deque()
        self._is_folding = False
        self._output = None

    @property
    def summary(self) -> S:
        """Current accumulator value."""
        return self._summary

    @property
    def output(self) -> Any:
        """Return value of the most recent render call."""
        return self._output

    @property
    def connection(self) -> Optional[Connection]:
        return self._connection

    # ------------------------------------------------------------------------
    # Lifecycle transitions
    # ------------------------------------------------------------------------

    def open(self) -> Connection:
        """
        Start a new connection without folding anything yet.

        The caller folds ``connect_steps()`` in the same transition as the
        teardown of the previous connection.
        """
        self._serial += 1
        self._connection = Connection(self, self._serial)
        logging.debug(f"Opened {self._connection!r}")
        return self._connection

    def close(self) -> Sequence[Step]:
        """
        Detach the current connection and return the teardown steps.

        A connection that never completed is folded through ``on_disconnect``.
        A completed one already had its last event, so the accumulator goes
        back to ``initial()`` instead.
        Nothing is folded here so that teardown and reconnect can be applied
        as a single transition.
        """
        connection = self._connection
        if connection is None:
            return ()
        self._connection = None
        if connection.finished:
            logging.debug(f"Released completed {connection!r}")
            return (self._reset_step,)
        # a completion still sitting in the queue is dropped as stale
        logging.debug(f"Disconnected {connection!r}")
        return (self._fold.on_disconnect,)

    def _reset_step(self, current: S) -> S:
        return self._fold.initial()

    def reset(self) -> None:
        """
        Forget the current connection without folding (unmount).

        Transitions still queued behind a running render are dropped too, so
        nothing is folded or rendered after this returns.
        """
        if self._connection is not None:
            logging.debug(f"Dropped {self._connection!r} without disconnect")
        if self._pending:
            logging.debug(f"Dropped {len(self._pending)} queued transition(s)")
            self._pending.clear()
        self._connection = None

    def connect_steps(self) -> Sequence[Step]:
        return (self._fold.on_connect,)

    def transition(self, steps: Sequence[Step], force_render: bool = False) -> None:
        """Fold lifecycle steps as one transition."""
        if not steps and not force_render:
            return
        self._pending.append(_Transition(None, steps, force_render=force_render))
        self._drain()

    # ------------------------------------------------------------------------
    # Event delivery
    # ------------------------------------------------------------------------

    def _deliver(
        self, connection: Connection, steps: Sequence[Step], terminal: bool = False
    ) -> None:
        if not connection.is_current:
            logging.debug(f"Discarded event from {connection!r}")
            return
        self._pending.append(_Transition(connection, steps, terminal=terminal))
        self._drain()

    def _drain(self) -> None:
        """Apply queued transitions in FIFO order. Re-entrant calls return."""
        if self._is_folding:
            return

        self._is_folding = True
        try:
            while self._pending:
                transition = self._pending.popleft()
                connection = transition.connection
                if connection is not None:
                    # state may have changed while this transition was queued
                    if not connection.is_current or connection.finished:
                        logging.debug(f"Discarded queued event from {connection!r}")
                        continue
                    if transition.terminal:
                        connection.finished = True

                previous = self._summary
                current = previous
                for step in transition.steps:
                    current = step(current)
                self._summary = current

                if transition.force_render or not self._fold.unchanged(
                    previous, current
                ):
                    self._output = self._render(current)
        finally:
            self._is_folding = False
