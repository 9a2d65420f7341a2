"""
Snapfold Controller - Mount/Update/Unmount Binding
==================================================

``LifecycleController`` is the only entry point the owning component talks
to. It exposes exactly three hooks:

    mount(source)                first build, with an optional source
    update(old_source, new_source)  rebuild, possibly with another source
    unmount()                    component removed

Sources are compared by identity. Presenting the same object again keeps the
running subscription; presenting a different one (or ``None``) tears the old
subscription down and attaches the new one in a single transition, so the
render callback sees one consistent accumulator per change.

Example:
    >>> builder = SnapshotBuilder(lambda snapshot: repr(snapshot))
    >>> builder.mount(None)
    >>> builder.output
    'Snapshot(ConnectionPhase.none, None, None)'
"""

import logging
from typing import Any, Callable, Generic, TypeVar

from .engine import FoldEngine
from .errors import LifecycleError, UnsupportedSourceError
from .fold import Fold, SnapshotFold
from .snapshot import MISSING, Snapshot
from .subscriptions import NoSubscription, subscription_for

S = TypeVar("S")


class LifecycleController(Generic[S]):
    """
    Binds a ``FoldEngine`` to a component's lifecycle.

    Args:
        fold: Fold functions for the accumulator
        render: Pure callback invoked with the accumulator whenever it
            changes; its return value is exposed as ``output``
    """

    __slots__ = ("_engine", "_subscription", "_is_mounted", "_is_unmounted")

    def __init__(self, fold: Fold[S], render: Callable[[S], Any]):
        self._engine: FoldEngine[S] = FoldEngine(fold, render)
        self._subscription = NoSubscription()
        self._is_mounted = False
        self._is_unmounted = False

    @property
    def summary(self) -> S:
        """Current accumulator value."""
        return self._engine.summary

    @property
    def output(self) -> Any:
        """What the render callback returned last."""
        return self._engine.output

    @property
    def source(self) -> Any:
        """Source the live subscription is attached to, or None."""
        return self._subscription.source

    @property
    def is_mounted(self) -> bool:
        return self._is_mounted

    def mount(self, source: Any = None) -> None:
        """
        Attach the first source and render once.

        Equivalent to an update from ``None`` to ``source``, except that the
        render callback is always invoked: it is the first build.
        """
        if self._is_mounted or self._is_unmounted:
            raise LifecycleError("Controller can only be mounted once")
        self._is_mounted = True
        try:
            self._attach(source, force_render=True)
        except UnsupportedSourceError:
            self._is_mounted = False
            raise

    def update(self, old_source: Any, new_source: Any) -> None:
        """Rebuild with ``new_source``. Identical sources are a no-op."""
        if not self._is_mounted:
            raise LifecycleError("update() called on a controller that is not mounted")
        current = self._subscription.source
        if old_source is not current:
            logging.debug(
                f"update() from {old_source!r} while attached to {current!r}"
            )
        if new_source is current:
            return
        logging.debug(f"Swapping source {current!r} -> {new_source!r}")
        self._attach(new_source)

    def unmount(self) -> None:
        """Cancel the live subscription. Nothing is folded or rendered."""
        if not self._is_mounted:
            raise LifecycleError("unmount() called on a controller that is not mounted")
        self._is_mounted = False
        self._is_unmounted = True
        self._subscription.cancel()
        self._subscription = NoSubscription()
        self._engine.reset()

    def _attach(self, source: Any, force_render: bool = False) -> None:
        # select first so an unsupported source leaves the old one running
        subscription = subscription_for(source)

        self._subscription.cancel()
        steps = list(self._engine.close())
        steps.extend(subscription.open(self._engine))
        self._subscription = subscription

        self._engine.transition(steps, force_render=force_render)
        # render may already have swapped to another source
        if self._subscription is subscription:
            subscription.start()

    def __repr__(self) -> str:
        state = "mounted" if self._is_mounted else "unmounted"
        return f"{type(self).__name__}({self._subscription!r}, {state})"


class SnapshotBuilder(LifecycleController[Snapshot]):
    """
    Controller folding its source into ``Snapshot`` values.

    ``initial_data`` seeds the snapshot before the first source connects, and
    again whenever a source that already completed is removed or swapped.
    Swapping away from a source that is still open disconnects it instead,
    which clears the payload: the next source then starts from
    ``Snapshot.waiting()`` without ``initial_data``.

    Args:
        render: Called with each new ``Snapshot``
        initial_data: Data shown before the source delivers anything
    """

    __slots__ = ()

    def __init__(self, render: Callable[[Snapshot], Any], initial_data: Any = MISSING):
        super().__init__(SnapshotFold(initial_data), render)
