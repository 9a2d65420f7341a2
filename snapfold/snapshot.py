"""
Snapfold Snapshot - Immutable Connection Summary
================================================

A ``Snapshot`` is the value handed to a render callback: the connection phase
of the current source plus at most one payload, either the most recent data
value or the most recent error.

Phases follow the event timeline of a single subscription:

    none     no source attached
    waiting  subscribed, nothing received yet
    active   stream only: at least one event received, source still open
    done     source completed (terminal for that subscription)

Payload rules:
- data and error are mutually exclusive
- a new data or error event replaces the payload wholesale
- a phase change on its own (``in_phase``) keeps the payload

Example:
    >>> snap = Snapshot.with_data(ConnectionPhase.DONE, "hello")
    >>> snap.require_data
    'hello'
    >>> Snapshot.nothing()
    Snapshot(ConnectionPhase.none, None, None)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .errors import InvalidStateError, PropagatedError

T = TypeVar("T")


# ============================================================================
# SENTINEL VALUES
# ============================================================================


class _Missing:
    """Sentinel for an absent payload. ``None`` is a legal data value."""

    __slots__ = ()

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


# ============================================================================
# CONNECTION PHASE
# ============================================================================


class ConnectionPhase(Enum):
    """Where a subscription is in its lifecycle."""

    NONE = "none"
    WAITING = "waiting"
    ACTIVE = "active"
    DONE = "done"

    def __str__(self) -> str:
        return f"ConnectionPhase.{self.value}"


# ============================================================================
# SNAPSHOT
# ============================================================================


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """
    Immutable (phase, data, error) triple.

    Equality is structural so that controllers can skip re-rendering when a
    transition folds to an equal snapshot.
    """

    phase: ConnectionPhase
    data: Any = MISSING
    error: Any = MISSING

    def __post_init__(self):
        if self.data is not MISSING and self.error is not MISSING:
            raise ValueError("Snapshot cannot carry both data and error")

    @classmethod
    def nothing(cls) -> "Snapshot[T]":
        return cls(ConnectionPhase.NONE)

    @classmethod
    def waiting(cls) -> "Snapshot[T]":
        return cls(ConnectionPhase.WAITING)

    @classmethod
    def with_data(cls, phase: ConnectionPhase, value: T) -> "Snapshot[T]":
        return cls(phase, data=value)

    @classmethod
    def with_error(cls, phase: ConnectionPhase, error: Any) -> "Snapshot[T]":
        return cls(phase, error=error)

    def in_phase(self, phase: ConnectionPhase) -> "Snapshot[T]":
        """Same payload, different phase."""
        return Snapshot(phase, data=self.data, error=self.error)

    @property
    def has_data(self) -> bool:
        return self.data is not MISSING

    @property
    def has_error(self) -> bool:
        return self.error is not MISSING

    @property
    def require_data(self) -> T:
        """
        The data value, or raise if there is none.

        Raises:
            PropagatedError: the snapshot holds an error
            InvalidStateError: the snapshot holds neither data nor error
        """
        if self.has_data:
            return self.data
        if self.has_error:
            if isinstance(self.error, BaseException):
                raise PropagatedError(self.error) from self.error
            raise PropagatedError(self.error)
        raise InvalidStateError("Snapshot has neither data nor error")

    def __repr__(self) -> str:
        data = None if self.data is MISSING else self.data
        error = None if self.error is MISSING else self.error
        return f"Snapshot({str(self.phase)}, {data}, {error})"
