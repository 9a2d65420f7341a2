"""
Snapfold Errors - Exception Types
=================================

Failures raised by the core itself. Errors produced by a source are *data*:
they are stored in the accumulator and handed to the render callback, never
raised here. The classes below cover caller misuse only.
"""

from typing import Any


class SnapfoldError(Exception):
    """Base class for all snapfold exceptions."""

    pass


class PropagatedError(SnapfoldError):
    """
    Raised by ``Snapshot.require_data`` when the snapshot holds an error.

    The stored source error is available as ``error``. When it is an exception
    instance it is also chained as ``__cause__``.
    """

    def __init__(self, error: Any):
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return str(self.error)


class InvalidStateError(SnapfoldError, RuntimeError):
    """Snapshot holds neither data nor error."""

    pass


class LifecycleError(SnapfoldError, RuntimeError):
    """Lifecycle hooks called out of order."""

    pass


class UnsupportedSourceError(SnapfoldError, TypeError):
    """Object is neither a one-shot nor a stream source."""

    pass
