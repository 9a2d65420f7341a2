"""
Snapfold - Asynchronous Source to Snapshot Folding

Subscribes to one asynchronous source at a time (a one-shot completion or an
event stream), folds its lifecycle events into an accumulator and re-renders
whenever that accumulator changes, surviving source swaps mid-flight.
"""

# Import the lifecycle binding from controller.py (the public entry point)
from .controller import LifecycleController, SnapshotBuilder

# Import the state machine from engine.py
from .engine import Connection, FoldEngine

# Import exceptions from errors.py
from .errors import (
    InvalidStateError,
    LifecycleError,
    PropagatedError,
    SnapfoldError,
    UnsupportedSourceError,
)

# Import fold functions from fold.py
from .fold import Fold, FunctionFold, SnapshotFold

# Import the snapshot value type from snapshot.py
from .snapshot import MISSING, ConnectionPhase, Snapshot

# Import source capabilities from sources.py
from .sources import (
    AsyncIterableSource,
    CancellableHandle,
    FutureSource,
    OneShotSource,
    StreamSource,
)

# Import adapter variants from subscriptions.py
from .subscriptions import (
    NoSubscription,
    OneShotSubscription,
    StreamSubscription,
    subscription_for,
)

__all__ = [
    # Snapshot value type
    "Snapshot",
    "ConnectionPhase",
    # Sentinel
    "MISSING",
    # Fold functions
    "Fold",
    "FunctionFold",
    "SnapshotFold",
    # Engine
    "FoldEngine",
    "Connection",
    # Lifecycle binding
    "LifecycleController",
    "SnapshotBuilder",
    # Source capabilities
    "OneShotSource",
    "StreamSource",
    "CancellableHandle",
    "FutureSource",
    "AsyncIterableSource",
    # Adapters
    "NoSubscription",
    "OneShotSubscription",
    "StreamSubscription",
    "subscription_for",
    # Exceptions
    "SnapfoldError",
    "PropagatedError",
    "InvalidStateError",
    "LifecycleError",
    "UnsupportedSourceError",
]
