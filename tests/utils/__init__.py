"""
Test utilities for snapfold.

Hand-driven sources and render recorders shared by the test suite.
"""

from .sources import Completer, LeakyStream, StreamController, StreamHandle

__all__ = [
    "Completer",
    "LeakyStream",
    "StreamController",
    "StreamHandle",
]
