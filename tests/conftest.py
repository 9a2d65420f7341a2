"""
Shared pytest fixtures and configuration for snapfold tests.
"""

import pytest

from snapfold import FunctionFold


class RenderLog:
    """Render callback that records every accumulator it is called with."""

    def __init__(self, formatter=repr):
        self._formatter = formatter
        self.calls = []

    def __call__(self, summary):
        self.calls.append(summary)
        return self._formatter(summary)

    @property
    def last(self):
        return self.calls[-1]

    def __len__(self):
        return len(self.calls)


def make_collector() -> FunctionFold:
    """Fold that records every lifecycle event as a tag."""
    return FunctionFold(
        initial=list,
        on_connect=lambda acc: acc + ["conn"],
        on_data=lambda acc, value: acc + [f"data:{value}"],
        on_error=lambda acc, error: acc + [f"error:{error}"],
        on_done=lambda acc: acc + ["done"],
        on_disconnect=lambda acc: acc + ["disc"],
    )


@pytest.fixture
def render():
    """Render callback recording snapshots and returning their repr."""
    return RenderLog()


@pytest.fixture
def joined_render():
    """Render callback for tag collectors, returning the tags joined."""
    return RenderLog(lambda tags: ", ".join(tags))


@pytest.fixture
def collector():
    return make_collector()
