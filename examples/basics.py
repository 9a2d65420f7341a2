from snapfold import (
    ConnectionPhase,
    FunctionFold,
    LifecycleController,
    SnapshotBuilder,
)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Folding a one-shot source")
print("-" * 100)
print()


# Any object with register_completion(on_value, on_error) is a one-shot source.
class Completer:
    def __init__(self):
        self._continuations = []

    def register_completion(self, on_value, on_error):
        self._continuations.append((on_value, on_error))

    def complete(self, value):
        for on_value, _ in self._continuations:
            on_value(value)


# The render callback receives a new Snapshot whenever it changes.
builder = SnapshotBuilder(lambda snapshot: print(f"render: {snapshot!r}"))

greeting = Completer()
builder.mount(greeting)  # render: waiting
greeting.complete("hello")  # render: done, hello

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Swapping sources before they resolve")
print("-" * 100)
print()

builder = SnapshotBuilder(lambda snapshot: print(f"render: {snapshot!r}"))

first, second = Completer(), Completer()
builder.mount(first)
builder.update(first, second)  # nothing new to render, still waiting

second.complete("B")  # render: done, B
first.complete("A")  # stale, silently dropped

assert builder.summary.phase is ConnectionPhase.DONE
assert builder.summary.require_data == "B"

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Custom accumulators")
print("-" * 100)
print()


# Any object with subscribe(on_data, on_error, on_done) returning a cancellable handle is a stream.
class Stream:
    def __init__(self):
        self.listeners = []

    def subscribe(self, on_data, on_error, on_done):
        listener = (on_data, on_error, on_done)
        self.listeners.append(listener)
        stream = self

        class Handle:
            def cancel(self):
                if listener in stream.listeners:
                    stream.listeners.remove(listener)

        return Handle()

    def add(self, value):
        for on_data, _, _ in list(self.listeners):
            on_data(value)

    def close(self):
        for _, _, on_done in list(self.listeners):
            on_done()


# Keep a running total instead of the latest value.
total = FunctionFold(
    initial=lambda: 0,
    on_data=lambda acc, value: acc + value,
    on_disconnect=lambda acc: 0,
)

prices = Stream()
controller = LifecycleController(total, lambda acc: print(f"total: {acc}"))
controller.mount(prices)  # total: 0
prices.add(10)  # total: 10
prices.add(5)  # total: 15
controller.update(prices, None)  # total: 0
prices.add(100)  # no longer subscribed
