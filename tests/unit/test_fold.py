"""Unit tests for fold functions."""

import pytest

from snapfold import ConnectionPhase, Fold, FunctionFold, Snapshot, SnapshotFold


@pytest.mark.unit
@pytest.mark.engine
class TestSnapshotFold:
    """Snapshot specialization of the fold functions."""

    def test_initial_is_nothing(self):
        assert SnapshotFold().initial() == Snapshot.nothing()

    def test_initial_data_is_shown_before_connecting(self):
        fold = SnapshotFold(initial_data="cached")

        assert fold.initial() == Snapshot.with_data(ConnectionPhase.NONE, "cached")

    def test_connect_moves_to_waiting(self):
        fold = SnapshotFold()

        assert fold.on_connect(fold.initial()) == Snapshot.waiting()

    def test_connect_keeps_initial_data(self):
        fold = SnapshotFold(initial_data="cached")

        snapshot = fold.on_connect(fold.initial())

        assert snapshot == Snapshot.with_data(ConnectionPhase.WAITING, "cached")

    def test_data_replaces_previous_error(self):
        """Replacement law: data drops the previous error"""
        fold = SnapshotFold()
        errored = Snapshot.with_error(ConnectionPhase.ACTIVE, "bad")

        snapshot = fold.on_data(errored, "4")

        assert snapshot == Snapshot.with_data(ConnectionPhase.ACTIVE, "4")
        assert not snapshot.has_error

    def test_error_replaces_previous_data(self):
        """Replacement law: an error drops the last good data"""
        fold = SnapshotFold()
        active = Snapshot.with_data(ConnectionPhase.ACTIVE, "2")

        snapshot = fold.on_error(active, "bad")

        assert snapshot == Snapshot.with_error(ConnectionPhase.ACTIVE, "bad")
        assert not snapshot.has_data

    def test_done_keeps_payload(self):
        """Closing the stream keeps the last payload"""
        fold = SnapshotFold()

        assert fold.on_done(
            Snapshot.with_data(ConnectionPhase.ACTIVE, "4")
        ) == Snapshot.with_data(ConnectionPhase.DONE, "4")
        assert fold.on_done(
            Snapshot.with_error(ConnectionPhase.ACTIVE, "bad")
        ) == Snapshot.with_error(ConnectionPhase.DONE, "bad")

    def test_done_without_events_has_no_payload(self):
        fold = SnapshotFold()

        assert fold.on_done(Snapshot.waiting()) == Snapshot(ConnectionPhase.DONE)

    def test_disconnect_resets_to_nothing(self):
        fold = SnapshotFold()

        assert (
            fold.on_disconnect(Snapshot.with_data(ConnectionPhase.ACTIVE, "A"))
            == Snapshot.nothing()
        )

    def test_unchanged_is_structural(self):
        fold = SnapshotFold()

        assert fold.unchanged(Snapshot.waiting(), Snapshot.waiting())
        assert not fold.unchanged(Snapshot.nothing(), Snapshot.waiting())

    def test_unchanged_distinguishes_equal_values_of_other_types(self):
        fold = SnapshotFold()
        one = Snapshot.with_data(ConnectionPhase.ACTIVE, 1)

        assert not fold.unchanged(one, Snapshot.with_data(ConnectionPhase.ACTIVE, True))
        assert not fold.unchanged(one, Snapshot.with_data(ConnectionPhase.ACTIVE, 1.0))
        assert not fold.unchanged(
            Snapshot.with_error(ConnectionPhase.ACTIVE, 0),
            Snapshot.with_error(ConnectionPhase.ACTIVE, False),
        )
        assert fold.unchanged(one, Snapshot.with_data(ConnectionPhase.ACTIVE, 1))


@pytest.mark.unit
@pytest.mark.engine
class TestFunctionFold:
    """Folds assembled from callables."""

    def test_missing_hooks_are_identity(self):
        fold = FunctionFold(initial=lambda: 0)
        acc = fold.initial()

        assert fold.on_connect(acc) == 0
        assert fold.on_data(acc, 5) == 0
        assert fold.on_error(acc, "bad") == 0
        assert fold.on_done(acc) == 0
        assert fold.on_disconnect(acc) == 0

    def test_hooks_receive_accumulator_and_payload(self):
        fold = FunctionFold(
            initial=lambda: 0,
            on_data=lambda acc, value: acc + value,
            on_error=lambda acc, error: -1,
        )

        assert fold.on_data(fold.on_data(fold.initial(), 2), 3) == 5
        assert fold.on_error(5, "bad") == -1

    def test_unchanged_defaults_to_false(self):
        fold = FunctionFold(initial=list)
        acc = []

        assert not fold.unchanged(acc, acc)

    def test_custom_unchanged(self):
        fold = FunctionFold(initial=lambda: 0, unchanged=lambda a, b: a == b)

        assert fold.unchanged(1, 1)
        assert not fold.unchanged(1, 2)

    def test_accumulating_collector(self, collector):
        """Appending fold records the exact event sequence"""
        acc = collector.initial()
        acc = collector.on_connect(acc)
        acc = collector.on_data(acc, "1")
        acc = collector.on_error(acc, "bad")
        acc = collector.on_data(acc, "2")
        acc = collector.on_done(acc)

        assert acc == ["conn", "data:1", "error:bad", "data:2", "done"]


@pytest.mark.unit
@pytest.mark.engine
class TestFoldSubclass:
    """Subclassing Fold directly."""

    def test_initial_is_required(self):
        with pytest.raises(TypeError):
            Fold()

    def test_subclass_overrides_selected_hooks(self):
        class Counter(Fold):
            def initial(self):
                return 0

            def on_data(self, current, value):
                return current + 1

        counter = Counter()

        assert counter.on_connect(0) == 0
        assert counter.on_data(counter.on_data(0, "a"), "b") == 2
