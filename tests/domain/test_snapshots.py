"""Tests for snapshots and the snapshot caretaker."""

import dataclasses

import pytest

from cartkernel.domain import CartItem, CartSnapshot, SnapshotCaretaker


class TestSnapshotCaretaker:
    """Tests for SnapshotCaretaker."""

    def test_empty_history(self) -> None:
        """Empty history has cursor -1 and nothing to step to."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker()

        assert caretaker.cursor == -1
        assert caretaker.current is None
        assert caretaker.undo() is None
        assert caretaker.redo() is None

    def test_save_advances_cursor(self) -> None:
        """Saving appends and points the cursor at the new snapshot."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker()

        caretaker.save("a")
        caretaker.save("b")

        assert caretaker.cursor == 1
        assert caretaker.current == "b"

    def test_undo_stops_at_first_snapshot(self) -> None:
        """Undo at index 0 returns None and keeps the cursor."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker()
        caretaker.save("a")
        caretaker.save("b")

        assert caretaker.undo() == "a"
        assert caretaker.undo() is None
        assert caretaker.cursor == 0

    def test_redo_stops_at_latest(self) -> None:
        """Redo at the latest snapshot returns None."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker()
        caretaker.save("a")
        caretaker.save("b")
        caretaker.undo()

        assert caretaker.redo() == "b"
        assert caretaker.redo() is None
        assert caretaker.cursor == 1

    def test_save_after_undo_truncates_forward_history(self) -> None:
        """Saving at cursor k drops everything after k."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker()
        for name in ("a", "b", "c", "d"):
            caretaker.save(name)
        caretaker.undo()
        caretaker.undo()

        caretaker.save("x")

        assert len(caretaker) == 3
        assert caretaker.current == "x"
        assert caretaker.redo() is None
        assert caretaker.undo() == "b"

    def test_max_depth_drops_oldest(self) -> None:
        """Bounded history keeps only the newest snapshots."""
        caretaker: SnapshotCaretaker[str] = SnapshotCaretaker(max_depth=2)
        for name in ("a", "b", "c"):
            caretaker.save(name)

        assert len(caretaker) == 2
        assert caretaker.cursor == 1
        assert caretaker.undo() == "b"
        assert caretaker.undo() is None


class TestCartSnapshot:
    """Tests for CartSnapshot."""

    def test_snapshot_is_immutable(self) -> None:
        """Snapshots cannot be modified."""
        snapshot = CartSnapshot.capture([CartItem(id="1", name="Phone", price=10, quantity=1)])

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.items = ()  # type: ignore[misc]

    def test_capture_orders_by_id(self) -> None:
        """Captured items are ordered by id so equal collections compare equal."""
        a = CartItem(id="a", name="A", price=1, quantity=1)
        b = CartItem(id="b", name="B", price=2, quantity=1)

        assert CartSnapshot.capture([b, a]) == CartSnapshot.capture([a, b])

    def test_is_empty(self) -> None:
        """Empty capture reports empty."""
        assert CartSnapshot.capture([]).is_empty
