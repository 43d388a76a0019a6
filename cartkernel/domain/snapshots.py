"""Whole-state snapshots and the caretaker that keeps their history.

The caretaker stores snapshots in order with a cursor pointing at the
current one. Saving after an undo drops everything past the cursor, the
same linear-history rule the command ledger follows.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

from cartkernel.domain.base import ValueObject
from cartkernel.domain.value_objects import CartItem

T = TypeVar("T")


@dataclass(frozen=True)
class CartSnapshot(ValueObject):
    """Immutable copy of a cart's item collection.

    Attributes:
        items: Lines at capture time, ordered by id.
        taken_at: Capture timestamp.
    """

    items: tuple[CartItem, ...]
    taken_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
        compare=False,
    )

    @classmethod
    def capture(cls, items: Iterable[CartItem]) -> "CartSnapshot":
        return cls(items=tuple(sorted(items, key=lambda item: item.id)))

    @property
    def is_empty(self) -> bool:
        return not self.items


class SnapshotCaretaker(Generic[T]):
    """Ordered snapshot history with a cursor.

    The cursor is ``-1`` while the history is empty. ``undo`` and ``redo``
    only move the cursor and hand back the snapshot it lands on; applying
    it is up to the caller.
    """

    def __init__(self, max_depth: int | None = None) -> None:
        """Initialize an empty history.

        Args:
            max_depth: Maximum number of snapshots kept. The oldest snapshot
                is dropped once the limit is exceeded. ``None`` keeps all.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be positive")
        self._snapshots: list[T] = []
        self._cursor = -1
        self._max_depth = max_depth

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> T | None:
        """Snapshot at the cursor, or None if the history is empty."""
        if self._cursor < 0:
            return None
        return self._snapshots[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def save(self, snapshot: T) -> None:
        """Append ``snapshot`` after the cursor, discarding any redo branch."""
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(snapshot)
        self._cursor += 1
        if self._max_depth is not None and len(self._snapshots) > self._max_depth:
            del self._snapshots[0]
            self._cursor -= 1

    def undo(self) -> T | None:
        """Step back one snapshot.

        Returns:
            The previous snapshot, or None if the cursor is already at the
            earliest snapshot or the history is empty.
        """
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._snapshots[self._cursor]

    def redo(self) -> T | None:
        """Step forward one snapshot.

        Returns:
            The next snapshot, or None if the cursor is at the latest one.
        """
        if self._cursor >= len(self._snapshots) - 1:
            return None
        self._cursor += 1
        return self._snapshots[self._cursor]

    def clear(self) -> None:
        self._snapshots.clear()
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._snapshots)
