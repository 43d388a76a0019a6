"""Tests for the command ledger."""

import pytest

from cartkernel.domain import CommandLedger


class Append:
    """Command appending a value to a shared list."""

    def __init__(self, target: list[int], value: int) -> None:
        self.target = target
        self.value = value

    def apply(self) -> None:
        self.target.append(self.value)

    def revert(self) -> None:
        self.target.pop()


class Exploding:
    """Command whose apply always fails."""

    def apply(self) -> None:
        raise RuntimeError("boom")

    def revert(self) -> None:
        raise AssertionError("never applied")


class TestCommandLedger:
    """Tests for CommandLedger."""

    def test_execute_applies_immediately(self) -> None:
        """Executing a command runs it and records it."""
        values: list[int] = []
        ledger = CommandLedger()

        ledger.execute(Append(values, 1))

        assert values == [1]
        assert len(ledger) == 1
        assert ledger.can_undo
        assert not ledger.can_redo

    def test_undo_on_empty_returns_false(self) -> None:
        """Undo with no history reports failure."""
        assert CommandLedger().undo() is False

    def test_redo_on_empty_returns_false(self) -> None:
        """Redo with nothing undone reports failure."""
        assert CommandLedger().redo() is False

    @pytest.mark.parametrize("steps", [1, 2, 4])
    def test_undo_then_redo_restores_state(self, steps: int) -> None:
        """N undos followed by N redos restore the same values."""
        values: list[int] = []
        ledger = CommandLedger()
        for value in range(4):
            ledger.execute(Append(values, value))

        for _ in range(steps):
            assert ledger.undo()
        assert values == list(range(4 - steps))

        for _ in range(steps):
            assert ledger.redo()
        assert values == [0, 1, 2, 3]

    def test_new_command_discards_redo_branch(self) -> None:
        """Executing after undo makes redo fail."""
        values: list[int] = []
        ledger = CommandLedger()
        ledger.execute(Append(values, 1))
        ledger.execute(Append(values, 2))
        ledger.undo()

        ledger.execute(Append(values, 3))

        assert values == [1, 3]
        assert ledger.redo() is False
        assert ledger.reverted == ()

    def test_failed_apply_is_not_recorded(self) -> None:
        """A command that raises on apply leaves both stacks untouched."""
        values: list[int] = []
        ledger = CommandLedger()
        ledger.execute(Append(values, 1))
        ledger.undo()

        with pytest.raises(RuntimeError):
            ledger.execute(Exploding())

        assert ledger.applied == ()
        assert ledger.can_redo

    def test_max_depth_forgets_oldest(self) -> None:
        """Only the newest commands are kept when bounded."""
        values: list[int] = []
        ledger = CommandLedger(max_depth=2)
        for value in range(3):
            ledger.execute(Append(values, value))

        assert ledger.undo()
        assert ledger.undo()
        assert ledger.undo() is False
        assert values == [0]

    def test_max_depth_must_be_positive(self) -> None:
        """Zero depth is rejected."""
        with pytest.raises(ValueError):
            CommandLedger(max_depth=0)

    def test_clear(self) -> None:
        """Clearing forgets both stacks."""
        values: list[int] = []
        ledger = CommandLedger()
        ledger.execute(Append(values, 1))
        ledger.execute(Append(values, 2))
        ledger.undo()

        ledger.clear()

        assert not ledger.can_undo
        assert not ledger.can_redo
        assert values == [1]
