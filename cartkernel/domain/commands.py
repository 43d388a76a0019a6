"""Undoable commands and the ledger that records them.

A command wraps one reversible mutation. The ledger applies commands and
keeps two stacks: commands that are currently applied and commands that
were undone and may be redone. History is linear. Executing a new command
discards the redo stack.
"""

from collections import deque
from typing import Protocol

import structlog

logger = structlog.get_logger()


class Command(Protocol):
    """A reversible change.

    ``apply`` must be safe to call again after ``revert`` (redo), and
    ``revert`` must restore exactly the state that existed before the
    first ``apply``, using values captured when the command was built.
    """

    def apply(self) -> None: ...

    def revert(self) -> None: ...


class CommandLedger:
    """Linear undo/redo history of executed commands.

    Example usage:
        ledger = CommandLedger()
        ledger.execute(command)   # applies immediately
        ledger.undo()             # True, command reverted
        ledger.undo()             # False, nothing left to undo
        ledger.redo()             # True, command applied again
    """

    def __init__(self, max_depth: int | None = None) -> None:
        """Initialize an empty ledger.

        Args:
            max_depth: Maximum number of applied commands kept. The oldest
                command is forgotten once the limit is exceeded. ``None``
                keeps everything.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be positive")
        self._applied: deque[Command] = deque()
        self._reverted: list[Command] = []
        self._max_depth = max_depth

    @property
    def applied(self) -> tuple[Command, ...]:
        """Applied commands, oldest first."""
        return tuple(self._applied)

    @property
    def reverted(self) -> tuple[Command, ...]:
        """Undone commands, oldest undo first; the last one is redone next."""
        return tuple(self._reverted)

    @property
    def can_undo(self) -> bool:
        return bool(self._applied)

    @property
    def can_redo(self) -> bool:
        return bool(self._reverted)

    def execute(self, command: Command) -> None:
        """Apply ``command`` and record it.

        If ``apply`` raises, nothing is recorded and the redo stack is
        kept.

        Args:
            command: Command to run.
        """
        command.apply()
        self._applied.append(command)
        self._reverted.clear()
        if self._max_depth is not None and len(self._applied) > self._max_depth:
            dropped = self._applied.popleft()
            logger.debug("Command history trimmed", dropped=type(dropped).__name__)

    def undo(self) -> bool:
        """Revert the most recently applied command.

        Returns:
            True if a command was reverted, False if there was nothing to undo.
        """
        if not self._applied:
            return False
        command = self._applied[-1]
        command.revert()
        self._applied.pop()
        self._reverted.append(command)
        return True

    def redo(self) -> bool:
        """Re-apply the most recently reverted command.

        Returns:
            True if a command was re-applied, False if there was nothing to redo.
        """
        if not self._reverted:
            return False
        command = self._reverted[-1]
        command.apply()
        self._reverted.pop()
        self._applied.append(command)
        return True

    def clear(self) -> None:
        """Forget both stacks."""
        self._applied.clear()
        self._reverted.clear()

    def __len__(self) -> int:
        return len(self._applied)
