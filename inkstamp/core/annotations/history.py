"""
Undo/Redo history for overlays.
"""
import copy
from typing import List, Optional

from inkstamp.config import Config
from .store import StoreState


class HistoryLog:
    """
    Linear log of full store snapshots with a cursor.

    The entry under the cursor is the state currently shown. Pushing after
    an undo drops every entry past the cursor.
    """

    def __init__(self, max_size: int = Config.HISTORY_LIMIT):
        """
        Initialize the history log.

        Args:
            max_size: Maximum number of snapshots to keep
        """
        if max_size < 2:
            raise ValueError("History needs room for at least two states")
        self._states: List[StoreState] = []
        self._cursor: int = -1
        self.max_size = max_size

    @property
    def position(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._states)

    def reset(self, state: StoreState) -> None:
        """Start a fresh log whose only entry is ``state``."""
        self._states = [copy.deepcopy(state)]
        self._cursor = 0

    def push(self, state: StoreState) -> None:
        """
        Record a committed state.

        Args:
            state: Store snapshot taken after the operation
        """
        del self._states[self._cursor + 1:]
        self._states.append(copy.deepcopy(state))

        # Limit log size
        if len(self._states) > self.max_size:
            self._states.pop(0)
        self._cursor = len(self._states) - 1

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._cursor > 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self._cursor < len(self._states) - 1

    def undo(self) -> Optional[StoreState]:
        """
        Step back one entry.

        Returns:
            Copy of the previous state, or None if undo is not available
        """
        if not self.can_undo():
            return None
        self._cursor -= 1
        return copy.deepcopy(self._states[self._cursor])

    def redo(self) -> Optional[StoreState]:
        """
        Step forward one entry.

        Returns:
            Copy of the next state, or None if redo is not available
        """
        if not self.can_redo():
            return None
        self._cursor += 1
        return copy.deepcopy(self._states[self._cursor])

    def clear(self) -> None:
        """Drop every entry."""
        self._states.clear()
        self._cursor = -1
