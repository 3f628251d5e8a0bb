"""
Bounded undo/redo history over full grid snapshots.
"""

from __future__ import annotations

import logging

from grid_types import MAX_HISTORY_COUNT, Snapshot

__all__ = ["HistoryStore"]

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Ordered snapshot log with a cursor at the current entry.

    Invariant: 0 <= cursor < len(entries) <= max_count.
    """

    def __init__(self, initial: Snapshot, max_count: int = MAX_HISTORY_COUNT) -> None:
        if max_count < 1:
            raise ValueError(f"max_count must be at least 1, got {max_count}")
        self.max_count = max_count
        self._entries: list[Snapshot] = [initial]
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Snapshot:
        return self._entries[self._cursor]

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: Snapshot) -> bool:
        """
        Record a new snapshot after the cursor.

        Entries after the cursor (the redo branch) are discarded, and the
        oldest entries are evicted once the log exceeds max_count.

        Returns:
            False if entry equals the current snapshot and nothing was recorded
        """
        if entry == self.current:
            return False

        del self._entries[self._cursor + 1:]
        self._entries.append(entry)
        overflow = len(self._entries) - self.max_count
        if overflow > 0:
            del self._entries[:overflow]
            logger.debug("History full, evicted %d oldest entries", overflow)
        self._cursor = len(self._entries) - 1
        return True

    def undo(self) -> Snapshot:
        """Step back one entry if possible and return the current entry."""
        if self.can_undo:
            self._cursor -= 1
        return self.current

    def redo(self) -> Snapshot:
        """Step forward one entry if possible and return the current entry."""
        if self.can_redo:
            self._cursor += 1
        return self.current
