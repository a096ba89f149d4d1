"""
Subtitle History - Snapshot-based undo/redo over the subtitle sequence
"""
from typing import Iterable, Optional

from models.subtitle import SubtitleEntry
from runtime_config import get_config


Snapshot = tuple[SubtitleEntry, ...]


class SubtitleHistory:
    """Ordered full-sequence snapshots plus a cursor.

    The visible sequence is always ``snapshots[cursor]``. Snapshots are
    never modified once stored.

    Overwrite pushes (a drag in progress) are kept as a single transient
    snapshot at the tip: the next overwrite push replaces it and
    ``commit()`` (or a regular push) finalizes it, so one continuous
    gesture produces exactly one undo step.
    """

    def __init__(self, initial: Iterable[SubtitleEntry] = (), limit: Optional[int] = None):
        if limit is None:
            limit = get_config().history_limit
        self.limit = max(2, int(limit))
        self._snapshots: list[Snapshot] = [self._freeze(initial)]
        self._cursor = 0
        self._pending = False
        self._clean_snapshot: Optional[Snapshot] = self._snapshots[0]

    @staticmethod
    def _freeze(entries: Iterable[SubtitleEntry]) -> Snapshot:
        return tuple(entry.copy() for entry in entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> list[SubtitleEntry]:
        """Copies of the entries in the visible snapshot"""
        return [entry.copy() for entry in self._snapshots[self._cursor]]

    @property
    def is_pending(self) -> bool:
        """True while an uncommitted overwrite snapshot sits at the tip"""
        return self._pending

    def __len__(self) -> int:
        return len(self._snapshots)

    def push(self, entries: Iterable[SubtitleEntry], overwrite: bool = False):
        """Store a new snapshot and make it current.

        Any redo-able snapshots beyond the cursor are discarded.

        Args:
            entries: The new sequence
            overwrite: Part of a continuous edit; replaced by the next
                overwrite push instead of adding another undo step
        """
        snapshot = self._freeze(entries)

        if self._pending and overwrite:
            # Replace the transient tip left by the previous overwrite push
            del self._snapshots[self._cursor]
            self._cursor -= 1

        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(snapshot)
        self._cursor = len(self._snapshots) - 1
        self._pending = overwrite

        while len(self._snapshots) > self.limit:
            self._snapshots.pop(0)
            self._cursor -= 1

    def set_limit(self, limit: int):
        """Change the snapshot limit, dropping the oldest snapshots if needed

        Oldest snapshots go first. Once the cursor is on the oldest one,
        redo snapshots are dropped instead.
        """
        self.limit = max(2, int(limit))
        while len(self._snapshots) > self.limit:
            if self._cursor > 0:
                self._snapshots.pop(0)
                self._cursor -= 1
            else:
                self._snapshots.pop()

    def commit(self) -> bool:
        """Finalize a transient snapshot. Returns True if there was one."""
        if not self._pending:
            return False
        self._pending = False
        return True

    def discard_pending(self) -> bool:
        """Drop a transient snapshot, returning to the state before it"""
        if not self._pending:
            return False
        del self._snapshots[self._cursor]
        self._cursor -= 1
        self._pending = False
        return True

    def undo(self) -> bool:
        self.commit()
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if self._cursor >= len(self._snapshots) - 1:
            return False
        self._cursor += 1
        return True

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def reset(self, entries: Iterable[SubtitleEntry]):
        """Drop all history and start over from a single snapshot"""
        self._snapshots = [self._freeze(entries)]
        self._cursor = 0
        self._pending = False
        self._clean_snapshot = self._snapshots[0]

    def set_clean(self):
        """Mark the current snapshot as saved"""
        self._clean_snapshot = self._snapshots[self._cursor]

    def is_clean(self) -> bool:
        """Check if the current snapshot is the saved one"""
        return self._snapshots[self._cursor] is self._clean_snapshot
