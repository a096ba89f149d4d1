"""
Subtitle Editor - Command surface over the authoritative subtitle sequence

All edits from the waveform, the subtitle list and keyboard shortcuts go
through SubtitleEditor, which keeps the undo history and the selection in
sync and notifies views through Qt signals.
"""
import logging
from typing import Iterable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from core.grouping import GroupingEngine
from core.history import SubtitleHistory
from core import splitter
from core.srt_codec import is_valid_time_string, time_string_to_seconds, to_srt
from models.subtitle import SubtitleEntry

logger = logging.getLogger(__name__)

TIME_FIELDS = ("start_time", "end_time")


class SubtitleEditor(QObject):
    """Owns the subtitle sequence, its history and the current selection.

    Signals:
        subtitles_changed: The visible sequence changed
        selection_changed: Emitted with the selected index or None
        history_changed: Emitted with (can_undo, can_redo)
    """

    subtitles_changed = pyqtSignal()
    selection_changed = pyqtSignal(object)
    history_changed = pyqtSignal(bool, bool)

    def __init__(self, entries: Iterable[SubtitleEntry] = (), media_duration: float = 0.0, parent=None):
        super().__init__(parent)
        self._media_duration = max(0.0, float(media_duration))
        self._history = SubtitleHistory(self._sorted(list(entries)))
        self._selected_index: Optional[int] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def entries(self) -> list[SubtitleEntry]:
        """Copies of the visible entries"""
        return self._history.current

    @property
    def history(self) -> SubtitleHistory:
        return self._history

    @property
    def media_duration(self) -> float:
        return self._media_duration

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_index

    @property
    def is_modified(self) -> bool:
        return not self._history.is_clean()

    def count(self) -> int:
        return len(self._history.current)

    def set_media_duration(self, duration: float):
        duration = max(0.0, float(duration))
        if duration == self._media_duration:
            return
        self._media_duration = duration
        self.subtitles_changed.emit()

    def reset(self, entries: Iterable[SubtitleEntry], media_duration: Optional[float] = None):
        """Load a new subtitle set, clearing history and selection"""
        if media_duration is not None:
            self._media_duration = max(0.0, float(media_duration))
        self._history.reset(self._sorted(list(entries)))
        self._selected_index = None
        logger.info(f"Loaded {self.count()} subtitle entries")
        self._emit_changed()
        self.selection_changed.emit(None)

    def mark_saved(self):
        self._history.set_clean()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_entry(self, index: int, entry: SubtitleEntry, overwrite: bool = False) -> bool:
        """Replace the entry at *index*

        Inverted times are swapped and times are clamped to the media.

        Args:
            index: Position of the entry
            entry: New values (copied)
            overwrite: Part of a continuous drag; finished by commit()

        Returns:
            True if the entry was replaced
        """
        entries = self.entries
        if not 0 <= index < len(entries):
            logger.warning(f"update_entry: index {index} out of range")
            return False

        entries[index] = self._normalized(entry)
        if overwrite:
            self._history.push(entries, overwrite=True)
            self.subtitles_changed.emit()
            return True

        self._store(entries)
        self._emit_changed()
        return True

    def commit(self) -> bool:
        """Finish a continuous edit as a single history entry

        Returns:
            True if there was an edit to commit
        """
        if not self._history.is_pending:
            return False
        self._store(self.entries)
        self._emit_changed()
        return True

    def cancel_edit(self) -> bool:
        """Throw away an uncommitted continuous edit"""
        if not self._history.discard_pending():
            return False
        self._clamp_selection()
        self._emit_changed()
        return True

    def split_entry(self, index: int, at_time: float) -> bool:
        """Split the entry at *index* in two at *at_time*

        Returns:
            False (and nothing changes) when the time is not strictly
            inside the entry
        """
        entries = self.entries
        if not 0 <= index < len(entries):
            return False

        halves = splitter.split_entry(entries[index], at_time)
        if halves is None:
            logger.debug(f"Split at {at_time:.3f}s rejected for entry {index}")
            return False

        entries[index:index + 1] = list(halves)
        if self._selected_index is not None and self._selected_index > index:
            self._selected_index += 1
        self._store(entries)
        self._emit_changed()
        return True

    def select_entry(self, index: Optional[int]):
        if index is not None and not 0 <= index < self.count():
            index = None
        if index == self._selected_index:
            return
        self._selected_index = index
        self.selection_changed.emit(index)

    def select_previous(self):
        if not self.count():
            return
        current = self._selected_index
        self.select_entry(current - 1 if current is not None and current > 0 else 0)

    def select_next(self):
        count = self.count()
        if not count:
            return
        current = self._selected_index
        if current is None:
            self.select_entry(0)
        else:
            self.select_entry(min(current + 1, count - 1))

    def undo(self) -> bool:
        # A gesture still in progress is finished (and sorted) first
        self.commit()
        if not self._history.undo():
            return False
        self._clamp_selection()
        self._emit_changed()
        return True

    def redo(self) -> bool:
        self.commit()
        if not self._history.redo():
            return False
        self._clamp_selection()
        self._emit_changed()
        return True

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def update_time_text(self, index: int, field: str, text: str) -> bool:
        """Apply a manually typed HH:MM:SS,mmm time

        Args:
            index: Position of the entry
            field: 'start_time' or 'end_time'
            text: Time string typed by the user

        Returns:
            False if the text was rejected (the sequence is unchanged)
        """
        if field not in TIME_FIELDS:
            raise ValueError(f"Unknown time field: {field}")
        if not is_valid_time_string(text) or not 0 <= index < self.count():
            logger.debug(f"Rejected time text {text!r} for entry {index}")
            return False

        seconds = time_string_to_seconds(text)
        entry = self.entries[index]
        if getattr(entry, field) == seconds:
            return False
        return self.update_entry(index, entry.copy(**{field: seconds}))

    def update_text(self, index: int, text: str) -> bool:
        if not 0 <= index < self.count():
            return False
        entry = self.entries[index]
        if entry.text == text:
            return False
        return self.update_entry(index, entry.copy(text=text))

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def display_lines(self, time: float) -> list[str]:
        """Caption lines to show at playback *time*"""
        return GroupingEngine().active_lines(self.entries, time)

    def to_srt(self, duration: Optional[float] = None) -> str:
        """Export the sequence as SRT text, stretched to the media length"""
        if duration is None:
            duration = self._media_duration or None
        return to_srt(self.entries, duration, GroupingEngine())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _normalized(self, entry: SubtitleEntry) -> SubtitleEntry:
        start, end = entry.start_time, entry.end_time
        if start > end:
            start, end = end, start
        upper = self._media_duration if self._media_duration > 0 else float("inf")
        start = min(max(0.0, start), upper)
        end = min(max(0.0, end), upper)
        return entry.copy(start_time=start, end_time=end)

    def _store(self, entries: list[SubtitleEntry]):
        """Finalize *entries* as one history step, sorted by start time

        A gesture still pending at the tip is replaced, so it never
        survives as an unsorted step of its own.
        """
        self._history.push(self._reordered(entries), overwrite=self._history.is_pending)
        self._history.commit()

    @staticmethod
    def _sorted(entries: list[SubtitleEntry]) -> list[SubtitleEntry]:
        return sorted(entries, key=lambda e: e.start_time)

    def _reordered(self, entries: list[SubtitleEntry]) -> list[SubtitleEntry]:
        """Sort by start time, keeping the selected entry selected"""
        order = sorted(range(len(entries)), key=lambda i: entries[i].start_time)
        if self._selected_index is not None and self._selected_index < len(entries):
            new_index = order.index(self._selected_index)
            if new_index != self._selected_index:
                self._selected_index = new_index
                self.selection_changed.emit(new_index)
        return [entries[i] for i in order]

    def _clamp_selection(self):
        if self._selected_index is not None and self._selected_index >= self.count():
            self._selected_index = None
            self.selection_changed.emit(None)

    def _emit_changed(self):
        self.subtitles_changed.emit()
        self.history_changed.emit(self._history.can_undo(), self._history.can_redo())
