"""
Region Interaction - Hit-testing and drag state machine for subtitle regions

Maps pointer positions on the waveform surface to subtitle edits. The
surface spans the whole media: x = (time / duration) * width.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from models.subtitle import SubtitleEntry
from models.waveform import DragMode, DragSession
from runtime_config import get_config


class PressAction(str, Enum):
    SPLIT = "split"
    DRAG = "drag"
    SEEK = "seek"


@dataclass
class PressResult:
    """What a pointer press turned into"""
    action: PressAction
    time: float
    index: Optional[int] = None
    mode: Optional[DragMode] = None


class RegionInteraction:
    """Pointer-driven editing of subtitle regions.

    Args:
        editor: Command surface (SubtitleEditor or compatible) providing
            entries, media_duration, update_entry, commit, cancel_edit,
            split_entry and select_entry
        seek: Called with a time when the press hits no entry
        handle_tolerance: Pixels from an edge that grab the handle.
            If None, uses runtime config value.
    """

    def __init__(self, editor, seek: Callable[[float], None], handle_tolerance: Optional[float] = None):
        if handle_tolerance is None:
            handle_tolerance = get_config().handle_tolerance_px
        self.editor = editor
        self.seek = seek
        self.handle_tolerance = handle_tolerance
        self.width = 0
        self.session: Optional[DragSession] = None

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------

    def set_width(self, width: int):
        self.width = max(0, int(width))

    def time_to_x(self, time: float) -> float:
        """Convert time (seconds) to x position"""
        duration = self.editor.media_duration
        if duration <= 0:
            return 0.0
        return time / duration * self.width

    def x_to_time(self, x: float) -> float:
        """Convert x position to time (seconds)"""
        if self.width <= 0:
            return 0.0
        return x / self.width * self.editor.media_duration

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------

    def hit_test(self, x: float, entries: Optional[list[SubtitleEntry]] = None) -> Optional[tuple[DragMode, int]]:
        """Find the handle or body under *x*

        Iterates in reverse so later (top-most) entries win when overlapping.

        Returns:
            Tuple of (mode, index), or None if no entry is hit
        """
        if entries is None:
            entries = self.editor.entries
        for i in range(len(entries) - 1, -1, -1):
            entry = entries[i]
            start_x = self.time_to_x(entry.start_time)
            end_x = self.time_to_x(entry.end_time)

            if abs(x - start_x) < self.handle_tolerance:
                return DragMode.START, i
            if abs(x - end_x) < self.handle_tolerance:
                return DragMode.END, i
            if start_x < x < end_x:
                return DragMode.MOVE, i
        return None

    def hover_mode(self, x: float) -> Optional[DragMode]:
        """Mode a press at *x* would start (for cursor feedback)"""
        if self.session is not None:
            return self.session.mode
        hit = self.hit_test(x)
        return hit[0] if hit else None

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def press(self, x: float, split_modifier: bool = False) -> PressResult:
        """Handle a pointer press at *x*

        Priority: split (with modifier), edge handles, region body, seek.
        """
        entries = self.editor.entries
        time = self.x_to_time(x)

        if split_modifier:
            for i in range(len(entries) - 1, -1, -1):
                if entries[i].contains(time):
                    self.editor.split_entry(i, time)
                    return PressResult(PressAction.SPLIT, time, index=i)

        hit = self.hit_test(x, entries)
        if hit is not None:
            mode, index = hit
            entry = entries[index]
            self.session = DragSession(
                mode=mode,
                target_index=index,
                anchor_x=x,
                original_start=entry.start_time,
                original_end=entry.end_time,
            )
            if mode == DragMode.MOVE:
                self.editor.select_entry(index)
            return PressResult(PressAction.DRAG, time, index=index, mode=mode)

        self.seek(time)
        return PressResult(PressAction.SEEK, time)

    def drag(self, x: float) -> Optional[SubtitleEntry]:
        """Handle pointer movement while a session is active

        Returns:
            The proposed entry that was sent to the editor, or None
        """
        session = self.session
        if session is None:
            return None

        entries = self.editor.entries
        if session.target_index >= len(entries):
            self.session = None
            return None

        entry = entries[session.target_index]
        duration = self.editor.media_duration

        if session.mode == DragMode.MOVE:
            delta_time = self.x_to_time(x - session.anchor_x)
            span = session.original_end - session.original_start
            new_start = max(0.0, session.original_start + delta_time)
            new_end = min(duration, new_start + span)
            updated = entry.copy(start_time=new_start, end_time=new_end)
        else:
            new_time = max(0.0, min(duration, self.x_to_time(x)))
            if session.mode == DragMode.START:
                updated = entry.copy(start_time=min(new_time, entry.end_time))
            else:
                updated = entry.copy(end_time=max(new_time, entry.start_time))

        self.editor.update_entry(session.target_index, updated, overwrite=True)
        return updated

    def release(self) -> bool:
        """Finish the gesture, committing one history entry

        Also used when the pointer leaves the surface mid-drag.

        Returns:
            True if a session was active
        """
        if self.session is None:
            return False
        self.session = None
        self.editor.commit()
        return True

    def detach(self):
        """Forget the session without touching the editor

        Used when the history moves under a drag (undo/redo), which leaves
        the session pointing at an index that may no longer exist.
        """
        self.session = None

    def cancel(self):
        """Abort the gesture and drop its uncommitted changes"""
        if self.session is None:
            return
        self.session = None
        self.editor.cancel_edit()
