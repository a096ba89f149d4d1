"""
Waveform Editor - Waveform surface with draggable subtitle regions
"""
import logging
from typing import Optional

import numpy as np

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, pyqtSignal, QTimer
from PyQt6.QtGui import QPainter, QMouseEvent, QPaintEvent, QKeyEvent, QCursor

from config import WAVEFORM_HEIGHT
from core.editor import SubtitleEditor
from core.interaction import RegionInteraction, PressAction
from core.peaks import extract_peaks
from models.waveform import DragMode, PeakBuffer
from runtime_config import get_config
from .waveform_renderer import render_waveform, WaveformColors

logger = logging.getLogger(__name__)

SPLIT_MODIFIERS = {
    "alt": Qt.KeyboardModifier.AltModifier,
    "ctrl": Qt.KeyboardModifier.ControlModifier,
    "shift": Qt.KeyboardModifier.ShiftModifier,
}

HOVER_CURSORS = {
    DragMode.START: Qt.CursorShape.SizeHorCursor,
    DragMode.END: Qt.CursorShape.SizeHorCursor,
    DragMode.MOVE: Qt.CursorShape.OpenHandCursor,
}


class WaveformCanvas(QWidget):
    """Full-width waveform of the loaded media with one region per entry.

    Dragging a region edge retimes the entry, dragging the body moves it,
    clicking with the split modifier splits it and clicking elsewhere seeks.
    """

    seek_requested = pyqtSignal(float)  # Emits time in seconds
    split_performed = pyqtSignal(int, float)  # Emits entry index and split time

    def __init__(self, editor: SubtitleEditor, parent=None):
        super().__init__(parent)
        self.setFixedHeight(WAVEFORM_HEIGHT)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)

        self.editor = editor
        self.interaction = RegionInteraction(editor, self.seek_requested.emit)
        self.colors = WaveformColors.default()

        self.samples: Optional[np.ndarray] = None
        self.peaks: Optional[PeakBuffer] = None
        self.current_time = 0.0
        self._grabbing = False

        # Throttle repaints while dragging (~60fps)
        self._update_throttle_timer = QTimer(self)
        self._update_throttle_timer.setSingleShot(True)
        self._update_throttle_timer.timeout.connect(self.update)
        self._update_interval_ms = 16

        editor.subtitles_changed.connect(self._schedule_throttled_update)
        editor.selection_changed.connect(lambda _index: self.update())
        editor.history_changed.connect(self._on_history_changed)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def set_samples(self, samples: Optional[np.ndarray]):
        """Set the decoded sample buffer (None clears the waveform)"""
        self.samples = samples
        self._refresh_peaks()
        self.update()

    def set_current_time(self, time: float):
        """Move the playhead"""
        if time == self.current_time:
            return
        self.current_time = time
        self.update()

    def _refresh_peaks(self):
        width = self.width()
        if self.samples is None or width <= 0:
            self.peaks = None
            return
        self.peaks = extract_peaks(self.samples, width)

    def _schedule_throttled_update(self):
        if not self._update_throttle_timer.isActive():
            self._update_throttle_timer.start(self._update_interval_ms)

    def _on_history_changed(self, _can_undo: bool, _can_redo: bool):
        # Undo/redo during a drag ends the gesture
        if self.interaction.session is not None:
            self.interaction.detach()
            self._release_grab()
            self.update()

    def _split_modifier_held(self, event) -> bool:
        modifier = SPLIT_MODIFIERS.get(get_config().split_modifier, Qt.KeyboardModifier.AltModifier)
        return bool(event.modifiers() & modifier)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.interaction.set_width(self.width())
        self._refresh_peaks()

    def paintEvent(self, event: QPaintEvent):
        """Paint the waveform"""
        if self.samples is not None and (self.peaks is None or not self.peaks.matches(self.width())):
            self._refresh_peaks()

        painter = QPainter(self)
        render_waveform(
            painter,
            self.width(),
            self.height(),
            self.peaks,
            self.editor.entries,
            self.current_time,
            self.editor.media_duration,
            self.editor.selected_index,
            self.colors,
        )
        painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        """Handle mouse press"""
        if event.button() != Qt.MouseButton.LeftButton:
            return

        self.interaction.set_width(self.width())
        x = event.position().x()
        result = self.interaction.press(x, split_modifier=self._split_modifier_held(event))

        if result.action == PressAction.SPLIT:
            self.split_performed.emit(result.index, result.time)
        elif result.action == PressAction.DRAG:
            self.grabMouse(QCursor(Qt.CursorShape.ClosedHandCursor
                                   if result.mode == DragMode.MOVE
                                   else Qt.CursorShape.SizeHorCursor))
            self._grabbing = True
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        """Handle mouse move"""
        x = event.position().x()
        if self.interaction.session is not None:
            self.interaction.drag(x)
            return

        mode = self.interaction.hover_mode(x)
        self.setCursor(QCursor(HOVER_CURSORS.get(mode, Qt.CursorShape.ArrowCursor)))

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Handle mouse release"""
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._end_gesture()

    def leaveEvent(self, event):
        # Without a grab the release would never arrive, so finish here
        if not self._grabbing and self.interaction.session is not None:
            self.interaction.release()
        self.unsetCursor()
        super().leaveEvent(event)

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Escape and self.interaction.session is not None:
            self.interaction.cancel()
            self._release_grab()
            self.update()
            return
        super().keyPressEvent(event)

    def _end_gesture(self):
        self._update_throttle_timer.stop()
        self.interaction.release()
        self._release_grab()
        self.update()

    def _release_grab(self):
        if self._grabbing:
            self.releaseMouse()
            self._grabbing = False
