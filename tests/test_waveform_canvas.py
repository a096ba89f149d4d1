import os
import sys

import numpy as np
import pytest
from PyQt6.QtCore import Qt, QPoint, QEvent
from PyQt6.QtWidgets import QApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import WAVEFORM_HEIGHT
from core.editor import SubtitleEditor
from models.subtitle import SubtitleEntry
from ui.waveform_editor import WaveformCanvas


@pytest.fixture
def editor(qapp):
    return SubtitleEditor([SubtitleEntry(1.0, 3.0, "hello world")], media_duration=10.0)


@pytest.fixture
def canvas(qtbot, editor):
    widget = WaveformCanvas(editor)
    qtbot.addWidget(widget)
    widget.resize(1000, WAVEFORM_HEIGHT)
    widget.show()
    qtbot.waitExposed(widget)
    return widget


def test_peaks_follow_width(canvas, qtbot):
    canvas.set_samples(np.sin(np.linspace(0, 200, 44100)).astype(np.float32))
    assert canvas.peaks.matches(1000)

    canvas.resize(640, WAVEFORM_HEIGHT)
    qtbot.waitUntil(lambda: canvas.peaks.matches(640))


def test_clearing_samples_drops_peaks(canvas):
    canvas.set_samples(np.zeros(1000, dtype=np.float32))
    canvas.set_samples(None)
    assert canvas.peaks is None


def test_click_on_empty_area_seeks(canvas, qtbot):
    with qtbot.waitSignal(canvas.seek_requested) as blocker:
        qtbot.mouseClick(canvas, Qt.MouseButton.LeftButton, pos=QPoint(450, WAVEFORM_HEIGHT // 2))
    assert blocker.args[0] == pytest.approx(4.5)


def test_drag_gesture_commits_once(canvas, editor, qtbot):
    qtbot.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(200, WAVEFORM_HEIGHT // 2))
    assert canvas.interaction.session is not None

    canvas.interaction.drag(250)
    canvas.interaction.drag(300)
    qtbot.mouseRelease(canvas, Qt.MouseButton.LeftButton, pos=QPoint(300, WAVEFORM_HEIGHT // 2))

    assert canvas.interaction.session is None
    entry = editor.entries[0]
    assert (entry.start_time, entry.end_time) == pytest.approx((2.0, 4.0))
    assert editor.history.cursor == 1
    assert editor.undo()
    assert not editor.can_undo()


def test_split_modifier_click(canvas, editor, qtbot):
    with qtbot.waitSignal(canvas.split_performed) as blocker:
        qtbot.mouseClick(
            canvas, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.AltModifier,
            QPoint(200, WAVEFORM_HEIGHT // 2),
        )
    assert blocker.args[0] == 0
    assert blocker.args[1] == pytest.approx(2.0)
    assert editor.count() == 2


def test_escape_cancels_drag(canvas, editor, qtbot):
    qtbot.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(200, WAVEFORM_HEIGHT // 2))
    canvas.interaction.drag(400)
    qtbot.keyClick(canvas, Qt.Key.Key_Escape)

    assert canvas.interaction.session is None
    entry = editor.entries[0]
    assert (entry.start_time, entry.end_time) == (1.0, 3.0)
    assert not editor.can_undo()
    qtbot.mouseRelease(canvas, Qt.MouseButton.LeftButton, pos=QPoint(400, WAVEFORM_HEIGHT // 2))
    assert not editor.can_undo()


def test_leaving_without_grab_commits_drag(canvas, editor):
    canvas.interaction.set_width(canvas.width())
    canvas.interaction.press(200)
    canvas.interaction.drag(300)
    assert not canvas._grabbing

    QApplication.sendEvent(canvas, QEvent(QEvent.Type.Leave))

    assert canvas.interaction.session is None
    assert not editor.history.is_pending
    assert editor.history.cursor == 1
    entry = editor.entries[0]
    assert (entry.start_time, entry.end_time) == pytest.approx((2.0, 4.0))


def test_undo_mid_drag_ends_session(canvas, editor, qtbot):
    qtbot.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(200, WAVEFORM_HEIGHT // 2))
    canvas.interaction.drag(300)

    assert editor.undo()

    assert canvas.interaction.session is None
    assert not canvas._grabbing
    entry = editor.entries[0]
    assert (entry.start_time, entry.end_time) == (1.0, 3.0)
    # Further pointer movement no longer edits anything
    assert canvas.interaction.drag(500) is None
    qtbot.mouseRelease(canvas, Qt.MouseButton.LeftButton, pos=QPoint(500, WAVEFORM_HEIGHT // 2))
    assert editor.can_redo()
