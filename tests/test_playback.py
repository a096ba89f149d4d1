import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from ui.playback import PlaybackController


@pytest.fixture
def playback(qapp):
    return PlaybackController()


def test_position_reported_in_seconds(playback, qtbot):
    with qtbot.waitSignal(playback.time_changed) as blocker:
        playback._on_position_changed(2500)
    assert blocker.args == [2.5]


def test_segment_end_stops_segment(playback):
    playback.segment_end = 3.0

    playback._on_position_changed(2900)
    assert playback.segment_end == 3.0

    playback._on_position_changed(3000)
    assert playback.segment_end is None


def test_seek_cancels_segment(playback):
    playback.segment_end = 3.0
    playback.seek(1.0)
    assert playback.segment_end is None


def test_duration_reported_in_seconds(playback, qtbot):
    with qtbot.waitSignal(playback.duration_changed) as blocker:
        playback._on_duration_changed(12345)
    assert blocker.args == [pytest.approx(12.345)]
