import os
import sys

import numpy as np
import pytest
import soundfile as sf

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.audio_decoder import DecodedAudio
from ui.threads import WaveformLoader


def _write_wav(path, seconds, sample_rate=8000):
    samples = np.zeros(int(seconds * sample_rate), dtype=np.float32)
    sf.write(str(path), samples, sample_rate, subtype="FLOAT")
    return path


@pytest.fixture
def loader(qapp):
    loader = WaveformLoader()
    yield loader
    loader.shutdown()


def test_superseded_result_is_dropped(loader, qtbot):
    audio = DecodedAudio(samples=np.zeros(4, dtype=np.float32), sample_rate=4)
    loader._token = 2

    with qtbot.assertNotEmitted(loader.loaded):
        loader._on_thread_finished(1, "old.wav", True, "ok", audio)


def test_current_result_is_emitted(loader, qtbot):
    audio = DecodedAudio(samples=np.zeros(4, dtype=np.float32), sample_rate=4)
    loader._token = 2

    with qtbot.waitSignal(loader.loaded) as blocker:
        loader._on_thread_finished(2, "new.wav", True, "ok", audio)
    assert blocker.args == ["new.wav", audio]


def test_current_failure_is_emitted(loader, qtbot):
    loader._token = 1
    with qtbot.waitSignal(loader.failed) as blocker:
        loader._on_thread_finished(1, "bad.mp4", False, "Could not decode", None)
    assert blocker.args == ["bad.mp4", "Could not decode"]


def test_only_latest_load_is_delivered(loader, qtbot, tmp_path):
    first = _write_wav(tmp_path / "first.wav", 2.0)
    second = _write_wav(tmp_path / "second.wav", 1.0)

    received = []
    loader.loaded.connect(lambda path, audio: received.append((path, audio.duration)))

    loader.load(first)
    token = loader.load(second)
    assert token == loader.current_token == 2

    qtbot.waitUntil(lambda: len(received) == 1, timeout=5000)
    # Give the superseded thread a chance to finish too
    loader.shutdown()
    qtbot.wait(50)
    assert received == [(str(second), pytest.approx(1.0))]


def test_missing_file_reports_failure(loader, qtbot, tmp_path):
    with qtbot.waitSignal(loader.failed, timeout=5000) as blocker:
        loader.load(tmp_path / "missing.wav")
    assert "not found" in blocker.args[1]


def test_progress_only_for_current_load(loader, qtbot):
    loader._token = 3

    with qtbot.assertNotEmitted(loader.progress):
        loader._on_thread_progress(2, 0, "Decoding old.wav...")

    with qtbot.waitSignal(loader.progress) as blocker:
        loader._on_thread_progress(3, 100, "Done")
    assert blocker.args == [100, "Done"]
