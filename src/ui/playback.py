"""
Playback - Media player wrapper driving the playhead and segment playback
"""
import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal, QUrl
from PyQt6.QtMultimedia import QMediaPlayer, QAudioOutput

logger = logging.getLogger(__name__)


class PlaybackController(QObject):
    """
    Plays the loaded media and reports the playback position in seconds.

    ``play_segment`` plays a single subtitle entry and pauses on its own
    once the position reaches the entry's end time.

    Signals:
        time_changed: Emitted with the current position in seconds
        duration_changed: Emitted with the media duration in seconds
        playback_state_changed: Emitted with 'playing', 'paused' or 'stopped'
        error_occurred: Emitted with a readable error message
    """

    time_changed = pyqtSignal(float)
    duration_changed = pyqtSignal(float)
    playback_state_changed = pyqtSignal(str)
    error_occurred = pyqtSignal(str)

    STATE_NAMES = {
        QMediaPlayer.PlaybackState.PlayingState: "playing",
        QMediaPlayer.PlaybackState.PausedState: "paused",
        QMediaPlayer.PlaybackState.StoppedState: "stopped",
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        self.audio_output = QAudioOutput(self)
        self.media_player = QMediaPlayer(self)
        self.media_player.setAudioOutput(self.audio_output)

        self.source_path: Optional[Path] = None
        self.segment_end: Optional[float] = None

        self.media_player.positionChanged.connect(self._on_position_changed)
        self.media_player.durationChanged.connect(self._on_duration_changed)
        self.media_player.playbackStateChanged.connect(self._on_state_changed)
        self.media_player.errorOccurred.connect(self._on_error)

    def set_video_output(self, video_widget):
        self.media_player.setVideoOutput(video_widget)

    def load(self, path: str | Path):
        """Set the media source and rewind"""
        self.segment_end = None
        self.source_path = Path(path)
        self.media_player.setSource(QUrl.fromLocalFile(str(self.source_path)))
        logger.info(f"Media source set: {self.source_path}")

    @property
    def position(self) -> float:
        """Current position in seconds"""
        return self.media_player.position() / 1000.0

    @property
    def is_playing(self) -> bool:
        return self.media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def seek(self, time: float):
        """Jump to *time* seconds, cancelling segment playback"""
        self.segment_end = None
        self.media_player.setPosition(max(0, int(round(time * 1000))))

    def play(self):
        self.media_player.play()

    def pause(self):
        self.media_player.pause()

    def toggle(self):
        """Play or pause"""
        if self.is_playing:
            self.pause()
        else:
            self.segment_end = None
            self.play()

    def play_segment(self, start: float, end: float):
        """Play from *start* and pause automatically at *end*"""
        self.seek(start)
        self.segment_end = end
        self.play()

    def _on_position_changed(self, position_ms: int):
        time = position_ms / 1000.0
        if self.segment_end is not None and time >= self.segment_end:
            self.segment_end = None
            self.pause()
        self.time_changed.emit(time)

    def _on_duration_changed(self, duration_ms: int):
        self.duration_changed.emit(duration_ms / 1000.0)

    def _on_state_changed(self, state):
        self.playback_state_changed.emit(self.STATE_NAMES.get(state, "stopped"))

    def _on_error(self, error, message: str = ""):
        text = message or self.media_player.errorString()
        logger.error(f"Playback error ({error}): {text}")
        self.error_occurred.emit(text)
