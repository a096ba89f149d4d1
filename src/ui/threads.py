import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from core.audio_decoder import AudioDecoder
from exceptions import AudioDecodeError

logger = logging.getLogger(__name__)


class AudioDecodeThread(QThread):
    """Background thread for decoding a media file's audio track"""
    progress = pyqtSignal(int, str)  # progress %, status message
    finished = pyqtSignal(bool, str, object)  # success, message, DecodedAudio or None

    def __init__(self, media_path: str | Path, token: int = 0):
        super().__init__()
        self.media_path = Path(media_path)
        self.token = token

    def run(self):
        try:
            self.progress.emit(0, f"Decoding {self.media_path.name}...")
            audio = AudioDecoder().decode(self.media_path)
            self.progress.emit(100, "Done")
            self.finished.emit(True, f"Decoded {audio.duration:.1f}s of audio", audio)
        except AudioDecodeError as e:
            logger.error(f"Decoding failed for {self.media_path}: {e}")
            self.finished.emit(False, str(e), None)
        except Exception as e:
            logger.exception(f"Unexpected error decoding {self.media_path}")
            self.finished.emit(False, f"Unexpected error: {e}", None)


class WaveformLoader(QObject):
    """
    Runs one AudioDecodeThread per load request.

    Every request gets a new token; results from a request that has since
    been superseded are dropped, so only the most recent file ever reaches
    the waveform.

    Signals:
        loaded: Emitted with (media_path, DecodedAudio)
        failed: Emitted with (media_path, error message)
        progress: Emitted with (percent, status message) for the current load
    """

    loaded = pyqtSignal(str, object)
    failed = pyqtSignal(str, str)
    progress = pyqtSignal(int, str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._token = 0
        self._threads: dict[int, AudioDecodeThread] = {}

    @property
    def current_token(self) -> int:
        return self._token

    def load(self, media_path: str | Path) -> int:
        """Start decoding *media_path*, superseding any pending load"""
        self._token += 1
        token = self._token
        thread = AudioDecodeThread(media_path, token)
        thread.progress.connect(
            lambda percent, message, t=token: self._on_thread_progress(t, percent, message)
        )
        thread.finished.connect(
            lambda success, message, result, t=token, p=str(media_path):
                self._on_thread_finished(t, p, success, message, result)
        )
        self._threads[token] = thread
        thread.start()
        return token

    def _on_thread_progress(self, token: int, percent: int, message: str):
        if token == self._token:
            self.progress.emit(percent, message)

    def _on_thread_finished(self, token: int, media_path: str, success: bool,
                            message: str, result: Optional[object]):
        thread = self._threads.pop(token, None)
        if thread is not None:
            thread.wait()
            thread.deleteLater()

        if token != self._token:
            logger.debug(f"Dropping superseded decode result for {media_path}")
            return

        if success:
            self.loaded.emit(media_path, result)
        else:
            self.failed.emit(media_path, message)

    def shutdown(self):
        """Wait for running decode threads (call before exit)"""
        for thread in list(self._threads.values()):
            thread.wait()
        self._threads.clear()
