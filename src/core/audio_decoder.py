"""
Audio Decoder - Decode a media file into a mono float sample buffer
"""
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from exceptions import AudioDecodeError

logger = logging.getLogger(__name__)


@dataclass
class DecodedAudio:
    """First channel of a decoded media file, normalized to [-1, 1]."""
    samples: np.ndarray
    sample_rate: int

    @property
    def duration(self) -> float:
        """Duration in seconds"""
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / float(self.sample_rate)


class AudioDecoder:
    """Decode audio tracks for waveform display.

    Plain audio files (wav, flac, ogg) are read with soundfile. Anything
    libsndfile cannot open (mp3, mp4, mkv, ...) goes through pydub/ffmpeg.
    """

    def decode(self, media_path: str | Path) -> DecodedAudio:
        """Decode a media file

        Args:
            media_path: Path to an audio or video file

        Returns:
            DecodedAudio with the first channel

        Raises:
            AudioDecodeError: The file is missing, corrupt or unsupported
        """
        media_path = Path(media_path)
        if not media_path.is_file():
            raise AudioDecodeError(f"Media file not found: {media_path}")

        try:
            decoded = self._decode_with_soundfile(media_path)
        except (RuntimeError, TypeError) as e:
            logger.debug(f"soundfile could not read {media_path.name} ({e}), trying ffmpeg")
            decoded = self._decode_with_pydub(media_path)

        if len(decoded.samples) == 0:
            raise AudioDecodeError(f"No audio samples in {media_path.name}")

        logger.info(
            f"Decoded {media_path.name}: {decoded.duration:.2f}s @ {decoded.sample_rate} Hz"
        )
        return decoded

    def _decode_with_soundfile(self, media_path: Path) -> DecodedAudio:
        data, sample_rate = sf.read(str(media_path), dtype='float32', always_2d=True)
        return DecodedAudio(samples=np.ascontiguousarray(data[:, 0]), sample_rate=int(sample_rate))

    def _decode_with_pydub(self, media_path: Path) -> DecodedAudio:
        try:
            audio = AudioSegment.from_file(str(media_path))
        except (CouldntDecodeError, OSError, IndexError) as e:
            raise AudioDecodeError(f"Could not decode {media_path.name}: {e}") from e

        samples = np.array(audio.get_array_of_samples())
        if audio.channels > 1:
            # Interleaved frames, keep the first channel
            samples = samples.reshape(-1, audio.channels)[:, 0]

        # Normalize to [-1, 1]
        scale = float(1 << (8 * audio.sample_width - 1))
        samples = samples.astype(np.float32) / scale
        return DecodedAudio(samples=samples, sample_rate=int(audio.frame_rate))
