"""
SRT Exporter - Read and write subtitle files
"""
import logging
from pathlib import Path
from typing import Optional, Sequence

from config import SRT_SUFFIX
from core.grouping import GroupingEngine
from core.srt_codec import parse_srt, to_srt
from exceptions import SrtFileError
from models.subtitle import SubtitleEntry

logger = logging.getLogger(__name__)


def default_output_name(media_path: str | Path) -> str:
    """Default SRT file name for a media file (<stem>_subtitles.srt)"""
    stem = Path(media_path).stem or Path(media_path).name
    return f"{stem}{SRT_SUFFIX}"


class SrtExporter:
    """Save and load SRT files with export grouping applied"""

    def __init__(self, engine: Optional[GroupingEngine] = None):
        self.engine = engine

    def to_srt_string(
        self,
        entries: Sequence[SubtitleEntry],
        duration: Optional[float] = None
    ) -> str:
        """Convert entries to SRT format string"""
        return to_srt(entries, duration, self.engine or GroupingEngine())

    def save(
        self,
        entries: Sequence[SubtitleEntry],
        output_path: str | Path,
        duration: Optional[float] = None
    ) -> Path:
        """Save subtitles to SRT file

        Args:
            entries: Entries sorted by start time
            output_path: Output file path
            duration: Media duration, stretches the last block

        Returns:
            The written path
        """
        output_path = Path(output_path)
        content = self.to_srt_string(entries, duration)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise SrtFileError(f"Could not write {output_path}: {e}") from e

        logger.info(f"Saved {len(entries)} entries to {output_path}")
        return output_path

    def load(self, input_path: str | Path) -> list[SubtitleEntry]:
        """Load entries from an SRT file

        Malformed blocks are skipped.

        Raises:
            SrtFileError: The file cannot be read or decoded
        """
        input_path = Path(input_path)
        try:
            with open(input_path, 'r', encoding='utf-8-sig') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SrtFileError(f"Could not read {input_path}: {e}") from e

        entries = parse_srt(content)
        logger.info(f"Loaded {len(entries)} entries from {input_path}")
        return entries
