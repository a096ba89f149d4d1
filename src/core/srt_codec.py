"""
SRT Codec - Parse and serialize SubRip subtitle text
"""
import logging
import math
import re
from typing import Optional, Sequence

from core.grouping import GroupingEngine
from exceptions import InvalidTimecodeError
from models.subtitle import SubtitleEntry

logger = logging.getLogger(__name__)

TIMECODE_PATTERN = re.compile(r'^(\d{2}):(\d{2}):(\d{2}),(\d{3})$')
TIME_LINE_PATTERN = re.compile(r'(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})')
BLOCK_SEPARATOR = re.compile(r'\n\s*\n')

ZERO_TIMECODE = "00:00:00,000"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def seconds_to_time_string(total_seconds: float) -> str:
    """Convert seconds to SRT time format (HH:MM:SS,mmm)

    Whole seconds are floored first, then the millisecond remainder is
    rounded. A remainder that rounds up to 1000 ms carries into the seconds.
    Negative or non-finite input gives 00:00:00,000.
    """
    if isinstance(total_seconds, bool) or not isinstance(total_seconds, (int, float)):
        return ZERO_TIMECODE
    if not math.isfinite(total_seconds) or total_seconds < 0:
        return ZERO_TIMECODE

    whole = int(math.floor(total_seconds))
    millis = _round_half_up((total_seconds - whole) * 1000)
    if millis >= 1000:
        whole += 1
        millis -= 1000

    hours = whole // 3600
    minutes = (whole % 3600) // 60
    seconds = whole % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def is_valid_time_string(value: str) -> bool:
    """Check for the strict HH:MM:SS,mmm form"""
    return isinstance(value, str) and TIMECODE_PATTERN.match(value) is not None


def time_string_to_seconds(value: str) -> float:
    """Convert a strict HH:MM:SS,mmm string to seconds

    Raises:
        InvalidTimecodeError: The string is not in strict SRT form
    """
    match = TIMECODE_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidTimecodeError(f"Invalid timecode: {value!r}")
    hours, minutes, seconds, millis = (int(part) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds + millis / 1000.0


def parse_srt(text: str) -> list[SubtitleEntry]:
    """Parse SubRip text into entries.

    Blocks without a valid timestamp line are skipped.

    Args:
        text: Full SRT file content

    Returns:
        Entries in file order
    """
    if not text:
        return []

    entries = []
    blocks = BLOCK_SEPARATOR.split(text.replace('\r\n', '\n').strip())
    for block_number, block in enumerate(blocks, start=1):
        lines = block.split('\n')
        if len(lines) < 2:
            logger.debug(f"Skipping SRT block {block_number}: too short")
            continue

        time_line_index = next((i for i, line in enumerate(lines) if '-->' in line), -1)
        if time_line_index == -1:
            logger.debug(f"Skipping SRT block {block_number}: no time line")
            continue

        match = TIME_LINE_PATTERN.search(lines[time_line_index])
        if not match:
            logger.debug(f"Skipping SRT block {block_number}: malformed time line")
            continue

        try:
            start_time = time_string_to_seconds(match.group(1))
            end_time = time_string_to_seconds(match.group(2))
        except InvalidTimecodeError:
            continue

        entries.append(SubtitleEntry(
            start_time=start_time,
            end_time=end_time,
            text='\n'.join(lines[time_line_index + 1:]).strip(),
        ))
    return entries


def to_srt(
    entries: Sequence[SubtitleEntry],
    duration: Optional[float] = None,
    engine: Optional[GroupingEngine] = None
) -> str:
    """Serialize entries to SubRip text.

    Entries are merged into export groups first; every group becomes one
    block numbered from 1.

    Args:
        entries: Entries sorted by start time
        duration: Media duration; stretches the last block to it
        engine: Grouping engine, defaults to one built from runtime config

    Returns:
        SRT text with blocks separated by a blank line
    """
    if not entries:
        return ''

    engine = engine or GroupingEngine()
    blocks = []
    for index, group in enumerate(engine.export_groups(entries, duration), start=1):
        start = seconds_to_time_string(group.start_time)
        end = seconds_to_time_string(group.end_time)
        blocks.append(f"{index}\n{start} --> {end}\n{group.text}")
    return '\n\n'.join(blocks)
