"""
Entry Splitter - Split one subtitle entry in two at a point in time
"""
import math
from typing import Optional

from models.subtitle import SubtitleEntry


def split_text_proportionally(entry: SubtitleEntry, split_time: float) -> tuple[str, str]:
    """Divide the entry text at the word closest to *split_time*.

    Characters are assumed to be spread evenly over the span. Words are
    walked, counting one extra character for each separating space, until
    the running length reaches the character under the split time.

    Returns:
        (first_text, second_text); either may be empty when no clean word
        boundary exists
    """
    text = entry.text
    if not text:
        return "", ""

    approx_char_time = entry.duration / len(text)
    split_char_index = int(math.floor((split_time - entry.start_time) / approx_char_time + 0.5))

    words = text.split(' ')
    split_word_index = len(words) - 1
    cumulative_length = 0
    for i, word in enumerate(words):
        cumulative_length += len(word) + 1  # +1 for the space
        if cumulative_length >= split_char_index:
            split_word_index = i
            break

    first = ' '.join(words[:split_word_index + 1])
    second = ' '.join(words[split_word_index + 1:])
    return first, second


def split_entry(entry: SubtitleEntry, split_time: float) -> Optional[tuple[SubtitleEntry, SubtitleEntry]]:
    """Split an entry at *split_time*.

    The text is divided at a word boundary proportional to the split time.
    When that leaves one half empty, both halves keep the full original
    text and only the time range is divided.

    Args:
        entry: Entry to split
        split_time: Time strictly inside the entry span

    Returns:
        (first, second) entries sharing *split_time* as their boundary, or
        None when the time is on or outside the entry boundaries
    """
    if not entry.contains(split_time):
        return None

    first_text, second_text = split_text_proportionally(entry, split_time)
    if not first_text or not second_text:
        first_text = second_text = entry.text

    first = entry.copy(end_time=split_time, text=first_text)
    second = entry.copy(start_time=split_time, text=second_text)
    return first, second
