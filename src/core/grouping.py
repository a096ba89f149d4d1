"""
Grouping Engine - Cluster adjacent subtitle entries into display/export groups

Consecutive entries that follow each other closely and do not end a
sentence are shown together as one multi-line caption and exported as one
SRT block. Groups are computed left to right and no entry belongs to two
groups.
"""
from typing import Optional, Sequence

from models.subtitle import SubtitleEntry, GroupedCaption
from runtime_config import get_config


def ends_sentence(text: str, terminal_punctuation: str) -> bool:
    """Check whether *text* (trimmed) ends with terminal punctuation"""
    stripped = text.strip()
    return bool(stripped) and stripped[-1] in terminal_punctuation


class GroupingEngine:
    """Compute caption groups from an ordered entry sequence.

    Args:
        gap_threshold: Max gap (seconds) between entries of one group.
            If None, uses runtime config value.
        terminal_punctuation: Characters that end a sentence and break a group.
            If None, uses runtime config value.
        max_group_size: Largest group size. If None, uses runtime config value.
    """

    def __init__(
        self,
        gap_threshold: Optional[float] = None,
        terminal_punctuation: Optional[str] = None,
        max_group_size: Optional[int] = None,
    ):
        params = get_config().get_grouping_params()
        if gap_threshold is None:
            gap_threshold = params["gap_threshold"]
        if terminal_punctuation is None:
            terminal_punctuation = params["terminal_punctuation"]
        if max_group_size is None:
            max_group_size = params["max_group_size"]
        self.gap_threshold = gap_threshold
        self.terminal_punctuation = terminal_punctuation
        self.max_group_size = max(1, int(max_group_size))

    def _continues(self, current: SubtitleEntry, following: SubtitleEntry) -> bool:
        """True when *following* joins the group that *current* is in"""
        gap = following.start_time - current.end_time
        return gap < self.gap_threshold and not ends_sentence(current.text, self.terminal_punctuation)

    def group(self, entries: Sequence[SubtitleEntry]) -> list[GroupedCaption]:
        """Split the sequence into consecutive groups.

        Largest group first: with the default size of 3 a triplet is tried
        before a pair, a pair before a singleton. A triplet only forms when
        its first two entries already form a pair.
        """
        groups = []
        count = len(entries)
        i = 0
        while i < count:
            size = 1
            while (size < self.max_group_size and i + size < count
                   and self._continues(entries[i + size - 1], entries[i + size])):
                size += 1
            groups.append(GroupedCaption(first_index=i, entries=list(entries[i:i + size])))
            i += size
        return groups

    def active_group(self, entries: Sequence[SubtitleEntry], time: float) -> Optional[GroupedCaption]:
        """Find the group whose combined span contains *time*"""
        for group in self.group(entries):
            if group.covers(time):
                return group
        return None

    def active_lines(self, entries: Sequence[SubtitleEntry], time: float) -> list[str]:
        """Lines to show on screen at *time* (empty when nothing is active)"""
        group = self.active_group(entries, time)
        return group.lines if group else []

    def export_groups(
        self,
        entries: Sequence[SubtitleEntry],
        duration: Optional[float] = None
    ) -> list[GroupedCaption]:
        """Groups for SRT export.

        When a media *duration* is given and the last entry ends before it,
        the last block is stretched to the end of the media so the final
        caption does not disappear early.
        """
        groups = self.group(entries)
        if duration and groups and groups[-1].end_time < duration:
            groups[-1].end_override = float(duration)
        return groups


def group_entries(
    entries: Sequence[SubtitleEntry],
    gap_threshold: Optional[float] = None,
    terminal_punctuation: Optional[str] = None,
    max_group_size: Optional[int] = None,
) -> list[GroupedCaption]:
    """Convenience wrapper around GroupingEngine.group"""
    engine = GroupingEngine(gap_threshold, terminal_punctuation, max_group_size)
    return engine.group(entries)
