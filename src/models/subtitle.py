"""
Subtitle entries - the value objects edited on the timeline.

Entries are plain dataclasses. The editor never mutates an entry that is
held by a history snapshot; every change produces a copy.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, List

from config import CONFIDENCE_HIGH, CONFIDENCE_MEDIUM


@dataclass
class SubtitleEntry:
    """A single subtitle span.

    Attributes:
        start_time: Start in seconds (>= 0).
        end_time: End in seconds.
        text: Caption text, may contain newlines.
        confidence: Optional timing confidence in [0, 1] reported by the
            transcription service.
    """
    start_time: float
    end_time: float
    text: str
    confidence: Optional[float] = None

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def contains(self, time: float) -> bool:
        """True when *time* lies strictly inside the span."""
        return self.start_time < time < self.end_time

    def copy(self, **changes) -> "SubtitleEntry":
        """Return an independent copy, optionally with fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        d = {"startTime": self.start_time, "endTime": self.end_time, "text": self.text}
        if self.confidence is not None:
            d["confidence"] = self.confidence
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "SubtitleEntry":
        confidence = data.get("confidence")
        return cls(
            start_time=float(data["startTime"]),
            end_time=float(data["endTime"]),
            text=str(data.get("text", "")),
            confidence=float(confidence) if confidence is not None else None,
        )


def confidence_level(confidence: Optional[float]) -> Optional[str]:
    """Classify a confidence value as 'high', 'medium' or 'low'."""
    if confidence is None:
        return None
    if confidence >= CONFIDENCE_HIGH:
        return "high"
    if confidence >= CONFIDENCE_MEDIUM:
        return "medium"
    return "low"


@dataclass
class GroupedCaption:
    """Consecutive entries shown (or exported) together as one caption.

    Derived from the authoritative sequence on demand, never stored.
    """
    first_index: int
    entries: List[SubtitleEntry] = field(default_factory=list)
    end_override: Optional[float] = None  # Used to stretch the last export block

    @property
    def size(self) -> int:
        return len(self.entries)

    @property
    def start_time(self) -> float:
        return self.entries[0].start_time

    @property
    def end_time(self) -> float:
        if self.end_override is not None:
            return self.end_override
        return self.entries[-1].end_time

    @property
    def lines(self) -> List[str]:
        return [e.text for e in self.entries]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def covers(self, time: float) -> bool:
        """True when *time* is within [start_time, end_time] inclusive."""
        return self.start_time <= time <= self.end_time
