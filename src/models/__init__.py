"""
SubtitleTimingEditor data models.

Public API:

  Subtitles:
    SubtitleEntry, GroupedCaption, confidence_level

  Waveform:
    PeakBuffer, DragMode, DragSession
"""

from models.subtitle import SubtitleEntry, GroupedCaption, confidence_level
from models.waveform import PeakBuffer, DragMode, DragSession

__all__ = [
    # Subtitles
    "SubtitleEntry",
    "GroupedCaption",
    "confidence_level",
    # Waveform
    "PeakBuffer",
    "DragMode",
    "DragSession",
]
