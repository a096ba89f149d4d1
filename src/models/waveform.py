"""
Waveform state - peak envelopes and transient drag sessions.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class PeakBuffer:
    """Per-pixel (min, max) amplitude envelope.

    One pair per horizontal pixel column. The buffer remembers the width it
    was computed for so a resized surface never draws stale peaks.
    """
    mins: np.ndarray
    maxs: np.ndarray

    @property
    def width(self) -> int:
        return int(len(self.mins))

    def __len__(self) -> int:
        return self.width

    def pair(self, index: int) -> tuple[float, float]:
        return float(self.mins[index]), float(self.maxs[index])

    def matches(self, width: int) -> bool:
        return self.width == int(width)


class DragMode(str, Enum):
    START = "start"
    END = "end"
    MOVE = "move"


@dataclass(frozen=True)
class DragSession:
    """In-progress pointer drag on one entry's edge or body."""
    mode: DragMode
    target_index: int
    anchor_x: float
    original_start: float
    original_end: float
