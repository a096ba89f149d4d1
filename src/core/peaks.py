"""
Peak Extractor - Downsample audio samples into per-pixel min/max envelopes
"""
import math

import numpy as np

from models.waveform import PeakBuffer


def first_channel(samples) -> np.ndarray:
    """Return the first channel of a sample buffer as float32.

    2-D buffers are expected in (frames, channels) layout, as returned by
    soundfile.
    """
    data = np.asarray(samples, dtype=np.float32)
    if data.ndim == 2:
        data = data[:, 0]
    elif data.ndim != 1:
        raise ValueError(f"Unsupported sample buffer shape: {data.shape}")
    return data


def extract_peaks(samples, width: int) -> PeakBuffer:
    """Compute exactly *width* (min, max) pairs from a sample buffer.

    The buffer is partitioned into contiguous buckets of ceil(len / width)
    samples (at least one). Buckets past the end of a short buffer are
    empty and report (0, 0).

    Args:
        samples: Mono samples in [-1, 1], or (frames, channels) array
        width: Target pixel width

    Returns:
        PeakBuffer with one pair per pixel column
    """
    width = int(width)
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")

    data = first_channel(samples)
    mins = np.zeros(width, dtype=np.float32)
    maxs = np.zeros(width, dtype=np.float32)

    n = len(data)
    if n == 0:
        return PeakBuffer(mins=mins, maxs=maxs)

    step = max(1, math.ceil(n / width))
    starts = np.arange(0, n, step)  # never more than width buckets
    mins[:len(starts)] = np.minimum.reduceat(data, starts)
    maxs[:len(starts)] = np.maximum.reduceat(data, starts)
    return PeakBuffer(mins=mins, maxs=maxs)
