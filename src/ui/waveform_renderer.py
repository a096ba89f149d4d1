"""
Waveform Renderer - Draw the audio envelope, subtitle regions and playhead
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush

from config import (
    WAVE_COLOR, WAVE_PROGRESS_COLOR,
    REGION_COLOR, REGION_BORDER_COLOR,
    SELECTED_REGION_COLOR, SELECTED_REGION_BORDER_COLOR,
    PLAYHEAD_COLOR, WAVEFORM_BG_COLOR,
)
from models.subtitle import SubtitleEntry
from models.waveform import PeakBuffer


def _color(value) -> QColor:
    if isinstance(value, tuple):
        return QColor(*value)
    return QColor(value)


@dataclass
class WaveformColors:
    """Colour set used by render_waveform"""
    background: QColor
    wave: QColor
    progress: QColor
    region: QColor
    region_border: QColor
    selected_region: QColor
    selected_border: QColor
    playhead: QColor

    @classmethod
    def default(cls) -> "WaveformColors":
        return cls(
            background=_color(WAVEFORM_BG_COLOR),
            wave=_color(WAVE_COLOR),
            progress=_color(WAVE_PROGRESS_COLOR),
            region=_color(REGION_COLOR),
            region_border=_color(REGION_BORDER_COLOR),
            selected_region=_color(SELECTED_REGION_COLOR),
            selected_border=_color(SELECTED_REGION_BORDER_COLOR),
            playhead=_color(PLAYHEAD_COLOR),
        )


def render_waveform(
    painter: QPainter,
    width: int,
    height: int,
    peaks: Optional[PeakBuffer],
    entries: Sequence[SubtitleEntry],
    current_time: float,
    duration: float,
    selected_index: Optional[int] = None,
    colors: Optional[WaveformColors] = None,
):
    """Paint one frame of the waveform surface.

    The surface spans the whole media: x = (time / duration) * width.
    Peaks computed for a different width are not drawn.

    Args:
        painter: Active painter on the target device
        width: Surface width in pixels
        height: Surface height in pixels
        peaks: Envelope for the current width, or None before decoding
        entries: Subtitle entries to draw as regions
        current_time: Playhead position (seconds)
        duration: Media duration (seconds)
        selected_index: Entry drawn with the selected style
        colors: Colour set, defaults to the configured palette
    """
    if colors is None:
        colors = WaveformColors.default()

    painter.fillRect(QRectF(0, 0, width, height), colors.background)
    if duration <= 0 or width <= 0:
        return

    playhead_x = current_time / duration * width

    if peaks is not None and peaks.matches(width):
        _draw_envelope(painter, height, peaks, playhead_x, colors)

    for i, entry in enumerate(entries):
        _draw_region(painter, width, height, entry, duration, i == selected_index, colors)

    # Playhead on top of everything
    painter.setPen(QPen(colors.playhead, 2))
    x = int(playhead_x)
    painter.drawLine(x, 0, x, height)


def _draw_envelope(painter: QPainter, height: int, peaks: PeakBuffer,
                   playhead_x: float, colors: WaveformColors):
    """Draw one vertical bar per pixel column, played part highlighted"""
    half = height / 2
    painter.setPen(Qt.PenStyle.NoPen)
    for i in range(peaks.width):
        lo, hi = peaks.pair(i)
        top = (1 + lo) * half
        bar_height = max(1.0, (hi - lo) * half)
        color = colors.progress if i < playhead_x else colors.wave
        painter.fillRect(QRectF(i, top, 1, bar_height), color)


def _draw_region(painter: QPainter, width: int, height: int, entry: SubtitleEntry,
                 duration: float, selected: bool, colors: WaveformColors):
    start_x = entry.start_time / duration * width
    end_x = entry.end_time / duration * width
    rect = QRectF(start_x, 0, max(0.0, end_x - start_x), height)

    if selected:
        fill, border = colors.selected_region, colors.selected_border
    else:
        fill, border = colors.region, colors.region_border

    painter.setBrush(QBrush(fill))
    painter.setPen(QPen(border, 1))
    painter.drawRect(rect)
