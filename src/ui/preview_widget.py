"""
Preview Widget - Video playback with the active caption group shown below
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QSlider, QStyle, QStyleOption
)
from PyQt6.QtCore import Qt, QSize
from PyQt6.QtGui import QPainter, QPainterPath, QPen, QColor
from PyQt6.QtMultimediaWidgets import QVideoWidget

from core.editor import SubtitleEditor
from .playback import PlaybackController


class StrokedLabel(QLabel):
    """QLabel subclass that draws its text with an outline"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._outline_width = 2
        self._outline_color = QColor(0, 0, 0)
        self._text_color = QColor(255, 255, 255)
        self._line_spacing = 1.3

    def set_outline(self, width, color):
        """Set outline (stroke) properties"""
        self._outline_width = width
        self._outline_color = QColor(color) if color else QColor(0, 0, 0)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        opt = QStyleOption()
        opt.initFrom(self)
        self.style().drawPrimitive(QStyle.PrimitiveElement.PE_Widget, opt, painter, self)

        if not self.text():
            return

        painter.setFont(self.font())
        path = QPainterPath()
        metrics = self.fontMetrics()

        lines = self.text().split('\n')
        line_height = metrics.height()
        leading = line_height * (self._line_spacing - 1.0)
        total_text_height = len(lines) * line_height + (len(lines) - 1) * leading

        rect = self.contentsRect()
        current_y = rect.center().y() - total_text_height / 2 + metrics.ascent()
        for line in lines:
            if line:
                x = rect.center().x() - metrics.horizontalAdvance(line) / 2
                path.addText(x, current_y, self.font(), line)
            current_y += line_height + leading

        if self._outline_width > 0:
            # Stroke is centred on the path, half of it is covered by the fill
            pen = QPen(self._outline_color)
            pen.setWidthF(self._outline_width * 2)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawPath(path)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(self._text_color)
        painter.drawPath(path)

    def sizeHint(self):
        if not self.text():
            return super().sizeHint()
        metrics = self.fontMetrics()
        lines = self.text().split('\n')
        line_height = metrics.height()
        leading = line_height * (self._line_spacing - 1.0)
        height = len(lines) * line_height + (len(lines) - 1) * leading
        width = max(metrics.horizontalAdvance(line) for line in lines)
        margins = self.contentsMargins()
        return QSize(
            int(width + margins.left() + margins.right() + self._outline_width * 2),
            int(height + margins.top() + margins.bottom() + self._outline_width * 2)
        )


class PreviewWidget(QWidget):
    """Video surface, transport controls and the caption for the current time"""

    def __init__(self, editor: SubtitleEditor, playback: PlaybackController, parent=None):
        super().__init__(parent)
        self.editor = editor
        self.playback = playback
        self.total_duration = 0.0
        self.current_time = 0.0
        self.is_seeking = False

        self._setup_ui()
        self.playback.set_video_output(self.video_widget)

        self.playback.time_changed.connect(self._on_time_changed)
        self.playback.duration_changed.connect(self.set_total_duration)
        self.playback.playback_state_changed.connect(self._on_state_changed)
        self.playback.error_occurred.connect(self._on_error)
        self.editor.subtitles_changed.connect(self.refresh_caption)

    def _setup_ui(self):
        """Setup the UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        self.video_widget = QVideoWidget()
        self.video_widget.setMinimumSize(320, 180)
        layout.addWidget(self.video_widget, 1)

        self.caption_label = StrokedLabel()
        self.caption_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        # Captions only break at explicit newlines
        self.caption_label.setWordWrap(False)
        self.caption_label.setMinimumHeight(72)
        self.caption_label.setStyleSheet("""
            QLabel {
                background-color: #111111;
                padding: 4px 8px;
                font-size: 18px;
                font-weight: bold;
            }
        """)
        layout.addWidget(self.caption_label)

        self.seek_slider = QSlider(Qt.Orientation.Horizontal)
        self.seek_slider.setRange(0, 1000)
        self.seek_slider.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.seek_slider.sliderPressed.connect(self._on_seek_start)
        self.seek_slider.sliderReleased.connect(self._on_seek_end)
        layout.addWidget(self.seek_slider)

        controls_layout = QHBoxLayout()

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
        self.btn_play.setToolTip("Play/Pause")
        self.btn_play.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.btn_play.clicked.connect(self.playback.toggle)
        self.btn_play.setFixedWidth(40)
        controls_layout.addWidget(self.btn_play)

        self.time_label = QLabel("0:00 / 0:00")
        self.time_label.setStyleSheet("font-family: monospace;")
        controls_layout.addWidget(self.time_label)

        controls_layout.addStretch()

        self.status_label = QLabel("Idle")
        self.status_label.setStyleSheet("color: gray;")
        controls_layout.addWidget(self.status_label)

        layout.addLayout(controls_layout)

    def _format_time(self, seconds: float) -> str:
        """Format seconds as M:SS"""
        seconds = int(seconds)
        return f"{seconds // 60}:{seconds % 60:02d}"

    def set_total_duration(self, duration_sec: float):
        self.total_duration = duration_sec
        self._update_time_label()

    def set_caption_lines(self, lines: list[str]):
        text = "\n".join(lines)
        if text != self.caption_label.text():
            self.caption_label.setText(text)

    def refresh_caption(self):
        """Recompute the caption after the subtitles changed"""
        self.set_caption_lines(self.editor.display_lines(self.current_time))

    def _update_time_label(self):
        self.time_label.setText(
            f"{self._format_time(self.current_time)} / {self._format_time(self.total_duration)}"
        )

    def _on_time_changed(self, time: float):
        self.current_time = time
        self.refresh_caption()
        self._update_time_label()
        if not self.is_seeking and self.total_duration > 0:
            self.seek_slider.blockSignals(True)
            self.seek_slider.setValue(int(time / self.total_duration * 1000))
            self.seek_slider.blockSignals(False)

    def _on_state_changed(self, state: str):
        if state == 'playing':
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause))
            self.status_label.setText("Playing")
            self.status_label.setStyleSheet("color: #4CAF50;")
        elif state == 'paused':
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
            self.status_label.setText("Paused")
            self.status_label.setStyleSheet("color: orange;")
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
            self.status_label.setText("Stopped")
            self.status_label.setStyleSheet("color: gray;")

    def _on_error(self, message: str):
        self.status_label.setText(f"Error: {message}")
        self.status_label.setStyleSheet("color: red;")

    def _on_seek_start(self):
        """Called when user starts dragging the seek slider"""
        self.is_seeking = True

    def _on_seek_end(self):
        """Called when user releases the seek slider"""
        self.is_seeking = False
        if self.total_duration > 0:
            self.playback.seek(self.seek_slider.value() / 1000 * self.total_duration)
