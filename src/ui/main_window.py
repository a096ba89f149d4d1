"""
Main Window - Subtitle list, media preview and waveform editor
"""
import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QFileDialog, QSplitter, QMessageBox, QLineEdit, QPlainTextEdit
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from config import APP_NAME
from core.editor import SubtitleEditor
from exceptions import SrtFileError
from exporters.srt_exporter import SrtExporter, default_output_name
from runtime_config import get_config
from .playback import PlaybackController
from .preview_widget import PreviewWidget
from .settings_store import get_settings_store
from .settings_widget import SettingsDialog
from .subtitle_list import SubtitleListWidget
from .threads import WaveformLoader
from .waveform_editor import WaveformCanvas

logger = logging.getLogger(__name__)

MEDIA_FILTER = "Media Files (*.mp3 *.wav *.flac *.ogg *.m4a *.aac *.mp4 *.mov *.mkv *.webm);;All Files (*)"
SRT_FILTER = "SRT Files (*.srt)"


class MainWindow(QMainWindow):
    """Main application window"""

    def __init__(self):
        super().__init__()
        self.setMinimumSize(1100, 750)

        self.media_path: Optional[Path] = None
        self.srt_path: Optional[Path] = None
        self._decoded_duration = 0.0

        self.settings_store = get_settings_store()
        self.editor = SubtitleEditor(parent=self)
        self.playback = PlaybackController(self)
        self.loader = WaveformLoader(self)
        self.exporter = SrtExporter()

        self._setup_ui()
        self._setup_menu_bar()
        self._connect_signals()
        self._update_history_actions(False, False)
        self._update_title()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------

    def _setup_menu_bar(self):
        """Setup the menu bar"""
        menu_bar = self.menuBar()

        # File menu
        file_menu = menu_bar.addMenu("&File")

        open_media_action = QAction("Open &Media...", self)
        open_media_action.setShortcut(QKeySequence.StandardKey.Open)
        open_media_action.triggered.connect(self._choose_media)
        file_menu.addAction(open_media_action)

        open_srt_action = QAction("Open S&RT...", self)
        open_srt_action.setShortcut(QKeySequence("Ctrl+Shift+O"))
        open_srt_action.triggered.connect(self._choose_srt)
        file_menu.addAction(open_srt_action)

        self.recent_menu = file_menu.addMenu("Recent Media")
        self.recent_menu.aboutToShow.connect(self._populate_recent_menu)

        file_menu.addSeparator()

        save_action = QAction("&Save SRT", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(lambda: self.save_srt(self.srt_path))
        file_menu.addAction(save_action)

        save_as_action = QAction("Save SRT &As...", self)
        save_as_action.setShortcut(QKeySequence("Ctrl+Shift+S"))
        save_as_action.triggered.connect(lambda: self.save_srt(None))
        file_menu.addAction(save_as_action)

        file_menu.addSeparator()

        settings_action = QAction("Se&ttings...", self)
        settings_action.triggered.connect(self._show_settings)
        file_menu.addAction(settings_action)

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menu_bar.addMenu("&Edit")

        self.undo_action = QAction("&Undo", self)
        self.undo_action.setShortcut(QKeySequence("Ctrl+Z"))
        self.undo_action.triggered.connect(self.editor.undo)
        edit_menu.addAction(self.undo_action)

        self.redo_action = QAction("&Redo", self)
        self.redo_action.setShortcut(QKeySequence("Ctrl+Y"))
        self.redo_action.triggered.connect(self.editor.redo)
        edit_menu.addAction(self.redo_action)

        edit_menu.addSeparator()

        self.edit_mode_action = QAction("&Edit Subtitles", self)
        self.edit_mode_action.setCheckable(True)
        self.edit_mode_action.setShortcut(QKeySequence("Ctrl+E"))
        self.edit_mode_action.toggled.connect(self.set_edit_mode)
        edit_menu.addAction(self.edit_mode_action)

    def _setup_ui(self):
        """Setup the main UI layout"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._create_list_panel())

        self.preview_widget = PreviewWidget(self.editor, self.playback)
        splitter.addWidget(self.preview_widget)
        splitter.setSizes([450, 650])
        main_layout.addWidget(splitter, 1)

        self.waveform_canvas = WaveformCanvas(self.editor)
        main_layout.addWidget(self.waveform_canvas)

        self.statusBar().showMessage("Ready")

    def _create_list_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)

        toolbar = QHBoxLayout()
        self.btn_edit_mode = QPushButton("Edit")
        self.btn_edit_mode.setCheckable(True)
        self.btn_edit_mode.setToolTip("Switch between reading and editing (Ctrl+E)")
        self.btn_edit_mode.toggled.connect(self.set_edit_mode)
        toolbar.addWidget(self.btn_edit_mode)
        toolbar.addStretch()

        self.btn_undo = QPushButton("Undo")
        self.btn_undo.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.btn_undo.clicked.connect(self.editor.undo)
        toolbar.addWidget(self.btn_undo)

        self.btn_redo = QPushButton("Redo")
        self.btn_redo.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.btn_redo.clicked.connect(self.editor.redo)
        toolbar.addWidget(self.btn_redo)
        layout.addLayout(toolbar)

        self.subtitle_list = SubtitleListWidget(self.editor)
        layout.addWidget(self.subtitle_list, 1)
        return panel

    def _connect_signals(self):
        self.playback.time_changed.connect(self._on_time_changed)
        self.playback.duration_changed.connect(self._on_player_duration)

        self.waveform_canvas.seek_requested.connect(self.seek)
        self.waveform_canvas.split_performed.connect(
            lambda index, t: self.statusBar().showMessage(f"Split entry {index + 1} at {t:.2f}s")
        )
        self.subtitle_list.seek_requested.connect(self.seek)
        self.subtitle_list.play_segment_requested.connect(self.playback.play_segment)

        self.loader.loaded.connect(self._on_audio_decoded)
        self.loader.failed.connect(self._on_audio_failed)
        self.loader.progress.connect(lambda _percent, message: self.statusBar().showMessage(message))

        self.editor.history_changed.connect(self._update_history_actions)
        self.editor.subtitles_changed.connect(self._update_title)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _choose_media(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Media", "", MEDIA_FILTER)
        if path:
            self.open_media(path)

    def _choose_srt(self):
        if not self._confirm_discard():
            return
        start_dir = str(self.media_path.parent) if self.media_path else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open SRT", start_dir, SRT_FILTER)
        if path:
            self.open_srt(path)

    def _populate_recent_menu(self):
        self.recent_menu.clear()
        recent = self.settings_store.get_recent_media()
        if not recent:
            action = self.recent_menu.addAction("(empty)")
            action.setEnabled(False)
            return
        for path in recent:
            action = self.recent_menu.addAction(Path(path).name)
            action.setToolTip(path)
            action.triggered.connect(lambda _checked=False, p=path: self.open_media(p))

    def open_media(self, path: str | Path):
        """Load a media file for playback and start decoding its waveform"""
        path = Path(path)
        if not path.exists():
            QMessageBox.warning(self, "Error", f"File not found:\n{path}")
            return

        self.media_path = path
        self._decoded_duration = 0.0
        self.waveform_canvas.set_samples(None)
        self.waveform_canvas.set_current_time(0.0)
        self.playback.load(path)
        self.loader.load(path)
        self.settings_store.add_recent_media(str(path))
        self.statusBar().showMessage(f"Decoding audio: {path.name}...")
        self._update_title()

    def open_srt(self, path: str | Path) -> bool:
        """Replace the subtitle set with the entries of an SRT file"""
        try:
            entries = self.exporter.load(path)
        except SrtFileError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Error", f"Could not open SRT file:\n{e}")
            return False

        self.srt_path = Path(path)
        self.editor.reset(entries)
        self.statusBar().showMessage(f"Loaded {len(entries)} subtitles from {self.srt_path.name}")
        self._update_title()
        return True

    def save_srt(self, path: Optional[str | Path] = None) -> bool:
        """Export the subtitles, asking for a file name when *path* is None"""
        if path is None:
            if self.srt_path is not None:
                suggested = str(self.srt_path)
            elif self.media_path is not None:
                suggested = str(self.media_path.with_name(default_output_name(self.media_path)))
            else:
                suggested = "subtitles.srt"
            path, _ = QFileDialog.getSaveFileName(self, "Save SRT", suggested, SRT_FILTER)
            if not path:
                return False

        try:
            saved = self.exporter.save(self.editor.entries, path, self.editor.media_duration or None)
        except SrtFileError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Error", f"Could not save SRT file:\n{e}")
            return False

        self.srt_path = saved
        self.editor.mark_saved()
        self.statusBar().showMessage(f"Saved: {saved}")
        self._update_title()
        return True

    def _confirm_discard(self) -> bool:
        """Ask what to do with unsaved edits. Returns False to abort."""
        if not self.editor.is_modified:
            return True
        reply = QMessageBox.question(
            self, "Unsaved Changes",
            "Save changes to the subtitles first?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No | QMessageBox.StandardButton.Cancel
        )
        if reply == QMessageBox.StandardButton.Cancel:
            return False
        if reply == QMessageBox.StandardButton.Yes:
            return self.save_srt(self.srt_path)
        return True

    # ------------------------------------------------------------------
    # Decoding and playback
    # ------------------------------------------------------------------

    def _on_audio_decoded(self, media_path: str, audio):
        self._decoded_duration = audio.duration
        self.editor.set_media_duration(audio.duration)
        self.waveform_canvas.set_samples(audio.samples)
        self.statusBar().showMessage(f"Loaded {Path(media_path).name} ({audio.duration:.1f}s)")

    def _on_audio_failed(self, media_path: str, message: str):
        self.statusBar().showMessage("Waveform unavailable")
        QMessageBox.warning(
            self, "Waveform Unavailable",
            f"Could not decode audio from {Path(media_path).name}:\n{message}\n\n"
            "Playback and list editing still work."
        )

    def _on_player_duration(self, duration: float):
        # The decoded sample count is more precise than the container's duration
        if duration > 0 and self._decoded_duration <= 0:
            self.editor.set_media_duration(duration)

    def _on_time_changed(self, time: float):
        self.waveform_canvas.set_current_time(time)
        self.subtitle_list.set_current_time(time)

    def seek(self, time: float):
        self.playback.seek(time)
        self._on_time_changed(time)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_edit_mode(self, enabled: bool):
        for control in (self.edit_mode_action, self.btn_edit_mode):
            control.blockSignals(True)
            control.setChecked(enabled)
            control.blockSignals(False)
        self.subtitle_list.set_edit_mode(enabled)

    def _update_history_actions(self, can_undo: bool, can_redo: bool):
        self.undo_action.setEnabled(can_undo)
        self.redo_action.setEnabled(can_redo)
        self.btn_undo.setEnabled(can_undo)
        self.btn_redo.setEnabled(can_redo)

    def _update_title(self):
        name = self.media_path.name if self.media_path else "Untitled"
        marker = "*" if self.editor.is_modified else ""
        self.setWindowTitle(f"{name}{marker} - {APP_NAME}")

    def _show_settings(self):
        dialog = SettingsDialog(self)
        dialog.settings_widget.settings_changed.connect(self._on_settings_changed)
        dialog.exec()
        self.settings_store.save_config(get_config())

    def _on_settings_changed(self):
        self.editor.history.set_limit(get_config().history_limit)
        self.waveform_canvas.interaction.handle_tolerance = get_config().handle_tolerance_px
        self.preview_widget.refresh_caption()
        self.waveform_canvas.update()

    def keyPressEvent(self, event):
        """Arrow keys move the selection while editing"""
        if self.subtitle_list.edit_mode and not isinstance(self.focusWidget(), (QLineEdit, QPlainTextEdit)):
            if event.key() == Qt.Key.Key_Up:
                self.editor.select_previous()
                return
            if event.key() == Qt.Key.Key_Down:
                self.editor.select_next()
                return
        super().keyPressEvent(event)

    def closeEvent(self, event):
        if not self._confirm_discard():
            event.ignore()
            return
        self.playback.pause()
        self.loader.shutdown()
        self.settings_store.save_config(get_config())
        event.accept()
