"""
Subtitle List - Read-only caption list and editable subtitle rows
"""
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPlainTextEdit,
    QPushButton, QListWidget, QListWidgetItem, QStackedWidget, QStyle,
    QAbstractItemView
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QBrush

from core.editor import SubtitleEditor
from core.srt_codec import seconds_to_time_string, is_valid_time_string
from models.subtitle import SubtitleEntry, confidence_level

CONFIDENCE_COLORS = {
    "high": "#22c55e",
    "medium": "#eab308",
    "low": "#ef4444",
}

ACTIVE_BG = QColor(49, 46, 129, 153)
TIME_STYLE = "font-family: monospace;"
INVALID_TIME_STYLE = "font-family: monospace; border: 1px solid #ef4444;"


class _CaptionTextEdit(QPlainTextEdit):
    """Plain text field that reports when the user leaves it"""

    editing_finished = pyqtSignal()

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.editing_finished.emit()


class SubtitleRow(QWidget):
    """Editable row: number, confidence dot, play button, times and text"""

    time_edited = pyqtSignal(int, str, str)  # index, field, text
    text_edited = pyqtSignal(int, str)  # index, text
    play_clicked = pyqtSignal(int)

    def __init__(self, index: int, entry: SubtitleEntry, parent=None):
        super().__init__(parent)
        self.index = index
        self.entry = entry
        self._setup_ui()
        self.set_entry(index, entry)

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        side = QVBoxLayout()
        header = QHBoxLayout()
        self.number_label = QLabel()
        self.number_label.setStyleSheet("color: #858585; font-weight: bold;")
        header.addWidget(self.number_label)

        self.confidence_dot = QLabel()
        self.confidence_dot.setFixedSize(12, 12)
        header.addWidget(self.confidence_dot)
        side.addLayout(header)

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
        self.btn_play.setFixedWidth(32)
        self.btn_play.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.btn_play.clicked.connect(lambda: self.play_clicked.emit(self.index))
        side.addWidget(self.btn_play)
        layout.addLayout(side)

        fields = QVBoxLayout()
        times = QHBoxLayout()
        self.start_edit = QLineEdit()
        self.start_edit.setStyleSheet(TIME_STYLE)
        self.start_edit.textChanged.connect(lambda _t: self._update_validity(self.start_edit))
        self.start_edit.editingFinished.connect(lambda: self._on_time_finished("start_time", self.start_edit))
        times.addWidget(self.start_edit)

        arrow = QLabel("→")
        arrow.setStyleSheet("color: #858585;")
        times.addWidget(arrow)

        self.end_edit = QLineEdit()
        self.end_edit.setStyleSheet(TIME_STYLE)
        self.end_edit.textChanged.connect(lambda _t: self._update_validity(self.end_edit))
        self.end_edit.editingFinished.connect(lambda: self._on_time_finished("end_time", self.end_edit))
        times.addWidget(self.end_edit)
        fields.addLayout(times)

        self.text_edit = _CaptionTextEdit()
        self.text_edit.setFixedHeight(48)
        self.text_edit.editing_finished.connect(self._on_text_finished)
        fields.addWidget(self.text_edit)
        layout.addLayout(fields, 1)

    def set_entry(self, index: int, entry: SubtitleEntry):
        """Show *entry*, leaving fields the user is typing in alone"""
        self.index = index
        self.entry = entry
        self.number_label.setText(str(index + 1))
        self._set_confidence(entry.confidence)

        for field, value in ((self.start_edit, entry.start_time), (self.end_edit, entry.end_time)):
            if not (field.hasFocus() and field.isModified()):
                field.blockSignals(True)
                field.setText(seconds_to_time_string(value))
                field.blockSignals(False)
                self._update_validity(field)

        if not self.text_edit.hasFocus() and self.text_edit.toPlainText() != entry.text:
            self.text_edit.blockSignals(True)
            self.text_edit.setPlainText(entry.text)
            self.text_edit.blockSignals(False)

    def revert_time(self, field: str):
        """Put the stored value back into a rejected time field"""
        edit = self.start_edit if field == "start_time" else self.end_edit
        edit.setText(seconds_to_time_string(getattr(self.entry, field)))
        edit.setModified(False)

    def _set_confidence(self, confidence: Optional[float]):
        level = confidence_level(confidence)
        if level is None:
            self.confidence_dot.hide()
            return
        self.confidence_dot.setStyleSheet(
            f"background-color: {CONFIDENCE_COLORS[level]}; border-radius: 6px;"
        )
        self.confidence_dot.setToolTip(f"Confidence: {confidence * 100:.0f}%")
        self.confidence_dot.show()

    def _update_validity(self, edit: QLineEdit):
        edit.setStyleSheet(TIME_STYLE if is_valid_time_string(edit.text()) else INVALID_TIME_STYLE)

    def _on_time_finished(self, field: str, edit: QLineEdit):
        if not edit.isModified():
            return
        edit.setModified(False)
        self.time_edited.emit(self.index, field, edit.text())

    def _on_text_finished(self):
        text = self.text_edit.toPlainText()
        if text != self.entry.text:
            self.text_edited.emit(self.index, text)


class SubtitleListWidget(QWidget):
    """
    Subtitle list with a read mode and an edit mode.

    Read mode highlights the entries under the playhead and seeks to an
    entry's start when it is clicked. Edit mode shows one SubtitleRow per
    entry and follows the editor's selection.
    """

    seek_requested = pyqtSignal(float)
    play_segment_requested = pyqtSignal(float, float)

    def __init__(self, editor: SubtitleEditor, parent=None):
        super().__init__(parent)
        self.editor = editor
        self.edit_mode = False
        self.current_time = 0.0
        self._active: set[int] = set()
        self._rows: list[SubtitleRow] = []

        self._setup_ui()
        self.editor.subtitles_changed.connect(self.refresh)
        self.editor.selection_changed.connect(self._on_selection_changed)
        self.refresh()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.stack = QStackedWidget()

        self.display_list = QListWidget()
        self.display_list.setWordWrap(True)
        self.display_list.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.display_list.itemClicked.connect(self._on_display_clicked)
        self.stack.addWidget(self.display_list)

        self.edit_list = QListWidget()
        self.edit_list.currentRowChanged.connect(self._on_edit_row_changed)
        self.stack.addWidget(self.edit_list)

        layout.addWidget(self.stack)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_edit_mode(self, enabled: bool):
        self.edit_mode = enabled
        self.stack.setCurrentWidget(self.edit_list if enabled else self.display_list)
        self.refresh()

    def set_current_time(self, time: float):
        """Update the highlighted (active) entries in read mode"""
        self.current_time = time
        self._update_active()

    def active_indices(self) -> set[int]:
        return set(self._active)

    def refresh(self):
        """Sync both lists with the editor's entries"""
        entries = self.editor.entries
        self._refresh_display(entries)
        if self.edit_mode:
            self._refresh_rows(entries)
        self._update_active(force=True)

    # ------------------------------------------------------------------
    # Read mode
    # ------------------------------------------------------------------

    @staticmethod
    def _display_text(entry: SubtitleEntry) -> str:
        times = f"{seconds_to_time_string(entry.start_time)} → {seconds_to_time_string(entry.end_time)}"
        return f"{entry.text}\n{times}"

    def _refresh_display(self, entries: list[SubtitleEntry]):
        if self.display_list.count() != len(entries):
            self.display_list.clear()
            for _ in entries:
                self.display_list.addItem(QListWidgetItem())
        for i, entry in enumerate(entries):
            item = self.display_list.item(i)
            item.setText(self._display_text(entry))
            item.setData(Qt.ItemDataRole.UserRole, entry.start_time)

    def _update_active(self, force: bool = False):
        t = self.current_time
        active = {
            i for i, e in enumerate(self.editor.entries)
            if e.start_time <= t <= e.end_time
        }
        if active == self._active and not force:
            return
        self._active = active

        for i in range(self.display_list.count()):
            item = self.display_list.item(i)
            item.setBackground(QBrush(ACTIVE_BG) if i in active else QBrush())

        if active and not self.edit_mode:
            self.display_list.scrollToItem(
                self.display_list.item(min(active)),
                QAbstractItemView.ScrollHint.PositionAtCenter
            )

    def _on_display_clicked(self, item: QListWidgetItem):
        start = item.data(Qt.ItemDataRole.UserRole)
        if start is not None:
            self.seek_requested.emit(float(start))

    # ------------------------------------------------------------------
    # Edit mode
    # ------------------------------------------------------------------

    def _refresh_rows(self, entries: list[SubtitleEntry]):
        if len(self._rows) != len(entries):
            self.edit_list.blockSignals(True)
            self.edit_list.clear()
            self._rows = []
            for i, entry in enumerate(entries):
                row = SubtitleRow(i, entry)
                row.time_edited.connect(self._on_time_edited)
                row.text_edited.connect(self.editor.update_text)
                row.play_clicked.connect(self._on_play_clicked)
                item = QListWidgetItem()
                item.setSizeHint(row.sizeHint())
                self.edit_list.addItem(item)
                self.edit_list.setItemWidget(item, row)
                self._rows.append(row)
            self.edit_list.blockSignals(False)
        else:
            for i, entry in enumerate(entries):
                self._rows[i].set_entry(i, entry)

        self._on_selection_changed(self.editor.selected_index)

    def row(self, index: int) -> SubtitleRow:
        return self._rows[index]

    def _on_time_edited(self, index: int, field: str, text: str):
        if not self.editor.update_time_text(index, field, text):
            self._rows[index].revert_time(field)

    def _on_play_clicked(self, index: int):
        entries = self.editor.entries
        if 0 <= index < len(entries):
            self.editor.select_entry(index)
            self.play_segment_requested.emit(entries[index].start_time, entries[index].end_time)

    def _on_edit_row_changed(self, row: int):
        self.editor.select_entry(row if row >= 0 else None)

    def _on_selection_changed(self, index: Optional[int]):
        if not self.edit_mode:
            return
        self.edit_list.blockSignals(True)
        item = self.edit_list.item(index) if index is not None else None
        if item is None:
            self.edit_list.setCurrentRow(-1)
        else:
            self.edit_list.setCurrentRow(index)
            self.edit_list.scrollToItem(item)
        self.edit_list.blockSignals(False)
