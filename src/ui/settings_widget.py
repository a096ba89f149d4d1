"""
Settings Widget - UI for configuring runtime settings
"""
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QGroupBox, QComboBox, QSpinBox, QDoubleSpinBox,
    QLineEdit, QPushButton, QDialog
)
from PyQt6.QtCore import pyqtSignal, Qt

from runtime_config import RuntimeConfig, get_config


class SettingsWidget(QWidget):
    """
    Widget for editing runtime configuration settings.

    Changes are written to the config immediately.
    """

    # Emitted when any setting is changed
    settings_changed = pyqtSignal()

    SPLIT_MODIFIERS = {
        "Alt": "alt",
        "Ctrl": "ctrl",
        "Shift": "shift",
    }
    SPLIT_MODIFIERS_REV = {v: k for k, v in SPLIT_MODIFIERS.items()}

    def __init__(self, parent=None):
        super().__init__(parent)
        self._config = get_config()
        self._setup_ui()
        self._load_from_config()

    def _setup_ui(self):
        """Setup the settings UI layout."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # === Caption grouping ===
        self.grouping_group = QGroupBox("Caption Grouping")
        self.grouping_group.setToolTip("Applied to the on-screen preview and SRT export")
        grouping_layout = QFormLayout(self.grouping_group)
        grouping_layout.setSpacing(8)

        self.spin_gap = QDoubleSpinBox()
        self.spin_gap.setRange(0.0, 5.0)
        self.spin_gap.setSingleStep(0.1)
        self.spin_gap.setSuffix(" s")
        self.spin_gap.valueChanged.connect(self._on_setting_changed)
        grouping_layout.addRow("Max gap:", self.spin_gap)

        self.edit_punctuation = QLineEdit()
        self.edit_punctuation.setMaxLength(16)
        self.edit_punctuation.textChanged.connect(self._on_setting_changed)
        grouping_layout.addRow("Sentence endings:", self.edit_punctuation)

        self.spin_group_size = QSpinBox()
        self.spin_group_size.setRange(1, 5)
        self.spin_group_size.valueChanged.connect(self._on_setting_changed)
        grouping_layout.addRow("Max lines:", self.spin_group_size)

        layout.addWidget(self.grouping_group)

        # === Waveform editing ===
        self.editing_group = QGroupBox("Waveform Editing")
        editing_layout = QFormLayout(self.editing_group)
        editing_layout.setSpacing(8)

        self.spin_handle = QSpinBox()
        self.spin_handle.setRange(1, 20)
        self.spin_handle.setSuffix(" px")
        self.spin_handle.valueChanged.connect(self._on_setting_changed)
        editing_layout.addRow("Handle width:", self.spin_handle)

        self.combo_split_modifier = QComboBox()
        self.combo_split_modifier.addItems(list(self.SPLIT_MODIFIERS.keys()))
        self.combo_split_modifier.currentTextChanged.connect(self._on_setting_changed)
        editing_layout.addRow("Split modifier:", self.combo_split_modifier)

        self.spin_history = QSpinBox()
        self.spin_history.setRange(10, 5000)
        self.spin_history.setToolTip("Takes effect for the next loaded file")
        self.spin_history.valueChanged.connect(self._on_setting_changed)
        editing_layout.addRow("Undo steps:", self.spin_history)

        layout.addWidget(self.editing_group)
        layout.addStretch()

    def _load_from_config(self):
        """Load current config values into UI controls."""
        self._block_signals(True)

        self.spin_gap.setValue(self._config.group_gap_seconds)
        self.edit_punctuation.setText(self._config.group_terminal_punctuation)
        self.spin_group_size.setValue(self._config.group_max_size)

        self.spin_handle.setValue(self._config.handle_tolerance_px)
        self.combo_split_modifier.setCurrentText(
            self.SPLIT_MODIFIERS_REV.get(self._config.split_modifier, "Alt")
        )
        self.spin_history.setValue(self._config.history_limit)

        self._block_signals(False)

    def _block_signals(self, block: bool):
        """Block or unblock signals from all controls."""
        controls = [
            self.spin_gap, self.edit_punctuation, self.spin_group_size,
            self.spin_handle, self.combo_split_modifier, self.spin_history
        ]
        for ctrl in controls:
            ctrl.blockSignals(block)

    def _on_setting_changed(self):
        """Handle any setting change - update config immediately."""
        self._save_to_config()
        self.settings_changed.emit()

    def _save_to_config(self):
        """Save current UI values to config."""
        self._config.group_gap_seconds = self.spin_gap.value()
        self._config.group_terminal_punctuation = self.edit_punctuation.text()
        self._config.group_max_size = self.spin_group_size.value()

        self._config.handle_tolerance_px = self.spin_handle.value()
        self._config.split_modifier = self.SPLIT_MODIFIERS.get(
            self.combo_split_modifier.currentText(), "alt"
        )
        self._config.history_limit = self.spin_history.value()

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self._config.reset_to_defaults()
        self._load_from_config()
        self.settings_changed.emit()

    def set_config(self, config: RuntimeConfig):
        """Set a new config instance."""
        self._config = config
        self._load_from_config()


class SettingsDialog(QDialog):
    """Dialog wrapper for SettingsWidget."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(350)
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(5)

        self.settings_widget = SettingsWidget()
        layout.addWidget(self.settings_widget)

        btn_layout = QHBoxLayout()
        btn_layout.setContentsMargins(10, 0, 10, 10)

        reset_btn = QPushButton("Restore Defaults")
        reset_btn.setToolTip("Reset every setting to its default value")
        reset_btn.clicked.connect(self.settings_widget.reset_to_defaults)
        btn_layout.addWidget(reset_btn)

        btn_layout.addStretch()

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        close_btn.setFixedWidth(80)
        btn_layout.addWidget(close_btn)

        layout.addLayout(btn_layout)

    def set_config(self, config: RuntimeConfig):
        """Set config on the embedded widget."""
        self.settings_widget.set_config(config)
