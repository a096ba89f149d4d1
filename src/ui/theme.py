"""
Dark theme for SubtitleTimingEditor
"""
from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QColor, QPalette


class ModernDarkTheme:
    """Dark slate theme with a violet accent matching the waveform regions"""

    BG_DARK = "#111827"
    BG_PANEL = "#1f2937"
    BORDER = "#374151"

    ACCENT = "#8b5cf6"
    ACCENT_HOVER = "#a78bfa"

    TEXT_MAIN = "#e5e7eb"
    TEXT_DIM = "#9ca3af"

    STYLESHEET = f"""
        QMainWindow, QDialog {{
            background-color: {BG_DARK};
        }}
        QWidget {{
            background-color: {BG_DARK};
            color: {TEXT_MAIN};
            font-family: "Segoe UI", "Inter", sans-serif;
            font-size: 14px;
        }}

        QPushButton {{
            background-color: {BORDER};
            border: 1px solid {BORDER};
            border-radius: 4px;
            padding: 6px 12px;
            min-height: 24px;
        }}
        QPushButton:hover {{
            background-color: #4b5563;
        }}
        QPushButton:checked {{
            background-color: {ACCENT};
            border: 1px solid {ACCENT};
            color: white;
        }}
        QPushButton:disabled {{
            background-color: {BG_PANEL};
            color: #4b5563;
            border: 1px solid {BG_PANEL};
        }}

        QLineEdit, QPlainTextEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
            background-color: {BG_PANEL};
            border: 1px solid {BORDER};
            border-radius: 4px;
            padding: 4px;
        }}
        QLineEdit:focus, QPlainTextEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus {{
            border: 1px solid {ACCENT};
        }}

        QGroupBox {{
            border: 1px solid {BORDER};
            border-radius: 4px;
            margin-top: 10px;
            padding-top: 5px;
            font-weight: bold;
        }}
        QGroupBox::title {{
            subcontrol-origin: margin;
            left: 10px;
            padding: 0 5px;
            color: {TEXT_DIM};
        }}

        QListWidget {{
            background-color: {BG_PANEL};
            border: 1px solid {BORDER};
            outline: none;
        }}
        QListWidget::item {{
            padding: 6px;
            border-bottom: 1px solid {BG_DARK};
        }}
        QListWidget::item:selected {{
            background-color: #312e81;
            color: white;
        }}
        QListWidget::item:hover {{
            background-color: #273244;
        }}

        QScrollBar:vertical {{
            background: {BG_DARK};
            width: 12px;
        }}
        QScrollBar::handle:vertical {{
            background: #4b5563;
            min-height: 20px;
            border-radius: 6px;
            margin: 2px;
        }}
        QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
            height: 0px;
        }}

        QMenuBar {{
            border-bottom: 1px solid {BORDER};
        }}
        QMenuBar::item:selected, QMenu::item:selected {{
            background-color: {ACCENT};
            color: white;
        }}
        QMenu {{
            background-color: {BG_PANEL};
            border: 1px solid {BORDER};
        }}
        QMenu::item {{
            padding: 6px 24px 6px 12px;
        }}

        QSplitter::handle:hover {{
            background-color: {ACCENT};
        }}
        QStatusBar {{
            color: {TEXT_DIM};
        }}
    """

    @staticmethod
    def apply(app: QApplication):
        """Apply theme to application"""
        app.setStyle("Fusion")

        palette = QPalette()
        palette.setColor(QPalette.ColorRole.Window, QColor(ModernDarkTheme.BG_DARK))
        palette.setColor(QPalette.ColorRole.WindowText, QColor(ModernDarkTheme.TEXT_MAIN))
        palette.setColor(QPalette.ColorRole.Base, QColor(ModernDarkTheme.BG_PANEL))
        palette.setColor(QPalette.ColorRole.AlternateBase, QColor(ModernDarkTheme.BG_DARK))
        palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(ModernDarkTheme.BG_PANEL))
        palette.setColor(QPalette.ColorRole.ToolTipText, QColor(ModernDarkTheme.TEXT_MAIN))
        palette.setColor(QPalette.ColorRole.Text, QColor(ModernDarkTheme.TEXT_MAIN))
        palette.setColor(QPalette.ColorRole.Button, QColor(ModernDarkTheme.BORDER))
        palette.setColor(QPalette.ColorRole.ButtonText, QColor(ModernDarkTheme.TEXT_MAIN))
        palette.setColor(QPalette.ColorRole.Highlight, QColor(ModernDarkTheme.ACCENT))
        palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#ffffff"))
        app.setPalette(palette)

        app.setStyleSheet(ModernDarkTheme.STYLESHEET)
