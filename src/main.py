"""
SubtitleTimingEditor - Entry Point
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for running as script
sys.path.insert(0, str(Path(__file__).parent))

from PyQt6.QtWidgets import QApplication

from config import APP_NAME, ORG_NAME
from log_setup import setup_logging
from runtime_config import set_config
from ui.main_window import MainWindow
from ui.settings_store import get_settings_store
from ui.theme import ModernDarkTheme

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="subtitle-timing-editor",
        description="Retime, split and export subtitles against a media waveform."
    )
    parser.add_argument("media", nargs="?", help="Audio or video file to open")
    parser.add_argument("--srt", metavar="FILE", help="SRT file with the subtitles to edit")
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level for console and file logs"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Application entry point"""
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORG_NAME)
    ModernDarkTheme.apply(app)

    set_config(get_settings_store().load_config())

    window = MainWindow()
    if args.media:
        window.open_media(args.media)
    if args.srt:
        window.open_srt(args.srt)
    window.show()

    logger.info("Editor started")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
