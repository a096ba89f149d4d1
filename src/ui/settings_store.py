"""
Settings Store - QSettings-based persistence for runtime settings and recent files
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QSettings

from config import APP_NAME, ORG_NAME
from runtime_config import RuntimeConfig

logger = logging.getLogger(__name__)


class SettingsStore:
    """Persist RuntimeConfig and the recent media list between sessions"""

    MAX_RECENT = 10
    CONFIG_KEY = "runtime_config"
    RECENT_KEY = "recent_media"

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings if settings is not None else QSettings(ORG_NAME, APP_NAME)

    def load_config(self) -> RuntimeConfig:
        """Load the saved config, falling back to defaults"""
        raw = self.settings.value(self.CONFIG_KEY, "")
        if not raw:
            return RuntimeConfig()
        try:
            return RuntimeConfig.from_dict(json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring unreadable saved settings: {e}")
            return RuntimeConfig()

    def save_config(self, config: RuntimeConfig):
        self.settings.setValue(self.CONFIG_KEY, json.dumps(config.to_dict()))
        self.settings.sync()

    def get_recent_media(self) -> list[str]:
        """
        Get list of recently opened media files.
        Files that no longer exist are dropped.
        """
        paths = self.settings.value(self.RECENT_KEY, [])
        if not paths:
            return []
        if isinstance(paths, str):
            paths = [paths]

        valid = [p for p in paths if p and Path(p).exists()]
        if len(valid) != len(paths):
            self._save_recent(valid)
        return valid

    def add_recent_media(self, path: str):
        """Add or move a media file to the top of the recent list"""
        path = os.path.normpath(path)
        paths = [p for p in self.get_recent_media() if os.path.normpath(p) != path]
        paths.insert(0, path)
        self._save_recent(paths[:self.MAX_RECENT])

    def clear_recent_media(self):
        self._save_recent([])

    def _save_recent(self, paths: list[str]):
        self.settings.setValue(self.RECENT_KEY, paths)
        self.settings.sync()


# Global instance
_store: Optional[SettingsStore] = None


def get_settings_store() -> SettingsStore:
    """Get the global SettingsStore instance"""
    global _store
    if _store is None:
        _store = SettingsStore()
    return _store
