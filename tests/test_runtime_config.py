import os
import sys

import pytest
from PyQt6.QtCore import QSettings

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import GROUP_GAP_SECONDS, HISTORY_LIMIT
from runtime_config import RuntimeConfig
from ui.settings_store import SettingsStore


@pytest.fixture
def store(qapp, tmp_path):
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return SettingsStore(settings)


class TestRuntimeConfig:
    def test_defaults_come_from_config(self):
        config = RuntimeConfig()
        assert config.group_gap_seconds == GROUP_GAP_SECONDS
        assert config.history_limit == HISTORY_LIMIT

    def test_dict_round_trip(self):
        config = RuntimeConfig(group_gap_seconds=1.25, split_modifier="ctrl")
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys_are_ignored(self):
        config = RuntimeConfig.from_dict({"group_max_size": 2, "render_fps": 30})
        assert config.group_max_size == 2

    def test_reset_to_defaults(self):
        config = RuntimeConfig(group_gap_seconds=3.0, history_limit=10)
        config.reset_to_defaults()
        assert config == RuntimeConfig()

    def test_grouping_params(self):
        params = RuntimeConfig(group_terminal_punctuation=".").get_grouping_params()
        assert params == {
            'gap_threshold': GROUP_GAP_SECONDS,
            'terminal_punctuation': ".",
            'max_group_size': 3,
        }


class TestSettingsStore:
    def test_missing_config_gives_defaults(self, store):
        assert store.load_config() == RuntimeConfig()

    def test_config_persists(self, store):
        store.save_config(RuntimeConfig(group_max_size=2, handle_tolerance_px=6))
        loaded = store.load_config()
        assert loaded.group_max_size == 2
        assert loaded.handle_tolerance_px == 6

    def test_corrupt_config_gives_defaults(self, store):
        store.settings.setValue(SettingsStore.CONFIG_KEY, "{not json")
        assert store.load_config() == RuntimeConfig()

    def test_recent_media_order_and_dedupe(self, store, tmp_path):
        first = tmp_path / "a.mp4"
        second = tmp_path / "b.mp4"
        first.write_bytes(b"")
        second.write_bytes(b"")

        store.add_recent_media(str(first))
        store.add_recent_media(str(second))
        store.add_recent_media(str(first))

        assert store.get_recent_media() == [str(first), str(second)]

    def test_recent_media_drops_missing_files(self, store, tmp_path):
        kept = tmp_path / "kept.mp4"
        gone = tmp_path / "gone.mp4"
        kept.write_bytes(b"")
        gone.write_bytes(b"")
        store.add_recent_media(str(gone))
        store.add_recent_media(str(kept))

        gone.unlink()
        assert store.get_recent_media() == [str(kept)]

    def test_recent_media_is_capped(self, store, tmp_path):
        for i in range(SettingsStore.MAX_RECENT + 3):
            path = tmp_path / f"clip{i}.mp4"
            path.write_bytes(b"")
            store.add_recent_media(str(path))

        recent = store.get_recent_media()
        assert len(recent) == SettingsStore.MAX_RECENT
        assert recent[0] == str(tmp_path / f"clip{SettingsStore.MAX_RECENT + 2}.mp4")

    def test_clear_recent_media(self, store, tmp_path):
        path = tmp_path / "a.mp4"
        path.write_bytes(b"")
        store.add_recent_media(str(path))
        store.clear_recent_media()
        assert store.get_recent_media() == []
