"""
Runtime Configuration Module

Manages runtime-configurable settings that can be modified via the Settings UI.
Loads default values from config.py and allows runtime modifications.
"""
from dataclasses import dataclass, asdict
from typing import Optional

# Import defaults from config.py
from config import (
    GROUP_GAP_SECONDS,
    GROUP_TERMINAL_PUNCTUATION,
    GROUP_MAX_SIZE,
    HANDLE_TOLERANCE_PX,
    SPLIT_MODIFIER,
    HISTORY_LIMIT,
)


@dataclass
class RuntimeConfig:
    """
    Runtime configuration that can be modified via Settings UI.

    These settings are persisted between sessions through SettingsStore.
    """
    # Grouping settings
    group_gap_seconds: float = GROUP_GAP_SECONDS
    group_terminal_punctuation: str = GROUP_TERMINAL_PUNCTUATION
    group_max_size: int = GROUP_MAX_SIZE

    # Waveform editor settings
    handle_tolerance_px: int = HANDLE_TOLERANCE_PX
    split_modifier: str = SPLIT_MODIFIER

    # History
    history_limit: int = HISTORY_LIMIT

    def get_grouping_params(self) -> dict:
        """Get keyword arguments for the grouping engine.

        Returns:
            dict with gap_threshold, terminal_punctuation, max_group_size
        """
        return {
            'gap_threshold': self.group_gap_seconds,
            'terminal_punctuation': self.group_terminal_punctuation,
            'max_group_size': self.group_max_size,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for settings storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RuntimeConfig":
        """Create from dictionary loaded from settings storage."""
        # Filter only known fields to avoid errors with old/new config versions
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)

    def reset_to_defaults(self):
        """Reset all settings to default values from config.py."""
        self.group_gap_seconds = GROUP_GAP_SECONDS
        self.group_terminal_punctuation = GROUP_TERMINAL_PUNCTUATION
        self.group_max_size = GROUP_MAX_SIZE
        self.handle_tolerance_px = HANDLE_TOLERANCE_PX
        self.split_modifier = SPLIT_MODIFIER
        self.history_limit = HISTORY_LIMIT


# Global singleton instance
_runtime_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the global runtime configuration instance."""
    global _runtime_config
    if _runtime_config is None:
        _runtime_config = RuntimeConfig()
    return _runtime_config


def set_config(config: RuntimeConfig):
    """Set the global runtime configuration instance."""
    global _runtime_config
    _runtime_config = config
