"""
SubtitleTimingEditor Configuration
"""
from pathlib import Path

APP_NAME = "SubtitleTimingEditor"
ORG_NAME = "SubtitleTimingEditor"

# Grouping settings
GROUP_GAP_SECONDS = 0.5  # Max gap between entries shown/exported together
GROUP_TERMINAL_PUNCTUATION = ".?!"  # Sentence endings that break a group
GROUP_MAX_SIZE = 3  # Triplets at most

# Waveform editor settings
WAVEFORM_HEIGHT = 120
HANDLE_TOLERANCE_PX = 4  # Pixels from an edge that grab the handle
SPLIT_MODIFIER = "alt"  # "alt", "ctrl" or "shift"

# History
HISTORY_LIMIT = 500  # Oldest snapshots are dropped beyond this

# Confidence thresholds for the list indicator
CONFIDENCE_HIGH = 0.9
CONFIDENCE_MEDIUM = 0.7

# Waveform colors
WAVE_COLOR = "#6b7280"
WAVE_PROGRESS_COLOR = "#a78bfa"
REGION_COLOR = (139, 92, 246, 77)  # rgba, ~0.3 alpha
REGION_BORDER_COLOR = "#a78bfa"
SELECTED_REGION_COLOR = (139, 92, 246, 128)  # ~0.5 alpha
SELECTED_REGION_BORDER_COLOR = "#c4b5fd"
PLAYHEAD_COLOR = "#f43f5e"
WAVEFORM_BG_COLOR = "#1f2937"

# Export
SRT_SUFFIX = "_subtitles.srt"

# Logging
LOG_DIR = Path.home() / ".subtitle_timing_editor" / "logs"
LOG_FILE = "editor.log"
