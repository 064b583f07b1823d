from .cue_index import (
    find_active_cue,
    find_display_cue,
    find_latest_started_cue,
    is_cue_active,
    query_cues,
)
from .transport import JUMP_MS, clamp_position, format_clock, jump

__all__ = [
    "find_active_cue",
    "find_display_cue",
    "find_latest_started_cue",
    "is_cue_active",
    "query_cues",
    "JUMP_MS",
    "clamp_position",
    "format_clock",
    "jump",
]
