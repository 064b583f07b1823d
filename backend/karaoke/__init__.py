"""Karaoke subtitle parsing and playback queries."""

from .models import KaraokeCue
from .parsing import VttParseError, parse_vtt
from .playback import find_active_cue, find_display_cue, find_latest_started_cue

__all__ = [
    "KaraokeCue",
    "VttParseError",
    "parse_vtt",
    "find_active_cue",
    "find_display_cue",
    "find_latest_started_cue",
]
