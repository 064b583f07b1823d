from .errors import VttParseError
from .vtt_parser import parse_subtitle_track, parse_vtt

__all__ = ["VttParseError", "parse_subtitle_track", "parse_vtt"]
