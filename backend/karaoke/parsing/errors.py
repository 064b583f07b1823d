"""Errors raised while parsing karaoke VTT documents.

Every error aborts the whole parse. They subclass ``ValueError`` so callers
that only care about "bad input" can catch that.
"""

from typing import Optional


class VttParseError(ValueError):
    """Base class for all karaoke VTT parse failures."""

    code = "parse_error"

    def __init__(self, message: str, block_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.block_number = block_number


class MissingHeaderError(VttParseError):
    code = "missing_header"

    def __init__(self):
        super().__init__("Invalid VTT file: missing WEBVTT header.")


class NoCuesError(VttParseError):
    code = "no_cues"

    def __init__(self):
        super().__init__("Invalid VTT file: no cues found.")


class NoValidCuesError(VttParseError):
    code = "no_valid_cues"

    def __init__(self):
        super().__init__("Invalid VTT file: no valid cues found.")


class MalformedTimingLineError(VttParseError):
    code = "malformed_timing_line"

    def __init__(self, line: str, block_number: Optional[int] = None):
        super().__init__(f'Invalid cue timing line: "{line}"', block_number)
        self.line = line


class MalformedTimestampError(VttParseError):
    code = "malformed_timestamp"

    def __init__(self, value: str, block_number: Optional[int] = None):
        super().__init__(f"Invalid timestamp: {value}", block_number)
        self.value = value


class InvalidTimeRangeError(VttParseError):
    code = "invalid_time_range"

    def __init__(self, start_ms: int, end_ms: int, block_number: Optional[int] = None):
        super().__init__(
            "Invalid cue time range: end must be greater than or equal to start.",
            block_number
        )
        self.start_ms = start_ms
        self.end_ms = end_ms


class EmptyCueTextError(VttParseError):
    code = "empty_cue_text"

    def __init__(self, block_number: Optional[int] = None):
        super().__init__("Invalid cue: empty text.", block_number)


__all__ = [
    "VttParseError",
    "MissingHeaderError",
    "NoCuesError",
    "NoValidCuesError",
    "MalformedTimingLineError",
    "MalformedTimestampError",
    "InvalidTimeRangeError",
    "EmptyCueTextError",
]
