"""Timestamp and timing-line codec for karaoke VTT documents."""

import re
from typing import Optional, Tuple

from .errors import MalformedTimestampError, MalformedTimingLineError


# Fixed-width HH:MM:SS.mmm, ASCII digits only
TIMESTAMP_PATTERN = r"[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}"

TIMESTAMP_RE = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2})\.([0-9]{3})")

# Anything after the end timestamp is cue settings and is ignored
TIMING_LINE_RE = re.compile(
    rf"({TIMESTAMP_PATTERN})\s*-->\s*({TIMESTAMP_PATTERN})(?:\s+.*)?"
)

TIMING_SEPARATOR = "-->"


def parse_timestamp_vtt(timestamp: str, block_number: Optional[int] = None) -> int:
    """
    Parse a strict VTT timestamp (HH:MM:SS.mmm) to milliseconds.

    Field ranges are not checked: "00:00:61.000" decodes to 61000.

    Args:
        timestamp: Timestamp string in format "HH:MM:SS.mmm"
        block_number: Block being parsed, reported on failure

    Returns:
        Time in milliseconds

    Raises:
        MalformedTimestampError: If the text is not exactly HH:MM:SS.mmm
    """
    match = TIMESTAMP_RE.fullmatch(timestamp)
    if not match:
        raise MalformedTimestampError(timestamp, block_number)

    hours, minutes, seconds, millis = match.groups()
    return (
        int(hours) * 3600000 +
        int(minutes) * 60000 +
        int(seconds) * 1000 +
        int(millis)
    )


def format_timestamp_vtt(ms: int) -> str:
    """
    Format milliseconds to VTT timestamp format (HH:MM:SS.mmm).

    Args:
        ms: Non-negative time in milliseconds, below 100 hours

    Returns:
        Formatted timestamp string

    Raises:
        ValueError: If the value cannot be written in two-digit hours
    """
    if ms < 0 or ms >= 100 * 3600000:
        raise ValueError(f"Time out of range for HH:MM:SS.mmm: {ms}")

    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    millis = ms % 1000

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def parse_timing_line_vtt(line: str, block_number: Optional[int] = None) -> Tuple[int, int]:
    """
    Parse a VTT timing line (start --> end), ignoring optional cue settings.

    Args:
        line: Timing line in format "HH:MM:SS.mmm --> HH:MM:SS.mmm [settings]"
        block_number: Block being parsed, reported on failure

    Returns:
        Tuple of (start_ms, end_ms)

    Raises:
        MalformedTimingLineError: If the line does not match the pattern
    """
    match = TIMING_LINE_RE.fullmatch(line)
    if not match:
        raise MalformedTimingLineError(line, block_number)

    start_ms = parse_timestamp_vtt(match.group(1), block_number)
    end_ms = parse_timestamp_vtt(match.group(2), block_number)

    return start_ms, end_ms


__all__ = [
    "TIMING_SEPARATOR",
    "parse_timestamp_vtt",
    "format_timestamp_vtt",
    "parse_timing_line_vtt",
]
