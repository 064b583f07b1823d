"""Strict WebVTT parser for karaoke cues."""

import logging
import re
from typing import List, Sequence, Tuple

from ..models import KaraokeCue, RawCue, SubtitleTrack, TimelineAdjustment
from ..postprocess.timeline import collect_timeline_adjustments, repair_timeline
from .base import TIMING_SEPARATOR, parse_timing_line_vtt
from .errors import (
    EmptyCueTextError,
    InvalidTimeRangeError,
    MissingHeaderError,
    NoCuesError,
    NoValidCuesError,
)
from .highlight import split_cue_text


logger = logging.getLogger(__name__)

HEADER = "WEBVTT"

HEADER_LINE_RE = re.compile(r"^WEBVTT[^\n]*\n?")
BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")


def normalize_document(content: str) -> str:
    """Normalize line endings, drop a BOM and trim surrounding whitespace."""
    content = content.replace('\r\n', '\n').replace('\r', '\n')

    if content.startswith('\ufeff'):
        content = content[1:]

    return content.strip()


def split_blocks(body: str) -> List[List[str]]:
    """Split the document body into blocks of non-empty, trimmed lines."""
    blocks: List[List[str]] = []

    for block in BLOCK_SEPARATOR_RE.split(body):
        lines = [line.strip() for line in block.split('\n') if line.strip()]
        if lines:
            blocks.append(lines)

    return blocks


def extract_raw_cue(lines: List[str], block_number: int) -> RawCue:
    """
    Extract one cue from a block of lines.

    The timing line is the first line if it contains "-->", otherwise the
    second; a line before it is a cue label and is discarded.

    Args:
        lines: Non-empty trimmed lines of the block
        block_number: 1-based block position, for error reporting

    Returns:
        RawCue with text lines joined by single spaces

    Raises:
        MalformedTimingLineError: If the timing line does not match
        InvalidTimeRangeError: If end precedes start
        EmptyCueTextError: If the block has no text
    """
    timing_line = lines[0]
    text_lines = lines[1:]

    if TIMING_SEPARATOR not in timing_line:
        timing_line = lines[1] if len(lines) > 1 else ""
        text_lines = lines[2:]

    start_ms, end_ms = parse_timing_line_vtt(timing_line, block_number)
    if end_ms < start_ms:
        raise InvalidTimeRangeError(start_ms, end_ms, block_number)

    raw_text = ' '.join(text_lines).strip()
    if not raw_text:
        raise EmptyCueTextError(block_number)

    return RawCue(start_ms=start_ms, end_ms=end_ms, raw_text=raw_text)


def extract_raw_cues(content: str) -> List[RawCue]:
    """
    Extract raw cues from a karaoke VTT document.

    Format:
    ```
    WEBVTT

    1
    00:00:38.640 --> 00:00:38.800
    <b>To</b> celebrate, we're gonna record.

    00:00:38.800 --> 00:00:39.000
    To <b>cele</b>brate, we're gonna record.
    ```

    Args:
        content: Raw VTT file content

    Returns:
        Raw cues in source order (not sorted)

    Raises:
        VttParseError: On the first problem found, in document order
    """
    source = normalize_document(content)
    if not source.startswith(HEADER):
        raise MissingHeaderError()

    body = HEADER_LINE_RE.sub('', source, count=1).strip()
    if not body:
        raise NoCuesError()

    raw_cues = [
        extract_raw_cue(lines, block_number)
        for block_number, lines in enumerate(split_blocks(body), 1)
    ]

    if not raw_cues:
        raise NoValidCuesError()

    return raw_cues


def build_karaoke_cues(cues: Sequence[RawCue]) -> List[KaraokeCue]:
    """Split the text of already repaired cues into karaoke cues."""
    karaoke_cues: List[KaraokeCue] = []

    for cue in cues:
        full_text, done_text, pending_text = split_cue_text(cue.raw_text)
        karaoke_cues.append(KaraokeCue(
            start_ms=cue.start_ms,
            end_ms=cue.end_ms,
            full_text=full_text,
            done_text=done_text,
            pending_text=pending_text
        ))

    return karaoke_cues


def _parse(content: str) -> Tuple[List[KaraokeCue], List[TimelineAdjustment]]:
    raw_cues = extract_raw_cues(content)
    repaired = repair_timeline(raw_cues)
    adjustments = collect_timeline_adjustments(raw_cues, repaired)

    logger.debug(
        "Parsed %d cues (%d timeline adjustments)",
        len(repaired), len(adjustments)
    )
    return build_karaoke_cues(repaired), adjustments


def parse_vtt(content: str) -> List[KaraokeCue]:
    """
    Parse a karaoke VTT document into a repaired cue sequence.

    Either the whole document parses or an error is raised; partial
    results are never returned.

    Args:
        content: Raw VTT file content

    Returns:
        Non-empty list of KaraokeCue with non-decreasing start times

    Raises:
        VttParseError: If the content is not a valid karaoke VTT document
    """
    cues, _ = _parse(content)
    return cues


def parse_subtitle_track(content: str, filename: str) -> SubtitleTrack:
    """Parse a document and keep the repair report alongside the cues."""
    cues, adjustments = _parse(content)
    return SubtitleTrack(
        filename=filename,
        cues=tuple(cues),
        adjustments=tuple(adjustments)
    )
