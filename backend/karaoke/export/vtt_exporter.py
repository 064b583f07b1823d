"""Karaoke WebVTT exporter."""

from typing import List, Sequence

from ..models import KaraokeCue
from ..parsing.base import format_timestamp_vtt


def format_cue_text(cue: KaraokeCue) -> str:
    """
    Render cue text with the spoken prefix inside a single <b> marker.

    Cues without pending text are written plain, which parses back as
    fully spoken, unless surrounding whitespace would be lost to line
    trimming. Trailing whitespace in the pending text is closed with an
    empty marker for the same reason.
    """
    if not cue.pending_text and cue.full_text == cue.full_text.strip():
        return cue.full_text

    text = f"<b>{cue.done_text}</b>{cue.pending_text}"
    if cue.pending_text != cue.pending_text.rstrip():
        text += "<b></b>"
    return text


def export_karaoke_vtt(cues: Sequence[KaraokeCue]) -> str:
    """
    Export cues to karaoke WebVTT.

    Cues are written in sequence order, not re-sorted. Parsing the result
    gives back the same timings and text splits.

    Args:
        cues: Finished cue sequence

    Returns:
        VTT file content as string
    """
    lines: List[str] = []

    # VTT header
    lines.append("WEBVTT")
    lines.append("")

    for i, cue in enumerate(cues, 1):
        lines.append(str(i))

        start = format_timestamp_vtt(cue.start_ms)
        end = format_timestamp_vtt(cue.end_ms)
        lines.append(f"{start} --> {end}")

        lines.append(format_cue_text(cue))

        # Blank line between cues
        lines.append("")

    return "\n".join(lines)
