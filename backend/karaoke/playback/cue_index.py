"""Point-in-time queries over a finished cue sequence.

All functions are pure: they read an ordered, immutable sequence of cues
(non-decreasing ``start_ms``) and a position in milliseconds. Positions may
move backwards between calls.
"""

from bisect import bisect_right
from typing import Optional, Sequence

from ..models import CueQueryResponse, KaraokeCue


def _started_count(cues: Sequence[KaraokeCue], time_ms: int) -> int:
    """Number of cues with ``start_ms <= time_ms``."""
    return bisect_right(cues, time_ms, key=lambda cue: cue.start_ms)


def is_cue_active(cue: KaraokeCue, time_ms: int) -> bool:
    """
    Check whether a cue's interval contains a position.

    Intervals are half-open ``[start, end)``; a zero-length cue is active
    only at its exact start.
    """
    if time_ms < cue.start_ms:
        return False
    return time_ms < cue.end_ms or (cue.end_ms == cue.start_ms and time_ms == cue.start_ms)


def find_active_cue(cues: Sequence[KaraokeCue], time_ms: int) -> Optional[KaraokeCue]:
    """
    Find the cue being spoken at a position.

    Only the last cue that has started is tested. When several cues share
    that start time, the later one in sequence order is the candidate and
    earlier siblings are not consulted.

    Args:
        cues: Finished cue sequence
        time_ms: Playback position in milliseconds

    Returns:
        The active cue, or None between cues and after the last one
    """
    count = _started_count(cues, time_ms)
    if count == 0:
        return None

    candidate = cues[count - 1]
    return candidate if is_cue_active(candidate, time_ms) else None


def find_latest_started_cue(cues: Sequence[KaraokeCue], time_ms: int) -> Optional[KaraokeCue]:
    """
    Find the last cue that started at or before a position, ended or not.

    Args:
        cues: Finished cue sequence
        time_ms: Playback position in milliseconds

    Returns:
        The latest started cue, or None before the first cue starts
    """
    count = _started_count(cues, time_ms)
    return cues[count - 1] if count > 0 else None


def find_display_cue(cues: Sequence[KaraokeCue], time_ms: int) -> Optional[KaraokeCue]:
    """Cue to show at a position: the active one, else the latest started."""
    active = find_active_cue(cues, time_ms)
    return active if active is not None else find_latest_started_cue(cues, time_ms)


def query_cues(cues: Sequence[KaraokeCue], time_ms: int) -> CueQueryResponse:
    """Answer every cue query for one position at once."""
    active = find_active_cue(cues, time_ms)
    latest = find_latest_started_cue(cues, time_ms)
    displayed = active if active is not None else latest

    return CueQueryResponse(
        time_ms=time_ms,
        active=active,
        latest_started=latest,
        displayed=displayed,
        done_text=displayed.done_text if displayed is not None else "",
        pending_text=displayed.pending_text if displayed is not None else ""
    )
