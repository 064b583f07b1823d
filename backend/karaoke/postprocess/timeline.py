"""Timeline repair: monotonic starts and gap-free cue boundaries."""

import logging
from typing import List, Optional, Sequence

from ..models import AdjustmentReason, RawCue, TimelineAdjustment


logger = logging.getLogger(__name__)


def repair_starts(cues: Sequence[RawCue]) -> List[RawCue]:
    """
    Clamp each start up to the previous repaired start.

    Order is kept and the first cue's start is never changed.

    Args:
        cues: Raw cues in source order

    Returns:
        New list with non-decreasing start times
    """
    repaired: List[RawCue] = []

    for cue in cues:
        previous = repaired[-1] if repaired else None
        if previous and cue.start_ms < previous.start_ms:
            cue = cue.model_copy(update={"start_ms": previous.start_ms})
        repaired.append(cue)

    return repaired


def repaired_end(cue: RawCue, next_cue: Optional[RawCue]) -> int:
    """
    Compute a cue's end given the (start-repaired) cue that follows it.

    Args:
        cue: Cue whose end is being normalized
        next_cue: Following cue, or None for the last cue

    Returns:
        The normalized end in milliseconds, never before the cue's start
    """
    end_ms = cue.end_ms

    if next_cue and next_cue.start_ms >= cue.start_ms:
        end_ms = min(end_ms, next_cue.start_ms)

    # Zero-length cue inside continuous speech: fill up to the next cue
    if end_ms <= cue.start_ms and next_cue and next_cue.start_ms > cue.start_ms:
        end_ms = next_cue.start_ms

    if end_ms < cue.start_ms:
        end_ms = cue.start_ms

    return end_ms


def repair_timeline(cues: Sequence[RawCue]) -> List[RawCue]:
    """
    Repair raw cue timings into a monotonic, non-overlapping timeline.

    Cues are never reordered or dropped.

    Args:
        cues: Raw cues in source order

    Returns:
        New list of cues, same length as the input
    """
    started = repair_starts(cues)
    repaired: List[RawCue] = []

    for i, cue in enumerate(started):
        next_cue = started[i + 1] if i + 1 < len(started) else None
        end_ms = repaired_end(cue, next_cue)
        if end_ms != cue.end_ms:
            cue = cue.model_copy(update={"end_ms": end_ms})
        repaired.append(cue)

    logger.debug("Repaired timeline of %d cues", len(repaired))
    return repaired


def collect_timeline_adjustments(
    raw: Sequence[RawCue],
    repaired: Sequence[RawCue]
) -> List[TimelineAdjustment]:
    """
    Describe what repair_timeline changed.

    Args:
        raw: Cues before repair
        repaired: Output of repair_timeline for the same cues

    Returns:
        One entry per changed boundary, in cue order
    """
    if len(raw) != len(repaired):
        raise ValueError("Repaired timeline must have the same length as the raw one")

    adjustments: List[TimelineAdjustment] = []

    for i, (before, after) in enumerate(zip(raw, repaired)):
        if after.start_ms != before.start_ms:
            adjustments.append(TimelineAdjustment(
                cue_index=i + 1,
                field="start",
                original_ms=before.start_ms,
                repaired_ms=after.start_ms,
                reason=AdjustmentReason.START_CLAMPED
            ))

        if after.end_ms != before.end_ms:
            if after.end_ms < before.end_ms:
                reason = AdjustmentReason.END_CLAMPED
            elif after.end_ms == after.start_ms:
                reason = AdjustmentReason.END_FLOORED
            else:
                reason = AdjustmentReason.END_STRETCHED
            adjustments.append(TimelineAdjustment(
                cue_index=i + 1,
                field="end",
                original_ms=before.end_ms,
                repaired_ms=after.end_ms,
                reason=reason
            ))

    return adjustments
