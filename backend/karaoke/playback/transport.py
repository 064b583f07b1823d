"""Position helpers for the media transport driving cue queries."""

# Skip distance of the back/forward buttons
JUMP_MS = 10_000


def clamp_position(time_ms: int, duration_ms: int) -> int:
    """Bound a requested position to ``[0, duration_ms]``."""
    return min(max(time_ms, 0), max(duration_ms, 0))


def jump(time_ms: int, offset_ms: int, duration_ms: int) -> int:
    """Move the position by ``offset_ms`` without leaving the track."""
    return clamp_position(time_ms + offset_ms, duration_ms)


def format_clock(ms: int) -> str:
    """
    Format a position as MM:SS for display.

    Fractions of a second are dropped and negative values show as 00:00.
    Minutes are not wrapped into hours.
    """
    seconds = max(0, ms // 1000)
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
