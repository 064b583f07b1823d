"""Pydantic models for the karaoke subtitle player."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RawCue(BaseModel):
    """A cue as extracted from the document, before timeline repair."""
    model_config = ConfigDict(frozen=True)

    start_ms: int = Field(..., ge=0, description="Start time in milliseconds")
    end_ms: int = Field(..., ge=0, description="End time in milliseconds")
    raw_text: str = Field(..., min_length=1, description="Joined cue text, highlight markers included")


class KaraokeCue(BaseModel):
    """A finished cue split into spoken and not-yet-spoken text."""
    model_config = ConfigDict(frozen=True)

    start_ms: int = Field(..., ge=0, description="Start time in milliseconds")
    end_ms: int = Field(..., ge=0, description="End time in milliseconds")
    full_text: str = Field(..., description="Cue text with highlight markers removed")
    done_text: str = Field(..., description="Text spoken so far")
    pending_text: str = Field(..., description="Text not spoken yet")

    @property
    def duration_ms(self) -> int:
        """Duration in milliseconds."""
        return self.end_ms - self.start_ms


class AdjustmentReason(str, Enum):
    """Why the timeline repairer changed a cue."""
    START_CLAMPED = "start_clamped"    # start moved up to the previous start
    END_CLAMPED = "end_clamped"        # end pulled back to the next start
    END_STRETCHED = "end_stretched"    # zero-length cue extended to the next start
    END_FLOORED = "end_floored"        # end raised to its own start


class TimelineAdjustment(BaseModel):
    """A single change made while repairing the timeline."""
    cue_index: int = Field(..., ge=1, description="Index of the affected cue (1-based)")
    field: str = Field(..., description="Which boundary changed: 'start' or 'end'")
    original_ms: int = Field(..., description="Value before repair")
    repaired_ms: int = Field(..., description="Value after repair")
    reason: AdjustmentReason = Field(..., description="Rule that caused the change")


class SubtitleTrack(BaseModel):
    """A successfully parsed subtitle document."""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Original filename")
    cues: tuple[KaraokeCue, ...] = Field(..., min_length=1, description="Finished cue sequence")
    adjustments: tuple[TimelineAdjustment, ...] = Field(
        default=(),
        description="Changes made by the timeline repairer"
    )


class AudioTrack(BaseModel):
    """An uploaded audio payload, stored as-is for the media transport."""
    filename: str = Field(..., description="Original filename")
    media_type: str = Field(default="audio/mpeg", description="MIME type served back to the player")
    payload: bytes = Field(..., repr=False, description="Raw audio bytes")

    @property
    def size_bytes(self) -> int:
        return len(self.payload)


class KaraokeSession(BaseModel):
    """Audio and subtitles loaded together for playback."""
    session_id: str = Field(..., description="Unique session identifier")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    audio: Optional[AudioTrack] = Field(default=None, description="Loaded audio, if any")
    subtitles: Optional[SubtitleTrack] = Field(default=None, description="Loaded subtitles, if any")

    @property
    def cues(self) -> tuple[KaraokeCue, ...]:
        """Cues of the loaded subtitle track, empty when none is loaded."""
        return self.subtitles.cues if self.subtitles else ()

    @property
    def is_ready(self) -> bool:
        """Playback can start once both audio and cues are present."""
        return self.audio is not None and len(self.cues) > 0


class SessionStatusResponse(BaseModel):
    """Response for session status endpoint."""
    session_id: str
    ready: bool
    audio_filename: Optional[str] = None
    subtitle_filename: Optional[str] = None
    cue_count: int = 0
    adjustments_count: int = 0


class CueQueryResponse(BaseModel):
    """Cues relevant to a single playback position."""
    time_ms: int
    active: Optional[KaraokeCue] = None
    latest_started: Optional[KaraokeCue] = None
    displayed: Optional[KaraokeCue] = None
    done_text: str = ""
    pending_text: str = ""
