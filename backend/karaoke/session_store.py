"""In-memory store of karaoke playback sessions."""

import asyncio
import logging
import uuid
from typing import Dict, Optional

from .models import AudioTrack, KaraokeSession, SubtitleTrack
from .parsing import parse_subtitle_track


logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id


class SessionStore:
    """
    Holds loaded audio and parsed subtitles per session.

    Sessions live in memory only. A session's subtitle track is replaced as
    a whole: a failed parse leaves the previously loaded cues in place.
    """

    def __init__(self):
        self.sessions: Dict[str, KaraokeSession] = {}
        self._lock = asyncio.Lock()

    async def create_session(self) -> KaraokeSession:
        """Create an empty session."""
        session = KaraokeSession(session_id=str(uuid.uuid4()))

        async with self._lock:
            self.sessions[session.session_id] = session

        logger.info("Created session %s", session.session_id)
        return session

    async def get_session(self, session_id: str) -> Optional[KaraokeSession]:
        """Get session by ID."""
        return self.sessions.get(session_id)

    async def require_session(self, session_id: str) -> KaraokeSession:
        """Get session by ID, raising SessionNotFoundError if missing."""
        session = await self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def delete_session(self, session_id: str) -> bool:
        """Drop a session and everything loaded into it."""
        async with self._lock:
            removed = self.sessions.pop(session_id, None)

        if removed:
            logger.info("Deleted session %s", session_id)
        return removed is not None

    async def load_subtitles(
        self,
        session_id: str,
        filename: str,
        content: str
    ) -> SubtitleTrack:
        """
        Parse a VTT document and make it the session's subtitle track.

        Args:
            session_id: Target session
            filename: Original filename
            content: Decoded VTT text

        Returns:
            The new subtitle track

        Raises:
            SessionNotFoundError: If the session does not exist
            VttParseError: If the document is invalid; the session is unchanged
        """
        session = await self.require_session(session_id)

        # Parse outside the lock; only a complete track is ever stored
        track = parse_subtitle_track(content, filename)

        async with self._lock:
            session.subtitles = track

        logger.info(
            "Session %s loaded %s: %d cues, %d timeline adjustments",
            session_id, filename, len(track.cues), len(track.adjustments)
        )
        return track

    async def load_audio(
        self,
        session_id: str,
        filename: str,
        payload: bytes,
        media_type: str = "audio/mpeg"
    ) -> AudioTrack:
        """Store an audio payload for the session, replacing any previous one."""
        session = await self.require_session(session_id)
        audio = AudioTrack(filename=filename, media_type=media_type, payload=payload)

        async with self._lock:
            session.audio = audio

        logger.info("Session %s loaded audio %s (%d bytes)", session_id, filename, audio.size_bytes)
        return audio


# Global session store instance
session_store = SessionStore()
