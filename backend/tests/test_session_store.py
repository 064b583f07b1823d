"""Tests for the in-memory session store."""

import asyncio

import pytest

from karaoke.parsing.errors import InvalidTimeRangeError, MissingHeaderError
from karaoke.session_store import SessionNotFoundError, SessionStore


VALID_VTT = """WEBVTT

00:00:03.000 --> 00:00:04.000
<b>First</b> line

00:00:02.000 --> 00:00:03.000
<b>Second</b> line
"""

OTHER_VTT = """WEBVTT

00:00:10.000 --> 00:00:11.000
Only <b>cue</b>
"""


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store():
    return SessionStore()


class TestSessionStore:
    """Tests for session lifecycle and loading."""

    def test_create_and_get(self, store):
        session = run(store.create_session())

        assert run(store.get_session(session.session_id)) is session
        assert session.cues == ()
        assert not session.is_ready

    def test_load_subtitles(self, store):
        session = run(store.create_session())

        track = run(store.load_subtitles(session.session_id, "song.vtt", VALID_VTT))

        assert track.filename == "song.vtt"
        assert len(track.cues) == 2
        assert len(track.adjustments) == 2
        assert session.cues == track.cues

    def test_failed_parse_keeps_previous_track(self, store):
        session = run(store.create_session())
        run(store.load_subtitles(session.session_id, "song.vtt", VALID_VTT))
        before = session.subtitles

        with pytest.raises(InvalidTimeRangeError):
            run(store.load_subtitles(
                session.session_id,
                "bad.vtt",
                "WEBVTT\n\n00:00:02.000 --> 00:00:01.000\nBackwards\n"
            ))

        assert session.subtitles is before

    def test_failed_first_parse_leaves_no_track(self, store):
        session = run(store.create_session())

        with pytest.raises(MissingHeaderError):
            run(store.load_subtitles(session.session_id, "bad.vtt", "Hello"))

        assert session.subtitles is None

    def test_replace_subtitles(self, store):
        session = run(store.create_session())
        run(store.load_subtitles(session.session_id, "song.vtt", VALID_VTT))

        run(store.load_subtitles(session.session_id, "other.vtt", OTHER_VTT))

        assert session.subtitles.filename == "other.vtt"
        assert len(session.cues) == 1

    def test_ready_with_audio_and_cues(self, store):
        session = run(store.create_session())
        run(store.load_audio(session.session_id, "song.mp3", b"ID3data"))
        assert not session.is_ready

        run(store.load_subtitles(session.session_id, "song.vtt", VALID_VTT))

        assert session.is_ready
        assert session.audio.size_bytes == 7
        assert session.audio.media_type == "audio/mpeg"

    def test_unknown_session(self, store):
        with pytest.raises(SessionNotFoundError):
            run(store.load_subtitles("missing", "song.vtt", VALID_VTT))
        with pytest.raises(SessionNotFoundError):
            run(store.load_audio("missing", "song.mp3", b""))

    def test_delete_session(self, store):
        session = run(store.create_session())

        assert run(store.delete_session(session.session_id))
        assert run(store.get_session(session.session_id)) is None
        assert not run(store.delete_session(session.session_id))
