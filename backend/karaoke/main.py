"""FastAPI application for karaoke subtitle playback."""

import logging
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from .config import get_settings
from .export import export_karaoke_vtt
from .logging_utils import configure_logging
from .models import CueQueryResponse, KaraokeCue, KaraokeSession, SessionStatusResponse
from .parsing import VttParseError
from .playback import query_cues
from .session_store import SessionNotFoundError, session_store


logger = logging.getLogger(__name__)

SUBTITLE_EXTENSIONS = ['vtt']
AUDIO_EXTENSIONS = ['mp3']

settings = get_settings()

app = FastAPI(
    title="Karaoke Subtitle API",
    description="API for parsing karaoke VTT files and querying cues by playback position",
    version="1.0.0"
)


@app.on_event("startup")
async def startup_event():
    """Configure logging once the server starts."""
    configure_logging(settings.log_level)
    logger.info("Karaoke API starting up (log level %s)", settings.log_level)


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _check_extension(filename: str, allowed: list[str]) -> None:
    ext = filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''
    if ext not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format: {ext or '(none)'}. Supported: {', '.join(allowed)}"
        )


async def _read_upload(file: UploadFile, limit: int) -> bytes:
    content = await file.read()
    if len(content) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {len(content)} bytes (limit {limit})"
        )
    return content


def _decode_subtitles(content: bytes) -> str:
    """Decode VTT bytes as UTF-8, falling back to latin-1."""
    try:
        return content.decode('utf-8')
    except UnicodeDecodeError:
        return content.decode('latin-1')


def _parse_error(error: VttParseError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={
            "code": error.code,
            "message": f"Subtitle format error: {error.message}",
            "block_number": error.block_number,
        }
    )


async def _get_session_or_404(session_id: str) -> KaraokeSession:
    try:
        return await session_store.require_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


async def _load_subtitle_upload(session_id: str, file: UploadFile) -> None:
    filename = file.filename or "subtitles.vtt"
    _check_extension(filename, SUBTITLE_EXTENSIONS)
    content = await _read_upload(file, settings.max_subtitle_bytes)

    try:
        await session_store.load_subtitles(session_id, filename, _decode_subtitles(content))
    except VttParseError as e:
        logger.warning("Rejected subtitles %s for session %s: %s", filename, session_id, e)
        raise _parse_error(e)


async def _load_audio_upload(session_id: str, file: UploadFile) -> None:
    filename = file.filename or "audio.mp3"
    _check_extension(filename, AUDIO_EXTENSIONS)
    payload = await _read_upload(file, settings.max_audio_bytes)
    await session_store.load_audio(
        session_id,
        filename,
        payload,
        media_type=file.content_type or "audio/mpeg"
    )


def _status(session: KaraokeSession) -> SessionStatusResponse:
    return SessionStatusResponse(
        session_id=session.session_id,
        ready=session.is_ready,
        audio_filename=session.audio.filename if session.audio else None,
        subtitle_filename=session.subtitles.filename if session.subtitles else None,
        cue_count=len(session.cues),
        adjustments_count=len(session.subtitles.adjustments) if session.subtitles else 0
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "karaoke-subtitles"}


@app.post("/api/sessions")
async def create_session(
    subtitles: Optional[UploadFile] = File(default=None),
    audio: Optional[UploadFile] = File(default=None),
) -> SessionStatusResponse:
    """
    Create a playback session.

    Either file may be omitted and uploaded later. If an uploaded file is
    rejected the session is not kept.
    """
    session = await session_store.create_session()

    try:
        if subtitles is not None:
            await _load_subtitle_upload(session.session_id, subtitles)
        if audio is not None:
            await _load_audio_upload(session.session_id, audio)
    except HTTPException:
        await session_store.delete_session(session.session_id)
        raise

    return _status(session)


@app.get("/api/sessions/{session_id}")
async def get_session_status(session_id: str) -> SessionStatusResponse:
    """Get what is loaded in a session."""
    session = await _get_session_or_404(session_id)
    return _status(session)


@app.put("/api/sessions/{session_id}/subtitles")
async def replace_subtitles(
    session_id: str,
    file: UploadFile = File(...),
) -> SessionStatusResponse:
    """Replace the subtitle track. On a parse error the old track stays loaded."""
    session = await _get_session_or_404(session_id)
    await _load_subtitle_upload(session_id, file)
    return _status(session)


@app.put("/api/sessions/{session_id}/audio")
async def replace_audio(
    session_id: str,
    file: UploadFile = File(...),
) -> SessionStatusResponse:
    """Replace the audio payload."""
    session = await _get_session_or_404(session_id)
    await _load_audio_upload(session_id, file)
    return _status(session)


@app.get("/api/sessions/{session_id}/cues")
async def get_cues(session_id: str) -> list[KaraokeCue]:
    """Get the full repaired cue sequence."""
    session = await _get_session_or_404(session_id)
    return list(session.cues)


@app.get("/api/sessions/{session_id}/adjustments")
async def get_adjustments(session_id: str):
    """Get the changes the timeline repairer made to the loaded subtitles."""
    session = await _get_session_or_404(session_id)
    if not session.subtitles:
        return []
    return [a.model_dump(mode="json") for a in session.subtitles.adjustments]


@app.get("/api/sessions/{session_id}/query")
async def query_position(
    session_id: str,
    t: int = Query(..., description="Playback position in milliseconds"),
) -> CueQueryResponse:
    """Get the active, latest started and displayed cue at a position."""
    session = await _get_session_or_404(session_id)
    return query_cues(session.cues, t)


@app.get("/api/sessions/{session_id}/audio")
async def get_audio(session_id: str):
    """Stream the stored audio back to the player."""
    session = await _get_session_or_404(session_id)
    if not session.audio:
        raise HTTPException(status_code=404, detail="No audio loaded")

    return Response(
        content=session.audio.payload,
        media_type=session.audio.media_type,
        headers={
            "Content-Disposition": f'inline; filename="{session.audio.filename}"'
        }
    )


@app.get("/api/sessions/{session_id}/export")
async def export_subtitles(session_id: str):
    """Download the repaired subtitles as karaoke VTT."""
    session = await _get_session_or_404(session_id)
    if not session.subtitles:
        raise HTTPException(status_code=404, detail="No subtitles loaded")

    base_name = session.subtitles.filename.rsplit('.', 1)[0]
    filename = f"{base_name}_repaired.vtt"

    # Timestamps decode without range checks, so not every cue can be written back
    try:
        content = export_karaoke_vtt(session.subtitles.cues)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Cannot export subtitles: {e}")

    return PlainTextResponse(
        content=content,
        media_type="text/vtt",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    """Reset a session, dropping its audio and subtitles."""
    if not await session_store.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"deleted": session_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
