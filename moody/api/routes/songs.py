"""Song upload (multipart) and mood-filtered listing."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from moody.api.state import AppState, get_state
from moody.core.errors import CatalogStoreError, PartialUploadFailure, UploadFailure

logger = logging.getLogger(__name__)

router = APIRouter()


class SongOut(BaseModel):
    id: str
    title: str
    artist: str
    mood: Optional[str] = None
    audio: str
    created_at: str = ""


class SongUploadResponse(BaseModel):
    message: str
    song: SongOut


class SongListResponse(BaseModel):
    message: str
    songs: List[SongOut]


@router.post("", response_model=SongUploadResponse)
def create_song(
    title: str = Form(...),
    artist: str = Form(...),
    mood: Optional[str] = Form(None),
    audio: Optional[UploadFile] = File(None),
    state: AppState = Depends(get_state),
):
    """Store the audio file, then save the song with the returned URL."""
    if audio is None:
        raise HTTPException(status_code=500, detail="Upload failed: no audio file")
    data = audio.file.read()
    try:
        song = state.upload_song(
            data, audio.filename or "", title=title, artist=artist, mood=mood
        )
    except PartialUploadFailure as e:
        raise HTTPException(
            status_code=500,
            detail=f"Upload failed; stored audio {e.file_id} could not be cleaned up",
        )
    except UploadFailure as e:
        logger.warning("POST /songs: %s", e)
        raise HTTPException(status_code=500, detail="Upload failed")
    return {"message": "Song uploaded successfully", "song": song.to_dict()}


@router.get("", response_model=SongListResponse)
def list_songs(mood: Optional[str] = None, state: AppState = Depends(get_state)):
    """Songs tagged with exactly `mood`; every song when mood is omitted."""
    try:
        songs = state.songs_for_mood(mood)
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "songs fetched...", "songs": [s.to_dict() for s in songs]}
