# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Repertoire CRUD endpoints.
Thin HTTP layer — delegates ALL logic to SongService.
"""

from fastapi import APIRouter, Depends, HTTPException

from worship_api.core.dependencies import get_song_service, get_store
from worship_api.core.security import get_current_principal, require_admin
from worship_api.models.domain import Principal, SongDraft, SongPatch
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.repositories.store import WorshipStore
from worship_api.schemas.worship import (
    MessageResponse,
    MusicListResponse,
    SongCreateRequest,
    SongMutationResponse,
    SongResponse,
    SongUpdateRequest,
)
from worship_api.services.enrichment import enrich_song
from worship_api.services.song_service import SongService

router = APIRouter(prefix="/api/v1", tags=["Music"])


@router.get("/music", response_model=MusicListResponse)
def list_music(
    _: Principal = Depends(get_current_principal),
    service: SongService = Depends(get_song_service),
    store: WorshipStore = Depends(get_store),
):
    """List the repertoire with each song's soloist."""
    return {"music": [enrich_song(s, store) for s in service.list_songs()]}


@router.get("/music/{song_id}", response_model=SongResponse)
def get_song(
    song_id: int,
    _: Principal = Depends(get_current_principal),
    service: SongService = Depends(get_song_service),
    store: WorshipStore = Depends(get_store),
):
    try:
        return enrich_song(service.get_song(song_id), store)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/music", status_code=201, response_model=SongMutationResponse)
def create_song(
    payload: SongCreateRequest,
    _: Principal = Depends(require_admin),
    service: SongService = Depends(get_song_service),
    store: WorshipStore = Depends(get_store),
):
    """Add a song; its soloist must be an existing member."""
    try:
        song = service.create_song(SongDraft(**payload.model_dump()))
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Song created successfully", "song": enrich_song(song, store)}


@router.put("/music/{song_id}", response_model=SongMutationResponse)
def update_song(
    song_id: int,
    payload: SongUpdateRequest,
    _: Principal = Depends(require_admin),
    service: SongService = Depends(get_song_service),
    store: WorshipStore = Depends(get_store),
):
    try:
        song = service.update_song(
            song_id, SongPatch(**payload.model_dump(exclude_unset=True, exclude_none=True))
        )
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Song updated successfully", "song": enrich_song(song, store)}


@router.delete("/music/{song_id}", response_model=MessageResponse)
def delete_song(
    song_id: int,
    _: Principal = Depends(require_admin),
    service: SongService = Depends(get_song_service),
):
    try:
        service.delete_song(song_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Song deleted successfully"}
