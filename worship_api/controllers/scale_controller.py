# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Scale CRUD endpoints.
Thin HTTP layer — delegates ALL logic to ScaleService.
"""

from fastapi import APIRouter, Depends, HTTPException

from worship_api.core.dependencies import get_scale_service, get_store
from worship_api.core.security import get_current_principal, require_admin
from worship_api.models.domain import Principal, ScaleDraft, ScalePatch
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.repositories.store import WorshipStore
from worship_api.schemas.worship import (
    MessageResponse,
    ScaleCreateRequest,
    ScaleListResponse,
    ScaleMutationResponse,
    ScaleResponse,
    ScaleUpdateRequest,
)
from worship_api.services.enrichment import enrich_scale
from worship_api.services.scale_service import ScaleService

router = APIRouter(prefix="/api/v1", tags=["Scales"])


@router.get("/scales", response_model=ScaleListResponse)
def list_scales(
    _: Principal = Depends(get_current_principal),
    service: ScaleService = Depends(get_scale_service),
    store: WorshipStore = Depends(get_store),
):
    """List every scale with song and soloist details."""
    return {"scales": [enrich_scale(s, store) for s in service.list_scales()]}


@router.get("/scales/{scale_id}", response_model=ScaleResponse)
def get_scale(
    scale_id: int,
    _: Principal = Depends(get_current_principal),
    service: ScaleService = Depends(get_scale_service),
    store: WorshipStore = Depends(get_store),
):
    try:
        return enrich_scale(service.get_scale(scale_id), store)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/scales", status_code=201, response_model=ScaleMutationResponse)
def create_scale(
    payload: ScaleCreateRequest,
    _: Principal = Depends(require_admin),
    service: ScaleService = Depends(get_scale_service),
    store: WorshipStore = Depends(get_store),
):
    """Schedule a service date with its ordered song/soloist assignments."""
    try:
        scale = service.create_scale(ScaleDraft(**payload.model_dump()))
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Scale created successfully", "scale": enrich_scale(scale, store)}


@router.put("/scales/{scale_id}", response_model=ScaleMutationResponse)
def update_scale(
    scale_id: int,
    payload: ScaleUpdateRequest,
    _: Principal = Depends(require_admin),
    service: ScaleService = Depends(get_scale_service),
    store: WorshipStore = Depends(get_store),
):
    """Partially update a scale; ``songs`` replaces the whole list."""
    try:
        scale = service.update_scale(
            scale_id, ScalePatch(**payload.model_dump(exclude_unset=True, exclude_none=True))
        )
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Scale updated successfully", "scale": enrich_scale(scale, store)}


@router.delete("/scales/{scale_id}", response_model=MessageResponse)
def delete_scale(
    scale_id: int,
    _: Principal = Depends(require_admin),
    service: ScaleService = Depends(get_scale_service),
):
    try:
        service.delete_scale(scale_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Scale deleted successfully"}
