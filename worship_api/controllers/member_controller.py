# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member CRUD endpoints.
Thin HTTP layer — delegates ALL logic to MemberService.
"""

from fastapi import APIRouter, Depends, HTTPException

from worship_api.core.dependencies import get_member_service
from worship_api.core.security import get_current_principal, require_admin
from worship_api.models.domain import Principal
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.schemas.worship import (
    MemberCreateRequest,
    MemberListResponse,
    MemberMutationResponse,
    MemberResponse,
    MemberUpdateRequest,
    MessageResponse,
)
from worship_api.services.enrichment import public_member
from worship_api.services.member_service import MemberService

router = APIRouter(prefix="/api/v1", tags=["Members"])


@router.get("/members", response_model=MemberListResponse)
def list_members(
    _: Principal = Depends(get_current_principal),
    service: MemberService = Depends(get_member_service),
):
    """List every member of the group."""
    return {"members": [public_member(m) for m in service.list_members()]}


@router.get("/members/{member_id}", response_model=MemberResponse)
def get_member(
    member_id: int,
    _: Principal = Depends(get_current_principal),
    service: MemberService = Depends(get_member_service),
):
    try:
        return public_member(service.get_member(member_id))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/members", status_code=201, response_model=MemberMutationResponse)
def create_member(
    payload: MemberCreateRequest,
    _: Principal = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
):
    """Register a new member (administrators only)."""
    try:
        member = service.create_member(
            name=payload.name,
            voice_type=payload.voice_type,
            email=payload.email,
            password=payload.password,
            access_level=payload.access_level,
        )
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Member created successfully", "member": public_member(member)}


@router.put("/members/{member_id}", response_model=MemberMutationResponse)
def update_member(
    member_id: int,
    payload: MemberUpdateRequest,
    _: Principal = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
):
    """Partially update a member; omitted fields keep their values."""
    try:
        member = service.update_member(
            member_id, payload.model_dump(exclude_unset=True, exclude_none=True)
        )
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WriteRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Member updated successfully", "member": public_member(member)}


@router.delete("/members/{member_id}", response_model=MessageResponse)
def delete_member(
    member_id: int,
    _: Principal = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
):
    try:
        service.delete_member(member_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Member deleted successfully"}
