# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Authentication — login endpoint."""
from fastapi import APIRouter, Depends, HTTPException

from worship_api.core.dependencies import get_auth_service
from worship_api.models.errors import InvalidCredentials
from worship_api.schemas.worship import LoginRequest, LoginResponse
from worship_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1", tags=["Auth"])


@router.post("/auth/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a bearer token valid for 24 hours."""
    try:
        return service.login(payload.email, payload.password)
    except InvalidCredentials as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
