"""
Admin Routes — Registration listing for the organisers' dashboard.
No access control here; deploy behind an authenticating proxy.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_admin_service
from app.schemas.schemas import RegistrationListResponse, RegistrationOut, ErrorResponse
from app.services.admin_service import AdminQueryService

router = APIRouter(prefix="/api", tags=["Admin"])


@router.get(
    "/registrations",
    response_model=RegistrationListResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_registrations(
    program_type: Optional[str] = Query(None, alias="programType"),
    service: AdminQueryService = Depends(get_admin_service),
):
    """List registrations newest first, optionally filtered by programType."""
    registrations = service.list(program_type=program_type)
    return RegistrationListResponse(
        success=True,
        registrations=[RegistrationOut.model_validate(r) for r in registrations],
    )
