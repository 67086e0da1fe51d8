# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member position and removal endpoints.
Thin HTTP layer — delegates ALL logic to TeamService.
"""

from fastapi import APIRouter, Depends, HTTPException

from presenter_rotation.core.dependencies import get_team_service
from presenter_rotation.core.errors import RotationError
from presenter_rotation.schemas.team import (
    BulkPositionUpdateRequest,
    MemberMoveRequest,
    MemberResponse,
)
from presenter_rotation.services.team_service import TeamService

router = APIRouter(prefix="/api/team-members", tags=["Members"])


# Registered before /{member_id} so "bulk-update" is not taken for an id.
@router.patch("/bulk-update")
def bulk_update_positions(
    payload: BulkPositionUpdateRequest,
    service: TeamService = Depends(get_team_service),
):
    """Apply a batch of id + position pairs atomically (all or nothing)."""
    try:
        return service.bulk_reposition([m.model_dump() for m in payload.members])
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.patch("/{member_id}", response_model=list[MemberResponse])
def move_member(
    member_id: str,
    payload: MemberMoveRequest,
    service: TeamService = Depends(get_team_service),
):
    """Move one presenter; the others shift to keep the order gap-free."""
    try:
        return service.move_member(member_id, payload.position)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{member_id}")
def remove_member(
    member_id: str,
    service: TeamService = Depends(get_team_service),
):
    """Remove a presenter; refused when the team would drop below two."""
    try:
        return service.remove_member(member_id)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
