# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team CRUD and team-scoped member endpoints.
Thin HTTP layer — delegates ALL logic to TeamService.
"""

from fastapi import APIRouter, Depends, HTTPException

from presenter_rotation.core.dependencies import get_team_service
from presenter_rotation.core.errors import RotationError
from presenter_rotation.schemas.team import (
    MemberResponse,
    MembersCreateRequest,
    SwapRequest,
    TeamCreateRequest,
    TeamResponse,
    TeamUpdateRequest,
)
from presenter_rotation.services.team_service import TeamService

router = APIRouter(prefix="/api", tags=["Teams"])


@router.post("/teams", status_code=201, response_model=TeamResponse)
def create_team(
    payload: TeamCreateRequest,
    service: TeamService = Depends(get_team_service),
):
    """Create a team together with its initial presenters."""
    try:
        return service.create_team(
            presentation_day=payload.presentation_day,
            names=[m.name for m in payload.members],
        )
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/teams")
def list_teams(
    service: TeamService = Depends(get_team_service),
):
    """List all teams with their current presenter."""
    return service.list_teams()


@router.get("/teams/{team_id}", response_model=TeamResponse)
def get_team(
    team_id: str,
    service: TeamService = Depends(get_team_service),
):
    try:
        return service.get_team(team_id)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.patch("/teams/{team_id}", response_model=TeamResponse)
def update_team(
    team_id: str,
    payload: TeamUpdateRequest,
    service: TeamService = Depends(get_team_service),
):
    """Change the presentation weekday; member order is untouched."""
    try:
        return service.update_presentation_day(team_id, payload.presentation_day)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/teams/{team_id}")
def delete_team(
    team_id: str,
    service: TeamService = Depends(get_team_service),
):
    """Delete a team and, with it, all of its members."""
    try:
        return service.delete_team(team_id)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/teams/{team_id}/members", response_model=list[MemberResponse])
def list_members(
    team_id: str,
    service: TeamService = Depends(get_team_service),
):
    """Members in presentation order."""
    try:
        return service.list_members(team_id)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/teams/{team_id}/members", status_code=201, response_model=list[MemberResponse])
def add_members(
    team_id: str,
    payload: MembersCreateRequest,
    service: TeamService = Depends(get_team_service),
):
    """Append one or more presenters to the end of the rotation."""
    try:
        return service.add_members(team_id, payload.names())
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/teams/{team_id}/swap", response_model=list[MemberResponse])
def swap_members(
    team_id: str,
    payload: SwapRequest,
    service: TeamService = Depends(get_team_service),
):
    """Exchange the positions of two presenters."""
    try:
        return service.swap_members(team_id, payload.member_a, payload.member_b)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
