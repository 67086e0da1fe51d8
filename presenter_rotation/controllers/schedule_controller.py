# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Presenter lookup, schedule and stats endpoints.
Thin HTTP layer — delegates ALL logic to TeamService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from presenter_rotation.core.dependencies import get_team_service
from presenter_rotation.core.errors import RotationError
from presenter_rotation.schemas.team import PresenterResponse, ScheduleResponse
from presenter_rotation.services.team_service import TeamService

router = APIRouter(prefix="/api", tags=["Schedule"])


@router.get("/teams/{team_id}/presenter", response_model=PresenterResponse)
def get_presenter(
    team_id: str,
    week: Optional[int] = Query(default=None, description="Week number; current week if omitted"),
    service: TeamService = Depends(get_team_service),
):
    """Who presents in the given week."""
    try:
        return service.get_presenter(team_id, week)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/teams/{team_id}/schedule", response_model=ScheduleResponse)
def get_schedule(
    team_id: str,
    weeks: Optional[int] = Query(default=None, ge=1, description="Upcoming weeks to list"),
    start_week: Optional[int] = Query(default=None, description="First week; current week if omitted"),
    service: TeamService = Depends(get_team_service),
):
    """Current presenter plus the upcoming rotation."""
    try:
        return service.get_schedule(team_id, weeks=weeks, start_week=start_week)
    except RotationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/stats")
def get_stats(
    service: TeamService = Depends(get_team_service),
):
    """Aggregated counts."""
    return service.get_stats()
