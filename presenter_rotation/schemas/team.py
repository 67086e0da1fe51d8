# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


# ── Member Schemas ──

class MemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Member name")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class MemberResponse(BaseModel):
    id: str
    name: str
    position: int
    team_id: Optional[str] = None
    created_at: Optional[str] = None


class MembersCreateRequest(BaseModel):
    """Body of POST /api/teams/{team_id}/members — one member or a list."""
    members: Union[list[MemberCreate], MemberCreate]

    @field_validator("members")
    @classmethod
    def non_empty(cls, v):
        if isinstance(v, list) and not v:
            raise ValueError("members must not be empty")
        return v

    def names(self) -> list[str]:
        items = self.members if isinstance(self.members, list) else [self.members]
        return [m.name for m in items]


class PositionUpdate(BaseModel):
    id: str = Field(..., min_length=1, description="Member id")
    position: int = Field(..., ge=0, description="New zero-based position")


class BulkPositionUpdateRequest(BaseModel):
    members: list[PositionUpdate] = Field(..., description="id + position pairs")


class MemberMoveRequest(BaseModel):
    position: int = Field(..., ge=0, description="Target zero-based position")


class SwapRequest(BaseModel):
    member_a: str = Field(..., min_length=1)
    member_b: str = Field(..., min_length=1)


# ── Team Schemas ──

class TeamCreateRequest(BaseModel):
    presentation_day: int = Field(
        ..., ge=0, le=6, description="Weekday of the presentation, 0 = Sunday"
    )
    members: list[MemberCreate] = Field(
        ..., min_length=2, description="Initial presenters, in rotation order"
    )


class TeamUpdateRequest(BaseModel):
    presentation_day: int = Field(..., ge=0, le=6)


class TeamResponse(BaseModel):
    id: str
    presentation_day: int
    presentation_day_name: str
    created_at: Optional[str] = None
    members: list[MemberResponse]


# ── Rotation Schemas ──

class WeeklyPresenterResponse(BaseModel):
    week: int
    date: str
    day_name: str
    presenter: MemberResponse


class PresenterResponse(WeeklyPresenterResponse):
    team_id: str


class ScheduleResponse(BaseModel):
    team_id: str
    presentation_day: int
    presentation_day_name: str
    current_week: int
    current: WeeklyPresenterResponse
    upcoming: list[WeeklyPresenterResponse]
