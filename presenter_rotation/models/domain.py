# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
Frozen so the rotation/ordering functions can never mutate their inputs.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A single presenter in a team's rotation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Opaque member identifier")
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    position: int = Field(..., ge=0, description="Zero-based rotation rank")
    team_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Member":
        return cls(
            id=record["id"],
            name=record["name"],
            position=record["position"],
            team_id=record.get("team_id"),
            created_at=record.get("created_at"),
        )


class Team(BaseModel):
    """A team with its presentation weekday (0 = Sunday) and ordered members."""
    model_config = ConfigDict(frozen=True)

    id: str
    presentation_day: int = Field(..., ge=0, le=6)
    members: tuple[Member, ...] = ()
    created_at: Optional[str] = None


class WeeklyPresenter(BaseModel):
    """Who presents in a given week, and on which date."""
    model_config = ConfigDict(frozen=True)

    week: int
    date: date
    day_name: str
    presenter: Member
