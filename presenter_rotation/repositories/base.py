# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository contract shared by every team store backend.
Records are plain dicts; NO business rules here — pure CRUD.
"""

from typing import Any, Optional, Protocol


class TeamStore(Protocol):
    """Capability set the service layer relies on."""

    # ── Teams ──

    def create_team(
        self,
        presentation_day: int,
        members: Optional[list[dict[str, Any]]] = None,
    ) -> dict[str, Any]: ...

    def get_team(self, team_id: str) -> Optional[dict[str, Any]]: ...

    def list_teams(self) -> list[dict[str, Any]]: ...

    def update_team_day(
        self, team_id: str, presentation_day: int
    ) -> Optional[dict[str, Any]]: ...

    def delete_team(self, team_id: str) -> bool: ...

    def count_teams(self) -> int: ...

    # ── Members ──

    def create_member(self, team_id: str, name: str, position: int) -> dict[str, Any]: ...

    def create_members_bulk(
        self, team_id: str, members: list[dict[str, Any]]
    ) -> list[dict[str, Any]]: ...

    def get_member(self, member_id: str) -> Optional[dict[str, Any]]: ...

    def list_members(self, team_id: str) -> list[dict[str, Any]]: ...

    def count_members(self) -> int: ...

    def update_member_position(self, member_id: str, position: int) -> bool: ...

    def delete_member(self, member_id: str) -> bool: ...

    def bulk_update_positions(self, positions: list[dict[str, Any]]) -> None: ...

    def remove_member(
        self, member_id: str, positions: list[dict[str, Any]]
    ) -> None: ...

    # ── Health ──

    def ping(self) -> bool: ...
