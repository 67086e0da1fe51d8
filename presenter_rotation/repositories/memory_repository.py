# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: In-memory team store.
Every public call, reads included, holds one lock, so each call is atomic
on its own. The lock is not reentrant: public methods never call each other.
NO business rules here — pure CRUD.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from presenter_rotation.core.errors import NotFoundError


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryTeamStore:
    """Dict-backed TeamStore, used for tests and STORE_BACKEND=memory."""

    def __init__(self) -> None:
        self._teams: dict[str, dict[str, Any]] = {}
        self._members: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    # ── Teams ──

    def create_team(
        self,
        presentation_day: int,
        members: Optional[list[dict[str, Any]]] = None,
    ) -> dict[str, Any]:
        team = {
            "id": str(uuid.uuid4()),
            "presentation_day": presentation_day,
            "created_at": _now(),
        }
        with self._lock:
            self._teams[team["id"]] = team
            for member in members or []:
                self._insert_member(team["id"], member["name"], member["position"])
        return dict(team)

    def get_team(self, team_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            team = self._teams.get(team_id)
            return dict(team) if team else None

    def list_teams(self) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(t) for t in self._teams.values()]

    def update_team_day(
        self, team_id: str, presentation_day: int
    ) -> Optional[dict[str, Any]]:
        with self._lock:
            team = self._teams.get(team_id)
            if team is None:
                return None
            team["presentation_day"] = presentation_day
            return dict(team)

    def delete_team(self, team_id: str) -> bool:
        with self._lock:
            if self._teams.pop(team_id, None) is None:
                return False
            for member_id in [
                mid for mid, m in self._members.items() if m["team_id"] == team_id
            ]:
                del self._members[member_id]
            return True

    def count_teams(self) -> int:
        with self._lock:
            return len(self._teams)

    # ── Members ──

    def _insert_member(self, team_id: str, name: str, position: int) -> dict[str, Any]:
        member = {
            "id": str(uuid.uuid4()),
            "team_id": team_id,
            "name": name,
            "position": position,
            "created_at": _now(),
        }
        self._members[member["id"]] = member
        return dict(member)

    def create_member(self, team_id: str, name: str, position: int) -> dict[str, Any]:
        with self._lock:
            if team_id not in self._teams:
                raise NotFoundError(f"Team '{team_id}' not found")
            return self._insert_member(team_id, name, position)

    def create_members_bulk(
        self, team_id: str, members: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        with self._lock:
            if team_id not in self._teams:
                raise NotFoundError(f"Team '{team_id}' not found")
            return [
                self._insert_member(team_id, m["name"], m["position"]) for m in members
            ]

    def get_member(self, member_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            member = self._members.get(member_id)
            return dict(member) if member else None

    def list_members(self, team_id: str) -> list[dict[str, Any]]:
        with self._lock:
            rows = [dict(m) for m in self._members.values() if m["team_id"] == team_id]
        return sorted(rows, key=lambda m: m["position"])

    def count_members(self) -> int:
        with self._lock:
            return len(self._members)

    def update_member_position(self, member_id: str, position: int) -> bool:
        with self._lock:
            member = self._members.get(member_id)
            if member is None:
                return False
            member["position"] = position
            return True

    def delete_member(self, member_id: str) -> bool:
        with self._lock:
            return self._members.pop(member_id, None) is not None

    def _apply_positions(self, positions: list[dict[str, Any]]) -> None:
        missing = [p["id"] for p in positions if p["id"] not in self._members]
        if missing:
            raise NotFoundError(f"Member '{missing[0]}' not found")
        for p in positions:
            self._members[p["id"]]["position"] = p["position"]

    def bulk_update_positions(self, positions: list[dict[str, Any]]) -> None:
        with self._lock:
            self._apply_positions(positions)

    def remove_member(self, member_id: str, positions: list[dict[str, Any]]) -> None:
        with self._lock:
            if member_id not in self._members:
                raise NotFoundError(f"Member '{member_id}' not found")
            for p in positions:
                if p["id"] == member_id or p["id"] not in self._members:
                    raise NotFoundError(f"Member '{p['id']}' not found")
            del self._members[member_id]
            self._apply_positions(positions)

    # ── Health / internal ──

    def ping(self) -> bool:
        return True

    def clear(self) -> None:
        with self._lock:
            self._teams.clear()
            self._members.clear()
