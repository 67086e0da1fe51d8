# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team and rotation management — business logic behind the API.
Loads records from the injected store, runs the pure rotation / ordering
functions, and persists the resulting canonical order.
"""

from typing import Any, Optional

from presenter_rotation.core.config import settings
from presenter_rotation.core.errors import (
    MinimumMembersError,
    NotFoundError,
    ValidationError,
)
from presenter_rotation.core.logging import get_logger
from presenter_rotation.metrics.prometheus import (
    ACTIVE_TEAMS,
    MEMBERS_ADDED,
    MEMBERS_REMOVED,
    ORDER_CHANGES,
    PRESENTER_LOOKUPS,
    REJECTED_MUTATIONS,
    TEAMS_CREATED,
)
from presenter_rotation.models.domain import Member, Team
from presenter_rotation.repositories.base import TeamStore
from presenter_rotation.services import ordering, rotation

logger = get_logger(__name__)


def _dump(member: Member) -> dict[str, Any]:
    return member.model_dump()


class TeamService:
    """Business logic for teams, their presentation order and schedule."""

    def __init__(
        self,
        store: TeamStore,
        upcoming_weeks: int = settings.UPCOMING_WEEKS,
        max_schedule_weeks: int = settings.MAX_SCHEDULE_WEEKS,
    ) -> None:
        self._store = store
        self._upcoming_weeks = upcoming_weeks
        self._max_schedule_weeks = max_schedule_weeks

    # ── Helpers ──

    def _require_team(self, team_id: str) -> dict[str, Any]:
        team = self._store.get_team(team_id)
        if team is None:
            raise NotFoundError(f"Team '{team_id}' not found")
        return team

    def _require_member(self, member_id: str) -> dict[str, Any]:
        member = self._store.get_member(member_id)
        if member is None:
            raise NotFoundError(f"Member '{member_id}' not found")
        return member

    def _load_members(self, team_id: str) -> list[Member]:
        return ordering.sort_by_position(
            Member.from_record(r) for r in self._store.list_members(team_id)
        )

    def _team_view(self, team: dict[str, Any], members: list[Member]) -> dict[str, Any]:
        view = Team(
            id=team["id"],
            presentation_day=team["presentation_day"],
            created_at=team.get("created_at"),
            members=tuple(members),
        ).model_dump()
        view["members"] = list(view["members"])
        view["presentation_day_name"] = rotation.day_name(view["presentation_day"])
        return view

    # ── Team commands ──

    def create_team(self, presentation_day: int, names: list[str]) -> dict[str, Any]:
        """Create a team and its initial members in one store call."""
        rotation.day_name(presentation_day)
        if len(names) < ordering.MIN_MEMBERS:
            raise ValidationError(
                f"A team needs at least {ordering.MIN_MEMBERS} members, got {len(names)}"
            )

        members: list[Member] = []
        for name in names:
            members = ordering.append(members, name)
        team = self._store.create_team(
            presentation_day,
            [{"name": m.name, "position": m.position} for m in members],
        )

        TEAMS_CREATED.inc()
        ACTIVE_TEAMS.set(self._store.count_teams())
        MEMBERS_ADDED.inc(len(members))
        logger.info(
            "Team created: team=%s, day=%d, members=%d",
            team["id"], presentation_day, len(members),
            extra={"team_id": team["id"]},
        )
        return self._team_view(team, self._load_members(team["id"]))

    def update_presentation_day(self, team_id: str, presentation_day: int) -> dict[str, Any]:
        rotation.day_name(presentation_day)
        team = self._store.update_team_day(team_id, presentation_day)
        if team is None:
            raise NotFoundError(f"Team '{team_id}' not found")
        logger.info(
            "Presentation day changed: team=%s, day=%d", team_id, presentation_day,
            extra={"team_id": team_id},
        )
        return self._team_view(team, self._load_members(team_id))

    def delete_team(self, team_id: str) -> dict[str, Any]:
        if not self._store.delete_team(team_id):
            raise NotFoundError(f"Team '{team_id}' not found")
        ACTIVE_TEAMS.set(self._store.count_teams())
        logger.info("Team deleted: team=%s", team_id, extra={"team_id": team_id})
        return {"status": "deleted", "id": team_id}

    # ── Member commands ──

    def add_members(self, team_id: str, names: list[str]) -> list[dict[str, Any]]:
        """Append each name to the end of the rotation, in the order given."""
        self._require_team(team_id)
        members = self._load_members(team_id)
        existing = {m.id for m in members}
        for name in names:
            members = ordering.append(members, name, team_id=team_id)
        added = [m for m in members if m.id not in existing]
        if not added:
            raise ValidationError("At least one member name is required")

        created = self._store.create_members_bulk(
            team_id, [{"name": m.name, "position": m.position} for m in added]
        )
        MEMBERS_ADDED.inc(len(created))
        ORDER_CHANGES.labels(operation="append").inc()
        logger.info(
            "Members added: team=%s, count=%d", team_id, len(created),
            extra={"team_id": team_id},
        )
        return [_dump(Member.from_record(r)) for r in created]

    def remove_member(self, member_id: str) -> dict[str, Any]:
        """Delete a member and compact the positions behind it."""
        record = self._require_member(member_id)
        team_id = record["team_id"]
        before = self._load_members(team_id)
        try:
            after = ordering.remove(before, member_id)
        except MinimumMembersError:
            REJECTED_MUTATIONS.labels(reason="minimum_members").inc()
            logger.warning(
                "Removal rejected: team=%s, member=%s", team_id, member_id,
                extra={"team_id": team_id, "member_id": member_id},
            )
            raise

        self._store.remove_member(member_id, ordering.position_changes(before, after))
        MEMBERS_REMOVED.inc()
        ORDER_CHANGES.labels(operation="remove").inc()
        logger.info(
            "Member removed: team=%s, member=%s", team_id, member_id,
            extra={"team_id": team_id, "member_id": member_id},
        )
        return {"success": True, "team_id": team_id, "members": [_dump(m) for m in after]}

    def swap_members(self, team_id: str, member_a: str, member_b: str) -> list[dict[str, Any]]:
        self._require_team(team_id)
        before = self._load_members(team_id)
        after = ordering.swap(before, member_a, member_b)
        changes = ordering.position_changes(before, after)
        if changes:
            self._store.bulk_update_positions(changes)
        ORDER_CHANGES.labels(operation="swap").inc()
        logger.info(
            "Members swapped: team=%s, a=%s, b=%s", team_id, member_a, member_b,
            extra={"team_id": team_id},
        )
        return [_dump(m) for m in after]

    def move_member(self, member_id: str, position: int) -> list[dict[str, Any]]:
        record = self._require_member(member_id)
        before = self._load_members(record["team_id"])
        after = ordering.move(before, member_id, position)
        changes = ordering.position_changes(before, after)
        if changes:
            self._store.bulk_update_positions(changes)
        ORDER_CHANGES.labels(operation="move").inc()
        logger.info(
            "Member moved: team=%s, member=%s, position=%d",
            record["team_id"], member_id, position,
            extra={"team_id": record["team_id"], "member_id": member_id},
        )
        return [_dump(m) for m in after]

    def bulk_reposition(self, assignments: list[dict[str, Any]]) -> dict[str, Any]:
        """
        Apply explicit id+position pairs, possibly spanning teams, as ONE
        atomic store write. Contiguity is the caller's responsibility.
        """
        by_team: dict[str, list[tuple[str, int]]] = {}
        for assignment in assignments:
            record = self._require_member(assignment["id"])
            by_team.setdefault(record["team_id"], []).append(
                (assignment["id"], assignment["position"])
            )

        changes: list[dict[str, Any]] = []
        for team_id, pairs in by_team.items():
            before = self._load_members(team_id)
            after = ordering.bulk_reposition(before, pairs)
            changes.extend(ordering.position_changes(before, after))

        if changes:
            self._store.bulk_update_positions(changes)
        ORDER_CHANGES.labels(operation="bulk_reposition").inc()
        logger.info(
            "Positions updated: teams=%d, changed=%d", len(by_team), len(changes)
        )
        return {"success": True, "updated": len(changes)}

    # ── Queries ──

    def get_team(self, team_id: str) -> dict[str, Any]:
        team = self._require_team(team_id)
        return self._team_view(team, self._load_members(team_id))

    def list_teams(self) -> list[dict[str, Any]]:
        week = rotation.get_current_week_number()
        summaries = []
        for team in self._store.list_teams():
            members = self._load_members(team["id"])
            summaries.append({
                "id": team["id"],
                "presentation_day": team["presentation_day"],
                "presentation_day_name": rotation.day_name(team["presentation_day"]),
                "members_count": len(members),
                "current_presenter": (
                    rotation.get_presenter_for_week(members, week).name if members else None
                ),
            })
        return summaries

    def list_members(self, team_id: str) -> list[dict[str, Any]]:
        self._require_team(team_id)
        return [_dump(m) for m in self._load_members(team_id)]

    def get_presenter(self, team_id: str, week: Optional[int] = None) -> dict[str, Any]:
        """Presenter and date for one week (current week by default)."""
        team = self._require_team(team_id)
        members = self._load_members(team_id)
        if week is None:
            week = rotation.get_current_week_number()
        entry = rotation.build_schedule(members, team["presentation_day"], week, 1)[0]
        PRESENTER_LOOKUPS.labels(kind="week").inc()
        logger.debug(
            "Presenter lookup: team=%s, week=%d", team_id, week,
            extra={"team_id": team_id, "week": week},
        )
        return {"team_id": team_id, **entry.model_dump(mode="json")}

    def get_schedule(
        self,
        team_id: str,
        weeks: Optional[int] = None,
        start_week: Optional[int] = None,
    ) -> dict[str, Any]:
        """The current (or ``start_week``) presenter plus the next ``weeks``."""
        weeks = self._upcoming_weeks if weeks is None else weeks
        if not 1 <= weeks <= self._max_schedule_weeks:
            raise ValidationError(
                f"weeks must be between 1 and {self._max_schedule_weeks}, got {weeks}"
            )
        team = self._require_team(team_id)
        members = self._load_members(team_id)
        current_week = rotation.get_current_week_number()
        first = current_week if start_week is None else start_week

        entries = rotation.build_schedule(
            members, team["presentation_day"], first, weeks + 1
        )
        PRESENTER_LOOKUPS.labels(kind="schedule").inc()
        return {
            "team_id": team_id,
            "presentation_day": team["presentation_day"],
            "presentation_day_name": rotation.day_name(team["presentation_day"]),
            "current_week": current_week,
            "current": entries[0].model_dump(mode="json"),
            "upcoming": [e.model_dump(mode="json") for e in entries[1:]],
        }

    def get_stats(self) -> dict[str, Any]:
        teams = self._store.count_teams()
        members = self._store.count_members()
        return {
            "total_teams": teams,
            "total_members": members,
            "current_week": rotation.get_current_week_number(),
        }
