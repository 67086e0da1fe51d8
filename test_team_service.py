# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""Tests for TeamService wired to an in-memory store."""

import pytest

from presenter_rotation.core.errors import (
    EmptyListError,
    MinimumMembersError,
    NotFoundError,
    ValidationError,
)
from presenter_rotation.repositories.memory_repository import InMemoryTeamStore
from presenter_rotation.services import rotation
from presenter_rotation.services.team_service import TeamService


@pytest.fixture
def store():
    return InMemoryTeamStore()


@pytest.fixture
def service(store):
    return TeamService(store=store, upcoming_weeks=3, max_schedule_weeks=10)


def _ids(team):
    return {m["name"]: m["id"] for m in team["members"]}


class TestCreate:
    def test_creates_team_and_members(self, service, store):
        team = service.create_team(1, ["Alice", "Bob"])
        assert store.count_teams() == 1
        assert [(m["name"], m["position"]) for m in team["members"]] == [
            ("Alice", 0), ("Bob", 1),
        ]

    def test_requires_two_members(self, service, store):
        with pytest.raises(ValidationError):
            service.create_team(1, ["Alice"])
        assert store.count_teams() == 0

    def test_rejects_bad_day(self, service):
        with pytest.raises(ValidationError):
            service.create_team(7, ["Alice", "Bob"])

    def test_rejects_blank_name_before_writing(self, service, store):
        with pytest.raises(ValidationError):
            service.create_team(1, ["Alice", " "])
        assert store.count_teams() == 0


class TestMutations:
    def test_add_members_appends(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        added = service.add_members(team["id"], ["Carol", "Dan"])
        assert [(m["name"], m["position"]) for m in added] == [("Carol", 2), ("Dan", 3)]

    def test_add_members_requires_names(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        with pytest.raises(ValidationError):
            service.add_members(team["id"], [])

    def test_remove_member(self, service):
        team = service.create_team(1, ["Alice", "Bob", "Carol"])
        result = service.remove_member(_ids(team)["Alice"])
        assert result["success"] is True
        assert [(m["name"], m["position"]) for m in service.list_members(team["id"])] == [
            ("Bob", 0), ("Carol", 1),
        ]

    def test_remove_member_minimum(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        with pytest.raises(MinimumMembersError):
            service.remove_member(_ids(team)["Bob"])
        assert len(service.list_members(team["id"])) == 2

    def test_swap_then_swap_back(self, service):
        team = service.create_team(1, ["Alice", "Bob", "Carol"])
        ids = _ids(team)
        service.swap_members(team["id"], ids["Alice"], ids["Carol"])
        assert [m["name"] for m in service.list_members(team["id"])] == ["Carol", "Bob", "Alice"]
        service.swap_members(team["id"], ids["Alice"], ids["Carol"])
        assert service.list_members(team["id"]) == team["members"]

    def test_swap_member_of_other_team(self, service):
        first = service.create_team(1, ["Alice", "Bob"])
        second = service.create_team(1, ["Carol", "Dan"])
        with pytest.raises(NotFoundError):
            service.swap_members(first["id"], _ids(first)["Alice"], _ids(second)["Carol"])

    def test_move_member(self, service):
        team = service.create_team(1, ["Alice", "Bob", "Carol"])
        service.move_member(_ids(team)["Carol"], 0)
        assert [m["name"] for m in service.list_members(team["id"])] == ["Carol", "Alice", "Bob"]

    def test_bulk_reposition_across_teams(self, service):
        first = service.create_team(1, ["Alice", "Bob"])
        second = service.create_team(2, ["Carol", "Dan"])
        a, b = _ids(first), _ids(second)
        result = service.bulk_reposition([
            {"id": a["Alice"], "position": 1}, {"id": a["Bob"], "position": 0},
            {"id": b["Carol"], "position": 1}, {"id": b["Dan"], "position": 0},
        ])
        assert result == {"success": True, "updated": 4}
        assert [m["name"] for m in service.list_members(first["id"])] == ["Bob", "Alice"]
        assert [m["name"] for m in service.list_members(second["id"])] == ["Dan", "Carol"]

    def test_bulk_reposition_unknown_member_writes_nothing(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        with pytest.raises(NotFoundError):
            service.bulk_reposition([
                {"id": _ids(team)["Alice"], "position": 1},
                {"id": "ghost", "position": 0},
            ])
        assert [m["name"] for m in service.list_members(team["id"])] == ["Alice", "Bob"]

    def test_update_day_keeps_order(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        updated = service.update_presentation_day(team["id"], 3)
        assert updated["presentation_day_name"] == "Wednesday"
        assert updated["members"] == team["members"]

    def test_delete_team(self, service, store):
        team = service.create_team(1, ["Alice", "Bob"])
        service.delete_team(team["id"])
        assert store.count_members() == 0
        with pytest.raises(NotFoundError):
            service.get_team(team["id"])


class TestQueries:
    def test_presenter_for_week(self, service):
        team = service.create_team(4, ["Alice", "Bob"])
        result = service.get_presenter(team["id"], week=0)
        assert result["presenter"]["name"] == "Alice"
        assert result["date"] == "1970-01-01"
        assert result["day_name"] == "Thursday"

    def test_presenter_defaults_to_current_week(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        assert service.get_presenter(team["id"])["week"] == rotation.get_current_week_number()

    def test_presenter_empty_team(self, service, store):
        team = store.create_team(1)
        with pytest.raises(EmptyListError):
            service.get_presenter(team["id"], week=0)

    def test_schedule_uses_configured_default(self, service):
        team = service.create_team(1, ["Alice", "Bob"])
        schedule = service.get_schedule(team["id"])
        assert len(schedule["upcoming"]) == 3

    @pytest.mark.parametrize("weeks", [0, 11])
    def test_schedule_weeks_bounds(self, service, weeks):
        team = service.create_team(1, ["Alice", "Bob"])
        with pytest.raises(ValidationError):
            service.get_schedule(team["id"], weeks=weeks)

    def test_list_teams_summary(self, service):
        service.create_team(0, ["Alice", "Bob", "Carol"])
        [summary] = service.list_teams()
        assert summary["members_count"] == 3
        assert summary["presentation_day_name"] == "Sunday"
        assert summary["current_presenter"] in {"Alice", "Bob", "Carol"}

    def test_stats(self, service):
        service.create_team(1, ["Alice", "Bob"])
        stats = service.get_stats()
        assert stats["total_teams"] == 1
        assert stats["total_members"] == 2
