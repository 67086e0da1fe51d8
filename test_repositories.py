# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""Contract tests run against both team store backends."""

import threading

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from presenter_rotation.core.database import build_engine
from presenter_rotation.core.errors import NotFoundError
from presenter_rotation.repositories.memory_repository import InMemoryTeamStore
from presenter_rotation.repositories.sql_repository import SqlTeamStore


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        yield InMemoryTeamStore()
        return
    engine = build_engine("sqlite://", poolclass=StaticPool)
    sql_store = SqlTeamStore(engine)
    sql_store.init_schema()
    yield sql_store
    engine.dispose()


@pytest.fixture
def team(store):
    return store.create_team(1, [
        {"name": "Alice", "position": 0},
        {"name": "Bob", "position": 1},
        {"name": "Carol", "position": 2},
    ])


def _layout(store, team_id):
    return [(m["name"], m["position"]) for m in store.list_members(team_id)]


def _ids(store, team_id):
    return {m["name"]: m["id"] for m in store.list_members(team_id)}


class TestTeams:
    def test_create_and_get(self, store, team):
        fetched = store.get_team(team["id"])
        assert fetched["id"] == team["id"]
        assert fetched["presentation_day"] == 1
        assert fetched["created_at"]

    def test_create_with_members(self, store, team):
        assert _layout(store, team["id"]) == [("Alice", 0), ("Bob", 1), ("Carol", 2)]
        assert store.count_members() == 3

    def test_get_unknown(self, store):
        assert store.get_team("nope") is None

    def test_update_day(self, store, team):
        updated = store.update_team_day(team["id"], 4)
        assert updated["presentation_day"] == 4
        assert store.get_team(team["id"])["presentation_day"] == 4
        assert _layout(store, team["id"]) == [("Alice", 0), ("Bob", 1), ("Carol", 2)]

    def test_update_day_unknown(self, store):
        assert store.update_team_day("nope", 2) is None

    def test_list_and_count(self, store, team):
        store.create_team(0)
        assert store.count_teams() == 2
        assert {t["id"] for t in store.list_teams()} >= {team["id"]}

    def test_delete_cascades(self, store, team):
        other = store.create_team(2, [{"name": "Zed", "position": 0}])
        assert store.delete_team(team["id"]) is True
        assert store.get_team(team["id"]) is None
        assert store.list_members(team["id"]) == []
        assert store.count_members() == 1
        assert _layout(store, other["id"]) == [("Zed", 0)]

    def test_delete_unknown(self, store):
        assert store.delete_team("nope") is False


class TestMembers:
    def test_create_member(self, store, team):
        member = store.create_member(team["id"], "Dan", 3)
        assert member["team_id"] == team["id"]
        assert store.get_member(member["id"])["name"] == "Dan"

    def test_create_members_bulk(self, store, team):
        created = store.create_members_bulk(
            team["id"], [{"name": "Dan", "position": 3}, {"name": "Eve", "position": 4}]
        )
        assert [m["position"] for m in created] == [3, 4]
        assert len(store.list_members(team["id"])) == 5

    def test_create_members_unknown_team(self, store):
        with pytest.raises(NotFoundError):
            store.create_members_bulk("nope", [{"name": "X", "position": 0}])

    def test_list_members_ordered_by_position(self, store):
        created = store.create_team(1, [
            {"name": "Second", "position": 1},
            {"name": "First", "position": 0},
        ])
        assert _layout(store, created["id"]) == [("First", 0), ("Second", 1)]

    def test_update_position(self, store, team):
        ids = _ids(store, team["id"])
        assert store.update_member_position(ids["Alice"], 5) is True
        assert store.get_member(ids["Alice"])["position"] == 5
        assert store.update_member_position("nope", 1) is False

    def test_delete_member(self, store, team):
        ids = _ids(store, team["id"])
        assert store.delete_member(ids["Bob"]) is True
        assert store.get_member(ids["Bob"]) is None
        assert store.delete_member(ids["Bob"]) is False


class TestAtomicPositions:
    def test_bulk_update(self, store, team):
        ids = _ids(store, team["id"])
        store.bulk_update_positions([
            {"id": ids["Alice"], "position": 2},
            {"id": ids["Carol"], "position": 0},
        ])
        assert _layout(store, team["id"]) == [("Carol", 0), ("Bob", 1), ("Alice", 2)]

    def test_bulk_update_rolls_back_on_unknown_id(self, store, team):
        ids = _ids(store, team["id"])
        with pytest.raises(NotFoundError):
            store.bulk_update_positions([
                {"id": ids["Alice"], "position": 2},
                {"id": "ghost", "position": 0},
            ])
        assert _layout(store, team["id"]) == [("Alice", 0), ("Bob", 1), ("Carol", 2)]

    def test_remove_member_compacts(self, store, team):
        ids = _ids(store, team["id"])
        store.remove_member(ids["Alice"], [
            {"id": ids["Bob"], "position": 0},
            {"id": ids["Carol"], "position": 1},
        ])
        assert _layout(store, team["id"]) == [("Bob", 0), ("Carol", 1)]

    def test_remove_member_rolls_back(self, store, team):
        ids = _ids(store, team["id"])
        with pytest.raises(NotFoundError):
            store.remove_member(ids["Alice"], [{"id": "ghost", "position": 0}])
        assert _layout(store, team["id"]) == [("Alice", 0), ("Bob", 1), ("Carol", 2)]

    def test_remove_unknown_member(self, store, team):
        with pytest.raises(NotFoundError):
            store.remove_member("ghost", [])


class TestHealth:
    def test_ping(self, store):
        assert store.ping() is True


class TestSqlSpecific:
    @pytest.fixture
    def sql_store(self):
        engine = build_engine("sqlite://", poolclass=StaticPool)
        sql_store = SqlTeamStore(engine)
        sql_store.init_schema()
        yield sql_store
        engine.dispose()

    def test_day_check_constraint(self, sql_store):
        with pytest.raises(IntegrityError):
            sql_store.create_team(9)

    def test_init_schema_is_idempotent(self, sql_store):
        sql_store.init_schema()
        assert sql_store.count_teams() == 0

    def test_failed_team_create_leaves_nothing(self, sql_store):
        with pytest.raises(IntegrityError):
            sql_store.create_team(1, [{"name": None, "position": 0}])
        assert sql_store.count_teams() == 0
        assert sql_store.count_members() == 0


class TestMemorySpecific:
    @pytest.mark.parametrize("read", [
        lambda s, t: s.list_members(t["id"]),
        lambda s, t: s.list_teams(),
        lambda s, t: s.get_team(t["id"]),
        lambda s, t: s.count_members(),
    ])
    def test_reads_wait_for_writer(self, read):
        store = InMemoryTeamStore()
        team = store.create_team(1, [{"name": "Alice", "position": 0}])
        results = []
        reader = threading.Thread(target=lambda: results.append(read(store, team)))

        with store._lock:
            reader.start()
            reader.join(timeout=0.2)
            assert reader.is_alive()
            assert results == []

        reader.join(timeout=5)
        assert not reader.is_alive()
        assert len(results) == 1
