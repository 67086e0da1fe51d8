# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: SQL team store (SQLAlchemy Core, raw SQL via text()).
Multi-statement writes run inside one engine.begin() transaction.
NO business rules here — pure CRUD.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from presenter_rotation.core.errors import NotFoundError
from presenter_rotation.core.logging import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS teams (
        id VARCHAR(36) PRIMARY KEY,
        presentation_day INTEGER NOT NULL
            CHECK (presentation_day >= 0 AND presentation_day <= 6),
        created_at VARCHAR(40)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS team_members (
        id VARCHAR(36) PRIMARY KEY,
        team_id VARCHAR(36) NOT NULL REFERENCES teams(id) ON DELETE CASCADE,
        name VARCHAR(255) NOT NULL,
        position INTEGER NOT NULL,
        created_at VARCHAR(40)
    )
    """,
    "CREATE INDEX IF NOT EXISTS team_members_team_id_idx ON team_members(team_id)",
    "CREATE INDEX IF NOT EXISTS team_members_position_idx ON team_members(team_id, position)",
)

TEAM_COLS = "id, presentation_day, created_at"
MEMBER_COLS = "id, team_id, name, position, created_at"


def _iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


def _team_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row["id"]),
        "presentation_day": row["presentation_day"],
        "created_at": _iso(row["created_at"]),
    }


def _member_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row["id"]),
        "team_id": str(row["team_id"]),
        "name": row["name"],
        "position": row["position"],
        "created_at": _iso(row["created_at"]),
    }


class SqlTeamStore:
    def __init__(self, engine: Engine):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def init_schema(self) -> None:
        with self._engine.begin() as conn:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(text(statement))
        logger.info("Schema ready on %s", self._engine.dialect.name)

    # ── Teams ──────────────────────────────────────────────────────────

    def create_team(self, presentation_day: int,
                    members: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        team = {
            "id": str(uuid.uuid4()),
            "presentation_day": presentation_day,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO teams (id, presentation_day, created_at)
                    VALUES (:id, :presentation_day, :created_at)
                """),
                team,
            )
            self._insert_members(conn, team["id"], members or [])
        return team

    def get_team(self, team_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {TEAM_COLS} FROM teams WHERE id = :id"), {"id": team_id}
            ).mappings().first()
        return _team_to_dict(row) if row else None

    def list_teams(self) -> List[Dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {TEAM_COLS} FROM teams ORDER BY created_at")
            ).mappings().all()
        return [_team_to_dict(r) for r in rows]

    def update_team_day(self, team_id: str, presentation_day: int) -> Optional[Dict[str, Any]]:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("UPDATE teams SET presentation_day = :day WHERE id = :id"),
                {"day": presentation_day, "id": team_id},
            )
            if result.rowcount == 0:
                return None
            row = conn.execute(
                text(f"SELECT {TEAM_COLS} FROM teams WHERE id = :id"), {"id": team_id}
            ).mappings().first()
        return _team_to_dict(row)

    def delete_team(self, team_id: str) -> bool:
        with self._engine.begin() as conn:
            conn.execute(
                text("DELETE FROM team_members WHERE team_id = :id"), {"id": team_id}
            )
            result = conn.execute(text("DELETE FROM teams WHERE id = :id"), {"id": team_id})
        return result.rowcount > 0

    def count_teams(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM teams")).scalar() or 0

    # ── Members ────────────────────────────────────────────────────────

    def _insert_members(self, conn: Connection, team_id: str,
                        members: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        created: List[Dict[str, Any]] = []
        now_iso = datetime.now(timezone.utc).isoformat()
        for member in members:
            record = {
                "id": str(uuid.uuid4()),
                "team_id": team_id,
                "name": member["name"],
                "position": member["position"],
                "created_at": now_iso,
            }
            conn.execute(
                text("""
                    INSERT INTO team_members (id, team_id, name, position, created_at)
                    VALUES (:id, :team_id, :name, :position, :created_at)
                """),
                record,
            )
            created.append(record)
        return created

    def _require_team(self, conn: Connection, team_id: str) -> None:
        exists = conn.execute(
            text("SELECT 1 FROM teams WHERE id = :id"), {"id": team_id}
        ).fetchone()
        if not exists:
            raise NotFoundError(f"Team '{team_id}' not found")

    def create_member(self, team_id: str, name: str, position: int) -> Dict[str, Any]:
        return self.create_members_bulk(team_id, [{"name": name, "position": position}])[0]

    def create_members_bulk(self, team_id: str,
                            members: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        with self._engine.begin() as conn:
            self._require_team(conn, team_id)
            return self._insert_members(conn, team_id, members)

    def get_member(self, member_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {MEMBER_COLS} FROM team_members WHERE id = :id"),
                {"id": member_id},
            ).mappings().first()
        return _member_to_dict(row) if row else None

    def list_members(self, team_id: str) -> List[Dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {MEMBER_COLS} FROM team_members WHERE team_id = :tid ORDER BY position"),
                {"tid": team_id},
            ).mappings().all()
        return [_member_to_dict(r) for r in rows]

    def count_members(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM team_members")).scalar() or 0

    def update_member_position(self, member_id: str, position: int) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("UPDATE team_members SET position = :position WHERE id = :id"),
                {"position": position, "id": member_id},
            )
        return result.rowcount > 0

    def delete_member(self, member_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("DELETE FROM team_members WHERE id = :id"), {"id": member_id}
            )
        return result.rowcount > 0

    def _apply_positions(self, conn: Connection, positions: List[Dict[str, Any]]) -> None:
        for p in positions:
            result = conn.execute(
                text("UPDATE team_members SET position = :position WHERE id = :id"),
                {"position": p["position"], "id": p["id"]},
            )
            if result.rowcount == 0:
                # raising inside begin() rolls back every earlier UPDATE
                raise NotFoundError(f"Member '{p['id']}' not found")

    def bulk_update_positions(self, positions: List[Dict[str, Any]]) -> None:
        with self._engine.begin() as conn:
            self._apply_positions(conn, positions)

    def remove_member(self, member_id: str, positions: List[Dict[str, Any]]) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("DELETE FROM team_members WHERE id = :id"), {"id": member_id}
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Member '{member_id}' not found")
            self._apply_positions(conn, positions)

    # ── Health ─────────────────────────────────────────────────────────

    def ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
