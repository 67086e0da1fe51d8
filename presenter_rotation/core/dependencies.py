# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the store and the service.
"""

from presenter_rotation.core.config import settings
from presenter_rotation.core.database import build_engine
from presenter_rotation.repositories.base import TeamStore
from presenter_rotation.repositories.memory_repository import InMemoryTeamStore
from presenter_rotation.repositories.sql_repository import SqlTeamStore
from presenter_rotation.services.team_service import TeamService


def build_store(backend: str = settings.STORE_BACKEND) -> TeamStore:
    if backend == "memory":
        return InMemoryTeamStore()
    if backend == "sql":
        return SqlTeamStore(build_engine())
    raise ValueError(f"Unknown STORE_BACKEND '{backend}' (expected 'sql' or 'memory')")


# ── Singleton instances ──
_store = build_store()
_team_service = TeamService(store=_store)


# ── FastAPI dependency functions ──
def get_team_store() -> TeamStore:
    return _store


def get_team_service() -> TeamService:
    return _team_service
