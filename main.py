# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Presenter Rotation Service
==========================
Schedules recurring weekly presentation duty among an ordered list of team
members: week N is presented by member N mod len(members). Exposes team /
member CRUD, order mutations (append, remove, swap, move, bulk reposition),
presenter lookup and the upcoming schedule.

Port: 3001
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from presenter_rotation.controllers import (
    member_controller,
    schedule_controller,
    system_controller,
    team_controller,
)
from presenter_rotation.core.config import settings
from presenter_rotation.core.dependencies import get_team_store
from presenter_rotation.core.logging import get_logger
from presenter_rotation.metrics.prometheus import ACTIVE_TEAMS
from presenter_rotation.middleware import MetricsMiddleware, RequestIDMiddleware
from presenter_rotation.repositories.sql_repository import SqlTeamStore

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    store = get_team_store()
    try:
        if isinstance(store, SqlTeamStore):
            store.init_schema()
        ACTIVE_TEAMS.set(store.count_teams())
        logger.info("Store ready: backend=%s", settings.STORE_BACKEND)
    except SQLAlchemyError:
        logger.warning("Could not initialise schema — DB may not be ready yet")
    yield
    if isinstance(store, SqlTeamStore):
        store.engine.dispose()
        logger.info("Shutting down — connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Presenter Rotation Service",
    description="Weekly presenter rotation over an ordered team roster.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc)},
    )


app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(member_controller.router)
app.include_router(schedule_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
