# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from app.core import config
from app.core.errors import register_exception_handlers
from app.db.base import Base
from app.db.session import engine
from app.middleware.request_logging import RequestLoggingMiddleware
from app.worker.scheduler import make_scheduler

# ---------------------------
# MODELS (populate Base.metadata)
# ---------------------------
from app.models import user, staff_compliance, route  # noqa: F401

# ---------------------------
# ROUTERS
# ---------------------------
from app.api import health
from app.api.v1 import auth, me, staff, routes, dashboard

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("app")

# ---------------------------
# CREATE TABLES (dev-only; guard with env, use Alembic otherwise)
# ---------------------------
if config.ENABLE_CREATE_ALL:
    Base.metadata.create_all(bind=engine)

# ---------------------------
# APP
# ---------------------------
app = FastAPI(
    title="Route Compliance",
    version="1.0.0",
    description="Staff license compliance and delivery route approval",
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

# ---------------------------
# ROUTER MOUNT
# ---------------------------
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(auth.router, prefix="/api/v1", tags=["auth"])
app.include_router(me.router, prefix="/api/v1", tags=["me"])
app.include_router(staff.router, prefix="/api/v1", tags=["staff"])
app.include_router(routes.router, prefix="/api/v1", tags=["routes"])
app.include_router(dashboard.router, prefix="/api/v1", tags=["dashboard"])


# ---------------------------
# Scheduler (daily compliance digest)
# ---------------------------
@app.on_event("startup")
def _start_scheduler():
    app.state.scheduler = None
    if not config.ENABLE_SCHEDULER:
        return
    app.state.scheduler = make_scheduler()
    app.state.scheduler.start()
    log.info(
        "scheduler started (digest at %02d:%02d)", config.DIGEST_HOUR, config.DIGEST_MINUTE
    )


@app.on_event("shutdown")
def _stop_scheduler():
    sched = getattr(app.state, "scheduler", None)
    if sched:
        sched.shutdown(wait=False)
