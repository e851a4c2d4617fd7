# app/worker/scheduler.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.exc import SQLAlchemyError

from app.core import config
from app.db.session import SessionLocal
from app.services.summary import build_compliance_summary

log = logging.getLogger("app.digest")


def run_compliance_digest(as_of: Optional[date] = None) -> Dict[str, Any]:
    """
    Read-only daily digest: recompute every staff member's license status and
    log who needs attention plus long routes that cannot be approved yet.
    Returns the summary ({} if the store is unreachable).
    """
    db = SessionLocal()
    try:
        summary = build_compliance_summary(db, as_of)
    except SQLAlchemyError:
        log.exception("compliance digest: record store unavailable")
        return {}
    finally:
        db.close()

    log.info(
        "compliance digest as_of=%s staff=%s by_status=%s routes=%s pending=%s blocked=%s",
        summary["as_of"],
        summary["staff_total"],
        summary["staff_by_status"],
        summary["routes_total"],
        summary["routes_pending"],
        summary["routes_blocked"],
    )
    for s in summary["attention"]:
        log.warning(
            "staff %s (%s): license %s expires %s",
            s["staff_name"],
            s["id"],
            s["compliance_status"],
            s["license_expiry_date"].isoformat(),
        )
    for r in summary["blocked_routes"]:
        log.warning(
            "route %s (%s, %s min) blocked: staff=%s status=%s",
            r["route_name"],
            r["id"],
            r["planned_journey_minutes"],
            r["staff_name"],
            r["staff_status"] or "unassigned",
        )
    return summary


def make_scheduler() -> BackgroundScheduler:
    """Background scheduler with the daily digest at DIGEST_HOUR:DIGEST_MINUTE."""
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        run_compliance_digest,
        CronTrigger(hour=config.DIGEST_HOUR, minute=config.DIGEST_MINUTE),
        id="compliance_digest",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    return scheduler
