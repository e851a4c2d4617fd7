# app/services/summary.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.crud.route import list_routes
from app.crud.staff import list_staff
from app.services.compliance import (
    COMPLIANCE_STATUSES,
    COMPLIANT,
    compute_status,
)
from app.services.routes import evaluate_route


def build_compliance_summary(db: Session, as_of: Optional[date] = None) -> Dict[str, Any]:
    """
    Aggregate view used by the dashboard and the daily digest.

    Statuses are recomputed for `as_of` (default today); the stored label on
    staff rows is ignored.
    """
    as_of = as_of or date.today()

    staff_rows = list_staff(db)
    by_status = {s: 0 for s in COMPLIANCE_STATUSES}
    attention: List[Dict[str, Any]] = []
    staff_map = {}

    for s in staff_rows:
        staff_map[s.id] = s
        status = compute_status(s.license_expiry_date, as_of)
        by_status[status] += 1
        if status != COMPLIANT:
            attention.append(
                {
                    "id": s.id,
                    "staff_name": s.staff_name,
                    "license_expiry_date": s.license_expiry_date,
                    "compliance_status": status,
                }
            )

    routes = list_routes(db)
    approved = 0
    blocked: List[Dict[str, Any]] = []
    for r in routes:
        if r.approved:
            approved += 1
            continue
        ev = evaluate_route(r, staff_map, as_of)
        if ev.requires_compliance_check and ev.staff_status != COMPLIANT:
            blocked.append(
                {
                    "id": r.id,
                    "route_name": r.route_name,
                    "planned_journey_minutes": r.planned_journey_minutes,
                    "staff_name": ev.staff_name,
                    "staff_status": ev.staff_status,
                }
            )

    return {
        "as_of": as_of,
        "staff_total": len(staff_rows),
        "staff_by_status": by_status,
        "routes_total": len(routes),
        "routes_approved": approved,
        "routes_pending": len(routes) - approved,
        "routes_blocked": len(blocked),
        "attention": attention,
        "blocked_routes": blocked,
    }
