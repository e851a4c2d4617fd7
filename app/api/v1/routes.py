# app/api/v1/routes.py
import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.core.auth import get_db
from app.core.rbac import is_admin, require_admin, require_reader
from app.models.route import Route
from app.models.user import User
from app.schemas.route import RouteCreate, RouteOut
from app.crud.route import (
    get_route as crud_get_route,
    list_routes as crud_list_routes,
    create_route as crud_create_route,
    mark_route_approved as crud_mark_route_approved,
    delete_route as crud_delete_route,
)
from app.crud.staff import staff_by_id
from app.services.approval import (
    REASON_NOT_ADMIN,
    REASON_STAFF_UNASSIGNED,
    REASON_STAFF_NOT_COMPLIANT,
)
from app.services.routes import RouteEvaluation, evaluate_route

log = logging.getLogger("app.routes")

router = APIRouter()

DENIAL_MESSAGES = {
    REASON_NOT_ADMIN: "Only admins can approve routes",
    REASON_STAFF_UNASSIGNED: "Long routes need an assigned staff member",
    REASON_STAFF_NOT_COMPLIANT: "Assigned staff member's license is not Compliant",
}


def _to_out(ev: RouteEvaluation, current_user: User) -> RouteOut:
    r = ev.route
    return RouteOut(
        id=r.id,
        route_name=r.route_name,
        planned_journey_minutes=r.planned_journey_minutes,
        staff_id=r.staff_id,
        staff_name=ev.staff_name,
        staff_status=ev.staff_status,
        requires_compliance_check=ev.requires_compliance_check,
        compliance_alert=ev.compliance_alert,
        approved=bool(r.approved),
        approval_status="Approved" if r.approved else "Pending",
        approved_at=r.approved_at,
        approved_by=r.approved_by,
        can_approve=(not r.approved) and ev.denial_reason(is_admin(current_user)) is None,
        created_by=r.created_by,
        created_at=r.created_at,
    )


def _evaluate_one(db: Session, obj: Route, as_of: Optional[date] = None) -> RouteEvaluation:
    return evaluate_route(obj, staff_by_id(db, [obj.staff_id]), as_of)


def _get_or_404(db: Session, route_id: str) -> Route:
    obj = crud_get_route(db, route_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Route not found")
    return obj


@router.get("/routes", response_model=List[RouteOut])
def list_routes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    """
    All routes ordered by name, with the assigned staff member's status
    recomputed for today and the caller's approval eligibility.
    """
    rows = crud_list_routes(db)
    staff_map = staff_by_id(db, [r.staff_id for r in rows])
    today = date.today()
    return [_to_out(evaluate_route(r, staff_map, today), current_user) for r in rows]


@router.get("/routes/{route_id}", response_model=RouteOut)
def get_route(
    route_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    obj = _get_or_404(db, route_id)
    return _to_out(_evaluate_one(db, obj), current_user)


@router.post("/routes", response_model=RouteOut, status_code=status.HTTP_201_CREATED)
def create_route(
    payload: RouteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """New routes always start unapproved. staff_id is not checked for existence."""
    obj = crud_create_route(db, payload, user_id=current_user.id)
    log.info(
        "route created id=%s minutes=%s staff_id=%s by user_id=%s",
        obj.id,
        obj.planned_journey_minutes,
        obj.staff_id,
        current_user.id,
    )
    return _to_out(_evaluate_one(db, obj), current_user)


@router.post("/routes/{route_id}/approve", response_model=RouteOut)
def approve_route(
    route_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    """
    Approve a route once.
      - 404 if the route does not exist
      - 409 if it is already approved
      - 403 (with reason) if the approval policy refuses
    """
    obj = _get_or_404(db, route_id)
    if obj.approved:
        raise HTTPException(status_code=409, detail="Route already approved")

    ev = _evaluate_one(db, obj)
    reason = ev.denial_reason(is_admin(current_user))
    if reason is not None:
        log.warning(
            "route approval denied id=%s reason=%s minutes=%s staff_status=%s user_id=%s",
            obj.id,
            reason,
            obj.planned_journey_minutes,
            ev.staff_status,
            current_user.id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": DENIAL_MESSAGES[reason],
                "reason": reason,
                "planned_journey_minutes": obj.planned_journey_minutes,
                "staff_status": ev.staff_status,
            },
        )

    if not crud_mark_route_approved(
        db, obj.id, user_id=current_user.id, approved_at=datetime.utcnow()
    ):
        # Lost a race with another approval
        raise HTTPException(status_code=409, detail="Route already approved")

    log.info("route approved id=%s by user_id=%s", obj.id, current_user.id)
    db.refresh(obj)
    return _to_out(_evaluate_one(db, obj), current_user)


@router.delete("/routes/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(
    route_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    obj = _get_or_404(db, route_id)
    crud_delete_route(db, obj)
    log.info("route deleted id=%s by user_id=%s", route_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
