# app/crud/route.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.route import Route
from app.schemas.route import RouteCreate


def get_route(db: Session, route_id: str) -> Optional[Route]:
    return db.get(Route, route_id)


def list_routes(db: Session) -> List[Route]:
    return db.query(Route).order_by(Route.route_name.asc(), Route.id.asc()).all()


def create_route(db: Session, payload: RouteCreate, user_id: Optional[int] = None) -> Route:
    obj = Route(
        route_name=payload.route_name,
        planned_journey_minutes=payload.planned_journey_minutes,
        staff_id=payload.staff_id,
        approved=False,
        created_by=user_id,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def mark_route_approved(
    db: Session,
    route_id: str,
    user_id: Optional[int] = None,
    approved_at: Optional[datetime] = None,
) -> bool:
    """
    Flip approved false -> true and stamp approved_at/approved_by.
    Conditional on approved = false; returns False if another request got there first.
    """
    updated = (
        db.query(Route)
        .filter(Route.id == route_id, Route.approved == False)  # noqa: E712
        .update(
            {
                Route.approved: True,
                Route.approved_at: approved_at or datetime.utcnow(),
                Route.approved_by: user_id,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return updated == 1


def delete_route(db: Session, obj: Route) -> None:
    db.delete(obj)
    db.commit()
