# app/models/route.py
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint, Index,
    text,
)

from app.db.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Route(Base):
    __tablename__ = "routes"

    id = Column(String(32), primary_key=True, default=_new_id)

    route_name = Column(String(255), nullable=False, index=True)
    planned_journey_minutes = Column(Integer, nullable=False)

    # Weak reference to staff_compliance.id (no FK: the staff row may be
    # deleted and the route then shows as "Unassigned")
    staff_id = Column(String(32), nullable=True, index=True)

    # One-way approval
    approved = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    approved_at = Column(DateTime, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            "planned_journey_minutes >= 0",
            name="ck_routes_minutes_non_negative",
        ),
        CheckConstraint(
            "length(trim(route_name)) > 0",
            name="ck_routes_name_not_blank",
        ),
        Index("ix_routes_approved_minutes", "approved", "planned_journey_minutes"),
    )

    def __repr__(self) -> str:
        return (
            f"<Route id={self.id} name={self.route_name!r} "
            f"minutes={self.planned_journey_minutes} approved={self.approved}>"
        )
