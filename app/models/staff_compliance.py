# app/models/staff_compliance.py
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Date, DateTime, ForeignKey, CheckConstraint
)

from app.db.base import Base

# Job title of the staff member (not the login role claim)
STAFF_ROLES = ("Admin", "Operations")


def _new_id() -> str:
    return uuid.uuid4().hex


class StaffCompliance(Base):
    __tablename__ = "staff_compliance"

    id = Column(String(32), primary_key=True, default=_new_id)

    staff_name = Column(String(255), nullable=False, index=True)
    role = Column(String(20), nullable=False)

    dbs_expiry_date = Column(Date, nullable=False)
    license_expiry_date = Column(Date, nullable=False, index=True)

    # Status as computed at the last write. Display only; decisions always
    # recompute from license_expiry_date.
    compliance_status_label = Column(String(20), nullable=True)

    # Audit
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            f"role IN {STAFF_ROLES}",
            name="ck_staff_compliance_role_allowed",
        ),
        CheckConstraint(
            "length(trim(staff_name)) > 0",
            name="ck_staff_compliance_name_not_blank",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<StaffCompliance id={self.id} name={self.staff_name!r} "
            f"license_expiry={self.license_expiry_date}>"
        )
