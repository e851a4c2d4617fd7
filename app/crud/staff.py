# app/crud/staff.py
from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.staff_compliance import StaffCompliance
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services.compliance import compute_status


def get_staff(db: Session, staff_id: str) -> Optional[StaffCompliance]:
    return db.get(StaffCompliance, staff_id)


def list_staff(db: Session) -> List[StaffCompliance]:
    # Stable ordering: tie-breaker by id
    return (
        db.query(StaffCompliance)
        .order_by(StaffCompliance.staff_name.asc(), StaffCompliance.id.asc())
        .all()
    )


def staff_by_id(db: Session, ids: Iterable[Optional[str]]) -> Dict[str, StaffCompliance]:
    """Bulk lookup for route assignments; missing ids are simply absent."""
    wanted = {i for i in ids if i}
    if not wanted:
        return {}
    rows = db.query(StaffCompliance).filter(StaffCompliance.id.in_(wanted)).all()
    return {r.id: r for r in rows}


def create_staff(
    db: Session, payload: StaffCreate, user_id: Optional[int] = None
) -> StaffCompliance:
    obj = StaffCompliance(
        staff_name=payload.staff_name,
        role=payload.role,
        dbs_expiry_date=payload.dbs_expiry_date,
        license_expiry_date=payload.license_expiry_date,
        compliance_status_label=compute_status(payload.license_expiry_date, date.today()),
        created_by=user_id,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update_staff(db: Session, obj: StaffCompliance, payload: StaffUpdate) -> StaffCompliance:
    data = payload.model_dump(exclude_unset=True)

    for k, v in data.items():
        setattr(obj, k, v)

    # Label is a snapshot of the last write only
    obj.compliance_status_label = compute_status(obj.license_expiry_date, date.today())

    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def delete_staff(db: Session, obj: StaffCompliance) -> None:
    db.delete(obj)
    db.commit()
