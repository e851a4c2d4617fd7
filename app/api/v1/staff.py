# app/api/v1/staff.py
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.core.auth import get_db
from app.core.rbac import require_admin, require_reader
from app.models.staff_compliance import StaffCompliance
from app.models.user import User
from app.schemas.staff import StaffCreate, StaffUpdate, StaffOut, StatusPreviewOut
from app.crud.staff import (
    get_staff as crud_get_staff,
    list_staff as crud_list_staff,
    create_staff as crud_create_staff,
    update_staff as crud_update_staff,
    delete_staff as crud_delete_staff,
)
from app.services.compliance import compute_status, compliance_color

log = logging.getLogger("app.staff")

router = APIRouter()


def _to_out(obj: StaffCompliance, as_of: Optional[date] = None) -> StaffOut:
    # Always recompute; compliance_status_label on the row is not trusted
    status_ = compute_status(obj.license_expiry_date, as_of)
    return StaffOut(
        id=obj.id,
        staff_name=obj.staff_name,
        role=obj.role,
        dbs_expiry_date=obj.dbs_expiry_date,
        license_expiry_date=obj.license_expiry_date,
        compliance_status=status_,
        compliance_color=compliance_color(status_),
        created_by=obj.created_by,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
    )


def _get_or_404(db: Session, staff_id: str) -> StaffCompliance:
    obj = crud_get_staff(db, staff_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return obj


@router.get("/staff", response_model=List[StaffOut])
def list_staff(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    """All staff compliance records, ordered by name."""
    today = date.today()
    return [_to_out(s, today) for s in crud_list_staff(db)]


@router.get("/staff/{staff_id}", response_model=StaffOut)
def get_staff(
    staff_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    return _to_out(_get_or_404(db, staff_id))


@router.post("/staff", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
def create_staff(
    payload: StaffCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    obj = crud_create_staff(db, payload, user_id=current_user.id)
    log.info("staff created id=%s by user_id=%s", obj.id, current_user.id)
    return _to_out(obj)


@router.put("/staff/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: str,
    payload: StaffUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Partial update; omitted fields keep their value."""
    obj = _get_or_404(db, staff_id)
    obj = crud_update_staff(db, obj, payload)
    log.info(
        "staff updated id=%s fields=%s by user_id=%s",
        obj.id,
        sorted(payload.model_dump(exclude_unset=True, exclude_none=True)),
        current_user.id,
    )
    return _to_out(obj)


@router.delete("/staff/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff(
    staff_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    # Routes pointing at this record fall back to "Unassigned"
    obj = _get_or_404(db, staff_id)
    crud_delete_staff(db, obj)
    log.info("staff deleted id=%s by user_id=%s", staff_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/compliance/status", response_model=StatusPreviewOut)
def preview_status(
    license_expiry_date: str = Query(..., description="Date to classify (YYYY-MM-DD)."),
    as_of: Optional[date] = Query(None, description="Reference day; defaults to today."),
    current_user: User = Depends(require_reader),
):
    """
    Classify a raw date without saving anything (form preview).
    Unparseable input is reported as Non-Compliant, not as an error.
    """
    ref = as_of or date.today()
    status_ = compute_status(license_expiry_date, ref)
    return StatusPreviewOut(
        license_expiry_date=license_expiry_date,
        as_of=ref,
        compliance_status=status_,
        compliance_color=compliance_color(status_),
    )
