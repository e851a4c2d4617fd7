# app/api/v1/dashboard.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import get_db
from app.core.rbac import require_reader
from app.models.user import User
from app.schemas.dashboard import DashboardSummary
from app.services.summary import build_compliance_summary

router = APIRouter()


@router.get("/dashboard/summary", response_model=DashboardSummary)
def dashboard_summary(
    as_of: Optional[date] = Query(None, description="Reference day; defaults to today."),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reader),
):
    """
    Staff counts per compliance status and route approval counts.
    Same data for admin and ops.
    """
    return DashboardSummary(**build_compliance_summary(db, as_of))
