# app/schemas/route.py
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, conint, constr

from app.schemas.staff import ComplianceStatusOut

ApprovalStatus = Literal["Approved", "Pending"]
ComplianceAlert = Literal["Not Required", "Compliant", "Not Compliant"]


class RouteCreate(BaseModel):
    route_name: constr(strip_whitespace=True, min_length=1, max_length=255) = Field(
        ..., description="Route name."
    )
    planned_journey_minutes: conint(ge=0) = Field(
        ..., description="Planned journey time in minutes."
    )
    staff_id: Optional[constr(strip_whitespace=True, min_length=1, max_length=32)] = Field(
        None, description="Assigned staff record ID."
    )


class RouteOut(BaseModel):
    id: str
    route_name: str
    planned_journey_minutes: int
    staff_id: Optional[str] = None
    staff_name: str = Field(..., description="Assigned staff name or 'Unassigned'.")
    staff_status: Optional[ComplianceStatusOut] = Field(
        None, description="Assigned staff's status recomputed at read time."
    )
    requires_compliance_check: bool
    compliance_alert: ComplianceAlert
    approved: bool
    approval_status: ApprovalStatus
    approved_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    can_approve: bool = Field(
        ..., description="Whether the calling user may approve this route now."
    )
    created_by: Optional[int] = None
    created_at: datetime
