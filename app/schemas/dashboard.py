# app/schemas/dashboard.py
from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class StaffAttention(BaseModel):
    id: str
    staff_name: str
    license_expiry_date: date
    compliance_status: str


class BlockedRoute(BaseModel):
    id: str
    route_name: str
    planned_journey_minutes: int
    staff_name: str
    staff_status: Optional[str] = None


class DashboardSummary(BaseModel):
    as_of: date
    staff_total: int
    staff_by_status: Dict[str, int] = Field(
        ..., description="Counts for Compliant / Expiring Soon / Non-Compliant."
    )
    routes_total: int
    routes_approved: int
    routes_pending: int
    routes_blocked: int = Field(
        ..., description="Pending long routes whose staff is not currently Compliant."
    )
    attention: List[StaffAttention] = Field(
        default_factory=list,
        description="Staff whose license is Expiring Soon or Non-Compliant.",
    )
    blocked_routes: List[BlockedRoute] = Field(default_factory=list)
