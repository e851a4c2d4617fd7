# app/services/routes.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from app.models.route import Route
from app.models.staff_compliance import StaffCompliance
from app.services.approval import (
    ApprovalCandidate,
    compliance_alert,
    denial_reason,
    requires_compliance_check,
)
from app.services.compliance import ComplianceStatus, compute_status

UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class RouteEvaluation:
    route: Route
    staff: Optional[StaffCompliance]
    staff_status: Optional[ComplianceStatus]
    requires_compliance_check: bool
    compliance_alert: str

    @property
    def staff_name(self) -> str:
        return self.staff.staff_name if self.staff is not None else UNASSIGNED

    @property
    def candidate(self) -> ApprovalCandidate:
        return ApprovalCandidate(
            planned_journey_minutes=self.route.planned_journey_minutes,
            staff_status=self.staff_status,
        )

    def denial_reason(self, caller_is_admin: bool) -> Optional[str]:
        """Approval gate for this route; already-approved routes are handled by the caller."""
        return denial_reason(self.candidate, caller_is_admin)


def evaluate_route(
    route: Route,
    staff_map: Mapping[str, StaffCompliance],
    as_of: Optional[date] = None,
) -> RouteEvaluation:
    """Resolve the (weak) staff reference and recompute the driver's status."""
    staff = staff_map.get(route.staff_id) if route.staff_id else None
    status = compute_status(staff.license_expiry_date, as_of) if staff is not None else None
    return RouteEvaluation(
        route=route,
        staff=staff,
        staff_status=status,
        requires_compliance_check=requires_compliance_check(route.planned_journey_minutes),
        compliance_alert=compliance_alert(route.planned_journey_minutes, status),
    )
