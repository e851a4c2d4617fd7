# app/services/approval.py
"""
Route approval eligibility.

Only admins approve. Routes up to `long_route_minutes` (default 45) need no
compliance check; longer routes need an assigned staff member whose license
is currently 'Compliant' ('Expiring Soon' is not enough).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.core import config
from app.services.compliance import COMPLIANT, ComplianceStatus

# Denial reasons (returned in 403 details)
REASON_NOT_ADMIN = "not_admin"
REASON_STAFF_UNASSIGNED = "staff_unassigned"
REASON_STAFF_NOT_COMPLIANT = "staff_not_compliant"

ALERT_NOT_REQUIRED = "Not Required"
ALERT_COMPLIANT = "Compliant"
ALERT_NOT_COMPLIANT = "Not Compliant"


@dataclass(frozen=True)
class ApprovalCandidate:
    planned_journey_minutes: int
    # Freshly computed status of the assigned staff member; None = unassigned
    staff_status: Optional[ComplianceStatus] = None


def _threshold(long_route_minutes: Optional[int]) -> int:
    return config.LONG_ROUTE_MINUTES if long_route_minutes is None else long_route_minutes


def requires_compliance_check(
    planned_journey_minutes: int, *, long_route_minutes: Optional[int] = None
) -> bool:
    return planned_journey_minutes > _threshold(long_route_minutes)


def denial_reason(
    candidate: ApprovalCandidate,
    caller_is_admin: bool,
    *,
    long_route_minutes: Optional[int] = None,
) -> Optional[str]:
    """Why approval is refused, or None when it is allowed. Checks run in order."""
    if not caller_is_admin:
        return REASON_NOT_ADMIN
    if not requires_compliance_check(
        candidate.planned_journey_minutes, long_route_minutes=long_route_minutes
    ):
        return None
    if candidate.staff_status is None:
        return REASON_STAFF_UNASSIGNED
    if candidate.staff_status != COMPLIANT:
        return REASON_STAFF_NOT_COMPLIANT
    return None


def can_approve(
    candidate: ApprovalCandidate,
    caller_is_admin: bool,
    *,
    long_route_minutes: Optional[int] = None,
) -> bool:
    return (
        denial_reason(candidate, caller_is_admin, long_route_minutes=long_route_minutes)
        is None
    )


def compliance_alert(
    planned_journey_minutes: int,
    staff_status: Optional[ComplianceStatus],
    *,
    long_route_minutes: Optional[int] = None,
) -> str:
    """Route card label: 'Not Required' for short routes, else Compliant / Not Compliant."""
    if not requires_compliance_check(
        planned_journey_minutes, long_route_minutes=long_route_minutes
    ):
        return ALERT_NOT_REQUIRED
    return ALERT_COMPLIANT if staff_status == COMPLIANT else ALERT_NOT_COMPLIANT
