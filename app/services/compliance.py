# app/services/compliance.py
"""
License freshness classification.

`compute_status` maps a license expiry date to one of three statuses relative
to a reference day (`as_of`, default today). It is pure and total: bad input
fails closed to NON_COMPLIANT and is logged, never raised.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Literal, Optional

from app.core import config

log = logging.getLogger("app.compliance")

ComplianceStatus = Literal["Compliant", "Expiring Soon", "Non-Compliant"]

COMPLIANT: ComplianceStatus = "Compliant"
EXPIRING_SOON: ComplianceStatus = "Expiring Soon"
NON_COMPLIANT: ComplianceStatus = "Non-Compliant"

COMPLIANCE_STATUSES = (COMPLIANT, EXPIRING_SOON, NON_COMPLIANT)

# Badge colours used by the dashboards
STATUS_COLORS = {
    COMPLIANT: "#d4edda",
    EXPIRING_SOON: "#fff3cd",
    NON_COMPLIANT: "#f8d7da",
}
DEFAULT_COLOR = "#fff"


# =========================
# Normalization helpers
# =========================
def to_calendar_day(value: Any) -> Optional[date]:
    """
    Reduce a date-like value to its calendar day.

    Accepts `date`, `datetime` (time of day dropped) and ISO 8601 strings as
    parsed by Python 3.11+ `fromisoformat` ("2024-06-01", "20240601",
    "2024-06-01T08:30:00", "2024-06-01T00:00:00Z", offsets). The calendar day
    is the one written in the string; offsets are not converted.
    Returns None for anything else.
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s).date()
        except ValueError:
            return None
    return None


# =========================
# Status
# =========================
def compute_status(
    license_expiry_date: Any,
    as_of: Any = None,
    *,
    expiring_soon_days: Optional[int] = None,
) -> ComplianceStatus:
    """
    Classify a license expiry date relative to `as_of`:
      - expiry before as_of                      -> 'Non-Compliant'
      - 0..expiring_soon_days days until expiry  -> 'Expiring Soon'
      - further out                              -> 'Compliant'
    Unparseable dates -> 'Non-Compliant'.
    """
    window = config.EXPIRING_SOON_DAYS if expiring_soon_days is None else expiring_soon_days
    # a license expiring today is never Compliant
    window = max(0, window)

    expiry = to_calendar_day(license_expiry_date)
    if expiry is None:
        log.warning(
            "compute_status: unparseable license_expiry_date=%r -> %s",
            license_expiry_date,
            NON_COMPLIANT,
        )
        return NON_COMPLIANT

    ref = date.today() if as_of is None else to_calendar_day(as_of)
    if ref is None:
        log.warning("compute_status: unparseable as_of=%r -> %s", as_of, NON_COMPLIANT)
        return NON_COMPLIANT

    if expiry < ref:
        return NON_COMPLIANT

    days_until_expiry = (expiry - ref).days
    if days_until_expiry <= window:
        return EXPIRING_SOON

    return COMPLIANT


def compliance_color(status: Optional[str]) -> str:
    return STATUS_COLORS.get(status or "", DEFAULT_COLOR)
