# app/schemas/staff.py
from datetime import date, datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, constr, ConfigDict, field_validator

StaffRole = Literal["Admin", "Operations"]
ComplianceStatusOut = Literal["Compliant", "Expiring Soon", "Non-Compliant"]


class StaffBase(BaseModel):
    staff_name: constr(strip_whitespace=True, min_length=1, max_length=255) = Field(
        ..., description="Full name of the staff member."
    )
    role: StaffRole = Field(..., description="Job title (Admin/Operations).")
    dbs_expiry_date: date = Field(..., description="DBS check expiry (YYYY-MM-DD).")
    license_expiry_date: date = Field(
        ..., description="Driving license expiry (YYYY-MM-DD)."
    )


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    # All optional for partial update
    staff_name: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = (
        Field(None, description="Full name of the staff member.")
    )
    role: Optional[StaffRole] = Field(None, description="Job title (Admin/Operations).")
    dbs_expiry_date: Optional[date] = Field(None, description="DBS check expiry.")
    license_expiry_date: Optional[date] = Field(
        None, description="Driving license expiry."
    )

    @field_validator(
        "staff_name", "role", "dbs_expiry_date", "license_expiry_date", mode="before"
    )
    @classmethod
    def _reject_null(cls, v):
        # omit a field to leave it unchanged; null is not a value for any of them
        if v is None:
            raise ValueError("Field may be omitted but not null.")
        return v


class StaffOut(StaffBase):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Record ID.")
    compliance_status: ComplianceStatusOut = Field(
        ..., description="Status recomputed at read time from license_expiry_date."
    )
    compliance_color: str = Field(..., description="Badge colour for the status.")
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class StatusPreviewOut(BaseModel):
    license_expiry_date: str
    as_of: date
    compliance_status: ComplianceStatusOut
    compliance_color: str
