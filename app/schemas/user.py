# app/schemas/user.py
from pydantic import BaseModel, EmailStr
from typing import Literal, Optional


class MeOut(BaseModel):
    id: int
    email: EmailStr
    role: Optional[Literal["admin", "ops"]] = None
    full_name: Optional[str] = None
    is_admin: bool
    is_ops: bool
    # Landing page for the role; None when no role is assigned
    dashboard: Optional[str] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
