# app/core/rbac.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status

from app.core.auth import get_current_user
from app.models.user import User, USER_ROLES

ROLE_ADMIN = "admin"
ROLE_OPS = "ops"

# Landing page per role claim
DASHBOARDS = {
    ROLE_ADMIN: "/admin/dashboard",
    ROLE_OPS: "/ops/dashboard",
}


# -----------------------------
# Basic checks
# -----------------------------


def role_of(user: Optional[User]) -> Optional[str]:
    role = (getattr(user, "role", None) or "").strip().lower()
    return role if role in USER_ROLES else None


def is_admin(user: Optional[User]) -> bool:
    return role_of(user) == ROLE_ADMIN


def is_ops(user: Optional[User]) -> bool:
    return role_of(user) == ROLE_OPS


def dashboard_for(user: Optional[User]) -> Optional[str]:
    return DASHBOARDS.get(role_of(user) or "")


def ensure_role_assigned(user: User) -> None:
    """403 unless the user carries a known role claim (admin/ops)."""
    if role_of(user) is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="No role assigned"
        )


def ensure_admin(user: User) -> None:
    """403 unless the user is an admin."""
    if not is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin only"
        )


# -----------------------------
# Dependencies
# -----------------------------


def require_reader(current_user: User = Depends(get_current_user)) -> User:
    """Any signed-in user with a role (admin or ops) may read."""
    ensure_role_assigned(current_user)
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    ensure_admin(current_user)
    return current_user
