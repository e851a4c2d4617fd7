# app/api/v1/me.py
from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.core.rbac import dashboard_for, is_admin, is_ops, role_of
from app.models.user import User
from app.schemas.user import MeOut

router = APIRouter()


@router.get("/me", response_model=MeOut)
def get_me(current_user: User = Depends(get_current_user)):
    """
    Current principal and its role claim.
    Users without a role can still call this (dashboard is then null).
    """
    return MeOut(
        id=current_user.id,
        email=current_user.email,
        role=role_of(current_user),
        full_name=current_user.full_name,
        is_admin=is_admin(current_user),
        is_ops=is_ops(current_user),
        dashboard=dashboard_for(current_user),
    )
