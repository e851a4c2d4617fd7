#!/usr/bin/env python3
"""
Minimal seed:
- Ensures one admin and one ops user exist (role claims are assigned here,
  never by the API).
- Safe to run multiple times (idempotent).
"""
import os
import sys

# enable 'app.' imports
sys.path.append(os.getcwd())

from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.models.user import User
from app.core.auth import find_user_by_email
from app.core.security import get_password_hash


def ensure_user(db: Session, email: str, password: str, role: str, full_name: str) -> User:
    user = find_user_by_email(db, email)
    if user:
        changed = False
        if user.role != role:
            user.role = role
            changed = True
        if not user.is_active:
            user.is_active = True
            changed = True
        if changed:
            db.add(user)
            db.commit()
            db.refresh(user)
        return user

    u = User(
        email=email,
        full_name=full_name,
        is_active=True,
        role=role,
        hashed_password=get_password_hash(password),
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def main():
    admin_email = os.environ.get("SEED_ADMIN_EMAIL", "admin@example.com")
    admin_password = os.environ.get("SEED_ADMIN_PASSWORD", "ChangeMe123!")
    ops_email = os.environ.get("SEED_OPS_EMAIL", "ops@example.com")
    ops_password = os.environ.get("SEED_OPS_PASSWORD", "ChangeMe123!")

    db = SessionLocal()
    try:
        a = ensure_user(db, admin_email, admin_password, "admin", "Admin")
        print(f"OK: admin ensured -> {a.email} (id={a.id})")
        o = ensure_user(db, ops_email, ops_password, "ops", "Operations")
        print(f"OK: ops ensured -> {o.email} (id={o.id})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
