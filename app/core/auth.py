# app/core/auth.py
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.user import User
from app.core.security import verify_password, SECRET_KEY, ALGORITHM

# OAuth2 bearer scheme for Swagger "Authorize" button and DI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/login")

# Lockout policy
MAX_FAILED_ATTEMPTS = 3
LOCKOUT_MINUTES = 15


def get_db():
    """Yield a DB session and make sure it's closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_locked(user: User, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    return bool(getattr(user, "locked_until", None) and user.locked_until > now)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return (
        db.query(User)
        .filter(func.lower(User.email) == (email or "").strip().lower())
        .first()
    )


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """
    Attempt authentication:
      - if user doesn't exist → return None (do not reveal existence)
      - if user is deactivated → 403
      - if account is locked → 429
      - if password is correct → reset counters, stamp last_login_at, return user
      - if password is incorrect → increment counter, lock if needed, return None
    """
    user = find_user_by_email(db, email)
    if not user:
        return None

    if getattr(user, "is_active", True) is False:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User is disabled"
        )

    if is_locked(user):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=(
                "Your account is temporarily locked due to too many failed sign-in "
                f"attempts. Please try again in {LOCKOUT_MINUTES} minutes."
            ),
        )

    if verify_password(password, user.hashed_password):
        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login_at = datetime.utcnow()
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    user.failed_login_attempts = int(user.failed_login_attempts or 0) + 1
    if user.failed_login_attempts >= MAX_FAILED_ATTEMPTS:
        user.locked_until = datetime.utcnow() + timedelta(minutes=LOCKOUT_MINUTES)
        user.failed_login_attempts = 0  # reset after lock

    db.add(user)
    db.commit()
    return None


def get_current_user(
    request: Request,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Decode JWT and load the user from DB or return 401.
    Additionally:
      - reject deactivated users (403)
      - reject currently locked users (403)
      - store user context on request.state (for request logging)
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: Optional[str] = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = find_user_by_email(db, email)
    if user is None:
        raise credentials_exception

    if getattr(user, "is_active", True) is False:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User is disabled"
        )

    if is_locked(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account locked until {user.locked_until.isoformat()}",
        )

    request.state.user_id = user.id
    request.state.role = user.role

    return user
