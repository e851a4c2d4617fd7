# app/models/user.py
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    CheckConstraint,
    text,
)
from sqlalchemy.orm import validates

from app.db.base import Base

# Role claims assigned outside the API (seed script / DB). NULL = no access.
USER_ROLES = ("admin", "ops")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    # RBAC claim: admin | ops | NULL
    role = Column(String(20), nullable=True, index=True)

    # Profile / status
    full_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("1"))

    # Login security
    failed_login_attempts = Column(Integer, nullable=False, default=0, server_default=text("0"))
    locked_until = Column(DateTime, nullable=True, index=True)
    last_login_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            f"role IS NULL OR role IN {USER_ROLES}",
            name="ck_users_role_allowed",
        ),
    )

    @validates("email")
    def _normalize_email(self, key, value):
        # unique index is case-sensitive, so store one canonical form
        return value.strip().lower() if isinstance(value, str) else value

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
