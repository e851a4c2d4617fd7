"""
Shared fixtures: an isolated in-memory SQLite store per test, a TestClient
wired to it, and principals for each role claim.
"""
import os

# Must be set before app modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_CREATE_ALL"] = "0"
os.environ["ENABLE_SCHEDULER"] = "0"

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import get_db
from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.main import app
from app.models.route import Route
from app.models.staff_compliance import StaffCompliance
from app.models.user import User

PASSWORD = "S3cret-pass!"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(email, role=None, is_active=True):
        u = User(
            email=email,
            role=role,
            full_name=email.split("@")[0],
            is_active=is_active,
            hashed_password=get_password_hash(PASSWORD),
        )
        db.add(u)
        db.commit()
        db.refresh(u)
        return u
    return _make


def _headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", role="admin")


@pytest.fixture
def ops_user(make_user):
    return make_user("ops@example.com", role="ops")


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def ops_headers(ops_user):
    return _headers(ops_user)


@pytest.fixture
def norole_headers(make_user):
    return _headers(make_user("nobody@example.com", role=None))


@pytest.fixture
def make_staff(db):
    """Insert a staff record whose license expires `days` from today."""
    def _make(name, days, role="Operations"):
        s = StaffCompliance(
            staff_name=name,
            role=role,
            dbs_expiry_date=date.today() + timedelta(days=365),
            license_expiry_date=date.today() + timedelta(days=days),
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        return s
    return _make


@pytest.fixture
def make_route(db):
    def _make(name, minutes, staff_id=None, approved=False):
        r = Route(
            route_name=name,
            planned_journey_minutes=minutes,
            staff_id=staff_id,
            approved=approved,
        )
        db.add(r)
        db.commit()
        db.refresh(r)
        return r
    return _make
