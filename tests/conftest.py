"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite with foreign keys enforced)
- FastAPI test client
- Seeded companies, jobs and users, plus tokens for them
"""

import os

# Cheap hashing and a fixed key for tests; must be set before app imports
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app import models  # noqa: F401  # register tables on Base.metadata
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _configure_sqlite(dbapi_connection, connection_record):
    """
    SQLite only honours ON DELETE CASCADE with the foreign_keys pragma, and
    its built-in lower() folds ASCII only. Swap in Python's str.lower so
    case-insensitive filters behave as they do on PostgreSQL.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_function(
        "lower", 1, lambda value: value.lower() if isinstance(value, str) else value
    )


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test and drop it afterwards.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Three companies, three jobs and three users (one admin).

    u1 has applied to J1. Returns {"job_ids": [J1, J2, J3]}.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    jobs = [
        job_crud.create(db_session, {"title": "J1", "salary": 100000, "equity": "0.01", "companyHandle": "c1"}),
        job_crud.create(db_session, {"title": "J2", "salary": 200000, "equity": "0.02", "companyHandle": "c1"}),
        job_crud.create(db_session, {"title": "J3", "salary": 300000, "equity": "0", "companyHandle": "c2"}),
    ]

    for username, is_admin in (("u1", False), ("u2", False), ("admin", True)):
        user_crud.register(db_session, {
            "username": username,
            "password": f"password-{username}",
            "firstName": f"{username}F",
            "lastName": f"{username}L",
            "email": f"{username}@email.com",
            "isAdmin": is_admin,
        })

    user_crud.apply_to_job(db_session, "u1", jobs[0]["id"])

    return {"job_ids": [job["id"] for job in jobs]}


@pytest.fixture
def u1_headers():
    return {"Authorization": f"Bearer {create_access_token('u1')}"}


@pytest.fixture
def u2_headers():
    return {"Authorization": f"Bearer {create_access_token('u2')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('admin', is_admin=True)}"}
