"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users
- Auth headers for a regular user and an admin
"""

import os

# Settings are read at import time; keep hashing cheap and stay off PostgreSQL
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
import jobly.models  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
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
def seeded(db_session):
    """
    Three companies, five jobs and three users (one admin).

    c1 (1 employee) offers Job1..Job4, c2 (2 employees) offers A-Job,
    c3 (3 employees) offers nothing. u1 has applied to Job1.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        })

    job_ids = {}
    for title, salary, equity, handle in [
        ("Job1", 100, "0.1", "c1"),
        ("Job2", 200, "0.2", "c1"),
        ("Job3", 300, "0", "c1"),
        ("Job4", None, None, "c1"),
        ("A-Job", 150, "0.5", "c2"),
    ]:
        job = job_crud.create(db_session, {
            "title": title,
            "salary": salary,
            "equity": equity,
            "companyHandle": handle,
        })
        job_ids[title] = job["id"]

    for username, is_admin in [("u1", False), ("u2", False), ("admin", True)]:
        user_crud.register(db_session, {
            "username": username,
            "password": f"password-{username}",
            "firstName": f"F{username}",
            "lastName": f"L{username}",
            "email": f"{username}@email.com",
            "isAdmin": is_admin,
        })

    user_crud.apply_to_job(db_session, "u1", job_ids["Job1"])

    return {"job_ids": job_ids}


@pytest.fixture
def u1_headers():
    token = create_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u2_headers():
    token = create_token({"username": "u2", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_token({"username": "admin", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
