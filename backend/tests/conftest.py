import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from autoapply.database import Base, build_engine, get_db
from autoapply.main import app
from autoapply.models import Company, Job


@pytest.fixture()
def engine(tmp_path):
    test_engine = build_engine(f"sqlite:///{tmp_path / 'autoapply-test.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def override_get_db(session_factory):
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def make_client(override_get_db):
    """Each client keeps its own cookie jar, so each one is a separate browser."""
    return lambda: TestClient(app)


@pytest.fixture()
def client(make_client):
    return make_client()


def register(client, username="alice", password="secret-pass-1", email=None, full_name="Alice Example"):
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "password": password,
            "email": email or f"{username}@example.com",
            "fullName": full_name,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def auth_client(client):
    register(client)
    return client


@pytest.fixture()
def make_company(db_session):
    def _make_company(name="Example Corp", **kwargs):
        company = Company(name=name, **kwargs)
        db_session.add(company)
        db_session.commit()
        db_session.refresh(company)
        return company

    return _make_company


@pytest.fixture()
def make_job(db_session):
    counter = {"value": 0}

    def _make_job(title="Backend Engineer", posted_days_ago=1, now=None, **kwargs):
        counter["value"] += 1
        values = {
            "location": "Remote",
            "job_type": "full_time",
            "experience_level": "mid",
            "skills": [],
            "is_easy_apply": True,
            "url": f"https://jobs.example.com/{counter['value']}",
        }
        values.update(kwargs)
        if "posted_date" not in values:
            values["posted_date"] = (now or datetime.utcnow()) - timedelta(days=posted_days_ago)
        job = Job(title=title, **values)
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make_job
