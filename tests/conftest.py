# tests/conftest.py
import os

os.environ.setdefault("JWT_SECRET", "test-secret-change-me-123")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "demo")
os.environ["ADMIN_EMAIL"] = "comite@traine-savates.ch"
os.environ["ADMIN_PASSWORD"] = "mot-de-passe-test"
os.environ["FRONTEND_URL"] = ""
os.environ["NOTIFICATION_EMAILS"] = ""
os.environ.pop("RESEND_API_KEY", None)

from datetime import date

import cloudinary.uploader
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from course_api.database import Base, get_db
from course_api.main import app
from course_api.models import Edition, RaceCategory, Sponsor
from course_api.services.security import sign_session

ADMIN_EMAIL = "comite@traine-savates.ch"
ADMIN_PASSWORD = "mot-de-passe-test"


@pytest.fixture(scope="function")
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin_client(client):
    client.headers.update({"Authorization": f"Bearer {sign_session(ADMIN_EMAIL)}"})
    return client


@pytest.fixture(scope="function")
def uploads(monkeypatch):
    """Remplace l'envoi Cloudinary ; chaque appel est enregistré."""
    calls = []

    def fake_upload(file, **options):
        calls.append({"file": file, **options})
        return {"public_id": options.get("public_id"), "format": options.get("format")}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


@pytest.fixture(scope="function")
def deletions(monkeypatch):
    """Remplace la suppression Cloudinary ; les public_id supprimés sont enregistrés."""
    public_ids = []

    def fake_destroy(public_id, **options):
        public_ids.append(public_id)
        return {"result": "ok"}

    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)
    return public_ids


@pytest.fixture(scope="function")
def make_edition(db_session):
    def _make(**overrides):
        year = overrides.pop("year", 2025)
        values = {
            "slug": str(year),
            "year": year,
            "edition_number": year - 1980,
            "date": date(year, 4, 18),
            "title": f"Course des Traîne-Savates {year}",
            "status": "draft",
        }
        values.update(overrides)
        edition = Edition(**values)
        db_session.add(edition)
        db_session.commit()
        db_session.refresh(edition)
        return edition

    return _make


@pytest.fixture(scope="function")
def make_race(db_session):
    def _make(edition, **overrides):
        values = {
            "edition_id": edition.id,
            "name": "Course des As",
            "slug": "course-des-as",
            "distance_km": 10.5,
            "type": "adult",
            "start_time": "10:00",
            "order_index": 0,
        }
        values.update(overrides)
        race = RaceCategory(**values)
        db_session.add(race)
        db_session.commit()
        db_session.refresh(race)
        return race

    return _make


@pytest.fixture(scope="function")
def make_sponsor(db_session):
    def _make(**overrides):
        values = {"name": "Boulangerie du Village", "category": "secondary", "order_index": 0}
        values.update(overrides)
        sponsor = Sponsor(**values)
        db_session.add(sponsor)
        db_session.commit()
        db_session.refresh(sponsor)
        return sponsor

    return _make
