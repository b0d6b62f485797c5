"""
tests/conftest.py – shared fixtures for the test suite.

No test talks to a real network, bucket or database server: remote fetches go
through ``FakeFetcher``, the object store wraps a ``MagicMock`` boto3 client,
and upload records live in an in-memory SQLite database.
"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from image_report.database import Base
from image_report.services.storage_service import ObjectStore

from fixtures import BUCKET, PUBLIC_BASE_URL, FakeFetcher, make_image_bytes


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def png_bytes():
    return make_image_bytes("PNG")


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def object_store(s3_client):
    return ObjectStore(s3_client, BUCKET, PUBLIC_BASE_URL)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


# ---------------------------------------------------------------------------
# HTTP client with every collaborator overridden
# ---------------------------------------------------------------------------

@pytest.fixture
def client(db_session, fake_fetcher, object_store):
    from fastapi.testclient import TestClient
    from image_report.main import app
    from image_report.database import get_db
    from image_report.services.fetch_service import get_fetcher
    from image_report.services.report_service import ReportGenerator, get_report_generator
    from image_report.services.storage_service import get_object_store

    def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_fetcher] = lambda: fake_fetcher
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_report_generator] = lambda: ReportGenerator(fake_fetcher)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
