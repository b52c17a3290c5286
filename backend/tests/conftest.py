import os

# Point the module-level engine at an in-memory database before the app is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without running a real server.
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timetable.api.deps import get_db
from timetable.db.base import Base
from timetable.main import app


@pytest.fixture()
def client():
    engine = create_engine( #isolated DB per test
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def api_client(client):
    """Same app, but with the API prefix folded into the base URL the way the facade expects."""
    client.base_url = "http://testserver/api"
    return client
