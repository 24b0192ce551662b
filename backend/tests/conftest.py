"""Shared fixtures: a fresh in-memory SQLite database per test and a FastAPI client bound to it."""

import os

# Keep the module-level app engine off the on-disk development database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mall_manager import models  # noqa: F401  (registers tables on Base.metadata)
from mall_manager.database import Base, create_db_engine, get_db
from mall_manager.main import app
from mall_manager.services import mall_service


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """Test client with get_db overridden; lifespan is not run so no file database is created."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mall(db):
    return mall_service.create_mall(db, "Pacific Centre", "Vancouver")
