"""Pytest fixtures: the inventory app backed by an in-memory SQLite database"""
import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the module-level engine off Postgres during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from inventory_service.main import app
from inventory_service.infrastructure.db import get_db
from inventory_service.domain.models import Base, StockRecord


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
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
def stock_of(session_factory):
    """Fresh read of one row, bypassing any session cache"""
    def read(store_id, sku):
        with session_factory() as session:
            row = session.query(StockRecord).filter_by(store_id=store_id, sku=sku).first()
            return None if row is None else (row.available, row.reserved)
    return read
