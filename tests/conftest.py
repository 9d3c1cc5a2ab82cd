from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from order_core.api.deps import get_lock_service
from order_core.data.database import Base, get_db
import order_core.data.models  # noqa: F401
from order_core.domain.errors import ConcurrencyConflictError
from order_core.main import create_app


class InMemoryLockService:
    """Process-local stand-in for the redis order lock."""

    def __init__(self):
        self.held = set()
        self.acquired = []

    @contextmanager
    def hold(self, order_id):
        if order_id in self.held:
            raise ConcurrencyConflictError(f"Order {order_id} is being modified by another operation")
        self.held.add(order_id)
        self.acquired.append(order_id)
        try:
            yield
        finally:
            self.held.discard(order_id)


@pytest.fixture()
def engine(tmp_path):
    # file based so that separate sessions get separate connections
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def lock_stub():
    return InMemoryLockService()


@pytest.fixture()
def client(session_factory, lock_stub):
    app = create_app(create_tables=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_stub
    return TestClient(app)
