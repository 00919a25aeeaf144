"""Shared test fixtures."""

import os

# Keep the app off the real database and the background timer
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ROLLOVER_ENABLED"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, timedelta
from decimal import Decimal
import uuid

from app.database import Base
from app.dependencies import get_db
from app.main import app
from app.models.subscription import Subscription, Frequency, Currency, SubscriptionStatus
from app.services.subscription_store import SqlSubscriptionStore


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
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
def store(db_session):
    """Subscription store bound to the test session."""
    return SqlSubscriptionStore(db_session)


def make_subscription(db_session, **overrides):
    """Persist a subscription with sensible defaults."""
    values = dict(
        id=str(uuid.uuid4()),
        name="Netflix",
        cost=Decimal("15.99"),
        currency=Currency.USD,
        renewal_date=date.today() + timedelta(days=10),
        frequency=Frequency.monthly,
        status=SubscriptionStatus.active,
        tags="#streaming",
    )
    values.update(overrides)
    subscription = Subscription(**values)
    db_session.add(subscription)
    db_session.commit()
    db_session.refresh(subscription)
    return subscription


@pytest.fixture
def subscription_factory(db_session):
    """Build and persist subscriptions: ``subscription_factory(name="Hulu", ...)``."""
    return lambda **overrides: make_subscription(db_session, **overrides)


@pytest.fixture
def sample_subscription(db_session):
    """An active monthly subscription renewing in 10 days."""
    return make_subscription(db_session)


@pytest.fixture
def past_due_subscription(db_session):
    """An active monthly subscription whose renewal date is 40 days ago."""
    return make_subscription(
        db_session,
        name="Spotify",
        cost=Decimal("10.99"),
        renewal_date=date.today() - timedelta(days=40),
        tags="#music",
    )


@pytest.fixture
def inactive_subscription(db_session):
    """An inactive annual subscription whose renewal date has passed."""
    return make_subscription(
        db_session,
        name="Adobe",
        cost=Decimal("239.88"),
        currency=Currency.EUR,
        frequency=Frequency.annual,
        status=SubscriptionStatus.inactive,
        renewal_date=date.today() - timedelta(days=5),
        tags="#work",
    )


class FakeAIClient:
    """Stands in for the AI client; returns a canned result or raises."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def complete_json(self, **kwargs):
        self.calls.append(("text", kwargs))
        if self.error:
            raise self.error
        return self.result

    async def complete_vision_json(self, **kwargs):
        self.calls.append(("image", kwargs))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def fake_ai(monkeypatch):
    """Install a FakeAIClient for the parsing service and return it."""
    fake = FakeAIClient()
    monkeypatch.setattr("app.services.parsing_service.get_ai_client", lambda: fake)
    return fake
