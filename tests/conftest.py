"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import random
from datetime import date, timedelta
from typing import Callable, Generator, List, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from revelation_gateway.api.dependencies import get_enricher, get_notification_client
from revelation_gateway.api.main import create_app
from revelation_gateway.domain.exceptions import DataFetchError
from revelation_gateway.domain.models import Emotion, Goal, Transaction
from revelation_gateway.infrastructure.cache import response_cache
from revelation_gateway.infrastructure.database.models import Base
from revelation_gateway.infrastructure.database.session import get_db
from revelation_gateway.services.enrichment import QuoteEnricher

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    """Fixed clock for deterministic window arithmetic"""
    return TODAY


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    counter = iter(range(1, 100_000))

    def _make(amount: float, category: str, on: date, description: Optional[str] = None) -> Transaction:
        return Transaction(
            id=f"tx_{next(counter)}",
            user_id="user_1",
            date=on,
            amount=amount,
            category=category,
            description=description,
        )

    return _make


@pytest.fixture
def make_goal() -> Callable[..., Goal]:
    counter = iter(range(1, 100_000))

    def _make(
        current: float,
        target: float,
        deadline: Optional[date] = None,
        title: str = "Goal",
        status: str = "active",
    ) -> Goal:
        return Goal(
            id=f"goal_{next(counter)}",
            user_id="user_1",
            title=title,
            target_amount=target,
            current_amount=current,
            deadline=deadline,
            status=status,
        )

    return _make


@pytest.fixture
def make_emotion() -> Callable[..., Emotion]:
    counter = iter(range(1, 100_000))

    def _make(mood: str, on: date) -> Emotion:
        return Emotion(id=f"emo_{next(counter)}", user_id="user_1", date=on, mood=mood)

    return _make


class FakeStore:
    """In-memory data store honoring the same window filters as the SQL store"""

    def __init__(
        self,
        transactions: Optional[List[Transaction]] = None,
        goals: Optional[List[Goal]] = None,
        emotions: Optional[List[Emotion]] = None,
        fail: bool = False,
    ):
        self.transactions = transactions or []
        self.goals = goals or []
        self.emotions = emotions or []
        self.fail = fail
        self.calls: List[str] = []

    async def list_transactions(self, user_id, date_from=None, date_to=None):
        self.calls.append("transactions")
        if self.fail:
            raise DataFetchError("store down")
        return [
            t
            for t in self.transactions
            if (date_from is None or t.date >= date_from) and (date_to is None or t.date <= date_to)
        ]

    async def list_active_goals(self, user_id):
        self.calls.append("goals")
        if self.fail:
            raise DataFetchError("store down")
        return [g for g in self.goals if g.status == "active"]

    async def list_emotions(self, user_id, date_from=None, date_to=None):
        self.calls.append("emotions")
        if self.fail:
            raise DataFetchError("store down")
        return [
            e
            for e in self.emotions
            if (date_from is None or e.date >= date_from) and (date_to is None or e.date <= date_to)
        ]


@pytest.fixture
def fake_store_factory() -> Callable[..., FakeStore]:
    return FakeStore


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier() -> AsyncMock:
    client = AsyncMock()
    client.push.return_value = None
    return client


@pytest.fixture
def client(db: Session, notifier: AsyncMock) -> Generator[TestClient, None, None]:
    """Create FastAPI test client with test database and offline collaborators"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_enricher] = lambda: QuoteEnricher(provider=None, rng=random.Random(7))
    app.dependency_overrides[get_notification_client] = lambda: notifier

    response_cache.clear()
    yield TestClient(app)
    response_cache.clear()


@pytest.fixture
def sample_transactions(make_txn, today) -> List[Transaction]:
    """Three months of salary, rent and weekly groceries"""
    transactions = []
    for month in range(3):
        transactions.append(make_txn(3000, "salary", today - timedelta(days=5 + month * 30), "Salary deposit"))
        transactions.append(make_txn(-1000, "rent", today - timedelta(days=3 + month * 30), "Rent"))

    for day in range(0, 84, 7):
        transactions.append(make_txn(-100, "groceries", today - timedelta(days=day + 1), "Supermarket"))

    return transactions
