"""Read-side adapter exposing the finance store to the insights engine"""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from revelation_gateway.domain.exceptions import DataFetchError
from revelation_gateway.domain.models import Emotion, Goal, Transaction
from revelation_gateway.infrastructure.database.models import EmotionRecord, GoalRecord, TransactionRecord
from revelation_gateway.infrastructure.database.repositories import (
    EmotionRepository,
    GoalRepository,
    TransactionRepository,
)
from revelation_gateway.infrastructure.observability.metrics import data_fetch_failures_counter


def to_transaction(record: TransactionRecord) -> Transaction:
    return Transaction(
        id=str(record.id),
        user_id=record.user_id,
        date=record.date,
        amount=float(record.amount),
        category=record.category,
        description=record.description,
    )


def to_goal(record: GoalRecord) -> Goal:
    return Goal(
        id=str(record.id),
        user_id=record.user_id,
        title=record.title,
        target_amount=float(record.target_amount),
        current_amount=float(record.current_amount or 0),
        deadline=record.deadline,
        status=record.status,
    )


def to_emotion(record: EmotionRecord) -> Emotion:
    return Emotion(
        id=str(record.id),
        user_id=record.user_id,
        date=record.date,
        mood=record.mood,
        note=record.note,
    )


class SqlFinanceStore:
    """
    Data store backed by a SQLAlchemy session.

    Any database failure surfaces as DataFetchError.
    """

    def __init__(self, db: Session):
        self.transactions = TransactionRepository(db)
        self.goals = GoalRepository(db)
        self.emotions = EmotionRepository(db)

    async def list_transactions(
        self, user_id: str, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> List[Transaction]:
        try:
            return [to_transaction(r) for r in self.transactions.list(user_id, date_from, date_to)]
        except SQLAlchemyError as e:
            data_fetch_failures_counter.inc()
            raise DataFetchError(f"Failed to load transactions: {e}") from e

    async def list_active_goals(self, user_id: str) -> List[Goal]:
        try:
            return [to_goal(r) for r in self.goals.list(user_id, status="active")]
        except SQLAlchemyError as e:
            data_fetch_failures_counter.inc()
            raise DataFetchError(f"Failed to load goals: {e}") from e

    async def list_emotions(
        self, user_id: str, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> List[Emotion]:
        try:
            return [to_emotion(r) for r in self.emotions.list(user_id, date_from, date_to)]
        except SQLAlchemyError as e:
            data_fetch_failures_counter.inc()
            raise DataFetchError(f"Failed to load emotions: {e}") from e
