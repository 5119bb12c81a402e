"""Data access layer for finance entities"""

import math
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from revelation_gateway.domain.exceptions import InvalidTransactionDataError, RecordNotFoundError
from revelation_gateway.infrastructure.database.models import (
    EmotionRecord,
    GoalRecord,
    NotificationRecord,
    TransactionRecord,
)


def parse_record_id(record_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        raise RecordNotFoundError(f"Invalid record id: {record_id}") from None


def normalize_amount(amount: float, kind: Optional[str] = None) -> float:
    """
    Enforce the signed-amount convention at the store edge.

    Income is positive and expenses are negative. When the caller states
    the kind explicitly, the sign follows the kind rather than the input.
    """
    if not math.isfinite(amount):
        raise InvalidTransactionDataError("Transaction amount must be a finite number")
    if amount == 0:
        raise InvalidTransactionDataError("Transaction amount cannot be zero")
    if kind is None:
        return amount
    if kind == "income":
        return abs(amount)
    if kind == "expense":
        return -abs(amount)
    raise InvalidTransactionDataError(f"Unknown transaction type: {kind}")


class TransactionRepository:
    """Repository for transactions"""

    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        user_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        category: Optional[str] = None,
    ) -> List[TransactionRecord]:
        """Fetch a user's transactions, newest first"""
        query = self.db.query(TransactionRecord).filter(TransactionRecord.user_id == user_id)
        if date_from is not None:
            query = query.filter(TransactionRecord.date >= date_from)
        if date_to is not None:
            query = query.filter(TransactionRecord.date <= date_to)
        if category:
            query = query.filter(TransactionRecord.category == category)
        return query.order_by(TransactionRecord.date.desc()).all()

    def create(
        self,
        user_id: str,
        txn_date: date,
        amount: float,
        category: str,
        description: Optional[str] = None,
        source: str = "manual",
        kind: Optional[str] = None,
    ) -> TransactionRecord:
        record = TransactionRecord(
            user_id=user_id,
            date=txn_date,
            amount=normalize_amount(amount, kind),
            category=category,
            description=description,
            source=source,
        )
        self.db.add(record)
        self.db.flush()
        return record

    def delete(self, record_id: str, user_id: str) -> None:
        record = (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.id == parse_record_id(record_id), TransactionRecord.user_id == user_id)
            .first()
        )
        if not record:
            raise RecordNotFoundError("Transaction not found")
        self.db.delete(record)
        self.db.flush()


class GoalRepository:
    """Repository for savings goals"""

    def __init__(self, db: Session):
        self.db = db

    def list(self, user_id: str, status: Optional[str] = None) -> List[GoalRecord]:
        query = self.db.query(GoalRecord).filter(GoalRecord.user_id == user_id)
        if status:
            query = query.filter(GoalRecord.status == status)
        return query.order_by(GoalRecord.updated_at.desc()).all()

    def get(self, record_id: str, user_id: str) -> GoalRecord:
        """Fetch one goal owned by the user"""
        record = self.db.query(GoalRecord).filter(GoalRecord.id == parse_record_id(record_id)).first()
        if not record or record.user_id != user_id:
            raise RecordNotFoundError("Goal not found")
        return record

    def create(self, user_id: str, title: str, target_amount: float, deadline: Optional[date] = None) -> GoalRecord:
        record = GoalRecord(
            user_id=user_id,
            title=title,
            target_amount=target_amount,
            current_amount=0,
            deadline=deadline,
            status="active",
        )
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record_id: str, user_id: str, changes: Dict[str, Any]) -> GoalRecord:
        record = self.get(record_id, user_id)
        for key, value in changes.items():
            setattr(record, key, value)
        self.db.flush()
        return record

    def delete(self, record_id: str, user_id: str) -> None:
        self.db.delete(self.get(record_id, user_id))
        self.db.flush()


class EmotionRepository:
    """Repository for mood entries"""

    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        user_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[EmotionRecord]:
        query = self.db.query(EmotionRecord).filter(EmotionRecord.user_id == user_id)
        if date_from is not None:
            query = query.filter(EmotionRecord.date >= date_from)
        if date_to is not None:
            query = query.filter(EmotionRecord.date <= date_to)
        return query.order_by(EmotionRecord.date.desc()).all()

    def get(self, record_id: str, user_id: str) -> EmotionRecord:
        record = self.db.query(EmotionRecord).filter(EmotionRecord.id == parse_record_id(record_id)).first()
        if not record or record.user_id != user_id:
            raise RecordNotFoundError("Emotion entry not found")
        return record

    def create(
        self,
        user_id: str,
        mood: str,
        note: Optional[str] = None,
        entry_date: Optional[date] = None,
    ) -> EmotionRecord:
        record = EmotionRecord(
            user_id=user_id,
            mood=mood,
            note=note,
            date=entry_date or date.today(),
        )
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record_id: str, user_id: str, changes: Dict[str, Any]) -> EmotionRecord:
        record = self.get(record_id, user_id)
        for key, value in changes.items():
            setattr(record, key, value)
        self.db.flush()
        return record

    def delete(self, record_id: str, user_id: str) -> None:
        self.db.delete(self.get(record_id, user_id))
        self.db.flush()


class NotificationRepository:
    """Repository for in-app notifications"""

    def __init__(self, db: Session):
        self.db = db

    def list(self, user_id: str, unread_only: bool = False) -> List[NotificationRecord]:
        query = self.db.query(NotificationRecord).filter(NotificationRecord.user_id == user_id)
        if unread_only:
            query = query.filter(NotificationRecord.read.is_(False))
        return query.order_by(NotificationRecord.created_at.desc()).all()

    def create(self, user_id: str, type: str, message: str) -> NotificationRecord:
        record = NotificationRecord(user_id=user_id, type=type, message=message, read=False)
        self.db.add(record)
        self.db.flush()
        return record

    def _get(self, record_id: str, user_id: str) -> NotificationRecord:
        record = (
            self.db.query(NotificationRecord)
            .filter(NotificationRecord.id == parse_record_id(record_id), NotificationRecord.user_id == user_id)
            .first()
        )
        if not record:
            raise RecordNotFoundError("Notification not found")
        return record

    def mark_read(self, record_id: str, user_id: str) -> NotificationRecord:
        record = self._get(record_id, user_id)
        record.read = True
        record.read_at = datetime.now(timezone.utc)
        self.db.flush()
        return record

    def delete(self, record_id: str, user_id: str) -> None:
        self.db.delete(self._get(record_id, user_id))
        self.db.flush()
