"""/v1/transactions - list, record and delete transactions"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from revelation_gateway.api.dependencies import get_current_user_id, get_response_cache
from revelation_gateway.api.v1.schemas import TransactionCreate, TransactionSchema
from revelation_gateway.domain.exceptions import InvalidTransactionDataError, RecordNotFoundError
from revelation_gateway.infrastructure.cache import ResponseCache
from revelation_gateway.infrastructure.database.models import TransactionRecord
from revelation_gateway.infrastructure.database.repositories import TransactionRepository
from revelation_gateway.infrastructure.database.session import get_db

router = APIRouter()


def to_schema(record: TransactionRecord) -> TransactionSchema:
    return TransactionSchema(
        id=str(record.id),
        date=record.date,
        amount=float(record.amount),
        category=record.category,
        description=record.description,
        source=record.source,
    )


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    category: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Transactions for the caller, newest first"""
    records = TransactionRepository(db).list(user_id, date_from, date_to, category)
    return [to_schema(r) for r in records]


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
def create_transaction(
    body: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        record = TransactionRepository(db).create(
            user_id=user_id,
            txn_date=body.date,
            amount=body.amount,
            category=body.category,
            description=body.description,
            source=body.source,
            kind=body.type,
        )
    except InvalidTransactionDataError as e:
        db.rollback()
        logging.warning(f"Rejected transaction: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return to_schema(record)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        TransactionRepository(db).delete(transaction_id, user_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return Response(status_code=204)
