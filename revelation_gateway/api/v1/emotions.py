"""/v1/emotions - mood journal CRUD"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from revelation_gateway.api.dependencies import get_current_user_id, get_response_cache
from revelation_gateway.api.v1.schemas import EmotionCreate, EmotionSchema, EmotionUpdate
from revelation_gateway.domain.exceptions import RecordNotFoundError
from revelation_gateway.infrastructure.cache import ResponseCache
from revelation_gateway.infrastructure.database.models import EmotionRecord
from revelation_gateway.infrastructure.database.repositories import EmotionRepository
from revelation_gateway.infrastructure.database.session import get_db

router = APIRouter()


def to_schema(record: EmotionRecord) -> EmotionSchema:
    return EmotionSchema(id=str(record.id), date=record.date, mood=record.mood, note=record.note)


@router.get("/emotions", response_model=List[EmotionSchema])
def list_emotions(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return [to_schema(r) for r in EmotionRepository(db).list(user_id, date_from, date_to)]


@router.post("/emotions", response_model=EmotionSchema, status_code=201)
def create_emotion(
    body: EmotionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Entries without a date are recorded for today"""
    record = EmotionRepository(db).create(user_id, body.mood, body.note, body.date)
    db.commit()
    cache.invalidate_user(user_id)
    return to_schema(record)


@router.get("/emotions/{emotion_id}", response_model=EmotionSchema)
def get_emotion(emotion_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    try:
        return to_schema(EmotionRepository(db).get(emotion_id, user_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/emotions/{emotion_id}", response_model=EmotionSchema)
def update_emotion(
    emotion_id: str,
    body: EmotionUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        record = EmotionRepository(db).update(emotion_id, user_id, body.model_dump(exclude_unset=True))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return to_schema(record)


@router.delete("/emotions/{emotion_id}", status_code=204)
def delete_emotion(
    emotion_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        EmotionRepository(db).delete(emotion_id, user_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return Response(status_code=204)
