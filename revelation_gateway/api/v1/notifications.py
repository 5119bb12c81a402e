"""/v1/notifications - in-app notifications"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from revelation_gateway.api.dependencies import get_current_user_id
from revelation_gateway.api.v1.schemas import NotificationCreate, NotificationSchema
from revelation_gateway.domain.exceptions import RecordNotFoundError
from revelation_gateway.infrastructure.database.models import NotificationRecord
from revelation_gateway.infrastructure.database.repositories import NotificationRepository
from revelation_gateway.infrastructure.database.session import get_db

router = APIRouter()


def to_schema(record: NotificationRecord) -> NotificationSchema:
    return NotificationSchema(
        id=str(record.id),
        type=record.type,
        message=record.message,
        read=record.read,
        read_at=record.read_at,
        created_at=record.created_at,
    )


@router.get("/notifications", response_model=List[NotificationSchema])
def list_notifications(
    unread_only: bool = False,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return [to_schema(r) for r in NotificationRepository(db).list(user_id, unread_only)]


@router.post("/notifications", response_model=NotificationSchema, status_code=201)
def create_notification(
    body: NotificationCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    record = NotificationRepository(db).create(user_id, body.type, body.message)
    db.commit()
    db.refresh(record)
    return to_schema(record)


@router.post("/notifications/{notification_id}/read", response_model=NotificationSchema)
def mark_notification_read(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        record = NotificationRepository(db).mark_read(notification_id, user_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    db.refresh(record)
    return to_schema(record)


@router.delete("/notifications/{notification_id}", status_code=204)
def delete_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        NotificationRepository(db).delete(notification_id, user_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    return Response(status_code=204)
