"""/v1/goals - savings goal CRUD"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from revelation_gateway.api.dependencies import get_current_user_id, get_response_cache
from revelation_gateway.api.v1.schemas import GoalCreate, GoalSchema, GoalUpdate
from revelation_gateway.domain.exceptions import RecordNotFoundError
from revelation_gateway.infrastructure.cache import ResponseCache
from revelation_gateway.infrastructure.database.models import GoalRecord
from revelation_gateway.infrastructure.database.repositories import GoalRepository
from revelation_gateway.infrastructure.database.session import get_db

router = APIRouter()


def to_schema(record: GoalRecord) -> GoalSchema:
    return GoalSchema(
        id=str(record.id),
        title=record.title,
        target_amount=float(record.target_amount),
        current_amount=float(record.current_amount or 0),
        deadline=record.deadline,
        status=record.status,
    )


@router.get("/goals", response_model=List[GoalSchema])
def list_goals(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return [to_schema(r) for r in GoalRepository(db).list(user_id)]


@router.post("/goals", response_model=GoalSchema, status_code=201)
def create_goal(
    body: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    """New goals start with nothing saved"""
    record = GoalRepository(db).create(user_id, body.title, body.target_amount, body.deadline)
    db.commit()
    cache.invalidate_user(user_id)
    return to_schema(record)


@router.get("/goals/{goal_id}", response_model=GoalSchema)
def get_goal(goal_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    try:
        return to_schema(GoalRepository(db).get(goal_id, user_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/goals/{goal_id}", response_model=GoalSchema)
def update_goal(
    goal_id: str,
    body: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        record = GoalRepository(db).update(goal_id, user_id, body.model_dump(exclude_unset=True))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return to_schema(record)


@router.delete("/goals/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        GoalRepository(db).delete(goal_id, user_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    cache.invalidate_user(user_id)
    return Response(status_code=204)
