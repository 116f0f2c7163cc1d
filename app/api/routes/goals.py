from typing import List

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_goal_service, get_user_id
from app.models.goal import Goal, GoalIn, GoalProgress, GoalUpdate
from app.services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("/", status_code=201, response_model=Goal, response_model_exclude_none=True)
def create_goal(
    payload: GoalIn = Body(...),
    uid: str = Depends(get_user_id),
    service: GoalService = Depends(get_goal_service),
):
    return service.create_goal(uid, payload)


@router.get("/", response_model=List[GoalProgress], response_model_exclude_none=True)
def list_goals(
    uid: str = Depends(get_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Goals with progress computed against the latest metric."""
    return service.list_progress(uid)


@router.patch("/{goal_id}")
def update_goal(
    goal_id: str,
    payload: GoalUpdate = Body(...),
    uid: str = Depends(get_user_id),
    service: GoalService = Depends(get_goal_service),
):
    service.update_goal(uid, goal_id, payload)
    return {"id": goal_id, "status": "updated"}


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    uid: str = Depends(get_user_id),
    service: GoalService = Depends(get_goal_service),
):
    service.delete_goal(uid, goal_id)
