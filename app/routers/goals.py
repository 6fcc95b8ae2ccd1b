"""Goal router - API endpoints for performance goals."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.database import get_database
from app.models.goal import Goal, GoalAchievementUpdate, GoalCreate, GoalEvaluation, GoalUpdate
from app.routers.auth import get_current_user_id
from app.services.goal_service import GoalService


router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a new goal.

    - Requires authentication
    - Current value is computed from existing rounds
    - A goal already met by past rounds is created achieved
    """
    service = GoalService(db)
    return await service.create_goal(user_id=user_id, goal_create=goal)


@router.get("", response_model=list[Goal])
async def list_goals(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """List the authenticated user's goals, newest first."""
    service = GoalService(db)
    return await service.list_goals(user_id)


@router.post("/evaluate", response_model=GoalEvaluation)
async def evaluate_goals(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Re-evaluate goals against round history.

    - ``newly_achieved`` lists goals completed by this call only
    """
    service = GoalService(db)
    return await service.evaluate_goals(user_id)


@router.get("/{goal_id}", response_model=Goal)
async def get_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Get a single goal.

    - Returns 404 if goal not found
    """
    service = GoalService(db)
    try:
        return await service.get_goal(user_id=user_id, goal_id=goal_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_update: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update a goal.

    - Custom goals track progress through ``current_value`` here
    - Returns 404 if goal not found
    """
    service = GoalService(db)
    try:
        return await service.update_goal(
            user_id=user_id,
            goal_id=goal_id,
            goal_update=goal_update,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{goal_id}/achievement", response_model=Goal)
async def set_goal_achievement(
    goal_id: str,
    achievement: GoalAchievementUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Mark or unmark a goal as achieved.

    - Unmarking clears ``completed_at``
    - Returns 404 if goal not found
    """
    service = GoalService(db)
    try:
        return await service.set_achievement(
            user_id=user_id,
            goal_id=goal_id,
            achieved=achievement.achieved,
            completed_at=achievement.completed_at,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a goal.

    - Returns 404 if goal not found
    """
    service = GoalService(db)
    try:
        return await service.delete_goal(user_id=user_id, goal_id=goal_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
