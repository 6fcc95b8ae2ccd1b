"""Round router - API endpoints for rounds, handicap and statistics."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.config import settings
from app.database import get_database
from app.exceptions import InvalidInput, InvalidTee
from app.models.goal import Goal
from app.models.round import HandicapSummary, Round, RoundCreate, RoundStats, RoundUpdate
from app.routers.auth import get_current_user_id
from app.services.goal_service import GoalService
from app.services.round_service import RoundService


router = APIRouter(prefix="/rounds", tags=["rounds"])


class RoundResponse(Round):
    """Round plus any goals the change completed."""

    newly_achieved_goals: list[Goal] = []


def _error_status(error: ValueError) -> int:
    if isinstance(error, (InvalidTee, InvalidInput)):
        return status.HTTP_400_BAD_REQUEST
    if str(error) == "Round not found":
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


@router.post("", response_model=RoundResponse, status_code=status.HTTP_201_CREATED)
async def create_round(
    round_create: RoundCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Record a round.

    - Requires authentication
    - Computes the handicap differential from the tee's rating and slope
    - Returns 400 for an unknown course or tee
    - Re-evaluates goals and lists the ones this round completed
    """
    try:
        created = await RoundService(db).create_round(user_id=user_id, round_create=round_create)
    except ValueError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))

    evaluation = await GoalService(db).evaluate_goals(user_id)
    return RoundResponse(**created.model_dump(), newly_achieved_goals=evaluation.newly_achieved)


@router.get("", response_model=list[Round])
async def list_rounds(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """List the authenticated user's rounds, most recent first."""
    return await RoundService(db).list_rounds(user_id)


@router.get("/handicap", response_model=HandicapSummary)
async def get_handicap(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Current handicap index.

    - ``established`` is false until three rounds have been recorded
    """
    return await RoundService(db).get_handicap(user_id)


@router.get("/stats", response_model=RoundStats)
async def get_stats(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Best score and recent averages."""
    return await RoundService(db).get_stats(user_id, recent=settings.stats_recent_rounds)


@router.get("/{round_id}", response_model=Round)
async def get_round(
    round_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get a single round."""
    try:
        return await RoundService(db).get_round(user_id=user_id, round_id=round_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{round_id}", response_model=RoundResponse)
async def update_round(
    round_id: str,
    round_update: RoundUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Edit a round.

    - Recomputes the differential when score, course or tee change
    - Re-evaluates goals
    """
    try:
        updated = await RoundService(db).update_round(
            user_id=user_id,
            round_id=round_id,
            round_update=round_update,
        )
    except ValueError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))

    evaluation = await GoalService(db).evaluate_goals(user_id)
    return RoundResponse(**updated.model_dump(), newly_achieved_goals=evaluation.newly_achieved)


@router.delete("/{round_id}")
async def delete_round(
    round_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a round.

    - Goal values are refreshed; achieved goals stay achieved
    """
    try:
        result = await RoundService(db).delete_round(user_id=user_id, round_id=round_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    await GoalService(db).evaluate_goals(user_id)
    return result
