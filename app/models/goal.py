"""Goal model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class GoalCategory(str, Enum):
    """Which statistic a goal tracks."""

    HANDICAP = "handicap"
    SCORING = "scoring"
    FAIRWAYS = "fairways"
    GREENS = "greens"
    PUTTS = "putts"
    CUSTOM = "custom"


class GoalBase(BaseModel):
    """Base goal fields."""

    name: str = Field(min_length=1)
    category: GoalCategory
    target_value: float
    target_date: Optional[date] = None
    description: Optional[str] = None


class GoalCreate(GoalBase):
    """Goal creation model."""

    current_value: Optional[float] = None


class GoalUpdate(BaseModel):
    """Goal update model - all fields optional."""

    name: Optional[str] = None
    category: Optional[GoalCategory] = None
    target_value: Optional[float] = None
    target_date: Optional[date] = None
    current_value: Optional[float] = None
    description: Optional[str] = None


class GoalAchievementUpdate(BaseModel):
    """Manual mark/unmark of a goal."""

    achieved: bool
    completed_at: Optional[datetime] = None


class Goal(GoalBase):
    """Full goal model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    current_value: Optional[float] = None
    achieved: bool = False
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class GoalStats(BaseModel):
    """Statistic computed for a goal from round history."""

    current_value: Optional[float] = None
    achieved: bool = False


class GoalEvaluation(BaseModel):
    """Result of evaluating goals against round history."""

    updated_goals: list[Goal] = Field(default_factory=list)
    newly_achieved: list[Goal] = Field(default_factory=list)
