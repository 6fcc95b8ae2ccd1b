"""Round model definitions."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class RoundBase(BaseModel):
    """Base round fields as entered by the player."""

    course_id: str
    tee_name: str
    played_on: date
    score: int = Field(ge=1)
    putts: int = Field(ge=0)
    fairways_hit: int = Field(ge=0)
    greens_hit: int = Field(ge=0, le=18)
    notes: Optional[str] = None


class RoundCreate(RoundBase):
    """Round creation model."""

    pass


class RoundUpdate(BaseModel):
    """Round update model - all fields optional."""

    course_id: Optional[str] = None
    tee_name: Optional[str] = None
    played_on: Optional[date] = None
    score: Optional[int] = Field(default=None, ge=1)
    putts: Optional[int] = Field(default=None, ge=0)
    fairways_hit: Optional[int] = Field(default=None, ge=0)
    greens_hit: Optional[int] = Field(default=None, ge=0, le=18)
    notes: Optional[str] = None


class Round(RoundBase):
    """Full round model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    differential: float
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class HandicapSummary(BaseModel):
    """Handicap index along with how it was derived."""

    handicap_index: float
    established: bool
    rounds_counted: int
    differentials_used: int


class RoundStats(BaseModel):
    """Aggregate statistics over a player's rounds."""

    rounds_played: int
    best_score: Optional[int] = None
    average_score: Optional[float] = None
    average_putts: Optional[float] = None
    average_fairways_hit: Optional[float] = None
    average_greens_hit: Optional[float] = None
