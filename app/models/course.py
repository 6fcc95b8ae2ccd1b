"""Course and tee model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Tee(BaseModel):
    """A set of tee markers with its own rating and slope."""

    name: str
    rating: float = Field(gt=0)
    slope: float = Field(ge=55, le=155)
    number_of_fairways: int = Field(ge=0, le=18)


class Location(BaseModel):
    """Where a course is."""

    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class CourseBase(BaseModel):
    """Base course fields."""

    name: str = Field(min_length=1)
    location: Location = Field(default_factory=Location)
    tees: list[Tee] = Field(min_length=1)


class CourseCreate(CourseBase):
    """Course creation model."""

    pass


class Course(CourseBase):
    """Full course model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
