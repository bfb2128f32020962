"""
Rating schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import Field

from smartmess.models import Rating
from smartmess.models.enums import MealType
from smartmess.schemas.common import BaseSchema

__all__ = [
    "RatingSubmit",
    "RatingUpdate",
    "RatingOut",
    "MyRatingOut",
    "MealRatingOut",
    "MealRatingsOut",
    "RatingDetailOut",
    "MealRatingStats",
]


class RatingSubmit(BaseSchema):
    menu_id: str = Field(..., min_length=1)
    meal_type: MealType
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=500)


class RatingUpdate(BaseSchema):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=500)


class RatingOut(BaseSchema):
    id: str
    student_id: str
    menu_id: str
    meal_type: MealType
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class MyRatingOut(RatingOut):
    """A student's own rating with the rated meal for context."""

    menu_date: date
    menu_items: List[str]

    @classmethod
    def from_rating(cls, rating: Rating) -> "MyRatingOut":
        base = RatingOut.model_validate(rating).model_dump()
        return cls(
            **base,
            menu_date=rating.menu.menu_date,
            menu_items=rating.menu.items_for(rating.meal_type),
        )


class MealRatingOut(RatingOut):
    student_name: str

    @classmethod
    def from_rating(cls, rating: Rating) -> "MealRatingOut":
        base = RatingOut.model_validate(rating).model_dump()
        return cls(**base, student_name=rating.student.name)


class MealRatingsOut(BaseSchema):
    ratings: List[MealRatingOut]
    average: float
    count: int


class RatingDetailOut(RatingOut):
    """Rating joined with the student's identity and the menu's date."""

    student_name: str
    student_email: str
    roll_number: str
    menu_date: date
    day_of_week: str

    @classmethod
    def from_rating(cls, rating: Rating) -> "RatingDetailOut":
        base = RatingOut.model_validate(rating).model_dump()
        return cls(
            **base,
            student_name=rating.student.name,
            student_email=rating.student.email,
            roll_number=rating.student.roll_number,
            menu_date=rating.menu.menu_date,
            day_of_week=rating.menu.day_of_week,
        )


class MealRatingStats(BaseSchema):
    """Average, count and per-value distribution for one meal type."""

    meal_type: MealType
    average: float
    count: int
    distribution: Dict[str, int]
